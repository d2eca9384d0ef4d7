"""
Calendar Extractor
==================
Parques Reunidos park websites publish their opening calendar as two hidden
inputs on the "opening hours" page:

  <input id="data-hour-2025"   value="[{&#34;1&#34;:&#34;A&#34;, ...}, ...]">
  <input id="data-hour-labels" value="[{&#34;A&#34;:&#34;10:00am - 6:00pm&#34;}, ...]">

data-hour-<year>  — 12 objects (January first), each {day: code}
data-hour-labels  — list of single-key objects {code: label}

Labels are "<open> - <close>" in 12-hour notation ("10:00am", "6pm"), or a
text containing "closed". Only the current year is published in a form we
can read, so only the current year is extracted.
"""

import json
import logging
import re
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from app.models.schemas import ScheduleEntry, ScheduleType

logger = logging.getLogger(__name__)

YEAR_ATTR_ID   = "data-hour-{year}"
LABELS_ATTR_ID = "data-hour-labels"
RANGE_SEPARATOR = " - "

# 12-hour with minutes, 12-hour hour-only, and 24-hour as seen on some pages
TIME_FORMATS = ("%I:%M%p", "%I%p", "%H:%M")

_ESCAPES = {
    "&#34;":   '"',
    "&quot;":  '"',
    "\\u0027": "'",
}
_ESCAPE_RE = re.compile("|".join(re.escape(k) for k in _ESCAPES))


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────

def decode_entities(text: str) -> str:
    """Undo the HTML/Unicode escaping used in the calendar attributes. Idempotent."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)


def parse_time(value: str) -> time:
    """
    Parse "10:00am", "6pm", "10:00 AM" or "18:00".
    Raises ValueError when none of TIME_FORMATS match.
    """
    cleaned = re.sub(r"\s+", "", value or "").upper()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised time {value!r}")


def build_label_map(raw_labels) -> dict[str, str]:
    """[{code: label}, ...] → {code: label}, using the first key of each element."""
    labels: dict[str, str] = {}
    for entry in raw_labels:
        if not isinstance(entry, dict) or not entry:
            logger.warning(f"Skipping malformed calendar label entry: {entry!r}")
            continue
        key = next(iter(entry))
        labels[str(key)] = entry[key]
    return labels


def _read_attribute(soup: BeautifulSoup, element_id: str) -> Optional[str]:
    element = soup.find(id=element_id)
    if element is None:
        return None
    return element.get("value")


def _entry_for_day(year: int, month: int, day_key: str, label: str, tz: ZoneInfo) -> Optional[ScheduleEntry]:
    """Build the ScheduleEntry for one calendar day, or None when the day has no hours."""
    if not isinstance(label, str) or "closed" in label.lower():
        return None

    parts = label.split(RANGE_SEPARATOR)
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        return None

    try:
        day = date(year, month, int(day_key))
        opening = parse_time(parts[0])
        closing = parse_time(parts[1])
    except ValueError as e:
        logger.warning(f"Skipping calendar day {year}-{month:02d}-{day_key} ({label!r}): {e}")
        return None

    opening_time = datetime.combine(day, opening, tzinfo=tz)
    closing_time = datetime.combine(day, closing, tzinfo=tz)
    if closing_time == opening_time:
        logger.warning(f"Skipping calendar day {day}: opening equals closing ({label!r})")
        return None
    if closing_time < opening_time:
        # closes after midnight
        closing_time = datetime.combine(day + timedelta(days=1), closing, tzinfo=tz)

    return ScheduleEntry(
        day=day,
        opening_time=opening_time,
        closing_time=closing_time,
        type=ScheduleType.operating,
    )


# ──────────────────────────────────────────────
# Extraction
# ──────────────────────────────────────────────

def extract_schedule(html, timezone: str, year: Optional[int] = None) -> List[ScheduleEntry]:
    """
    Extract the operating calendar from an opening-hours page.

    Args:
        html: raw page HTML (str or bytes).
        timezone: IANA timezone of the park; opening/closing times are local to it.
        year: calendar year to read; defaults to the current year in `timezone`.

    Returns:
        ScheduleEntry list sorted by date. Empty when the calendar attributes
        are missing or unreadable. Days that are closed, have no label, or
        whose label cannot be parsed are left out.
    """
    tz = ZoneInfo(timezone)
    if year is None:
        year = datetime.now(tz).year

    soup = BeautifulSoup(html, "html.parser")
    raw_year = _read_attribute(soup, YEAR_ATTR_ID.format(year=year))
    raw_labels = _read_attribute(soup, LABELS_ATTR_ID)
    if raw_year is None or raw_labels is None:
        logger.info(f"No calendar data for {year} on page — returning empty schedule.")
        return []

    try:
        year_data = json.loads(decode_entities(raw_year))
        label_data = json.loads(decode_entities(raw_labels))
    except json.JSONDecodeError as e:
        logger.warning(f"Calendar data for {year} is not valid JSON: {e}")
        return []

    if not isinstance(year_data, list) or not isinstance(label_data, list):
        logger.warning(f"Calendar data for {year} has unexpected shape — expected two arrays.")
        return []

    labels = build_label_map(label_data)

    entries: dict[date, ScheduleEntry] = {}
    for month_index, month in enumerate(year_data[:12], start=1):
        if not isinstance(month, dict):
            if month:
                logger.warning(f"Skipping malformed month {month_index} in calendar: {month!r}")
            continue

        for day_key, code in month.items():
            entry = _entry_for_day(year, month_index, str(day_key), labels.get(str(code)), tz)
            if entry is None:
                continue
            if entry.day in entries:
                logger.warning(f"Duplicate calendar day {entry.day} — keeping the first")
                continue
            entries[entry.day] = entry

    return [entries[d] for d in sorted(entries)]
