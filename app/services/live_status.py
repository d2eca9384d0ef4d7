"""
Live Status Classifier
======================
Turns Stay live-feed entries into canonical statuses.

Live-feed entry fields:
  id               — POI id, matches the attraction catalog
  temporaryClosed  — "true" | "false" (anything else is unexpected)
  waitingTime      — minutes; negative values are sentinels

Only -3 is a known sentinel: it was observed on every attraction while the
park was closed. "false" with a wait of 0 (or any other non-positive value)
has no documented meaning and is reported as OPERATING.
"""

import logging
import math
from typing import Iterable, List, Optional

from app.models.schemas import LiveStatus, StatusType
from app.services.entity_mapper import ATTRACTION_PREFIX

logger = logging.getLogger(__name__)

PARK_CLOSED_WAIT = -3


def _parse_wait(raw) -> float:
    if raw in (None, ""):
        return 0
    try:
        wait = float(raw)
    except (TypeError, ValueError):
        logger.warning(f"Unparseable waitingTime {raw!r} — treating as 0")
        return 0
    if not math.isfinite(wait):
        logger.warning(f"Non-finite waitingTime {raw!r} — treating as 0")
        return 0
    return wait


def _flag(raw) -> str:
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw).strip().lower() if raw is not None else ""


def classify_status(entry: dict) -> StatusType:
    """
    Map one live-feed entry to a StatusType.

      temporaryClosed "true"                     → DOWN
      temporaryClosed "false", waitingTime > 0   → OPERATING
      temporaryClosed "false", waitingTime == -3 → CLOSED
      temporaryClosed "false", anything else     → OPERATING (undocumented)
      temporaryClosed anything else              → OPERATING, logged
    """
    flag = _flag(entry.get("temporaryClosed"))

    if flag == "true":
        return StatusType.down

    if flag == "false":
        wait = _parse_wait(entry.get("waitingTime"))
        if wait > 0:
            return StatusType.operating
        if wait == PARK_CLOSED_WAIT:
            return StatusType.closed
        # TODO: confirm with live data what "false" + non-positive wait (0, -1, -2) means
        logger.debug(f"No rule for waitingTime {wait} on {entry.get('id')!r} — defaulting to OPERATING")
        return StatusType.operating

    logger.warning(
        f"Unknown temporaryClosed {entry.get('temporaryClosed')!r} for {entry.get('id')!r} "
        f"— defaulting to OPERATING"
    )
    return StatusType.operating


def build_live_statuses(
    catalog: Optional[Iterable[dict]],
    feed: Optional[Iterable[dict]],
) -> List[LiveStatus]:
    """
    One LiveStatus per feed entry whose id is in the attraction catalog, in
    feed order. Feed entries without a catalog match are dropped.
    """
    catalog_ids = {
        str(x["id"]) for x in (catalog or [])
        if isinstance(x, dict) and x.get("id") is not None
    }

    statuses: List[LiveStatus] = []
    unmatched = 0
    for entry in feed or []:
        if not isinstance(entry, dict) or entry.get("id") is None:
            logger.warning(f"Skipping live-feed entry without id: {entry!r}")
            continue

        entry_id = str(entry["id"])
        if entry_id not in catalog_ids:
            unmatched += 1
            continue

        statuses.append(LiveStatus(
            id=f"{ATTRACTION_PREFIX}{entry_id}",
            status=classify_status(entry),
        ))

    if unmatched:
        logger.debug(f"{unmatched} live-feed entries have no catalog match.")
    return statuses
