"""Shared fixtures: a test park configuration, a fake transport and payload builders."""

import json
from datetime import timedelta

import pytest

from app.parks.config import ParkConfig


@pytest.fixture
def config():
    return ParkConfig(
        name="Test Park",
        timezone="Europe/Berlin",
        culture="en",
        destination_slug="testdestination",
        park_slug="testpark",
        latitude=51.5,
        longitude=6.8,
        calendar_url="https://www.testpark.example/opening-hours",
        stay_establishment="tEst",
        api_key="secret-key",
        base_url="https://api.stay.example",
    )


def build_calendar_html(year, year_data, label_data):
    """Minimal opening-hours page with the two hidden calendar inputs, escaped like the real site."""
    def escape(data):
        return json.dumps(data).replace('"', "&#34;")

    return (
        "<html><body><div class=\"calendar\">"
        f'<input type="hidden" id="data-hour-{year}" value="{escape(year_data)}">'
        f'<input type="hidden" id="data-hour-labels" value="{escape(label_data)}">'
        "</div></body></html>"
    )


def attraction(poi_id, **extra):
    record = {
        "id": poi_id,
        "translatableName": {"en": f"Ride {poi_id}", "de": f"Fahrt {poi_id}"},
        "place": {"point": {"longitude": "6.8650", "latitude": "51.5970"}},
    }
    record.update(extra)
    return record


class FakeTransport:
    """Stands in for HttpTransport; payloads are looked up by the cache key suffix."""

    def __init__(self, payloads=None, errors=None):
        self.payloads = payloads or {}
        self.errors = errors or {}
        self.calls = []

    def _lookup(self, url, cache_key, ttl, headers):
        self.calls.append({"url": url, "cache_key": cache_key, "ttl": ttl, "headers": headers})
        name = cache_key.split(":", 1)[1]
        if name in self.errors:
            raise self.errors[name]
        return self.payloads.get(name)

    async def get_json(self, url, *, cache_key, ttl: timedelta, headers=None):
        return self._lookup(url, cache_key, ttl, headers)

    async def get_text(self, url, *, cache_key, ttl: timedelta, headers=None):
        return self._lookup(url, cache_key, ttl, headers)
