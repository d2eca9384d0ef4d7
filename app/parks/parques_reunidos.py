"""
Parques Reunidos Connector
==========================
POI & live source: Stay API (https://api-manager.stay-app.com)
  GET /api/v1/service/attraction   — attraction catalog, also the live feed
  GET /api/v1/service/restaurant   — restaurant catalog
Calendar source:   the park's public "opening hours" page (config.calendar_url)

Every request to the Stay API carries
  Authorization:      Bearer <api key>
  Stay-Establishment: <park establishment code>

One connector class serves every Parques Reunidos park; the differences live
in the ParkConfig records in app/parks/config.py.
"""

import httpx
import logging
from datetime import timedelta
from typing import List, Optional
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.models.schemas import CanonicalEntity, LiveStatus, ParkSchedule
from app.parks.base import BaseParkConnector, ParkConfigError
from app.parks.config import ParkConfig
from app.services import entity_mapper
from app.services.calendar_extractor import extract_schedule
from app.services.live_status import build_live_statuses
from app.services.transport import HttpTransport

logger = logging.getLogger(__name__)

ATTRACTION_PATH = "/api/v1/service/attraction"
RESTAURANT_PATH = "/api/v1/service/restaurant"

CATALOG_TTL  = timedelta(days=1)
LIVE_TTL     = timedelta(minutes=1)
CALENDAR_TTL = timedelta(days=1)

LIVE_FIELDS = ("temporaryClosed", "waitingTime")


class ParquesReunidosConnector(BaseParkConnector):

    def __init__(self, config: ParkConfig, transport: Optional[HttpTransport] = None):
        if not config.api_key:
            raise ParkConfigError("Missing ParquesReunidos API key")
        if not config.base_url:
            raise ParkConfigError("Missing ParquesReunidos baseURL")
        if not config.stay_establishment:
            raise ParkConfigError("Missing ParquesReunidos StayEstablishment")
        if not config.calendar_url:
            raise ParkConfigError("Missing ParquesReunidos calendarURL")
        try:
            ZoneInfo(config.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ParkConfigError(f"Unknown timezone '{config.timezone}' for {config.destination_slug}")

        super().__init__(config)
        self.transport = transport or HttpTransport()
        self._api_host = urlparse(config.base_url).hostname

    # ──────────────────────────────────────────
    # Fetching
    # ──────────────────────────────────────────

    def _headers_for(self, url: str) -> dict:
        if urlparse(url).hostname != self._api_host:
            return {}
        return {
            "Authorization":      f"Bearer {self.config.api_key}",
            "Stay-Establishment": self.config.stay_establishment,
        }

    def _cache_key(self, name: str) -> str:
        return f"{self.park_id}:{name}"

    async def _fetch_list(self, path: str, name: str, ttl: timedelta) -> list:
        url = f"{self.config.base_url.rstrip('/')}{path}"
        body = await self.transport.get_json(
            url, cache_key=self._cache_key(name), ttl=ttl, headers=self._headers_for(url),
        )
        if not isinstance(body, list):
            logger.error(f"[{self.park_id}] Expected a list from {path}, got {type(body).__name__}")
            return []
        return body

    async def fetch_attractions_poi(self) -> list:
        return await self._fetch_list(ATTRACTION_PATH, "attractions", CATALOG_TTL)

    async def fetch_restaurants_poi(self) -> list:
        return await self._fetch_list(RESTAURANT_PATH, "restaurants", CATALOG_TTL)

    async def fetch_live_data(self) -> list:
        # same endpoint as the attraction catalog, cached separately and briefly
        return await self._fetch_list(ATTRACTION_PATH, "live", LIVE_TTL)

    async def fetch_calendar_html(self) -> str:
        url = self.config.calendar_url
        return await self.transport.get_text(
            url, cache_key=self._cache_key("calendar"), ttl=CALENDAR_TTL, headers=self._headers_for(url),
        )

    # ──────────────────────────────────────────
    # Entities
    # ──────────────────────────────────────────

    async def build_destination_entity(self) -> CanonicalEntity:
        return entity_mapper.map_destination(self.config)

    async def build_park_entities(self) -> List[CanonicalEntity]:
        return [entity_mapper.map_park(self.config)]

    async def build_attraction_entities(self) -> List[CanonicalEntity]:
        try:
            poi = await self.fetch_attractions_poi()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[{self.park_id}] build_attraction_entities failed: {e}")
            return []

        attractions = entity_mapper.map_attractions(poi, self.config)
        logger.info(f"[{self.park_id}] {len(attractions)} attractions mapped.")
        return attractions

    async def build_show_entities(self) -> List[CanonicalEntity]:
        return entity_mapper.map_shows(None, self.config)

    async def build_restaurant_entities(self) -> List[CanonicalEntity]:
        try:
            poi = await self.fetch_restaurants_poi()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[{self.park_id}] build_restaurant_entities failed: {e}")
            return []

        restaurants = entity_mapper.map_restaurants(poi, self.config)
        logger.info(f"[{self.park_id}] {len(restaurants)} restaurants mapped.")
        return restaurants

    async def build_all_entities(self) -> List[CanonicalEntity]:
        return [
            await self.build_destination_entity(),
            *await self.build_park_entities(),
            *await self.build_attraction_entities(),
            *await self.build_show_entities(),
            *await self.build_restaurant_entities(),
        ]

    # ──────────────────────────────────────────
    # Live data
    # ──────────────────────────────────────────

    def _check_feed_shape(self, catalog: list, feed: list):
        """Warn when the live feed stops looking like the attraction catalog it shares an endpoint with."""
        missing = sum(
            1 for x in feed
            if isinstance(x, dict) and not any(f in x for f in LIVE_FIELDS)
        )
        if missing:
            logger.warning(
                f"[{self.park_id}] {missing}/{len(feed)} live-feed entries carry neither "
                f"{' nor '.join(LIVE_FIELDS)} — feed and catalog may have diverged"
            )

        catalog_ids = {str(x.get("id")) for x in catalog if isinstance(x, dict)}
        feed_ids = {str(x.get("id")) for x in feed if isinstance(x, dict)}
        if catalog_ids and feed_ids and catalog_ids != feed_ids:
            logger.warning(
                f"[{self.park_id}] Live feed and attraction catalog diverged: "
                f"{len(feed_ids - catalog_ids)} ids only in feed, "
                f"{len(catalog_ids - feed_ids)} only in catalog"
            )

    async def build_entity_live_data(self) -> List[LiveStatus]:
        try:
            catalog = await self.fetch_attractions_poi()
            feed = await self.fetch_live_data()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[{self.park_id}] build_entity_live_data failed: {e}")
            return []

        self._check_feed_shape(catalog, feed)
        statuses = build_live_statuses(catalog, feed)
        logger.info(f"[{self.park_id}] {len(statuses)} live statuses built.")
        return statuses

    # ──────────────────────────────────────────
    # Schedule
    # ──────────────────────────────────────────

    async def build_entity_schedule_data(self) -> List[ParkSchedule]:
        """
        Operating calendar for the current year, keyed by the park entity.
        A fetch failure yields an empty schedule rather than no bundle at all.
        """
        try:
            html = await self.fetch_calendar_html()
        except httpx.HTTPError as e:
            logger.error(f"[{self.park_id}] Calendar fetch failed: {e}")
            html = ""

        schedule = extract_schedule(html, self.config.timezone) if html else []
        logger.info(f"[{self.park_id}] Calendar parsed: {len(schedule)} days.")
        return [ParkSchedule(id=self.config.park_slug, schedule=schedule)]
