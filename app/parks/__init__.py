"""
Park registry — maps destination slug to its configuration record.

To add a new Parques Reunidos park:
  1. Add a ParkConfig record to app/parks/config.py
  2. Add it to PARKS below

Connectors are built on demand so that a park with broken configuration only
takes itself down, not the whole registry.
"""

import os
from typing import Optional

from app.parks.base import ParkConfigError
from app.parks.config import ParkConfig, MOVIE_PARK_GERMANY, BOBBEJAANLAND
from app.parks.parques_reunidos import ParquesReunidosConnector
from app.services.transport import HttpTransport


# ── Registry ──────────────────────────────────
PARKS: dict[str, ParkConfig] = {
    MOVIE_PARK_GERMANY.destination_slug: MOVIE_PARK_GERMANY,
    BOBBEJAANLAND.destination_slug:      BOBBEJAANLAND,
}


def enabled_parks() -> list[str]:
    """Park ids listed in PARKS_ENABLED (comma separated), or every registered park."""
    raw = os.getenv("PARKS_ENABLED", "")
    wanted = [p.strip() for p in raw.split(",") if p.strip()]
    if not wanted:
        return list(PARKS)
    return [p for p in wanted if p in PARKS]


def get_park(park_id: str, transport: Optional[HttpTransport] = None) -> ParquesReunidosConnector | None:
    """
    Build the connector for park_id, or None if the park is not registered.
    Raises ParkConfigError when the park's configuration is incomplete.
    """
    config = PARKS.get(park_id)
    if config is None:
        return None
    return ParquesReunidosConnector(config.with_credentials(), transport=transport)


__all__ = ["PARKS", "ParkConfigError", "enabled_parks", "get_park"]
