"""
Snapshot Store
==============
Latest connector output per park, kept in memory only.

  entities  — destination, park, attractions, shows, restaurants (every 24h)
  schedule  — park schedule bundle                                (every 24h)
  live      — live statuses                                       (every minute)

Written by the scheduler, read by the API endpoints.
"""

from datetime import datetime, timezone
from fastapi import HTTPException, Request

from app.parks import PARKS

_snapshots: dict[tuple[str, str], dict] = {}


def get_park_id(request: Request) -> str:
    """Extract and validate the park_id from the request path."""
    park_id = request.url.path.strip("/").split("/")[0]
    if park_id not in PARKS:
        raise HTTPException(status_code=404, detail=f"Park '{park_id}' not found.")
    return park_id


def save_snapshot(park_id: str, kind: str, data: dict):
    _snapshots[(park_id, kind)] = {
        **data,
        "park_id":      park_id,
        "last_updated": datetime.now(timezone.utc).isoformat(),
    }


def load_snapshot(park_id: str, kind: str) -> dict:
    snapshot = _snapshots.get((park_id, kind))
    if snapshot is None:
        raise HTTPException(
            status_code=503,
            detail=f"{kind.capitalize()} data for '{park_id}' not yet available — scheduler may still be starting up.",
        )
    return snapshot


def clear_snapshots():
    _snapshots.clear()
