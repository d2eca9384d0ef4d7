from fastapi import APIRouter, Request
from app.services.snapshots import get_park_id, load_snapshot

router = APIRouter()


@router.get("/schedule", summary="Park operating calendar")
async def get_schedule(request: Request):
    """
    Operating hours for every open day of the current year.
    Refreshed every 24 hours.
    """
    data = load_snapshot(get_park_id(request), "schedule")
    return {
        "park_id":      data["park_id"],
        "last_updated": data["last_updated"],
        "schedule":     data["schedule"],
    }
