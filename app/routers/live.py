from fastapi import APIRouter, Request
from app.services.snapshots import get_park_id, load_snapshot

router = APIRouter()


@router.get("/live", summary="Live attraction statuses")
async def get_live(request: Request):
    """OPERATING / DOWN / CLOSED per attraction. Refreshed every minute."""
    data = load_snapshot(get_park_id(request), "live")
    return {
        "park_id":      data["park_id"],
        "last_updated": data["last_updated"],
        "live":         data["live"],
    }
