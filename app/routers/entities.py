from fastapi import APIRouter, Request
from app.services.snapshots import get_park_id, load_snapshot

router = APIRouter()


@router.get("/entities", summary="All entities of this destination")
async def get_entities(request: Request):
    """
    Destination, park, attractions, shows and restaurants as one flat list.
    Refreshed every 24 hours.
    """
    data = load_snapshot(get_park_id(request), "entities")
    return {
        "park_id":      data["park_id"],
        "park_name":    data["park_name"],
        "last_updated": data["last_updated"],
        "entities": [
            data["destination"],
            *data["parks"],
            *data["attractions"],
            *data["shows"],
            *data["restaurants"],
        ],
    }


@router.get("/attractions", summary="Attraction entities")
async def get_attractions(request: Request):
    data = load_snapshot(get_park_id(request), "entities")
    return {
        "park_id":      data["park_id"],
        "last_updated": data["last_updated"],
        "attractions":  data["attractions"],
    }


@router.get("/restaurants", summary="Restaurant entities")
async def get_restaurants(request: Request):
    data = load_snapshot(get_park_id(request), "entities")
    return {
        "park_id":      data["park_id"],
        "last_updated": data["last_updated"],
        "restaurants":  data["restaurants"],
    }


@router.get("/shows", summary="Show entities")
async def get_shows(request: Request):
    """Always empty: the Stay API has no show data."""
    data = load_snapshot(get_park_id(request), "entities")
    return {
        "park_id":      data["park_id"],
        "last_updated": data["last_updated"],
        "shows":        data["shows"],
    }
