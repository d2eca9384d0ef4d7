"""
Entity Mapper
=============
Maps Stay catalog records onto canonical entity documents.

Stay catalog record fields used here:
  id                      — numeric POI id
  name                    — untranslated name (not always present)
  translatableName        — {culture: name}, e.g. {"de": "...", "en": "..."}
  place.point.longitude   — numeric string
  place.point.latitude    — numeric string

Id scheme:
  destination   → config.destination_slug
  park          → config.park_slug
  attraction    → "attr_<id>"
  restaurant    → "dining_<id>"
"""

import logging
from typing import Iterable, List, Optional, Sequence

from app.models.schemas import AttractionType, CanonicalEntity, EntityType, Location

logger = logging.getLogger(__name__)

ATTRACTION_PREFIX = "attr_"
RESTAURANT_PREFIX = "dining_"
RESTAURANT_FALLBACK_CULTURE = "de"


# ──────────────────────────────────────────────
# Shared base construction
# ──────────────────────────────────────────────

def build_base_entity(data: Optional[dict], config, entity_type: EntityType, **fields) -> CanonicalEntity:
    """
    Shared entity defaults used by every connector: id and name from the
    vendor record when there is one (config name otherwise), destination id
    and timezone from config. Location is never defaulted.
    Keyword arguments are canonical (aliased) field names and win over defaults.
    """
    doc = {
        "_id":            None,
        "_destinationId": config.destination_slug,
        "name":           config.name,
        "timezone":       config.timezone,
        "entityType":     entity_type,
    }
    if data:
        if data.get("id") is not None:
            doc["_id"] = str(data["id"])
        doc["name"] = data.get("name") or None
    doc.update(fields)
    return CanonicalEntity.model_validate(doc)


# ──────────────────────────────────────────────
# Field resolution
# ──────────────────────────────────────────────

def resolve_name(record: dict, cultures: Sequence[str]) -> Optional[str]:
    """Return the first non-empty translatableName for the given cultures, in order."""
    names = record.get("translatableName") or {}
    if not isinstance(names, dict):
        return None
    for culture in cultures:
        name = names.get(culture)
        if name:
            return name
    return None


def resolve_location(record: dict) -> Optional[Location]:
    """place.point → Location, or None unless both coordinates are present and numeric."""
    place = record.get("place")
    point = place.get("point") if isinstance(place, dict) else None
    if not isinstance(point, dict):
        return None
    lng = point.get("longitude")
    lat = point.get("latitude")
    if lng in (None, "") or lat in (None, ""):
        return None
    try:
        return Location(longitude=float(lng), latitude=float(lat))
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric coordinates for POI {record.get('id')!r}: {lng!r}, {lat!r}")
        return None


# ──────────────────────────────────────────────
# Destination & park
# ──────────────────────────────────────────────

def map_destination(config) -> CanonicalEntity:
    return build_base_entity(
        None, config, EntityType.destination,
        _id=config.destination_slug,
        slug=config.destination_slug,
    )


def map_park(config) -> CanonicalEntity:
    location = None
    if config.latitude is not None and config.longitude is not None:
        location = Location(longitude=config.longitude, latitude=config.latitude)
    return build_base_entity(
        None, config, EntityType.park,
        _id=config.park_slug,
        _parentId=config.destination_slug,
        slug=config.park_slug,
        location=location,
    )


# ──────────────────────────────────────────────
# Attractions, restaurants, shows
# ──────────────────────────────────────────────

def map_attraction(record: dict, config) -> CanonicalEntity:
    fields = {
        "_id":           f"{ATTRACTION_PREFIX}{record['id']}",
        "_parkId":       config.park_slug,
        "_parentId":     config.park_slug,
        "attractionType": AttractionType.ride,
        "location":      resolve_location(record),
    }
    # no fallback culture: the base name stays when the configured one is missing
    name = resolve_name(record, [config.culture])
    if name:
        fields["name"] = name
    return build_base_entity(record, config, EntityType.attraction, **fields)


def map_restaurant(record: dict, config) -> CanonicalEntity:
    return build_base_entity(
        record, config, EntityType.restaurant,
        _id=f"{RESTAURANT_PREFIX}{record['id']}",
        _parkId=config.park_slug,
        _parentId=config.park_slug,
        name=resolve_name(record, [config.culture, RESTAURANT_FALLBACK_CULTURE]),
        location=resolve_location(record),
    )


def map_shows(records: Optional[Iterable[dict]], config) -> List[CanonicalEntity]:
    # Stay exposes no show data
    return []


def _map_many(records, config, mapper, kind: str) -> List[CanonicalEntity]:
    entities: List[CanonicalEntity] = []
    seen: set[str] = set()
    for record in records or []:
        if not isinstance(record, dict) or record.get("id") in (None, ""):
            logger.warning(f"[{config.destination_slug}] Skipping {kind} record without id: {record!r}")
            continue
        try:
            entity = mapper(record, config)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning(f"[{config.destination_slug}] Skipping malformed {kind} record: {e!r}")
            continue
        if entity.id in seen:
            logger.warning(f"[{config.destination_slug}] Duplicate {kind} id {entity.id} — keeping the first")
            continue
        seen.add(entity.id)
        entities.append(entity)
    return entities


def map_attractions(records: Optional[Iterable[dict]], config) -> List[CanonicalEntity]:
    return _map_many(records, config, map_attraction, "attraction")


def map_restaurants(records: Optional[Iterable[dict]], config) -> List[CanonicalEntity]:
    return _map_many(records, config, map_restaurant, "restaurant")
