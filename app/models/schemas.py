from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
from datetime import date, datetime
from enum import Enum


# ──────────────────────────────────────────────
# Shared
# ──────────────────────────────────────────────

class CanonicalModel(BaseModel):
    """Base for documents handed to the aggregation platform (aliased field names)."""
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Location(BaseModel):
    longitude: float
    latitude: float


# ──────────────────────────────────────────────
# Entities
# ──────────────────────────────────────────────

class EntityType(str, Enum):
    destination = "DESTINATION"
    park = "PARK"
    attraction = "ATTRACTION"
    show = "SHOW"
    restaurant = "RESTAURANT"


class AttractionType(str, Enum):
    ride = "RIDE"
    show = "SHOW"
    transport = "TRANSPORT"
    other = "OTHER"


class CanonicalEntity(CanonicalModel):
    id: str = Field(alias="_id")
    destination_id: Optional[str] = Field(default=None, alias="_destinationId")
    park_id: Optional[str] = Field(default=None, alias="_parkId")
    parent_id: Optional[str] = Field(default=None, alias="_parentId")
    entity_type: EntityType = Field(alias="entityType")
    attraction_type: Optional[AttractionType] = Field(default=None, alias="attractionType")
    name: Optional[str] = None
    slug: Optional[str] = None
    timezone: Optional[str] = None
    location: Optional[Location] = None

    @model_validator(mode="after")
    def _require_parent(self):
        if self.entity_type != EntityType.destination and not self.parent_id:
            raise ValueError(f"{self.entity_type.value} entity {self.id!r} has no parent id")
        return self


# ──────────────────────────────────────────────
# Live data
# ──────────────────────────────────────────────

class StatusType(str, Enum):
    operating = "OPERATING"
    down = "DOWN"                       # temporaryClosed == "true"
    closed = "CLOSED"                   # waitingTime sentinel -3
    refurbishment = "REFURBISHMENT"     # canonical only, never sent by Stay


class LiveStatus(CanonicalModel):
    id: str = Field(alias="_id")
    status: StatusType


# ──────────────────────────────────────────────
# Schedule
# ──────────────────────────────────────────────

class ScheduleType(str, Enum):
    operating = "OPERATING"
    informational = "INFORMATIONAL"


class ScheduleEntry(CanonicalModel):
    day: date = Field(alias="date")
    opening_time: datetime = Field(alias="openingTime")
    closing_time: datetime = Field(alias="closingTime")
    type: ScheduleType = ScheduleType.operating

    @model_validator(mode="after")
    def _opening_before_closing(self):
        if self.opening_time >= self.closing_time:
            raise ValueError(
                f"openingTime {self.opening_time} is not before closingTime {self.closing_time}"
            )
        return self


class ParkSchedule(CanonicalModel):
    id: str = Field(alias="_id")
    schedule: List[ScheduleEntry] = []
