from abc import ABC, abstractmethod
from typing import List

from app.models.schemas import CanonicalEntity, LiveStatus, ParkSchedule
from app.parks.config import ParkConfig


class ParkConfigError(ValueError):
    """Raised at construction time when a connector's configuration is incomplete."""


class BaseParkConnector(ABC):
    """
    Abstract base class for all destination connectors.
    A connector turns vendor payloads into canonical entities, live statuses
    and schedules for exactly one destination.
    """

    def __init__(self, config: ParkConfig):
        self.config = config

    @property
    def park_id(self) -> str:
        return self.config.destination_slug

    @property
    def park_name(self) -> str:
        return self.config.name

    @abstractmethod
    async def build_destination_entity(self) -> CanonicalEntity: ...

    @abstractmethod
    async def build_park_entities(self) -> List[CanonicalEntity]: ...

    @abstractmethod
    async def build_attraction_entities(self) -> List[CanonicalEntity]: ...

    @abstractmethod
    async def build_show_entities(self) -> List[CanonicalEntity]: ...

    @abstractmethod
    async def build_restaurant_entities(self) -> List[CanonicalEntity]: ...

    @abstractmethod
    async def build_entity_live_data(self) -> List[LiveStatus]: ...

    @abstractmethod
    async def build_entity_schedule_data(self) -> List[ParkSchedule]: ...
