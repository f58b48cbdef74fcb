from __future__ import annotations

from abc import ABC, abstractmethod

from bikewatch.domain.models import Station, Trip


class IBikeshareDataSource(ABC):
    """Port for loading the station list and the trip log.

    Implementations raise `DatasetLoadError` on any fetch or parse failure.
    """

    @abstractmethod
    async def load_stations(self) -> tuple[Station, ...]:
        raise NotImplementedError

    @abstractmethod
    async def load_trips(self) -> tuple[Trip, ...]:
        raise NotImplementedError
