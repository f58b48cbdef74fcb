from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Station:
    short_name: str
    location: GeoPoint
    name: str | None = None


@dataclass(frozen=True, slots=True)
class StationTraffic:
    """Arrivals/departures of one station over a given set of trips."""

    station: Station
    arrivals: int = 0
    departures: int = 0

    @property
    def short_name(self) -> str:
        return self.station.short_name

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    @property
    def departure_ratio(self) -> float | None:
        total = self.total_traffic
        if total == 0:
            return None
        return self.departures / total
