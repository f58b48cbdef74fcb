from __future__ import annotations

from dataclasses import dataclass

from .station import StationTraffic


@dataclass(slots=True, eq=False)
class Marker:
    """Visual circle for one station, kept alive across redraws.

    Equality is identity: a marker is the same marker as long as it is the
    same object, whatever its current attributes.
    """

    key: str
    datum: StationTraffic
    radius: float = 0.0
    flow: float = 0.5
    opacity: float = 0.8
    tooltip: str = ""
    cx: float | None = None
    cy: float | None = None

    @property
    def is_positioned(self) -> bool:
        return self.cx is not None and self.cy is not None
