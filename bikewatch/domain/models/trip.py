from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Trip:
    """A single bike trip from the trip log.

    Station ids are not checked against the station list; unknown ids simply
    never match a station during aggregation.
    """

    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime
    ride_id: str | None = None
