from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from bikewatch.domain.models import Station, StationTraffic, Trip


def compute_station_traffic(
    stations: Sequence[Station], trips: Iterable[Trip]
) -> list[StationTraffic]:
    """Count departures/arrivals per station.

    Every input station gets an entry (zero when no trip references it), in
    input order. Trips pointing at unknown stations are ignored.
    """

    departures: Counter[str] = Counter()
    arrivals: Counter[str] = Counter()
    for trip in trips:
        departures[trip.start_station_id] += 1
        arrivals[trip.end_station_id] += 1

    return [
        StationTraffic(
            station=s,
            arrivals=arrivals.get(s.short_name, 0),
            departures=departures.get(s.short_name, 0),
        )
        for s in stations
    ]


def max_total_traffic(traffic: Iterable[StationTraffic]) -> int:
    return max((t.total_traffic for t in traffic), default=0)
