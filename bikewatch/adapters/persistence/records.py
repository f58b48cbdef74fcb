from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Any, Mapping

from bikewatch.domain.exceptions import DatasetLoadError
from bikewatch.domain.models import GeoPoint, Station, Trip


def _first(raw: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = raw.get(name)
        if value is not None and value != "":
            return value
    return None


def normalize_station(raw: Mapping[str, Any]) -> Station:
    """Map either station naming convention onto `Station`.

    Accepts GBFS-style fields (`short_name`, `lon`, `lat`, `name`) and the
    Bluebikes export fields (`Number`, `Long`, `Lat`, `NAME`).
    """

    short_name = _first(raw, "short_name", "Number")
    lon = _first(raw, "lon", "Long")
    lat = _first(raw, "lat", "Lat")
    name = _first(raw, "name", "NAME")
    if lon is None or lat is None:
        raise ValueError(f"Station {short_name!r} has no coordinates")

    return Station(
        short_name=str(short_name).strip() if short_name is not None else "",
        location=GeoPoint(lat=float(lat), lon=float(lon)),
        name=str(name).strip() if name is not None else None,
    )


def parse_station_document(doc: Any) -> tuple[Station, ...]:
    """Parse `{"data": {"stations": [...]}}` or a bare list of stations."""

    if isinstance(doc, Mapping):
        data = doc.get("data")
        items = data.get("stations") if isinstance(data, Mapping) else None
    else:
        items = doc
    if not isinstance(items, list):
        raise DatasetLoadError("Station document has no station list")

    stations: list[Station] = []
    for i, raw in enumerate(items):
        try:
            stations.append(normalize_station(raw))
        except (TypeError, ValueError, AttributeError) as exc:
            raise DatasetLoadError(f"Invalid station record #{i}: {exc}") from exc
    return tuple(stations)


def _parse_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(raw.strip())


def parse_trip(row: Mapping[str, Any]) -> Trip:
    return Trip(
        start_station_id=(row.get("start_station_id") or "").strip(),
        end_station_id=(row.get("end_station_id") or "").strip(),
        started_at=_parse_timestamp(row["started_at"]),
        ended_at=_parse_timestamp(row["ended_at"]),
        ride_id=(row.get("ride_id") or "").strip() or None,
    )


def parse_trips_csv(text: str) -> tuple[Trip, ...]:
    reader = csv.DictReader(io.StringIO(text))
    trips: list[Trip] = []
    # Header is line 1.
    for line_no, row in enumerate(reader, start=2):
        try:
            trips.append(parse_trip(row))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise DatasetLoadError(f"Invalid trip on line {line_no}: {exc}") from exc
    return tuple(trips)
