from __future__ import annotations

import json
from datetime import datetime

import pytest

from bikewatch.adapters.persistence import LocalBikeshareDataSource
from bikewatch.adapters.persistence.records import (
    normalize_station,
    parse_station_document,
    parse_trips_csv,
)
from bikewatch.domain.exceptions import DatasetLoadError
from bikewatch.domain.models import GeoPoint

TRIPS_CSV = (
    "ride_id,rideable_type,started_at,ended_at,"
    "start_station_id,end_station_id,is_member\n"
    "R1,classic_bike,2024-03-01 08:00:00.000,2024-03-01 08:15:00.000,A32000,A32001,1\n"
    "R2,electric_bike,2024-03-01T17:45:10,2024-03-01T18:02:00,A32001,A32000,0\n"
)


def test_normalize_station_gbfs_fields() -> None:
    s = normalize_station(
        {"short_name": "A32000", "lon": -71.09, "lat": 42.36, "name": "MIT"}
    )

    assert s.short_name == "A32000"
    assert s.location == GeoPoint(lat=42.36, lon=-71.09)
    assert s.name == "MIT"


def test_normalize_station_export_fields_and_numeric_strings() -> None:
    s = normalize_station({"Number": "A32001", "Long": "-71.1", "Lat": "42.37"})

    assert s.short_name == "A32001"
    assert s.location == GeoPoint(lat=42.37, lon=-71.1)
    assert s.name is None


def test_parse_station_document_accepts_wrapped_and_bare_lists() -> None:
    raw = [{"short_name": "A", "lon": 0, "lat": 0}]

    assert len(parse_station_document({"data": {"stations": raw}})) == 1
    assert len(parse_station_document(raw)) == 1


@pytest.mark.parametrize(
    "doc",
    [
        {"stations": []},
        {"data": "nope"},
        [{"short_name": "A", "lon": 0}],
        [{"short_name": "A", "lon": 0, "lat": 95}],
    ],
)
def test_parse_station_document_rejects_bad_input(doc) -> None:
    with pytest.raises(DatasetLoadError):
        parse_station_document(doc)


def test_parse_trips_csv() -> None:
    trips = parse_trips_csv(TRIPS_CSV)

    assert len(trips) == 2
    assert trips[0].start_station_id == "A32000"
    assert trips[0].end_station_id == "A32001"
    assert trips[0].started_at == datetime(2024, 3, 1, 8, 0)
    assert trips[0].ride_id == "R1"
    assert trips[1].ended_at == datetime(2024, 3, 1, 18, 2)


def test_parse_trips_csv_reports_bad_line() -> None:
    bad = TRIPS_CSV + "R3,classic_bike,yesterday,2024-03-01 08:00:00,A,B,1\n"

    with pytest.raises(DatasetLoadError, match="line 4"):
        parse_trips_csv(bad)


@pytest.mark.unit
@pytest.mark.anyio
async def test_local_source_reads_files(tmp_path) -> None:
    stations_path = tmp_path / "stations.json"
    trips_path = tmp_path / "trips.csv"
    stations_path.write_text(
        json.dumps({"data": {"stations": [{"Number": "A32000", "Long": 1, "Lat": 2}]}}),
        encoding="utf-8",
    )
    trips_path.write_text(TRIPS_CSV, encoding="utf-8")

    source = LocalBikeshareDataSource(
        stations_path=stations_path, trips_path=trips_path
    )

    stations = await source.load_stations()
    trips = await source.load_trips()
    assert [s.short_name for s in stations] == ["A32000"]
    assert len(trips) == 2


@pytest.mark.unit
@pytest.mark.anyio
async def test_local_source_missing_file_is_load_error(tmp_path) -> None:
    source = LocalBikeshareDataSource(
        stations_path=tmp_path / "missing.json", trips_path=tmp_path / "missing.csv"
    )

    with pytest.raises(DatasetLoadError):
        await source.load_stations()
    with pytest.raises(DatasetLoadError):
        await source.load_trips()


@pytest.mark.unit
@pytest.mark.anyio
async def test_local_source_requires_configuration(monkeypatch) -> None:
    monkeypatch.delenv("BIKEWATCH_STATIONS_PATH", raising=False)

    with pytest.raises(DatasetLoadError, match="BIKEWATCH_STATIONS_PATH"):
        await LocalBikeshareDataSource().load_stations()


@pytest.mark.unit
@pytest.mark.anyio
async def test_local_source_undecodable_bytes_are_load_errors(tmp_path) -> None:
    stations_path = tmp_path / "stations.json"
    trips_path = tmp_path / "trips.csv"
    stations_path.write_bytes(b'{"data": {"stations": [{"Number": "\xff"}]}}')
    trips_path.write_bytes(
        b"started_at,ended_at,start_station_id,end_station_id\n"
        b"2024-03-01 08:00:00,2024-03-01 08:15:00,\xfe,B\n"
    )
    source = LocalBikeshareDataSource(
        stations_path=stations_path, trips_path=trips_path
    )

    with pytest.raises(DatasetLoadError, match="stations"):
        await source.load_stations()
    with pytest.raises(DatasetLoadError, match="trips"):
        await source.load_trips()
