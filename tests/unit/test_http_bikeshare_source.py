from __future__ import annotations

import httpx
import pytest

from bikewatch.adapters.persistence import HttpBikeshareDataSource
from bikewatch.domain.exceptions import DatasetLoadError

STATIONS_URL = "https://example.test/stations.json"
TRIPS_URL = "https://example.test/trips.csv"


def _source(handler) -> HttpBikeshareDataSource:
    return HttpBikeshareDataSource(
        stations_url=STATIONS_URL,
        trips_url=TRIPS_URL,
        transport=httpx.MockTransport(handler),
    )


def _ok(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith(".json"):
        return httpx.Response(
            200,
            json={
                "data": {
                    "stations": [
                        {"short_name": "A", "lon": -71.09, "lat": 42.36},
                        {"Number": "B", "Long": -71.1, "Lat": 42.37},
                    ]
                }
            },
        )
    return httpx.Response(
        200,
        text=(
            "started_at,ended_at,start_station_id,end_station_id\n"
            "2024-03-01 08:00:00,2024-03-01 08:15:00,A,B\n"
        ),
    )


@pytest.mark.unit
@pytest.mark.anyio
async def test_loads_stations_and_trips() -> None:
    source = _source(_ok)

    stations = await source.load_stations()
    trips = await source.load_trips()

    assert [s.short_name for s in stations] == ["A", "B"]
    assert len(trips) == 1
    assert trips[0].start_station_id == "A"


@pytest.mark.unit
@pytest.mark.anyio
async def test_http_error_status_is_load_error() -> None:
    source = _source(lambda request: httpx.Response(404))

    with pytest.raises(DatasetLoadError, match="404"):
        await source.load_trips()


@pytest.mark.unit
@pytest.mark.anyio
async def test_malformed_json_is_load_error() -> None:
    source = _source(lambda request: httpx.Response(200, text="{not json"))

    with pytest.raises(DatasetLoadError):
        await source.load_stations()


@pytest.mark.unit
@pytest.mark.anyio
async def test_transport_error_is_load_error() -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DatasetLoadError):
        await _source(_boom).load_stations()


def test_urls_default_from_env(monkeypatch) -> None:
    monkeypatch.setenv("BIKEWATCH_STATIONS_URL", "https://env.test/s.json")
    monkeypatch.setenv("BIKEWATCH_TRIPS_URL", "https://env.test/t.csv")
    monkeypatch.setenv("BIKEWATCH_HTTP_TIMEOUT_S", "5")

    source = HttpBikeshareDataSource()

    assert source.stations_url == "https://env.test/s.json"
    assert source.trips_url == "https://env.test/t.csv"
    assert source.timeout_s == 5.0


@pytest.mark.unit
@pytest.mark.anyio
async def test_undecodable_station_body_is_load_error() -> None:
    source = _source(
        lambda request: httpx.Response(200, content=b'{"data": "\xff"}')
    )

    with pytest.raises(DatasetLoadError, match="malformed"):
        await source.load_stations()
