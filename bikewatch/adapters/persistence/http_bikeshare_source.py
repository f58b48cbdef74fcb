from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx

from bikewatch.adapters.persistence.records import (
    parse_station_document,
    parse_trips_csv,
)
from bikewatch.app.ports.output import IBikeshareDataSource
from bikewatch.domain.exceptions import DatasetLoadError
from bikewatch.domain.models import Station, Trip

logger = logging.getLogger(__name__)

DEFAULT_STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
DEFAULT_TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"


@dataclass(slots=True)
class HttpBikeshareDataSource(IBikeshareDataSource):
    """Fetches the station JSON and the trips CSV over HTTP.

    Env vars:
      - BIKEWATCH_STATIONS_URL: station list JSON
      - BIKEWATCH_TRIPS_URL: trip log CSV
      - BIKEWATCH_HTTP_TIMEOUT_S: request timeout (default 30)

    No retries: any transport, status or parse failure becomes a
    `DatasetLoadError`.
    """

    stations_url: str | None = None
    trips_url: str | None = None
    timeout_s: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.stations_url is None:
            self.stations_url = (
                os.getenv("BIKEWATCH_STATIONS_URL") or DEFAULT_STATIONS_URL
            )
        if self.trips_url is None:
            self.trips_url = os.getenv("BIKEWATCH_TRIPS_URL") or DEFAULT_TRIPS_URL
        if os.getenv("BIKEWATCH_HTTP_TIMEOUT_S"):
            self.timeout_s = float(os.environ["BIKEWATCH_HTTP_TIMEOUT_S"])

    async def _get(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp
        except httpx.HTTPError as exc:
            raise DatasetLoadError(f"GET {url} failed: {exc}") from exc

    async def load_stations(self) -> tuple[Station, ...]:
        resp = await self._get(self.stations_url)
        try:
            doc = resp.json()
        except ValueError as exc:
            # Covers both JSONDecodeError and UnicodeDecodeError.
            raise DatasetLoadError(f"Station JSON is malformed: {exc}") from exc
        stations = parse_station_document(doc)
        logger.info("Fetched %d stations from %s", len(stations), self.stations_url)
        return stations

    async def load_trips(self) -> tuple[Trip, ...]:
        resp = await self._get(self.trips_url)
        trips = parse_trips_csv(resp.text)
        logger.info("Fetched %d trips from %s", len(trips), self.trips_url)
        return trips
