from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from bikewatch.adapters.persistence.records import (
    parse_station_document,
    parse_trips_csv,
)
from bikewatch.app.ports.output import IBikeshareDataSource
from bikewatch.domain.exceptions import DatasetLoadError
from bikewatch.domain.models import Station, Trip


@dataclass(slots=True)
class LocalBikeshareDataSource(IBikeshareDataSource):
    """Reads the station JSON and trips CSV from disk.

    Env vars:
      - BIKEWATCH_STATIONS_PATH: station list JSON file
      - BIKEWATCH_TRIPS_PATH: trip log CSV file
    """

    stations_path: str | Path | None = None
    trips_path: str | Path | None = None

    def _path(self, value: str | Path | None, env: str) -> Path:
        raw = value or os.getenv(env)
        if not raw:
            raise DatasetLoadError(f"{env} is not configured")
        return Path(raw)

    async def load_stations(self) -> tuple[Station, ...]:
        path = self._path(self.stations_path, "BIKEWATCH_STATIONS_PATH")
        try:
            with path.open("r", encoding="utf-8") as fp:
                doc = json.load(fp)
        except (OSError, ValueError) as exc:
            raise DatasetLoadError(f"Cannot read stations from {path}: {exc}") from exc
        return parse_station_document(doc)

    async def load_trips(self) -> tuple[Trip, ...]:
        path = self._path(self.trips_path, "BIKEWATCH_TRIPS_PATH")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DatasetLoadError(f"Cannot read trips from {path}: {exc}") from exc
        return parse_trips_csv(text)
