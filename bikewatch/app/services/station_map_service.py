from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from bikewatch.app.ports.output import IBikeshareDataSource, IMapView
from bikewatch.app.services.marker_reconciler import MarkerReconciler
from bikewatch.app.services.projector import CoordinateProjector
from bikewatch.app.services.scale_manager import ScaleManager
from bikewatch.domain.algorithms.reconcile import ReconcileResult
from bikewatch.domain.algorithms.time_window import (
    filter_trips_by_time,
    format_time,
    parse_time_filter,
)
from bikewatch.domain.algorithms.traffic import compute_station_traffic
from bikewatch.domain.exceptions import DatasetLoadError, MapNotReadyError
from bikewatch.domain.models import (
    Marker,
    Station,
    StationTraffic,
    Trip,
    ViewportEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimeLabel:
    text: str
    any_time: bool


@dataclass(slots=True)
class StationMapService:
    """Keeps station markers in sync with the time filter and the map camera.

    - Time filter changes run filter -> aggregate -> rescale -> reconcile ->
      project.
    - Viewport changes only re-project the existing markers.

    Nothing is computed until both datasets have loaded; a failed load leaves
    the map unrendered for the rest of the session.
    """

    data_source: IBikeshareDataSource
    map_view: IMapView

    scales: ScaleManager = field(default_factory=ScaleManager)
    markers: dict[str, Marker] = field(default_factory=dict)

    _stations: tuple[Station, ...] = ()
    _trips: tuple[Trip, ...] = ()
    _traffic: tuple[StationTraffic, ...] = ()
    _time_filter: int | None = None
    _ready: bool = False
    _load_error: str | None = None
    _reconciler: MarkerReconciler = field(init=False, repr=False)
    _projector: CoordinateProjector = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._reconciler = MarkerReconciler(scales=self.scales)
        self._projector = CoordinateProjector(map_view=self.map_view)

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def load_error(self) -> str | None:
        return self._load_error

    @property
    def time_filter(self) -> int | None:
        return self._time_filter

    @property
    def traffic(self) -> tuple[StationTraffic, ...]:
        return self._traffic

    async def start(self) -> bool:
        """Load both datasets and draw the unfiltered map once."""

        if self._ready:
            return True

        failure: DatasetLoadError | None = None
        # A failing load cancels the other one.
        try:
            async with asyncio.TaskGroup() as tg:
                stations_task = tg.create_task(self.data_source.load_stations())
                trips_task = tg.create_task(self.data_source.load_trips())
        except* DatasetLoadError as group:
            failure = group.exceptions[0]

        if failure is not None:
            self._load_error = f"{type(failure).__name__}: {failure}"
            logger.error(
                "Failed to load bike-share datasets; map stays empty",
                exc_info=failure,
            )
            return False

        stations = stations_task.result()
        trips = trips_task.result()
        logger.info("Loaded %d stations and %d trips", len(stations), len(trips))

        self._stations = tuple(stations)
        self._trips = tuple(trips)
        self._ready = True
        self._load_error = None

        self.map_view.on_viewport_change(self.on_viewport_change)
        self._redraw()
        return True

    def set_time_filter(self, value: int | None) -> ReconcileResult[str]:
        """Apply a slider value (-1 clears the filter) and redraw."""

        time_filter = parse_time_filter(value)
        self._require_ready()
        self._time_filter = time_filter
        return self._redraw()

    def on_viewport_change(self, event: ViewportEvent) -> None:
        if not self._ready:
            return
        self._projector.position_all(self.markers.values())

    def time_label(self) -> TimeLabel:
        if self._time_filter is None:
            return TimeLabel(text="", any_time=True)
        return TimeLabel(text=format_time(self._time_filter), any_time=False)

    def _redraw(self) -> ReconcileResult[str]:
        trips = filter_trips_by_time(self._trips, self._time_filter)
        self._traffic = tuple(compute_station_traffic(self._stations, trips))
        self.scales.rescale(self._traffic, self._time_filter)
        result = self._reconciler.reconcile(self.markers, self._traffic)
        self._projector.position_all(self.markers.values())

        logger.debug(
            "Redrew %d markers for time filter %s (%d trips)",
            len(self.markers),
            self._time_filter,
            len(trips),
        )
        return result

    def _require_ready(self) -> None:
        if not self._ready:
            raise MapNotReadyError(
                self._load_error or "Station and trip datasets are not loaded yet"
            )
