from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import MutableMapping, Sequence

from bikewatch.app.services.scale_manager import ScaleManager
from bikewatch.domain.algorithms.reconcile import ReconcileResult, reconcile
from bikewatch.domain.models import Marker, StationTraffic

logger = logging.getLogger(__name__)

MARKER_OPACITY = 0.8


def tooltip_text(datum: StationTraffic) -> str:
    return (
        f"{datum.total_traffic} trips "
        f"({datum.departures} departures, {datum.arrivals} arrivals)"
    )


@dataclass(slots=True)
class MarkerReconciler:
    """Keeps one marker per station in sync with the latest traffic snapshot.

    Retained markers are mutated in place (radius, flow bucket, tooltip);
    markers are only created or dropped when the station set itself changes.
    Positions are left to the projector.
    """

    scales: ScaleManager

    def reconcile(
        self,
        markers: MutableMapping[str, Marker],
        traffic: Sequence[StationTraffic],
    ) -> ReconcileResult[str]:
        result = reconcile(
            markers,
            traffic,
            key=lambda d: d.short_name,
            enter=self._create,
            update=self._apply,
        )
        logger.debug(
            "Reconciled markers: %d created, %d updated, %d removed",
            len(result.created),
            len(result.updated),
            len(result.removed),
        )
        return result

    def _create(self, datum: StationTraffic) -> Marker:
        return Marker(
            key=datum.short_name,
            datum=datum,
            opacity=MARKER_OPACITY,
            tooltip=tooltip_text(datum),
        )

    def _apply(self, marker: Marker, datum: StationTraffic) -> None:
        marker.datum = datum
        marker.radius = self.scales.radius(datum)
        marker.flow = self.scales.flow(datum)
        marker.tooltip = tooltip_text(datum)
