from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from bikewatch.domain.algorithms.scales import QuantizeScale, SqrtScale
from bikewatch.domain.algorithms.traffic import max_total_traffic
from bikewatch.domain.models import StationTraffic

UNFILTERED_RADIUS_RANGE: tuple[float, float] = (0.0, 25.0)
# Filtered views have fewer trips; widen the range and keep a visible floor.
FILTERED_RADIUS_RANGE: tuple[float, float] = (3.0, 50.0)
BALANCED_RATIO = 0.5


@dataclass(slots=True)
class ScaleManager:
    """Holds the radius and flow scales for the current traffic snapshot."""

    radius_scale: SqrtScale = field(
        default_factory=lambda: SqrtScale(
            domain=(0.0, 0.0), range=UNFILTERED_RADIUS_RANGE
        )
    )
    flow_scale: QuantizeScale = field(default_factory=QuantizeScale)

    def rescale(
        self, traffic: Sequence[StationTraffic], time_filter: int | None
    ) -> SqrtScale:
        if time_filter is None:
            r0, r1 = UNFILTERED_RADIUS_RANGE
        else:
            r0, r1 = FILTERED_RADIUS_RANGE
        self.radius_scale = SqrtScale(
            domain=(0.0, float(max_total_traffic(traffic))), range=(r0, r1)
        )
        return self.radius_scale

    def radius(self, datum: StationTraffic) -> float:
        return self.radius_scale(datum.total_traffic)

    def flow(self, datum: StationTraffic) -> float:
        ratio = datum.departure_ratio
        return self.flow_scale(BALANCED_RATIO if ratio is None else ratio)
