from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SqrtScale:
    """Square-root scale: output area grows linearly with the input.

    A degenerate domain (both ends equal) maps every input to the lower end
    of the range.
    """

    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        s0 = _signed_sqrt(d0)
        s1 = _signed_sqrt(d1)
        if s1 == s0:
            return float(r0)
        t = (_signed_sqrt(value) - s0) / (s1 - s0)
        return r0 + t * (r1 - r0)


def _signed_sqrt(x: float) -> float:
    return math.copysign(math.sqrt(abs(x)), x)


@dataclass(frozen=True, slots=True)
class QuantizeScale:
    """Maps a continuous domain onto equal-width buckets of a discrete range.

    A value sitting exactly on a threshold belongs to the upper bucket.
    """

    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, ...] = (0.0, 0.5, 1.0)

    def __post_init__(self) -> None:
        if not self.range:
            raise ValueError("QuantizeScale requires a non-empty range")

    @property
    def thresholds(self) -> tuple[float, ...]:
        d0, d1 = self.domain
        n = len(self.range)
        return tuple(d0 + (d1 - d0) * i / n for i in range(1, n))

    def __call__(self, value: float) -> float:
        i = bisect_right(self.thresholds, value)
        return self.range[max(0, min(i, len(self.range) - 1))]
