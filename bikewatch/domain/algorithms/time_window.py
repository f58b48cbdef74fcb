from __future__ import annotations

from datetime import datetime
from typing import Sequence

from bikewatch.domain.models import Trip

NO_FILTER_SLIDER_VALUE = -1
MINUTES_PER_DAY = 24 * 60
WINDOW_HALF_WIDTH_MIN = 60


def minutes_since_midnight(dt: datetime) -> int:
    """Wall-clock minutes since midnight; the date is ignored."""

    return dt.hour * 60 + dt.minute


def parse_time_filter(value: int | None) -> int | None:
    """Translate a slider value into a time filter.

    `-1` (or None) means "no filter". Anything else must be a minute of the
    day in 0..1439.
    """

    if value is None or value == NO_FILTER_SLIDER_VALUE:
        return None
    minutes = int(value)
    if not (0 <= minutes < MINUTES_PER_DAY):
        raise ValueError(
            f"Time filter must be -1 or within 0..{MINUTES_PER_DAY - 1}: {value}"
        )
    return minutes


def filter_trips_by_time(
    trips: Sequence[Trip], time_filter: int | None
) -> Sequence[Trip]:
    """Keep trips that start or end within +/- 60 minutes of `time_filter`.

    With no filter the input sequence itself is returned. The window does not
    wrap around midnight.
    """

    if time_filter is None:
        return trips

    out: list[Trip] = []
    for trip in trips:
        started = minutes_since_midnight(trip.started_at)
        ended = minutes_since_midnight(trip.ended_at)
        if (
            abs(started - time_filter) <= WINDOW_HALF_WIDTH_MIN
            or abs(ended - time_filter) <= WINDOW_HALF_WIDTH_MIN
        ):
            out.append(trip)
    return out


def format_time(minutes: int) -> str:
    """Format minutes since midnight as a 12-hour clock, e.g. '8:05 PM'."""

    hours, mins = divmod(int(minutes) % MINUTES_PER_DAY, 60)
    suffix = "AM" if hours < 12 else "PM"
    hour12 = hours % 12 or 12
    return f"{hour12}:{mins:02d} {suffix}"
