"""Fixed-width slot generation from free intervals."""
from typing import Iterable, List

from venue_booking.services.intervals import Interval


def discretize(intervals: Iterable[Interval], width: int) -> List[Interval]:
    """Cut each free interval into consecutive ``width``-minute slots.

    A trailing remainder shorter than ``width`` is dropped, so slots never
    cross an interval boundary.
    """
    if width <= 0:
        raise ValueError(f"Slot width must be positive, got {width}")

    slots = []
    for interval in intervals:
        t = interval.start
        while t + width <= interval.end:
            slots.append(Interval(t, t + width))
            t += width
    return slots


def count_slots(intervals: Iterable[Interval], width: int) -> int:
    """Number of slots ``discretize`` would produce, without building them."""
    if width <= 0:
        raise ValueError(f"Slot width must be positive, got {width}")
    return sum(max(0, interval.duration) // width for interval in intervals)
