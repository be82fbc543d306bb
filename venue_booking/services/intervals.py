"""Free-interval arithmetic over an operating window."""
from typing import Iterable, List, NamedTuple


class Interval(NamedTuple):
    """Half-open range ``[start, end)`` in minutes since midnight."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """True when ``[a_start, a_end)`` and ``[b_start, b_end)`` share any minute."""
    return a_start < b_end and b_start < a_end


def compute_free_intervals(
    open_minute: int,
    close_minute: int,
    booked: Iterable[Interval],
    min_duration: int = 0,
) -> List[Interval]:
    """
    Compute the maximal free sub-intervals of ``[open_minute, close_minute)``.

    Booked ranges are swept in start order. The cursor only ever moves
    forward (``max``), so overlapping or touching bookings merge into one
    excluded span. Gaps shorter than ``min_duration`` minutes are dropped.

    Args:
        open_minute: Start of the operating window
        close_minute: End of the operating window
        booked: Booked ranges, in any order, possibly overlapping
        min_duration: Minimum free interval length in minutes

    Returns:
        Free intervals in ascending order
    """
    free: List[Interval] = []
    cursor = open_minute

    for start, end in sorted(booked):
        if cursor >= close_minute:
            break
        gap_end = min(start, close_minute)
        if cursor < gap_end and gap_end - cursor >= min_duration:
            free.append(Interval(cursor, gap_end))
        cursor = max(cursor, end)

    if cursor < close_minute and close_minute - cursor >= min_duration:
        free.append(Interval(cursor, close_minute))

    return free
