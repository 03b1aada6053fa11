"""Position lookups within a loaded workout timeline."""

from cyclingdata.exceptions import LoadError
from cyclingdata.schemas.records import WorkoutDetails, WorkoutSegment


def get_segment_at_index(segments: WorkoutDetails, index: int) -> WorkoutSegment:
    """
    Return the segment at ``index`` with bounds checking.

    Negative indices are rejected rather than counted from the end.

    Raises:
        LoadError: If the index is out of bounds.
    """
    if index < 0 or index >= len(segments):
        msg = f"Segment index {index} is out of bounds (array length: {len(segments)})"
        raise LoadError(msg, "memory")
    return segments[index]


def get_current_segment(
    segments: WorkoutDetails, elapsed_minutes: float
) -> WorkoutSegment | None:
    """
    Return the segment active at ``elapsed_minutes``.

    That is the first segment whose cumulative elapsed time is at least
    ``elapsed_minutes``. Negative times map to the first segment.

    Returns:
        The active segment, or None when the timeline is empty or the
        workout is complete.
    """
    if not segments:
        return None

    if elapsed_minutes < 0:
        return segments[0]

    for segment in segments:
        if elapsed_minutes <= segment.elapsed_time:
            return segment

    return None
