"""
Data contracts for workout data.

Pydantic records for the JSON documents and a Pandera schema for the
tabular view of a workout timeline.
"""

from cyclingdata.schemas.records import (
    Video,
    Workout,
    WorkoutDetails,
    WorkoutSegment,
)
from cyclingdata.schemas.timeline import (
    segments_to_frame,
    timeline_frame,
    timeline_schema,
)

__all__ = [
    "Video",
    "Workout",
    "WorkoutDetails",
    "WorkoutSegment",
    "segments_to_frame",
    "timeline_frame",
    "timeline_schema",
]
