"""
Cyclingdata: loading and validation of cycling workout data.

This package loads workout, video and segment-timeline JSON documents from
disk or HTTP and checks them for structural and semantic problems.
"""

from importlib.metadata import version

from cyclingdata.exceptions import (
    CyclingDataError,
    LoadError,
    NetworkError,
    ValidationError,
)
from cyclingdata.ingestion import (
    fetch_with_retry,
    fetch_workout_details,
    get_current_segment,
    get_segment_at_index,
    load_json_file,
    load_videos,
    load_workout_details,
    load_workouts,
)
from cyclingdata.schemas import Video, Workout, WorkoutDetails, WorkoutSegment
from cyclingdata.validation import (
    ValidationResult,
    assert_defined,
    assert_non_empty_string,
    assert_number_in_range,
    validate_segment,
    validate_url,
    validate_video,
    validate_videos_list,
    validate_workout,
    validate_workout_details,
    validate_workouts_list,
)

__version__ = version("cyclingdata")

__all__ = [
    "CyclingDataError",
    "LoadError",
    "NetworkError",
    "ValidationError",
    "ValidationResult",
    "Video",
    "Workout",
    "WorkoutDetails",
    "WorkoutSegment",
    "__version__",
    "assert_defined",
    "assert_non_empty_string",
    "assert_number_in_range",
    "fetch_with_retry",
    "fetch_workout_details",
    "get_current_segment",
    "get_segment_at_index",
    "load_json_file",
    "load_videos",
    "load_workout_details",
    "load_workouts",
    "validate_segment",
    "validate_url",
    "validate_video",
    "validate_videos_list",
    "validate_workout",
    "validate_workout_details",
    "validate_workouts_list",
]
