"""Data validation module."""

from cyclingdata.validation.asserts import (
    assert_defined,
    assert_non_empty_string,
    assert_number_in_range,
)
from cyclingdata.validation.core import FileReport, ValidationRunner, validate_file
from cyclingdata.validation.records import (
    validate_video,
    validate_videos_list,
    validate_workout,
    validate_workouts_list,
)
from cyclingdata.validation.reporter import ConsoleReporter
from cyclingdata.validation.result import ValidationResult
from cyclingdata.validation.segments import validate_segment, validate_workout_details
from cyclingdata.validation.urls import validate_url

__all__ = [
    "ConsoleReporter",
    "FileReport",
    "ValidationResult",
    "ValidationRunner",
    "assert_defined",
    "assert_non_empty_string",
    "assert_number_in_range",
    "validate_file",
    "validate_segment",
    "validate_url",
    "validate_video",
    "validate_videos_list",
    "validate_workout",
    "validate_workout_details",
    "validate_workouts_list",
]
