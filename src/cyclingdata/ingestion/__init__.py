"""Data ingestion from local JSON files and HTTP."""

from cyclingdata.ingestion.files import (
    load_json_file,
    load_videos,
    load_workout_details,
    load_workouts,
)
from cyclingdata.ingestion.navigation import get_current_segment, get_segment_at_index
from cyclingdata.ingestion.remote import fetch_with_retry, fetch_workout_details

__all__ = [
    "fetch_with_retry",
    "fetch_workout_details",
    "get_current_segment",
    "get_segment_at_index",
    "load_json_file",
    "load_videos",
    "load_workout_details",
    "load_workouts",
]
