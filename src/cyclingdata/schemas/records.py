"""
Typed records for workouts, videos and workout timelines.

Attribute names are snake_case; the JSON field names (including the two
that contain spaces) are kept as aliases so records dump back to the
exact document shape.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """Base for immutable records parsed from JSON documents."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def as_json(self) -> dict[str, Any]:
        """Return the record with its original JSON field names."""
        return self.model_dump(by_alias=True)


class Workout(Record):
    """A named cycling workout pointing at its segment timeline."""

    title: str = Field(alias="Title")
    image: str = Field(alias="Image")
    workout_url: str = Field(alias="Workout_URL")


class Video(Record):
    """An instructional class video."""

    title: str = Field(alias="Title")
    subtitle: str = Field(alias="Subtitle")
    image: str = Field(alias="Image")
    video: str = Field(alias="Video")


class WorkoutSegment(Record):
    """One timed block of a workout with resistance and cadence targets."""

    time: float = Field(alias="Time", description="Segment duration in minutes")
    activity: str = Field(alias="Activity")
    resistance: float = Field(alias="Resistance")
    cadence: float = Field(alias="Cadence")
    stroke_instruction: str = Field(alias="Stroke instruction")
    elapsed_time: float = Field(
        alias="Elapsed Time",
        description="Cumulative minutes from the start through the end of this segment",
    )


# Ordered timeline of one workout
WorkoutDetails = list[WorkoutSegment]

WORKOUT_FIELDS: tuple[str, ...] = ("Title", "Image", "Workout_URL")
VIDEO_FIELDS: tuple[str, ...] = ("Title", "Subtitle", "Image", "Video")
SEGMENT_NUMBER_FIELDS: tuple[str, ...] = ("Time", "Resistance", "Cadence", "Elapsed Time")
SEGMENT_STRING_FIELDS: tuple[str, ...] = ("Activity", "Stroke instruction")
TIMELINE_COLUMNS: tuple[str, ...] = (
    "Time",
    "Activity",
    "Resistance",
    "Cadence",
    "Stroke instruction",
    "Elapsed Time",
)
