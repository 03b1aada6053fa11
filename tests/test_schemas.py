"""Tests for record models and the Pandera timeline schema."""

import pandas as pd
import pandera as pa
import pytest

from cyclingdata.config import LoadLimits
from cyclingdata.schemas import (
    WorkoutSegment,
    segments_to_frame,
    timeline_frame,
    timeline_schema,
)
from cyclingdata.schemas.records import TIMELINE_COLUMNS
from cyclingdata.schemas.timeline import first_failure


def _segments(resistances: list[float]) -> list[WorkoutSegment]:
    elapsed = 0
    segments = []
    for resistance in resistances:
        elapsed += 5
        segments.append(
            WorkoutSegment(
                time=5,
                activity="Intervals",
                resistance=resistance,
                cadence=90,
                stroke_instruction="",
                elapsed_time=elapsed,
            )
        )
    return segments


class TestWorkoutSegment:
    """Tests for the WorkoutSegment record."""

    def test_aliases(self) -> None:
        """Test JSON field names with spaces populate snake_case attributes."""
        segment = WorkoutSegment.model_validate(
            {
                "Time": 2,
                "Activity": "Sprint",
                "Resistance": 8,
                "Cadence": 110,
                "Stroke instruction": "Stay seated",
                "Elapsed Time": 2,
            }
        )
        assert segment.stroke_instruction == "Stay seated"
        assert segment.elapsed_time == 2
        assert segment.as_json()["Elapsed Time"] == 2

    def test_frozen(self) -> None:
        """Test records are immutable."""
        segment = _segments([5])[0]
        with pytest.raises(ValueError):
            segment.cadence = 100  # type: ignore[misc]


class TestTimelineSchema:
    """Tests for the timeline DataFrame schema."""

    def test_frame_columns(self) -> None:
        """Test the frame uses JSON field names in order."""
        frame = segments_to_frame(_segments([5, 10]))
        assert list(frame.columns) == list(TIMELINE_COLUMNS)
        assert len(frame) == 2

    def test_empty_frame(self) -> None:
        """Test an empty timeline still has every column."""
        frame = segments_to_frame([])
        assert list(frame.columns) == list(TIMELINE_COLUMNS)
        assert frame.empty

    def test_valid_timeline(self) -> None:
        """Test an in-range timeline validates."""
        frame = timeline_frame(_segments([0, 20]))
        assert frame["Resistance"].tolist() == [0.0, 20.0]

    def test_resistance_out_of_range(self) -> None:
        """Test resistance beyond the loader limits fails."""
        with pytest.raises(pa.errors.SchemaErrors):
            timeline_frame(_segments([5, 21]))

    def test_limits_drive_schema(self) -> None:
        """Test a narrower table rejects values the default accepts."""
        segments = _segments([15])
        timeline_frame(segments)
        with pytest.raises(pa.errors.SchemaErrors):
            timeline_frame(segments, LoadLimits(max_resistance=10))

    def test_schema_allows_extra_columns(self) -> None:
        """Test the schema is not strict about extra columns."""
        frame = segments_to_frame(_segments([5])).assign(Note="x")
        validated = timeline_schema().validate(frame)
        assert "Note" in validated.columns

    def test_first_failure_is_earliest_row(self) -> None:
        """Test the earliest failing segment is reported."""
        with pytest.raises(pa.errors.SchemaErrors) as exc_info:
            timeline_frame(_segments([5, 5, 30, 40]))

        column, index, value = first_failure(exc_info.value)
        assert column == "Resistance"
        assert index == 2
        assert value == 30

    def test_first_failure_without_cases(self) -> None:
        """Test a missing failure table yields no location."""

        class _NoCases:
            failure_cases = pd.DataFrame()

        assert first_failure(_NoCases()) == (None, None, None)  # type: ignore[arg-type]
