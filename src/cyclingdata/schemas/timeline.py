"""
Pandera schema for the workout timeline table.

The schema is built from a LoadLimits range table so the loader's bounds
stay configurable independently of the validator's rules.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaErrors

from cyclingdata.config.settings import DEFAULT_LOAD_LIMITS, LoadLimits
from cyclingdata.schemas.records import TIMELINE_COLUMNS, WorkoutSegment


def timeline_schema(limits: LoadLimits = DEFAULT_LOAD_LIMITS) -> pa.DataFrameSchema:
    """
    Build the timeline schema for the given loader limits.

    Args:
        limits: Range table for resistance and cadence.

    Returns:
        DataFrameSchema with one column per segment field.
    """
    return pa.DataFrameSchema(
        {
            "Time": pa.Column(
                float, pa.Check.gt(0), description="Segment duration in minutes"
            ),
            "Activity": pa.Column(str),
            "Resistance": pa.Column(
                float,
                pa.Check.in_range(limits.min_resistance, limits.max_resistance),
            ),
            "Cadence": pa.Column(
                float,
                pa.Check.in_range(limits.min_cadence, limits.max_cadence),
            ),
            "Stroke instruction": pa.Column(str),
            "Elapsed Time": pa.Column(
                float, pa.Check.ge(0), description="Cumulative minutes"
            ),
        },
        name="WorkoutTimelineSchema",
        strict=False,  # Allow extra columns
        coerce=True,
    )


def segments_to_frame(segments: list[WorkoutSegment]) -> pd.DataFrame:
    """Tabulate segments using their JSON field names as columns."""
    return pd.DataFrame(
        [segment.as_json() for segment in segments],
        columns=list(TIMELINE_COLUMNS),
    )


def timeline_frame(
    segments: list[WorkoutSegment],
    limits: LoadLimits = DEFAULT_LOAD_LIMITS,
) -> pd.DataFrame:
    """
    Tabulate and validate a workout timeline.

    All checks run before raising so the earliest failing segment can be
    reported.

    Args:
        segments: Ordered workout segments.
        limits: Range table for the schema checks.

    Returns:
        Validated DataFrame, one row per segment.

    Raises:
        pandera.errors.SchemaErrors: If any value is outside the limits.
    """
    return timeline_schema(limits).validate(segments_to_frame(segments), lazy=True)


def first_failure(error: SchemaErrors) -> tuple[str | None, int | None, object]:
    """
    Locate the earliest failing cell of a lazy schema validation.

    Failures are ordered by row, then by field order within a segment.

    Args:
        error: Pandera SchemaErrors from timeline_frame().

    Returns:
        Tuple of (column name, row index, offending value); entries are
        None when pandera does not report them.
    """
    failures = error.failure_cases
    if not isinstance(failures, pd.DataFrame) or failures.empty:
        return None, None, None

    field_order = {name: position for position, name in enumerate(TIMELINE_COLUMNS)}
    failures = failures.assign(
        _row=pd.to_numeric(failures["index"], errors="coerce"),
        _field=failures["column"].map(field_order),
    ).sort_values(["_row", "_field"], na_position="last")

    row = failures.iloc[0]
    column = row["column"] if isinstance(row["column"], str) else None
    index = int(row["_row"]) if pd.notna(row["_row"]) else None
    return column, index, row["failure_case"]
