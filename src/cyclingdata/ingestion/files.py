"""
Loaders for workout data files on disk.

Each loader fails fast with LoadError on the first missing or mistyped
field. Semantic checks (URLs, activity names, elapsed-time consistency)
are left to cyclingdata.validation.
"""

from pathlib import Path
from typing import Any

from pandera.errors import SchemaErrors

from cyclingdata.config.settings import DEFAULT_LOAD_LIMITS, LoadLimits
from cyclingdata.exceptions import LoadError
from cyclingdata.ingestion.base import RecordArrayLoader, parse_json, resolve_path
from cyclingdata.schemas.records import (
    SEGMENT_NUMBER_FIELDS,
    SEGMENT_STRING_FIELDS,
    TIMELINE_COLUMNS,
    VIDEO_FIELDS,
    WORKOUT_FIELDS,
    Video,
    Workout,
    WorkoutDetails,
    WorkoutSegment,
)
from cyclingdata.schemas.timeline import first_failure, timeline_frame
from cyclingdata.utils.jsontypes import (
    MISSING,
    is_finite_number,
    is_number,
    json_type_name,
)
from cyclingdata.utils.logging import get_logger

log = get_logger(__name__)


def load_json_file(file_path: str | Path, base_dir: Path | None = None) -> Any:
    """
    Read and decode a JSON file.

    Args:
        file_path: Absolute path, or path relative to base_dir.
        base_dir: Directory for relative paths (default: current directory).

    Returns:
        Decoded JSON value, without further checks.

    Raises:
        LoadError: If the file is missing, not a regular file, unreadable,
            blank or not valid JSON.
    """
    path = resolve_path(file_path, base_dir)
    source = str(path)

    if not path.exists():
        msg = f"File not found: {path}"
        raise LoadError(msg, source)

    if not path.is_file():
        msg = f"Path is not a file: {path}"
        raise LoadError(msg, source)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read file: {e}"
        raise LoadError(msg, source, cause=e) from e

    if not content.strip():
        msg = "File is empty"
        raise LoadError(msg, source)

    data = parse_json(content, source)
    log.debug("Parsed JSON file", path=source, size=len(content))
    return data


class _FileLoader(RecordArrayLoader):
    """Record loader reading its array from a JSON file."""

    def __init__(self, file_path: str | Path, base_dir: Path | None = None) -> None:
        self.path = resolve_path(file_path, base_dir)
        super().__init__(str(self.path))

    def _load_raw(self) -> Any:
        return load_json_file(self.path)

    def _require_strings(
        self, index: int, item: dict[str, Any], fields: tuple[str, ...]
    ) -> None:
        """Check that every field holds a string, naming the title once known."""
        for field in fields:
            if isinstance(item.get(field, MISSING), str):
                continue
            title = item.get("Title")
            where = f"{self.label} at index {index}"
            if field != "Title" and isinstance(title, str):
                where = f"{where} ({title})"
            msg = f"{where} is missing required field '{field}' or it is not a string"
            raise LoadError(msg, self.source)


class WorkoutsLoader(_FileLoader):
    """Loads workouts.json."""

    label = "Workout"

    def _parse_item(self, index: int, item: dict[str, Any]) -> Workout:
        self._require_strings(index, item, WORKOUT_FIELDS)
        return self._build(Workout, index, item)


class VideosLoader(_FileLoader):
    """Loads videos.json."""

    label = "Video"

    def _parse_item(self, index: int, item: dict[str, Any]) -> Video:
        self._require_strings(index, item, VIDEO_FIELDS)
        return self._build(Video, index, item)


class WorkoutDetailsLoader(_FileLoader):
    """
    Loads a workout timeline file.

    Field types are checked per segment; value ranges are checked across
    the whole timeline with the Pandera timeline schema built from the
    loader's LoadLimits.
    """

    label = "Segment"

    def __init__(
        self,
        file_path: str | Path,
        base_dir: Path | None = None,
        limits: LoadLimits = DEFAULT_LOAD_LIMITS,
    ) -> None:
        super().__init__(file_path, base_dir)
        self.limits = limits

    def _check_array(self, items: list[Any]) -> None:
        if not items:
            msg = "Workout details array is empty"
            raise LoadError(msg, self.source)

    def _parse_item(self, index: int, item: dict[str, Any]) -> WorkoutSegment:
        for field in TIMELINE_COLUMNS:
            value = item.get(field, MISSING)
            if field in SEGMENT_NUMBER_FIELDS and not is_finite_number(value):
                expected = "a finite number" if is_number(value) else "a number"
                msg = (
                    f"Segment at index {index} has invalid '{field}' field: "
                    f"expected {expected}, got {json_type_name(value)}"
                )
                raise LoadError(msg, self.source)
            if field in SEGMENT_STRING_FIELDS and not isinstance(value, str):
                msg = (
                    f"Segment at index {index} has invalid '{field}' field: "
                    f"expected a string, got {json_type_name(value)}"
                )
                raise LoadError(msg, self.source)
        return self._build(WorkoutSegment, index, item)

    def _check_records(self, records: list[WorkoutSegment]) -> None:
        try:
            timeline_frame(records, self.limits)
        except SchemaErrors as e:
            column, index, value = first_failure(e)
            where = f"Segment at index {index}" if index is not None else "Segment"
            msg = (
                f"{where} has invalid '{column}' value: {value} "
                f"({self._expected(column)})"
            )
            raise LoadError(msg, self.source, cause=e) from e

    def _expected(self, column: str | None) -> str:
        if column == "Time":
            return "must be positive"
        if column == "Elapsed Time":
            return "must be non-negative"
        if column == "Resistance":
            return f"expected {self.limits.min_resistance:g}-{self.limits.max_resistance:g}"
        if column == "Cadence":
            return f"expected {self.limits.min_cadence:g}-{self.limits.max_cadence:g}"
        return "out of range"


def load_workouts(
    file_path: str | Path = "./workouts.json", base_dir: Path | None = None
) -> list[Workout]:
    """
    Load the workouts list.

    Raises:
        LoadError: If the file cannot be loaded or a workout is malformed.
    """
    return WorkoutsLoader(file_path, base_dir).load()


def load_videos(
    file_path: str | Path = "./videos.json", base_dir: Path | None = None
) -> list[Video]:
    """
    Load the videos list.

    Raises:
        LoadError: If the file cannot be loaded or a video is malformed.
    """
    return VideosLoader(file_path, base_dir).load()


def load_workout_details(
    file_path: str | Path,
    base_dir: Path | None = None,
    limits: LoadLimits = DEFAULT_LOAD_LIMITS,
) -> WorkoutDetails:
    """
    Load one workout timeline.

    Args:
        file_path: Path to the workout details JSON file.
        base_dir: Directory for relative paths (default: current directory).
        limits: Loader range table for resistance and cadence.

    Returns:
        Ordered list of segments.

    Raises:
        LoadError: If the file cannot be loaded, the array is empty, a field
            is missing or mistyped, or a value is outside the limits.
    """
    return WorkoutDetailsLoader(file_path, base_dir, limits).load()
