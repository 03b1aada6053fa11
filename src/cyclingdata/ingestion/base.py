"""
Base classes and utilities for data ingestion.

Provides JSON decoding and the common record-array loading flow shared
by the workout, video and workout-details loaders.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from cyclingdata.exceptions import LoadError
from cyclingdata.schemas.records import Record
from cyclingdata.utils.jsontypes import json_type_name
from cyclingdata.utils.logging import get_logger

log = get_logger(__name__)

R = TypeVar("R", bound=Record)


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


def parse_json(text: str, source: str, what: str = "Invalid JSON") -> Any:
    """
    Decode strict JSON text.

    ``NaN`` and ``Infinity`` literals are rejected.

    Args:
        text: JSON document.
        source: Path or URL the text came from, for error context.
        what: Message prefix for decode failures.

    Returns:
        Decoded value.

    Raises:
        LoadError: If the text is not valid JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        msg = f"{what}: {e}"
        raise LoadError(msg, source, cause=e) from e


def require_array(data: Any, source: str) -> list[Any]:
    """Ensure a decoded document is a JSON array."""
    if not isinstance(data, list):
        msg = f"Expected array but got {json_type_name(data)}"
        raise LoadError(msg, source)
    return data


def require_object(item: Any, index: int, label: str, source: str) -> dict[str, Any]:
    """Ensure one array element is a JSON object."""
    if not isinstance(item, dict):
        msg = f"{label} at index {index} is not an object"
        raise LoadError(msg, source)
    return item


class RecordArrayLoader(ABC, Generic[R]):
    """
    Abstract base class for loaders of JSON arrays of records.

    Subclasses check one element at a time and build a typed record,
    raising LoadError on the first structural problem.
    """

    label: ClassVar[str] = "Record"

    def __init__(self, source: str) -> None:
        """
        Initialize loader.

        Args:
            source: Path or URL used in error messages.
        """
        self.source = source

    @abstractmethod
    def _load_raw(self) -> Any:
        """Return the decoded JSON document. Implemented by subclasses."""
        ...

    @abstractmethod
    def _parse_item(self, index: int, item: dict[str, Any]) -> R:
        """Check one element and build its record."""
        ...

    def _build(self, model: type[R], index: int, item: dict[str, Any]) -> R:
        """Convert a checked element, reporting conversion failures as LoadError."""
        try:
            return model.model_validate(item)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            msg = f"{self.label} at index {index} has invalid '{field}' field: {first['msg']}"
            raise LoadError(msg, self.source, cause=e) from e

    def _check_array(self, items: list[Any]) -> None:
        """Hook for whole-array checks before elements are parsed."""

    def _check_records(self, records: list[R]) -> None:
        """Hook for checks across all parsed records."""

    def load(self) -> list[R]:
        """
        Load, check and convert every element.

        Returns:
            Typed records in document order.

        Raises:
            LoadError: On the first structural problem.
        """
        log.debug("Loading records", loader=self.__class__.__name__, source=self.source)

        items = require_array(self._load_raw(), self.source)
        self._check_array(items)

        records = [
            self._parse_item(index, require_object(item, index, self.label, self.source))
            for index, item in enumerate(items)
        ]
        self._check_records(records)

        log.info(
            "Loaded records",
            loader=self.__class__.__name__,
            source=self.source,
            count=len(records),
        )
        return records


def resolve_path(file_path: str | Path, base_dir: Path | None = None) -> Path:
    """
    Resolve a possibly relative path.

    Args:
        file_path: Absolute path, or path relative to base_dir.
        base_dir: Directory for relative paths (default: current directory).

    Returns:
        Absolute path.
    """
    path = Path(file_path)
    if path.is_absolute():
        return path
    return (base_dir if base_dir is not None else Path.cwd()).resolve() / path
