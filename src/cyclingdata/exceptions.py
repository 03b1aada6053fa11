"""Exception hierarchy for loading and asserting cycling workout data."""

from typing import Any


class CyclingDataError(Exception):
    """Base exception for all cyclingdata errors."""


class LoadError(CyclingDataError):
    """A file, JSON document or record shape could not be loaded."""

    def __init__(
        self, message: str, source: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.source = source
        self.cause = cause


class NetworkError(CyclingDataError):
    """An HTTP fetch failed (bad URL, transport error or error status)."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class ValidationError(CyclingDataError):
    """A single value failed a fail-fast assertion."""

    def __init__(self, message: str, field: str, value: Any) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
