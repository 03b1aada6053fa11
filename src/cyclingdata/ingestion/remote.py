"""
HTTP loading of workout timelines.

Requests are plain GETs with a per-attempt timeout and sequential retries
with exponential backoff.
"""

import time
from typing import Any
from urllib.parse import urlparse

import requests

from cyclingdata.config.settings import DEFAULT_FETCH_CONFIG, FetchConfig
from cyclingdata.exceptions import LoadError, NetworkError
from cyclingdata.ingestion.base import RecordArrayLoader, parse_json
from cyclingdata.schemas.records import (
    SEGMENT_NUMBER_FIELDS,
    TIMELINE_COLUMNS,
    WorkoutDetails,
    WorkoutSegment,
)
from cyclingdata.utils.jsontypes import MISSING, is_finite_number
from cyclingdata.utils.logging import get_logger

log = get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")
READ_CHUNK_SIZE = 8192

# Clock for per-attempt deadlines
_monotonic = time.monotonic


def _check_url(url: str) -> None:
    """Reject malformed URLs and non-HTTP schemes before any request."""
    try:
        parsed = urlparse(url)
    except ValueError as e:
        msg = f"Invalid URL format: {url}"
        raise NetworkError(msg, url, cause=e) from e

    if not parsed.scheme:
        msg = f"Invalid URL format: {url}"
        raise NetworkError(msg, url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        msg = f"Unsupported protocol: {parsed.scheme}"
        raise NetworkError(msg, url)

    if not parsed.hostname:
        msg = f"Invalid URL format: {url}"
        raise NetworkError(msg, url)


def _attempt(session: requests.Session, url: str, config: FetchConfig) -> str:
    """
    Make one GET request and read its body within ``config.timeout_ms``.

    The requests timeout bounds each connect and socket read; the deadline
    bounds the whole attempt, so a server trickling bytes is cut off too.

    Raises:
        requests.RequestException: On transport errors or an exceeded deadline.
        NetworkError: On a non-2xx status.
    """
    deadline = _monotonic() + config.timeout_seconds
    with session.get(
        url,
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout_seconds,
        stream=True,
    ) as response:
        if not 200 <= response.status_code < 300:
            msg = f"HTTP error {response.status_code}: {response.reason}"
            raise NetworkError(msg, url, status_code=response.status_code)

        chunks: list[bytes] = []
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            if _monotonic() > deadline:
                msg = f"Request timed out after {config.timeout_ms} ms"
                raise requests.Timeout(msg)
            chunks.append(chunk)
        return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


def _fetch(session: requests.Session, url: str, config: FetchConfig) -> str:
    last_error: Exception | None = None

    for attempt in range(config.max_attempts):
        try:
            text = _attempt(session, url, config)
        except requests.RequestException as e:
            last_error = e
        except NetworkError as e:
            if e.status_code in config.non_retriable_statuses:
                log.error("Non-retriable HTTP status", url=url, status=e.status_code)
                raise
            last_error = e
        else:
            log.debug("Fetched URL", url=url, attempt=attempt + 1)
            return text

        if attempt < config.retries:
            delay_ms = config.backoff_ms(attempt)
            log.warning(
                "Fetch attempt failed, retrying",
                url=url,
                attempt=attempt + 1,
                max_attempts=config.max_attempts,
                delay_ms=delay_ms,
                error=str(last_error),
            )
            time.sleep(delay_ms / 1000)

    msg = f"Failed after {config.max_attempts} attempts: {last_error}"
    raise NetworkError(msg, url, cause=last_error) from last_error


def fetch_with_retry(
    url: str,
    config: FetchConfig | None = None,
    session: requests.Session | None = None,
) -> str:
    """
    Fetch a URL as text, retrying transient failures.

    Each attempt, body included, must finish within ``config.timeout_ms``.
    After a failed attempt the next one waits ``retry_delay_ms * 2**attempt`` ms.
    Status codes in ``config.non_retriable_statuses`` stop immediately.

    Args:
        url: http or https URL.
        config: Fetch settings (defaults: 30 s timeout, 3 retries, 1 s base delay).
        session: Optional requests session; a private one is used otherwise.

    Returns:
        Response body.

    Raises:
        NetworkError: For invalid URLs, non-retriable statuses, or once all
            attempts have failed.
    """
    config = config or DEFAULT_FETCH_CONFIG
    _check_url(url)

    if session is not None:
        return _fetch(session, url, config)
    with requests.Session() as owned:
        return _fetch(owned, url, config)


class RemoteWorkoutDetailsLoader(RecordArrayLoader[WorkoutSegment]):
    """
    Loads a workout timeline from a URL.

    Only field types and a positive Time are checked here; an empty array
    is accepted.
    """

    label = "Segment"

    def __init__(
        self,
        url: str,
        config: FetchConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(url)
        self.config = config
        self.session = session

    def _load_raw(self) -> Any:
        content = fetch_with_retry(self.source, self.config, self.session)
        return parse_json(content, self.source, what="Invalid JSON from URL")

    def _parse_item(self, index: int, item: dict[str, Any]) -> WorkoutSegment:
        for field in TIMELINE_COLUMNS:
            value = item.get(field, MISSING)
            if field in SEGMENT_NUMBER_FIELDS:
                valid = is_finite_number(value) and (field != "Time" or value > 0)
            else:
                valid = isinstance(value, str)
            if not valid:
                msg = f"Segment at index {index} has invalid '{field}' field"
                raise LoadError(msg, self.source)
        return self._build(WorkoutSegment, index, item)


def fetch_workout_details(
    url: str,
    config: FetchConfig | None = None,
    session: requests.Session | None = None,
) -> WorkoutDetails:
    """
    Fetch and parse a remote workout timeline.

    Raises:
        NetworkError: If the fetch fails.
        LoadError: If the body is not JSON or a segment is malformed.
    """
    return RemoteWorkoutDetailsLoader(url, config, session).load()
