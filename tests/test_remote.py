"""Tests for HTTP fetching with retries."""

import json
from collections.abc import Iterator
from typing import Any

import pytest
import requests

from cyclingdata.config import FetchConfig
from cyclingdata.exceptions import LoadError, NetworkError
from cyclingdata.ingestion import fetch_with_retry, fetch_workout_details
from cyclingdata.ingestion import remote

URL = "https://raw.githubusercontent.com/org/data/main/workoutdetails/test.json"


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        text: str = "",
        reason: str = "OK",
        chunks: list[bytes] | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.encoding = "utf-8"
        self.chunks = chunks if chunks is not None else [text.encode("utf-8")]
        self.closed = False

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed = True

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        yield from self.chunks


class FakeSession:
    """Replays queued outcomes; the last one repeats once the queue runs dry."""

    def __init__(self, *outcomes: FakeResponse | Exception) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []

    def get(
        self, url: str, headers: dict[str, str], timeout: float, stream: bool = False
    ) -> FakeResponse:
        self.calls.append(
            {"url": url, "headers": headers, "timeout": timeout, "stream": stream}
        )
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record backoff sleeps instead of waiting."""
    recorded: list[float] = []
    monkeypatch.setattr(remote.time, "sleep", recorded.append)
    return recorded


class TestFetchWithRetry:
    """Tests for fetch_with_retry."""

    def test_success(self, sleeps: list[float]) -> None:
        """Test a 2xx body is returned after one attempt."""
        session = FakeSession(FakeResponse(200, "[]"))
        assert fetch_with_retry(URL, session=session) == "[]"
        assert len(session.calls) == 1
        assert sleeps == []

    def test_request_headers_and_timeout(self, sleeps: list[float]) -> None:
        """Test the User-Agent header and per-attempt timeout are sent."""
        session = FakeSession(FakeResponse(204, ""))
        fetch_with_retry(URL, FetchConfig(timeout_ms=2500), session=session)

        call = session.calls[0]
        assert call["headers"] == {"User-Agent": "CyclingDataLoader/1.0"}
        assert call["timeout"] == 2.5
        assert call["stream"] is True

    def test_not_found_is_not_retried(self, sleeps: list[float]) -> None:
        """Test a 404 aborts after a single attempt."""
        session = FakeSession(FakeResponse(404, reason="Not Found"))

        with pytest.raises(NetworkError, match="HTTP error 404") as exc_info:
            fetch_with_retry(URL, session=session)

        assert exc_info.value.status_code == 404
        assert len(session.calls) == 1
        assert sleeps == []

    @pytest.mark.parametrize("status", [400, 401, 403, 405, 422])
    def test_other_non_retriable_statuses(self, status: int, sleeps: list[float]) -> None:
        """Test every non-retriable status stops immediately."""
        session = FakeSession(FakeResponse(status, reason="Client Error"))
        with pytest.raises(NetworkError):
            fetch_with_retry(URL, session=session)
        assert len(session.calls) == 1

    def test_server_error_exhausts_retries(self, sleeps: list[float]) -> None:
        """Test 5xx responses are retried with exponential backoff."""
        session = FakeSession(FakeResponse(503, reason="Service Unavailable"))

        with pytest.raises(NetworkError, match="Failed after 4 attempts") as exc_info:
            fetch_with_retry(URL, session=session)

        assert len(session.calls) == 4
        assert sleeps == [1.0, 2.0, 4.0]
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, NetworkError)
        assert exc_info.value.cause.status_code == 503

    def test_recovers_after_transient_failures(self, sleeps: list[float]) -> None:
        """Test a timeout then a 500 then success returns the body."""
        session = FakeSession(
            requests.Timeout("read timed out"),
            FakeResponse(500, reason="Internal Server Error"),
            FakeResponse(200, '{"ok": true}'),
        )

        assert fetch_with_retry(URL, session=session) == '{"ok": true}'
        assert len(session.calls) == 3
        assert sleeps == [1.0, 2.0]

    def test_connection_error_wrapped(self, sleeps: list[float]) -> None:
        """Test transport errors are wrapped once retries run out."""
        error = requests.ConnectionError("connection refused")
        session = FakeSession(error)
        config = FetchConfig(retries=1, retry_delay_ms=250)

        with pytest.raises(NetworkError, match="Failed after 2 attempts") as exc_info:
            fetch_with_retry(URL, config, session=session)

        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error
        assert sleeps == [0.25]

    def test_zero_retries(self, sleeps: list[float]) -> None:
        """Test retries=0 makes a single attempt."""
        session = FakeSession(FakeResponse(502, reason="Bad Gateway"))
        with pytest.raises(NetworkError, match="Failed after 1 attempts"):
            fetch_with_retry(URL, FetchConfig(retries=0), session=session)
        assert len(session.calls) == 1

    def test_slow_body_hits_deadline(
        self, monkeypatch: pytest.MonkeyPatch, sleeps: list[float]
    ) -> None:
        """Test a body still arriving after timeout_ms aborts the attempt."""
        clock = iter([0.0, 0.5, 3.0])
        monkeypatch.setattr(remote, "_monotonic", lambda: next(clock))
        response = FakeResponse(200, chunks=[b"[", b"]"])
        session = FakeSession(response)

        with pytest.raises(NetworkError, match="Failed after 1 attempts") as exc_info:
            fetch_with_retry(URL, FetchConfig(timeout_ms=1000, retries=0), session=session)

        assert isinstance(exc_info.value.cause, requests.Timeout)
        assert "timed out after 1000 ms" in str(exc_info.value)
        assert response.closed is True

    def test_chunked_body_joined(self, sleeps: list[float]) -> None:
        """Test a character split across chunks is decoded intact."""
        body = "[\"Bergsprint \u00fcber 5 min\"]".encode()
        split = body.index(b"\xc3") + 1
        session = FakeSession(FakeResponse(200, chunks=[body[:split], body[split:]]))
        assert fetch_with_retry(URL, session=session) == "[\"Bergsprint \u00fcber 5 min\"]"

    @pytest.mark.parametrize(
        ("url", "message"),
        [
            ("ftp://example.com/data.json", "Unsupported protocol: ftp"),
            ("file:///etc/passwd", "Unsupported protocol: file"),
            ("not a url", "Invalid URL format"),
            ("https://", "Invalid URL format"),
        ],
    )
    def test_rejected_urls(self, url: str, message: str, sleeps: list[float]) -> None:
        """Test bad URLs fail before any request."""
        session = FakeSession(FakeResponse(200, "[]"))
        with pytest.raises(NetworkError, match=message) as exc_info:
            fetch_with_retry(url, session=session)
        assert exc_info.value.url == url
        assert session.calls == []


class TestFetchWorkoutDetails:
    """Tests for fetch_workout_details."""

    def test_valid(self, sample_segments: list[dict[str, Any]], sleeps: list[float]) -> None:
        """Test a remote timeline is parsed into segments."""
        session = FakeSession(FakeResponse(200, json.dumps(sample_segments)))
        segments = fetch_workout_details(URL, session=session)

        assert len(segments) == 4
        assert segments[0].activity == "Warm-up"

    def test_invalid_json(self, sleeps: list[float]) -> None:
        """Test a non-JSON body raises LoadError with the URL."""
        session = FakeSession(FakeResponse(200, "<html>"))
        with pytest.raises(LoadError, match="Invalid JSON from URL") as exc_info:
            fetch_workout_details(URL, session=session)
        assert exc_info.value.source == URL

    def test_empty_array_accepted(self, sleeps: list[float]) -> None:
        """Test the remote path accepts an empty timeline."""
        session = FakeSession(FakeResponse(200, "[]"))
        assert fetch_workout_details(URL, session=session) == []

    def test_no_range_checks(
        self, sample_segments: list[dict[str, Any]], sleeps: list[float]
    ) -> None:
        """Test resistance and cadence are only type-checked remotely."""
        sample_segments[1]["Resistance"] = 99
        sample_segments[1]["Cadence"] = 400
        session = FakeSession(FakeResponse(200, json.dumps(sample_segments)))

        segments = fetch_workout_details(URL, session=session)
        assert segments[1].resistance == 99

    def test_non_positive_time(
        self, sample_segments: list[dict[str, Any]], sleeps: list[float]
    ) -> None:
        """Test Time must still be positive."""
        sample_segments[3]["Time"] = 0
        session = FakeSession(FakeResponse(200, json.dumps(sample_segments)))
        with pytest.raises(LoadError, match="index 3 has invalid 'Time' field"):
            fetch_workout_details(URL, session=session)

    def test_mistyped_field(
        self, sample_segments: list[dict[str, Any]], sleeps: list[float]
    ) -> None:
        """Test a string Stroke instruction is required."""
        sample_segments[0]["Stroke instruction"] = None
        session = FakeSession(FakeResponse(200, json.dumps(sample_segments)))
        with pytest.raises(LoadError, match="'Stroke instruction' field"):
            fetch_workout_details(URL, session=session)

    def test_not_array(self, sleeps: list[float]) -> None:
        """Test an object body is rejected."""
        session = FakeSession(FakeResponse(200, "{}"))
        with pytest.raises(LoadError, match="Expected array but got object"):
            fetch_workout_details(URL, session=session)

    def test_network_error_propagates(self, sleeps: list[float]) -> None:
        """Test fetch failures surface as NetworkError."""
        session = FakeSession(FakeResponse(404, reason="Not Found"))
        with pytest.raises(NetworkError) as exc_info:
            fetch_workout_details(URL, session=session)
        assert exc_info.value.status_code == 404

    def test_oversized_integer(
        self, sample_segments: list[dict[str, Any]], sleeps: list[float]
    ) -> None:
        """Test an integer too large for a float is a LoadError naming the field."""
        sample_segments[2]["Cadence"] = 10**400
        session = FakeSession(FakeResponse(200, json.dumps(sample_segments)))
        with pytest.raises(LoadError, match="index 2 has invalid 'Cadence' field"):
            fetch_workout_details(URL, session=session)
