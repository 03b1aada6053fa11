"""URL checks for image, video and workout-timeline links."""

from collections.abc import Sequence
from urllib.parse import urlparse

from cyclingdata.validation.result import ValidationResult


def _domain_allowed(hostname: str, allowed_domains: Sequence[str]) -> bool:
    """Exact match or subdomain match, case-insensitive."""
    for allowed in allowed_domains:
        domain = allowed.lower()
        if hostname == domain or hostname.endswith(f".{domain}"):
            return True
    return False


def validate_url(
    url: str, allowed_domains: Sequence[str] | None = None
) -> ValidationResult:
    """
    Check that a URL is a well-formed http(s) link on an allowed domain.

    Plain http is accepted with a warning.

    Args:
        url: URL to check.
        allowed_domains: If non-empty, the hostname must equal one of these
            domains or be a subdomain of one.

    Returns:
        Validation result.
    """
    if not url or not url.strip():
        return ValidationResult.failure("URL is empty")

    stripped = url.strip()
    try:
        parsed = urlparse(stripped)
    except ValueError:
        return ValidationResult.failure(f"Invalid URL format: {url}")

    if not parsed.scheme or any(ch.isspace() for ch in stripped):
        return ValidationResult.failure(f"Invalid URL format: {url}")

    if parsed.scheme not in ("http", "https"):
        return ValidationResult.failure(
            f"Invalid protocol: {parsed.scheme} (expected http or https)"
        )

    hostname = parsed.hostname
    if not hostname:
        return ValidationResult.failure(f"Invalid URL format: {url}")

    result = ValidationResult()
    if parsed.scheme == "http":
        result.warn("URL uses insecure HTTP protocol")

    if allowed_domains and not _domain_allowed(hostname, allowed_domains):
        result.error(
            f"Domain '{hostname}' is not in allowed list: {', '.join(allowed_domains)}"
        )

    return result
