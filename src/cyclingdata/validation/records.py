"""
Checks for workout and video entries and for the lists that hold them.

Every problem is collected; nothing here raises on malformed content.
"""

from collections.abc import Callable, Sequence
from typing import Any

from cyclingdata.config.settings import DEFAULT_URL_RULES, UrlRules
from cyclingdata.utils.jsontypes import MISSING, json_type_name
from cyclingdata.validation.result import ValidationResult
from cyclingdata.validation.urls import validate_url


def _check_title(result: ValidationResult, record: dict[str, Any]) -> None:
    title = record.get("Title", MISSING)
    if not isinstance(title, str):
        result.error(f"Title must be a string, got {json_type_name(title)}")
    elif not title.strip():
        result.error("Title cannot be empty")


def _check_url_field(
    result: ValidationResult,
    record: dict[str, Any],
    field: str,
    label: str,
    allowed_domains: Sequence[str],
) -> str | None:
    """Type-check a URL field and merge its URL checks; return it if a string."""
    value = record.get(field, MISSING)
    if not isinstance(value, str):
        result.error(f"{field} must be a string, got {json_type_name(value)}")
        return None
    result.merge(validate_url(value, allowed_domains), prefix=f"{label}: ")
    return value


def validate_workout(
    workout: Any, rules: UrlRules = DEFAULT_URL_RULES
) -> ValidationResult:
    """
    Validate one workout entry.

    Args:
        workout: Decoded JSON value.
        rules: Domain allow-lists and expected extensions.

    Returns:
        Validation result.
    """
    if not isinstance(workout, dict):
        return ValidationResult.failure(
            f"Workout must be an object, got {json_type_name(workout)}"
        )

    result = ValidationResult()
    _check_title(result, workout)
    _check_url_field(result, workout, "Image", "Image URL", rules.image_domains)

    workout_url = _check_url_field(
        result, workout, "Workout_URL", "Workout_URL", rules.workout_url_domains
    )
    if workout_url and not workout_url.lower().endswith(rules.workout_url_extension):
        result.warn(f"Workout_URL does not end with {rules.workout_url_extension} extension")

    return result


def validate_video(video: Any, rules: UrlRules = DEFAULT_URL_RULES) -> ValidationResult:
    """
    Validate one video entry.

    Subtitle may be empty but must be a string.

    Args:
        video: Decoded JSON value.
        rules: Domain allow-lists and expected extensions.

    Returns:
        Validation result.
    """
    if not isinstance(video, dict):
        return ValidationResult.failure(
            f"Video must be an object, got {json_type_name(video)}"
        )

    result = ValidationResult()
    _check_title(result, video)

    subtitle = video.get("Subtitle", MISSING)
    if not isinstance(subtitle, str):
        result.error(f"Subtitle must be a string, got {json_type_name(subtitle)}")

    _check_url_field(result, video, "Image", "Image URL", rules.image_domains)

    video_url = _check_url_field(result, video, "Video", "Video URL", rules.video_domains)
    if video_url is not None and not video_url.lower().endswith(rules.video_extensions):
        result.warn(
            "Video URL does not end with a known video extension "
            f"({', '.join(rules.video_extensions)})"
        )

    return result


def _validate_list(
    items: Any,
    label: str,
    plural: str,
    check: Callable[[Any], ValidationResult],
) -> ValidationResult:
    if not isinstance(items, list):
        return ValidationResult.failure(
            f"{plural} must be an array, got {json_type_name(items)}"
        )

    result = ValidationResult()
    if not items:
        result.warn(f"{plural} array is empty")

    for index, item in enumerate(items):
        result.merge(check(item), prefix=f"{label} {index}: ")
    return result


def validate_workouts_list(
    workouts: Any, rules: UrlRules = DEFAULT_URL_RULES
) -> ValidationResult:
    """Validate every workout in a list, prefixing messages with the index."""
    return _validate_list(
        workouts, "Workout", "Workouts", lambda item: validate_workout(item, rules)
    )


def validate_videos_list(
    videos: Any, rules: UrlRules = DEFAULT_URL_RULES
) -> ValidationResult:
    """Validate every video in a list, prefixing messages with the index."""
    return _validate_list(
        videos, "Video", "Videos", lambda item: validate_video(item, rules)
    )
