"""
Checks for workout timelines.

A timeline is valid when every segment passes its field checks and each
segment's Elapsed Time equals the running sum of Time up to and including
that segment. The running sum is built from each segment's own Time, so
one wrong Elapsed Time is reported once rather than on every later
segment.
"""

from typing import Any

from cyclingdata.config.settings import DEFAULT_SEGMENT_RULES, SegmentRules
from cyclingdata.utils.jsontypes import MISSING, is_finite_number, is_number, json_type_name
from cyclingdata.validation.result import ValidationResult


def _finite_number(
    result: ValidationResult, segment: dict[str, Any], field: str, prefix: str
) -> float | None:
    """Return the field if it is a finite number, recording an error otherwise."""
    value = segment.get(field, MISSING)
    if not is_number(value):
        result.error(f"{prefix}{field} must be a number, got {json_type_name(value)}")
        return None
    if not is_finite_number(value):
        result.error(f"{prefix}{field} must be a finite number")
        return None
    return value


def _check_range(
    result: ValidationResult,
    value: float | None,
    field: str,
    low: float,
    high: float,
    prefix: str,
) -> None:
    if value is None:
        return
    if value < low:
        result.error(f"{prefix}{field} {value} is less than minimum {low:g}")
    elif value > high:
        result.error(f"{prefix}{field} {value} exceeds maximum {high:g}")


def validate_segment(
    segment: Any,
    index: int,
    previous_elapsed_time: float = 0,
    rules: SegmentRules = DEFAULT_SEGMENT_RULES,
) -> ValidationResult:
    """
    Validate one workout segment.

    Args:
        segment: Decoded JSON value.
        index: Position in the timeline, used in messages.
        previous_elapsed_time: Sum of Time over all earlier segments.
        rules: Validator range table and activity whitelist.

    Returns:
        Validation result with messages prefixed ``Segment <index>: ``.
    """
    if not isinstance(segment, dict):
        return ValidationResult.failure(
            f"Segment {index} must be an object, got {json_type_name(segment)}"
        )

    result = ValidationResult()
    prefix = f"Segment {index}: "

    time = _finite_number(result, segment, "Time", prefix)
    if time is not None:
        if time < rules.min_time:
            result.error(f"{prefix}Time {time} is less than minimum {rules.min_time:g}")
        elif time > rules.max_time:
            result.warn(f"{prefix}Time {time} exceeds typical maximum {rules.max_time:g}")

    activity = segment.get("Activity", MISSING)
    if not isinstance(activity, str):
        result.error(f"{prefix}Activity must be a string, got {json_type_name(activity)}")
    elif not activity.strip():
        result.error(f"{prefix}Activity cannot be empty")
    elif activity not in rules.known_activities:
        result.warn(f"{prefix}Activity '{activity}' is not a recognized activity type")

    resistance = _finite_number(result, segment, "Resistance", prefix)
    _check_range(
        result, resistance, "Resistance", rules.min_resistance, rules.max_resistance, prefix
    )

    cadence = _finite_number(result, segment, "Cadence", prefix)
    _check_range(result, cadence, "Cadence", rules.min_cadence, rules.max_cadence, prefix)

    stroke = segment.get("Stroke instruction", MISSING)
    if not isinstance(stroke, str):
        result.error(
            f"{prefix}Stroke instruction must be a string, got {json_type_name(stroke)}"
        )

    elapsed = _finite_number(result, segment, "Elapsed Time", prefix)
    if elapsed is not None:
        if elapsed < 0:
            result.error(f"{prefix}Elapsed Time {elapsed} cannot be negative")
        else:
            if elapsed > rules.max_elapsed_time:
                result.warn(
                    f"{prefix}Elapsed Time {elapsed} exceeds typical workout duration"
                )
            if time is not None:
                expected = previous_elapsed_time + time
                if elapsed != expected:
                    result.error(
                        f"{prefix}Elapsed Time {elapsed} does not match expected {expected} "
                        f"(previous: {previous_elapsed_time} + current Time: {time})"
                    )

    return result


def validate_workout_details(
    workout_details: Any, rules: SegmentRules = DEFAULT_SEGMENT_RULES
) -> ValidationResult:
    """
    Validate a whole workout timeline.

    Besides the per-segment checks, warns when the timeline does not start
    with a warm-up or end with a cool-down.

    Args:
        workout_details: Decoded JSON value, expected to be a list of segments.
        rules: Validator range table and activity whitelist.

    Returns:
        Validation result with all errors and warnings.
    """
    if not isinstance(workout_details, list):
        return ValidationResult.failure(
            f"Workout details must be an array, got {json_type_name(workout_details)}"
        )

    if not workout_details:
        return ValidationResult.failure("Workout details array is empty")

    result = ValidationResult()
    previous_elapsed_time: float = 0
    for index, segment in enumerate(workout_details):
        result.merge(validate_segment(segment, index, previous_elapsed_time, rules))
        if isinstance(segment, dict) and is_finite_number(segment.get("Time")):
            previous_elapsed_time += segment["Time"]

    first = _activity(workout_details[0])
    if first is not None and first != rules.warm_up_activity:
        result.warn(
            f"Workout does not start with a {rules.warm_up_activity} (starts with '{first}')"
        )

    last = _activity(workout_details[-1])
    if last is not None and last != rules.cool_down_activity:
        result.warn(
            f"Workout does not end with a {rules.cool_down_activity} (ends with '{last}')"
        )

    return result


def _activity(segment: Any) -> str | None:
    if isinstance(segment, dict) and isinstance(segment.get("Activity"), str):
        return segment["Activity"]
    return None
