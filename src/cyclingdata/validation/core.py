"""
Core validation logic for data files.

Loads each configured JSON file and runs the matching validator over it.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

from cyclingdata.config.settings import ProjectConfig
from cyclingdata.exceptions import LoadError
from cyclingdata.ingestion.files import load_json_file
from cyclingdata.utils.logging import get_logger, log_context
from cyclingdata.validation.records import validate_videos_list, validate_workouts_list
from cyclingdata.validation.result import ValidationResult
from cyclingdata.validation.segments import validate_workout_details

log = get_logger(__name__)

Validator = Callable[[Any], ValidationResult]


@dataclass
class FileReport:
    """Result of validating a single data file."""

    file: Path
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of warnings."""
        return len(self.warnings)


def validate_file(file_path: Path, validator: Validator) -> FileReport:
    """
    Load a JSON file and validate its content.

    Load failures become an invalid report instead of propagating.

    Args:
        file_path: Path to the JSON file.
        validator: Accumulating validator for the decoded document.

    Returns:
        FileReport for the file.
    """
    with log_context(file=str(file_path)):
        try:
            data = load_json_file(file_path)
        except LoadError as e:
            log.error("Load error", error=str(e))
            return FileReport(file=file_path, valid=False, errors=[f"Load error: {e}"])

        try:
            result = validator(data)
        except Exception as e:
            # Validators should not raise; report it against the file anyway
            log.error("Validator raised", error=f"{type(e).__name__}: {e!s}")
            return FileReport(
                file=file_path, valid=False, errors=[f"Unexpected error: {e}"]
            )

        if result.valid:
            log.info("Validation passed", warnings=len(result.warnings))
        else:
            log.error(
                "Validation failed",
                errors=len(result.errors),
                warnings=len(result.warnings),
            )
        return FileReport(
            file=file_path,
            valid=result.valid,
            errors=list(result.errors),
            warnings=list(result.warnings),
        )


class ValidationRunner:
    """
    Runs validation for all configured data files.

    Checks workouts.json, videos.json and every configured workout
    timeline, in that order.
    """

    def __init__(self, config: ProjectConfig) -> None:
        """
        Initialize validation runner.

        Args:
            config: Project configuration with data paths and rules.
        """
        self.config = config

    def targets(self) -> list[tuple[Path, Validator]]:
        """List (file, validator) pairs in reporting order."""
        paths = self.config.data_paths
        url_rules = self.config.url_rules
        details_validator = partial(
            validate_workout_details, rules=self.config.segment_rules
        )
        return [
            (paths.resolve("workouts"), partial(validate_workouts_list, rules=url_rules)),
            (paths.resolve("videos"), partial(validate_videos_list, rules=url_rules)),
            *((path, details_validator) for path in paths.details_paths()),
        ]

    def run(self) -> list[FileReport]:
        """
        Validate every configured file.

        Returns:
            One report per file.
        """
        return [validate_file(path, validator) for path, validator in self.targets()]
