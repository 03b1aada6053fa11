"""
Typed configuration models using Pydantic.

Numeric ranges, categorical whitelists, domain allow-lists and network
settings are plain configuration data defined here; the loader and the
validator each read their own table.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Known activity names as they appear in published workout timelines.
# "Satnding Jog" is a misspelling present in existing data files.
KNOWN_ACTIVITIES: tuple[str, ...] = (
    "Warm-up",
    "Intervals",
    "Recovery",
    "Cool-down",
    "Bonus Interval",
    "Standing Jog",
    "Satnding Jog",
    "Winding Streets",
    "Seated Climb",
    "Sprint",
    "Hill Climb",
    "Endurance",
)

DEFAULT_WORKOUT_DETAILS: tuple[str, ...] = (
    "30_Minute_Workout.json",
    "Greek_City_45_Min.json",
    "10_Minute_High_Intensity.json",
    "test.json",
)


def _check_upper_bound(lower_field: str, v: float, info: Any) -> float:
    """Reject an upper bound that is below its paired lower bound."""
    if lower_field in info.data and v < info.data[lower_field]:
        msg = f"{info.field_name} must be >= {lower_field} ({info.data[lower_field]})"
        raise ValueError(msg)
    return v


class FetchConfig(BaseModel):
    """HTTP fetch settings: per-attempt deadline and retry schedule."""

    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(default=30000, gt=0, description="Per-attempt timeout")
    retries: int = Field(default=3, ge=0, description="Retries after the first attempt")
    retry_delay_ms: int = Field(
        default=1000, ge=0, description="Base delay, doubled after every attempt"
    )
    user_agent: str = Field(default="CyclingDataLoader/1.0")
    non_retriable_statuses: frozenset[int] = Field(
        default=frozenset({400, 401, 403, 404, 405, 422}),
        description="HTTP status codes that abort retrying immediately",
    )

    @property
    def timeout_seconds(self) -> float:
        """Per-attempt timeout in seconds, as expected by requests."""
        return self.timeout_ms / 1000

    @property
    def max_attempts(self) -> int:
        """Total number of attempts including the first one."""
        return self.retries + 1

    def backoff_ms(self, attempt: int) -> int:
        """Delay before the attempt following ``attempt`` (0-based)."""
        return self.retry_delay_ms * 2**attempt


class LoadLimits(BaseModel):
    """Range table applied by the loader when reading segment files."""

    model_config = ConfigDict(frozen=True)

    min_resistance: float = 0
    max_resistance: float = 20
    min_cadence: float = 0
    max_cadence: float = 150

    @field_validator("max_resistance")
    @classmethod
    def validate_resistance_range(cls, v: float, info: Any) -> float:
        """Ensure the resistance range is not inverted."""
        return _check_upper_bound("min_resistance", v, info)

    @field_validator("max_cadence")
    @classmethod
    def validate_cadence_range(cls, v: float, info: Any) -> float:
        """Ensure the cadence range is not inverted."""
        return _check_upper_bound("min_cadence", v, info)


class SegmentRules(BaseModel):
    """Range table and thresholds applied by the segment validator."""

    model_config = ConfigDict(frozen=True)

    min_time: float = Field(default=1, description="Segments shorter than this fail")
    max_time: float = Field(default=60, description="Longer segments only warn")
    min_resistance: float = 1
    max_resistance: float = 20
    min_cadence: float = 30
    max_cadence: float = 150
    max_elapsed_time: float = Field(
        default=120, description="Typical upper bound for a whole workout"
    )
    known_activities: tuple[str, ...] = KNOWN_ACTIVITIES
    warm_up_activity: str = "Warm-up"
    cool_down_activity: str = "Cool-down"

    @field_validator("max_time")
    @classmethod
    def validate_time_range(cls, v: float, info: Any) -> float:
        """Ensure the time range is not inverted."""
        return _check_upper_bound("min_time", v, info)

    @field_validator("max_resistance")
    @classmethod
    def validate_resistance_range(cls, v: float, info: Any) -> float:
        """Ensure the resistance range is not inverted."""
        return _check_upper_bound("min_resistance", v, info)

    @field_validator("max_cadence")
    @classmethod
    def validate_cadence_range(cls, v: float, info: Any) -> float:
        """Ensure the cadence range is not inverted."""
        return _check_upper_bound("min_cadence", v, info)


class UrlRules(BaseModel):
    """Domain allow-lists and expected file extensions for record URLs."""

    model_config = ConfigDict(frozen=True)

    image_domains: tuple[str, ...] = (
        "amazonaws.com",
        "github.com",
        "githubusercontent.com",
    )
    workout_url_domains: tuple[str, ...] = (
        "github.com",
        "githubusercontent.com",
        "raw.githubusercontent.com",
    )
    video_domains: tuple[str, ...] = ("amazonaws.com",)
    video_extensions: tuple[str, ...] = (".mp4", ".webm", ".mov", ".avi")
    workout_url_extension: str = ".json"


class DataPathsConfig(BaseModel):
    """Data file locations.

    All paths are relative to data_root. Use resolve() to get full paths.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(default=Path("."), description="Root of the data checkout")
    workouts: Path = Path("workouts.json")
    videos: Path = Path("videos.json")
    details_dir: Path = Path("workoutdetails")
    workout_details: tuple[Path, ...] = Field(
        default=tuple(Path(name) for name in DEFAULT_WORKOUT_DETAILS),
        description="Workout timeline files, relative to details_dir",
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a configured file path against data_root."""
        rel_path = getattr(self, path_attr, None)
        if not isinstance(rel_path, Path):
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path

    def details_paths(self) -> list[Path]:
        """Full paths of every configured workout timeline file."""
        return [self.data_root / self.details_dir / name for name in self.workout_details]


class ProjectConfig(BaseModel):
    """Complete configuration for loading and validating a data checkout."""

    model_config = ConfigDict(frozen=True)

    data_paths: DataPathsConfig = Field(default_factory=DataPathsConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    load_limits: LoadLimits = Field(default_factory=LoadLimits)
    segment_rules: SegmentRules = Field(default_factory=SegmentRules)
    url_rules: UrlRules = Field(default_factory=UrlRules)


DEFAULT_FETCH_CONFIG = FetchConfig()
DEFAULT_LOAD_LIMITS = LoadLimits()
DEFAULT_SEGMENT_RULES = SegmentRules()
DEFAULT_URL_RULES = UrlRules()
