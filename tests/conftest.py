"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_segments() -> list[dict[str, Any]]:
    """A consistent 25-minute timeline: Elapsed Time is the running sum of Time."""
    return [
        {
            "Time": 5,
            "Activity": "Warm-up",
            "Resistance": 5,
            "Cadence": 80,
            "Stroke instruction": "",
            "Elapsed Time": 5,
        },
        {
            "Time": 10,
            "Activity": "Intervals",
            "Resistance": 12,
            "Cadence": 95,
            "Stroke instruction": "Push hard on the downstroke",
            "Elapsed Time": 15,
        },
        {
            "Time": 5,
            "Activity": "Recovery",
            "Resistance": 4,
            "Cadence": 70,
            "Stroke instruction": "",
            "Elapsed Time": 20,
        },
        {
            "Time": 5,
            "Activity": "Cool-down",
            "Resistance": 3,
            "Cadence": 65,
            "Stroke instruction": "Spin easy",
            "Elapsed Time": 25,
        },
    ]


@pytest.fixture
def sample_workouts() -> list[dict[str, Any]]:
    """Workout entries that pass validation without warnings."""
    return [
        {
            "Title": "30 Minute Workout",
            "Image": "https://bucket.s3.amazonaws.com/images/30min.png",
            "Workout_URL": "https://raw.githubusercontent.com/org/data/main/workoutdetails/30_Minute_Workout.json",
        },
        {
            "Title": "Greek City 45 Min",
            "Image": "https://github.com/org/data/raw/main/images/greek.png",
            "Workout_URL": "https://raw.githubusercontent.com/org/data/main/workoutdetails/Greek_City_45_Min.json",
        },
    ]


@pytest.fixture
def sample_videos() -> list[dict[str, Any]]:
    """Video entries that pass validation without warnings."""
    return [
        {
            "Title": "Climbing Technique",
            "Subtitle": "",
            "Image": "https://bucket.s3.amazonaws.com/images/climb.png",
            "Video": "https://bucket.s3.amazonaws.com/videos/climb.mp4",
        },
    ]


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Return a helper that writes a JSON document under tmp_path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_checkout(
    tmp_path: Path,
    write_json: Callable[[str, Any], Path],
    sample_workouts: list[dict[str, Any]],
    sample_videos: list[dict[str, Any]],
    sample_segments: list[dict[str, Any]],
) -> Path:
    """A data root with every default file present and valid."""
    write_json("workouts.json", sample_workouts)
    write_json("videos.json", sample_videos)
    for name in (
        "30_Minute_Workout.json",
        "Greek_City_45_Min.json",
        "10_Minute_High_Intensity.json",
        "test.json",
    ):
        write_json(f"workoutdetails/{name}", sample_segments)
    return tmp_path
