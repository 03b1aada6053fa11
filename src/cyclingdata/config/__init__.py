"""
Configuration management with typed Pydantic models.

Provides the loader and validator range tables, URL rules, fetch settings
and data file locations, loadable from YAML.
"""

from cyclingdata.config.loader import load_config
from cyclingdata.config.settings import (
    DataPathsConfig,
    FetchConfig,
    LoadLimits,
    ProjectConfig,
    SegmentRules,
    UrlRules,
)

__all__ = [
    "DataPathsConfig",
    "FetchConfig",
    "LoadLimits",
    "ProjectConfig",
    "SegmentRules",
    "UrlRules",
    "load_config",
]
