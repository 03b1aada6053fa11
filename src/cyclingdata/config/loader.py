"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Every section is optional; an empty file yields the built-in defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from cyclingdata.config.settings import (
    DataPathsConfig,
    FetchConfig,
    LoadLimits,
    ProjectConfig,
    SegmentRules,
    UrlRules,
)


# ${VAR} or ${VAR:default}
_ENV_VAR = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _expand_env(value: str) -> str:
    """Replace ${VAR} references; unset variables without a default become ''."""
    return _ENV_VAR.sub(
        lambda m: os.environ.get(m.group(1), m.group(2) if m.group(2) is not None else ""),
        value,
    )


def _expand_tree(node: Any) -> Any:
    """Expand env references in every string of a parsed YAML tree."""
    if isinstance(node, str):
        return _expand_env(node)
    if isinstance(node, dict):
        return {key: _expand_tree(child) for key, child in node.items()}
    if isinstance(node, list):
        return [_expand_tree(child) for child in node]
    return node


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _section(merged: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, rejecting non-mapping values."""
    section = merged.get(name) or {}
    if not isinstance(section, dict):
        msg = f"Config section '{name}' must be a mapping, got {type(section).__name__}"
        raise ValueError(msg)
    return section


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _expand_tree(data) if data else {}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> ProjectConfig:
    """
    Load project configuration from YAML file(s).

    Recognised sections: ``data``, ``fetch``, ``load_limits``,
    ``segment_rules`` and ``urls``. Missing sections use defaults.

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ProjectConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    data_section = dict(_section(merged, "data"))
    if "root" in data_section:
        data_section["data_root"] = data_section.pop("root")
    data_paths = DataPathsConfig.model_validate(data_section)

    return ProjectConfig(
        data_paths=data_paths,
        fetch=FetchConfig.model_validate(_section(merged, "fetch")),
        load_limits=LoadLimits.model_validate(_section(merged, "load_limits")),
        segment_rules=SegmentRules.model_validate(_section(merged, "segment_rules")),
        url_rules=UrlRules.model_validate(_section(merged, "urls")),
    )
