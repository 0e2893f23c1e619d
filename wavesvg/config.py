"""
wavesvg.config - YAML config loading, profile merging, validation.

Handles loading wavesvg.yaml from the working directory (or an explicit
path), applying profile defaults, and validating all parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from wavesvg.exceptions import ParamError

MIN_RESOLUTION = 0.000001
MAX_RESOLUTION = 1.0
DEFAULT_RESOLUTION = 0.01

CONFIG_FILENAME = "wavesvg.yaml"


class RenderSettings(BaseModel):
    """Resolved settings for rendering waveforms."""

    profile: str = "preview"
    resolution: float = Field(default=DEFAULT_RESOLUTION, ge=MIN_RESOLUTION, le=MAX_RESOLUTION)
    output_suffix: str = ".svg"
    output_dir: Path | None = None

    config_path: Path | None = None

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        if v not in BUILTIN_PROFILES:
            raise ValueError(f"profile must be one of: {set(BUILTIN_PROFILES)}")
        return v

    @field_validator("output_suffix")
    @classmethod
    def validate_output_suffix(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("output_suffix must start with '.'")
        return v


BUILTIN_PROFILES: dict[str, dict[str, Any]] = {
    "preview": {"resolution": 0.01},
    "overview": {"resolution": 0.001},
    "detailed": {"resolution": 0.1},
    "full": {"resolution": 1.0},
}


def validate_resolution(resolution: float) -> float:
    """Check that *resolution* lies within [0.000001, 1.0].

    Raises:
        ParamError: If the value is out of range
    """
    if not MIN_RESOLUTION <= resolution <= MAX_RESOLUTION:
        raise ParamError(
            f"Resolution must be between {MAX_RESOLUTION:g} and {MIN_RESOLUTION:g}, got {resolution:g}"
        )
    return resolution


def load_profile(name: str) -> dict[str, Any]:
    """Return the settings for a built-in profile."""
    if name in BUILTIN_PROFILES:
        return BUILTIN_PROFILES[name].copy()
    raise ParamError(f"Unknown profile: {name}")


def merge_config(overrides: dict[str, Any], base: dict[str, Any]) -> dict[str, Any]:
    """Merge overrides onto base settings. Non-None overrides take precedence."""
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def find_config(start: Path | None = None) -> Path | None:
    """Return wavesvg.yaml in *start* (default: cwd) if it exists."""
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RenderSettings:
    """Load and validate render settings.

    Precedence, lowest first: profile defaults, config file, overrides.
    A profile named in *overrides* replaces the file's profile and its
    defaults, but explicit keys still win.

    Args:
        config_path: Explicit YAML file; when None, wavesvg.yaml in cwd is used if present
        overrides: Values from the command line (None entries are ignored)

    Raises:
        ParamError: If the file is missing/invalid or a setting is out of range
    """
    overrides = overrides or {}

    if config_path is not None and not config_path.exists():
        raise ParamError(f"Config file not found: {config_path}")
    if config_path is None:
        config_path = find_config()

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with open(config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ParamError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ParamError(f"Config file must contain a mapping: {config_path}")

    profile_name = overrides.get("profile") or raw_config.get("profile", "preview")
    profile = load_profile(profile_name)

    merged = merge_config(raw_config, profile)
    merged = merge_config(overrides, merged)
    merged["profile"] = profile_name
    merged["config_path"] = config_path

    try:
        return RenderSettings(**merged)
    except ValidationError as e:
        raise ParamError(f"Invalid settings: {e}") from e


def create_default_config(profile: str = "preview") -> dict[str, Any]:
    """Create a default config for a working directory."""
    defaults: dict[str, Any] = {"profile": profile, "output_suffix": ".svg"}
    return merge_config(defaults, load_profile(profile))


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write settings to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
