"""buildbench CLI configuration management.

Loads configuration from TOML files with environment variable overrides
(``BUILDBENCH_`` prefix).  Uses :mod:`tomllib` on Python 3.11+.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from buildbench.cli.errors import ConfigError

# ---------------------------------------------------------------------------
# Default paths
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_DIR = ".buildbench"
DEFAULT_CONFIG_FILE = "config.toml"

PROFILER_SECTION = "honest_profiler"

# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class HonestProfilerArgs(BaseModel):
    """Settings for running builds under Honest Profiler."""

    model_config = ConfigDict(frozen=True)

    hp_home_dir: Path
    fg_home_dir: Path
    log_path: Path
    port: int = Field(default=18642, gt=0, le=65535)
    interval: int = Field(default=7, gt=0, description="Sampling interval (ms)")


class BuildBenchConfig(BaseModel):
    """Application configuration with sensible defaults.

    Top-level fields can be overridden via environment variables with the
    ``BUILDBENCH_`` prefix.  For example ``BUILDBENCH_DEFAULT_FORMAT=long``.
    """

    project_dir: Path = Field(default_factory=lambda: Path.cwd())
    default_format: str = "wide"
    output_file: Path = Path("benchmark.csv")
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    honest_profiler: Optional[HonestProfilerArgs] = None

    model_config = {"extra": "ignore"}


# ---------------------------------------------------------------------------
# Loader helpers
# ---------------------------------------------------------------------------


def _apply_env_overrides(data: dict) -> dict:
    """Apply BUILDBENCH_ environment variable overrides to *data*."""
    prefix = "BUILDBENCH_"
    field_names = set(BuildBenchConfig.model_fields.keys()) - {PROFILER_SECTION}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            field = key[len(prefix):].lower()
            if field in field_names:
                data[field] = value
    return data


def load_config(config_path: Path | None = None, project_dir: Path | None = None) -> BuildBenchConfig:
    """Load configuration from a TOML file with env-var overrides.

    Parameters
    ----------
    config_path:
        Explicit path to a TOML file.  When *None*, looks for
        ``<project_dir>/.buildbench/config.toml``.
    project_dir:
        Project root directory.  Defaults to :func:`Path.cwd`.

    Returns
    -------
    BuildBenchConfig
        Parsed and validated configuration.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or a value fails validation.
    """
    project = project_dir or Path.cwd()
    path = config_path or (project / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE)

    data: dict = {}
    if path.exists():
        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc

    # Flatten nested TOML sections, keeping the profiler section intact
    flat: dict = {}
    for k, v in data.items():
        if isinstance(v, dict) and k != PROFILER_SECTION:
            flat.update(v)
        else:
            flat[k] = v

    flat.setdefault("project_dir", str(project))

    flat = _apply_env_overrides(flat)
    try:
        return BuildBenchConfig(**flat)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def default_config_toml() -> str:
    """Return default configuration as a TOML string."""
    return """\
# buildbench configuration

[general]
log_level = "INFO"

[report]
default_format = "wide"
output_file = "benchmark.csv"

# [honest_profiler]
# hp_home_dir = "/opt/honest-profiler"
# fg_home_dir = "/opt/FlameGraph"
# log_path = "build/honest-profiler.hpl"
# port = 18642
# interval = 7
"""
