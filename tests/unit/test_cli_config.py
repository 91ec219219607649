"""Unit tests for buildbench.cli.config."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from buildbench.cli.config import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_CONFIG_FILE,
    BuildBenchConfig,
    HonestProfilerArgs,
    _apply_env_overrides,
    default_config_toml,
    load_config,
)
from buildbench.cli.errors import ConfigError


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class TestBuildBenchConfig:
    """Tests for the BuildBenchConfig pydantic model."""

    def test_defaults(self) -> None:
        cfg = BuildBenchConfig()
        assert cfg.default_format == "wide"
        assert cfg.output_file == Path("benchmark.csv")
        assert cfg.log_level == "INFO"
        assert cfg.log_file is None
        assert cfg.honest_profiler is None
        assert isinstance(cfg.project_dir, Path)

    def test_extra_fields_ignored(self) -> None:
        cfg = BuildBenchConfig(unknown_field="value")
        assert not hasattr(cfg, "unknown_field")

    def test_project_dir_is_path(self) -> None:
        cfg = BuildBenchConfig(project_dir="/tmp/test")
        assert isinstance(cfg.project_dir, Path)


class TestHonestProfilerArgs:
    """Tests for the HonestProfilerArgs value object."""

    def _args(self, **overrides) -> HonestProfilerArgs:
        values = {
            "hp_home_dir": "/opt/hp",
            "fg_home_dir": "/opt/fg",
            "log_path": "build/hp.hpl",
        }
        values.update(overrides)
        return HonestProfilerArgs(**values)

    def test_fields(self) -> None:
        args = self._args(port=9000, interval=5)
        assert args.hp_home_dir == Path("/opt/hp")
        assert args.fg_home_dir == Path("/opt/fg")
        assert args.log_path == Path("build/hp.hpl")
        assert args.port == 9000
        assert args.interval == 5

    def test_defaults(self) -> None:
        args = self._args()
        assert args.port == 18642
        assert args.interval == 7

    def test_invalid_port(self) -> None:
        with pytest.raises(ValidationError):
            self._args(port=70000)

    def test_frozen(self) -> None:
        args = self._args()
        with pytest.raises(ValidationError):
            args.port = 1  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Environment override tests
# ---------------------------------------------------------------------------


class TestEnvOverrides:
    def test_apply_known_field(self) -> None:
        with patch.dict(os.environ, {"BUILDBENCH_DEFAULT_FORMAT": "long"}):
            result = _apply_env_overrides({})
        assert result["default_format"] == "long"

    def test_ignore_unknown_field(self) -> None:
        with patch.dict(os.environ, {"BUILDBENCH_UNKNOWN_THING": "val"}):
            result = _apply_env_overrides({})
        assert "unknown_thing" not in result

    def test_profiler_section_not_overridable(self) -> None:
        with patch.dict(os.environ, {"BUILDBENCH_HONEST_PROFILER": "x"}):
            result = _apply_env_overrides({})
        assert "honest_profiler" not in result

    def test_env_overrides_existing(self) -> None:
        data = {"log_level": "INFO"}
        with patch.dict(os.environ, {"BUILDBENCH_LOG_LEVEL": "DEBUG"}):
            result = _apply_env_overrides(data)
        assert result["log_level"] == "DEBUG"


# ---------------------------------------------------------------------------
# load_config tests
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_load_no_file(self, tmp_path: Path) -> None:
        """Returns defaults when no config file exists."""
        cfg = load_config(project_dir=tmp_path)
        assert cfg.default_format == "wide"
        assert cfg.project_dir == tmp_path

    def test_load_from_toml(self, tmp_path: Path) -> None:
        config_dir = tmp_path / DEFAULT_CONFIG_DIR
        config_dir.mkdir()
        (config_dir / DEFAULT_CONFIG_FILE).write_text(
            '[report]\ndefault_format = "long"\noutput_file = "out/long.csv"\n'
        )
        cfg = load_config(project_dir=tmp_path)
        assert cfg.default_format == "long"
        assert cfg.output_file == Path("out/long.csv")

    def test_load_explicit_path(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text('log_level = "WARNING"\n')
        cfg = load_config(config_path=config_file, project_dir=tmp_path)
        assert cfg.log_level == "WARNING"

    def test_profiler_section(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            "[honest_profiler]\n"
            'hp_home_dir = "/opt/hp"\n'
            'fg_home_dir = "/opt/fg"\n'
            'log_path = "hp.hpl"\n'
            "port = 9999\n"
        )
        cfg = load_config(config_path=config_file, project_dir=tmp_path)
        assert cfg.honest_profiler is not None
        assert cfg.honest_profiler.port == 9999
        assert cfg.honest_profiler.log_path == Path("hp.hpl")

    def test_env_override_with_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[report]\ndefault_format = "wide"\n')
        with patch.dict(os.environ, {"BUILDBENCH_DEFAULT_FORMAT": "long"}):
            cfg = load_config(config_path=config_file, project_dir=tmp_path)
        assert cfg.default_format == "long"

    def test_invalid_toml_raises_config_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.toml"
        config_file.write_text("this is = = not toml\n")
        with pytest.raises(ConfigError):
            load_config(config_path=config_file, project_dir=tmp_path)

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[honest_profiler]\nhp_home_dir = "/opt/hp"\n')
        with pytest.raises(ConfigError):
            load_config(config_path=config_file, project_dir=tmp_path)


# ---------------------------------------------------------------------------
# default_config_toml
# ---------------------------------------------------------------------------


class TestDefaultConfigToml:
    def test_contains_format(self) -> None:
        assert "default_format" in default_config_toml()

    def test_valid_toml(self) -> None:
        import tomllib

        data = tomllib.loads(default_config_toml())
        assert data["report"]["default_format"] == "wide"
        assert "honest_profiler" not in data

    def test_loads_as_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "default.toml"
        config_file.write_text(default_config_toml())
        cfg = load_config(config_path=config_file, project_dir=tmp_path)
        assert cfg.default_format == "wide"
        assert cfg.output_file == Path("benchmark.csv")
