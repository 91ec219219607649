"""buildbench CLI – command-line interface built with Typer and Rich.

- :data:`app` – The main Typer application
- :class:`BuildBenchConfig` – Configuration model
- :func:`setup_logging` – Logging infrastructure
- :class:`CLIError` – Structured error handling
"""

from buildbench.cli.app import app
from buildbench.cli.config import BuildBenchConfig, HonestProfilerArgs, load_config
from buildbench.cli.errors import CLIError, ConfigError, error_handler
from buildbench.cli.logging_setup import setup_logging

__all__ = [
    "BuildBenchConfig",
    "CLIError",
    "ConfigError",
    "HonestProfilerArgs",
    "app",
    "error_handler",
    "load_config",
    "setup_logging",
]
