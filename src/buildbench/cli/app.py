"""buildbench CLI application entry point.

Built with `Typer <https://typer.tiangolo.com/>`_ and
`Rich <https://rich.readthedocs.io/>`_.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from buildbench.cli.config import BuildBenchConfig, load_config
from buildbench.cli.errors import error_handler
from buildbench.cli.init_cmd import run_init
from buildbench.cli.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="buildbench",
    help="buildbench – tabular reports for build benchmark results.",
    add_completion=False,
    no_args_is_help=True,
)

_console = Console(stderr=True)
_out_console = Console()  # stdout for data output


class _State:
    verbose: bool = False
    config_path: Optional[Path] = None


_state = _State()


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from buildbench import __version__

        _console.print(f"buildbench {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) output.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration TOML file.",
    ),
) -> None:
    """Global options for buildbench."""
    _state.verbose = verbose
    _state.config_path = config


def _configure() -> BuildBenchConfig:
    """Load configuration and set up logging for a command."""
    cfg = load_config(config_path=_state.config_path)
    level = "DEBUG" if _state.verbose else cfg.log_level
    setup_logging(level, cfg.log_file, console=_console)
    return cfg


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


@app.command()
def report(
    results: Path = typer.Argument(
        ..., help="Path to a JSON benchmark results document."
    ),
    table_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Table layout: 'wide' or 'long'. Defaults to the configured format.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output CSV file. Defaults to the configured output file.",
    ),
) -> None:
    """Write benchmark results as a comma-delimited table."""
    with error_handler(_console):
        from buildbench.report import TableGenerator, load_results

        cfg = _configure()
        # Parsed before anything is read or written
        generator = TableGenerator(
            output or cfg.output_file, table_format or cfg.default_format
        )

        benchmark = load_results(results)
        logger.info(
            "Loaded %d scenarios from %s", len(benchmark.scenarios), results
        )
        path = generator.write(benchmark)
        _console.print(f"[green]Wrote {generator.table_format.value} report to {path}[/green]")


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@app.command("config")
def show_config() -> None:
    """Print the effective configuration as JSON."""
    with error_handler(_console):
        cfg = _configure()
        _out_console.print_json(cfg.model_dump_json())


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help="Target directory to initialise. Defaults to current directory.",
    ),
) -> None:
    """Create ``.buildbench/config.toml`` with default settings."""
    with error_handler(_console):
        config_path = run_init(path)
        _console.print(f"[green]Wrote default configuration to {config_path}[/green]")
