"""buildbench CLI logging.

Everything under the ``buildbench`` logger goes to a Rich handler on
*stderr*, so report output on stdout stays clean.  When ``log_file`` is
configured, the same records are appended to that file with timestamps.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from buildbench import __version__
from buildbench.cli.errors import ConfigError

LOGGER_NAME = "buildbench"

FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises:
        ConfigError: If *level* is not a standard logging level name.
    """
    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.strip().upper()]
    except KeyError:
        choices = ", ".join(sorted(levels, key=levels.__getitem__))
        raise ConfigError(
            f"Unknown log level '{level}'. Expected one of: {choices}"
        ) from None


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``buildbench`` logger for one CLI run.

    Handlers from an earlier call are closed and replaced.  Rich markup is
    disabled because log messages embed user-supplied scenario titles and
    paths.

    Raises:
        ConfigError: If *level* is unknown.
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    rich_handler.setLevel(numeric_level)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(file_handler)
        logger.debug("buildbench %s logging to %s", __version__, log_file)

    return logger
