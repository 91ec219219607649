"""Abstract base class for file-backed report generators.

A generator renders a :class:`~buildbench.report.models.BenchmarkResult`
into text lines and writes them to a single output file.  Subclasses only
implement :meth:`ReportGenerator.render`; the file lifecycle lives here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from buildbench.exceptions import SinkIOError
from buildbench.report.models import BenchmarkResult

logger = logging.getLogger(__name__)


class ReportGenerator(ABC):
    """Writes a rendered report to ``output_file``.

    Example::

        class TitlesGenerator(ReportGenerator):
            def render(self, result: BenchmarkResult) -> list[str]:
                return [s.definition.title for s in result.scenarios]

        TitlesGenerator(Path("titles.txt")).write(result)
    """

    def __init__(self, output_file: Path | str) -> None:
        self.output_file = Path(output_file)

    @property
    def name(self) -> str:
        """Return the name of this generator (defaults to class name)."""
        return self.__class__.__name__

    @abstractmethod
    def render(self, result: BenchmarkResult) -> Iterable[str]:
        """Render *result* as text lines without line terminators."""

    def write(self, result: BenchmarkResult) -> Path:
        """Render *result* and write it to :attr:`output_file`.

        Rendering completes before the file is opened, so a rendering error
        leaves any existing file untouched.  An existing file is truncated.

        Returns:
            The path written to.

        Raises:
            ExtractionError: If a sample cannot be read while rendering.
            SinkIOError: If the file cannot be created or written.
        """
        lines = list(self.render(result))

        try:
            self.output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.output_file, "w", encoding="utf-8", newline="") as fh:
                for line in lines:
                    fh.write(line)
                    fh.write("\n")
        except OSError as exc:
            raise SinkIOError(self.output_file, str(exc)) from exc

        logger.info(
            "%s wrote %d lines to %s", self.name, len(lines), self.output_file
        )
        return self.output_file
