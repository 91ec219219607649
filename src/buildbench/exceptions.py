"""Custom exceptions for report generation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildbench.report.models import BuildContext


class ReportError(Exception):
    """Base exception for all report generation errors."""


class InvalidFormatError(ReportError):
    """Raised when a table format token is not recognised.

    Attributes:
        token: The rejected format token.
    """

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f"Unknown CSV format: {token}")


class ExtractionError(ReportError):
    """Raised when a sample cannot produce a duration from an invocation.

    Attributes:
        sample_name: Name of the sample that failed.
        context: Build context of the invocation being read.
    """

    def __init__(
        self, sample_name: str, context: BuildContext, reason: str
    ) -> None:
        self.sample_name = sample_name
        self.context = context
        self.reason = reason
        super().__init__(
            f"Cannot extract sample '{sample_name}' from "
            f"{context.display_name}: {reason}"
        )


class SinkIOError(ReportError):
    """Raised when the report output file cannot be written.

    Attributes:
        path: The output path that failed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write report to '{path}': {reason}")


class ResultsFileError(ReportError):
    """Raised when a benchmark results document cannot be loaded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid results file '{path}': {reason}")
