"""Benchmark result models and table report generation.

- :class:`TableGenerator` – Wide and long comma-delimited reports
- :class:`ReportGenerator` – Base class owning the output file lifecycle
- :func:`compute_statistics` – Default per-sample summary statistics
- :func:`load_results` – JSON results document loader
"""

from buildbench.report.loader import load_results, parse_results
from buildbench.report.models import (
    BenchmarkResult,
    BuildContext,
    BuildPhase,
    InvocationResult,
    Sample,
    ScenarioDefinition,
    ScenarioResult,
    Statistics,
    to_millis,
)
from buildbench.report.statistics import compute_statistics
from buildbench.report.table import (
    STATISTIC_ROWS,
    ColumnLayout,
    TableFormat,
    TableGenerator,
)
from buildbench.report.writer import ReportGenerator

__all__ = [
    "STATISTIC_ROWS",
    "BenchmarkResult",
    "BuildContext",
    "BuildPhase",
    "ColumnLayout",
    "InvocationResult",
    "ReportGenerator",
    "Sample",
    "ScenarioDefinition",
    "ScenarioResult",
    "Statistics",
    "TableFormat",
    "TableGenerator",
    "compute_statistics",
    "load_results",
    "parse_results",
    "to_millis",
]
