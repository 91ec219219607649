"""Comma-delimited table reports for benchmark results.

Two layouts are supported:

- ``WIDE``: one column per (scenario, sample) pair, one row per invocation
  index, followed by summary statistic rows.
- ``LONG``: one row per (scenario, invocation, sample) measurement, with no
  statistics.

Fields are joined with a comma and are never quoted or escaped.  Scenario
titles, tool names, task names and sample names that contain a comma will
therefore produce rows with extra columns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from buildbench.exceptions import InvalidFormatError
from buildbench.report.models import (
    BenchmarkResult,
    Sample,
    ScenarioResult,
    Statistics,
    to_millis,
)
from buildbench.report.writer import ReportGenerator

logger = logging.getLogger(__name__)

DELIMITER = ","

LONG_HEADER = ("Scenario", "Tool", "Tasks", "Phase", "Iteration", "Sample", "Duration")

# Order is part of the output format.
STATISTIC_ROWS: list[tuple[str, Callable[[Statistics], float]]] = [
    ("mean", lambda s: s.mean),
    ("min", lambda s: s.min),
    ("25th percentile", lambda s: s.percentile(25)),
    ("median", lambda s: s.median),
    ("75th percentile", lambda s: s.percentile(75)),
    ("max", lambda s: s.max),
    ("stddev", lambda s: s.standard_deviation),
    ("confidence", lambda s: s.confidence_percent),
]


class TableFormat(str, Enum):
    """Layout of a table report."""

    LONG = "long"
    WIDE = "wide"

    @classmethod
    def parse(cls, token: TableFormat | str) -> TableFormat:
        """Resolve a format token such as ``"wide"`` (case-insensitive).

        Raises:
            InvalidFormatError: If *token* names no known format.
        """
        if isinstance(token, TableFormat):
            return token
        if isinstance(token, str):
            for table_format in cls:
                if table_format.value == token.strip().lower():
                    return table_format
        raise InvalidFormatError(token)


# ---------------------------------------------------------------------------
# Column layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Column:
    """One (scenario, sample) column of the wide layout."""

    scenario_index: int
    sample_index: int
    scenario: ScenarioResult
    sample: Sample

    @property
    def statistics(self) -> Statistics:
        return self.scenario.statistics[self.sample_index]

    def cell(self, row: int) -> str:
        """Millisecond value at *row*, or an empty cell past the last invocation."""
        invocations = self.scenario.invocations
        if row >= len(invocations):
            return ""
        return str(to_millis(self.sample.extract_from(invocations[row])))


@dataclass(frozen=True)
class ColumnLayout:
    """Columns of the wide layout indexed by (scenario index, sample index)."""

    scenarios: tuple[ScenarioResult, ...]
    grid: tuple[tuple[Column, ...], ...]

    @classmethod
    def from_scenarios(cls, scenarios: Sequence[ScenarioResult]) -> ColumnLayout:
        grid = tuple(
            tuple(
                Column(scenario_index, sample_index, scenario, sample)
                for sample_index, sample in enumerate(scenario.samples)
            )
            for scenario_index, scenario in enumerate(scenarios)
        )
        return cls(scenarios=tuple(scenarios), grid=grid)

    @property
    def columns(self) -> tuple[Column, ...]:
        """All columns in output order."""
        return tuple(column for group in self.grid for column in group)

    @property
    def row_count(self) -> int:
        """Number of data rows: the largest invocation count of any scenario."""
        return max((s.invocation_count for s in self.scenarios), default=0)

    def column(self, scenario_index: int, sample_index: int) -> Column:
        return self.grid[scenario_index][sample_index]

    def row_label(self, row: int) -> str:
        """Display name from the first scenario that has an invocation at *row*."""
        for scenario in self.scenarios:
            if row < scenario.invocation_count:
                return scenario.invocations[row].context.display_name
        return ""


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class TableGenerator(ReportGenerator):
    """Writes benchmark results as a comma-delimited table.

    Example::

        generator = TableGenerator(Path("benchmark.csv"), "wide")
        generator.write(benchmark_result)
    """

    def __init__(self, output_file: Path | str, table_format: TableFormat | str) -> None:
        self.table_format = TableFormat.parse(table_format)
        super().__init__(output_file)

    def render(self, result: BenchmarkResult) -> list[str]:
        return self.generate(result.scenarios)

    def generate(self, scenarios: Sequence[ScenarioResult]) -> list[str]:
        """Return the table lines for *scenarios* in this generator's format."""
        logger.debug(
            "Rendering %d scenarios in %s format",
            len(scenarios),
            self.table_format.name,
        )
        if self.table_format is TableFormat.WIDE:
            return _wide_lines(scenarios)
        return _long_lines(scenarios)


def _join(cells: Sequence[str]) -> str:
    return DELIMITER.join(cells)


def _wide_lines(scenarios: Sequence[ScenarioResult]) -> list[str]:
    layout = ColumnLayout.from_scenarios(scenarios)
    columns = layout.columns

    lines = [
        _join(["scenario"] + [c.scenario.definition.title for c in columns]),
        _join(["version"] + [c.scenario.definition.build_tool for c in columns]),
        _join(["tasks"] + [c.scenario.definition.tasks for c in columns]),
        _join(["value"] + [c.sample.name for c in columns]),
    ]

    for row in range(layout.row_count):
        lines.append(_join([layout.row_label(row)] + [c.cell(row) for c in columns]))

    for label, accessor in STATISTIC_ROWS:
        lines.append(_join([label] + [str(accessor(c.statistics)) for c in columns]))

    return lines


def _long_lines(scenarios: Sequence[ScenarioResult]) -> list[str]:
    lines = [_join(LONG_HEADER)]
    for scenario in scenarios:
        definition = scenario.definition
        for invocation in scenario.invocations:
            context = invocation.context
            for sample in scenario.samples:
                lines.append(
                    _join([
                        definition.title,
                        definition.build_tool,
                        definition.tasks,
                        context.phase.name,
                        str(context.iteration),
                        sample.name,
                        str(to_millis(sample.extract_from(invocation))),
                    ])
                )
    return lines
