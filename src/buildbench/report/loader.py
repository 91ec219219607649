"""Load benchmark results from a JSON document.

Expected layout::

    {
      "scenarios": [
        {
          "title": "assemble",
          "build_tool": "Gradle 8.5",
          "tasks": "assemble",
          "samples": ["execution", "task start"],
          "invocations": [
            {"phase": "WARM_UP", "iteration": 0,
             "measurements": {"execution": 1523.7, "task start": 410.2}}
          ]
        }
      ]
    }

Measurement values are milliseconds, finite and non-negative, up to
``MAX_MEASUREMENT_MS``.  The first scenario is the baseline for the
confidence figure of every later scenario.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Optional

from pydantic import BaseModel, Field, ValidationError

from buildbench.exceptions import ResultsFileError
from buildbench.report.models import (
    BenchmarkResult,
    BuildContext,
    BuildPhase,
    InvocationResult,
    Sample,
    ScenarioDefinition,
    ScenarioResult,
)

logger = logging.getLogger(__name__)

# Roughly 31 years; keeps every value well inside timedelta range.
MAX_MEASUREMENT_MS = 1e12

MeasurementMillis = Annotated[
    float, Field(ge=0, le=MAX_MEASUREMENT_MS, allow_inf_nan=False)
]


# ---------------------------------------------------------------------------
# Document schema
# ---------------------------------------------------------------------------


class InvocationDocument(BaseModel):
    """One invocation entry of a results document."""

    phase: BuildPhase
    iteration: int = Field(..., ge=0)
    display_name: Optional[str] = None
    measurements: dict[str, MeasurementMillis] = Field(default_factory=dict)


class ScenarioDocument(BaseModel):
    """One scenario entry of a results document."""

    title: str
    build_tool: str
    tasks: str
    samples: list[str] = Field(default_factory=list)
    invocations: list[InvocationDocument] = Field(default_factory=list)


class ResultsDocument(BaseModel):
    """Top level of a results document."""

    scenarios: list[ScenarioDocument] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_results(text: str, source: str = "<string>") -> BenchmarkResult:
    """Parse a JSON results document into a :class:`BenchmarkResult`.

    Raises:
        ResultsFileError: If the text is not valid JSON or does not match
            the schema.
        ExtractionError: If an invocation lacks a measurement one of its
            scenario's samples needs.
    """
    try:
        document = ResultsDocument.model_validate_json(text)
    except ValidationError as exc:
        raise ResultsFileError(source, str(exc)) from exc

    scenarios: list[ScenarioResult] = []
    for entry in document.scenarios:
        baseline = scenarios[0] if scenarios else None
        scenarios.append(_build_scenario(entry, baseline))

    logger.debug("Loaded %d scenarios from %s", len(scenarios), source)
    return BenchmarkResult(scenarios=scenarios)


def load_results(path: Path | str) -> BenchmarkResult:
    """Load a results document from *path*.

    Raises:
        ResultsFileError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResultsFileError(path, str(exc)) from exc
    return parse_results(text, source=str(path))


def _build_scenario(
    entry: ScenarioDocument, baseline: Optional[ScenarioResult]
) -> ScenarioResult:
    definition = ScenarioDefinition(
        title=entry.title, build_tool=entry.build_tool, tasks=entry.tasks
    )
    samples = [Sample.measurement(name) for name in entry.samples]
    invocations = [
        InvocationResult(
            context=BuildContext(
                phase=inv.phase,
                iteration=inv.iteration,
                display_name=inv.display_name or "",
            ),
            measurements={
                key: timedelta(milliseconds=value)
                for key, value in inv.measurements.items()
            },
        )
        for inv in entry.invocations
    ]
    return ScenarioResult.build(definition, samples, invocations, baseline=baseline)
