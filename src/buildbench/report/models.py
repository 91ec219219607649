"""Pydantic data models for benchmark scenario results.

Defines the read-only result tree that report generators consume:
- Scenario definitions (title, build tool, tasks)
- Build invocations with their phase, iteration and raw measurements
- Named samples that extract a duration from each invocation
- Per-sample summary statistics
- Scenario and benchmark-level aggregates
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from buildbench.exceptions import ExtractionError

_ONE_MILLI = timedelta(milliseconds=1)

REQUIRED_PERCENTILES: tuple[int, ...] = (25, 75)


def to_millis(duration: timedelta) -> int:
    """Convert *duration* to whole milliseconds, dropping any remainder."""
    return duration // _ONE_MILLI


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BuildPhase(str, Enum):
    """Phase of the benchmark an invocation belongs to."""

    WARM_UP = "WARM_UP"
    MEASURE = "MEASURE"

    @property
    def display_prefix(self) -> str:
        """Human readable prefix used for build display names."""
        if self is BuildPhase.WARM_UP:
            return "warm-up build"
        return "measured build"


# ---------------------------------------------------------------------------
# Scenario and invocation models
# ---------------------------------------------------------------------------


class ScenarioDefinition(BaseModel):
    """Descriptive metadata for a benchmark scenario.

    None of the fields need to be unique; a scenario is identified by its
    position in the benchmark.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Scenario title")
    build_tool: str = Field(..., description="Build tool display name")
    tasks: str = Field(..., description="Tasks display name")


class BuildContext(BaseModel):
    """Where an invocation sits within the benchmark run."""

    model_config = ConfigDict(frozen=True)

    phase: BuildPhase = Field(..., description="Warm-up or measured phase")
    iteration: int = Field(..., ge=0, description="0-based iteration index")
    display_name: str = Field(
        default="",
        description="Human readable name, e.g. 'measured build #1'",
    )

    @model_validator(mode="before")
    @classmethod
    def default_display_name(cls, data: Any) -> Any:
        """Derive the display name from phase and iteration when absent."""
        if isinstance(data, dict) and not data.get("display_name"):
            phase = data.get("phase")
            iteration = data.get("iteration")
            if phase is not None and isinstance(iteration, int):
                data = dict(data)
                data["display_name"] = (
                    f"{BuildPhase(phase).display_prefix} #{iteration + 1}"
                )
        return data


class InvocationResult(BaseModel):
    """One executed build invocation and its raw measurements."""

    model_config = ConfigDict(frozen=True)

    context: BuildContext
    measurements: dict[str, timedelta] = Field(
        default_factory=dict,
        description="Raw named durations recorded for this invocation",
    )


class Sample(BaseModel):
    """A named duration extracted from every invocation of a scenario."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Sample name")
    extractor: Callable[[InvocationResult], timedelta] = Field(
        ...,
        exclude=True,
        description="Reads the sample's duration from an invocation",
    )

    @classmethod
    def measurement(cls, name: str, key: Optional[str] = None) -> Sample:
        """Build a sample that reads ``measurements[key]`` (default: *name*)."""
        measurement_key = key or name

        def _extract(invocation: InvocationResult) -> timedelta:
            return invocation.measurements[measurement_key]

        return cls(name=name, extractor=_extract)

    def extract_from(self, invocation: InvocationResult) -> timedelta:
        """Extract this sample's duration from *invocation*.

        Raises:
            ExtractionError: If the extractor fails or does not return a
                :class:`~datetime.timedelta`.
        """
        try:
            duration = self.extractor(invocation)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(
                self.name, invocation.context, f"{type(exc).__name__}: {exc}"
            ) from exc

        if not isinstance(duration, timedelta):
            raise ExtractionError(
                self.name,
                invocation.context,
                f"expected a timedelta, got {type(duration).__name__}",
            )
        return duration


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class Statistics(BaseModel):
    """Summary statistics over one sample's durations, in milliseconds."""

    model_config = ConfigDict(frozen=True)

    mean: float
    min: float
    max: float
    median: float
    percentiles: dict[int, float] = Field(
        ...,
        description="Percentile values keyed by p; must include 25 and 75",
    )
    standard_deviation: float
    confidence_percent: float = 0.0

    @model_validator(mode="after")
    def validate_required_percentiles(self) -> Statistics:
        """Reports read the 25th and 75th percentiles of every sample."""
        missing = [p for p in REQUIRED_PERCENTILES if p not in self.percentiles]
        if missing:
            raise ValueError(
                f"Statistics are missing required percentiles: {missing}"
            )
        return self

    def percentile(self, p: int) -> float:
        """Return the *p*-th percentile.

        Raises:
            KeyError: If the percentile was not computed.
        """
        return self.percentiles[p]


class ScenarioResult(BaseModel):
    """All invocations of one scenario with their per-sample statistics."""

    model_config = ConfigDict(frozen=True)

    definition: ScenarioDefinition
    samples: list[Sample] = Field(default_factory=list)
    invocations: list[InvocationResult] = Field(default_factory=list)
    statistics: list[Statistics] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_statistics_match_samples(self) -> ScenarioResult:
        """There must be exactly one Statistics entry per sample."""
        if len(self.statistics) != len(self.samples):
            raise ValueError(
                f"Scenario '{self.definition.title}' has "
                f"{len(self.samples)} samples but "
                f"{len(self.statistics)} statistics"
            )
        return self

    @classmethod
    def build(
        cls,
        definition: ScenarioDefinition,
        samples: list[Sample],
        invocations: list[InvocationResult],
        baseline: Optional[ScenarioResult] = None,
    ) -> ScenarioResult:
        """Create a scenario result, deriving statistics for each sample.

        When *baseline* is given, each sample's confidence is computed
        against the baseline sample of the same name.

        Raises:
            ExtractionError: If any sample cannot be read from an invocation.
        """
        from buildbench.report.statistics import compute_statistics

        statistics = []
        for sample in samples:
            values = [
                float(to_millis(sample.extract_from(inv))) for inv in invocations
            ]
            baseline_values = None
            if baseline is not None:
                baseline_values = baseline.sample_values(sample.name)
            statistics.append(compute_statistics(values, baseline_values))

        return cls(
            definition=definition,
            samples=samples,
            invocations=invocations,
            statistics=statistics,
        )

    @property
    def invocation_count(self) -> int:
        return len(self.invocations)

    def sample_values(self, sample_name: str) -> Optional[list[float]]:
        """Millisecond values of the named sample, or None if not present."""
        for sample in self.samples:
            if sample.name == sample_name:
                return [
                    float(to_millis(sample.extract_from(inv)))
                    for inv in self.invocations
                ]
        return None


class BenchmarkResult(BaseModel):
    """The ordered scenario results of one benchmark run."""

    model_config = ConfigDict(frozen=True)

    scenarios: list[ScenarioResult] = Field(default_factory=list)
