"""Shared fixtures for buildbench tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from buildbench.report.models import (
    BuildContext,
    BuildPhase,
    InvocationResult,
    Sample,
    ScenarioDefinition,
    ScenarioResult,
)


def make_scenario(
    title: str,
    sample_names: list[str],
    rows: list[list[float]],
    *,
    build_tool: str = "Gradle 8.5",
    tasks: str = "assemble",
    baseline: ScenarioResult | None = None,
) -> ScenarioResult:
    """Build a scenario with one invocation per entry of *rows*."""
    samples = [Sample.measurement(name) for name in sample_names]
    invocations = [
        InvocationResult(
            context=BuildContext(phase=BuildPhase.MEASURE, iteration=i),
            measurements={
                name: timedelta(milliseconds=value)
                for name, value in zip(sample_names, row)
            },
        )
        for i, row in enumerate(rows)
    ]
    definition = ScenarioDefinition(title=title, build_tool=build_tool, tasks=tasks)
    return ScenarioResult.build(definition, samples, invocations, baseline=baseline)


@pytest.fixture
def scenario_a() -> ScenarioResult:
    """One scenario, two samples, three invocations."""
    return make_scenario(
        "scenario A",
        ["task", "build"],
        [[100, 110], [90, 95], [105, 100]],
    )


@pytest.fixture
def scenario_b() -> list[ScenarioResult]:
    """Two scenarios with three and one invocations."""
    first = make_scenario("first", ["execution"], [[10], [20], [30]])
    second = make_scenario(
        "second", ["execution", "task start"], [[15, 5]], build_tool="Gradle 8.6"
    )
    return [first, second]


@pytest.fixture
def scenario_factory():
    """Return :func:`make_scenario` for tests that build their own scenarios."""
    return make_scenario


