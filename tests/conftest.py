"""Pytest configuration, shared fixtures & custom summary hook.

Also ensures the project root is on sys.path so ``gagwo`` and ``main`` import
without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from gagwo.models import JobSet, OptimizerConfig  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def small_jobs() -> JobSet:
    return JobSet.from_run_times([5, 3, 10, 8, 2])


@pytest.fixture
def small_config() -> OptimizerConfig:
    return OptimizerConfig(machines=2, population_size=10, max_iteration=50)


@pytest.fixture
def trace_path() -> str:
    return str(FIXTURES / "trace_small.json")


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Passed: {passed} | Failed: {failed} | Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
