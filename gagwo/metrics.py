"""Final quality metrics for the best assignment of a run."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

from .evaluation import machine_loads
from .models import JobSet


@dataclass(frozen=True)
class Metrics:
    """Makespan, utilization and load-balance deviation of one assignment.

    Fields:
        makespan: Load of the busiest machine.
        utilization: total_run_time / (makespan * machines).
        load_balance_deviation: (max_load - min_load) / mean_load.
        machine_loads: Per-machine load vector the ratios were computed from.
        degenerate: True when makespan is 0; both ratios are then reported as 0.0.
    """

    makespan: float
    utilization: float
    load_balance_deviation: float
    machine_loads: list[float]
    degenerate: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def report_metrics(assignment: Sequence[int], jobs: JobSet, machines: int) -> Metrics:
    loads = machine_loads(assignment, jobs, machines)
    span = max(loads)
    if span == 0:
        return Metrics(
            makespan=0.0,
            utilization=0.0,
            load_balance_deviation=0.0,
            machine_loads=loads,
            degenerate=True,
        )
    mean_load = sum(loads) / machines
    return Metrics(
        makespan=span,
        utilization=jobs.total_run_time / (span * machines),
        load_balance_deviation=(span - min(loads)) / mean_load,
        machine_loads=loads,
    )
