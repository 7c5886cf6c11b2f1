"""Fitness evaluation: per-machine loads, makespan and the derived ratios.

All functions are pure. ``utilization`` and ``load_balance_deviation`` return
0.0 when the denominator vanishes (every job has zero run time); callers that
need to tell that case apart check ``makespan == 0`` or use
``gagwo.metrics.report_metrics`` which flags it.
"""

from __future__ import annotations

from typing import Sequence

from .models import JobSet


def machine_loads(assignment: Sequence[int], jobs: JobSet, machines: int) -> list[float]:
    """Sum of run times per machine; idle machines contribute 0."""
    if len(assignment) != len(jobs):
        raise ValueError(
            f"assignment length {len(assignment)} does not match job count {len(jobs)}"
        )
    loads = [0.0] * machines
    for job_idx, machine in enumerate(assignment):
        # negative indices would silently wrap in Python lists
        if not 0 <= machine < machines:
            raise ValueError(
                f"job {job_idx} assigned to machine {machine}, outside [0, {machines})"
            )
        loads[machine] += jobs.jobs[job_idx].run_time
    return loads


def makespan(assignment: Sequence[int], jobs: JobSet, machines: int) -> float:
    return max(machine_loads(assignment, jobs, machines))


def utilization(assignment: Sequence[int], jobs: JobSet, machines: int) -> float:
    span = makespan(assignment, jobs, machines)
    if span == 0:
        return 0.0
    return jobs.total_run_time / (span * machines)


def load_balance_deviation(assignment: Sequence[int], jobs: JobSet, machines: int) -> float:
    loads = machine_loads(assignment, jobs, machines)
    mean_load = sum(loads) / machines
    if mean_load == 0:
        return 0.0
    return (max(loads) - min(loads)) / mean_load
