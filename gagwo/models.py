"""Core data structures for the job-to-machine assignment problem.

This module defines:
    Job             -- one trace record; only ``run_time`` is read by the engine.
    JobSet          -- immutable, non-empty collection of jobs.
    Candidate       -- assignment vector (job -> machine index) with cached fitness.
    OptimizerConfig -- machine pool size and search budgets.
    SearchResult    -- what an optimizer hands back to the presentation layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Job:
    """Single job record from a workload trace.

    Attributes:
        job_number: Identifier taken from the trace.
        run_time: Non-negative duration.
        fields: Remaining trace attributes, carried through untouched.
    """

    job_number: int
    run_time: float
    fields: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not math.isfinite(self.run_time) or self.run_time < 0:
            raise ValueError(
                f"Job {self.job_number}: run_time must be finite and >= 0, got {self.run_time}"
            )


@dataclass(frozen=True)
class JobSet:
    """Static batch of jobs to be assigned."""

    jobs: tuple[Job, ...]

    def __post_init__(self) -> None:
        if not self.jobs:
            raise ValueError("JobSet requires at least one job")

    @classmethod
    def from_run_times(cls, run_times: list[float]) -> "JobSet":
        return cls(tuple(Job(job_number=i, run_time=t) for i, t in enumerate(run_times)))

    def __len__(self) -> int:
        return len(self.jobs)

    @property
    def run_times(self) -> list[float]:
        return [job.run_time for job in self.jobs]

    @property
    def total_run_time(self) -> float:
        return float(sum(self.run_times))


@dataclass
class Candidate:
    """One proposed assignment under search.

    ``assignment[j]`` is the machine index for job ``j``. ``fitness`` is the
    makespan of that assignment (lower is better), ``inf`` until evaluated.
    """

    assignment: list[int]
    fitness: float = math.inf

    def copy(self) -> "Candidate":
        return Candidate(assignment=list(self.assignment), fitness=self.fitness)


@dataclass(frozen=True)
class OptimizerConfig:
    """Machine pool size and search budgets for one optimizer run.

    Attributes:
        machines: Number of machines (M).
        population_size: Number of candidates (P).
        max_iteration: Number of generations; 0 means initialization only.
        crossover_rate: Per-position probability of averaging with the second best.
        mutation_rate: Per-position probability of adding a standard-normal draw.
    """

    machines: int
    population_size: int
    max_iteration: int
    crossover_rate: float = 0.5
    mutation_rate: float = 0.1

    def __post_init__(self) -> None:
        if self.machines <= 0:
            raise ValueError(f"machines must be > 0, got {self.machines}")
        if self.population_size <= 0:
            raise ValueError(f"population_size must be > 0, got {self.population_size}")
        if self.max_iteration < 0:
            raise ValueError(f"max_iteration must be >= 0, got {self.max_iteration}")
        for name in ("crossover_rate", "mutation_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")


@dataclass
class SearchResult:
    """Outcome of a single optimizer run.

    Fields:
        best_assignment: Machine index per job for the best candidate found.
        best_fitness: Makespan of ``best_assignment``.
        history: Best fitness after initialization and after every generation.
        evaluations: Number of fitness evaluations performed.
        elapsed_ms: Wall-clock duration of the run.
    """

    best_assignment: list[int]
    best_fitness: float
    history: list[float]
    evaluations: int
    elapsed_ms: int
