"""Random population initialization and repair of relaxed positions."""

from __future__ import annotations

import math
import random

from .evaluation import makespan
from .models import Candidate, JobSet, OptimizerConfig


def random_candidate(jobs: JobSet, machines: int, rng: random.Random) -> Candidate:
    assignment = [rng.randrange(machines) for _ in range(len(jobs))]
    return Candidate(assignment=assignment, fitness=makespan(assignment, jobs, machines))


def initialize_population(
    jobs: JobSet,
    config: OptimizerConfig,
    rng: random.Random,
) -> tuple[list[Candidate], Candidate]:
    """Draw ``population_size`` uniformly random assignments.

    Returns:
        ``(population, best)`` where ``best`` is a copy of the first candidate
        with the lowest fitness (ties keep the earlier one).
    """
    first = random_candidate(jobs, config.machines, rng)
    population = [first]
    best = first.copy()
    for _ in range(config.population_size - 1):
        cand = random_candidate(jobs, config.machines, rng)
        population.append(cand)
        if cand.fitness < best.fitness:
            best = cand.copy()
    return population, best


def repair(x: float, machines: int) -> int:
    """Round half up to the nearest machine index and clamp into [0, machines - 1]."""
    idx = math.floor(x + 0.5)
    return max(0, min(machines - 1, idx))
