"""Hybrid Grey Wolf Optimizer / Genetic Algorithm for makespan minimisation."""

import random
import time
from typing import List

from gagwo.algorithms.base import (
    SearchState,
    log_generation,
    logger,
    open_log_file,
    require_jobs,
)
from gagwo.evaluation import makespan
from gagwo.models import Candidate, JobSet, OptimizerConfig, SearchResult
from gagwo.population import initialize_population, repair


def update_candidate(
    cand: Candidate,
    leader: List[int],
    second: List[int],
    a: float,
    config: OptimizerConfig,
    rng: random.Random,
) -> None:
    """Move every position of ``cand`` in place.

    Positions are treated as reals: pulled toward the leader (GWO), optionally
    averaged with the second best (crossover) and perturbed (mutation), then
    repaired back to a machine index. Random draws per position, in order:
    r1, r2, crossover test, mutation test, normal draw (only if mutating).
    """
    x = cand.assignment
    for j in range(len(x)):
        r1 = rng.random()
        r2 = rng.random()
        A1 = 2 * a * r1 - a
        C1 = 2 * r2
        D_alpha = abs(C1 * leader[j] - x[j])
        X1 = leader[j] - A1 * D_alpha

        if rng.random() < config.crossover_rate:
            X1 = (x[j] + second[j]) / 2
        if rng.random() < config.mutation_rate:
            X1 += rng.gauss(0.0, 1.0)

        x[j] = repair(X1, config.machines)


def ga_gwo_search(
    jobs: JobSet,
    config: OptimizerConfig,
    rng: random.Random | None = None,
    iter_log_path: str | None = None,
) -> SearchResult:
    """GA-GWO search over job-to-machine assignments.

    Parameters:
        jobs: job batch to assign
        config: machine count, population size and generation budget
        rng: random source; draw order is fixed so a seeded rng reproduces a run
        iter_log_path: optional CSV trace, one row per generation

    Returns:
        SearchResult with the best assignment and its per-generation history
    """
    require_jobs(jobs)
    if rng is None:
        rng = random.Random()

    logger.info(
        "[ga_gwo] start jobs=%d machines=%d population=%d iterations=%d",
        len(jobs),
        config.machines,
        config.population_size,
        config.max_iteration,
    )
    start_time = time.time()
    population, best = initialize_population(jobs, config, rng)
    state = SearchState(
        best=best,
        history=[best.fitness],
        start_time=start_time,
        evaluations=len(population),
    )

    with open_log_file(iter_log_path, "ga_gwo") as log_file:
        for g in range(config.max_iteration):
            state.generation = g
            population.sort(key=lambda c: c.fitness)
            a = 2.0 - (2.0 * g / config.max_iteration)

            # leader and second best stay fixed for the whole generation
            leader = list(population[0].assignment)
            second = list(population[1].assignment) if len(population) > 1 else leader

            for cand in population:
                update_candidate(cand, leader, second, a, config, rng)
                cand.fitness = makespan(cand.assignment, jobs, config.machines)
                state.evaluations += 1
                if state.update_best(cand):
                    logger.info("[ga_gwo] generation %d new best=%s", g, state.best.fitness)

            state.history.append(state.best.fitness)
            log_generation(log_file, state, population)
            logger.debug("[ga_gwo] generation %d a=%.4f best=%s", g, a, state.best.fitness)

    result = state.to_result()
    logger.info(
        "[ga_gwo] done best=%s evals=%d elapsed_ms=%d",
        result.best_fitness,
        result.evaluations,
        result.elapsed_ms,
    )
    return result
