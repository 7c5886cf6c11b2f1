"""Pure random sampling baseline: population initialization, no refinement."""

import random
import time

from gagwo.algorithms.base import SearchState, logger, require_jobs
from gagwo.models import JobSet, OptimizerConfig, SearchResult
from gagwo.population import initialize_population


def random_search(
    jobs: JobSet,
    config: OptimizerConfig,
    rng: random.Random | None = None,
    iter_log_path: str | None = None,
) -> SearchResult:
    """Return the best of ``config.population_size`` random assignments.

    Consumes the random stream exactly like the initialization of
    ``ga_gwo_search``, so with equally seeded rngs both start from the same
    population. ``max_iteration`` and ``iter_log_path`` are ignored.
    """
    require_jobs(jobs)
    if rng is None:
        rng = random.Random()
    start_time = time.time()
    population, best = initialize_population(jobs, config, rng)
    state = SearchState(
        best=best,
        history=[best.fitness],
        start_time=start_time,
        evaluations=len(population),
    )
    result = state.to_result()
    logger.info("[random] best=%s of %d samples", result.best_fitness, result.evaluations)
    return result
