"""Population optimizers for job-to-machine assignment.

Contains:
- GA-GWO hybrid (Grey Wolf pull + crossover + mutation)
- Random search baseline (initial population only)
"""

import random
from typing import Callable, Dict

from gagwo.algorithms.ga_gwo import ga_gwo_search
from gagwo.algorithms.random_search import random_search
from gagwo.models import JobSet, OptimizerConfig, SearchResult

ALGORITHMS: Dict[str, Callable[..., SearchResult]] = {
    "ga_gwo": ga_gwo_search,
    "random": random_search,
}


def run_algorithm(
    name: str,
    jobs: JobSet,
    config: OptimizerConfig,
    rng: random.Random | None = None,
    iter_log_path: str | None = None,
) -> SearchResult:
    """Dispatch to one of ``ALGORITHMS`` by name.

    Raises:
        ValueError: If an unknown algorithm name is provided.
    """
    fn = ALGORITHMS.get(name)
    if fn is None:
        raise ValueError(f"Unknown algorithm: {name} (expected one of {sorted(ALGORITHMS)})")
    return fn(jobs, config, rng=rng, iter_log_path=iter_log_path)


__all__ = ["ALGORITHMS", "ga_gwo_search", "random_search", "run_algorithm"]
