from __future__ import annotations

import json
import logging
import random
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Sequence

from gagwo.algorithms import ALGORITHMS, run_algorithm
from gagwo.metrics import Metrics, report_metrics
from gagwo.models import JobSet, OptimizerConfig

logger = logging.getLogger("gagwo")


@dataclass(frozen=True)
class RunConfig:
    """Single benchmark run: which algorithm, with which seed and budgets."""

    algorithm: str  # 'ga_gwo' | 'random'
    seed: int
    machines: int
    population_size: int
    max_iteration: int
    crossover_rate: float = 0.5
    mutation_rate: float = 0.1

    def optimizer_config(self) -> OptimizerConfig:
        return OptimizerConfig(
            machines=self.machines,
            population_size=self.population_size,
            max_iteration=self.max_iteration,
            crossover_rate=self.crossover_rate,
            mutation_rate=self.mutation_rate,
        )


@dataclass
class RunResult:
    config: RunConfig
    metrics: Metrics
    best_assignment: List[int]
    history: List[float]
    evaluations: int
    total_time_ms: int
    jobs: int

    def to_dict(self):
        d = asdict(self)
        d["config"] = asdict(self.config)
        d["metrics"] = self.metrics.to_dict()
        return d


class ExperimentRunner:
    def __init__(self, base_results_dir: str = "results/experiments"):
        """Every batch gets its own timestamped directory; older batches stay."""
        self.base_dir = Path(base_results_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        self.timestamp_dir = self.base_dir / stamp
        self.timestamp_dir.mkdir(parents=True, exist_ok=True)

    def run(self, configs: Sequence[RunConfig], jobs: JobSet) -> List[RunResult]:
        results: List[RunResult] = []
        for idx, cfg in enumerate(configs, start=1):
            logger.info("[Experiment] (%d/%d) Running: %s", idx, len(configs), cfg)
            result = self._run_single(cfg, jobs)
            results.append(result)
            self._persist_result(result)
        return results

    def _run_single(self, cfg: RunConfig, jobs: JobSet) -> RunResult:
        rng = random.Random(cfg.seed)
        opt_cfg = cfg.optimizer_config()
        search = run_algorithm(cfg.algorithm, jobs, opt_cfg, rng=rng)
        return RunResult(
            config=cfg,
            metrics=report_metrics(search.best_assignment, jobs, opt_cfg.machines),
            best_assignment=search.best_assignment,
            history=search.history,
            evaluations=search.evaluations,
            total_time_ms=search.elapsed_ms,
            jobs=len(jobs),
        )

    def _persist_result(self, result: RunResult) -> None:
        cfg = result.config
        filename = (
            f"algo={cfg.algorithm}_n{result.jobs}_m{cfg.machines}"
            f"_pop={cfg.population_size}_iter={cfg.max_iteration}_seed={cfg.seed}.json"
        )
        path = self.timestamp_dir / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("[Experiment] Saved %s", path)


def generate_plan(
    config: OptimizerConfig,
    repeats: int,
    algorithms: Iterable[str] | None = None,
) -> List[RunConfig]:
    """One run per (algorithm, seed) with seeds ``0 .. repeats - 1``.

    Defaults to every registered algorithm.
    """
    if repeats <= 0:
        raise ValueError(f"repeats must be > 0, got {repeats}")
    algorithms = list(algorithms) if algorithms else list(ALGORITHMS)
    unknown = [a for a in algorithms if a not in ALGORITHMS]
    if unknown:
        raise ValueError(f"Unknown algorithms in plan: {unknown}")
    configs: List[RunConfig] = []
    for algo in algorithms:
        for seed in range(repeats):
            configs.append(
                RunConfig(
                    algorithm=algo,
                    seed=seed,
                    machines=config.machines,
                    population_size=config.population_size,
                    max_iteration=config.max_iteration,
                    crossover_rate=config.crossover_rate,
                    mutation_rate=config.mutation_rate,
                )
            )
    return configs
