"""Common structures and helper functions for the population optimizers."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List

from gagwo.models import Candidate, JobSet, SearchResult

logger = logging.getLogger("gagwo")


@dataclass
class SearchState:
    """Shared state for population optimizers."""

    best: Candidate
    history: List[float] = field(default_factory=list)
    start_time: float = 0.0
    generation: int = 0
    evaluations: int = 0

    def update_best(self, cand: Candidate) -> bool:
        """Snapshot ``cand`` if strictly better than the best so far. Returns True if improved."""
        if cand.fitness < self.best.fitness:
            self.best = cand.copy()
            return True
        return False

    def elapsed_ms(self) -> int:
        """Return elapsed time from start in ms."""
        return int((time.time() - self.start_time) * 1000)

    def to_result(self) -> SearchResult:
        return SearchResult(
            best_assignment=list(self.best.assignment),
            best_fitness=self.best.fitness,
            history=list(self.history),
            evaluations=self.evaluations,
            elapsed_ms=self.elapsed_ms(),
        )


def require_jobs(jobs: JobSet) -> None:
    if len(jobs) == 0:
        raise ValueError("Nothing to optimize: job set is empty")


@contextmanager
def open_log_file(path: str | None, algo_name: str) -> Iterator[Any]:
    """Context manager for the per-generation CSV trace."""
    log_file = None
    if path:
        try:
            log_file = open(path, "w", encoding="utf-8")
            log_file.write("generation,elapsed_ms,best_fitness,leader_fitness,mean_fitness\n")
        except OSError as e:
            logger.warning("[%s] Failed to open log file %s: %s", algo_name, path, e)
            log_file = None
    try:
        yield log_file
    finally:
        if log_file:
            log_file.close()


def log_generation(log_file: Any, state: SearchState, population: List[Candidate]) -> None:
    """Write one generation to the trace file."""
    if log_file:
        leader_fitness = min(c.fitness for c in population)
        mean_fitness = sum(c.fitness for c in population) / len(population)
        log_file.write(
            f"{state.generation},{state.elapsed_ms()},{state.best.fitness},"
            f"{leader_fitness},{mean_fitness}\n"
        )
