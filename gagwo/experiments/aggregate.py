from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger("gagwo")


def load_results_dir(timestamp_dir: Path) -> List[Dict[str, Any]]:
    """Load all per-run JSON result files of one batch directory, in name order."""
    results: List[Dict[str, Any]] = []
    for file in sorted(timestamp_dir.glob("*.json")):
        try:
            with open(file, "r", encoding="utf-8") as f:
                results.append(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("[Aggregate] Failed to load %s: %s", file, e)
    return results


def write_summary_csv(timestamp_dir: Path) -> Path:
    rows = load_results_dir(timestamp_dir)
    out_path = timestamp_dir / "summary.csv"
    columns = [
        "algorithm",
        "seed",
        "jobs",
        "machines",
        "population_size",
        "max_iteration",
        "makespan",
        "utilization",
        "load_balance_deviation",
        "degenerate",
        "evaluations",
        "total_time_ms",
    ]
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for r in rows:
            cfg = r["config"]
            metrics = r["metrics"]
            writer.writerow(
                [
                    cfg.get("algorithm"),
                    cfg.get("seed"),
                    r.get("jobs"),
                    cfg.get("machines"),
                    cfg.get("population_size"),
                    cfg.get("max_iteration"),
                    metrics.get("makespan"),
                    metrics.get("utilization"),
                    metrics.get("load_balance_deviation"),
                    metrics.get("degenerate"),
                    r.get("evaluations"),
                    r.get("total_time_ms"),
                ]
            )
    if not rows:
        logger.warning("[Aggregate] No result files found to summarize in %s", timestamp_dir)
    else:
        logger.info("[Aggregate] Summary written: %s", out_path)
    return out_path


def best_by_algorithm(timestamp_dir: Path) -> Dict[str, float]:
    """Minimal makespan over seeds for every algorithm present in the batch."""
    best: Dict[str, float] = {}
    for r in load_results_dir(timestamp_dir):
        algo = r["config"]["algorithm"]
        span = r["metrics"]["makespan"]
        if algo not in best or span < best[algo]:
            best[algo] = span
    return best
