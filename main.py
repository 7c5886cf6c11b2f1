#!/usr/bin/env python3


import argparse
import json
import logging
import os
import random
from datetime import datetime

import yaml

from gagwo.algorithms import ALGORITHMS, run_algorithm
from gagwo.experiments.aggregate import best_by_algorithm, write_summary_csv
from gagwo.experiments.runner import ExperimentRunner, generate_plan
from gagwo.metrics import report_metrics
from gagwo.models import JobSet, OptimizerConfig
from gagwo.parser import load_jobs
from gagwo.trace_gen import generate_jobs
from gagwo.visualization import save_convergence_plot, save_machine_load_chart

logger = logging.getLogger("gagwo")

LABELS = {
    "ga_gwo": "GA-GWO hybrid",
    "random": "Random search",
}


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from YAML file."""
    with open(config_file, "r", encoding="utf-8") as file:
        config = yaml.safe_load(file)
    return config or {}


def load_job_set(jobs_cfg: dict) -> JobSet:
    """Read the trace named in ``jobs.input_file`` or synthesise one via ``jobs.generator``."""
    gen_cfg = jobs_cfg.get("generator", {})
    if gen_cfg.get("enabled"):
        n = gen_cfg.get("n")
        if n is None:
            raise ValueError("Generator enabled but 'n' not provided in jobs.generator")
        return generate_jobs(
            int(n),
            seed=int(gen_cfg.get("seed", 0)),
            low=int(gen_cfg.get("low", 1)),
            high=int(gen_cfg.get("high", 99)),
        )
    input_file = jobs_cfg.get("input_file")
    if not input_file:
        raise ValueError("Either jobs.input_file or jobs.generator.enabled must be set")
    return load_jobs(input_file, limit=jobs_cfg.get("limit"))


def build_optimizer_config(opt_cfg: dict) -> OptimizerConfig:
    return OptimizerConfig(
        machines=int(opt_cfg.get("machines", 5)),
        population_size=int(opt_cfg.get("population_size", 20)),
        max_iteration=int(opt_cfg.get("max_iteration", 1000)),
        crossover_rate=float(opt_cfg.get("crossover_rate", 0.5)),
        mutation_rate=float(opt_cfg.get("mutation_rate", 0.1)),
    )


def run_single(
    algorithm: str,
    jobs: JobSet,
    opt_config: OptimizerConfig,
    seed,
    out_dir: str,
) -> dict:
    """Run one algorithm, save its load chart and JSON summary, return the summary."""
    rng = random.Random(seed) if seed is not None else random.Random()
    result = run_algorithm(
        algorithm,
        jobs,
        opt_config,
        rng=rng,
        iter_log_path=os.path.join(out_dir, f"iter_log_{algorithm}.csv"),
    )
    metrics = report_metrics(result.best_assignment, jobs, opt_config.machines)
    if metrics.degenerate:
        logger.warning("[%s] every job has zero run time; ratios reported as 0.0", algorithm)
    logger.info(
        "[%s] Makespan: %.2f Utilization: %.2f Load Balancing: %.2f",
        algorithm,
        metrics.makespan,
        metrics.utilization,
        metrics.load_balance_deviation,
    )
    chart = save_machine_load_chart(
        result.best_assignment,
        jobs,
        opt_config.machines,
        os.path.join(out_dir, f"machine_loads_{algorithm}.png"),
    )
    logger.info("Saved machine load chart to %s", chart)
    summary = {
        "algorithm": algorithm,
        "seed": seed,
        "best_assignment": result.best_assignment,
        "metrics": metrics.to_dict(),
        "evaluations": result.evaluations,
        "elapsed_ms": result.elapsed_ms,
        "history": result.history,
    }
    with open(os.path.join(out_dir, f"result_{algorithm}.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    return summary


def run_compare_mode(
    algorithms: list,
    jobs: JobSet,
    opt_config: OptimizerConfig,
    seed,
    out_dir: str,
) -> dict:
    """Run every algorithm on the same seed and plot their convergence side by side."""
    summaries = {a: run_single(a, jobs, opt_config, seed, out_dir) for a in algorithms}
    plot_path = save_convergence_plot(
        {a: s["history"] for a, s in summaries.items()},
        filepath=os.path.join(out_dir, "convergence.png"),
        labels=LABELS,
    )
    logger.info("Saved convergence comparison to %s", plot_path)
    for a, s in summaries.items():
        logger.info("Final makespan for %s: %s", LABELS.get(a, a), s["metrics"]["makespan"])
    return summaries


def run_experiment(exp_cfg: dict, jobs: JobSet, opt_config: OptimizerConfig, results_folder: str):
    plan = generate_plan(
        opt_config,
        repeats=int(exp_cfg.get("repeats", 1)),
        algorithms=exp_cfg.get("algorithms"),
    )
    runner = ExperimentRunner(os.path.join(results_folder, "experiments"))
    runner.run(plan, jobs)
    write_summary_csv(runner.timestamp_dir)
    for algo, span in best_by_algorithm(runner.timestamp_dir).items():
        logger.info("[Experiment] best makespan %s: %s", LABELS.get(algo, algo), span)
    return runner.timestamp_dir


def main(config_file: str = "config.yaml") -> None:
    config = load_config(config_file)
    general_cfg = config.get("general", {})

    log_level = general_cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    jobs = load_job_set(config.get("jobs", {}))
    opt_config = build_optimizer_config(config.get("optimizer", {}))
    results_folder = config.get("visualization", {}).get("results_folder", "results")

    exp_cfg = config.get("experiment", {})
    if exp_cfg.get("enabled"):
        logger.info("[Main] Experiment batch mode over algorithms / seeds.")
        run_experiment(exp_cfg, jobs, opt_config, results_folder)
        logger.info("[Main] Experiment batch completed.")
        return

    algorithm = general_cfg.get("algorithm", "compare")
    if algorithm == "compare":
        algorithms = list(ALGORITHMS)
    elif algorithm in ALGORITHMS:
        algorithms = [algorithm]
    else:
        raise ValueError(f"Unknown algorithm: use 'compare' or one of {sorted(ALGORITHMS)}")

    seed = general_cfg.get("seed")
    out_dir = os.path.join(
        results_folder,
        f"{algorithm}_n{len(jobs)}_m{opt_config.machines}_{datetime.now().strftime('%Y%m%d_%H%M%S')}",
    )
    os.makedirs(out_dir, exist_ok=True)
    run_compare_mode(algorithms, jobs, opt_config, seed, out_dir)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="GA-GWO job-to-machine assignment")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML config file")
    args = parser.parse_args()
    if not os.path.isfile(args.config):
        raise FileNotFoundError(f"Config file not found: {args.config}")
    main(args.config)
