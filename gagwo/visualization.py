import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from gagwo.evaluation import machine_loads  # noqa: E402
from gagwo.models import JobSet  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def save_machine_load_chart(
    assignment: Sequence[int],
    jobs: JobSet,
    machines: int,
    filepath: str,
    show_legend: Optional[bool] = None,
) -> str:
    """Stacked horizontal bars: one row per machine, one segment per assigned job.

    - Adaptive figure size based on number of machines and jobs.
    - Legend disabled automatically for large job counts unless forced.
    """
    n = len(jobs)
    loads = machine_loads(assignment, jobs, machines)
    span = max(loads)

    base_w, base_h = 10, 0.5 * machines + 2
    fig, ax = plt.subplots(
        figsize=(min(base_w + n * 0.05, 18), min(base_h, 16)),
        constrained_layout=True,
    )
    cmap = plt.get_cmap("tab20")
    colors = [cmap(i % 20) for i in range(n)]
    offsets = [0.0] * machines
    for j, machine in enumerate(assignment):
        duration = jobs.jobs[j].run_time
        ax.barh(
            machine,
            duration,
            left=offsets[machine],
            height=0.8,
            color=colors[j],
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        offsets[machine] += duration
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    ax.set_title(f"Machine loads - makespan = {span:g}", fontsize=14, fontweight="bold")
    ax.set_yticks(range(machines))
    ax.set_yticklabels([f"M{i}" for i in range(machines)])
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    ax.set_ylim(-0.5, machines - 0.5)
    ax.axvline(x=span, color="red", linestyle="--", linewidth=1.2)

    if show_legend is None:
        show_legend = n <= 40
    if show_legend:
        legend_elements = [
            plt.Rectangle(
                (0, 0),
                1,
                1,
                facecolor=colors[j],
                alpha=0.85,
                edgecolor="black",
                label=f"Job {jobs.jobs[j].job_number}",
            )
            for j in range(n)
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
            ncol=1 if n <= 25 else 2,
        )

    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=180)
    plt.close(fig)
    return filepath


def save_convergence_plot(
    histories: Dict[str, List[float]],
    filepath: Optional[str] = None,
    labels: Optional[Dict[str, str]] = None,
    results_folder: str = "results",
) -> str:
    """Draw best fitness per generation for several runs on one plot and save it."""
    fig, ax = plt.subplots(figsize=(10, 6), constrained_layout=True)
    if labels is None:
        labels = {}
    for key, values in histories.items():
        generations = list(range(len(values)))
        ax.plot(
            generations,
            values,
            label=labels.get(key, key),
            linewidth=2,
            marker="o" if len(values) <= 60 else None,
            markersize=4,
            markerfacecolor="white",
            markeredgewidth=1.0,
        )
        if values:
            ax.annotate(
                f"{values[-1]:g}",
                xy=(generations[-1], values[-1]),
                xytext=(6, -10),
                textcoords="offset points",
                fontsize=9,
                color="black",
                bbox=dict(boxstyle="round,pad=0.2", facecolor="white", alpha=0.55),
            )
    ax.set_xlabel("Generation", fontsize=12)
    ax.set_ylabel("Best makespan", fontsize=12)
    ax.set_title("Convergence comparison", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)
    ax.legend(
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        frameon=False,
        fontsize=9,
        borderaxespad=0.0,
    )
    if filepath is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(results_folder, f"convergence_{timestamp}.png")
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=180)
    plt.close(fig)
    return filepath
