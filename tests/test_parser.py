"""Pytest tests for job trace loading.

Each test either reads the bundled fixture or writes a temporary trace and
asserts successful parsing or the correct exception.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gagwo.models import Job, JobSet
from gagwo.parser import JsonJobSource, load_jobs, parse_job_records
from gagwo.trace_gen import generate_jobs


def test_load_fixture_trace(trace_path: str) -> None:
    jobs = load_jobs(trace_path)
    assert len(jobs) == 5
    assert jobs.run_times == [5.0, 3.0, 10.0, 8.0, 2.0]
    assert jobs.total_run_time == 28.0
    first = jobs.jobs[0]
    assert first.job_number == 1
    # other trace columns are carried untouched
    assert first.fields == {"Submit Time": 0, "User ID": 3, "Status": "1"}


def test_limit_keeps_first_records(trace_path: str) -> None:
    jobs = JsonJobSource(trace_path, limit=3).load()
    assert [j.job_number for j in jobs.jobs] == [1, 2, 3]


def test_job_number_defaults_to_position() -> None:
    jobs = parse_job_records([{"Run Time": 4}, {"Run Time": 0}])
    assert [j.job_number for j in jobs.jobs] == [0, 1]
    assert jobs.run_times == [4.0, 0.0]


def test_bundled_dataset_loads() -> None:
    path = Path(__file__).resolve().parents[1] / "data" / "job_scheduling_dataset.json"
    jobs = load_jobs(str(path), limit=30)
    assert len(jobs) == 30
    assert all(j.run_time >= 0 for j in jobs.jobs)


@pytest.mark.parametrize(
    "content",
    [
        {"Run Time": 3},  # not an array
        [],  # no jobs
        [{"Job Number": 1}],  # missing run time
        [{"Run Time": -5}],  # negative run time
        [{"Run Time": "abc"}],  # not numeric
        [{"Run Time": float("nan")}, {"Run Time": 3}],  # NaN literal
        [{"Run Time": float("inf")}],  # Infinity literal
        [[1, 2, 3]],  # record not an object
    ],
)
def test_parse_errors(tmp_path: Path, content) -> None:
    path = tmp_path / "trace.json"
    path.write_text(json.dumps(content), encoding="utf-8")
    with pytest.raises(ValueError):
        load_jobs(str(path))


def test_non_positive_limit_rejected(trace_path: str) -> None:
    with pytest.raises(ValueError):
        load_jobs(trace_path, limit=0)


def test_jobset_rejects_empty_negative_and_non_finite() -> None:
    with pytest.raises(ValueError):
        JobSet(())
    with pytest.raises(ValueError):
        Job(job_number=1, run_time=-1)
    for bad in (float("nan"), float("inf")):
        with pytest.raises(ValueError):
            Job(job_number=2, run_time=bad)
    with pytest.raises(ValueError):
        parse_job_records([{"Run Time": "nan"}])


def test_generate_jobs_is_seeded() -> None:
    a = generate_jobs(20, seed=5)
    b = generate_jobs(20, seed=5)
    assert a.run_times == b.run_times
    assert all(1 <= t <= 99 for t in a.run_times)
    assert generate_jobs(20, seed=6).run_times != a.run_times
    with pytest.raises(ValueError):
        generate_jobs(0)
