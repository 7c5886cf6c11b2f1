"""Job trace loading.

Traces are JSON arrays of records keyed the way Standard Workload Format
columns are named, e.g.::

    [{"Job Number": 1, "Submit Time": 0, "Run Time": 120, "User ID": 3, ...}, ...]

Only ``"Run Time"`` is required. ``"Job Number"`` falls back to the record's
position; every other key is kept in ``Job.fields``.
"""

from __future__ import annotations

import json
import math
from typing import Any, Protocol

from .models import Job, JobSet

RUN_TIME_KEY = "Run Time"
JOB_NUMBER_KEY = "Job Number"


class JobSource(Protocol):
    def load(self) -> JobSet: ...


def parse_job_records(records: Any, limit: int | None = None) -> JobSet:
    if not isinstance(records, list):
        raise ValueError(f"Job trace must be a JSON array, got {type(records).__name__}")
    if limit is not None:
        if limit <= 0:
            raise ValueError(f"limit must be > 0, got {limit}")
        records = records[:limit]

    jobs: list[Job] = []
    for idx, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ValueError(f"Record {idx} is not an object")
        if RUN_TIME_KEY not in rec:
            raise ValueError(f"Record {idx} has no '{RUN_TIME_KEY}' field")
        try:
            run_time = float(rec[RUN_TIME_KEY])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Record {idx}: invalid '{RUN_TIME_KEY}' {rec[RUN_TIME_KEY]!r}") from e
        if not math.isfinite(run_time):
            raise ValueError(f"Record {idx}: non-finite '{RUN_TIME_KEY}' {run_time}")
        if run_time < 0:
            raise ValueError(f"Record {idx}: negative '{RUN_TIME_KEY}' {run_time}")
        job_number = int(rec.get(JOB_NUMBER_KEY, idx))
        extra = {k: v for k, v in rec.items() if k not in (RUN_TIME_KEY, JOB_NUMBER_KEY)}
        jobs.append(Job(job_number=job_number, run_time=run_time, fields=extra))

    if not jobs:
        raise ValueError("Job trace contains no jobs")
    return JobSet(tuple(jobs))


class JsonJobSource:
    """Reads a JSON job trace; ``limit`` keeps only the first N records."""

    def __init__(self, path: str, limit: int | None = None):
        self.path = path
        self.limit = limit

    def load(self) -> JobSet:
        with open(self.path, "r", encoding="utf-8") as f:
            records = json.load(f)
        return parse_job_records(records, limit=self.limit)


def load_jobs(file_path: str, limit: int | None = None) -> JobSet:
    return JsonJobSource(file_path, limit=limit).load()
