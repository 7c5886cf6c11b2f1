import random

from gagwo.models import Job, JobSet


def generate_jobs(n: int, seed: int = 0, low: int = 1, high: int = 99) -> JobSet:
    """Generate a synthetic trace with integer run times drawn from [low, high]."""
    if n <= 0:
        raise ValueError(f"n must be > 0, got {n}")
    rng = random.Random(seed)
    return JobSet(tuple(Job(job_number=i + 1, run_time=rng.randint(low, high)) for i in range(n)))
