import os
from typing import Optional

from photocurator.shared.constants import MAX_WORKERS_CAP


def worker_count(task_count: int, max_workers: Optional[int] = None) -> int:
    """Thread pool size: min(cap, cpu count, tasks), never below 1."""
    cap = max_workers if max_workers is not None else MAX_WORKERS_CAP
    return max(1, min(cap, os.cpu_count() or 4, task_count))
