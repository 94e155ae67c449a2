"""Check execution, sequential or on a thread pool."""

from .parallel_processor import (
    CheckResult,
    CheckTask,
    ParallelCheckRunner,
    merge_results,
    run_sequential,
)

__all__ = [
    "CheckResult",
    "CheckTask",
    "ParallelCheckRunner",
    "merge_results",
    "run_sequential",
]
