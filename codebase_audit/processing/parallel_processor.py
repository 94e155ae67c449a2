"""Runs independent checks over one parsed file, optionally on a thread pool."""

import os
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from loguru import logger

from ..exceptions import AnalysisTimeoutError
from ..models import Finding

DEFAULT_TIMEOUT = 60.0


@dataclass
class CheckTask:
    """A named check producing its own list of findings."""

    name: str
    run: Callable[[], list[Finding]]


@dataclass
class CheckResult:
    """Findings produced by one check."""

    name: str
    findings: list[Finding] = field(default_factory=list)
    elapsed: float = 0.0


def _execute(task: CheckTask) -> CheckResult:
    start_time = time.perf_counter()
    findings = task.run()
    return CheckResult(
        name=task.name,
        findings=list(findings) if findings is not None else [],
        elapsed=time.perf_counter() - start_time,
    )


class ParallelCheckRunner:
    """Dispatches checks to a bounded thread pool and waits for all of them.

    Each check writes to its own list. Results are merged in dispatch order,
    so output does not depend on scheduling.
    """

    def __init__(self, num_workers: int | None = None, timeout: float = DEFAULT_TIMEOUT):
        if num_workers is None:
            num_workers = os.cpu_count() or 1
        self.num_workers = max(1, num_workers)
        self.timeout = timeout

    def run(self, tasks: list[CheckTask]) -> list[Finding]:
        """Run ``tasks`` concurrently and return their merged findings.

        Raises:
            AnalysisTimeoutError: if any task is unfinished after ``timeout`` seconds.
        """
        if not tasks:
            return []

        start_time = time.time()
        executor = ThreadPoolExecutor(
            max_workers=min(self.num_workers, len(tasks)), thread_name_prefix="check"
        )
        try:
            futures = [executor.submit(_execute, task) for task in tasks]
            _, not_done = wait(futures, timeout=self.timeout)
            if not_done:
                pending = [task.name for task, future in zip(tasks, futures) if future in not_done]
                logger.error(f"Checks did not finish within {self.timeout}s: {', '.join(pending)}")
                raise AnalysisTimeoutError(
                    f"Analysis tasks did not complete within {self.timeout} seconds",
                    timeout=self.timeout,
                )

            results = []
            for task, future in zip(tasks, futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"Check '{task.name}' failed: {e}")
                    raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        logger.debug(
            f"Ran {len(tasks)} checks on {self.num_workers} workers "
            f"in {time.time() - start_time:.3f}s"
        )
        return merge_results(results)


def run_sequential(tasks: list[CheckTask]) -> list[Finding]:
    """Run ``tasks`` one after another in the calling thread."""
    return merge_results([_execute(task) for task in tasks])


def merge_results(results: list[CheckResult]) -> list[Finding]:
    findings: list[Finding] = []
    for result in results:
        logger.debug(f"Check '{result.name}' produced {len(result.findings)} findings")
        findings.extend(result.findings)
    return findings
