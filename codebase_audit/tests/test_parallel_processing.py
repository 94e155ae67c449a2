"""Test the concurrent check runner."""

import threading
from unittest.mock import patch

import pytest

from codebase_audit import AnalysisTimeoutError, analyze_style
from codebase_audit.models import Finding
from codebase_audit.processing import (
    CheckResult,
    CheckTask,
    ParallelCheckRunner,
    merge_results,
    run_sequential,
)


def findings_task(name: str, *messages: str) -> CheckTask:
    return CheckTask(name=name, run=lambda: [Finding(message=m) for m in messages])


class TestParallelCheckRunner:
    """Test ordering, timeouts and error propagation."""

    def test_results_merged_in_dispatch_order(self):
        gate = threading.Event()

        def slow_first():
            gate.wait(timeout=5)
            return [Finding(message="first")]

        def fast_second():
            gate.set()
            return [Finding(message="second")]

        runner = ParallelCheckRunner(num_workers=2, timeout=10.0)
        tasks = [CheckTask("slow", slow_first), CheckTask("fast", fast_second)]
        assert [f.message for f in runner.run(tasks)] == ["first", "second"]

    def test_empty_task_list(self):
        assert ParallelCheckRunner().run([]) == []

    def test_none_result_counts_as_no_findings(self):
        runner = ParallelCheckRunner(num_workers=1)
        assert runner.run([CheckTask("nothing", lambda: None)]) == []

    def test_timeout_raises(self):
        release = threading.Event()
        runner = ParallelCheckRunner(num_workers=1, timeout=0.05)
        try:
            with pytest.raises(AnalysisTimeoutError) as exc_info:
                runner.run([CheckTask("blocked", lambda: release.wait(timeout=5) and [])])
            assert exc_info.value.timeout == 0.05
        finally:
            release.set()

    def test_task_error_propagates(self):
        def broken():
            raise ValueError("boom")

        runner = ParallelCheckRunner(num_workers=2)
        with pytest.raises(ValueError, match="boom"):
            runner.run([findings_task("ok", "fine"), CheckTask("broken", broken)])

    def test_worker_count_is_at_least_one(self):
        assert ParallelCheckRunner(num_workers=0).num_workers == 1

    def test_sequential_matches_parallel(self):
        tasks = [findings_task("a", "1", "2"), findings_task("b"), findings_task("c", "3")]
        sequential = [f.message for f in run_sequential(tasks)]
        parallel = [f.message for f in ParallelCheckRunner(num_workers=3).run(tasks)]
        assert sequential == parallel == ["1", "2", "3"]

    def test_merge_results(self):
        results = [
            CheckResult("a", [Finding("x")]),
            CheckResult("b"),
            CheckResult("c", [Finding("y"), Finding("z")]),
        ]
        assert [f.message for f in merge_results(results)] == ["x", "y", "z"]

    def test_style_analysis_surfaces_timeout(self):
        error = AnalysisTimeoutError("Analysis tasks did not complete within 1.0 seconds", 1.0)
        with patch(
            "codebase_audit.analysis.style.ParallelCheckRunner.run", side_effect=error
        ):
            with pytest.raises(AnalysisTimeoutError):
                analyze_style("public class A {}")
