"""Test cyclomatic complexity scoring."""

import pytest

from codebase_audit import analyze_complexity, parse_java
from codebase_audit.analysis.complexity import ComplexityAnalyzer, count_switch_entries
from codebase_audit.utils.ast_helpers import find_nodes_by_type


class TestComplexityAnalysis:
    """Test the recursive complexity metric."""

    @pytest.fixture(scope="class")
    def analyzer(self):
        return ComplexityAnalyzer()

    def score(self, analyzer, code: str) -> int:
        return analyzer.score(parse_java(code).root)

    def test_empty_class_scores_one(self, analyzer):
        assert self.score(analyzer, "public class A {}") == 1

    def test_class_with_empty_method_scores_two(self, analyzer):
        assert self.score(analyzer, "public class A { void m() {} }") == 2

    def test_no_declarations_scores_zero(self, analyzer):
        assert self.score(analyzer, "import java.util.List;") == 0

    def test_switch_counts_each_entry(self, analyzer):
        code = """
public class A {
    int m(int x) {
        switch (x) {
            case 1: return 1;
            case 2: return 2;
            default: return 0;
        }
    }
}
"""
        # 3 entries + method + class
        assert self.score(analyzer, code) == 5

    def test_count_switch_entries_with_stacked_labels(self):
        code = """
public class A {
    void m(int x) {
        switch (x) {
            case 1:
            case 2:
                break;
            default:
                break;
        }
    }
}
"""
        switch = find_nodes_by_type(parse_java(code).root, "switch_expression")[0]
        assert count_switch_entries(switch) == 3

    def test_branches_are_not_descended(self, analyzer):
        code = """
public class A {
    void m(boolean a, int[] xs) {
        if (a) {
            for (int x : xs) {
                while (x > 0) { x--; }
            }
        }
        while (a) { a = false; }
    }
}
"""
        # if + while + method + class; the nested loops are not counted
        assert self.score(analyzer, code) == 4

    def test_catch_inside_try_is_not_counted(self, analyzer):
        code = """
public class A {
    void m() {
        try {
            run();
        } catch (Exception e) {
            if (e != null) { log(e); }
        }
    }
}
"""
        assert self.score(analyzer, code) == 2

    def test_nested_class_scores_recursively(self, analyzer):
        code = "class A { class B { void m() {} } }"
        assert self.score(analyzer, code) == 3

    def test_constructor_is_not_a_declaration_point(self, analyzer):
        code = "class A { A() { if (true) {} } }"
        assert self.score(analyzer, code) == 2

    def test_service_returns_result(self):
        result = analyze_complexity("public class A { void m() { if (true) {} } }")
        assert result.cyclomatic_complexity == 3
        assert result.to_dict()["cyclomaticComplexity"] == 3

    def test_score_is_idempotent(self, analyzer):
        code = "public class A { void m(int x) { for (;;) {} do {} while (x > 0); } }"
        assert self.score(analyzer, code) == self.score(analyzer, code) == 4

    def test_missing_tree_scores_zero(self, analyzer):
        assert analyzer.score(None) == 0
