"""Test code quality checks."""

import pytest

from codebase_audit import analyze_quality, parse_java
from codebase_audit.analysis.quality import QualityAnalyzer, method_signature
from codebase_audit.utils.ast_helpers import find_nodes_by_type


class TestQualityAnalysis:
    """Test duplicate blocks, access modifiers and stream suggestions."""

    @pytest.fixture(scope="class")
    def analyzer(self):
        return QualityAnalyzer()

    def messages(self, findings) -> list[str]:
        return [finding.message for finding in findings]

    def test_duplicate_blocks(self, analyzer):
        code = """public class A {
    void a(int x) {
        if (x > 0) {
            x++;
            log(x);
        }
    }
    void b(int x) {
            if (x > 0) {
                x++;
                log(x);
            }
    }
}
"""
        found = self.messages(analyzer.check_duplicates(parse_java(code).root))
        assert found == [
            "Violation: Duplicate code found in blocks at lines 2 to 7, lines 8 to 13.",
            "Violation: Duplicate code found in blocks at lines 3 to 6, lines 9 to 12.",
        ]

    def test_distinct_blocks_not_reported(self, analyzer):
        code = """public class A {
    void a(int x) { x++; }
    void b(int x) { x--; }
}
"""
        assert analyzer.check_duplicates(parse_java(code).root) == []

    def test_access_modifiers(self, analyzer):
        code = """public class A {
    int value;
    private int hidden;
    public void helper() {}
    public void run() {}
    void use(A a) {}
}
class B {
    private void call(A a) { a.run(); }
}
"""
        found = self.messages(analyzer.check_access_modifiers(parse_java(code).root))
        assert found == [
            "Violation at line 2: Access modifier for field 'value' can be more restrictive.",
            "Violation at line 4: Access modifier for method 'helper()' can be more restrictive.",
            "Violation at line 6: Access modifier for method 'use(A)' can be more restrictive.",
        ]

    def test_field_used_from_other_class(self, analyzer):
        code = """public class A {
    int value, other;
}
class B {
    private int read(A a) { return a.value; }
}
"""
        assert analyzer.check_access_modifiers(parse_java(code).root) == []

    def test_field_used_only_by_own_class(self, analyzer):
        code = """public class A {
    int value, other;
    private int read() { return this.value; }
}
"""
        found = self.messages(analyzer.check_access_modifiers(parse_java(code).root))
        assert found == [
            "Violation at line 2: Access modifier for field 'value, other' can be more restrictive."
        ]

    def test_method_signature_varargs(self):
        root = parse_java("class A { void m(int a, String... rest) {} }").root
        method = find_nodes_by_type(root, "method_declaration")[0]
        assert method_signature(method) == "m(int, String[])"

    def test_stream_refactoring_candidates(self, analyzer):
        code = """public class A {
    private void m(java.util.List<String> items, java.util.List<String> out) {
        for (String s : items) { out.add(s); }
        for (String s : items) { if (s != null) { out.add(s); } }
        for (String s : items) { return; }
        for (String s : items) {}
        for (String s : items) out.add(s);
        for (String s : items) { if (s != null) { out.add(s); out.add(s); } }
    }
}
"""
        found = self.messages(analyzer.check_streams(parse_java(code).root))
        assert found == [
            "Violation at line 3: Consider refactoring loop at line 3 to use streams and lambdas.",
            "Violation at line 4: Consider refactoring loop at line 4 to use streams and lambdas.",
        ]

    def test_missing_tree(self, analyzer):
        assert analyzer.check_duplicates(None) == []
        assert analyzer.check_access_modifiers(None) == []
        assert analyzer.check_streams(None) == []

    def test_suite_order(self):
        code = """public class A {
    int value;
    private void a(java.util.List<String> xs) { for (String s : xs) { use(s); } }
    private void b(java.util.List<String> xs) { for (String s : xs) { use(s); } }
}
"""
        result = analyze_quality(code, parallel=True)
        assert result.items == [
            "Violation: Duplicate code found in blocks at lines 3 to 3, lines 4 to 4.",
            "Violation: Duplicate code found in blocks at lines 3 to 3, lines 4 to 4.",
            "Violation at line 2: Access modifier for field 'value' can be more restrictive.",
            "Violation at line 3: Consider refactoring loop at line 3 to use streams and lambdas.",
            "Violation at line 4: Consider refactoring loop at line 4 to use streams and lambdas.",
        ]
        assert result.count == 5
