"""Test code style checks."""

import pytest

from codebase_audit import analyze_style, parse_java
from codebase_audit.analysis.style import (
    BRACE_PARENT_TYPES,
    StyleAnalyzer,
    integer_value,
    leading_spaces,
)
from codebase_audit.config import StyleConfig
from codebase_audit.processing import ParallelCheckRunner


class TestStyleAnalysis:
    """Test each style check on a small class."""

    @pytest.fixture(scope="class")
    def analyzer(self):
        return StyleAnalyzer(StyleConfig(max_workers=2, timeout=10.0))

    def messages(self, findings) -> list[str]:
        return [finding.message for finding in findings]

    def test_indentation(self, analyzer):
        """Statements must be one step deeper than the line opening their block."""
        code = """public class A {
    void m() {
      int x = 1;
        x++;
    }
}
"""
        found = self.messages(analyzer.check_indentation(parse_java(code)))
        assert found == [
            'Violation at line 3: Incorrect indentation . Expected: 8 spaces but got: 6. '
            'Line: "int x = 1;"'
        ]

    def test_indentation_custom_width(self):
        code = "public class A {\n  void m() {\n    run();\n  }\n}\n"
        analyzer = StyleAnalyzer(StyleConfig(indentation=2))
        assert analyzer.check_indentation(parse_java(code)) == []

    def test_brace_on_next_line(self, analyzer):
        code = """public class A {
    void m()
    {
        if (true)
        {
        }
    }
}
"""
        found = self.messages(analyzer.check_brace_style(parse_java(code).root))
        assert found == [
            "Violation at line 3: Opening brace should be on the same line as its parent statement.",
            "Violation at line 5: Opening brace should be on the same line as its parent statement.",
        ]

    def test_annotation_line_is_skipped(self, analyzer):
        code = """public class A {
    @Override
    public String toString() {
        return "";
    }
}
"""
        assert analyzer.check_brace_style(parse_java(code).root) == []

    def test_brace_parents_cover_types(self):
        assert {"class_declaration", "interface_declaration"} <= set(BRACE_PARENT_TYPES)

    def test_type_body_on_next_line_not_reported(self, analyzer):
        # class and interface bodies are not blocks
        code = "public class A\n{\n}\ninterface B\n{\n}\n"
        assert analyzer.check_brace_style(parse_java(code).root) == []

    def test_import_order(self, analyzer):
        code = "import java.util.List;\nimport java.io.File;\nimport java.util.Map;\nclass A {}\n"
        found = self.messages(analyzer.check_import_order(parse_java(code).root))
        assert found == [
            "Violation at line 2: Import Organisation : Import 'java.io.File' "
            "is not in alphabetical order."
        ]

    def test_variable_naming(self, analyzer):
        code = """public class A {
    private static final int max_size = 1;
    private int Count;
    private final int LIMIT = 2;
    void m() {
        int Bad_name = 0;
        int good = 0;
    }
}
"""
        found = self.messages(analyzer.check_variable_naming(parse_java(code).root))
        assert found == [
            "Violation at line 2: Constant variable name 'max_size' should be all uppercase.",
            "Violation at line 3: Variable name 'Count' should follow camelCase naming convention.",
            "Violation at line 6: Local variable name 'Bad_name' should follow camelCase "
            "naming convention.",
        ]

    def test_for_each_variable_is_a_local(self, analyzer):
        code = """public class A {
    void m(java.util.List<String> items) {
        for (String Item : items) {
            use(Item);
        }
        for (String item : items) {
            use(item);
        }
    }
}
"""
        found = self.messages(analyzer.check_variable_naming(parse_java(code).root))
        assert found == [
            "Violation at line 3: Local variable name 'Item' should follow camelCase "
            "naming convention."
        ]

    def test_magic_numbers(self, analyzer):
        code = """public class A {
    int size = 10;
    void m(int x) {
        if (x > 42) { x = 0x1F; }
        long y = 5L;
        call(7L);
    }
}
"""
        found = self.messages(analyzer.check_magic_numbers(parse_java(code).root))
        assert found == [
            "Violation at line 4: Magic number '42' found without a named constant declaration.",
            "Violation at line 4: Magic number '31' found without a named constant declaration.",
        ]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("0", 0), ("1_000", 1000), ("0x1F", 31), ("0b101", 5), ("017", 15), ("0xFFFFFFFF", -1)],
    )
    def test_integer_value(self, text, expected):
        assert integer_value(text) == expected

    def test_leading_spaces_ignores_tabs(self):
        assert leading_spaces("    x") == 4
        assert leading_spaces("\tx") == 0

    def test_method_and_type_names(self, analyzer):
        code = """public class A {
    void DoThing() {}
    void doThing() {}
}
class lower {}
interface api {}
"""
        root = parse_java(code).root
        assert self.messages(analyzer.check_method_names(root)) == [
            "Violation at line 2: Method name 'DoThing' should start with a lowercase letter."
        ]
        assert self.messages(analyzer.check_type_names(root)) == [
            "Violation at line 5: Class or interface name 'lower' should start with an uppercase letter.",
            "Violation at line 6: Class or interface name 'api' should start with an uppercase letter.",
        ]

    def test_missing_inputs(self, analyzer):
        assert analyzer.check_indentation(None) == []
        assert analyzer.check_brace_style(None) == []
        assert analyzer.check_magic_numbers(None) == []

    def test_results_are_deterministic(self, analyzer):
        code = """import java.util.List;
import java.io.File;
public class a {
    void M()
    {
      int Total = 42;
        call(7);
    }
}
"""
        parsed = parse_java(code)
        first = analyze_style(parsed)
        second = StyleAnalyzer().analyze(parsed, ParallelCheckRunner(num_workers=1))
        assert first.items == [finding.message for finding in second]
        # indentation, braces, imports, names, magic numbers, method names, type names
        assert [item.split(": ", 1)[0] for item in first.items] == [
            "Violation at line 6",
            "Violation at line 5",
            "Violation at line 2",
            "Violation at line 6",
            "Violation at line 7",
            "Violation at line 4",
            "Violation at line 3",
        ]
