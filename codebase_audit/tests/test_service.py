"""Test the service entry points and configuration loading."""

import json

import pytest

from codebase_audit import (
    CombinedResult,
    ConfigurationError,
    ParseError,
    analyze_all,
    analyze_complexity,
    analyze_quality,
    analyze_security,
    analyze_smells,
    analyze_style,
    parse_java,
)
from codebase_audit.config import AnalysisConfig, SmellThresholds, load_insecure_imports

SAMPLE = """import java.util.Random;

/** Sample. */
public class Sample {
    private static int hits = 0;

    /** Entry. */
    public void run(int a, int b, int c) {
        hits = hits + 1;
    }
}
"""


class TestService:
    def test_invalid_source_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse_java("public class A { int x = ; }")
        assert exc_info.value.line == 1

    @pytest.mark.parametrize(
        "entry_point",
        [
            analyze_style,
            analyze_complexity,
            analyze_security,
            analyze_smells,
            analyze_quality,
            analyze_all,
        ],
    )
    def test_every_entry_point_rejects_invalid_source(self, entry_point):
        with pytest.raises(ParseError):
            entry_point("class {")
        with pytest.raises(ParseError):
            entry_point("int x = 5;\nSystem.out.println(x);\n")

    def test_top_level_statements_are_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_java("import java.util.List;\n\nint x = 5;\nclass A {}\n")
        assert exc_info.value.line == 3

    def test_compilation_unit_members_are_accepted(self):
        code = """package demo;

import java.util.List;

// helpers
enum Color { RED }
record Point(int x, int y) {}
@interface Marker {}
interface Shape {}
class A {}
"""
        assert len(parse_java(code).root.named_children) == 8

    def test_empty_source_is_accepted(self):
        assert parse_java("").root.named_children == []

    def test_analyze_all_matches_single_categories(self):
        combined = analyze_all(SAMPLE)
        assert isinstance(combined, CombinedResult)
        assert combined.style.items == analyze_style(SAMPLE).items
        assert combined.security.items == analyze_security(SAMPLE).items
        assert combined.smells.items == analyze_smells(SAMPLE).items
        assert combined.quality.items == analyze_quality(SAMPLE).items
        assert combined.complexity.cyclomatic_complexity == 2

    def test_analyze_all_parallel_matches_sequential(self):
        parsed = parse_java(SAMPLE)
        assert analyze_all(parsed, parallel=True).to_dict() == analyze_all(parsed).to_dict()

    def test_security_findings_on_sample(self):
        items = analyze_security(SAMPLE).items
        assert items[0].startswith("Violation at line 1: Insecure import used: java.util.Random.")
        assert any("race condition" in item for item in items)

    def test_custom_thresholds(self):
        config = AnalysisConfig(smells=SmellThresholds(max_method_params=4))
        items = analyze_smells(SAMPLE, config).items
        assert not any("Method Parameters" in item for item in items)
        assert any("Method Parameters" in item for item in analyze_smells(SAMPLE).items)


class TestInsecureImportTable:
    def test_packaged_table(self):
        table = load_insecure_imports()
        assert table["java.util.Random"] == "java.security.SecureRandom"

    def test_packaged_table_is_a_copy(self):
        load_insecure_imports()["java.util.Random"] = "changed"
        assert load_insecure_imports()["java.util.Random"] == "java.security.SecureRandom"

    def test_custom_table(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text(json.dumps({"insecureImports": {"java.util.Date": "java.time.Instant"}}))
        assert load_insecure_imports(path) == {"java.util.Date": "java.time.Instant"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_insecure_imports(tmp_path / "absent.json")

    def test_malformed_table(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text(json.dumps({"imports": []}))
        with pytest.raises(ConfigurationError):
            load_insecure_imports(path)
