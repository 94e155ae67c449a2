"""Code style checks for Java sources, run concurrently."""

import re

from loguru import logger
from tree_sitter import Node

from ..config import StyleConfig
from ..models import Finding, violation
from ..parser_loader import JavaSource
from ..processing import CheckTask, ParallelCheckRunner
from ..utils.ast_helpers import (
    CLASS_OR_INTERFACE_TYPES,
    FIELD_TYPES,
    INTEGER_LITERAL_TYPES,
    block_statements,
    find_nodes_by_type,
    get_import_name,
    get_line_number,
    get_name,
    get_node_text,
    get_parent_of_type,
    has_modifier,
    is_comment,
    is_declarator,
    iter_ancestors,
)

BLOCK_TYPES = ("block", "constructor_body")
BRACE_PARENT_TYPES = (
    "method_declaration",
    "constructor_declaration",
    "if_statement",
    *CLASS_OR_INTERFACE_TYPES,
)
ANNOTATION_TYPES = ("annotation", "marker_annotation")

CONSTANT_PATTERN = re.compile(r"[A-Z_]+")
CAMEL_CASE_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")


class StyleAnalyzer:
    """Seven style checks dispatched to a thread pool.

    Each check reads the shared tree and writes to its own list; findings
    come back in check order: indentation, braces, imports, variable names,
    magic numbers, method names, type names.
    """

    def __init__(self, config: StyleConfig | None = None):
        self.config = config or StyleConfig()

    def tasks(self, source: JavaSource) -> list[CheckTask]:
        root = source.root
        return [
            CheckTask("indentation", lambda: self.check_indentation(source)),
            CheckTask("brace_style", lambda: self.check_brace_style(root)),
            CheckTask("import_order", lambda: self.check_import_order(root)),
            CheckTask("variable_naming", lambda: self.check_variable_naming(root)),
            CheckTask("magic_numbers", lambda: self.check_magic_numbers(root)),
            CheckTask("method_names", lambda: self.check_method_names(root)),
            CheckTask("type_names", lambda: self.check_type_names(root)),
        ]

    def analyze(
        self, source: JavaSource, runner: ParallelCheckRunner | None = None
    ) -> list[Finding]:
        if runner is None:
            runner = ParallelCheckRunner(
                num_workers=self.config.max_workers, timeout=self.config.timeout
            )
        findings = runner.run(self.tasks(source))
        logger.info(f"Style analysis found {len(findings)} violations")
        return findings

    def check_indentation(self, source: JavaSource | None) -> list[Finding]:
        """Every statement sits one indentation step deeper than its block's opening line."""
        if source is None:
            return []
        findings = []
        for block in find_nodes_by_type(source.root, BLOCK_TYPES):
            expected = leading_spaces(source.line_text(get_line_number(block))) + self.config.indentation
            for statement in block_statements(block):
                line_number = get_line_number(statement)
                line = source.line_text(line_number)
                actual = leading_spaces(line)
                if actual != expected:
                    findings.append(
                        violation(
                            line_number,
                            f"Incorrect indentation . Expected: {expected} spaces but got: "
                            f'{actual}. Line: "{line.strip()}"',
                        )
                    )
        return findings

    def check_brace_style(self, root: Node | None) -> list[Finding]:
        if root is None:
            return []
        findings = []
        for block in find_nodes_by_type(root, BLOCK_TYPES):
            parent = block.parent
            if parent is None or parent.type not in BRACE_PARENT_TYPES:
                continue
            block_line = get_line_number(block)
            if block_line != signature_start_line(parent):
                findings.append(
                    violation(
                        block_line, "Opening brace should be on the same line as its parent statement."
                    )
                )
        return findings

    def check_import_order(self, root: Node | None) -> list[Finding]:
        if root is None:
            return []
        imports = find_nodes_by_type(root, "import_declaration")
        findings = []
        for previous, current in zip(imports, imports[1:]):
            current_name = get_import_name(current)
            if current_name < get_import_name(previous):
                findings.append(
                    violation(
                        get_line_number(current),
                        f"Import Organisation : Import '{current_name}' is not in alphabetical order.",
                    )
                )
        return findings

    def check_variable_naming(self, root: Node | None) -> list[Finding]:
        """Final fields are UPPER_CASE; other fields and locals are camelCase."""
        if root is None:
            return []
        findings = []
        for declarator in find_nodes_by_type(
            root, ("variable_declarator", "resource", "enhanced_for_statement")
        ):
            if declarator.type == "enhanced_for_statement":
                # The loop variable has no declarator node of its own
                name = get_node_text(declarator.child_by_field_name("name"))
                if name and not CAMEL_CASE_PATTERN.match(name):
                    findings.append(
                        violation(
                            get_line_number(declarator),
                            f"Local variable name '{name}' should follow camelCase naming convention.",
                        )
                    )
                continue
            if not is_declarator(declarator) or declarator.parent.type == "spread_parameter":
                continue
            name = get_name(declarator)
            line = get_line_number(declarator)
            field = get_parent_of_type(declarator, FIELD_TYPES)
            if field is not None:
                if has_modifier(field, "final"):
                    if not CONSTANT_PATTERN.fullmatch(name):
                        findings.append(
                            violation(line, f"Constant variable name '{name}' should be all uppercase.")
                        )
                elif not CAMEL_CASE_PATTERN.match(name):
                    findings.append(
                        violation(
                            line, f"Variable name '{name}' should follow camelCase naming convention."
                        )
                    )
            elif not CAMEL_CASE_PATTERN.match(name):
                findings.append(
                    violation(
                        line,
                        f"Local variable name '{name}' should follow camelCase naming convention.",
                    )
                )
        return findings

    def check_magic_numbers(self, root: Node | None) -> list[Finding]:
        """Integer literals used anywhere but a variable initializer."""
        if root is None:
            return []
        findings = []
        for literal in find_nodes_by_type(root, INTEGER_LITERAL_TYPES):
            text = get_node_text(literal)
            if text[-1:] in ("l", "L"):
                continue
            if any(is_declarator(ancestor) for ancestor in iter_ancestors(literal)):
                continue
            findings.append(
                violation(
                    get_line_number(literal),
                    f"Magic number '{integer_value(text)}' found without a named constant declaration.",
                )
            )
        return findings

    def check_method_names(self, root: Node | None) -> list[Finding]:
        if root is None:
            return []
        findings = []
        for method in find_nodes_by_type(root, "method_declaration"):
            name = get_name(method)
            if name and not name[0].islower():
                findings.append(
                    violation(
                        get_line_number(method),
                        f"Method name '{name}' should start with a lowercase letter.",
                    )
                )
        return findings

    def check_type_names(self, root: Node | None) -> list[Finding]:
        if root is None:
            return []
        findings = []
        for declaration in find_nodes_by_type(root, CLASS_OR_INTERFACE_TYPES):
            name = get_name(declaration)
            if name and not name[0].isupper():
                findings.append(
                    violation(
                        get_line_number(declaration),
                        f"Class or interface name '{name}' should start with an uppercase letter.",
                    )
                )
        return findings


def leading_spaces(line: str) -> int:
    """Count of leading space characters; tabs are not counted."""
    return len(line) - len(line.lstrip(" "))


def signature_start_line(declaration: Node) -> int:
    """First line of a declaration once leading annotations are skipped."""
    for child in declaration.children:
        if is_comment(child) or child.type in ANNOTATION_TYPES:
            continue
        if child.type == "modifiers":
            for token in child.children:
                if token.type not in ANNOTATION_TYPES and not is_comment(token):
                    return get_line_number(token)
            continue
        return get_line_number(child)
    return get_line_number(declaration)


def integer_value(text: str) -> int:
    """Value of an int literal as a 32-bit signed integer."""
    digits = text.replace("_", "")
    lowered = digits.lower()
    if lowered.startswith("0x"):
        value = int(digits[2:], 16)
    elif lowered.startswith("0b"):
        value = int(digits[2:], 2)
    elif len(digits) > 1 and digits.startswith("0"):
        value = int(digits[1:], 8)
    else:
        value = int(digits)
    if value >= 2**31:
        value -= 2**32
    return value
