"""Code quality checks for Java sources."""

import hashlib
from collections import defaultdict

from loguru import logger
from tree_sitter import Node

from ..models import Finding, violation
from ..parser_loader import JavaSource
from ..processing import CheckTask, ParallelCheckRunner, run_sequential
from ..utils.ast_helpers import (
    FIELD_TYPES,
    block_statements,
    enclosing_class_or_interface,
    find_nodes_by_type,
    get_declarators,
    get_end_line_number,
    get_line_number,
    get_name,
    get_node_text,
    get_parameter_type,
    get_parameters,
    has_modifier,
    normalize_whitespace,
    same_node,
)

BLOCK_TYPES = ("block", "constructor_body")


class QualityAnalyzer:
    """Runs duplicate detection, access tightening and stream suggestions, in that order."""

    def tasks(self, source: JavaSource) -> list[CheckTask]:
        root = source.root
        return [
            CheckTask(name="duplicates", run=lambda: self.check_duplicates(root)),
            CheckTask(name="access_modifiers", run=lambda: self.check_access_modifiers(root)),
            CheckTask(name="streams", run=lambda: self.check_streams(root)),
        ]

    def analyze(
        self, source: JavaSource, runner: ParallelCheckRunner | None = None
    ) -> list[Finding]:
        tasks = self.tasks(source)
        findings = runner.run(tasks) if runner is not None else run_sequential(tasks)
        logger.info(f"Quality analysis found {len(findings)} issues")
        return findings

    def check_duplicates(self, root: Node | None) -> list[Finding]:
        """Group blocks whose indentation-stripped text hashes the same.

        Groups are reported in the order their first block appears.
        """
        if root is None:
            return []
        positions: dict[str, list[tuple[int, int]]] = defaultdict(list)
        for block in find_nodes_by_type(root, BLOCK_TYPES):
            digest = hashlib.sha256(normalize_block(block).encode("utf-8")).hexdigest()
            positions[digest].append((get_line_number(block), get_end_line_number(block)))

        findings = []
        for spans in positions.values():
            if len(spans) > 1:
                details = ", ".join(f"lines {start} to {end}" for start, end in spans)
                findings.append(
                    Finding(
                        message=f"Violation: Duplicate code found in blocks at {details}.",
                        line=spans[0][0],
                    )
                )
        return findings

    def check_access_modifiers(self, root: Node | None) -> list[Finding]:
        """Non-private fields and methods never referenced from another class."""
        if root is None:
            return []
        field_accesses = find_nodes_by_type(root, "field_access")
        calls = find_nodes_by_type(root, "method_invocation")

        findings = []
        for declaration in find_nodes_by_type(root, (*FIELD_TYPES, "method_declaration")):
            if has_modifier(declaration, "private"):
                continue
            owner = enclosing_class_or_interface(declaration)
            if declaration.type in FIELD_TYPES:
                declarators = get_declarators(declaration)
                if not declarators:
                    continue
                name = get_name(declarators[0])
                used_outside = any(
                    get_node_text(access.child_by_field_name("field")) == name
                    and not same_node(enclosing_class_or_interface(access), owner)
                    for access in field_accesses
                )
                description = "field '" + ", ".join(get_name(d) for d in declarators) + "'"
            else:
                name = get_name(declaration)
                used_outside = any(
                    get_name(call) == name
                    and not same_node(enclosing_class_or_interface(call), owner)
                    for call in calls
                )
                description = f"method '{method_signature(declaration)}'"

            if not used_outside:
                findings.append(
                    violation(
                        get_line_number(declaration),
                        f"Access modifier for {description} can be more restrictive.",
                    )
                )
        return findings

    def check_streams(self, root: Node | None) -> list[Finding]:
        if root is None:
            return []
        findings = []
        for loop in find_nodes_by_type(root, "enhanced_for_statement"):
            if can_use_streams(loop):
                line = get_line_number(loop)
                findings.append(
                    violation(
                        line, f"Consider refactoring loop at line {line} to use streams and lambdas."
                    )
                )
        return findings


def normalize_block(block: Node) -> str:
    return "\n".join(line.lstrip() for line in get_node_text(block).splitlines())


def method_signature(method: Node) -> str:
    """``name(T1, T2)`` with varargs written as arrays."""
    types = []
    for param in get_parameters(method):
        type_text = normalize_whitespace(get_node_text(get_parameter_type(param)))
        if param.type == "spread_parameter":
            type_text += "[]"
        types.append(type_text)
    return f"{get_name(method)}({', '.join(types)})"


def can_use_streams(loop: Node) -> bool:
    body = loop.child_by_field_name("body")
    if body is None or body.type != "block":
        return False
    statements = block_statements(body)
    return bool(statements) and all(is_simple_operation(s) for s in statements)


def is_simple_operation(statement: Node) -> bool:
    if statement.type == "expression_statement":
        return True
    if statement.type == "if_statement":
        consequence = statement.child_by_field_name("consequence")
        if consequence is None or consequence.type != "block":
            return False
        inner = block_statements(consequence)
        return len(inner) == 1 and is_simple_operation(inner[0])
    return False
