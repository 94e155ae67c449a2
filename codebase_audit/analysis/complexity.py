"""Cyclomatic complexity scoring over a Java syntax tree."""

from loguru import logger
from tree_sitter import Node

from ..utils.ast_helpers import CLASS_OR_INTERFACE_TYPES

LOOP_TYPES = ("while_statement", "for_statement", "enhanced_for_statement", "do_statement")
TRY_TYPES = ("try_statement", "try_with_resources_statement")
DECLARATION_TYPES = ("method_declaration", *CLASS_OR_INTERFACE_TYPES)

# Places where a switch stands on its own as a statement
_STATEMENT_CONTAINERS = {
    "program",
    "block",
    "constructor_body",
    "switch_block_statement_group",
    "switch_rule",
    "labeled_statement",
    "if_statement",
    "while_statement",
    "for_statement",
    "enhanced_for_statement",
    "do_statement",
    "static_initializer",
}


class ComplexityAnalyzer:
    """Computes a file-level cyclomatic complexity score.

    A node scores the sum of its children's contributions, plus one when the
    node is itself a method or class/interface declaration. Branching
    statements contribute without being descended into, so nesting inside an
    ``if`` or a loop body does not add to the score. Nested declarations are
    scored recursively and added to their parent's sum.
    """

    def score(self, node: Node | None) -> int:
        if node is None:
            return 0
        complexity = 0
        for child in node.children:
            contribution = self._contribution(child)
            complexity += contribution
            if contribution:
                logger.debug(
                    f"Complexity {child.type} at line {child.start_point[0] + 1}: "
                    f"+{contribution} (cumulative {complexity})"
                )
        if node.type in DECLARATION_TYPES:
            complexity += 1
        return complexity

    def _contribution(self, node: Node) -> int:
        if node.type == "if_statement":
            return 1
        if is_switch_statement(node):
            return count_switch_entries(node)
        if node.type in LOOP_TYPES:
            return 1
        if node.type == "catch_clause":
            parent = node.parent
            return 0 if parent is not None and parent.type in TRY_TYPES else 1
        if node.type in DECLARATION_TYPES:
            return self.score(node)
        return sum(self._contribution(child) for child in node.children)


def is_switch_statement(node: Node) -> bool:
    """True for a switch used as a statement rather than as a value."""
    if node.type == "switch_statement":
        return True
    if node.type != "switch_expression":
        return False
    parent = node.parent
    return parent is None or parent.type in _STATEMENT_CONTAINERS


def count_switch_entries(switch: Node) -> int:
    """Number of case entries, ``default`` included.

    Stacked labels (``case 1: case 2:``) are separate entries; an arrow rule
    is one entry however many constants it lists.
    """
    body = switch.child_by_field_name("body")
    if body is None:
        return 0
    entries = 0
    for child in body.named_children:
        if child.type == "switch_block_statement_group":
            entries += sum(1 for label in child.named_children if label.type == "switch_label")
        elif child.type == "switch_rule":
            entries += 1
    return entries


def calculate_complexity(node: Node | None) -> int:
    """Score a tree with a fresh analyzer."""
    return ComplexityAnalyzer().score(node)
