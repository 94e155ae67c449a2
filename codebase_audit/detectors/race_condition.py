"""Unsynchronized access to static or volatile fields."""

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_declarators,
    get_modifiers,
    get_name,
    get_node_text,
    has_modifier,
    is_name_expression,
    iter_ancestors,
)
from .base import Detector


class RaceConditionDetector(Detector):
    """Shared resources are the first declared variable of each static or
    volatile field. Any read, write, field access or call naming one outside a
    ``synchronized`` block or method is reported.
    """

    name = "race_condition"

    def __init__(self, findings=None):
        super().__init__(findings)
        self.shared_resources: set[str] = set()

    def visit_field_declaration(self, node: Node) -> None:
        modifiers = get_modifiers(node)
        if "static" in modifiers or "volatile" in modifiers:
            declarators = get_declarators(node)
            if declarators:
                self.shared_resources.add(get_name(declarators[0]))

    # Interface constants
    visit_constant_declaration = visit_field_declaration

    def visit_method_invocation(self, node: Node) -> None:
        self._check_access(node, get_name(node))

    def visit_field_access(self, node: Node) -> None:
        self._check_access(node, get_node_text(node.child_by_field_name("field")))

    def visit_identifier(self, node: Node) -> None:
        if is_name_expression(node):
            self._check_access(node, get_node_text(node))

    def visit_assignment_expression(self, node: Node) -> None:
        target = node.child_by_field_name("left")
        if target is None or target.type != "identifier":
            return
        name = get_node_text(target)
        if name in self.shared_resources and not is_synchronized(node):
            self.report(
                node, f"Potential race condition detected in assignment to shared resource '{name}'"
            )

    def _check_access(self, node: Node, name: str) -> None:
        if name in self.shared_resources and not is_synchronized(node):
            self.report(node, f"Potential race condition detected with shared resource '{name}'")


def is_synchronized(node: Node) -> bool:
    """True inside a ``synchronized`` block or a ``synchronized`` method."""
    for current in iter_ancestors(node, include_self=True):
        if current.type == "synchronized_statement":
            return True
        if current.type == "method_declaration" and has_modifier(current, "synchronized"):
            return True
    return False
