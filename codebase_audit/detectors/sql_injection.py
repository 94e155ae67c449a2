"""SQL injection through concatenated query strings."""

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_arguments,
    get_declared_type,
    get_line_number,
    get_name,
    get_node_text,
    is_name_expression,
    is_plus_expression,
)
from .base import Detector

SQL_EXECUTE_METHODS = {"executeQuery", "execute", "executeUpdate"}


class SQLInjectionDetector(Detector):
    """Tracks String variables built with ``+`` and flags them at execute calls."""

    name = "sql_injection"

    def __init__(self, findings=None):
        super().__init__(findings)
        self.unsafe_variables: set[str] = set()

    def visit_variable_declarator(self, node: Node) -> None:
        if get_declared_type(node) != "String":
            return
        if is_plus_expression(node.child_by_field_name("value")):
            self.unsafe_variables.add(get_name(node))

    def visit_assignment_expression(self, node: Node) -> None:
        target = node.child_by_field_name("left")
        if target is None or target.type != "identifier":
            return
        if is_plus_expression(node.child_by_field_name("right")):
            self.unsafe_variables.add(get_node_text(target))

    def visit_method_invocation(self, node: Node) -> None:
        if get_name(node) not in SQL_EXECUTE_METHODS:
            return
        for argument in get_arguments(node):
            if is_name_expression(argument) and get_node_text(argument) in self.unsafe_variables:
                line = get_line_number(argument)
                self.report(
                    line,
                    f"Potential SQL Injection detected with variable "
                    f"'{get_node_text(argument)}' at line {line}",
                )
