"""Weak algorithms requested from cryptographic factories."""

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_arguments,
    get_line_number,
    get_name,
    get_node_text,
    is_name_expression,
    is_string_literal,
    string_literal_value,
)
from .base import Detector

DEFAULT_WEAK_ALGORITHMS = frozenset({"DES", "MD5", "RC4"})


class InsecureCryptoDetector(Detector):
    """Resolves the first ``getInstance`` argument as a literal, or through a
    variable previously initialized with one.
    """

    name = "crypto"

    def __init__(self, findings=None, weak_algorithms: frozenset[str] = DEFAULT_WEAK_ALGORITHMS):
        super().__init__(findings)
        self.weak_algorithms = weak_algorithms
        self.variable_values: dict[str, str] = {}

    def visit_variable_declarator(self, node: Node) -> None:
        value = node.child_by_field_name("value")
        if is_string_literal(value):
            self.variable_values[get_name(node)] = string_literal_value(value)

    def visit_method_invocation(self, node: Node) -> None:
        if get_name(node) != "getInstance":
            return
        arguments = get_arguments(node)
        if not arguments:
            return
        algorithm = self._resolve_algorithm(arguments[0])
        if algorithm is not None and algorithm in self.weak_algorithms:
            line = get_line_number(node)
            self.report(line, f"Weak cryptographic algorithm '{algorithm}' used at line {line}")

    def _resolve_algorithm(self, expression: Node) -> str | None:
        if is_string_literal(expression):
            return string_literal_value(expression)
        if is_name_expression(expression):
            return self.variable_values.get(get_node_text(expression))
        return None
