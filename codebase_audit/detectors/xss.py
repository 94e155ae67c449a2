"""Cross-site scripting through concatenation of request data."""

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_line_number,
    get_name,
    get_node_text,
    is_invocation_named,
    is_name_expression,
    is_plus_expression,
)
from .base import Detector

USER_INPUT_METHODS = {"getParameter", "getHeader"}


class XSSDetector(Detector):
    name = "xss"

    def __init__(self, findings=None):
        super().__init__(findings)
        self.user_input_variables: set[str] = set()
        self.reported_lines: set[int] = set()

    def visit_variable_declarator(self, node: Node) -> None:
        value = node.child_by_field_name("value")
        if value is not None and self._is_user_input_source(value):
            self.user_input_variables.add(get_name(node))

    def visit_binary_expression(self, node: Node) -> None:
        if not is_plus_expression(node):
            return
        line = get_line_number(node)
        if line not in self.reported_lines and self._contains_user_input(node):
            self.report(
                line, f"Potential XSS vulnerability detected in string concatenation at line {line}"
            )
            self.reported_lines.add(line)

    def _contains_user_input(self, expression: Node | None) -> bool:
        if expression is None:
            return False
        if expression.type == "binary_expression":
            return self._contains_user_input(
                expression.child_by_field_name("left")
            ) or self._contains_user_input(expression.child_by_field_name("right"))
        return self._is_user_input_source(expression)

    def _is_user_input_source(self, expression: Node) -> bool:
        if expression.type == "method_invocation":
            return is_invocation_named(expression, USER_INPUT_METHODS)
        if is_name_expression(expression):
            return get_node_text(expression) in self.user_input_variables
        return False
