"""Insecure deserialization of user-controlled streams."""

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_arguments,
    get_declared_type,
    get_line_number,
    get_name,
    get_node_text,
    is_invocation_named,
    is_name_expression,
)
from .base import Detector

OBJECT_INPUT_STREAM = "ObjectInputStream"
USER_INPUT_METHODS = {"getParameter", "getHeader", "getQueryString"}


class DeserializationDetector(Detector):
    name = "deserialization"

    def __init__(self, findings=None):
        super().__init__(findings)
        self.stream_variables: set[str] = set()
        self.user_controlled: set[str] = set()

    def visit_variable_declarator(self, node: Node) -> None:
        name = get_name(node)
        if get_declared_type(node) == OBJECT_INPUT_STREAM:
            self.stream_variables.add(name)
            return
        value = node.child_by_field_name("value")
        if value is not None and self._is_user_controlled(value):
            self.user_controlled.add(name)

    def visit_object_creation_expression(self, node: Node) -> None:
        if get_node_text(node.child_by_field_name("type")) != OBJECT_INPUT_STREAM:
            return
        for argument in get_arguments(node):
            if is_name_expression(argument) and get_node_text(argument) in self.user_controlled:
                self._report_deserialization(get_line_number(node))

    def visit_method_invocation(self, node: Node) -> None:
        if get_name(node) != "readObject":
            return
        receiver = node.child_by_field_name("object")
        if receiver is not None and get_node_text(receiver) in self.stream_variables:
            self._report_deserialization(get_line_number(node))

    def _is_user_controlled(self, expression: Node) -> bool:
        if expression.type == "method_invocation":
            return is_invocation_named(expression, USER_INPUT_METHODS)
        if is_name_expression(expression):
            return get_node_text(expression) in self.user_controlled
        return False

    def _report_deserialization(self, line: int) -> None:
        self.report(line, f"Potential insecure deserialization detected at line {line}")
