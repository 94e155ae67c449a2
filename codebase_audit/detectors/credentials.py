"""Hardcoded passwords, secrets and tokens in string literals."""

import re

from tree_sitter import Node

from ..utils.ast_helpers import (
    get_arguments,
    get_line_number,
    get_name,
    is_string_literal,
    string_literal_value,
)
from .base import Detector

CREDENTIALS_PATTERN = re.compile(r".*(password|secret|token).*", re.IGNORECASE)


class HardcodedCredentialsDetector(Detector):
    name = "credentials"

    def visit_variable_declarator(self, node: Node) -> None:
        self._check(get_name(node), node.child_by_field_name("value"), get_line_number(node))

    def visit_method_invocation(self, node: Node) -> None:
        for argument in get_arguments(node):
            self._check(None, argument, get_line_number(argument))

    def _check(self, variable_name: str | None, value_node: Node | None, line: int) -> None:
        if not is_string_literal(value_node):
            return
        value = string_literal_value(value_node)
        name_matches = variable_name is not None and CREDENTIALS_PATTERN.fullmatch(variable_name)
        if name_matches or CREDENTIALS_PATTERN.fullmatch(value):
            self.report(line, f'Potential hardcoded credentials detected: "{value}" at line {line}')
