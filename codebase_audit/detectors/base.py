"""Base class for single-pass security detectors."""

from collections.abc import Callable

from tree_sitter import Node

from ..models import Finding, violation
from ..utils.ast_helpers import get_line_number, is_declarator, iter_postorder


class Detector:
    """Walks a tree once, children before parents, dispatching on node type.

    Subclasses define ``visit_<node_type>`` methods. State collected while
    walking lives on the instance, so a detector is used for one run only.
    """

    name = "detector"

    def __init__(self, findings: list[Finding] | None = None):
        self.findings: list[Finding] = findings if findings is not None else []
        self._handlers: dict[str, Callable[[Node], None]] = {}

    def run(self, root: Node | None) -> list[Finding]:
        if root is None:
            return self.findings
        for node in iter_postorder(root):
            # try-with-resources declarations are handled like local variables
            node_type = "variable_declarator" if is_declarator(node) else node.type
            handler = self._handler_for(node_type)
            if handler is not None:
                handler(node)
        return self.findings

    def report(self, node_or_line: Node | int, description: str) -> None:
        line = node_or_line if isinstance(node_or_line, int) else get_line_number(node_or_line)
        self.findings.append(violation(line, description))

    def _handler_for(self, node_type: str) -> Callable[[Node], None] | None:
        if node_type not in self._handlers:
            self._handlers[node_type] = getattr(self, f"visit_{node_type}", None)
        return self._handlers[node_type]
