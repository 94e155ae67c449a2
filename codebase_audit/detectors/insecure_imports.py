"""Flags imports of APIs with a known safer replacement."""

from tree_sitter import Node

from ..config import load_insecure_imports
from ..models import Finding
from ..utils.ast_helpers import get_import_name
from .base import Detector


class InsecureImportDetector(Detector):
    name = "insecure_imports"

    def __init__(
        self,
        findings: list[Finding] | None = None,
        insecure_imports: dict[str, str] | None = None,
    ):
        super().__init__(findings)
        self.insecure_imports = (
            insecure_imports if insecure_imports is not None else load_insecure_imports()
        )

    def visit_import_declaration(self, node: Node) -> None:
        import_name = get_import_name(node)
        if import_name in self.insecure_imports:
            self.report(
                node,
                f"Insecure import used: {import_name}. "
                f"Recommended alternative: {self.insecure_imports[import_name]}",
            )
