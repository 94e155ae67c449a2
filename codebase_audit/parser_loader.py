"""Loads the tree-sitter Java grammar and parses source text into a tree."""

import re
from dataclasses import dataclass, field
from functools import lru_cache

import tree_sitter_java
from loguru import logger
from tree_sitter import Language, Node, Parser, Tree

from .exceptions import ParseError

# The grammar also accepts bare statements at the top level
COMPILATION_UNIT_MEMBER_TYPES = {
    "package_declaration",
    "import_declaration",
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
    "module_declaration",
    "line_comment",
    "block_comment",
}


@dataclass
class JavaSource:
    """A parsed Java compilation unit together with its source text."""

    source: str
    tree: Tree
    lines: list[str] = field(default_factory=list)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def line_text(self, line_number: int) -> str:
        """Return the text of a 1-indexed line, or an empty string."""
        if 1 <= line_number <= len(self.lines):
            return self.lines[line_number - 1]
        return ""


@lru_cache(maxsize=1)
def load_java_language() -> Language:
    """Load the Java grammar once per process."""
    language = Language(tree_sitter_java.language())
    logger.debug("Loaded tree-sitter Java grammar")
    return language


def create_parser() -> Parser:
    """Create a fresh parser; parsers are not shared between threads."""
    return Parser(load_java_language())


def parse_java(source: str) -> JavaSource:
    """Parse Java source text.

    Raises:
        ParseError: if the text is not syntactically valid Java.
    """
    if source is None:
        raise ParseError("No source text supplied")

    tree = create_parser().parse(source.encode("utf-8"))
    if tree.root_node.has_error:
        error_node = _first_error_node(tree.root_node)
        line = error_node.start_point[0] + 1 if error_node is not None else -1
        logger.warning(f"Java source failed to parse (first error at line {line})")
        raise ParseError(f"Invalid Java source: syntax error at line {line}", line=line)

    for child in tree.root_node.named_children:
        if child.type not in COMPILATION_UNIT_MEMBER_TYPES:
            line = child.start_point[0] + 1
            logger.warning(f"Java source is not a compilation unit ({child.type} at line {line})")
            raise ParseError(
                f"Invalid Java source: unexpected {child.type} at line {line}", line=line
            )

    # Rows in the tree are counted on "\n" only
    return JavaSource(source=source, tree=tree, lines=re.split(r"\r?\n", source))


def _first_error_node(node: Node) -> Node | None:
    """Find the first ERROR or missing node in source order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None
