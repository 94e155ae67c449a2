"""AST helper functions for tree-sitter Java trees."""

from collections.abc import Iterable, Iterator

from tree_sitter import Node

CLASS_OR_INTERFACE_TYPES = ("class_declaration", "interface_declaration")
COMMENT_TYPES = ("line_comment", "block_comment")
# Interface constants parse as constant_declaration
FIELD_TYPES = ("field_declaration", "constant_declaration")
INTEGER_LITERAL_TYPES = (
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
)

# Parents under which an identifier names something rather than reading a value
_NON_EXPRESSION_PARENTS = {
    "scoped_identifier",
    "import_declaration",
    "package_declaration",
    "labeled_statement",
    "break_statement",
    "continue_statement",
    "marker_annotation",
    "annotation",
    "element_value_pair",
    "inferred_parameters",
    "enum_constant",
    "type_parameter",
    "module_declaration",
    "requires_module_directive",
    "exports_module_directive",
    "opens_module_directive",
    "uses_module_directive",
    "provides_module_directive",
}


def get_node_text(node: Node | None) -> str:
    """Extract text content from a tree-sitter node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def find_nodes_by_type(node: Node | None, node_type: str | Iterable[str]) -> list[Node]:
    """Find all nodes of the given type(s) under ``node``, in pre-order.

    Pre-order over children in source order gives a stable ordering by
    source position. The starting node itself is included when it matches.
    """
    if node is None:
        return []
    types = {node_type} if isinstance(node_type, str) else set(node_type)
    results = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in types:
            results.append(current)
        stack.extend(reversed(current.children))
    return results


def iter_postorder(node: Node | None) -> Iterator[Node]:
    """Yield every node under ``node`` with children before their parent."""
    if node is None:
        return
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            yield current
            continue
        stack.append((current, True))
        for child in reversed(current.children):
            stack.append((child, False))


def get_parent_of_type(node: Node | None, parent_type: str | Iterable[str]) -> Node | None:
    """Find the closest ancestor of the given type(s)."""
    if node is None:
        return None
    types = {parent_type} if isinstance(parent_type, str) else set(parent_type)
    current = node.parent
    while current:
        if current.type in types:
            return current
        current = current.parent
    return None


def iter_ancestors(node: Node, include_self: bool = False) -> Iterator[Node]:
    """Walk the parent chain up to the root."""
    current = node if include_self else node.parent
    while current:
        yield current
        current = current.parent


def same_node(a: Node | None, b: Node | None) -> bool:
    """Compare two nodes by position and type.

    Parent lookups hand back new wrapper objects, so identity does not work.
    """
    if a is None or b is None:
        return a is b
    return node_key(a) == node_key(b)


def node_key(node: Node) -> tuple[int, int, str]:
    """Hashable key uniquely identifying a node within one tree."""
    return (node.start_byte, node.end_byte, node.type)


def get_line_number(node: Node | None) -> int:
    """Get the line number of a node (1-indexed), or -1 when absent."""
    if node is None:
        return -1
    return node.start_point[0] + 1


def get_end_line_number(node: Node | None) -> int:
    """Get the last line of a node (1-indexed), or -1 when absent."""
    if node is None:
        return -1
    return node.end_point[0] + 1


def is_comment(node: Node) -> bool:
    return node.type in COMMENT_TYPES


def named_children(node: Node | None) -> list[Node]:
    """Named children of a node, comments excluded."""
    if node is None:
        return []
    return [child for child in node.named_children if not is_comment(child)]


def block_statements(block: Node | None) -> list[Node]:
    """Statements inside a block or constructor body."""
    return named_children(block)


def get_name(node: Node | None) -> str:
    """Text of a declaration's or invocation's ``name`` field."""
    if node is None:
        return ""
    return get_node_text(node.child_by_field_name("name"))


def get_modifiers(node: Node | None) -> set[str]:
    """Keyword modifiers (public, static, final, ...) of a declaration."""
    if node is None:
        return set()
    for child in node.children:
        if child.type == "modifiers":
            return {
                get_node_text(token)
                for token in child.children
                if token.type not in ("marker_annotation", "annotation") and not is_comment(token)
            }
    return set()


def has_modifier(node: Node | None, modifier: str) -> bool:
    return modifier in get_modifiers(node)


def get_arguments(invocation: Node | None) -> list[Node]:
    """Argument expressions of a method invocation or object creation."""
    if invocation is None:
        return []
    return named_children(invocation.child_by_field_name("arguments"))


def get_parameters(declaration: Node | None) -> list[Node]:
    """Formal parameters of a method or constructor declaration."""
    if declaration is None:
        return []
    params = declaration.child_by_field_name("parameters")
    return [
        child for child in named_children(params)
        if child.type in ("formal_parameter", "spread_parameter")
    ]


def get_parameter_type(parameter: Node) -> Node | None:
    """Type node of a formal or spread parameter."""
    type_node = parameter.child_by_field_name("type")
    if type_node is not None:
        return type_node
    for child in parameter.named_children:
        if child.type not in ("modifiers", "variable_declarator", "identifier") and not is_comment(child):
            return child
    return None


def get_parameter_name(parameter: Node) -> str:
    name = parameter.child_by_field_name("name")
    if name is not None:
        return get_node_text(name)
    for child in parameter.named_children:
        if child.type == "variable_declarator":
            return get_name(child)
    return ""


def get_declarators(declaration: Node | None) -> list[Node]:
    """Variable declarators of a field or local variable declaration."""
    if declaration is None:
        return []
    return [child for child in declaration.named_children if child.type == "variable_declarator"]


def is_declarator(node: Node) -> bool:
    """A variable declarator, or a try-with-resources declaration."""
    if node.type == "variable_declarator":
        return True
    return node.type == "resource" and node.child_by_field_name("name") is not None


def get_declared_type(declarator: Node) -> str:
    """Type text of the declaration a variable declarator belongs to."""
    if declarator.type == "resource":
        return get_node_text(declarator.child_by_field_name("type"))
    parent = declarator.parent
    if parent is None:
        return ""
    return get_node_text(parent.child_by_field_name("type"))


def get_binary_operator(node: Node) -> str:
    operator = node.child_by_field_name("operator")
    if operator is not None:
        return get_node_text(operator)
    # Older grammars leave the operator unnamed between left and right
    if len(node.children) == 3:
        return get_node_text(node.children[1])
    return ""


def is_plus_expression(node: Node | None) -> bool:
    return node is not None and node.type == "binary_expression" and get_binary_operator(node) == "+"


def string_literal_value(node: Node) -> str:
    """Literal content without the surrounding quotes; escapes are kept as written."""
    text = get_node_text(node)
    if text.startswith('"""') and text.endswith('"""') and len(text) >= 6:
        return text[3:-3]
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def is_name_expression(node: Node) -> bool:
    """True when an identifier reads a variable rather than naming a declaration.

    Declaration names, invoked method names, accessed field names and
    qualified-name segments are not name expressions.
    """
    if node.type != "identifier":
        return False
    parent = node.parent
    if parent is None:
        return False
    if parent.type in _NON_EXPRESSION_PARENTS:
        return False
    if same_node(parent.child_by_field_name("name"), node):
        return False
    if parent.type == "field_access" and same_node(parent.child_by_field_name("field"), node):
        return False
    if parent.type == "lambda_expression" and same_node(parent.child_by_field_name("parameters"), node):
        return False
    if parent.type == "method_reference" and not same_node(parent.named_children[0], node):
        return False
    return True


def enclosing_class_or_interface(node: Node) -> Node | None:
    return get_parent_of_type(node, CLASS_OR_INTERFACE_TYPES)


def body_members(declaration: Node, member_type: str) -> list[Node]:
    """Direct members of the given type in a class or interface body."""
    body = declaration.child_by_field_name("body")
    if body is None:
        return []
    return [child for child in body.named_children if child.type == member_type]


def is_string_literal(node: Node | None) -> bool:
    """True for an ordinary quoted string literal (text blocks excluded)."""
    return (
        node is not None
        and node.type == "string_literal"
        and not get_node_text(node).startswith('"""')
    )


def get_import_name(import_node: Node) -> str:
    """Qualified name of an import, without ``static`` or a trailing ``.*``."""
    for child in import_node.named_children:
        if child.type in ("scoped_identifier", "identifier"):
            return get_node_text(child)
    return ""


def is_invocation_named(node: Node | None, names: str | Iterable[str]) -> bool:
    """True when ``node`` is a method call whose name is one of ``names``."""
    if node is None or node.type != "method_invocation":
        return False
    wanted = {names} if isinstance(names, str) else set(names)
    return get_name(node) in wanted


def get_javadoc(declaration: Node) -> Node | None:
    """The ``/** ... */`` comment directly preceding a declaration, if any."""
    previous = declaration.prev_named_sibling
    if previous is not None and previous.type == "block_comment":
        text = get_node_text(previous)
        if text.startswith("/**") and text != "/**/":
            return previous
    return None


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())
