"""Code smell detection for Java sources."""

from loguru import logger
from tree_sitter import Node

from ..config import SmellThresholds
from ..models import Finding, violation
from ..parser_loader import JavaSource
from ..processing import CheckTask, ParallelCheckRunner, run_sequential
from ..utils.ast_helpers import (
    CLASS_OR_INTERFACE_TYPES,
    block_statements,
    body_members,
    find_nodes_by_type,
    get_arguments,
    get_end_line_number,
    get_javadoc,
    get_line_number,
    get_modifiers,
    get_name,
    get_node_text,
    get_parameter_type,
    get_parameters,
    has_modifier,
    is_name_expression,
    normalize_whitespace,
    node_key,
)

TRY_TYPES = ("try_statement", "try_with_resources_statement")
PRIMITIVE_TYPES = {"integral_type", "floating_point_type", "boolean_type"}
GENERIC_EXCEPTION_TYPES = {"Exception", "Throwable", "RuntimeException"}
LOG_METHOD_NAMES = {"log", "error", "warn", "info", "debug", "trace"}
ACCESS_MODIFIERS = ("public", "protected", "private")


class SmellAnalyzer:
    """Eleven independent smell checks.

    Every ``check_*`` method takes the tree root and an output list and is a
    no-op when either is missing.
    """

    def __init__(self, thresholds: SmellThresholds | None = None):
        self.thresholds = thresholds or SmellThresholds()

    def tasks(self, source: JavaSource) -> list[CheckTask]:
        root = source.root
        checks = [
            self.check_parameters,
            self.check_long_method,
            self.check_god_class,
            self.check_large_class,
            self.check_try_blocks,
            self.check_data_clumps,
            self.check_primitives,
            self.check_comments,
            self.check_exception_handling,
            self.check_method_chaining,
            self.check_dead_methods,
        ]
        return [
            CheckTask(name=check.__name__, run=lambda c=check: _collect(c, root))
            for check in checks
        ]

    def analyze(
        self, source: JavaSource, runner: ParallelCheckRunner | None = None
    ) -> list[Finding]:
        tasks = self.tasks(source)
        findings = runner.run(tasks) if runner is not None else run_sequential(tasks)
        logger.info(f"Smell analysis found {len(findings)} issues")
        return findings

    def check_parameters(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for method in find_nodes_by_type(root, "method_declaration"):
            count = len(get_parameters(method))
            if count >= self.thresholds.max_method_params:
                smells.append(
                    violation(
                        get_line_number(method),
                        f"Method Parameters : The Method '{get_name(method)}' "
                        f"has too many parameters ({count}).",
                    )
                )

    def check_long_method(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for method in find_nodes_by_type(root, "method_declaration"):
            length = get_end_line_number(method) - get_line_number(method) + 1
            if length > self.thresholds.max_method_length:
                smells.append(
                    violation(
                        get_line_number(method),
                        f"Method Length : The Method '{get_name(method)}' is too long ({length} lines).",
                    )
                )

    def check_god_class(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for declaration in find_nodes_by_type(root, "class_declaration"):
            count = len(body_members(declaration, "method_declaration"))
            if count > self.thresholds.max_class_methods:
                smells.append(
                    violation(
                        get_line_number(declaration),
                        f"God Class : Class '{get_name(declaration)}' "
                        f"has too many methods ({count} methods).",
                    )
                )

    def check_large_class(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for declaration in find_nodes_by_type(root, "class_declaration"):
            length = get_end_line_number(declaration) - get_line_number(declaration) + 1
            if length > self.thresholds.max_class_length:
                smells.append(
                    violation(
                        get_line_number(declaration),
                        f"Large Class : Class '{get_name(declaration)}' is too large ({length} lines).",
                    )
                )

    def check_try_blocks(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for try_node in find_nodes_by_type(root, TRY_TYPES):
            body = try_node.child_by_field_name("body")
            if body is None:
                continue
            # Comments are not statements, so a comment-only block is empty too
            if not block_statements(body):
                smells.append(
                    violation(
                        get_line_number(body),
                        f"Try Block : Empty or comment-only try block "
                        f"(ending at line {get_end_line_number(body)}).",
                    )
                )

    def check_data_clumps(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for constructor in find_nodes_by_type(root, "constructor_declaration"):
            count = len(get_parameters(constructor))
            if count > self.thresholds.max_constructor_params:
                smells.append(
                    violation(
                        get_line_number(constructor),
                        f"Data Clumps : Constructor '{constructor_signature(constructor)}' "
                        f"has too many parameters ({count}).",
                    )
                )

    def check_primitives(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for method in find_nodes_by_type(root, "method_declaration"):
            count = sum(1 for param in get_parameters(method) if is_primitive_parameter(param))
            if count > self.thresholds.max_primitive_params:
                smells.append(
                    violation(
                        get_line_number(method),
                        f"Primitive Obsession : Method '{get_name(method)}' "
                        f"has primitive obsession with {count} primitive parameters.",
                    )
                )

    def check_comments(self, root: Node | None, smells: list[Finding] | None) -> None:
        """Classes and interfaces, and the public methods declared directly in
        them, must carry a Javadoc comment.
        """
        if root is None or smells is None:
            return
        for declaration in find_nodes_by_type(root, CLASS_OR_INTERFACE_TYPES):
            class_name = get_name(declaration)
            if get_javadoc(declaration) is None:
                smells.append(
                    violation(
                        get_line_number(declaration),
                        f"Javadoc Class Comments : Class '{class_name}' lacks a Javadoc comment.",
                    )
                )
            for method in body_members(declaration, "method_declaration"):
                if has_modifier(method, "public") and get_javadoc(method) is None:
                    smells.append(
                        violation(
                            get_line_number(method),
                            f"Javadoc Method Comments : Public method '{get_name(method)}' "
                            f"in class '{class_name}' lacks a Javadoc comment.",
                        )
                    )

    def check_exception_handling(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        for catch in find_nodes_by_type(root, "catch_clause"):
            line = get_line_number(catch)
            catch_type = get_catch_type(catch)
            if catch_type in GENERIC_EXCEPTION_TYPES:
                smells.append(
                    violation(
                        line,
                        f"Generic catch block: Catching '{catch_type}' can hide the true nature "
                        f"of an exception. Consider catching more specific exception types.",
                    )
                )
            statements = block_statements(catch.child_by_field_name("body"))
            if not statements:
                smells.append(
                    violation(
                        line,
                        "Empty catch block: An empty catch block may swallow an exception and "
                        "hinder debugging. Consider adding either handling logic or a comment "
                        "explaining why it's empty.",
                    )
                )
            elif not any(is_log_statement(s) or is_rethrow(s) for s in statements):
                smells.append(
                    violation(
                        line,
                        "Swallowed exception: The catch block may silently ignore the exception. "
                        "Consider logging or rethrowing the exception.",
                    )
                )

    def check_method_chaining(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        processed: set[tuple[int, int, str]] = set()
        for call in find_nodes_by_type(root, "method_invocation"):
            top = top_method_call(call)
            key = node_key(top)
            if key in processed:
                continue
            processed.add(key)
            length = chain_length(top)
            if length > self.thresholds.max_chain_length:
                smells.append(
                    violation(get_line_number(top), f"Excessive method chaining (length {length}).")
                )

    def check_dead_methods(self, root: Node | None, smells: list[Finding] | None) -> None:
        if root is None or smells is None:
            return
        called = {get_name(call) for call in find_nodes_by_type(root, "method_invocation")}
        for declaration in find_nodes_by_type(root, CLASS_OR_INTERFACE_TYPES):
            for method in body_members(declaration, "method_declaration"):
                name = get_name(method)
                if has_modifier(method, "private") and name not in called:
                    smells.append(
                        violation(
                            get_line_number(method),
                            f"Dead Method : Unused private method '{name}' "
                            f"in class '{get_name(declaration)}'.",
                        )
                    )


def _collect(check, root: Node) -> list[Finding]:
    findings: list[Finding] = []
    check(root, findings)
    return findings


def is_primitive_parameter(parameter: Node) -> bool:
    type_node = get_parameter_type(parameter)
    return type_node is not None and type_node.type in PRIMITIVE_TYPES


def constructor_signature(constructor: Node) -> str:
    """Access keyword, name, parameters and throws clause of a constructor."""
    access = next((m for m in ACCESS_MODIFIERS if m in get_modifiers(constructor)), "")
    params = ", ".join(
        normalize_whitespace(get_node_text(param)) for param in get_parameters(constructor)
    )
    signature = f"{access} {get_name(constructor)}({params})"
    for child in constructor.children:
        if child.type == "throws":
            signature += " " + normalize_whitespace(get_node_text(child))
    return signature


def get_catch_type(catch: Node) -> str:
    for child in catch.named_children:
        if child.type == "catch_formal_parameter":
            for part in child.named_children:
                if part.type == "catch_type":
                    return normalize_whitespace(get_node_text(part))
    return ""


def is_log_statement(statement: Node) -> bool:
    """An expression statement calling ``log``/``error``/... on some receiver."""
    if statement.type != "expression_statement" or not statement.named_children:
        return False
    expression = statement.named_children[0]
    return (
        expression.type == "method_invocation"
        and expression.child_by_field_name("object") is not None
        and get_name(expression) in LOG_METHOD_NAMES
    )


def is_rethrow(statement: Node) -> bool:
    """``throw e`` or ``throw new X(...)`` passing a variable or call result."""
    if statement.type != "throw_statement" or not statement.named_children:
        return False
    thrown = statement.named_children[0]
    if is_name_expression(thrown):
        return True
    if thrown.type == "object_creation_expression":
        return any(
            is_name_expression(arg) or arg.type == "method_invocation"
            for arg in get_arguments(thrown)
        )
    return False


def top_method_call(call: Node) -> Node:
    """Outermost call reachable by walking up through receivers and arguments."""
    current = call
    while True:
        parent = current.parent
        if parent is not None and parent.type == "argument_list":
            parent = parent.parent
        if parent is None or parent.type != "method_invocation":
            return current
        current = parent


def chain_length(call: Node) -> int:
    """Number of calls in the receiver chain ending at ``call``."""
    length = 1
    receiver = call.child_by_field_name("object")
    while receiver is not None and receiver.type == "method_invocation":
        length += 1
        receiver = receiver.child_by_field_name("object")
    return length
