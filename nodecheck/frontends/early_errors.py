"""
Early errors for parsed scripts.

tree-sitter parses a superset of the language the sandbox accepts: it takes
JSX, newer operators and a hashbang line, and it does not report the early
errors an ECMAScript parser raises after building the tree. This module
rejects the ones custom node scripts actually run into:
- JSX elements and fragments
- hashbang lines and logical assignment operators (newer than ES2020)
- break/continue outside a loop or switch, or naming an unknown label
- yield outside a generator function
- duplicate lexical declarations in one scope

Other early errors and later syntax additions are accepted.
"""

from typing import List, NamedTuple, Optional, Set, Tuple

from nodecheck.exceptions import ScriptSyntaxError
from nodecheck.frontends.javascript_frontend import _DEADLINE_STRIDE, ParsedScript, TSNode


# Nodes that start a new function context
_FUNCTIONS = (
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
    "class_static_block",
)

_GENERATORS = ("generator_function_declaration", "generator_function")

_LOOPS = ("for_statement", "for_in_statement", "while_statement", "do_statement")

_LOGICAL_ASSIGNMENT = ("??=", "||=", "&&=")

# Nodes whose direct statements share one lexical scope
_SCOPES = ("program", "statement_block", "switch_body")

_FUNCTION_DECLARATIONS = ("function_declaration", "generator_function_declaration")


class _Context(NamedTuple):
    in_loop: bool = False
    in_switch: bool = False
    in_generator: bool = False
    labels: Tuple[str, ...] = ()


class EarlyErrorChecker:
    """
    Finds the first early error in a parsed script.

    Usage:
        checker = EarlyErrorChecker()
        error = checker.check(script)
        if error is not None:
            raise error
    """

    def check(self, script: ParsedScript) -> Optional[ScriptSyntaxError]:
        """
        Walk the whole tree and return the error that comes first in the source.

        Args:
            script: ParsedScript without parse errors

        Returns:
            ScriptSyntaxError positioned at the offending node, or None
        """
        errors: List[Tuple[TSNode, str]] = []
        stack = [(script.root, _Context())]
        visited = 0

        while stack:
            node, ctx = stack.pop()
            visited += 1
            if script.deadline is not None and visited % _DEADLINE_STRIDE == 0:
                script.deadline.check()

            kind = node.type

            if kind.startswith("jsx_"):
                errors.append((node, "Unexpected token '<'"))
                continue
            if kind == "hash_bang_line":
                errors.append((node, "Unexpected character '#'"))
                continue

            if kind in _SCOPES:
                errors.extend(self._duplicate_declarations(script, node))

            if kind in ("break_statement", "continue_statement"):
                message = self._jump_error(script, node, ctx)
                if message:
                    errors.append((node, message))
            elif kind == "yield_expression" and not ctx.in_generator:
                errors.append((node, "'yield' is only valid inside generator functions"))
            elif kind == "augmented_assignment_expression":
                operator = node.child_by_field_name("operator")
                if operator is not None and script.text(operator) in _LOGICAL_ASSIGNMENT:
                    errors.append((operator, f"Unexpected token '{script.text(operator)}'"))

            child_ctx = self._child_context(script, node, ctx)
            for child in reversed(node.named_children):
                stack.append((child, child_ctx))

        if not errors:
            return None
        node, message = min(errors, key=lambda e: e[0].start_byte)
        line, column = script.position(node)
        return ScriptSyntaxError(message, line, column)

    def _child_context(self, script: ParsedScript, node: TSNode, ctx: _Context) -> _Context:
        kind = node.type
        if kind in _FUNCTIONS:
            generator = kind in _GENERATORS or (
                kind == "method_definition" and any(c.type == "*" for c in node.children)
            )
            return _Context(in_generator=generator)
        if kind in _LOOPS:
            return ctx._replace(in_loop=True)
        if kind == "switch_statement":
            return ctx._replace(in_switch=True)
        if kind == "labeled_statement":
            label = node.child_by_field_name("label")
            if label is not None:
                return ctx._replace(labels=ctx.labels + (script.text(label),))
        return ctx

    def _jump_error(self, script: ParsedScript, node: TSNode, ctx: _Context) -> Optional[str]:
        keyword = "break" if node.type == "break_statement" else "continue"
        label = node.child_by_field_name("label")
        if label is not None:
            name = script.text(label)
            if name not in ctx.labels:
                return f"Undefined label '{name}'"
            if keyword == "continue" and not ctx.in_loop:
                return "Unsyntactic continue"
            return None
        if ctx.in_loop or (keyword == "break" and ctx.in_switch):
            return None
        return f"Unsyntactic {keyword}"

    def _duplicate_declarations(self, script: ParsedScript, scope: TSNode) -> List[Tuple[TSNode, str]]:
        """let/const/class names declared twice, or clashing with var, function or parameters"""
        errors = []
        lexical: Set[str] = set()
        other: Set[str] = set()

        if scope.type == "statement_block" and scope.parent is not None and scope.parent.type in _FUNCTIONS:
            parameters = scope.parent.child_by_field_name("parameters")
            if parameters is not None:
                for param in parameters.named_children:
                    other.update(script.text(n) for n in binding_identifiers(param))

        for statement in _scope_statements(scope):
            kind = statement.type
            if kind == "lexical_declaration" or kind == "class_declaration":
                names = _declared_names(statement)
                for name_node in names:
                    name = script.text(name_node)
                    if name in lexical or name in other:
                        errors.append((name_node, f"Identifier '{name}' has already been declared"))
                    lexical.add(name)
            elif kind == "variable_declaration" or kind in _FUNCTION_DECLARATIONS:
                for name_node in _declared_names(statement):
                    name = script.text(name_node)
                    if name in lexical:
                        errors.append((name_node, f"Identifier '{name}' has already been declared"))
                    other.add(name)

        return errors


def _scope_statements(scope: TSNode) -> List[TSNode]:
    if scope.type != "switch_body":
        return list(scope.named_children)
    statements = []
    for case in scope.named_children:
        statements.extend(case.children_by_field_name("body"))
    return statements


def _declared_names(statement: TSNode) -> List[TSNode]:
    if statement.type in ("lexical_declaration", "variable_declaration"):
        names = []
        for declarator in statement.named_children:
            if declarator.type == "variable_declarator":
                names.extend(binding_identifiers(declarator.child_by_field_name("name")))
        return names
    name = statement.child_by_field_name("name")
    return [name] if name is not None else []


def binding_identifiers(pattern: Optional[TSNode]) -> List[TSNode]:
    """Identifier nodes bound by a declaration target or parameter"""
    names: List[TSNode] = []
    stack = [pattern]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        kind = node.type
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            names.append(node)
        elif kind in ("assignment_pattern", "object_assignment_pattern"):
            stack.append(node.child_by_field_name("left"))
        elif kind == "pair_pattern":
            stack.append(node.child_by_field_name("value"))
        elif kind in ("object_pattern", "array_pattern", "rest_pattern"):
            stack.extend(reversed(node.named_children))
    return names
