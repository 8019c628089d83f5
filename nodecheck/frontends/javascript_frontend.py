"""
JavaScript frontend for nodecheck.

Parses custom node scripts with tree-sitter and exposes the pieces the
analyzers need:
- the top-level statement list
- iterative, budget-aware tree walks
- source text and positions of nodes (1-based lines, 0-based columns)
- decoded values of string literals

Scripts are parsed with script goal: top-level import/export declarations
are rejected here, while a top-level return parses fine so that the
structural checker can report it. Early errors the grammar does not report
are checked in early_errors.
"""

from typing import Any, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field

try:
    import tree_sitter_javascript as tsjavascript
    from tree_sitter import Language, Parser, Node as TSNode, Tree
    TREE_SITTER_JS_AVAILABLE = True
except ImportError:
    TREE_SITTER_JS_AVAILABLE = False
    TSNode = Any
    Tree = Any

from nodecheck.exceptions import ScriptSyntaxError
from nodecheck.utils import Deadline


# Node kinds that never count as statements
_TRIVIA = ("comment", "hash_bang_line")

# Top-level declarations only valid with module goal
_MODULE_DECLARATIONS = ("import_statement", "export_statement")

MODULE_SYNTAX_MESSAGE = "'import' and 'export' may appear only with 'sourceType: module'"

# How many nodes to visit between deadline checks
_DEADLINE_STRIDE = 256

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass
class ParsedScript:
    """A successfully parsed script together with its source"""
    source: str
    tree: Tree
    deadline: Optional[Deadline] = None
    _source_bytes: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        if not self._source_bytes:
            self._source_bytes = self.source.encode("utf8")

    @property
    def root(self) -> TSNode:
        return self.tree.root_node

    @property
    def statements(self) -> List[TSNode]:
        """Top-level statements, in source order"""
        return [c for c in self.root.named_children if c.type not in _TRIVIA]

    def text(self, node: TSNode) -> str:
        """Get source text of a node"""
        if node is None:
            return ""
        return self._source_bytes[node.start_byte:node.end_byte].decode("utf8", errors="replace")

    def position(self, node: TSNode) -> Tuple[int, int]:
        """(line, column) of the start of a node: 1-based line, 0-based column in characters"""
        line_start = self._source_bytes.rfind(b"\n", 0, node.start_byte) + 1
        prefix = self._source_bytes[line_start:node.start_byte].decode("utf8", errors="replace")
        return node.start_point[0] + 1, len(prefix)

    def line(self, node: TSNode) -> int:
        return node.start_point[0] + 1

    def walk(self, node: TSNode) -> Iterator[TSNode]:
        """
        Pre-order walk over the named nodes below (and including) node.

        Uses an explicit stack, so nesting depth is bounded by memory and
        not by the interpreter's recursion limit.
        """
        stack = [node]
        visited = 0
        while stack:
            current = stack.pop()
            visited += 1
            if self.deadline is not None and visited % _DEADLINE_STRIDE == 0:
                self.deadline.check()
            yield current
            stack.extend(reversed(current.named_children))

    def string_value(self, node: TSNode) -> str:
        """Decoded value of a string literal node"""
        parts = []
        for child in node.named_children:
            if child.type == "string_fragment":
                parts.append(self.text(child))
            elif child.type == "escape_sequence":
                parts.append(_decode_escape(self.text(child)))
        return "".join(parts)


def unwrap_parentheses(node: Optional[TSNode]) -> Optional[TSNode]:
    """Strip any parentheses around an expression"""
    while node is not None and node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type not in _TRIVIA]
        node = inner[0] if inner else None
    return node


def _decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as \\n, \\x41 or \\u{1F600}"""
    body = sequence[1:]
    if not body:
        return ""
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body[0] in "ux" and len(body) > 1:
            return chr(int(body[1:], 16))
    except ValueError:
        return body
    if body[0] in "\r\n\u2028\u2029":
        return ""
    return _SIMPLE_ESCAPES.get(body, body)


class JavaScriptFrontend:
    """
    Parses custom node scripts with the tree-sitter JavaScript grammar.

    Usage:
        frontend = JavaScriptFrontend()
        try:
            script = frontend.parse(source_code)
        except ScriptSyntaxError as e:
            print(e.message, e.line, e.column)
    """

    def __init__(self):
        if not TREE_SITTER_JS_AVAILABLE:
            raise ImportError(
                "tree-sitter-javascript is required. "
                "Install with: pip install tree-sitter tree-sitter-javascript"
            )
        self.language = Language(tsjavascript.language())

        from nodecheck.frontends.early_errors import EarlyErrorChecker
        self.early_errors = EarlyErrorChecker()

    def parse(self, source_code: str, deadline: Optional[Deadline] = None) -> ParsedScript:
        """
        Parse source code as a standalone script.

        Args:
            source_code: Script text
            deadline: Optional validation budget shared with the analyzers

        Returns:
            ParsedScript for the analyzers

        Raises:
            ScriptSyntaxError: if the script does not parse, or uses
                module-only syntax at the top level, or hits an early error
        """
        # One parser per call; Parser objects are never shared
        parser = Parser(self.language)
        source_bytes = source_code.encode("utf8")
        tree = parser.parse(source_bytes)
        script = ParsedScript(source_code, tree, deadline, source_bytes)

        if script.root.has_error:
            raise self._locate_syntax_error(script)

        for statement in script.statements:
            if statement.type in _MODULE_DECLARATIONS:
                line, column = script.position(statement)
                raise ScriptSyntaxError(MODULE_SYNTAX_MESSAGE, line, column)

        error = self.early_errors.check(script)
        if error is not None:
            raise error

        return script

    def _locate_syntax_error(self, script: ParsedScript) -> ScriptSyntaxError:
        """Build a ScriptSyntaxError for the first error or missing node"""
        stack = [script.root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                line, column = script.position(node)
                return ScriptSyntaxError(f"Expected '{node.type}'", line, column)
            if node.is_error or node.type == "ERROR":
                line, column = script.position(node)
                return ScriptSyntaxError(self._unexpected_message(script, node), line, column)
            stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
        return ScriptSyntaxError("Unexpected token", 1, 1)

    def _unexpected_message(self, script: ParsedScript, node: TSNode) -> str:
        leaf = node
        while leaf.children:
            leaf = leaf.children[0]
        token = script.text(leaf).strip()
        if not token:
            return "Unexpected end of input"
        if len(token) > 20:
            token = token[:20] + "..."
        return f"Unexpected token '{token}'"
