"""
Language frontends for nodecheck.

Frontends parse script source with tree-sitter and hand the analyzers a
ParsedScript. Custom nodes are written in JavaScript, so there is one:
- JavaScriptFrontend: standalone JavaScript scripts
"""

from nodecheck.frontends.javascript_frontend import (
    JavaScriptFrontend,
    ParsedScript,
    TREE_SITTER_JS_AVAILABLE,
)

__all__ = [
    "JavaScriptFrontend",
    "ParsedScript",
    "TREE_SITTER_JS_AVAILABLE",
]
