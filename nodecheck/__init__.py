"""
nodecheck: static validation of custom node scripts.

Inspects JavaScript written for a workflow hub's sandboxed custom node
runtime and reports problems before the script is saved or run:
- syntax errors (tree-sitter JavaScript parser)
- a missing or misshapen processData entry function
- declared outputs the script never returns, and returned keys nobody declared
- disallowed APIs and keywords (eval, require, process, fs, ...)
- common best-practice mistakes

Findings are advisory; nothing here executes the script.

Example usage:
    from nodecheck import validate, format_findings

    findings = validate(script_code, outputs=[{"name": "Summary", "dataType": "text"}])
    print(format_findings(findings))
"""

from nodecheck.exceptions import (
    NodeCheckError,
    ScriptSyntaxError,
    ValidationTimeout,
    DefinitionError,
)
from nodecheck.types import (
    DataType,
    SocketDefinition,
    FindingKind,
    Severity,
    Finding,
    ValidationResult,
)
from nodecheck.report import format_findings
from nodecheck.validator import ScriptValidator, validate, validate_node
from nodecheck.template import PropertyDefinition, generate_template, format_template_guide

__version__ = "0.1.0"

__all__ = [
    # Validation
    "ScriptValidator",
    "validate",
    "validate_node",
    "format_findings",
    # Types
    "DataType",
    "SocketDefinition",
    "FindingKind",
    "Severity",
    "Finding",
    "ValidationResult",
    # Templates
    "PropertyDefinition",
    "generate_template",
    "format_template_guide",
    # Errors
    "NodeCheckError",
    "ScriptSyntaxError",
    "ValidationTimeout",
    "DefinitionError",
]
