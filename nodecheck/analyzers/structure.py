"""
Structural contract checks.

The hosting runtime calls one top-level function by name with
(inputs, properties, llm). This analyzer finds that function, checks its
parameter list, and reports return statements sitting at the top level.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from nodecheck.frontends.javascript_frontend import ParsedScript, TSNode
from nodecheck.specs.sandbox_specs import ENTRY_FUNCTION, FUNCTION_DECLARATIONS
from nodecheck.types import Finding, FindingKind, Severity


@dataclass
class StructureReport:
    """Findings of the structural pass plus the entry function, if found"""
    findings: List[Finding] = field(default_factory=list)
    entry_function: Optional[TSNode] = None


class StructureAnalyzer:
    """Checks that the entry function exists and is shaped correctly"""

    def __init__(self, entry_function: str = ENTRY_FUNCTION):
        self.entry_function = entry_function

    def analyze(self, script: ParsedScript) -> StructureReport:
        report = StructureReport()
        name = self.entry_function

        report.entry_function = self.find_entry_function(script)

        if report.entry_function is None:
            report.findings.append(Finding(
                kind=FindingKind.MISSING_FUNCTION,
                severity=Severity.ERROR,
                message=(
                    f"No '{name}' function found. Script must define: "
                    f"function {name}(inputs, properties, llm) {{ return {{ ... }}; }}"
                ),
                line=1,
            ))
        else:
            report.findings.extend(self._check_parameters(script, report.entry_function))

        for statement in script.statements:
            if statement.type == "return_statement":
                report.findings.append(Finding(
                    kind=FindingKind.SYNTAX,
                    severity=Severity.ERROR,
                    message=f"Top-level 'return' statement found. Return must be inside {name} function.",
                    line=script.line(statement),
                ))

        return report

    def find_entry_function(self, script: ParsedScript) -> Optional[TSNode]:
        """First top-level function declaration with the entry name"""
        for statement in script.statements:
            if statement.type not in FUNCTION_DECLARATIONS:
                continue
            name_node = statement.child_by_field_name("name")
            if name_node is not None and script.text(name_node) == self.entry_function:
                return statement
        return None

    def _check_parameters(self, script: ParsedScript, function: TSNode) -> List[Finding]:
        name = self.entry_function
        count = len(parameter_nodes(function))
        line = script.line(function)

        if count == 0:
            return [Finding(
                kind=FindingKind.BEST_PRACTICE,
                severity=Severity.WARNING,
                message=f"{name} has no parameters. Expected: function {name}(inputs, properties)",
                line=line,
            )]
        if count == 1:
            return [Finding(
                kind=FindingKind.BEST_PRACTICE,
                severity=Severity.INFO,
                message=(
                    f"{name} has 1 parameter. Consider adding 'properties' as second "
                    "parameter for node configuration."
                ),
                line=line,
            )]
        return []


def parameter_nodes(function: TSNode) -> List[TSNode]:
    """Declared parameters of a function node, comments excluded"""
    params_node = function.child_by_field_name("parameters")
    if params_node is None:
        return []
    return [p for p in params_node.named_children if p.type != "comment"]
