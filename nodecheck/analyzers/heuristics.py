"""
Best-practice heuristics.

A short, loose list of checks for mistakes script authors
commonly make. They are string-matched, never AST-verified, and report at
warning or info level only.
"""

from typing import List, Optional, Sequence

from nodecheck.specs import sandbox_specs as rules
from nodecheck.types import Finding, FindingKind, Severity, SocketDefinition
from nodecheck.utils import Deadline, check_deadline, find_line_number


class HeuristicAnalyzer:
    """Runs the independent best-practice checks over the source text"""

    def __init__(self, entry_function: str = rules.ENTRY_FUNCTION):
        self.entry_function = entry_function

    def analyze(
        self,
        source_code: str,
        outputs: Sequence[SocketDefinition],
        deadline: Optional[Deadline] = None,
    ) -> List[Finding]:
        findings = []

        for check in (self._check_outputs_variable, self._check_unused_result, self._check_string_data_type):
            check_deadline(deadline)
            finding = check(source_code, outputs)
            if finding is not None:
                findings.append(finding)

        return findings

    def _check_outputs_variable(self, source_code: str, outputs) -> Optional[Finding]:
        """There is no ambient `outputs` object; values must be returned"""
        if not (rules.OUTPUTS_ASSIGNMENT.search(source_code) or rules.OUTPUTS_ACCESS.search(source_code)):
            return None
        return Finding(
            kind=FindingKind.BEST_PRACTICE,
            severity=Severity.WARNING,
            message=(
                "'outputs' is not a predefined variable. "
                f"Return values from {self.entry_function}() instead."
            ),
            line=find_line_number(source_code, rules.OUTPUTS_MENTION),
        )

    def _check_unused_result(self, source_code: str, outputs) -> Optional[Finding]:
        """A `result` binding that no returned object literal mentions"""
        if not rules.RESULT_DECLARATION.search(source_code):
            return None
        if any(o.name == "result" for o in outputs):
            return None
        if rules.RESULT_RETURNED.search(source_code):
            return None
        return Finding(
            kind=FindingKind.BEST_PRACTICE,
            severity=Severity.INFO,
            message=(
                "Variable 'result' defined but may not be returned. "
                "Did you mean to include it in the return statement?"
            ),
            line=find_line_number(source_code, rules.RESULT_ASSIGNMENT),
        )

    def _check_string_data_type(self, source_code: str, outputs) -> Optional[Finding]:
        if not rules.STRING_DATA_TYPE.search(source_code):
            return None
        return Finding(
            kind=FindingKind.BEST_PRACTICE,
            severity=Severity.INFO,
            message="Note: Use 'text' instead of 'string' for dataType values.",
        )
