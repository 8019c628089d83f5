"""
nodecheck script validator.

High-level interface for validating custom node scripts. Runs the full
pipeline:
    Script → Parser → Structure → Output coverage → Security → Heuristics → Findings

Usage:
    from nodecheck.validator import ScriptValidator

    validator = ScriptValidator()
    result = validator.validate(script_code, outputs=[{"name": "Out", "dataType": "text"}])

    for finding in result:
        print(f"{finding.severity.value}: {finding.message}")
"""

import sys
import time
from typing import Any, Iterable, List, Mapping, Optional

from nodecheck.analyzers.heuristics import HeuristicAnalyzer
from nodecheck.analyzers.outputs import OutputCoverageAnalyzer
from nodecheck.analyzers.security import SecurityScanner
from nodecheck.analyzers.structure import StructureAnalyzer
from nodecheck.exceptions import DefinitionError, ScriptSyntaxError, ValidationTimeout
from nodecheck.frontends.javascript_frontend import JavaScriptFrontend
from nodecheck.specs.sandbox_specs import ENTRY_FUNCTION
from nodecheck.types import (
    Finding,
    FindingKind,
    Severity,
    SocketDefinition,
    SocketLike,
    ValidationResult,
    coerce_sockets,
)
from nodecheck.utils import Deadline


DEFAULT_TIMEOUT_MS = 5000


class ScriptValidator:
    """
    Static validator for custom node scripts.

    Every call is independent: the validator only holds configuration, so
    one instance can serve concurrent callers.
    """

    def __init__(
        self,
        entry_function: str = ENTRY_FUNCTION,
        timeout: Optional[int] = DEFAULT_TIMEOUT_MS,
        verbose: bool = False,
    ):
        """
        Initialize the validator.

        Args:
            entry_function: Name of the function the runtime invokes
            timeout: Validation budget in milliseconds (None or 0 disables it)
            verbose: Print stage summaries to stderr
        """
        self.entry_function = entry_function
        self.timeout = timeout
        self.verbose = verbose

        self.frontend = JavaScriptFrontend()
        self.structure = StructureAnalyzer(entry_function)
        self.coverage = OutputCoverageAnalyzer()
        self.security = SecurityScanner()
        self.heuristics = HeuristicAnalyzer(entry_function)

    def validate(
        self,
        script_code: str,
        outputs: Optional[Iterable[SocketLike]] = None,
        inputs: Optional[Iterable[SocketLike]] = None,
        filename: str = "<script>",
    ) -> ValidationResult:
        """
        Validate a custom node script.

        Args:
            script_code: Raw script text
            outputs: Declared output sockets (SocketDefinition or hub-shaped dicts)
            inputs: Declared input sockets; accepted for the full node contract
                but not used by any check
            filename: Name used in reports

        Returns:
            ValidationResult with findings in detection order

        Raises:
            DefinitionError: if the script is not a string or a socket
                definition is malformed
        """
        if not isinstance(script_code, str):
            raise DefinitionError(f"script_code must be a string, got {type(script_code).__name__}")
        output_defs = coerce_sockets(outputs)
        coerce_sockets(inputs)

        start_time = time.time()
        result = ValidationResult(filename=filename)

        try:
            result.findings = self._run_pipeline(script_code, output_defs)
        except ValidationTimeout as e:
            self._log(f"{e}")
            result.findings = [Finding(
                kind=FindingKind.SYNTAX,
                severity=Severity.ERROR,
                message=f"{e}. The script is too large or too deeply nested to analyze.",
            )]
        except Exception as e:
            self._log(f"Internal error: {type(e).__name__}: {e}")
            result.findings = [Finding(
                kind=FindingKind.SYNTAX,
                severity=Severity.ERROR,
                message="Internal validator error: the script could not be analyzed.",
            )]

        result.validation_time_ms = (time.time() - start_time) * 1000
        self._log(f"Done: {len(result.findings)} findings in {result.validation_time_ms:.2f}ms")
        return result

    def validate_node(self, definition: Mapping[str, Any], filename: str = "<script>") -> ValidationResult:
        """
        Validate a hub-shaped custom node definition.

        Reads ``script_code``, ``outputs`` and ``inputs`` the way the create
        and update custom node calls carry them.
        """
        script_code = definition.get("script_code")
        if script_code is None:
            raise DefinitionError("Custom node definition has no 'script_code'")
        return self.validate(
            script_code,
            outputs=definition.get("outputs") or [],
            inputs=definition.get("inputs") or [],
            filename=filename,
        )

    def _run_pipeline(self, script_code: str, outputs: List[SocketDefinition]) -> List[Finding]:
        deadline = Deadline(self.timeout) if self.timeout else None
        findings: List[Finding] = []

        # Step 1: Parse; nothing else can run on a malformed script
        try:
            script = self.frontend.parse(script_code, deadline)
        except ScriptSyntaxError as e:
            self._log(f"Parse failed: {e.message}")
            findings.append(Finding(
                kind=FindingKind.SYNTAX,
                severity=Severity.ERROR,
                message=f"Syntax error: {e.message}",
                line=e.line,
                column=e.column,
            ))
            return findings

        # Step 2: Entry function and top-level structure
        structure = self.structure.analyze(script)
        findings.extend(structure.findings)
        self._log(
            f"Structure: entry function {'found' if structure.entry_function is not None else 'missing'}, "
            f"{len(structure.findings)} findings"
        )

        # Step 3: Output coverage
        if structure.entry_function is not None and outputs:
            coverage = self.coverage.analyze(script, structure.entry_function, outputs)
            findings.extend(coverage)
            self._log(f"Output coverage: {len(coverage)} findings")

        # Step 4: Security patterns
        security = self.security.scan(script_code, deadline)
        findings.extend(security)
        self._log(f"Security patterns: {len(security)} findings")

        # Step 5: Best-practice heuristics
        heuristics = self.heuristics.analyze(script_code, outputs, deadline)
        findings.extend(heuristics)
        self._log(f"Heuristics: {len(heuristics)} findings")

        return findings

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[Validator] {message}", file=sys.stderr)


def validate(
    script_code: str,
    outputs: Optional[Iterable[SocketLike]] = None,
    inputs: Optional[Iterable[SocketLike]] = None,
) -> List[Finding]:
    """
    Convenience function to validate a script.

    Args:
        script_code: Raw script text
        outputs: Declared output sockets
        inputs: Declared input sockets

    Returns:
        Findings in detection order
    """
    validator = ScriptValidator()
    return validator.validate(script_code, outputs, inputs).findings


def validate_node(definition: Mapping[str, Any]) -> List[Finding]:
    """Convenience function to validate a hub-shaped custom node definition"""
    validator = ScriptValidator()
    return validator.validate_node(definition).findings
