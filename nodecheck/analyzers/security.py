"""
Security pattern scanning.

Works on raw source text, one physical line at a time, so that it still
catches constructs a syntax-tree walk would miss (bracket-notation access
assembled from strings, code hidden in comments or literals). Like any
regex scan it can be evaded; findings are advisory.
"""

from typing import List, Optional, Sequence

from nodecheck.specs.sandbox_specs import SECURITY_PATTERNS, SecurityPattern
from nodecheck.types import Finding, FindingKind, Severity
from nodecheck.utils import Deadline, check_deadline


class SecurityScanner:
    """Matches every source line against an ordered table of disallowed patterns"""

    def __init__(self, patterns: Optional[Sequence[SecurityPattern]] = None):
        self.patterns = list(patterns) if patterns is not None else list(SECURITY_PATTERNS)

    def scan(self, source_code: str, deadline: Optional[Deadline] = None) -> List[Finding]:
        """
        Scan source text for disallowed constructs.

        Args:
            source_code: Raw script text
            deadline: Optional validation budget

        Returns:
            One error per (line, pattern) match, ordered by line and then by
            the pattern table order
        """
        findings = []

        for line_num, line in enumerate(source_code.split('\n'), start=1):
            check_deadline(deadline)
            for rule in self.patterns:
                if rule.pattern.search(line):
                    findings.append(Finding(
                        kind=FindingKind.SECURITY,
                        severity=Severity.ERROR,
                        message=rule.message,
                        line=line_num,
                    ))

        return findings
