"""
Text rendering of findings for the hub tool layer.

The tool layer appends this block to its create/update custom node
responses, so the headers and line format below are what its consumers
parse and display.
"""

from typing import Iterable, List

from nodecheck.types import Finding, Severity


REPORT_TITLE = "## Script Validation Warnings:"

SECTION_HEADERS = [
    (Severity.ERROR, "### Errors (script may not execute):"),
    (Severity.WARNING, "### Warnings:"),
    (Severity.INFO, "### Notes:"),
]


def format_finding(finding: Finding) -> str:
    """Format one finding as ``- <message> (line <n>[:<col>])``"""
    location = finding.location
    if location:
        return f"- {finding.message} ({location})"
    return f"- {finding.message}"


def format_findings(findings: Iterable[Finding]) -> str:
    """
    Group findings under Errors / Warnings / Notes headers.

    Args:
        findings: Findings in validator order (a ValidationResult works too)

    Returns:
        Markdown block, or an empty string when there is nothing to report
    """
    findings = list(findings)
    if not findings:
        return ""

    lines: List[str] = ["", REPORT_TITLE, ""]

    for severity, header in SECTION_HEADERS:
        group = [f for f in findings if f.severity == severity]
        if not group:
            continue
        lines.append(header)
        lines.extend(format_finding(f) for f in group)
        lines.append("")

    return "\n".join(lines)
