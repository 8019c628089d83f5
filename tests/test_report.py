"""
Tests for the grouped text report.
"""

from nodecheck.report import format_finding, format_findings
from nodecheck.types import Finding, FindingKind, Severity


def error(message, line=None, column=None):
    return Finding(FindingKind.SYNTAX, Severity.ERROR, message, line, column)


def warning(message, line=None):
    return Finding(FindingKind.OUTPUT_MISMATCH, Severity.WARNING, message, line)


def note(message, line=None):
    return Finding(FindingKind.BEST_PRACTICE, Severity.INFO, message, line)


class TestFormatFinding:
    """Test rendering of a single finding"""

    def test_with_line(self):
        assert format_finding(error("bad", line=4)) == "- bad (line 4)"

    def test_with_column(self):
        assert format_finding(error("bad", line=4, column=2)) == "- bad (line 4:2)"

    def test_without_location(self):
        assert format_finding(warning("missing")) == "- missing"


class TestFormatFindings:
    """Test grouping under severity headers"""

    def test_empty(self):
        """Test nothing is rendered for no findings"""
        assert format_findings([]) == ""

    def test_all_groups(self):
        """Test full layout with every group present"""
        findings = [
            note("n1", line=1),
            error("e1", line=2),
            warning("w1"),
            error("e2", line=5),
        ]
        expected = "\n".join([
            "",
            "## Script Validation Warnings:",
            "",
            "### Errors (script may not execute):",
            "- e1 (line 2)",
            "- e2 (line 5)",
            "",
            "### Warnings:",
            "- w1",
            "",
            "### Notes:",
            "- n1 (line 1)",
            "",
        ])
        assert format_findings(findings) == expected

    def test_missing_groups_omitted(self):
        """Test only non-empty groups get a header"""
        text = format_findings([note("only a note")])
        assert "### Errors" not in text
        assert "### Warnings:" not in text
        assert "### Notes:\n- only a note" in text

    def test_order_within_group_preserved(self):
        """Test findings keep validator order inside their group"""
        text = format_findings([warning("b"), warning("a")])
        assert text.index("- b") < text.index("- a")
