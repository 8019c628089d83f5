"""
Tests for security pattern scanning.

The scanner works on raw text, so these tests need no parser.
"""

import re

import pytest

from nodecheck.analyzers.security import SecurityScanner
from nodecheck.exceptions import ValidationTimeout
from nodecheck.specs.sandbox_specs import SECURITY_PATTERNS, SecurityPattern
from nodecheck.types import FindingKind, Severity
from nodecheck.utils import Deadline


@pytest.fixture
def scanner():
    return SecurityScanner()


class TestPatterns:
    """Test each disallowed construct is detected"""

    @pytest.mark.parametrize("line,message", [
        ("const v = eval(code);", "eval() is blocked in sandbox"),
        ("const f = new Function('return 1');", "Function constructor is blocked"),
        ("const fs2 = require('path');", "require() is not available in sandbox"),
        ("import x from 'y';", "import statements are not supported"),
        ("const env = process.env.HOME;", "process object is not available"),
        ("global.leak = 1;", "global object access is blocked"),
        ("globalThis.leak = 1;", "globalThis access is blocked"),
        ("obj.__proto__.polluted = true;", "__proto__ access is blocked (security)"),
        ("const F = ''.constructor.constructor;", "Constructor chain access is blocked (security)"),
        ("const data = fs.readFileSync(p);", "File system (fs) is not available"),
        ("const cp = child_process;", "child_process module is not available"),
        ("exec('ls');", "exec() is not available"),
        ("spawn ('ls');", "spawn() is not available"),
        ("setTimeout('alert(1)', 10);", "setTimeout with string is blocked"),
        ("setInterval( `tick()`, 10);", "setInterval with string is blocked"),
    ])
    def test_single_pattern(self, scanner, line, message):
        """Test a line that triggers exactly one pattern"""
        findings = scanner.scan(line)
        assert [f.message for f in findings] == [message]
        assert findings[0].kind == FindingKind.SECURITY
        assert findings[0].severity == Severity.ERROR
        assert findings[0].line == 1
        assert findings[0].column is None

    @pytest.mark.parametrize("line", [
        "const evaluation = evaluate(x);",
        "const fn = myFunction(x);",
        "setTimeout(() => done(), 10);",
        "const processed = processData(inputs);",
        "const prefs = config.prefs;",
        "inputs.execute(1);",
        "return { Out: inputs.In };",
    ])
    def test_lookalikes_not_flagged(self, scanner, line):
        """Test identifiers that merely contain a blocked name"""
        assert scanner.scan(line) == []


class TestScanOrder:
    """Test line numbering and ordering of findings"""

    def test_each_occurrence_reported(self, scanner):
        """Test the same pattern on two lines yields two findings"""
        code = "\n".join([
            "function processData(inputs, properties) {",
            "  const a = 1;",
            "  const b = 2;",
            "  const c = 3;",
            "  eval(a);",
            "  const d = 4;",
            "  const e = 5;",
            "  const f = 6;",
            "  eval(b);",
            "  return {};",
            "}",
        ])
        findings = scanner.scan(code)
        assert [f.line for f in findings] == [5, 9]
        assert all(f.message == "eval() is blocked in sandbox" for f in findings)

    def test_multiple_patterns_on_one_line(self, scanner):
        """Test findings on one line follow the pattern table order"""
        findings = scanner.scan("require('child_process').exec(process.argv);")
        assert [f.message for f in findings] == [
            "require() is not available in sandbox",
            "process object is not available",
            "child_process module is not available",
            "exec() is not available",
        ]

    @pytest.mark.parametrize("line", ["\u00e9eval(1);", "caf\u00e9global.x = 1;", "x\u00e0require('a');"])
    def test_ascii_word_boundaries(self, scanner, line):
        """Test non-ASCII letters do not count as word characters"""
        assert len(scanner.scan(line)) == 1

    def test_ascii_whitespace(self, scanner):
        """Test only ASCII whitespace may separate a name from its call"""
        assert scanner.scan("eval\u3000(1);") == []

    def test_matches_inside_comments(self, scanner):
        """Test comments are scanned like code"""
        findings = scanner.scan("// we used to call eval(x) here\nconst y = 1;")
        assert len(findings) == 1
        assert findings[0].line == 1

    def test_custom_patterns(self):
        """Test a scanner built from a custom table"""
        rule = SecurityPattern(re.compile(r'\bfetch\s*\('), 'fetch() is not available')
        scanner = SecurityScanner([rule])
        findings = scanner.scan("eval(x);\nfetch(url);")
        assert [(f.line, f.message) for f in findings] == [(2, 'fetch() is not available')]

    def test_default_table_size(self):
        """Test the default table holds every built-in rule"""
        assert len(SECURITY_PATTERNS) == 15

    def test_deadline(self, scanner):
        """Test an exhausted budget aborts the scan"""
        with pytest.raises(ValidationTimeout):
            scanner.scan("const a = 1;\nconst b = 2;", Deadline(-1))
