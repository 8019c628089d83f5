"""
Tests for nodecheck core types: socket definitions, findings and results.
"""

import json

import pytest

from nodecheck.exceptions import DefinitionError
from nodecheck.types import (
    DataType,
    Finding,
    FindingKind,
    Severity,
    SocketDefinition,
    ValidationResult,
    coerce_sockets,
)


class TestSocketDefinition:
    """Test parsing of socket definitions"""

    def test_from_hub_dict(self):
        """Test the hub's camelCase shape"""
        socket = SocketDefinition.from_dict({"name": "Summary", "dataType": "text", "description": "Short"})
        assert socket == SocketDefinition("Summary", DataType.TEXT, "Short")

    def test_from_dict_defaults(self):
        """Test that a missing dataType means any"""
        socket = SocketDefinition.from_dict({"name": "Out"})
        assert socket.data_type == DataType.ANY
        assert socket.description == ""

    def test_from_dict_snake_case(self):
        """Test the data_type spelling is accepted"""
        socket = SocketDefinition.from_dict({"name": "Count", "data_type": "NUMBER"})
        assert socket.data_type == DataType.NUMBER

    def test_missing_name(self):
        """Test a socket without a name is rejected"""
        with pytest.raises(DefinitionError):
            SocketDefinition.from_dict({"dataType": "text"})

    def test_unknown_data_type_reads_as_any(self):
        """Test hub definitions with an unknown dataType are accepted"""
        socket = SocketDefinition.from_dict({"name": "Out", "dataType": "string"})
        assert socket == SocketDefinition("Out", DataType.ANY)

    def test_unknown_data_type_compact(self):
        """Test the command-line form lists the valid types"""
        with pytest.raises(DefinitionError) as exc_info:
            SocketDefinition.parse("Out:string")
        assert "text" in str(exc_info.value)

    def test_lenient_parse(self):
        assert DataType.parse("float", strict=False) == DataType.ANY
        assert DataType.parse("Text", strict=False) == DataType.TEXT

    def test_definition_error_is_value_error(self):
        """Test callers catching ValueError still see definition errors"""
        with pytest.raises(ValueError):
            DataType.parse("float")

    @pytest.mark.parametrize("compact,expected", [
        ("Out", SocketDefinition("Out")),
        ("Out:text", SocketDefinition("Out", DataType.TEXT)),
        ("Items:array", SocketDefinition("Items", DataType.ARRAY)),
    ])
    def test_parse_compact(self, compact, expected):
        """Test the Name[:type] command-line form"""
        assert SocketDefinition.parse(compact) == expected

    def test_parse_empty_name(self):
        """Test the compact form needs a name"""
        with pytest.raises(DefinitionError):
            SocketDefinition.parse(":text")

    def test_coerce_mixed(self):
        """Test dicts and definitions can be mixed, order is kept"""
        sockets = coerce_sockets([{"name": "B"}, SocketDefinition("A")])
        assert [s.name for s in sockets] == ["B", "A"]

    def test_coerce_none(self):
        """Test that no sockets is an empty list"""
        assert coerce_sockets(None) == []

    def test_coerce_rejects_strings(self):
        """Test unsupported socket values"""
        with pytest.raises(DefinitionError):
            coerce_sockets(["Out"])


class TestFinding:
    """Test finding locations and serialization"""

    def test_location_line_and_column(self):
        finding = Finding(FindingKind.SYNTAX, Severity.ERROR, "bad", line=3, column=7)
        assert finding.location == "line 3:7"

    def test_location_line_only(self):
        finding = Finding(FindingKind.SECURITY, Severity.ERROR, "bad", line=3)
        assert finding.location == "line 3"

    def test_location_column_zero(self):
        """Test a finding at the start of a line shows only the line"""
        finding = Finding(FindingKind.SYNTAX, Severity.ERROR, "bad", line=3, column=0)
        assert finding.location == "line 3"
        assert finding.to_dict()["column"] == 0

    def test_location_none(self):
        finding = Finding(FindingKind.OUTPUT_MISMATCH, Severity.WARNING, "bad")
        assert finding.location == ""

    def test_to_dict_omits_missing_location(self):
        """Test that absent line/column are not serialized"""
        finding = Finding(FindingKind.OUTPUT_MISMATCH, Severity.WARNING, "missing")
        assert finding.to_dict() == {"type": "output_mismatch", "severity": "warning", "message": "missing"}

    def test_severity_rank(self):
        assert Severity.ERROR.rank > Severity.WARNING.rank > Severity.INFO.rank


class TestValidationResult:
    """Test result accessors and report formats"""

    @pytest.fixture
    def result(self):
        return ValidationResult(
            findings=[
                Finding(FindingKind.SECURITY, Severity.ERROR, "eval() is blocked in sandbox", line=2),
                Finding(FindingKind.OUTPUT_MISMATCH, Severity.WARNING, "Output 'A' not found"),
                Finding(FindingKind.BEST_PRACTICE, Severity.INFO, "note", line=1, column=4),
            ],
            filename="node.js",
        )

    def test_accessors(self, result):
        assert len(result) == 3
        assert len(result.errors) == 1
        assert len(result.warnings) == 1
        assert len(result.notes) == 1
        assert result.has_errors

    def test_empty_result(self):
        result = ValidationResult()
        assert len(result) == 0
        assert not result.has_errors

    def test_to_json(self, result):
        data = json.loads(result.to_json())
        assert data["filename"] == "node.js"
        assert data["summary"] == {"total": 3, "errors": 1, "warnings": 1, "notes": 1}
        assert data["findings"][0] == {
            "type": "security",
            "severity": "error",
            "message": "eval() is blocked in sandbox",
            "line": 2,
        }

    def test_to_sarif(self, result):
        """Test SARIF levels, rules and regions"""
        sarif = result.to_sarif()
        assert sarif["version"] == "2.1.0"
        run = sarif["runs"][0]
        assert run["tool"]["driver"]["name"] == "nodecheck"
        rule_ids = [r["id"] for r in run["tool"]["driver"]["rules"]]
        assert rule_ids == ["nodecheck/security", "nodecheck/output_mismatch", "nodecheck/best_practice"]

        levels = [r["level"] for r in run["results"]]
        assert levels == ["error", "warning", "note"]

        assert "locations" not in run["results"][1]
        region = run["results"][2]["locations"][0]["physicalLocation"]["region"]
        assert region == {"startLine": 1, "startColumn": 5}
