"""
Core type definitions for nodecheck.

This module defines the values passed in and out of the validator:
- Socket definitions declared for a custom node
- Findings reported for a script
- The ordered validation result with its report formats
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from enum import Enum
import json

from nodecheck.exceptions import DefinitionError


# =============================================================================
# Socket definitions
# =============================================================================

class DataType(Enum):
    """Data types accepted for custom node sockets"""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    ARRAY = "array"
    ANY = "any"

    @classmethod
    def parse(cls, value: Union[str, "DataType", None], strict: bool = True) -> "DataType":
        """
        Parse a data type name, defaulting to ANY when absent.

        Unknown names raise DefinitionError, or map to ANY when strict is False.
        """
        if value is None or value == "":
            return cls.ANY
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            if not strict:
                return cls.ANY
            valid = ", ".join(t.value for t in cls)
            raise DefinitionError(
                f"Unknown dataType {value!r} (expected one of: {valid})"
            ) from None


@dataclass(frozen=True)
class SocketDefinition:
    """
    A named, typed input or output slot of a custom node.

    Only the name is read by the validator. The data type is a declared
    contract and is never checked against runtime values.
    """
    name: str
    data_type: DataType = DataType.ANY
    description: str = ""

    def __str__(self) -> str:
        return f"{self.name}:{self.data_type.value}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SocketDefinition":
        """
        Build a socket from the hub's JSON shape ({name, dataType, description}).

        The hub does not restrict dataType, so an unknown one reads as ANY.
        """
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise DefinitionError(f"Socket definition without a name: {dict(data)!r}")
        return cls(
            name=name,
            data_type=DataType.parse(data.get("dataType", data.get("data_type")), strict=False),
            description=data.get("description") or "",
        )

    @classmethod
    def parse(cls, text: str) -> "SocketDefinition":
        """Parse the compact ``Name[:type]`` form used on the command line"""
        name, _, type_name = text.partition(":")
        name = name.strip()
        if not name:
            raise DefinitionError(f"Invalid socket {text!r}: name is empty")
        return cls(name=name, data_type=DataType.parse(type_name or None))


SocketLike = Union[SocketDefinition, Mapping[str, Any]]


def coerce_sockets(sockets: Optional[Iterable[SocketLike]]) -> List[SocketDefinition]:
    """Accept SocketDefinitions or hub-shaped dicts, in declaration order"""
    if not sockets:
        return []
    result = []
    for socket in sockets:
        if isinstance(socket, SocketDefinition):
            result.append(socket)
        elif isinstance(socket, Mapping):
            result.append(SocketDefinition.from_dict(socket))
        else:
            raise DefinitionError(f"Unsupported socket definition: {socket!r}")
    return result


# =============================================================================
# Findings
# =============================================================================

class FindingKind(Enum):
    """What a finding is about"""
    MISSING_FUNCTION = "missing_function"
    OUTPUT_MISMATCH = "output_mismatch"
    SYNTAX = "syntax"
    SECURITY = "security"
    BEST_PRACTICE = "best_practice"


class Severity(Enum):
    """How strongly the caller should treat a finding"""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return {Severity.ERROR: 3, Severity.WARNING: 2, Severity.INFO: 1}[self]


@dataclass(frozen=True)
class Finding:
    """One reported issue for a script"""
    kind: FindingKind
    severity: Severity
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def location(self) -> str:
        """Human-readable location, empty when the finding has none"""
        if not self.line:
            return ""
        # column 0 is not shown
        if self.column:
            return f"line {self.line}:{self.column}"
        return f"line {self.line}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        data = {
            "type": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.column is not None:
            data["column"] = self.column
        return data


# =============================================================================
# Validation result
# =============================================================================

@dataclass
class ValidationResult:
    """Ordered findings produced for one script and its socket definitions"""
    findings: List[Finding] = field(default_factory=list)
    filename: str = "<script>"
    validation_time_ms: float = 0.0

    def __iter__(self):
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self.findings)

    def by_severity(self, severity: Severity) -> List[Finding]:
        return [f for f in self.findings if f.severity == severity]

    @property
    def errors(self) -> List[Finding]:
        return self.by_severity(Severity.ERROR)

    @property
    def warnings(self) -> List[Finding]:
        return self.by_severity(Severity.WARNING)

    @property
    def notes(self) -> List[Finding]:
        return self.by_severity(Severity.INFO)

    @property
    def has_errors(self) -> bool:
        return any(f.severity == Severity.ERROR for f in self.findings)

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "findings": [f.to_dict() for f in self.findings],
            "validation_time_ms": self.validation_time_ms,
            "summary": {
                "total": len(self.findings),
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "notes": len(self.notes),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_sarif(self) -> dict:
        """Convert to SARIF 2.1.0 for code-scanning integrations"""
        from nodecheck import __version__

        rules: Dict[str, dict] = {}
        results = []

        for finding in self.findings:
            rule_id = f"nodecheck/{finding.kind.value}"
            if rule_id not in rules:
                rules[rule_id] = {
                    "id": rule_id,
                    "name": finding.kind.value.replace("_", " ").title(),
                    "shortDescription": {"text": finding.kind.value},
                }

            result = {
                "ruleId": rule_id,
                "level": _SARIF_LEVELS[finding.severity],
                "message": {"text": finding.message},
            }
            if finding.line:
                region = {"startLine": finding.line}
                if finding.column is not None:
                    region["startColumn"] = finding.column + 1
                result["locations"] = [{
                    "physicalLocation": {
                        "artifactLocation": {"uri": self.filename},
                        "region": region,
                    }
                }]
            results.append(result)

        return {
            "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json",
            "version": "2.1.0",
            "runs": [{
                "tool": {
                    "driver": {
                        "name": "nodecheck",
                        "version": __version__,
                        "rules": list(rules.values()),
                    }
                },
                "results": results,
            }]
        }


_SARIF_LEVELS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "note",
}
