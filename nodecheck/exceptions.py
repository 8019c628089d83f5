"""
Exceptions raised inside nodecheck.

Script problems never escape ``ScriptValidator.validate``: ScriptSyntaxError
and ValidationTimeout are turned into findings there. DefinitionError is the
one that reaches callers, since it describes bad socket or node definitions
rather than a bad script.
"""

from typing import Optional


class NodeCheckError(Exception):
    """Base class for nodecheck errors"""
    pass


class ScriptSyntaxError(NodeCheckError):
    """The script could not be parsed as a standalone JavaScript script"""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class ValidationTimeout(NodeCheckError):
    """The validation budget ran out before the analysis finished"""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Validation timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class DefinitionError(NodeCheckError, ValueError):
    """Invalid socket, property or node definition supplied by the caller"""
    pass
