"""
Sandbox rule tables.

Specifications include:
- The hosting contract (entry function and its parameters)
- Disallowed API/keyword patterns for the security scan
- Regexes behind the best-practice heuristics
"""

from nodecheck.specs.sandbox_specs import (
    ENTRY_FUNCTION,
    ENTRY_PARAMETERS,
    SECURITY_PATTERNS,
    SecurityPattern,
)

__all__ = [
    "ENTRY_FUNCTION",
    "ENTRY_PARAMETERS",
    "SECURITY_PATTERNS",
    "SecurityPattern",
]
