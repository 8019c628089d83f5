"""
Script analyzers for nodecheck.

Each analyzer covers one stage of the validation pipeline:

- structure: entry function presence, parameters, top-level returns
- outputs: returned object keys against declared outputs
- security: disallowed API/keyword patterns, line by line
- heuristics: common best-practice mistakes
"""

from nodecheck.analyzers.structure import StructureAnalyzer, StructureReport
from nodecheck.analyzers.outputs import OutputCoverageAnalyzer, collect_returned_keys
from nodecheck.analyzers.security import SecurityScanner
from nodecheck.analyzers.heuristics import HeuristicAnalyzer

__all__ = [
    "StructureAnalyzer",
    "StructureReport",
    "OutputCoverageAnalyzer",
    "collect_returned_keys",
    "SecurityScanner",
    "HeuristicAnalyzer",
]
