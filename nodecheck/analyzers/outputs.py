"""
Output coverage checks.

The entry function should return an object literal whose keys are exactly
the declared output names. Keys are resolved statically: identifier and
string-literal keys count, anything computed at runtime is skipped.
"""

from typing import List, Optional, Sequence

from nodecheck.frontends.javascript_frontend import ParsedScript, TSNode, unwrap_parentheses
from nodecheck.types import Finding, FindingKind, Severity, SocketDefinition


class OutputCoverageAnalyzer:
    """Diffs statically returned object keys against declared outputs"""

    def analyze(
        self,
        script: ParsedScript,
        entry_function: TSNode,
        outputs: Sequence[SocketDefinition],
    ) -> List[Finding]:
        """
        Compare returned keys of the entry function with declared outputs.

        Args:
            script: Parsed script
            entry_function: Entry function declaration node
            outputs: Declared output sockets, in declaration order

        Returns:
            One warning per declared output never returned (declaration order),
            then one note per returned key that is not a declared output
            (first-seen order)
        """
        findings = []
        if not outputs:
            return findings

        returned = collect_returned_keys(script, entry_function)
        returned_set = set(returned)

        for output in outputs:
            if output.name not in returned_set:
                findings.append(Finding(
                    kind=FindingKind.OUTPUT_MISMATCH,
                    severity=Severity.WARNING,
                    message=f"Output '{output.name}' not found in return statement - will be undefined",
                ))

        output_names = {o.name for o in outputs}
        for key in returned:
            if key not in output_names:
                findings.append(Finding(
                    kind=FindingKind.OUTPUT_MISMATCH,
                    severity=Severity.INFO,
                    message=f"Return key '{key}' doesn't match any defined output - will be ignored",
                ))

        return findings


def collect_returned_keys(script: ParsedScript, function: TSNode) -> List[str]:
    """
    Keys of every object literal returned anywhere inside function.

    Every return statement below the function body counts, including those
    in nested blocks, loops and inner functions. Duplicates are dropped,
    first-seen order is kept.
    """
    keys: List[str] = []
    seen = set()

    body = function.child_by_field_name("body")
    if body is None:
        return keys

    for node in script.walk(body):
        if node.type != "return_statement":
            continue
        argument = unwrap_parentheses(_return_argument(node))
        if argument is None or argument.type != "object":
            continue
        for member in argument.named_children:
            key = _static_key(script, member)
            if key is not None and key not in seen:
                seen.add(key)
                keys.append(key)

    return keys


def _return_argument(node: TSNode) -> Optional[TSNode]:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _static_key(script: ParsedScript, member: TSNode) -> Optional[str]:
    """Statically known key of an object literal member, or None"""
    if member.type == "shorthand_property_identifier":
        return script.text(member)

    if member.type == "pair":
        key = member.child_by_field_name("key")
    elif member.type == "method_definition":
        key = member.child_by_field_name("name")
    else:
        # spread_element, comments
        return None

    if key is None:
        return None
    if key.type in ("property_identifier", "identifier"):
        return script.text(key)
    if key.type == "string":
        return script.string_value(key)
    # number, computed_property_name, private names
    return None
