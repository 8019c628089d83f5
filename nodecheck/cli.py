#!/usr/bin/env python3
"""
nodecheck CLI.

Command-line interface for validating custom node scripts.

Usage:
    # Validate a script against declared outputs
    nodecheck check node.js --output Summary:text --output Count:number

    # Validate a full custom node definition (inputs, outputs, script_code)
    nodecheck check --node my-node.json

    # SARIF output for code-scanning integrations
    nodecheck check --node my-node.json --format sarif -o results.sarif

    # Generate a script template for a node definition
    nodecheck template --node my-node.json --llm
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from nodecheck import __version__
from nodecheck.exceptions import DefinitionError
from nodecheck.report import format_findings
from nodecheck.specs.sandbox_specs import ENTRY_FUNCTION
from nodecheck.types import Severity, SocketDefinition, ValidationResult


EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser"""
    parser = argparse.ArgumentParser(
        prog="nodecheck",
        description="nodecheck - static validation of custom node scripts",
        epilog="Use 'nodecheck <command> --help' for more information on a specific command.",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # === CHECK command ===
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a custom node script",
        description="Report structural, security and best-practice problems in a script.",
    )
    check_parser.add_argument(
        "script",
        nargs="?",
        help="Script file ('-' for stdin); overrides script_code from --node"
    )
    check_parser.add_argument(
        "-n", "--node",
        help="Custom node definition JSON (inputs, outputs, script_code)"
    )
    check_parser.add_argument(
        "--output",
        action="append",
        default=[],
        metavar="NAME[:TYPE]",
        help="Declared output socket (repeatable); replaces outputs from --node"
    )
    check_parser.add_argument(
        "--input",
        action="append",
        default=[],
        metavar="NAME[:TYPE]",
        help="Declared input socket (repeatable); replaces inputs from --node"
    )
    check_parser.add_argument(
        "-f", "--format",
        default="text",
        choices=["text", "json", "sarif"],
        help="Output format (default: text)"
    )
    check_parser.add_argument(
        "-o", "--output-file",
        help="Output file (default: stdout)"
    )
    check_parser.add_argument(
        "--fail-on",
        choices=["error", "warning", "info", "any", "none"],
        default="error",
        help="Exit with status 1 if findings of this severity or higher exist (default: error)"
    )
    check_parser.add_argument(
        "--entry",
        default=ENTRY_FUNCTION,
        help=f"Entry function name (default: {ENTRY_FUNCTION})"
    )
    check_parser.add_argument(
        "--timeout",
        type=int,
        default=5000,
        help="Validation budget in ms, 0 to disable (default: 5000)"
    )
    check_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    # === TEMPLATE command ===
    template_parser = subparsers.add_parser(
        "template",
        help="Generate a script template",
        description="Generate a working processData skeleton for a node definition.",
    )
    template_parser.add_argument(
        "-n", "--node",
        help="Custom node definition JSON (inputs, outputs, properties)"
    )
    template_parser.add_argument(
        "--output",
        action="append",
        default=[],
        metavar="NAME[:TYPE]",
        help="Output socket (repeatable); replaces outputs from --node"
    )
    template_parser.add_argument(
        "--input",
        action="append",
        default=[],
        metavar="NAME[:TYPE]",
        help="Input socket (repeatable); replaces inputs from --node"
    )
    template_parser.add_argument(
        "--llm",
        action="store_true",
        help="Include an llm.call() example"
    )
    template_parser.add_argument(
        "--guide",
        action="store_true",
        help="Print the full markdown guide instead of just the script"
    )

    return parser


def load_node_definition(path: str) -> Dict[str, Any]:
    """Load a custom node definition from a JSON file"""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DefinitionError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise DefinitionError(f"{path}: expected a JSON object")
    return data


def read_script(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _sockets(cli_values: List[str], node: Dict[str, Any], key: str) -> List[Any]:
    """Sockets from repeated CLI flags, else from the node definition"""
    if cli_values:
        return [SocketDefinition.parse(v) for v in cli_values]
    return list(node.get(key) or [])


def should_fail(result: ValidationResult, fail_on: str) -> bool:
    """Determine if the command should fail based on findings"""
    if fail_on == "none":
        return False
    if fail_on == "any":
        return len(result) > 0
    threshold = Severity(fail_on).rank
    return any(f.severity.rank >= threshold for f in result)


def format_text_result(result: ValidationResult) -> str:
    """Format a validation result as human-readable text"""
    text = format_findings(result)
    if not text:
        return f"{result.filename}: no problems found"
    return f"{result.filename}:{text}"


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        if args.command == "check":
            return cmd_check(args)
        if args.command == "template":
            return cmd_template(args)
    except (DefinitionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    return EXIT_OK


def cmd_check(args) -> int:
    """Execute check command"""
    from nodecheck.validator import ScriptValidator

    node = load_node_definition(args.node) if args.node else {}

    if args.script:
        script_code = read_script(args.script)
        filename = "<stdin>" if args.script == "-" else args.script
    elif "script_code" in node:
        script_code = node["script_code"]
        filename = args.node
    else:
        print("Error: no script given (pass a script file or --node with script_code)", file=sys.stderr)
        return EXIT_USAGE

    try:
        validator = ScriptValidator(
            entry_function=args.entry,
            timeout=args.timeout or None,
            verbose=args.verbose,
        )
    except ImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FINDINGS

    result = validator.validate(
        script_code,
        outputs=_sockets(args.output, node, "outputs"),
        inputs=_sockets(args.input, node, "inputs"),
        filename=filename,
    )

    if args.format == "json":
        output = result.to_json()
    elif args.format == "sarif":
        output = json.dumps(result.to_sarif(), indent=2)
    else:
        output = format_text_result(result)

    if args.output_file:
        with open(args.output_file, 'w') as f:
            f.write(output + "\n")
    else:
        print(output)

    if should_fail(result, args.fail_on):
        return EXIT_FINDINGS
    return EXIT_OK


def cmd_template(args) -> int:
    """Execute template command"""
    from nodecheck.template import format_template_guide, generate_template

    node = load_node_definition(args.node) if args.node else {}
    inputs = _sockets(args.input, node, "inputs")
    outputs = _sockets(args.output, node, "outputs")
    properties = node.get("properties") or []
    llm_enabled = args.llm or bool(node.get("llm_enabled"))

    if not outputs:
        print("Error: at least one output is required (--output or --node)", file=sys.stderr)
        return EXIT_USAGE

    render = format_template_guide if args.guide else generate_template
    print(render(inputs, outputs, properties, llm_enabled))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
