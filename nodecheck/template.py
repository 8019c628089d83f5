"""
Script templates for custom nodes.

Generates a working processData skeleton from socket and property
definitions, plus a markdown guide around it. Generated templates pass
validation against the same outputs without errors or warnings.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from nodecheck.exceptions import DefinitionError
from nodecheck.specs.sandbox_specs import AVAILABLE_GLOBALS, ENTRY_FUNCTION, ENTRY_PARAMETERS
from nodecheck.types import DataType, SocketLike, coerce_sockets


# JavaScript default literal per data type
DEFAULT_VALUES = {
    DataType.TEXT: "''",
    DataType.NUMBER: "0",
    DataType.BOOLEAN: "false",
    DataType.JSON: "{}",
    DataType.ARRAY: "[]",
    DataType.ANY: "null",
}


@dataclass(frozen=True)
class PropertyDefinition:
    """A configurable property of a custom node"""
    key: str
    data_type: str = "any"
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PropertyDefinition":
        key = data.get("key")
        if not isinstance(key, str) or not key:
            raise DefinitionError(f"Property definition without a key: {dict(data)!r}")
        return cls(
            key=key,
            data_type=str(data.get("dataType") or "any"),
            description=data.get("description") or "",
        )


PropertyLike = Union[PropertyDefinition, Mapping[str, Any]]


def default_value(data_type: Union[DataType, str, None]) -> str:
    """JavaScript literal used as fallback for a data type (null when unknown)"""
    if isinstance(data_type, DataType):
        return DEFAULT_VALUES[data_type]
    try:
        return DEFAULT_VALUES[DataType(str(data_type).lower())]
    except ValueError:
        return "null"


def _coerce_properties(properties: Optional[Iterable[PropertyLike]]) -> List[PropertyDefinition]:
    if not properties:
        return []
    return [p if isinstance(p, PropertyDefinition) else PropertyDefinition.from_dict(p) for p in properties]


def _trailing(description: str) -> str:
    return f" // {description}" if description else ""


def generate_template(
    inputs: Iterable[SocketLike],
    outputs: Iterable[SocketLike],
    properties: Optional[Iterable[PropertyLike]] = None,
    llm_enabled: bool = False,
) -> str:
    """
    Generate a script skeleton for the given definitions.

    Args:
        inputs: Input sockets, read as ``inputs.<name>``
        outputs: Output sockets, returned as object keys
        properties: Optional configurable properties, read as ``properties.<key>``
        llm_enabled: Include an ``llm.call()`` example

    Returns:
        JavaScript source defining the entry function
    """
    input_defs = coerce_sockets(inputs)
    output_defs = coerce_sockets(outputs)
    property_defs = _coerce_properties(properties)

    lines = [f"function {ENTRY_FUNCTION}({', '.join(ENTRY_PARAMETERS)}) {{"]

    if input_defs:
        lines.append("  // Get inputs")
        for socket in input_defs:
            lines.append(
                f"  const {socket.name} = inputs.{socket.name} || {default_value(socket.data_type)};"
                f"{_trailing(socket.description)}"
            )
        lines.append("")

    if property_defs:
        lines.append("  // Get properties")
        for prop in property_defs:
            lines.append(
                f"  const {prop.key} = properties.{prop.key} || {default_value(prop.data_type)};"
                f"{_trailing(prop.description)}"
            )
        lines.append("")

    if llm_enabled:
        prompt_source = input_defs[0].name if input_defs else "inputs.YourInput"
        lines.extend([
            "  // LLM call example (llm_enabled is true)",
            "  // Users will see Quick Select buttons to choose their AI model",
            "  const llmResult = llm.call({",
            "    prompt: `Your prompt here using ${" + prompt_source + "}`,",
            '    systemPrompt: "Optional system instructions",  // Optional',
            "    temperature: 0.7,  // Optional (0-2)",
            "    maxTokens: 1000    // Optional",
            "  });",
            "",
            "  // Handle LLM response",
            "  if (!llmResult.success) {",
            '    console.error("LLM error:", llmResult.error);',
            "  }",
            "",
        ])
    else:
        lines.append("  // Add your logic here")
        lines.append("")

    lines.append("  return {")
    for i, socket in enumerate(output_defs):
        comma = "," if i < len(output_defs) - 1 else ""
        value = input_defs[0].name if input_defs else default_value(socket.data_type)
        comment = socket.description or socket.data_type.value
        lines.append(f"    {socket.name}: {value}{comma} // {comment}")
    lines.append("  };")
    lines.append("}")

    return "\n".join(lines)


def _describe(label: str, data_type: str, description: str) -> str:
    suffix = f" - {description}" if description else ""
    return f"- `{label}` ({data_type}){suffix}"


def format_template_guide(
    inputs: Iterable[SocketLike],
    outputs: Iterable[SocketLike],
    properties: Optional[Iterable[PropertyLike]] = None,
    llm_enabled: bool = False,
) -> str:
    """Markdown guide: the generated template plus the node's contract"""
    input_defs = coerce_sockets(inputs)
    output_defs = coerce_sockets(outputs)
    property_defs = _coerce_properties(properties)
    template = generate_template(input_defs, output_defs, property_defs, llm_enabled)

    lines = [
        "## Custom Node Script Template",
        "",
        "```javascript",
        template,
        "```",
        "",
        "### Inputs Available:",
    ]
    lines.extend(_describe(f"inputs.{s.name}", s.data_type.value, s.description) for s in input_defs)
    lines.append("")
    lines.append("### Outputs Expected:")
    lines.extend(_describe(s.name, s.data_type.value, s.description) for s in output_defs)

    if property_defs:
        lines.append("")
        lines.append("### Properties Available:")
        lines.extend(_describe(f"properties.{p.key}", p.data_type, p.description) for p in property_defs)

    lines.extend([
        "",
        "### Usage Notes:",
        f"- The `{ENTRY_FUNCTION}` function is auto-invoked by the runtime",
        "- Return keys MUST match output names exactly (case-sensitive)",
        f"- Available globals: {', '.join(AVAILABLE_GLOBALS)}",
        "- No require/import, eval, process, global, or file system access",
    ])

    if llm_enabled:
        lines.extend([
            "",
            "### LLM Capability (Enabled):",
            "When you create this node with `llm_enabled: true`:",
            "- Users see Quick Select buttons to choose their AI model",
            "- Your script can call `llm.call()` to make AI requests",
            "",
            "**llm.call() syntax:**",
            "```javascript",
            "const reply = llm.call({",
            '  prompt: "Your prompt",        // Required',
            '  systemPrompt: "Instructions", // Optional',
            "  temperature: 0.7,             // Optional (0-2)",
            "  maxTokens: 1000               // Optional",
            "});",
            "```",
            "",
            "**Response structure:**",
            "```javascript",
            "{",
            "  success: boolean,",
            "  response: string,      // LLM's response",
            "  error: string | null,  // Error if failed",
            "  provider: string,",
            "  model: string,",
            "  tokens: { prompt, response, total }",
            "}",
            "```",
        ])

    return "\n".join(lines)
