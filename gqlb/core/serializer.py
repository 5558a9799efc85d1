"""Renders selection trees as GraphQL operation text."""

import json
import math
from typing import Any

from .errors import InvalidArgumentValue
from .scalars import EnumValue
from .selection import Selection
from .variables import VariableDefinition, VariableRef

INDENT = "  "


def serialize_operation(
    kind: str,
    name: str | None,
    selections: list[Selection],
    variables: list[VariableDefinition],
) -> str:
    """Build the operation string.

    Args:
        kind: 'query', 'mutation' or 'subscription'
        name: Operation name, or None for an anonymous operation
        selections: Root selections
        variables: Variable declarations in declaration order

    Returns:
        Complete GraphQL operation string
    """
    header = f"{kind} {name}" if name else kind
    if variables:
        header += f"({', '.join(str(v) for v in variables)})"

    lines = [f"{header} {{"]
    for selection in selections:
        lines.extend(_selection_lines(selection, 1))
    lines.append("}")
    return "\n".join(lines)


def _selection_lines(selection: Selection, depth: int) -> list[str]:
    indent = INDENT * depth
    field_str = f"{selection.alias}: {selection.name}" if selection.alias else selection.name

    if selection.args:
        args_str = ", ".join(f"{name}: {format_value(value)}" for name, value in selection.args.items())
        field_str += f"({args_str})"

    if not selection.children:
        return [f"{indent}{field_str}"]

    lines = [f"{indent}{field_str} {{"]
    for child in selection.children:
        lines.extend(_selection_lines(child, depth + 1))
    lines.append(f"{indent}}}")
    return lines


def check_string(value: str) -> str:
    """Reject strings that cannot be encoded as UTF-8 (lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentValue(value, f"contains an unpaired surrogate at index {e.start}") from e
    return value


def format_value(value: Any) -> str:
    """Format an argument value as a GraphQL literal."""
    if isinstance(value, VariableRef):
        return f"${value.name}"
    if isinstance(value, EnumValue):
        return str(value)
    if isinstance(value, str):
        return json.dumps(check_string(value), ensure_ascii=False)
    if value is None:
        return "null"
    # bool before int: True is an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgumentValue(value, "GraphQL floats must be finite")
        return repr(value)
    if isinstance(value, (list, tuple)):
        return f"[{', '.join(format_value(v) for v in value)}]"
    if isinstance(value, dict):
        entries = ", ".join(f"{k}: {format_value(v)}" for k, v in value.items())
        return f"{{{entries}}}"
    raise InvalidArgumentValue(value)
