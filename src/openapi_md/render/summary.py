"""Schema summarizer: reduce a schema node to a one-line type descriptor.

Only the top-level shape is summarised (reference, array element, primitive
types). Object properties are never expanded and references are printed by
name, so cyclic schema graphs are safe.
"""

import json
from dataclasses import dataclass
from typing import Any

from openapi_md.parser.access import as_dict, as_list, as_str_list, ref_name


@dataclass(frozen=True)
class SchemaStyle:
    """Dialect conventions that change how a schema is summarised."""

    ref_prefix: str  # marks a direct reference, e.g. "$ref:Pet"
    fallback: str  # descriptor for a node with no usable type information
    show_format: bool  # append "(format)" to primitive types


# Swagger 2.0: bare reference names, "-" when untyped, formats shown.
SWAGGER2_STYLE = SchemaStyle(ref_prefix="", fallback="-", show_format=True)
# OpenAPI 3.x: references are marked, untyped nodes default to object.
OPENAPI3_STYLE = SchemaStyle(ref_prefix="$ref:", fallback="object", show_format=False)

MISSING = "-"


def summarize(node: Any, style: SchemaStyle = OPENAPI3_STYLE) -> str:
    """Summarise ``node``; never fails, absence degrades to ``style.fallback``."""
    node = as_dict(node)

    ref = node.get("$ref")
    if isinstance(ref, str) and ref:
        return style.ref_prefix + ref_name(ref)

    types = as_str_list(node.get("type"))
    items = node.get("items")
    if types == ["array"] and isinstance(items, dict):
        item_ref = items.get("$ref")
        if isinstance(item_ref, str) and ref_name(item_ref):
            return f"{ref_name(item_ref)}[]"
        item_types = as_str_list(items.get("type"))
        if item_types:
            return f"array<{','.join(item_types)}>"
        return "array"

    if types:
        joined = ",".join(types)
        fmt = node.get("format")
        if style.show_format and isinstance(fmt, str) and fmt:
            return f"{joined} ({fmt})"
        return joined

    return style.fallback


def summarize_optional(node: Any, style: SchemaStyle = OPENAPI3_STYLE) -> str:
    """Like :func:`summarize`, but a missing schema is always ``-``."""
    if not isinstance(node, dict):
        return MISSING
    return summarize(node, style)


def format_value(value: Any) -> str:
    """Render a default/enum literal; whole floats drop their ".0" and containers print as compact JSON."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def annotate(line: str, description: str = "", default: Any = None, enum: Any = None) -> str:
    """Append the ``— description``, ``[default: ..]`` and ``[enum: ..]`` suffixes."""
    if description:
        line += f" — {description}"
    default_text = format_value(default)
    if default_text:
        line += f" [default: {default_text}]"
    values = ["null" if v is None else format_value(v) for v in as_list(enum)]
    if values:
        line += f" [enum: {', '.join(values)}]"
    return line
