"""Example extraction and formatting.

Extraction turns raw media-type / schema nodes into ordered ``Example``
tuples. Within one media type the anonymous ``example`` comes first, followed
by named ``examples`` sorted by name. A malformed container yields nothing.
"""

import json
from collections.abc import Callable
from typing import Any

from openapi_md.parser.access import as_dict
from openapi_md.parser.base import Example

SCHEMA_LABEL = "Example"
SCHEMA_MEDIA_TYPE = "application/json"
VENDOR_EXAMPLE_KEY = "x-example"

Resolver = Callable[[Any], dict]


def request_label(media_type: str, name: str | None = None) -> str:
    if not media_type:
        return "Request example"
    if name:
        return f"Request example ({name}, {media_type})"
    return f"Request example ({media_type})"


def response_label(status: str, media_type: str, name: str | None = None) -> str:
    if name:
        return f"Response example ({name}, {status}, {media_type})"
    return f"Response example ({status}, {media_type})"


def media_examples(media: Any, resolve: Resolver | None = None) -> list[tuple[str | None, Any]]:
    """Return ``(name, value)`` pairs of one media-type entry, anonymous first."""
    media = as_dict(media)
    found: list[tuple[str | None, Any]] = []
    if media.get("example") is not None:
        found.append((None, media["example"]))

    named = as_dict(media.get("examples"))
    for name in sorted(named):
        entry = resolve(named[name]) if resolve else as_dict(named[name])
        value = as_dict(entry).get("value")
        if value is not None:
            found.append((name, value))
    return found


def request_examples(media_type: str, media: Any, resolve: Resolver | None = None) -> list[Example]:
    return [
        Example(label=request_label(media_type, name), media_type=media_type, value=value)
        for name, value in media_examples(media, resolve)
    ]


def response_examples(
    status: str, media_type: str, media: Any, resolve: Resolver | None = None
) -> list[Example]:
    return [
        Example(label=response_label(status, media_type, name), media_type=media_type, value=value)
        for name, value in media_examples(media, resolve)
    ]


def legacy_response_examples(status: str, examples: Any) -> list[Example]:
    """Swagger 2.0 ``responses.<code>.examples``: a media type -> value map."""
    examples = as_dict(examples)
    return [
        Example(label=response_label(status, media_type), media_type=media_type, value=examples[media_type])
        for media_type in sorted(examples)
        if examples[media_type] is not None
    ]


def schema_example_value(schema: Any, vendor_fallback: bool = False) -> Any:
    """Standard ``example`` of a schema, else (Swagger 2.0 only) ``x-example``."""
    schema = as_dict(schema)
    if schema.get("example") is not None:
        return schema["example"]
    if vendor_fallback:
        return schema.get(VENDOR_EXAMPLE_KEY)
    return None


def schema_examples(schema: Any, vendor_fallback: bool = False) -> list[Example]:
    value = schema_example_value(schema, vendor_fallback)
    if value is None:
        return []
    return [Example(label=SCHEMA_LABEL, media_type=SCHEMA_MEDIA_TYPE, value=value)]


def body_examples(schema: Any, media_types: list[str]) -> list[Example]:
    """Request examples for a Swagger 2.0 body parameter.

    Prefers the schema's own example, then its array item example, then the
    ``x-example`` vendor field. One example is emitted per consumed media type,
    or a single unlabelled one when no media types are declared.
    """
    schema = as_dict(schema)
    value = schema_example_value(schema)
    if value is None:
        value = schema_example_value(schema.get("items"))
    if value is None:
        value = schema.get(VENDOR_EXAMPLE_KEY)
    if value is None:
        return []
    if not media_types:
        return [Example(label=request_label(""), value=value)]
    return [
        Example(label=request_label(media_type), media_type=media_type, value=value)
        for media_type in media_types
    ]


def fence_language(media_type: str) -> str:
    lowered = media_type.lower()
    for language in ("json", "yaml", "xml"):
        if language in lowered:
            return language
    return ""


def format_example(example: Example, indent: str = "") -> list[str]:
    """Render an example as a bold label followed by a fenced code block."""
    if isinstance(example.value, str):
        body = example.value.rstrip("\n")
    else:
        body = json.dumps(example.value, indent=2, ensure_ascii=False, default=str)
    lines = [f"{indent}**{example.label}**", f"{indent}```{fence_language(example.media_type)}"]
    lines.extend(f"{indent}{line}" if line else line for line in body.split("\n"))
    lines.append(f"{indent}```")
    return lines
