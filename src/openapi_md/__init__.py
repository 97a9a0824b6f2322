"""Render OpenAPI 3.x and Swagger 2.0 descriptions as Markdown."""

from openapi_md.convert import RenderOptions, render, to_markdown
from openapi_md.errors import (
    ClassificationError,
    DialectParseError,
    InputFormatError,
    OpenApiMarkdownError,
    RenderError,
)

__all__ = [
    "ClassificationError",
    "DialectParseError",
    "InputFormatError",
    "OpenApiMarkdownError",
    "RenderError",
    "RenderOptions",
    "render",
    "to_markdown",
]
