"""Errors surfaced by the OpenAPI -> Markdown conversion.

Missing optional fields are never errors; only the kinds below end a render.
"""

from contextlib import contextmanager


class OpenApiMarkdownError(Exception):
    """Base class for every error a render call can surface."""


class InputFormatError(OpenApiMarkdownError):
    """Raw input is not valid JSON/YAML, or its root is not a mapping."""


class ClassificationError(OpenApiMarkdownError):
    """Neither version probe matched and neither dialect accepted the document."""

    def __init__(self, swagger: str, openapi: str):
        self.swagger = swagger
        self.openapi = openapi
        super().__init__(
            f"could not detect or parse OpenAPI version (swagger={swagger!r}, openapi={openapi!r})"
        )


class DialectParseError(OpenApiMarkdownError):
    """The selected dialect could not parse the document structure."""

    def __init__(self, dialect: str, reason: str):
        self.dialect = dialect
        self.reason = reason
        super().__init__(f"parse {dialect}: {reason}")


class RenderError(OpenApiMarkdownError):
    """Unexpected fault while rendering an already-parsed document."""

    def __init__(self, dialect: str, reason: str):
        self.dialect = dialect
        self.reason = reason
        super().__init__(f"{dialect} conversion failed: {reason}")


@contextmanager
def render_guard(dialect: str):
    """Convert an unexpected fault inside an adapter into a ``RenderError``."""
    try:
        yield
    except OpenApiMarkdownError:
        raise
    except Exception as exc:
        raise RenderError(dialect, str(exc) or type(exc).__name__) from exc
