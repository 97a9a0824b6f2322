"""Convert an OpenAPI / Swagger description into Markdown.

The dialect is picked from the top-level ``swagger`` (2.0) or ``openapi``
(3.x) marker. When neither marker decides, Swagger 2.0 is tried first and
OpenAPI 3.x second, since most legacy documents lack the modern marker.
"""

import logging

from pydantic import BaseModel

from openapi_md.errors import ClassificationError, DialectParseError, OpenApiMarkdownError, RenderError
from openapi_md.parser.detect import InputFormat, load_document, probe_versions
from openapi_md.parser.openapi import openapi3_to_markdown
from openapi_md.parser.swagger import swagger2_to_markdown

logger = logging.getLogger(__name__)


class RenderOptions(BaseModel):
    """Options for a single conversion."""

    format: InputFormat = "auto"
    skip_validation: bool = False


def to_markdown(data: bytes | str, options: RenderOptions | None = None) -> str:
    """Convert raw JSON/YAML bytes to Markdown, raising ``OpenApiMarkdownError`` on failure."""
    options = options or RenderOptions()
    tree = load_document(data, options.format)
    swagger, openapi = probe_versions(tree)
    logger.debug("version probes: swagger=%r openapi=%r", swagger, openapi)

    if swagger.startswith("2.0"):
        return swagger2_to_markdown(tree, options.skip_validation)
    if openapi.startswith("3."):
        return openapi3_to_markdown(tree, options.skip_validation)

    for name, convert in (("swagger2", swagger2_to_markdown), ("openapi3", openapi3_to_markdown)):
        try:
            md = convert(tree, options.skip_validation)
        except (DialectParseError, RenderError) as exc:
            logger.debug("fallback %s failed: %s", name, exc)
            continue
        logger.debug("fallback %s succeeded", name)
        return md
    raise ClassificationError(swagger, openapi)


def render(
    data: bytes | str, options: RenderOptions | None = None
) -> tuple[str, OpenApiMarkdownError | None]:
    """Non-raising variant of :func:`to_markdown`: returns ``(markdown, error)``."""
    try:
        return to_markdown(data, options), None
    except OpenApiMarkdownError as exc:
        return "", exc
