"""Normalise raw API description bytes into a document tree."""

import json
import logging
from typing import Any, Literal

import yaml

from openapi_md.errors import InputFormatError
from openapi_md.parser.access import as_str

InputFormat = Literal["auto", "json", "yaml"]

logger = logging.getLogger(__name__)


def load_document(data: bytes | str, fmt: InputFormat = "auto") -> dict[str, Any]:
    """Parse ``data`` as JSON or YAML according to ``fmt``.

    ``auto`` tries JSON first, then YAML. The document root must be a mapping.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InputFormatError(f"input is not valid UTF-8: {exc}") from exc
    else:
        text = data

    if fmt == "json":
        tree = _load_json(text)
    elif fmt == "yaml":
        tree = _load_yaml(text)
    else:
        try:
            tree = _load_json(text)
        except InputFormatError:
            try:
                tree = _load_yaml(text)
            except InputFormatError:
                raise InputFormatError("input is neither valid JSON nor YAML") from None

    if not isinstance(tree, dict):
        raise InputFormatError(f"document root must be a mapping, got {type(tree).__name__}")
    return tree


def probe_versions(tree: dict[str, Any]) -> tuple[str, str]:
    """Return the ``swagger`` and ``openapi`` version markers ("" when absent)."""
    return as_str(tree.get("swagger")), as_str(tree.get("openapi"))


def _load_json(text: str) -> Any:
    try:
        tree = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        raise InputFormatError(f"failed to parse input as JSON: {exc}") from exc
    logger.debug("Loaded document as JSON")
    return tree


def _load_yaml(text: str) -> Any:
    try:
        tree = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InputFormatError(f"failed to parse input as YAML: {exc}") from exc
    logger.debug("Loaded document as YAML")
    return tree
