"""Best-effort validation of a document against its dialect's specification.

Validation never blocks rendering: failures are logged and discarded.
"""

import logging
from collections.abc import Hashable, Mapping
from typing import Any, cast

from openapi_spec_validator import validate
from openapi_spec_validator.validation.exceptions import OpenAPIValidationError

logger = logging.getLogger(__name__)


def validate_document(tree: dict[str, Any], dialect: str) -> str | None:
    """Validate ``tree``; returns the failure message, or None when valid."""
    try:
        validate(cast(Mapping[Hashable, Any], tree))
    except OpenAPIValidationError as exc:
        message = _message(exc)
        logger.warning("%s document failed validation (ignored): %s", dialect, message)
        return message
    except Exception as exc:
        message = _message(exc)
        logger.warning("%s document could not be validated (ignored): %s", dialect, message)
        return message
    logger.debug("%s document passed validation", dialect)
    return None


def _message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc) or type(exc).__name__
