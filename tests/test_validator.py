import logging
from unittest.mock import patch

from openapi_md.parser.validator import validate_document

VALID_V3 = {
    "openapi": "3.0.3",
    "info": {"title": "T", "version": "1"},
    "paths": {"/a": {"get": {"responses": {"200": {"description": "ok"}}}}},
}


class TestValidateDocument:
    def test_valid_document(self):
        assert validate_document(VALID_V3, "openapi3") is None

    def test_invalid_document_returns_message(self, caplog):
        with caplog.at_level(logging.WARNING):
            message = validate_document({"openapi": "3.0.3", "paths": {}}, "openapi3")
        assert message
        assert "openapi3 document failed validation" in caplog.text

    def test_unexpected_validator_fault_is_swallowed(self, caplog):
        with patch("openapi_md.parser.validator.validate", side_effect=RuntimeError("boom")):
            with caplog.at_level(logging.WARNING):
                assert validate_document(VALID_V3, "openapi3") == "boom"
        assert "openapi3 document could not be validated" in caplog.text
        assert "failed validation" not in caplog.text
