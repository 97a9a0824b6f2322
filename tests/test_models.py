import pytest
from pydantic import ValidationError

from openapi_md.parser.base import ApiDocument, ApiEndpoint, Example, MediaContent, Param, Response


class TestParam:
    def test_create_required_param(self):
        p = Param(name="id", location="path", required=True, param_type="integer")
        assert p.name == "id"
        assert p.required is True
        assert p.description == ""
        assert p.enum == []
        assert p.default is None

    def test_missing_type_defaults_to_placeholder(self):
        p = Param(name="q", location="query")
        assert p.param_type == "-"

    def test_param_is_immutable(self):
        p = Param(name="id", location="path")
        with pytest.raises(ValidationError):
            p.name = "other"


class TestResponse:
    def test_default_description(self):
        assert Response(status="200").description == "No description"

    def test_has_examples_from_legacy_examples(self):
        r = Response(status="200", examples=[Example(label="x", media_type="text/plain", value="ok")])
        assert r.has_examples is True

    def test_has_examples_from_content(self):
        media = MediaContent(media_type="application/json", examples=[Example(label="x", value=1)])
        assert Response(status="200", content=[media]).has_examples is True

    def test_no_examples(self):
        media = MediaContent(media_type="application/json")
        assert Response(status="200", content=[media]).has_examples is False


class TestApiEndpoint:
    def test_create_minimal_endpoint(self):
        ep = ApiEndpoint(method="GET", path="/api/users")
        assert ep.tags == []
        assert ep.request_body is None
        assert ep.responses == []

    def test_serialization_roundtrip(self):
        ep = ApiEndpoint(
            method="DELETE",
            path="/api/users/{id}",
            parameters=[Param(name="id", location="path", required=True, param_type="integer")],
            responses=[Response(status="204", description="Deleted")],
            tags=["users"],
        )
        ep2 = ApiEndpoint(**ep.model_dump())
        assert ep2 == ep


class TestApiDocument:
    def test_defaults(self):
        doc = ApiDocument(dialect="swagger2")
        assert doc.info.title == "-"
        assert doc.info.version == "-"
        assert doc.endpoints == []
