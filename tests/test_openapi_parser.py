import json
from pathlib import Path

import pytest

from openapi_md.errors import DialectParseError
from openapi_md.parser.openapi import openapi3_to_markdown, parse_openapi3

FIXTURES = Path(__file__).parent / "fixtures"


def _load(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def v3_doc():
    return parse_openapi3(_load("v3.json"))


@pytest.fixture
def v3_md():
    return openapi3_to_markdown(_load("v3.json"), skip_validation=True)


class TestOpenApi3Parser:
    def test_endpoints(self, v3_doc):
        assert [(e.method, e.path) for e in v3_doc.endpoints] == [
            ("GET", "/pets"),
            ("POST", "/pets"),
            ("GET", "/pets/{petId}"),
            ("DELETE", "/pets/{petId}"),
            ("HEAD", "/ping"),
        ]

    def test_info_description_trimmed(self, v3_doc):
        assert v3_doc.info.description == "A tiny pet store, modern edition."

    def test_version_falls_back_to_openapi_marker(self):
        doc = parse_openapi3({"openapi": "3.1.0", "info": {"title": "T"}})
        assert doc.info.version == "3.1.0"

    def test_servers(self, v3_doc):
        assert [(s.url, s.has_variables) for s in v3_doc.servers] == [
            ("https://api.example.com/v3", False),
            ("https://{region}.example.com", True),
        ]

    def test_request_body_reference_is_resolved(self, v3_doc):
        post = [e for e in v3_doc.endpoints if e.method == "POST"][0]
        assert [m.media_type for m in post.request_body.content] == ["application/json", "application/xml"]
        assert post.request_body.content[0].schema_summary == "$ref:Pet"

    def test_parameter_from_content(self):
        tree = {
            "openapi": "3.0.0",
            "paths": {
                "/q": {
                    "get": {
                        "parameters": [
                            {"name": "filter", "in": "query", "content": {"application/json": {"schema": {"type": "object"}}}}
                        ]
                    }
                }
            },
        }
        doc = parse_openapi3(tree)
        assert doc.endpoints[0].parameters[0].param_type == "object"

    def test_parameter_without_schema(self):
        tree = {"openapi": "3.0.0", "paths": {"/q": {"get": {"parameters": [{"name": "x", "in": "query"}]}}}}
        assert parse_openapi3(tree).endpoints[0].parameters[0].param_type == "-"

    def test_oauth_flow_details(self, v3_doc):
        oauth = [s for s in v3_doc.security_schemes if s.name == "oauth"][0]
        assert oauth.authorization_url == "https://auth.example.com/authorize"
        assert oauth.token_url == "https://auth.example.com/token"
        assert oauth.scopes == ["pets:read (read pets)"]


class TestOpenApi3Markdown:
    def test_operation_parameters_override_path_parameters(self, v3_md):
        assert (
            "**Parameters**\n"
            "- path `petId` (integer) (required) — Operation-level id\n"
            "- query `verbose` (boolean) [default: false]"
        ) in v3_md
        assert "Path-level id" in v3_md  # still used by DELETE, which has no override

    def test_responses_sorted_with_nested_media(self, v3_md):
        assert (
            "**Responses**\n"
            "- 200 — The pet\n"
            "  - application/json — schema: $ref:Pet\n"
            "- 404 — Not found"
        ) in v3_md

    def test_array_of_reference_response(self, v3_md):
        assert "  - application/json — schema: Pet[]" in v3_md

    def test_enum_from_referenced_parameter(self, v3_md):
        assert "- query `limit` (integer) [enum: 10, 50, 100]" in v3_md

    def test_response_without_description(self, v3_md):
        assert "- 204 — No description" in v3_md

    def test_schema_properties(self, v3_md):
        assert "- `anything` (object)" in v3_md
        assert "- `category` ($ref:Category)" in v3_md
        assert "- `id` (integer) (required)" in v3_md
        assert "- `tags` (array<string>)" in v3_md
        assert "### Category\n\nA pet category.\n\n**Properties**\n- `parent` ($ref:Category)" in v3_md

    def test_header_sections(self, v3_md):
        assert "- bearer — type=http, scheme=bearer\n" in v3_md
        assert (
            "- oauth — type=oauth2, authUrl=https://auth.example.com/authorize, "
            "tokenUrl=https://auth.example.com/token, scopes=[pets:read (read pets)]"
        ) in v3_md
        assert "## Servers\n- https://api.example.com/v3\n- https://{region}.example.com {vars}\n" in v3_md
        assert "## Tags\n- pets — Pet operations\n" in v3_md

    def test_untagged_head_operation(self, v3_md):
        assert "### Untagged\n\n#### HEAD /ping" in v3_md


class TestOpenApi3Examples:
    @pytest.fixture
    def md(self):
        return openapi3_to_markdown(_load("v3.examples.json"), skip_validation=True)

    def test_request_examples_order(self, md):
        anonymous = md.index("**Request example (application/json)**")
        alt = md.index("**Request example (alt, application/json)**")
        zeta = md.index("**Request example (zeta, application/json)**")
        assert anonymous < alt < zeta
        assert "external" not in md

    def test_named_response_example_reference_resolved(self, md):
        assert "    **Response example (alt, 200, application/json)**\n    ```json\n    {\n      \"id\": 2\n    }" in md
        assert "    **Response example (200, application/json)**" in md

    def test_schema_example_and_type_list(self, md):
        assert "- `id` (integer,null)" in md
        assert '"item": "cherry"' in md

    def test_examples_index(self, md):
        assert md.endswith("## Examples\n- POST /orders 200 — has inline examples\n")


class TestOpenApi3ParseErrors:
    def test_components_must_be_mapping(self):
        with pytest.raises(DialectParseError, match="components"):
            parse_openapi3({"openapi": "3.0.0", "components": []})

    def test_schemas_must_be_mapping(self):
        with pytest.raises(DialectParseError, match="schemas"):
            parse_openapi3({"openapi": "3.0.0", "components": {"schemas": ["Pet"]}})

    def test_servers_must_be_list(self):
        with pytest.raises(DialectParseError, match="servers"):
            parse_openapi3({"openapi": "3.0.0", "servers": "https://a"})
