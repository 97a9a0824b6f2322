from openapi_md.render.summary import (
    OPENAPI3_STYLE,
    SWAGGER2_STYLE,
    annotate,
    format_value,
    summarize,
    summarize_optional,
)


class TestSummarizeReferences:
    def test_openapi3_reference_is_marked(self):
        assert summarize({"$ref": "#/components/schemas/Pet"}, OPENAPI3_STYLE) == "$ref:Pet"

    def test_swagger2_reference_is_bare(self):
        assert summarize({"$ref": "#/definitions/Pet"}, SWAGGER2_STYLE) == "Pet"

    def test_reference_wins_over_type(self):
        assert summarize({"$ref": "#/definitions/Pet", "type": "string"}, SWAGGER2_STYLE) == "Pet"


class TestSummarizeArrays:
    def test_array_of_reference(self):
        node = {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
        assert summarize(node, SWAGGER2_STYLE) == "Pet[]"
        assert summarize(node, OPENAPI3_STYLE) == "Pet[]"

    def test_array_of_primitive(self):
        assert summarize({"type": "array", "items": {"type": "string"}}) == "array<string>"

    def test_array_of_multiple_types(self):
        node = {"type": "array", "items": {"type": ["string", "null"]}}
        assert summarize(node) == "array<string,null>"

    def test_array_without_item_type(self):
        assert summarize({"type": "array", "items": {}}) == "array"

    def test_array_without_items(self):
        assert summarize({"type": "array"}, SWAGGER2_STYLE) == "array"

    def test_array_items_never_expanded(self):
        node = {"type": "array", "items": {"type": "object", "properties": {"a": {"type": "string"}}}}
        assert summarize(node) == "array<object>"


class TestSummarizePrimitives:
    def test_single_type(self):
        assert summarize({"type": "integer"}) == "integer"

    def test_type_list_is_joined(self):
        assert summarize({"type": ["integer", "null"]}) == "integer,null"

    def test_swagger2_appends_format(self):
        assert summarize({"type": "string", "format": "date-time"}, SWAGGER2_STYLE) == "string (date-time)"

    def test_openapi3_ignores_format(self):
        assert summarize({"type": "string", "format": "date-time"}, OPENAPI3_STYLE) == "string"


class TestSummarizeFallbacks:
    def test_untyped_openapi3_is_object(self):
        assert summarize({}, OPENAPI3_STYLE) == "object"
        assert summarize({"properties": {"a": {}}}, OPENAPI3_STYLE) == "object"

    def test_untyped_swagger2_is_placeholder(self):
        assert summarize({}, SWAGGER2_STYLE) == "-"

    def test_non_mapping_never_fails(self):
        assert summarize(None, OPENAPI3_STYLE) == "object"
        assert summarize("garbage", SWAGGER2_STYLE) == "-"

    def test_missing_schema_is_placeholder(self):
        assert summarize_optional(None, OPENAPI3_STYLE) == "-"
        assert summarize_optional({}, OPENAPI3_STYLE) == "object"


class TestAnnotate:
    def test_all_suffixes(self):
        line = annotate("- `status` (string)", "Pet status", "available", ["available", "sold"])
        assert line == "- `status` (string) — Pet status [default: available] [enum: available, sold]"

    def test_no_suffixes(self):
        assert annotate("- `x` (string)") == "- `x` (string)"

    def test_false_default_is_printed(self):
        assert annotate("- x", default=False) == "- x [default: false]"

    def test_format_value(self):
        assert format_value(True) == "true"
        assert format_value(3) == "3"
        assert format_value([1, 2]) == "[1,2]"
        assert format_value({"a": 1}) == '{"a":1}'
        assert format_value(None) == ""

    def test_format_value_whole_floats(self):
        assert format_value(1.0) == "1"
        assert format_value(2.5) == "2.5"
        assert annotate("- x", default=10.0, enum=[1.0, 2.5]) == "- x [default: 10] [enum: 1, 2.5]"

    def test_null_enum_member(self):
        assert annotate("- x", enum=["a", None]) == "- x [enum: a, null]"
