"""Swagger 2.0 document parser.

Walks a raw Swagger 2.0 tree into the unified ``ApiDocument`` model.
Media types live in document/operation ``produces``/``consumes`` lists and the
request payload is modelled as an ``in: body`` parameter.
"""

import logging
from typing import Any

from openapi_md.errors import DialectParseError, render_guard
from openapi_md.parser.access import (
    as_dict,
    as_list,
    as_str,
    as_str_list,
    as_text,
    resolve,
    shape_errors,
)
from openapi_md.parser.base import (
    HTTP_METHODS,
    NO_DESCRIPTION,
    ApiDocument,
    ApiEndpoint,
    ApiInfo,
    Param,
    Property,
    Response,
    SchemaDefinition,
    SecurityScheme,
    Server,
    Tag,
)
from openapi_md.parser.validator import validate_document
from openapi_md.render.document import render_document
from openapi_md.render.examples import body_examples, legacy_response_examples, schema_examples
from openapi_md.render.summary import SWAGGER2_STYLE, MISSING, summarize, summarize_optional

DIALECT = "swagger2"

logger = logging.getLogger(__name__)


def swagger2_to_markdown(tree: Any, skip_validation: bool = False) -> str:
    """Parse, optionally validate, and render a Swagger 2.0 document."""
    doc = parse_swagger2(tree)
    if not skip_validation:
        validate_document(tree, DIALECT)
    with render_guard(DIALECT):
        return render_document(doc)


def parse_swagger2(tree: Any) -> ApiDocument:
    """Parse a Swagger 2.0 tree into an ApiDocument."""
    problems = shape_errors(
        tree,
        mappings=("info", "paths", "definitions", "securityDefinitions", "parameters", "responses"),
        lists=("tags", "schemes", "produces", "consumes"),
    )
    if problems:
        raise DialectParseError(DIALECT, "; ".join(problems))

    with render_guard(DIALECT):
        endpoints = _parse_paths(tree)
        logger.debug("swagger2: %d endpoints", len(endpoints))
        return ApiDocument(
            dialect=DIALECT,
            info=_parse_info(as_dict(tree.get("info"))),
            security_schemes=_parse_security(as_dict(tree.get("securityDefinitions"))),
            servers=_parse_servers(tree),
            tags=_parse_tags(tree.get("tags")),
            endpoints=endpoints,
            schemas=_parse_definitions(as_dict(tree.get("definitions"))),
        )


def host_url(schemes: list[str], host: str, base_path: str) -> str:
    """Build ``scheme://host/basePath``; no host means no server."""
    if not host:
        return ""
    scheme = schemes[0] if schemes else "http"
    return f"{scheme}://{host}{base_path}"


def _parse_info(info: dict) -> ApiInfo:
    contact = as_dict(info.get("contact"))
    return ApiInfo(
        title=as_str(info.get("title")) or "-",
        version=as_str(info.get("version")) or "-",
        description=as_text(info.get("description")),
        contact_name=as_str(contact.get("name")),
        contact_email=as_str(contact.get("email")),
        license_name=as_str(as_dict(info.get("license")).get("name")),
    )


def _parse_security(definitions: dict) -> list[SecurityScheme]:
    schemes = []
    for name in sorted(definitions):
        sec = as_dict(definitions[name])
        scopes = as_dict(sec.get("scopes"))
        schemes.append(
            SecurityScheme(
                name=name,
                scheme_type=as_str(sec.get("type")),
                param_name=as_str(sec.get("name")),
                location=as_str(sec.get("in")),
                authorization_url=as_str(sec.get("authorizationUrl")),
                token_url=as_str(sec.get("tokenUrl")),
                scopes=[f"{k} ({as_str(v)})" if as_str(v) else k for k, v in scopes.items()],
            )
        )
    return schemes


def _parse_servers(tree: dict) -> list[Server]:
    url = host_url(as_str_list(tree.get("schemes")), as_str(tree.get("host")), as_str(tree.get("basePath")))
    return [Server(url=url)] if url else []


def _parse_tags(tags: Any) -> list[Tag]:
    result = []
    for tag in as_list(tags):
        tag = as_dict(tag)
        if as_str(tag.get("name")):
            result.append(Tag(name=as_str(tag["name"]), description=as_text(tag.get("description"))))
    return result


def _parse_paths(tree: dict) -> list[ApiEndpoint]:
    global_produces = as_str_list(tree.get("produces"))
    global_consumes = as_str_list(tree.get("consumes"))
    paths = as_dict(tree.get("paths"))

    endpoints = []
    for path in sorted(paths):
        item = as_dict(paths[path])
        path_params_raw = as_list(item.get("parameters"))
        for method in HTTP_METHODS:
            operation = item.get(method.lower())
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                _parse_operation(
                    tree, method, path, operation, path_params_raw, global_produces, global_consumes
                )
            )
    return endpoints


def _parse_operation(
    tree: dict,
    method: str,
    path: str,
    operation: dict,
    path_params_raw: list,
    global_produces: list[str],
    global_consumes: list[str],
) -> ApiEndpoint:
    produces = as_str_list(operation.get("produces")) or global_produces
    consumes = as_str_list(operation.get("consumes")) or global_consumes
    op_params_raw = as_list(operation.get("parameters"))

    return ApiEndpoint(
        method=method,
        path=path,
        summary=as_text(operation.get("summary")),
        description=as_text(operation.get("description")),
        operation_id=as_str(operation.get("operationId")),
        tags=as_str_list(operation.get("tags")),
        produces=produces,
        consumes=consumes,
        path_parameters=_parse_parameters(tree, path_params_raw),
        parameters=_parse_parameters(tree, op_params_raw),
        request_examples=body_examples(_body_schema(tree, op_params_raw, path_params_raw), consumes),
        responses=_parse_responses(tree, as_dict(operation.get("responses"))),
    )


def _parse_parameters(tree: dict, params: list) -> list[Param]:
    result = []
    for raw in params:
        p = resolve(tree, raw)
        if not p:
            continue
        location = as_str(p.get("in"))
        if location == "body":
            param_type = summarize_optional(p.get("schema"), SWAGGER2_STYLE)
        else:
            param_type = summarize(p, SWAGGER2_STYLE)
        result.append(
            Param(
                name=as_str(p.get("name")),
                location=location,
                required=p.get("required") is True,
                param_type=param_type,
                description=as_text(p.get("description")),
                default=p.get("default"),
                enum=as_list(p.get("enum")),
            )
        )
    return result


def _body_schema(tree: dict, *groups: list) -> dict | None:
    for group in groups:
        for raw in group:
            p = resolve(tree, raw)
            if p.get("in") == "body" and isinstance(p.get("schema"), dict):
                return p["schema"]
    return None


def _parse_responses(tree: dict, responses: dict) -> list[Response]:
    result = []
    for code in responses:
        if str(code).startswith("x-"):
            continue
        status = str(code)
        r = resolve(tree, responses[code])
        summary = ""
        if isinstance(r.get("schema"), dict):
            summary = summarize(r["schema"], SWAGGER2_STYLE)
            if summary == MISSING:
                summary = ""
        result.append(
            Response(
                status=status,
                description=as_text(r.get("description")) or NO_DESCRIPTION,
                schema_summary=summary,
                examples=legacy_response_examples(status, r.get("examples")),
            )
        )
    return sorted(result, key=lambda item: item.status)


def _parse_definitions(definitions: dict) -> list[SchemaDefinition]:
    result = []
    for name in sorted(definitions):
        sch = as_dict(definitions[name])
        required = as_str_list(sch.get("required"))
        properties = as_dict(sch.get("properties"))
        result.append(
            SchemaDefinition(
                name=name,
                description=as_text(sch.get("description")),
                properties=[_parse_property(pn, properties[pn], pn in required) for pn in sorted(properties)],
                examples=schema_examples(sch, vendor_fallback=True),
            )
        )
    return result


def _parse_property(name: str, prop: Any, required: bool) -> Property:
    prop = as_dict(prop)
    return Property(
        name=name,
        prop_type=summarize(prop, SWAGGER2_STYLE),
        required=required,
        description=as_text(prop.get("description")),
        default=prop.get("default"),
        enum=as_list(prop.get("enum")),
    )
