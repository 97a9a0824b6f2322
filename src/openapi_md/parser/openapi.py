"""OpenAPI 3.x document parser.

Walks a raw OpenAPI 3.0/3.1 tree into the unified ``ApiDocument`` model.
Request payloads come from ``requestBody`` and every request/response carries
its own ``content`` map of media types.
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
    MediaContent,
    Param,
    Property,
    RequestBody,
    Response,
    SchemaDefinition,
    SecurityScheme,
    Server,
    Tag,
)
from openapi_md.parser.validator import validate_document
from openapi_md.render.document import render_document
from openapi_md.render.examples import request_examples, response_examples, schema_examples
from openapi_md.render.summary import OPENAPI3_STYLE, summarize, summarize_optional

DIALECT = "openapi3"

# Checked in order; the first flow present supplies URLs and scopes.
OAUTH_FLOWS = ("implicit", "password", "clientCredentials", "authorizationCode")

logger = logging.getLogger(__name__)


def openapi3_to_markdown(tree: Any, skip_validation: bool = False) -> str:
    """Parse, optionally validate, and render an OpenAPI 3.x document."""
    doc = parse_openapi3(tree)
    if not skip_validation:
        validate_document(tree, DIALECT)
    with render_guard(DIALECT):
        return render_document(doc)


def parse_openapi3(tree: Any) -> ApiDocument:
    """Parse an OpenAPI 3.x tree into an ApiDocument."""
    problems = shape_errors(
        tree,
        mappings=("info", "paths", "components", "webhooks"),
        lists=("servers", "tags", "security"),
    )
    if not problems:
        problems = shape_errors(
            tree.get("components") or {},
            mappings=("schemas", "securitySchemes", "parameters", "responses", "requestBodies", "examples"),
        )
    if problems:
        raise DialectParseError(DIALECT, "; ".join(problems))

    components = as_dict(tree.get("components"))
    with render_guard(DIALECT):
        endpoints = _parse_paths(tree)
        logger.debug("openapi3: %d endpoints", len(endpoints))
        return ApiDocument(
            dialect=DIALECT,
            info=_parse_info(tree),
            security_schemes=_parse_security(tree, as_dict(components.get("securitySchemes"))),
            servers=_parse_servers(tree.get("servers")),
            tags=_parse_tags(tree.get("tags")),
            endpoints=endpoints,
            schemas=_parse_schemas(tree, as_dict(components.get("schemas"))),
        )


def _parse_info(tree: dict) -> ApiInfo:
    info = as_dict(tree.get("info"))
    contact = as_dict(info.get("contact"))
    return ApiInfo(
        title=as_str(info.get("title")) or "-",
        version=as_str(info.get("version")) or as_str(tree.get("openapi")) or "-",
        description=as_text(info.get("description")),
        contact_name=as_str(contact.get("name")),
        contact_email=as_str(contact.get("email")),
        license_name=as_str(as_dict(info.get("license")).get("name")),
    )


def _parse_security(tree: dict, schemes: dict) -> list[SecurityScheme]:
    result = []
    for name in sorted(schemes):
        ss = resolve(tree, schemes[name])
        if not ss:
            continue
        flows = as_dict(ss.get("flows"))
        flow = next((as_dict(flows[f]) for f in OAUTH_FLOWS if isinstance(flows.get(f), dict)), {})
        scopes = as_dict(flow.get("scopes"))
        result.append(
            SecurityScheme(
                name=name,
                scheme_type=as_str(ss.get("type")),
                scheme=as_str(ss.get("scheme")),
                param_name=as_str(ss.get("name")),
                location=as_str(ss.get("in")),
                authorization_url=as_str(flow.get("authorizationUrl")) or as_str(ss.get("openIdConnectUrl")),
                token_url=as_str(flow.get("tokenUrl")),
                scopes=[f"{k} ({as_str(v)})" if as_str(v) else k for k, v in scopes.items()],
            )
        )
    return result


def _parse_servers(servers: Any) -> list[Server]:
    result = []
    for server in as_list(servers):
        server = as_dict(server)
        if as_str(server.get("url")):
            result.append(Server(url=as_str(server["url"]), has_variables=bool(as_dict(server.get("variables")))))
    return result


def _parse_tags(tags: Any) -> list[Tag]:
    result = []
    for tag in as_list(tags):
        tag = as_dict(tag)
        if as_str(tag.get("name")):
            result.append(Tag(name=as_str(tag["name"]), description=as_text(tag.get("description"))))
    return result


def _parse_paths(tree: dict) -> list[ApiEndpoint]:
    paths = as_dict(tree.get("paths"))
    endpoints = []
    for path in sorted(paths):
        item = resolve(tree, paths[path])
        path_params = _parse_parameters(tree, as_list(item.get("parameters")))
        for method in HTTP_METHODS:
            operation = item.get(method.lower())
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                ApiEndpoint(
                    method=method,
                    path=path,
                    summary=as_text(operation.get("summary")),
                    description=as_text(operation.get("description")),
                    operation_id=as_str(operation.get("operationId")),
                    tags=as_str_list(operation.get("tags")),
                    path_parameters=path_params,
                    parameters=_parse_parameters(tree, as_list(operation.get("parameters"))),
                    request_body=_parse_request_body(tree, operation.get("requestBody")),
                    responses=_parse_responses(tree, as_dict(operation.get("responses"))),
                )
            )
    return endpoints


def _param_schema(param: dict) -> Any:
    """A parameter's schema, or the schema of its first media type when declared via ``content``."""
    if isinstance(param.get("schema"), dict):
        return param["schema"]
    content = as_dict(param.get("content"))
    for media_type in sorted(content):
        schema = as_dict(content[media_type]).get("schema")
        if isinstance(schema, dict):
            return schema
    return None


def _parse_parameters(tree: dict, params: list) -> list[Param]:
    result = []
    for raw in params:
        p = resolve(tree, raw)
        if not p:
            continue
        schema = _param_schema(p)
        # Defaults and enums are read from the referenced schema when there is one.
        schema_value = resolve(tree, schema)
        result.append(
            Param(
                name=as_str(p.get("name")),
                location=as_str(p.get("in")),
                required=p.get("required") is True,
                param_type=summarize_optional(schema, OPENAPI3_STYLE),
                description=as_text(p.get("description")),
                default=schema_value.get("default"),
                enum=as_list(schema_value.get("enum")),
            )
        )
    return result


def _example_resolver(tree: dict):
    return lambda node: resolve(tree, node)


def _parse_request_body(tree: dict, body: Any) -> RequestBody | None:
    body = resolve(tree, body)
    content = as_dict(body.get("content"))
    if not content:
        return None
    resolver = _example_resolver(tree)
    return RequestBody(
        content=[
            MediaContent(
                media_type=mt,
                schema_summary=summarize_optional(as_dict(content[mt]).get("schema"), OPENAPI3_STYLE),
                examples=request_examples(mt, content[mt], resolver),
            )
            for mt in sorted(content)
        ]
    )


def _parse_responses(tree: dict, responses: dict) -> list[Response]:
    resolver = _example_resolver(tree)
    result = []
    for code in responses:
        if str(code).startswith("x-"):
            continue
        status = str(code)
        r = resolve(tree, responses[code])
        content = as_dict(r.get("content"))
        result.append(
            Response(
                status=status,
                description=as_text(r.get("description")) or NO_DESCRIPTION,
                content=[
                    MediaContent(
                        media_type=mt,
                        schema_summary=summarize_optional(as_dict(content[mt]).get("schema"), OPENAPI3_STYLE),
                        examples=response_examples(status, mt, content[mt], resolver),
                    )
                    for mt in sorted(content)
                ],
            )
        )
    return sorted(result, key=lambda item: item.status)


def _parse_schemas(tree: dict, schemas: dict) -> list[SchemaDefinition]:
    result = []
    for name in sorted(schemas):
        sch = resolve(tree, schemas[name])
        required = as_str_list(sch.get("required"))
        properties = as_dict(sch.get("properties"))
        result.append(
            SchemaDefinition(
                name=name,
                description=as_text(sch.get("description")),
                properties=[_parse_property(pn, properties[pn], pn in required) for pn in sorted(properties)],
                examples=schema_examples(sch),
            )
        )
    return result


def _parse_property(name: str, prop: Any, required: bool) -> Property:
    prop = as_dict(prop)
    return Property(
        name=name,
        prop_type=summarize(prop, OPENAPI3_STYLE),
        required=required,
        description=as_text(prop.get("description")),
        default=prop.get("default"),
        enum=as_list(prop.get("enum")),
    )
