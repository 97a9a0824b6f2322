"""Assemble the full Markdown document in its fixed section order.

Overview, Authentication, Servers, Tags, Endpoints by Tag, Schemas, Examples.
Every ``##`` section is always printed; an empty one reads ``- None defined``.
"""

from openapi_md.parser.base import (
    HTTP_METHODS,
    NONE_DEFINED,
    ApiDocument,
    ApiEndpoint,
    ApiInfo,
    SchemaDefinition,
    SecurityScheme,
)
from openapi_md.render.examples import format_example
from openapi_md.render.operation import render_operation
from openapi_md.render.summary import annotate

UNTAGGED = "Untagged"


def render_document(doc: ApiDocument) -> str:
    sections = [
        f"# {doc.info.title}",
        _overview(doc.info),
        _authentication(doc.security_schemes),
        _servers(doc),
        _tags(doc),
        _endpoints(doc.endpoints),
        _schemas(doc.schemas),
        _examples_index(doc.endpoints),
    ]
    return "\n\n".join(sections) + "\n"


def endpoint_sort_key(endpoint: ApiEndpoint) -> tuple[str, int]:
    method = endpoint.method.upper()
    order = HTTP_METHODS.index(method) if method in HTTP_METHODS else len(HTTP_METHODS)
    return endpoint.path, order


def group_by_tag(endpoints: list[ApiEndpoint]) -> tuple[dict[str, list[ApiEndpoint]], list[ApiEndpoint]]:
    """Fan endpoints out to each of their tags; tagless ones go to the untagged list."""
    tagged: dict[str, list[ApiEndpoint]] = {}
    untagged: list[ApiEndpoint] = []
    for endpoint in sorted(endpoints, key=endpoint_sort_key):
        if not endpoint.tags:
            untagged.append(endpoint)
            continue
        for tag in dict.fromkeys(endpoint.tags):
            tagged.setdefault(tag, []).append(endpoint)
    return {name: tagged[name] for name in sorted(tagged)}, untagged


def _section(title: str, lines: list[str]) -> str:
    return "\n".join([f"## {title}"] + (lines or [NONE_DEFINED]))


def _overview(info: ApiInfo) -> str:
    lines = [f"- Version: {info.version}"]
    if info.description:
        lines.append(f"- Description: {info.description}")
    if info.contact_name:
        lines.append(f"- Contact: {info.contact_name}")
    if info.contact_email:
        lines.append(f"- Contact Email: {info.contact_email}")
    if info.license_name:
        lines.append(f"- License: {info.license_name}")
    return _section("Overview", lines)


def _security_line(scheme: SecurityScheme) -> str:
    line = f"- {scheme.name} — type={scheme.scheme_type}"
    for label, value in (
        ("scheme", scheme.scheme),
        ("name", scheme.param_name),
        ("in", scheme.location),
        ("authUrl", scheme.authorization_url),
        ("tokenUrl", scheme.token_url),
    ):
        if value:
            line += f", {label}={value}"
    if scheme.scopes:
        line += f", scopes=[{', '.join(sorted(scheme.scopes))}]"
    return line


def _authentication(schemes: list[SecurityScheme]) -> str:
    ordered = sorted(schemes, key=lambda s: s.name)
    return _section("Authentication", [_security_line(s) for s in ordered])


def _servers(doc: ApiDocument) -> str:
    lines = [f"- {s.url} {{vars}}" if s.has_variables else f"- {s.url}" for s in doc.servers]
    return _section("Servers", lines)


def _tags(doc: ApiDocument) -> str:
    lines = [f"- {t.name} — {t.description}" if t.description else f"- {t.name}" for t in doc.tags]
    return _section("Tags", lines)


def _endpoints(endpoints: list[ApiEndpoint]) -> str:
    tagged, untagged = group_by_tag(endpoints)
    if not tagged and not untagged:
        return _section("Endpoints by Tag", [])

    # A declared tag named "Untagged" is its own group; tagless endpoints always come last.
    groups = list(tagged.items())
    if untagged:
        groups.append((UNTAGGED, untagged))

    parts = ["## Endpoints by Tag"]
    for tag, members in groups:
        parts.append(f"### {tag}")
        parts.extend(render_operation(endpoint) for endpoint in members)
    return "\n\n".join(parts)


def _schema_block(schema: SchemaDefinition) -> str:
    blocks = [[f"### {schema.name}"]]
    if schema.description:
        blocks.append([schema.description])
    if schema.properties:
        lines = ["**Properties**"]
        for prop in schema.properties:
            line = f"- `{prop.name}` ({prop.prop_type})"
            if prop.required:
                line += " (required)"
            lines.append(annotate(line, prop.description, prop.default, prop.enum))
        blocks.append(lines)
    for example in schema.examples:
        blocks.append(format_example(example))
    return "\n\n".join("\n".join(block) for block in blocks)


def _schemas(schemas: list[SchemaDefinition]) -> str:
    if not schemas:
        return _section("Schemas", [])
    ordered = sorted(schemas, key=lambda s: s.name)
    return "\n\n".join(["## Schemas"] + [_schema_block(s) for s in ordered])


def _examples_index(endpoints: list[ApiEndpoint]) -> str:
    lines = []
    for endpoint in sorted(endpoints, key=endpoint_sort_key):
        for response in sorted(endpoint.responses, key=lambda r: r.status):
            if response.has_examples:
                lines.append(f"- {endpoint.method} {endpoint.path} {response.status} — has inline examples")
    return _section("Examples", lines)
