"""Render one endpoint section of the Markdown document."""

from openapi_md.parser.base import ApiEndpoint, MediaContent, Param, Response
from openapi_md.render.examples import format_example
from openapi_md.render.summary import annotate


def merge_parameters(*groups: list[Param]) -> list[Param]:
    """Flatten parameter groups, de-duplicated on (location, name).

    Later groups win; an overridden parameter keeps its original position.
    """
    merged: dict[tuple[str, str], Param] = {}
    for group in groups:
        for param in group:
            merged[(param.location, param.name)] = param
    return list(merged.values())


def render_operation(endpoint: ApiEndpoint) -> str:
    """Render the ``####`` section for a single endpoint."""
    blocks: list[list[str]] = [[f"#### {endpoint.method} {endpoint.path}"]]

    if endpoint.summary:
        blocks.append([endpoint.summary])
    if endpoint.description:
        blocks.append([endpoint.description])
    if endpoint.operation_id:
        blocks.append([f"_Operation ID_: `{endpoint.operation_id}`"])
    if endpoint.produces:
        blocks.append(["**Produces**"] + [f"- {mt}" for mt in endpoint.produces])
    if endpoint.consumes:
        blocks.append(["**Consumes**"] + [f"- {mt}" for mt in endpoint.consumes])

    params = merge_parameters(endpoint.path_parameters, endpoint.parameters)
    if params:
        blocks.append(["**Parameters**"] + [_param_line(p) for p in params])

    for example in endpoint.request_examples:
        blocks.append(format_example(example))

    if endpoint.request_body and endpoint.request_body.content:
        lines = ["**Request Body**"]
        for media in endpoint.request_body.content:
            lines.extend(_media_lines(media, indent=""))
        blocks.append(lines)

    if endpoint.responses:
        lines = ["**Responses**"]
        for response in sorted(endpoint.responses, key=lambda r: r.status):
            lines.extend(_response_lines(response))
        blocks.append(lines)

    return "\n\n".join("\n".join(block) for block in blocks)


def _param_line(param: Param) -> str:
    line = f"- {param.location} `{param.name}` ({param.param_type})"
    if param.required:
        line += " (required)"
    return annotate(line, param.description, param.default, param.enum)


def _media_lines(media: MediaContent, indent: str) -> list[str]:
    lines = [f"{indent}- {media.media_type} — schema: {media.schema_summary}"]
    for example in media.examples:
        lines.extend(format_example(example, indent=indent + "  "))
    return lines


def _response_lines(response: Response) -> list[str]:
    line = f"- {response.status} — {response.description}"
    if response.schema_summary:
        line += f" (schema: {response.schema_summary})"
    lines = [line]
    for media in response.content:
        lines.extend(_media_lines(media, indent="  "))
    for example in response.examples:
        lines.extend(format_example(example, indent="  "))
    return lines
