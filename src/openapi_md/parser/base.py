"""Unified view models for parsed API descriptions.

Both dialect adapters (Swagger 2.0 and OpenAPI 3.x) convert their raw
document tree into these models; the renderers only ever see this shape.
Every field has a typed default so rendering never special-cases absence.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

# Fixed emission order for operations sharing a path.
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD", "TRACE")

NO_DESCRIPTION = "No description"
NONE_DEFINED = "- None defined"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Example(_Frozen):
    """A labelled literal example value."""

    label: str
    media_type: str = ""
    value: Any = None


class Param(_Frozen):
    """A single API parameter (path, query, header, cookie, formData or body)."""

    name: str
    location: str  # path / query / header / cookie / formData / body
    required: bool = False
    param_type: str = "-"
    description: str = ""
    default: Any = None
    enum: list[Any] = []


class MediaContent(_Frozen):
    """One media-type entry of a request body or response."""

    media_type: str
    schema_summary: str = "-"
    examples: list[Example] = []


class RequestBody(_Frozen):
    content: list[MediaContent] = []


class Response(_Frozen):
    """A response keyed by status code or ``default``."""

    status: str
    description: str = NO_DESCRIPTION
    schema_summary: str = ""  # inline summary on the status line
    content: list[MediaContent] = []
    examples: list[Example] = []

    @property
    def has_examples(self) -> bool:
        return bool(self.examples) or any(media.examples for media in self.content)


class ApiEndpoint(_Frozen):
    """A single (method, path) operation with all its metadata."""

    method: str  # GET / POST / PUT / DELETE / PATCH / OPTIONS / HEAD / TRACE
    path: str  # /pets/{petId}
    summary: str = ""
    description: str = ""
    operation_id: str = ""
    tags: list[str] = []
    produces: list[str] = []
    consumes: list[str] = []
    path_parameters: list[Param] = []  # declared on the path item
    parameters: list[Param] = []  # declared on the operation
    request_examples: list[Example] = []
    request_body: RequestBody | None = None
    responses: list[Response] = []


class Property(_Frozen):
    name: str
    prop_type: str = "-"
    required: bool = False
    description: str = ""
    default: Any = None
    enum: list[Any] = []


class SchemaDefinition(_Frozen):
    """A named reusable schema; nested references are kept by name only."""

    name: str
    description: str = ""
    properties: list[Property] = []
    examples: list[Example] = []


class SecurityScheme(_Frozen):
    name: str
    scheme_type: str = ""
    scheme: str = ""
    param_name: str = ""
    location: str = ""
    authorization_url: str = ""
    token_url: str = ""
    scopes: list[str] = []


class Server(_Frozen):
    url: str
    has_variables: bool = False


class Tag(_Frozen):
    name: str
    description: str = ""


class ApiInfo(_Frozen):
    title: str = "-"
    version: str = "-"
    description: str = ""
    contact_name: str = ""
    contact_email: str = ""
    license_name: str = ""


class ApiDocument(_Frozen):
    """Root of one parsed API description, independent of its dialect."""

    dialect: str  # swagger2 / openapi3
    info: ApiInfo = ApiInfo()
    security_schemes: list[SecurityScheme] = []
    servers: list[Server] = []
    tags: list[Tag] = []
    endpoints: list[ApiEndpoint] = []
    schemas: list[SchemaDefinition] = []
