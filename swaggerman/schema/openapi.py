import enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from ..exceptions import SchemaError
from ..model import BaseModel
from ..util import HTTP_VERBS
from .. import logger


class SpecModel(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True, frozen=True)


class ParameterIn(enum.Enum):
    body = 'body'
    form_data = 'formData'
    path = 'path'
    query = 'query'
    header = 'header'
    cookie = 'cookie'


class Reference(SpecModel):
    ref: str = Field(alias='$ref')


class Server(SpecModel):
    url: str
    description: Optional[str] = None


class Info(SpecModel):
    title: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None


class ParameterSchema(SpecModel):
    type: Optional[str] = None
    items: Optional[dict] = None


class Parameter(SpecModel):
    name: str
    in_: ParameterIn = Field(alias='in')
    description: Optional[str] = None
    required: Optional[bool] = None
    schema_: Optional[ParameterSchema] = Field(default=None, alias='schema')
    # Swagger 2.0 keeps the type on the parameter itself
    type: Optional[str] = None

    @property
    def schema_type(self) -> Optional[str]:
        if self.schema_ and self.schema_.type:
            return self.schema_.type
        return self.type


class MediaType(SpecModel):
    schema_: Optional[dict] = Field(default=None, alias='schema')


class RequestBody(SpecModel):
    description: Optional[str] = None
    content: Dict[str, MediaType] = {}
    required: Optional[bool] = None


class Operation(SpecModel):
    operationId: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Union[Reference, Parameter]] = []
    requestBody: Optional[Union[Reference, RequestBody]] = None


class Components(SpecModel):
    schemas: Dict[str, Any] = {}


class Spec(SpecModel):
    paths: Dict[str, Dict[str, Operation]]
    servers: List[Server] = []
    components: Components = Components()
    info: Optional[Info] = None

    @field_validator('paths', mode='before')
    @classmethod
    def operations_only(cls, paths):
        if not isinstance(paths, dict):
            return paths
        filtered = {}
        for path, methods in paths.items():
            if not isinstance(methods, dict):
                filtered[path] = methods
                continue
            filtered[path] = {}
            for method, operation in methods.items():
                if method.lower() not in HTTP_VERBS:
                    logger.debug(f"Skipping path item key {method} of {path}")
                    continue
                filtered[path][method] = operation
        return filtered


class StringSchema(SpecModel):
    type: Literal['string']


class IntegerSchema(SpecModel):
    type: Literal['integer']


class ArraySchema(SpecModel):
    type: Literal['array']
    items: Optional[dict] = None


class ObjectSchema(SpecModel):
    type: Literal['object']
    properties: Dict[str, Any] = {}


SchemaNode = Annotated[
    Union[StringSchema, IntegerSchema, ArraySchema, ObjectSchema],
    Field(discriminator='type'),
]

_schema_node = TypeAdapter(SchemaNode)


def parse_schema_node(key: str, node) -> SchemaNode:
    """Build the typed node for property ``key``, failing on unknown kinds."""
    type_ = node.get('type') if isinstance(node, dict) else None
    if not type_:
        raise SchemaError(f"Type property is missing for {key}", key=key)
    if not isinstance(type_, str):
        raise SchemaError(f"Unsupported schema for {key}: type {type_!r}", key=key)
    try:
        return _schema_node.validate_python(node)
    except ValidationError as e:
        raise SchemaError(
            f"Unsupported schema for {key}: type {type_!r}"
            f" ({e.error_count()} validation errors)",
            key=key,
        ) from e
