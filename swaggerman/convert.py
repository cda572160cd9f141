import json
import os
from collections import namedtuple
from typing import Generator, List, Optional
from urllib.parse import urlsplit

from pydantic import ValidationError

from .exceptions import ParseError, SchemaError
from .fake import FakeData
from .model import ReferenceResolve
from .schema import openapi as oapi
from .schema.openapi import (
    ArraySchema, IntegerSchema, ObjectSchema, ParameterIn, Reference, Spec,
    StringSchema, parse_schema_node,
)
from .schema.postman import (
    BASE_URL_VARIABLE, COLLECTION_SCHEMA,
    Collection, Environment, EnvironmentValue, Info, Item,
    QueryParam, Request, RequestBody, Url, Variable,
)
from .util import load_file, path_segments, path_variables
from . import logger

Route = namedtuple('Route', ['verb', 'path', 'operation'])

COLLECTION_FILE = 'collection_generated.json'
JSON_MIMETYPE = 'application/json'
BASE_URL_TEMPLATE = f'{{{{{BASE_URL_VARIABLE}}}}}'
DEFAULT_PORTS = {'http': 80, 'https': 443}


def load_spec(path: str) -> Spec:
    if not os.path.isfile(path):
        raise ParseError(f"Spec file not found: {path}")
    content = load_file(path)
    try:
        return Spec.model_validate(content)
    except ValidationError as e:
        raise ParseError(f"{path} is not an OpenAPI document: {e}") from e


def server_host(url: str) -> str:
    """Host component of a server URL, port kept unless it is the scheme default."""
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        raise ParseError(f"Server URL has no host: {url}")
    if ':' in host:
        host = f'[{host}]'
    try:
        port = parts.port
    except ValueError as e:
        raise ParseError(f"Server URL has an invalid port: {url}") from e
    if port is None or DEFAULT_PORTS.get(parts.scheme.lower()) == port:
        return host
    return f'{host}:{port}'


def environment_file_name(environment: Environment) -> str:
    return f'environment_{environment.name}.json'


def save_to_file(output_dir: str, filename: str, document) -> str:
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    document.to_file(path)
    logger.info(f"Wrote {path}")
    return path


class SwaggerToPostman(ReferenceResolve):
    def __init__(
        self,
        spec: Optional[Spec] = None,
        path: Optional[str] = None,
        fake: Optional[FakeData] = None,
        collection_name: str = 'Generated Collection',
        collection_description: str = 'Collection generated from Swagger file',
    ):
        if spec is None and path:
            spec = load_spec(path)
        elif spec is None:
            raise ValueError("Either a spec or a path to one is required")
        if isinstance(spec, dict):
            spec = Spec.model_validate(spec)
        self.spec = spec
        self.document = spec.to_dict(no_empty=False)
        self.fake = fake or FakeData()
        self.collection_name = collection_name
        self.collection_description = collection_description

    @classmethod
    def from_settings(cls, settings, fake: Optional[FakeData] = None):
        return cls(
            path=settings.input_path,
            fake=fake or FakeData.from_settings(settings),
            collection_name=settings.collection_name,
            collection_description=settings.collection_description,
        )

    @property
    def paths(self):
        for path in self.spec.paths:
            yield (path, self.spec.paths[path])

    @property
    def routes(self) -> Generator[Route, None, None]:
        for path, operations in self.paths:
            for verb, operation in operations.items():
                yield Route(verb, path, operation)

    def resolve(self, ref: str) -> dict:
        resolved = self.resolve_ref(ref, self.document)
        if resolved is None:
            raise SchemaError(f"Unresolved reference {ref}", key=ref)
        return resolved

    @classmethod
    def to_postman_environment(cls, server_url: str) -> Environment:
        return Environment(
            name=server_host(server_url),
            values=[
                EnvironmentValue(
                    key=BASE_URL_VARIABLE, value=server_url, enabled=True,
                ),
            ],
        )

    def environments(self) -> Generator[Environment, None, None]:
        for server in self.spec.servers:
            yield self.to_postman_environment(server.url)

    def fake_value(self, key: str, node: dict):
        schema_node = parse_schema_node(key, node)
        if isinstance(schema_node, StringSchema):
            return self.fake.product_name()
        elif isinstance(schema_node, IntegerSchema):
            return self.fake.integer()
        elif isinstance(schema_node, ArraySchema):
            return [self.fake_value(key, schema_node.items)]
        elif isinstance(schema_node, ObjectSchema):
            return self.fake_data_from_schema(
                {'properties': schema_node.properties},
            )

    def fake_data_from_schema(self, schema: dict) -> dict:
        """Example object for a schema's ``properties``.

        Arrays without ``items`` are left out. A property whose type is
        missing or not one of string, integer, array or object raises
        :class:`SchemaError` naming that property.
        """
        data = {}
        for key, node in (schema.get('properties') or {}).items():
            if isinstance(node, dict) and node.get('type') == 'array'\
                    and node.get('items') is None:
                logger.debug(f"Array property {key} has no items, skipping")
                continue
            data[key] = self.fake_value(key, node)
        return data

    def parameters(self, operation: oapi.Operation) -> List[oapi.Parameter]:
        params = []
        for param in operation.parameters:
            if isinstance(param, Reference):
                param = oapi.Parameter.model_validate(self.resolve(param.ref))
            params.append(param)
        return params

    def query_params(self, operation: oapi.Operation) -> List[QueryParam]:
        query = []
        for param in self.parameters(operation):
            if param.in_ != ParameterIn.query:
                continue
            if param.schema_type == 'array':
                value = json.dumps([self.fake.word()])
            else:
                value = self.fake.word()
            query.append(QueryParam(
                key=param.name,
                value=value,
                description=param.description,
            ))
        return query

    def request_body(self, operation: oapi.Operation) -> Optional[RequestBody]:
        request_body = operation.requestBody
        if isinstance(request_body, Reference):
            request_body = oapi.RequestBody.model_validate(
                self.resolve(request_body.ref),
            )
        if not request_body:
            return None
        media_type = request_body.content.get(JSON_MIMETYPE)
        if not media_type or not media_type.schema_:
            return None
        schema = media_type.schema_
        if schema.get('$ref'):
            schema = self.resolve(schema['$ref'])
        elif not isinstance(schema.get('properties'), dict):
            return None
        return RequestBody(
            mode='raw',
            raw=json.dumps(self.fake_data_from_schema(schema)),
        )

    @classmethod
    def url_variables(cls, path: str) -> List[Variable]:
        return [
            Variable(key=name, value='', description='')
            for name in path_variables(path)
        ]

    def build_item(self, verb: str, path: str, operation: oapi.Operation) -> Item:
        logger.debug(f"Converting {verb.upper()} {path}")
        body = self.request_body(operation)
        query = self.query_params(operation)
        return Item(
            name=operation.summary or path,
            request=Request(
                method=verb.upper(),
                header=[],
                url=Url(
                    raw=f'{BASE_URL_TEMPLATE}{path}',
                    host=[BASE_URL_TEMPLATE],
                    path=path_segments(path),
                    query=query,
                    variable=self.url_variables(path),
                ),
                body=body,
            ),
            response=[],
        )

    def to_postman_collection(self) -> Collection:
        return Collection(
            info=Info(
                name=self.collection_name,
                description=self.collection_description,
                schema=COLLECTION_SCHEMA,
            ),
            item=[self.build_item(*route) for route in self.routes],
        )
