import enum
from typing import List, Optional

from pydantic import Field

from ..model import BaseModel

VERSION = "2.1.0"
COLLECTION_SCHEMA = f"https://schema.getpostman.com/json/collection/v{VERSION}/collection.json"  # noqa: E501
BASE_URL_VARIABLE = "base_url"


class Mode(enum.Enum):
    raw = 'raw'


class EnvironmentValue(BaseModel):
    key: str
    value: str
    enabled: bool = True


class Environment(BaseModel):
    name: str
    values: List[EnvironmentValue]

    def to_payload(self):
        return {'environment': self.to_dict()}


class QueryParam(BaseModel):
    key: str
    value: str
    description: Optional[str] = None


class Variable(BaseModel):
    key: str
    value: str = ''
    description: str = ''


class Url(BaseModel):
    raw: str
    host: List[str]
    path: List[str]
    query: List[QueryParam] = []
    variable: List[Variable] = []


class RequestBody(BaseModel):
    mode: Mode
    raw: str


class Header(BaseModel):
    key: str
    value: str


class Request(BaseModel):
    method: str
    header: List[Header] = []
    url: Url
    body: Optional[RequestBody] = None


class Item(BaseModel):
    name: str
    request: Request
    response: list = []


class Info(BaseModel):
    name: str
    description: str
    schema_: str = Field(default=COLLECTION_SCHEMA, alias='schema')


class Collection(BaseModel):
    info: Info
    item: List[Item]

    def to_payload(self):
        return {'collection': self.to_dict()}
