"""Endpoint definitions and the registry the validation hooks resolve against.

Endpoints are immutable: the hooks look them up by exact method and path
and never modify them.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from zodios.errors import EndpointNotFound
from zodios.schema import Schema

ParameterType = Literal["Body", "Query", "Header", "Path"]


class Parameter(BaseModel):
    """A single endpoint parameter and the schema its value must satisfy."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    type: ParameterType
    name: str
    schema_: Schema = Field(alias="schema")
    description: str = ""


class Endpoint(BaseModel):
    """A single API endpoint with its parameters and response schema."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str  # get / post / put / delete / patch
    path: str  # /api/users/{id}
    response: Schema
    parameters: list[Parameter] = []
    alias: str | None = None
    description: str = ""

    @field_validator("method")
    @classmethod
    def _lowercase_method(cls, value: str) -> str:
        return value.lower()

    @model_validator(mode="after")
    def _single_body(self) -> "Endpoint":
        bodies = [p for p in self.parameters if p.type == "Body"]
        if len(bodies) > 1:
            raise ValueError(f"{self.method} {self.path} declares {len(bodies)} Body parameters, expected at most one")
        return self


class Api:
    """Read-only registry of endpoints."""

    def __init__(self, endpoints: list[Endpoint]):
        self.endpoints = tuple(endpoints)

    def __iter__(self):
        return iter(self.endpoints)

    def __len__(self) -> int:
        return len(self.endpoints)

    def find_endpoint(self, method: str, path: str) -> Endpoint | None:
        """Return the endpoint declared for ``method`` and ``path``, if any."""
        method = method.lower()
        for endpoint in self.endpoints:
            if endpoint.method == method and endpoint.path == path:
                return endpoint
        return None

    def resolve(self, method: str, url: str) -> Endpoint:
        """Like find_endpoint, but raise EndpointNotFound when nothing matches."""
        endpoint = self.find_endpoint(method, url)
        if endpoint is None:
            raise EndpointNotFound(method, url)
        return endpoint
