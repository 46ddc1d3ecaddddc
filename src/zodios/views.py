"""Request and response views exchanged with the HTTP transport.

Views are frozen; the hooks produce updated copies with ``model_copy``.
A value of ``None`` means the parameter or body is absent.
"""

from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, field_validator

JSON_MEDIA_TYPES = ("application/json", "application/vnd.api+json")


def media_type(content_type: str | None) -> str:
    """Strip parameters such as ``charset`` from a content-type header."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_content_type(content_type: str | None) -> bool:
    return media_type(content_type) in JSON_MEDIA_TYPES


class RequestView(BaseModel):
    """An outgoing request as seen by the validation hooks."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str
    url: str
    data: Any = None
    queries: dict[str, Any] = {}
    headers: dict[str, Any] = {}
    params: dict[str, Any] = {}  # path parameters

    @field_validator("method")
    @classmethod
    def _lowercase_method(cls, value: str) -> str:
        return value.lower()

    def copy_view(self) -> "RequestView":
        """Return a deep copy sharing no mutable state with this view."""
        return self.model_copy(deep=True)


class ResponseView(BaseModel):
    """An incoming response whose body is already decoded."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: int
    status_text: str = ""
    headers: dict[str, str] = {}
    data: Any = None

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None

    def copy_view(self) -> "ResponseView":
        return self.model_copy(deep=True)

    @classmethod
    def from_requests(cls, response: requests.Response) -> "ResponseView":
        """Build a view from a ``requests`` response, decoding JSON bodies."""
        headers = dict(response.headers)
        content_type = response.headers.get("content-type")
        if is_json_content_type(content_type) and response.content:
            data = response.json()
        else:
            data = response.text
        return cls(status=response.status_code, status_text=response.reason or "", headers=headers, data=data)
