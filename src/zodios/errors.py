"""Error taxonomy and diagnostic messages for the validation plugin."""

import json
from http import HTTPStatus
from typing import Any

from zodios.schema import Issue


def not_found_message(method: str, url: str) -> str:
    return f"No endpoint found for {method.lower()} {url}"


def parameter_message(kind: str, name: str, issues: list[Issue]) -> str:
    return f"Zodios: Invalid {kind} parameter '{name}'\n{_dump_issues(issues)}"


def response_message(
    method: str, path: str, status: int, status_text: str, issues: list[Issue], received: Any
) -> str:
    """Build the multi-line diagnostic for a response that failed validation."""
    return "\n".join(
        [
            f"Zodios: Invalid response from endpoint '{method.lower()} {path}'",
            f"status: {status} {status_text or _reason_phrase(status)}",
            "cause:",
            _dump_issues(issues),
            "received:",
            _dump(received),
        ]
    )


def _dump_issues(issues: list[Issue]) -> str:
    return _dump([issue.model_dump(exclude_none=True) for issue in issues])


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class ZodiosError(Exception):
    """Base class for errors raised by the validation hooks."""

    def __init__(self, message: str, request: Any = None, data: Any = None, issues: list[Issue] | None = None):
        super().__init__(message)
        self.message = message
        self.request = request
        self.data = data
        self.issues = issues or []


class EndpointNotFound(ZodiosError):
    """No endpoint is declared for the request's method and url."""

    def __init__(self, method: str, url: str, request: Any = None):
        super().__init__(not_found_message(method, url), request=request)
        self.method = method.lower()
        self.url = url


class ParameterValidationError(ZodiosError):
    """An outgoing parameter did not match its schema."""

    def __init__(self, kind: str, name: str, issues: list[Issue], value: Any = None, request: Any = None):
        super().__init__(parameter_message(kind, name, issues), request=request, data=value, issues=issues)
        self.kind = kind
        self.name = name


class ResponseValidationError(ZodiosError):
    """A response body did not match the endpoint's response schema."""

    def __init__(
        self,
        method: str,
        path: str,
        status: int,
        status_text: str,
        issues: list[Issue],
        received: Any,
        request: Any = None,
    ):
        super().__init__(
            response_message(method, path, status, status_text, issues, received),
            request=request,
            data=received,
            issues=issues,
        )
        self.method = method.lower()
        self.path = path
        self.status = status
        self.status_text = status_text
