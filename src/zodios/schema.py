"""Schema engine built on pydantic.

A Schema wraps any type pydantic can validate. Transforms are declared
inline with ``Annotated[T, Transform(func)]`` and only run when the schema
is invoked in transform mode. Transform functions may be plain functions or
coroutines; every schema call is awaited so callers never need to know which.
"""

import copy
import inspect
from typing import Any, Callable

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import core_schema

_NO_DEFAULT = object()

# pydantic "<name>_type" error -> JSON type name; other errors keep pydantic's code
_EXPECTED_NAMES = {
    "string": "string",
    "int": "integer",
    "float": "number",
    "bool": "boolean",
    "dict": "object",
    "model": "object",
    "dataclass": "object",
    "list": "array",
    "tuple": "array",
    "set": "array",
    "frozen_set": "array",
    "none": "null",
}


class TransformError(Exception):
    """Carries an exception raised inside a transform function past pydantic."""

    def __init__(self, original: BaseException):
        super().__init__(str(original))
        self.original = original


class Transform:
    """Annotated marker applying ``func`` to the validated value."""

    def __init__(self, func: Callable[[Any], Any]):
        self.func = func

    def __get_pydantic_core_schema__(self, source_type, handler):
        return core_schema.with_info_after_validator_function(self._apply, handler(source_type))

    def _apply(self, value, info):
        context = info.context
        if context is not None and not context.get("transform", True):
            return value
        if inspect.isawaitable(value):
            # an earlier transform deferred; run after it settles
            return _track(self._chain(value), context)
        try:
            return _track(self.func(value), context)
        except (ValueError, AssertionError) as exc:
            # pydantic would turn these into validation issues
            raise TransformError(exc) from exc

    async def _chain(self, pending):
        result = self.func(await pending)
        if inspect.isawaitable(result):
            result = await result
        return result


def _track(result: Any, context: dict | None) -> Any:
    if context is not None and inspect.isawaitable(result):
        context.setdefault("pending", []).append(result)
    return result


def _close_pending(pending: list) -> None:
    for awaitable in pending:
        close = getattr(awaitable, "close", None)
        if close is not None:
            close()


class Issue(BaseModel):
    """A single validation problem reported by the schema engine."""

    expected: str | None = None
    code: str
    path: list[str | int]
    message: str


class ParseResult(BaseModel):
    """Outcome of a schema call: either ``data`` or a list of ``issues``."""

    success: bool
    data: Any = None
    issues: list[Issue] = []


class Schema:
    """A validation schema with an optional declared default."""

    def __init__(self, type_: Any, *, default: Any = _NO_DEFAULT):
        self.type = type_
        self._default = default
        self._adapter = TypeAdapter(type_)

    def __repr__(self) -> str:
        return f"Schema({self.type!r})"

    @property
    def has_default(self) -> bool:
        return self._default is not _NO_DEFAULT

    def get_default(self) -> Any:
        """Return a fresh copy of the declared default."""
        if not self.has_default:
            raise LookupError(f"{self!r} declares no default")
        return copy.deepcopy(self._default)

    async def validate(self, value: Any) -> ParseResult:
        """Validate ``value`` without running any transform."""
        return await self._parse(value, transform=False)

    async def validate_and_transform(self, value: Any) -> ParseResult:
        """Validate ``value`` and return the transformed, settled output."""
        return await self._parse(value, transform=True)

    async def _parse(self, value: Any, transform: bool) -> ParseResult:
        pending: list = []
        try:
            data = self._adapter.validate_python(value, context={"transform": transform, "pending": pending})
        except ValidationError as exc:
            _close_pending(pending)
            return ParseResult(success=False, issues=issues_from_error(exc))
        except TransformError as exc:
            _close_pending(pending)
            raise exc.original from None
        try:
            data = await settle(data)
        except BaseException:
            # closing an awaited coroutine is a no-op
            _close_pending(pending)
            raise
        return ParseResult(success=True, data=data)


async def settle(value: Any) -> Any:
    """Await every awaitable found in ``value``, rebuilding containers."""
    if inspect.isawaitable(value):
        return await settle(await value)
    if isinstance(value, dict):
        return {key: await settle(item) for key, item in value.items()}
    if isinstance(value, list):
        return [await settle(item) for item in value]
    if isinstance(value, tuple):
        return tuple([await settle(item) for item in value])
    if isinstance(value, BaseModel):
        return value.model_copy(update={name: await settle(item) for name, item in value})
    return value


def issues_from_error(error: ValidationError) -> list[Issue]:
    """Convert a pydantic ValidationError into a list of Issue."""
    issues = []
    for detail in error.errors():
        kind = detail["type"]
        path = list(detail["loc"])
        expected = _EXPECTED_NAMES.get(kind[: -len("_type")]) if kind.endswith("_type") else None
        if expected is not None:
            issues.append(
                Issue(
                    expected=expected,
                    code="invalid_type",
                    path=path,
                    message=f"Invalid input: expected {expected}, received {json_type_name(detail.get('input'))}",
                )
            )
        else:
            issues.append(Issue(code=kind, path=path, message=detail["msg"]))
    return issues


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
