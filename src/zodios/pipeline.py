"""Parameter and response validation pipelines."""

import copy
import logging
from typing import Any

from zodios.endpoint import Endpoint, Parameter
from zodios.errors import ParameterValidationError, ResponseValidationError
from zodios.schema import ParseResult, Schema
from zodios.views import RequestView, ResponseView, is_json_content_type

logger = logging.getLogger(__name__)

# Parameter type -> RequestView mapping holding values of that type
_MAPPINGS = {"Query": "queries", "Header": "headers", "Path": "params"}


async def run_schema(schema: Schema, value: Any, transform: bool) -> ParseResult:
    if transform:
        return await schema.validate_and_transform(value)
    return await schema.validate(value)


async def validate_request(
    endpoint: Endpoint, request: RequestView, transform: bool, send_defaults: bool
) -> RequestView:
    """Validate each declared parameter of ``request`` in declared order.

    Returns a new view holding the validated (and, with ``transform``,
    transformed) values. Undeclared parameters are passed through.
    Raises ParameterValidationError for the first parameter that fails.
    """
    updates: dict[str, Any] = {
        "data": copy.deepcopy(request.data),
        "queries": copy.deepcopy(request.queries),
        "headers": copy.deepcopy(request.headers),
        "params": copy.deepcopy(request.params),
    }
    for parameter in endpoint.parameters:
        value = _read_parameter(request, parameter)
        schema = parameter.schema_
        if value is None and send_defaults and schema.has_default:
            value = schema.get_default()
            logger.debug("Using default for %s parameter '%s'", parameter.type, parameter.name)
        if value is None:
            continue

        result = await run_schema(schema, value, transform)
        if not result.success:
            raise ParameterValidationError(parameter.type, parameter.name, result.issues, value=value, request=request)

        output = result.data if transform else copy.deepcopy(value)
        if parameter.type == "Body":
            updates["data"] = output
        else:
            updates[_MAPPINGS[parameter.type]][parameter.name] = output
    return request.model_copy(update=updates)


def _read_parameter(request: RequestView, parameter: Parameter) -> Any:
    if parameter.type == "Body":
        return request.data
    return getattr(request, _MAPPINGS[parameter.type]).get(parameter.name)


async def validate_response(
    endpoint: Endpoint, request: RequestView, response: ResponseView, transform: bool
) -> ResponseView:
    """Validate a JSON response body against the endpoint's response schema."""
    if not is_json_content_type(response.content_type):
        logger.debug(
            "Skipping %s %s response with content-type %r",
            endpoint.method,
            endpoint.path,
            response.content_type,
        )
        return response.copy_view()

    result = await run_schema(endpoint.response, response.data, transform)
    if not result.success:
        raise ResponseValidationError(
            endpoint.method,
            endpoint.path,
            response.status,
            response.status_text,
            result.issues,
            response.data,
            request=request,
        )
    return response.model_copy(
        update={"headers": dict(response.headers), "data": result.data if transform else copy.deepcopy(response.data)}
    )
