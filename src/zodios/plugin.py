"""Validation plugin exposing request and response hooks to an API client."""

import logging

from zodios.config import PluginConfig
from zodios.endpoint import Api
from zodios.pipeline import validate_request, validate_response
from zodios.views import RequestView, ResponseView

logger = logging.getLogger(__name__)


class ValidationPlugin:
    """Validates outgoing parameters and incoming response bodies.

    Build it once with a PluginConfig (or keyword options) and hand its
    hooks to the client; the configuration is read on every call but never
    changed.
    """

    name = "schema-validation"

    def __init__(self, config: PluginConfig | None = None, **options):
        if config is not None and options:
            raise TypeError("pass either a PluginConfig or keyword options, not both")
        self.config = config or PluginConfig(**options)

    def __repr__(self) -> str:
        return f"ValidationPlugin({self.config!r})"

    async def on_request(self, api: Api, request: RequestView) -> RequestView:
        """Validate the parameters of an outgoing request."""
        if not self.config.validates_request:
            logger.debug("Request validation disabled, passing %s %s through", request.method, request.url)
            return request.copy_view()
        endpoint = api.resolve(request.method, request.url)
        return await validate_request(
            endpoint,
            request,
            transform=self.config.transforms_request,
            send_defaults=self.config.send_defaults,
        )

    async def on_response(self, api: Api, request: RequestView, response: ResponseView) -> ResponseView:
        """Validate the body of the response received for ``request``."""
        if not self.config.validates_response:
            logger.debug("Response validation disabled, passing %s %s through", request.method, request.url)
            return response.copy_view()
        endpoint = api.resolve(request.method, request.url)
        return await validate_response(endpoint, request, response, transform=self.config.transforms_response)
