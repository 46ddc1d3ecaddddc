"""CLI entry point: check recorded requests and responses against an API."""

import asyncio
import json
import logging
from pathlib import Path

import click

from zodios.config import PluginConfig, load_config
from zodios.errors import ZodiosError
from zodios.loader import load_api, load_payload, parse_pairs
from zodios.plugin import ValidationPlugin
from zodios.views import RequestView, ResponseView


def _build_plugin(config_path: Path | None, **overrides) -> ValidationPlugin:
    if config_path is not None:
        return ValidationPlugin(load_config(config_path, **overrides))
    return ValidationPlugin(PluginConfig(**{k: v for k, v in overrides.items() if v is not None}))


def _echo_view(view) -> None:
    click.echo(json.dumps(view.model_dump(), indent=2, ensure_ascii=False, default=str))


def _run(coro):
    try:
        return asyncio.run(coro)
    except ZodiosError as exc:
        raise click.ClickException(exc.message) from exc


def _load(api_ref: str):
    try:
        return load_api(api_ref)
    except (ImportError, ValueError) as exc:
        raise click.BadParameter(str(exc), param_hint="API_REF") from exc


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Zodios: validate API traffic against declared endpoint schemas."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("api_ref")
@click.option("--method", required=True, help="HTTP method of the request.")
@click.option("--url", required=True, help="Endpoint path, e.g. /users.")
@click.option("--data", "data_path", type=click.Path(exists=True, path_type=Path), help="JSON/YAML file holding the body.")
@click.option("--query", multiple=True, help="Query parameter as name=value (repeatable).")
@click.option("--header", multiple=True, help="Header as name=value (repeatable).")
@click.option("--param", multiple=True, help="Path parameter as name=value (repeatable).")
@click.option("-c", "--config", "config_path", type=click.Path(exists=True, path_type=Path), help="Plugin config file.")
@click.option("--transform/--no-transform", default=None, help="Apply schema transforms.")
@click.option("--send-defaults/--no-send-defaults", default=None, help="Fill absent parameters with schema defaults.")
def check_request(
    api_ref: str,
    method: str,
    url: str,
    data_path: Path | None,
    query: tuple[str, ...],
    header: tuple[str, ...],
    param: tuple[str, ...],
    config_path: Path | None,
    transform: bool | None,
    send_defaults: bool | None,
):
    """Validate a request's parameters and print the resulting request."""
    api = _load(api_ref)
    try:
        request = RequestView(
            method=method,
            url=url,
            data=load_payload(data_path) if data_path else None,
            queries=parse_pairs(query),
            headers=parse_pairs(header),
            params=parse_pairs(param),
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    plugin = _build_plugin(config_path, transform=transform, send_defaults=send_defaults)
    _echo_view(_run(plugin.on_request(api, request)))


@main.command()
@click.argument("api_ref")
@click.option("--method", required=True, help="HTTP method of the request.")
@click.option("--url", required=True, help="Endpoint path, e.g. /users.")
@click.option("--body", "body_path", required=True, type=click.Path(exists=True, path_type=Path), help="JSON/YAML file holding the response body.")
@click.option("--status", default=200, show_default=True, help="HTTP status code.")
@click.option("--status-text", default="", help="HTTP reason phrase.")
@click.option("--content-type", default="application/json", show_default=True, help="Response content type.")
@click.option("-c", "--config", "config_path", type=click.Path(exists=True, path_type=Path), help="Plugin config file.")
@click.option("--transform/--no-transform", default=None, help="Apply schema transforms.")
def check_response(
    api_ref: str,
    method: str,
    url: str,
    body_path: Path,
    status: int,
    status_text: str,
    content_type: str,
    config_path: Path | None,
    transform: bool | None,
):
    """Validate a recorded response body and print the resulting response."""
    api = _load(api_ref)
    request = RequestView(method=method, url=url)
    response = ResponseView(
        status=status,
        status_text=status_text,
        headers={"content-type": content_type},
        data=load_payload(body_path),
    )

    plugin = _build_plugin(config_path, transform=transform)
    _echo_view(_run(plugin.on_response(api, request, response)))
