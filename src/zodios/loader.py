"""Load API registries and recorded payloads for the command line."""

import importlib
from pathlib import Path
from typing import Any

import yaml

from zodios.endpoint import Api, Endpoint


def load_api(ref: str) -> Api:
    """Import ``package.module:attribute`` and return it as an Api.

    The attribute may be an Api or a list of Endpoint.
    """
    module_name, sep, attribute = ref.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Invalid API reference '{ref}', expected 'module:attribute'")

    module = importlib.import_module(module_name)
    try:
        target = getattr(module, attribute)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'") from None

    if isinstance(target, Api):
        return target
    if isinstance(target, (list, tuple)) and all(isinstance(e, Endpoint) for e in target):
        return Api(list(target))
    raise ValueError(f"'{ref}' is neither an Api nor a list of Endpoint")


def load_payload(file_path: Path) -> Any:
    """Read a JSON or YAML payload file."""
    text = file_path.read_text(encoding="utf-8")
    return yaml.safe_load(text)


def parse_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn ``name=value`` command line options into a dict."""
    result = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected name=value, got '{pair}'")
        result[name] = value
    return result
