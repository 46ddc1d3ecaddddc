"""Plugin configuration.

``validate`` and ``transform`` accept a boolean or a direction:
``"request"``, ``"response"``, ``"all"`` or ``"none"``.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Direction = Literal["request", "response", "all", "none"]


def _covers(option: bool | str, direction: str) -> bool:
    if isinstance(option, bool):
        return option
    return option in ("all", direction)


class PluginConfig(BaseModel):
    """Options captured once when the plugin is built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    validate_: bool | Direction = Field(True, alias="validate")
    transform: bool | Direction = True
    send_defaults: bool = Field(False, validation_alias=AliasChoices("send_defaults", "sendDefaults"))

    @property
    def validates_request(self) -> bool:
        return _covers(self.validate_, "request")

    @property
    def validates_response(self) -> bool:
        return _covers(self.validate_, "response")

    @property
    def transforms_request(self) -> bool:
        return _covers(self.transform, "request")

    @property
    def transforms_response(self) -> bool:
        return _covers(self.transform, "response")


def load_config(file_path: Path, **overrides) -> PluginConfig:
    """Load a PluginConfig from a YAML (or JSON) file.

    Keyword overrides whose value is not None replace values from the file.
    """
    data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: expected a mapping of plugin options")
    data.update({key: value for key, value in overrides.items() if value is not None})
    return PluginConfig.model_validate(data)
