"""Validator configuration."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from traffic_command.data.primitives import InterfaceVersion


class ActionIdScope(str, Enum):
    """How far action id uniqueness is enforced."""

    MESSAGE = "message"  # unique within one TrafficCommand
    SESSION = "session"  # unique across all commands sent to one participant


class VersionRange(BaseModel):
    """Inclusive range of interface versions a receiver supports."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    minimum: InterfaceVersion = Field(
        default_factory=lambda: InterfaceVersion(version_major=3),
        description="Oldest supported version",
    )
    maximum: InterfaceVersion = Field(
        default_factory=lambda: InterfaceVersion(
            version_major=3, version_minor=999_999, version_patch=999_999
        ),
        description="Newest supported version",
    )

    @model_validator(mode="after")
    def _check_order(self) -> VersionRange:
        if self.minimum > self.maximum:
            raise ValueError(f"minimum {self.minimum} is greater than maximum {self.maximum}")
        return self

    def __contains__(self, version: InterfaceVersion) -> bool:
        return self.minimum <= version <= self.maximum

    def __str__(self) -> str:
        return f"[{self.minimum}, {self.maximum}]"


class ValidatorConfig(BaseModel):
    """Configuration for CommandValidator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    action_id_scope: ActionIdScope = Field(
        ActionIdScope.MESSAGE, description="Action id uniqueness scope"
    )
    supported_versions: VersionRange = Field(
        default_factory=VersionRange, description="Interface versions accepted by the receiver"
    )
    require_version: bool = Field(True, description="Reject commands without interface version")


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load YAML file.

    Args:
        path: Path to YAML file.

    Returns:
        Loaded dictionary (empty for an empty file).
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_validator_config(path: Path | str) -> ValidatorConfig:
    """Load validator configuration from YAML.

    The settings may be at the top level or nested under a ``validator`` key.

    Args:
        path: Path to YAML file.

    Returns:
        ValidatorConfig: Validated configuration

    Raises:
        pydantic.ValidationError: If the file contents are invalid
    """
    data = load_yaml(path)
    if "validator" in data:
        data = data["validator"] or {}
    return ValidatorConfig.model_validate(data)
