"""Primitive value types shared by every traffic command message."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

NANOS_PER_SECOND = 1_000_000_000


class ValueModel(BaseModel):
    """Immutable value object base."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class Identifier(ValueModel):
    """Opaque unique identifier."""

    value: int | str

    def __str__(self) -> str:
        return str(self.value)


class Timestamp(ValueModel):
    """Simulation-relative time.

    Zero time is arbitrary but identical for all messages of one simulation.
    """

    seconds: int = 0
    nanos: int = Field(0, ge=0, lt=NANOS_PER_SECOND)

    def to_seconds(self) -> float:
        """Convert to floating point seconds."""
        return self.seconds + self.nanos / NANOS_PER_SECOND

    @classmethod
    def from_seconds(cls, value: float) -> Timestamp:
        """Create from floating point seconds."""
        if not math.isfinite(value):
            raise ValueError(f"Timestamp must be finite: {value}")
        seconds = math.floor(value)
        nanos = round((value - seconds) * NANOS_PER_SECOND)
        if nanos == NANOS_PER_SECOND:
            seconds += 1
            nanos = 0
        return cls(seconds=seconds, nanos=nanos)


class Vector3d(ValueModel):
    """Position in the global coordinate system."""

    x: float = 0.0  # [m]
    y: float = 0.0  # [m]
    z: float = 0.0  # [m]

    def to_array(self) -> np.ndarray:
        """numpy配列に変換 (x, y, z)."""
        return np.array([self.x, self.y, self.z])


class Orientation3d(ValueModel):
    """Orientation in the global coordinate system."""

    roll: float = 0.0  # [rad]
    pitch: float = 0.0  # [rad]
    yaw: float = 0.0  # [rad]

    def to_array(self) -> np.ndarray:
        """numpy配列に変換 (roll, pitch, yaw)."""
        return np.array([self.roll, self.pitch, self.yaw])


class InterfaceVersion(ValueModel):
    """Interface version used by the sender."""

    version_major: int = Field(0, ge=0)
    version_minor: int = Field(0, ge=0)
    version_patch: int = Field(0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return cls.parse(data).model_dump()
        return data

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.version_major, self.version_minor, self.version_patch)

    def __lt__(self, other: InterfaceVersion) -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: InterfaceVersion) -> bool:
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: InterfaceVersion) -> bool:
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: InterfaceVersion) -> bool:
        return self.as_tuple() >= other.as_tuple()

    def __str__(self) -> str:
        return "{}.{}.{}".format(*self.as_tuple())

    @classmethod
    def parse(cls, text: str) -> InterfaceVersion:
        """Parse a ``major.minor.patch`` string. Missing parts default to zero."""
        parts = text.strip().split(".")
        if not 1 <= len(parts) <= 3:
            raise ValueError(f"Invalid interface version: {text!r}")
        numbers = [int(part) for part in parts] + [0] * (3 - len(parts))
        return cls(version_major=numbers[0], version_minor=numbers[1], version_patch=numbers[2])
