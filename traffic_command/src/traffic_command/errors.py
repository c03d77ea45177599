"""Violation kinds and exceptions raised at the validation boundary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from traffic_command.data.primitives import Identifier, InterfaceVersion


@dataclass(frozen=True)
class Violation:
    """A single validation finding.

    Attributes:
        path: Dotted path of the offending field (e.g. ``action[0].lane_change_action.duration``)
        message: Human readable description
    """

    path: str
    message: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{type(self).__name__} at '{self.path}': {self.message}"


@dataclass(frozen=True)
class MissingRequiredField(Violation):
    """A field required in its context is not set."""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", "required field is not set")


@dataclass(frozen=True)
class AmbiguousActionChoice(Violation):
    """None of the action choice fields is set."""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", "no action is set")


@dataclass(frozen=True)
class MultipleActionsSet(Violation):
    """More than one action choice field is set."""

    populated: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(
                self, "message", f"exactly one action expected, got {', '.join(self.populated)}"
            )


@dataclass(frozen=True)
class DuplicateActionId(Violation):
    """An action id has already been used."""

    action_id: Identifier | None = None

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", f"action id {self.action_id} is not unique")


@dataclass(frozen=True)
class InvalidValue(Violation):
    """A field is set to a value outside its allowed range."""

    reason: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", self.reason)


@dataclass(frozen=True)
class VersionIncompatible(Violation):
    """The sender interface version is not supported by the receiver."""

    sent: InterfaceVersion | None = None
    supported: tuple[InterfaceVersion, InterfaceVersion] | None = None


class CodecError(Exception):
    """Raised by a codec when bytes cannot be turned into a message (or back)."""


class ActionChoiceError(ValueError):
    """Raised when a wire action does not populate exactly one choice field."""

    def __init__(self, violation: AmbiguousActionChoice | MultipleActionsSet) -> None:
        super().__init__(str(violation))
        self.violation = violation


class CommandValidationError(ValueError):
    """Raised when a complete list of violations has to be surfaced as an exception."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(f"{len(self.violations)} violation(s):\n{lines}")
