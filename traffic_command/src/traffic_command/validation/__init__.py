"""Validation of traffic commands."""

from traffic_command.errors import (
    ActionChoiceError,
    AmbiguousActionChoice,
    CodecError,
    CommandValidationError,
    DuplicateActionId,
    InvalidValue,
    MissingRequiredField,
    MultipleActionsSet,
    VersionIncompatible,
    Violation,
)
from traffic_command.validation.registry import ActionIdRegistry
from traffic_command.validation.version import (
    Compatible,
    Incompatible,
    VersionRange,
    check_version,
)
from traffic_command.validation.validator import (
    CommandValidator,
    ValidatedCommand,
    ValidationResult,
    validate,
)

__all__ = [
    "ActionChoiceError",
    "ActionIdRegistry",
    "AmbiguousActionChoice",
    "CodecError",
    "CommandValidationError",
    "CommandValidator",
    "Compatible",
    "DuplicateActionId",
    "Incompatible",
    "InvalidValue",
    "MissingRequiredField",
    "MultipleActionsSet",
    "ValidatedCommand",
    "ValidationResult",
    "VersionIncompatible",
    "VersionRange",
    "Violation",
    "check_version",
    "validate",
]
