"""Codec interface and the receive pipeline built on it."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from traffic_command.data.wire import TrafficCommandMessage
from traffic_command.errors import CodecError, CommandValidationError
from traffic_command.validation.registry import ActionIdRegistry
from traffic_command.validation.validator import (
    CommandValidator,
    ValidatedCommand,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class Codec(ABC):
    """Byte level (de)serialization of traffic commands.

    Implementations must keep wire field names and enum integer values
    unchanged for interoperability.
    """

    @abstractmethod
    def encode(self, validated: ValidatedCommand) -> bytes:
        """Serialize a validated command.

        Args:
            validated: Command that passed validation

        Returns:
            bytes: Encoded message

        Raises:
            CodecError: If the command cannot be encoded
        """

    @abstractmethod
    def decode(self, data: bytes) -> TrafficCommandMessage:
        """Deserialize bytes into an unvalidated wire message.

        Args:
            data: Encoded message

        Returns:
            TrafficCommandMessage: Decoded message, not yet validated

        Raises:
            CodecError: If the bytes are malformed
        """


class JsonCodec(Codec):
    """UTF-8 JSON codec.

    Unset optional fields are omitted and enums are written as their integer
    values.
    """

    def __init__(self, indent: int | None = None) -> None:
        """Initialize codec.

        Args:
            indent: JSON indentation, None for compact output
        """
        self.indent = indent

    def encode(self, validated: ValidatedCommand) -> bytes:
        message = TrafficCommandMessage.from_traffic_command(validated.command)
        return message.model_dump_json(exclude_none=True, indent=self.indent).encode("utf-8")

    def decode(self, data: bytes) -> TrafficCommandMessage:
        try:
            return TrafficCommandMessage.model_validate_json(data)
        except ValidationError as e:
            logger.debug(f"Failed to decode traffic command: {e}")
            raise CodecError(f"Malformed traffic command: {e.error_count()} error(s)") from e


def decode_and_validate(
    data: bytes,
    codec: Codec,
    validator: CommandValidator | None = None,
    seen_ids: ActionIdRegistry | None = None,
) -> ValidationResult:
    """Decode bytes and validate the result.

    Order: decode, version check, action choice bridge, field validation.
    Codec errors are not repaired; they propagate as CodecError.

    Args:
        data: Encoded message
        codec: Codec used to decode
        validator: Validator (default configuration if omitted)
        seen_ids: Registry of ids already issued; required in session scope

    Returns:
        ValidationResult: Validated command or the complete violation list
    """
    return validate_message(codec.decode(data), validator, seen_ids)


def validate_message(
    message: TrafficCommandMessage,
    validator: CommandValidator | None = None,
    seen_ids: ActionIdRegistry | None = None,
) -> ValidationResult:
    """Validate a decoded wire message.

    Args:
        message: Decoded, unvalidated message
        validator: Validator (default configuration if omitted)
        seen_ids: Registry of ids already issued; required in session scope

    Returns:
        ValidationResult: Validated command or the complete violation list
    """
    validator = validator or CommandValidator()

    # A version the receiver does not understand short-circuits before the
    # action choice is interpreted.
    version_violation = validator.check_version(message.version)
    if version_violation is not None:
        logger.warning(f"Rejected command: {version_violation}")
        return ValidationResult.failure([version_violation])

    try:
        command = message.to_traffic_command()
    except CommandValidationError as e:
        logger.warning(f"Rejected command: {len(e.violations)} action choice violation(s)")
        return ValidationResult.failure(e.violations)
    return validator.validate(command, seen_ids, version_checked=True)
