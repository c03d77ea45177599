"""Traffic command messages and their semantic validation."""

from traffic_command.codec import Codec, JsonCodec, decode_and_validate, validate_message
from traffic_command.config import (
    ActionIdScope,
    ValidatorConfig,
    VersionRange,
    load_validator_config,
)
from traffic_command.data import (
    AcquireGlobalPositionAction,
    ActionHeader,
    DynamicsShape,
    FollowPathAction,
    FollowTrajectoryAction,
    Identifier,
    InterfaceVersion,
    LaneChangeAction,
    Orientation3d,
    PathFollowingMode,
    StatePoint,
    Timestamp,
    TrafficAction,
    TrafficActionMessage,
    TrafficCommand,
    TrafficCommandBuilder,
    TrafficCommandMessage,
    TrajectoryFollowingMode,
    Vector3d,
)
from traffic_command.errors import CodecError, CommandValidationError, Violation
from traffic_command.validation import (
    ActionIdRegistry,
    CommandValidator,
    ValidatedCommand,
    ValidationResult,
    validate,
)

__all__ = [
    "AcquireGlobalPositionAction",
    "ActionHeader",
    "ActionIdRegistry",
    "ActionIdScope",
    "Codec",
    "CodecError",
    "CommandValidationError",
    "CommandValidator",
    "DynamicsShape",
    "FollowPathAction",
    "FollowTrajectoryAction",
    "Identifier",
    "InterfaceVersion",
    "JsonCodec",
    "LaneChangeAction",
    "Orientation3d",
    "PathFollowingMode",
    "StatePoint",
    "Timestamp",
    "TrafficAction",
    "TrafficActionMessage",
    "TrafficCommand",
    "TrafficCommandBuilder",
    "TrafficCommandMessage",
    "TrajectoryFollowingMode",
    "ValidatedCommand",
    "ValidationResult",
    "ValidatorConfig",
    "Vector3d",
    "VersionRange",
    "Violation",
    "decode_and_validate",
    "load_validator_config",
    "validate",
    "validate_message",
]
