"""Traffic command data structures."""

from traffic_command.data.primitives import (
    Identifier,
    InterfaceVersion,
    Orientation3d,
    Timestamp,
    Vector3d,
)
from traffic_command.data.common import ActionHeader, StatePoint
from traffic_command.data.actions import (
    AcquireGlobalPositionAction,
    DynamicsShape,
    FollowPathAction,
    FollowTrajectoryAction,
    LaneChangeAction,
    PathFollowingMode,
    TrajectoryFollowingMode,
)
from traffic_command.data.command import TrafficAction, TrafficCommand, TrafficCommandBuilder
from traffic_command.data.wire import TrafficActionMessage, TrafficCommandMessage

__all__ = [
    "AcquireGlobalPositionAction",
    "ActionHeader",
    "DynamicsShape",
    "FollowPathAction",
    "FollowTrajectoryAction",
    "Identifier",
    "InterfaceVersion",
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
    "Vector3d",
]
