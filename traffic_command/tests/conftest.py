"""Shared fixtures for traffic command tests."""

import pytest
from traffic_command.data import (
    ActionHeader,
    FollowTrajectoryAction,
    Identifier,
    InterfaceVersion,
    Orientation3d,
    StatePoint,
    Timestamp,
    TrafficCommand,
    TrafficCommandBuilder,
    Vector3d,
)


def header(action_id: int | str) -> ActionHeader:
    """Action header with the given id."""
    return ActionHeader(action_id=Identifier(value=action_id))


def point(t: float | None = None, x: float | None = None, yaw: float | None = None) -> StatePoint:
    """StatePoint with optional time, x position and yaw."""
    return StatePoint(
        timestamp=Timestamp.from_seconds(t) if t is not None else None,
        position=Vector3d(x=x, y=0.0, z=0.0) if x is not None else None,
        orientation=Orientation3d(yaw=yaw) if yaw is not None else None,
    )


def make_command(*actions, participant_id: int = 7) -> TrafficCommand:
    """Command with version 3.7.0 and timestamp 1.5 s."""
    builder = TrafficCommandBuilder(
        traffic_participant_id=participant_id,
        timestamp=Timestamp(seconds=1, nanos=500_000_000),
        version=InterfaceVersion(version_major=3, version_minor=7),
    )
    for action in actions:
        builder.add(action)
    return builder.build()


@pytest.fixture
def trajectory_action() -> FollowTrajectoryAction:
    """Two timed points without orientation."""
    return FollowTrajectoryAction(
        action_header=header(1),
        trajectory_point=[point(t=0.0, x=0.0), point(t=1.0, x=5.0)],
        constrain_orientation=False,
    )


@pytest.fixture
def valid_command(trajectory_action: FollowTrajectoryAction) -> TrafficCommand:
    """Command holding the trajectory action."""
    return make_command(trajectory_action)
