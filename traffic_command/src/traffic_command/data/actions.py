"""Atomic traffic action variants.

Construction only checks per-field well-formedness. Which fields are required
for each action kind is decided by :mod:`traffic_command.validation.validator`,
so the same types can carry a malformed decoded message up to the validator.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Literal

import numpy as np
from pydantic import Field

from traffic_command.data.common import ActionHeader, StatePoint
from traffic_command.data.primitives import Orientation3d, ValueModel, Vector3d

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class TrajectoryFollowingMode(IntEnum):
    """Following mode of a FollowTrajectoryAction.

    The integer values are part of the wire format.
    """

    POSITION = 0  # follow explicitly, ignoring internal constraints
    FOLLOW = 1  # treat as target, keeping internal constraints


class PathFollowingMode(IntEnum):
    """Following mode of a FollowPathAction.

    The integer values are part of the wire format.
    """

    POSITION = 0
    FOLLOW = 1


class DynamicsShape(IntEnum):
    """Shape of a lane change.

    The integer values are part of the wire format.
    """

    UNSPECIFIED = 0
    LINEAR = 1
    CUBIC = 2
    SINUSOIDAL = 3
    STEP = 4


def _positions(points: tuple[StatePoint, ...]) -> np.ndarray:
    if any(p.position is None for p in points):
        raise ValueError("All points must have a position")
    return np.array([p.position.to_array() for p in points]).reshape(-1, 3)


class FollowTrajectoryAction(ValueModel):
    """Follow a trajectory specified as a function of time."""

    kind: Literal["follow_trajectory"] = Field("follow_trajectory", exclude=True)
    action_header: ActionHeader = Field(default_factory=ActionHeader)
    trajectory_point: tuple[StatePoint, ...] = ()
    constrain_orientation: bool = False
    following_mode: TrajectoryFollowingMode = TrajectoryFollowingMode.POSITION

    def __len__(self) -> int:
        """軌道点の数を返す."""
        return len(self.trajectory_point)

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """numpy配列に変換 (time [s], position (N, 3) [m])."""
        if any(p.timestamp is None for p in self.trajectory_point):
            raise ValueError("All trajectory points must have a timestamp")
        t = np.array([p.timestamp.to_seconds() for p in self.trajectory_point])
        return t, _positions(self.trajectory_point)


class FollowPathAction(ValueModel):
    """Follow a path specified independently of time.

    Timestamps on path points are ignored.
    """

    kind: Literal["follow_path"] = Field("follow_path", exclude=True)
    action_header: ActionHeader = Field(default_factory=ActionHeader)
    path_point: tuple[StatePoint, ...] = ()
    constrain_orientation: bool = False
    following_mode: PathFollowingMode = PathFollowingMode.POSITION

    def __len__(self) -> int:
        """経路点の数を返す."""
        return len(self.path_point)

    def to_array(self) -> np.ndarray:
        """numpy配列に変換 (position (N, 3) [m])."""
        return _positions(self.path_point)


class AcquireGlobalPositionAction(ValueModel):
    """Route to a global position.

    The route itself is chosen by the traffic participant model. Without an
    orientation the end orientation is up to the model as well.
    """

    kind: Literal["acquire_global_position"] = Field("acquire_global_position", exclude=True)
    action_header: ActionHeader = Field(default_factory=ActionHeader)
    position: Vector3d | None = None
    orientation: Orientation3d | None = None


class LaneChangeAction(ValueModel):
    """Change lane relative to the current lane.

    ``relative_target_lane``: +1 is one lane to the right, -1 one to the left.
    Omitted shape, duration and distance are left to the participant model.
    """

    kind: Literal["lane_change"] = Field("lane_change", exclude=True)
    action_header: ActionHeader = Field(default_factory=ActionHeader)
    relative_target_lane: int = Field(0, ge=INT32_MIN, le=INT32_MAX)
    dynamics_shape: DynamicsShape | None = None
    duration: float | None = None  # [s]
    distance: float | None = None  # [m]


ActionVariant = (
    FollowTrajectoryAction | FollowPathAction | AcquireGlobalPositionAction | LaneChangeAction
)
