"""Traffic action choice and the top level traffic command."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import Field

from traffic_command.data.actions import (
    AcquireGlobalPositionAction,
    ActionVariant,
    FollowPathAction,
    FollowTrajectoryAction,
    LaneChangeAction,
)
from traffic_command.data.common import ActionHeader
from traffic_command.data.primitives import Identifier, InterfaceVersion, Timestamp, ValueModel

ActionKind = Literal["follow_trajectory", "follow_path", "acquire_global_position", "lane_change"]

# Wire slot name of each action kind, in wire field order.
SLOT_NAMES: dict[str, str] = {
    "follow_trajectory": "follow_trajectory_action",
    "follow_path": "follow_path_action",
    "acquire_global_position": "acquire_global_position_action",
    "lane_change": "lane_change_action",
}


class TrafficAction(ValueModel):
    """Exactly one atomic traffic action."""

    action: Annotated[ActionVariant, Field(discriminator="kind")]

    @property
    def kind(self) -> ActionKind:
        return self.action.kind

    @property
    def slot_name(self) -> str:
        """Wire field name of the populated action."""
        return SLOT_NAMES[self.kind]

    @property
    def action_header(self) -> ActionHeader:
        return self.action.action_header

    @property
    def follow_trajectory_action(self) -> FollowTrajectoryAction | None:
        return self.action if isinstance(self.action, FollowTrajectoryAction) else None

    @property
    def follow_path_action(self) -> FollowPathAction | None:
        return self.action if isinstance(self.action, FollowPathAction) else None

    @property
    def acquire_global_position_action(self) -> AcquireGlobalPositionAction | None:
        return self.action if isinstance(self.action, AcquireGlobalPositionAction) else None

    @property
    def lane_change_action(self) -> LaneChangeAction | None:
        return self.action if isinstance(self.action, LaneChangeAction) else None


class TrafficCommand(ValueModel):
    """Control command from the scenario engine to one traffic participant.

    All actions of one command are executed in parallel.
    """

    version: InterfaceVersion | None = None
    timestamp: Timestamp | None = None
    traffic_participant_id: Identifier | None = None
    action: tuple[TrafficAction, ...] = ()

    def __len__(self) -> int:
        return len(self.action)

    def action_ids(self) -> Iterator[Identifier]:
        """Iterate over the action ids that are set, in action order."""
        for traffic_action in self.action:
            action_id = traffic_action.action_header.action_id
            if action_id is not None:
                yield action_id


class TrafficCommandBuilder:
    """Mutable builder for :class:`TrafficCommand`."""

    def __init__(
        self,
        traffic_participant_id: Identifier | int | str | None = None,
        timestamp: Timestamp | None = None,
        version: InterfaceVersion | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            traffic_participant_id: Receiving traffic participant
            timestamp: Simulation time of the command
            version: Interface version of the sender
        """
        if isinstance(traffic_participant_id, int | str):
            traffic_participant_id = Identifier(value=traffic_participant_id)
        self.traffic_participant_id = traffic_participant_id
        self.timestamp = timestamp
        self.version = version
        self.actions: list[TrafficAction] = []

    def add(self, action: ActionVariant | TrafficAction) -> TrafficCommandBuilder:
        """Append an action.

        Args:
            action: Action variant or an already wrapped TrafficAction

        Returns:
            TrafficCommandBuilder: self, for chaining
        """
        if not isinstance(action, TrafficAction):
            action = TrafficAction(action=action)
        self.actions.append(action)
        return self

    def build(self) -> TrafficCommand:
        """Freeze the current state into an (unvalidated) TrafficCommand."""
        return TrafficCommand(
            version=self.version,
            timestamp=self.timestamp,
            traffic_participant_id=self.traffic_participant_id,
            action=tuple(self.actions),
        )
