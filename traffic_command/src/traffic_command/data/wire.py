"""Wire shape of traffic commands.

On the wire an action is four independent optional fields of which exactly
one is supposed to be set. Nothing in the wire format enforces that, so this
module is where a decoded message is checked and bridged into the tagged
:class:`TrafficAction` used everywhere else.
"""

from __future__ import annotations

from pydantic import Field

from traffic_command.data.actions import (
    AcquireGlobalPositionAction,
    FollowPathAction,
    FollowTrajectoryAction,
    LaneChangeAction,
)
from traffic_command.data.command import SLOT_NAMES, TrafficAction, TrafficCommand
from traffic_command.data.primitives import Identifier, InterfaceVersion, Timestamp, ValueModel
from traffic_command.errors import (
    ActionChoiceError,
    AmbiguousActionChoice,
    CommandValidationError,
    MultipleActionsSet,
    Violation,
)


class TrafficActionMessage(ValueModel):
    """Wire TrafficAction: notionally a choice, transmitted as optional fields."""

    follow_trajectory_action: FollowTrajectoryAction | None = Field(None, description="field 1")
    follow_path_action: FollowPathAction | None = Field(None, description="field 2")
    acquire_global_position_action: AcquireGlobalPositionAction | None = Field(
        None, description="field 3"
    )
    lane_change_action: LaneChangeAction | None = Field(None, description="field 4")

    def populated(self) -> list[str]:
        """Names of the action fields that are set, in wire order."""
        return [name for name in SLOT_NAMES.values() if getattr(self, name) is not None]

    def to_traffic_action(self, path: str = "action") -> TrafficAction:
        """Bridge into the tagged variant.

        Args:
            path: Path of this action, used in the violation

        Returns:
            TrafficAction: The single populated action

        Raises:
            ActionChoiceError: If zero or more than one action is set
        """
        populated = self.populated()
        if not populated:
            raise ActionChoiceError(AmbiguousActionChoice(path))
        if len(populated) > 1:
            raise ActionChoiceError(MultipleActionsSet(path, populated=tuple(populated)))
        return TrafficAction(action=getattr(self, populated[0]))

    @classmethod
    def from_traffic_action(cls, traffic_action: TrafficAction) -> TrafficActionMessage:
        return cls(**{traffic_action.slot_name: traffic_action.action})


class TrafficCommandMessage(ValueModel):
    """Wire TrafficCommand."""

    version: InterfaceVersion | None = Field(None, description="field 1")
    timestamp: Timestamp | None = Field(None, description="field 2")
    traffic_participant_id: Identifier | None = Field(None, description="field 3")
    action: tuple[TrafficActionMessage, ...] = Field((), description="field 4")

    def to_traffic_command(self) -> TrafficCommand:
        """Bridge into an (unvalidated) TrafficCommand.

        Every action is checked before raising, so the error lists all choice
        violations of the message.

        Raises:
            CommandValidationError: If any action does not set exactly one field
        """
        actions: list[TrafficAction] = []
        violations: list[Violation] = []
        for i, message in enumerate(self.action):
            try:
                actions.append(message.to_traffic_action(f"action[{i}]"))
            except ActionChoiceError as e:
                violations.append(e.violation)
        if violations:
            raise CommandValidationError(violations)
        return TrafficCommand(
            version=self.version,
            timestamp=self.timestamp,
            traffic_participant_id=self.traffic_participant_id,
            action=tuple(actions),
        )

    @classmethod
    def from_traffic_command(cls, command: TrafficCommand) -> TrafficCommandMessage:
        return cls(
            version=command.version,
            timestamp=command.timestamp,
            traffic_participant_id=command.traffic_participant_id,
            action=tuple(TrafficActionMessage.from_traffic_action(a) for a in command.action),
        )
