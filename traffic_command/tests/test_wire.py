"""Tests for bridging the wire action choice into the tagged variant."""

import pytest
from conftest import header, make_command, point
from traffic_command.data import (
    AcquireGlobalPositionAction,
    FollowPathAction,
    Identifier,
    LaneChangeAction,
    TrafficActionMessage,
    TrafficCommandMessage,
    Vector3d,
)
from traffic_command.errors import (
    ActionChoiceError,
    AmbiguousActionChoice,
    CommandValidationError,
    MultipleActionsSet,
)


class TestActionChoice:
    """Exactly one of the four optional fields must be set."""

    def test_single_slot(self) -> None:
        message = TrafficActionMessage(lane_change_action=LaneChangeAction(action_header=header(1)))
        traffic_action = message.to_traffic_action()
        assert traffic_action.kind == "lane_change"
        assert traffic_action.lane_change_action == message.lane_change_action

    def test_no_slot(self) -> None:
        with pytest.raises(ActionChoiceError) as excinfo:
            TrafficActionMessage().to_traffic_action("action[3]")
        assert excinfo.value.violation == AmbiguousActionChoice("action[3]")

    def test_lane_change_and_follow_path(self) -> None:
        """Both lane_change_action and follow_path_action populated."""
        message = TrafficActionMessage(
            follow_path_action=FollowPathAction(action_header=header(1), path_point=[point(x=0.0)]),
            lane_change_action=LaneChangeAction(action_header=header(2)),
        )
        assert message.populated() == ["follow_path_action", "lane_change_action"]
        with pytest.raises(ActionChoiceError) as excinfo:
            message.to_traffic_action("action[0]")
        violation = excinfo.value.violation
        assert isinstance(violation, MultipleActionsSet)
        assert violation.path == "action[0]"
        assert violation.populated == ("follow_path_action", "lane_change_action")

    def test_from_traffic_action(self) -> None:
        action = AcquireGlobalPositionAction(action_header=header(1), position=Vector3d(x=1.0))
        command = make_command(action)
        message = TrafficActionMessage.from_traffic_action(command.action[0])
        assert message.populated() == ["acquire_global_position_action"]
        assert message.acquire_global_position_action == action


class TestCommandBridge:
    """Whole message conversion."""

    def test_round_trip(self, valid_command) -> None:
        message = TrafficCommandMessage.from_traffic_command(valid_command)
        assert message.to_traffic_command() == valid_command

    def test_collects_every_choice_violation(self) -> None:
        message = TrafficCommandMessage(
            traffic_participant_id=Identifier(value=1),
            action=[
                TrafficActionMessage(),
                TrafficActionMessage(lane_change_action=LaneChangeAction(action_header=header(1))),
                TrafficActionMessage(
                    follow_path_action=FollowPathAction(),
                    acquire_global_position_action=AcquireGlobalPositionAction(),
                ),
            ],
        )
        with pytest.raises(CommandValidationError) as excinfo:
            message.to_traffic_command()
        assert excinfo.value.violations == [
            AmbiguousActionChoice("action[0]"),
            MultipleActionsSet(
                "action[2]", populated=("follow_path_action", "acquire_global_position_action")
            ),
        ]
