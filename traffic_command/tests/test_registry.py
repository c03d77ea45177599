"""Tests for session wide action id uniqueness."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from conftest import header, make_command
from traffic_command.config import ActionIdScope, ValidatorConfig
from traffic_command.data import AcquireGlobalPositionAction, Identifier, LaneChangeAction, Vector3d
from traffic_command.errors import DuplicateActionId, InvalidValue
from traffic_command.validation import ActionIdRegistry, CommandValidator

SESSION = ValidatorConfig(action_id_scope=ActionIdScope.SESSION)


def ids(*values: int) -> list[Identifier]:
    return [Identifier(value=v) for v in values]


class TestActionIdRegistry:
    """Registry behaviour."""

    def test_claim(self) -> None:
        registry = ActionIdRegistry()
        participant = Identifier(value=1)
        assert registry.claim(participant, ids(1, 2)) == []
        assert (participant, Identifier(value=1)) in registry
        assert len(registry) == 2

    def test_claim_is_all_or_nothing(self) -> None:
        registry = ActionIdRegistry()
        participant = Identifier(value=1)
        registry.claim(participant, ids(1))
        assert registry.claim(participant, ids(2, 1)) == ids(1)
        assert (participant, Identifier(value=2)) not in registry

    def test_participants_are_independent(self) -> None:
        registry = ActionIdRegistry()
        registry.claim(Identifier(value=1), ids(1))
        assert registry.claim(Identifier(value=2), ids(1)) == []

    def test_find_seen_does_not_claim(self) -> None:
        registry = ActionIdRegistry()
        participant = Identifier(value=1)
        registry.claim(participant, ids(1))
        assert registry.find_seen(participant, ids(1, 2)) == ids(1)
        assert len(registry) == 1

    def test_forget(self) -> None:
        registry = ActionIdRegistry()
        participant = Identifier(value=1)
        registry.claim(participant, ids(1))
        registry.forget(participant)
        assert registry.claim(participant, ids(1)) == []

    def test_concurrent_claims(self) -> None:
        """Exactly one of many threads claiming the same id succeeds."""
        registry = ActionIdRegistry()
        participant = Identifier(value=1)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: registry.claim(participant, ids(42)), range(64)))
        assert sum(1 for conflicts in results if not conflicts) == 1


class TestSessionScope:
    """Validator in session scope."""

    def test_requires_registry(self, valid_command) -> None:
        with pytest.raises(ValueError):
            CommandValidator(SESSION).validate(valid_command)

    def test_reused_id_across_commands(self) -> None:
        validator = CommandValidator(SESSION)
        registry = ActionIdRegistry()
        first = make_command(LaneChangeAction(action_header=header(1), relative_target_lane=1))
        second = make_command(
            AcquireGlobalPositionAction(action_header=header(1), position=Vector3d())
        )

        assert validator.validate(first, registry).ok
        result = validator.validate(second, registry)
        assert result.violations == (
            DuplicateActionId(
                "action[0].acquire_global_position_action.action_header.action_id",
                action_id=Identifier(value=1),
            ),
        )

    def test_other_participant_may_reuse_id(self) -> None:
        validator = CommandValidator(SESSION)
        registry = ActionIdRegistry()
        action = LaneChangeAction(action_header=header(1))
        assert validator.validate(make_command(action, participant_id=1), registry).ok
        assert validator.validate(make_command(action, participant_id=2), registry).ok

    def test_rejected_command_claims_nothing(self) -> None:
        """A command with any violation does not consume its ids."""
        validator = CommandValidator(SESSION)
        registry = ActionIdRegistry()
        bad = make_command(LaneChangeAction(action_header=header(1), duration=-1.0))
        result = validator.validate(bad, registry)
        assert [type(v) for v in result.violations] == [InvalidValue]
        assert len(registry) == 0

        good = make_command(LaneChangeAction(action_header=header(1), duration=1.0))
        assert validator.validate(good, registry).ok

    def test_message_scope_ignores_registry(self) -> None:
        validator = CommandValidator()
        registry = ActionIdRegistry()
        command = make_command(LaneChangeAction(action_header=header(1)))
        assert validator.validate(command, registry).ok
        assert validator.validate(command, registry).ok
        assert len(registry) == 0

    def test_concurrent_validation(self) -> None:
        """Parallel commands reusing one id: exactly one is accepted."""
        validator = CommandValidator(SESSION)
        registry = ActionIdRegistry()
        commands = [
            make_command(LaneChangeAction(action_header=header(9), relative_target_lane=i))
            for i in range(32)
        ]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda c: validator.validate(c, registry), commands))
        assert sum(1 for r in results if r.ok) == 1
