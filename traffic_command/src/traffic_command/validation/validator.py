"""Semantic validation of traffic commands.

The validator is the only place that knows which fields each action kind
requires. It walks the command depth-first and collects every violation, so a
caller gets the complete diagnostic in one pass. A command with any violation
produces no :class:`ValidatedCommand`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from traffic_command.config import ActionIdScope, ValidatorConfig
from traffic_command.data.actions import (
    AcquireGlobalPositionAction,
    FollowPathAction,
    FollowTrajectoryAction,
    LaneChangeAction,
)
from traffic_command.data.command import TrafficAction, TrafficCommand
from traffic_command.data.common import StatePoint
from traffic_command.data.primitives import Identifier, InterfaceVersion
from traffic_command.errors import (
    CommandValidationError,
    DuplicateActionId,
    InvalidValue,
    MissingRequiredField,
    VersionIncompatible,
    Violation,
)
from traffic_command.validation.registry import ActionIdRegistry
from traffic_command.validation.version import Incompatible, check_version

logger = logging.getLogger(__name__)

_VALIDATOR_TOKEN = object()


@dataclass(frozen=True)
class ValidatedCommand:
    """A TrafficCommand that passed validation.

    Only :class:`CommandValidator` creates instances. Consumers may rely on
    every rule having been checked. Direct construction and
    ``dataclasses.replace`` both raise TypeError.
    """

    command: TrafficCommand
    _token: object = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # _token has no default, so it is unset on every __init__ path
        if getattr(self, "_token", None) is not _VALIDATOR_TOKEN:
            raise TypeError("ValidatedCommand can only be created by CommandValidator")

    @classmethod
    def _issue(cls, command: TrafficCommand) -> ValidatedCommand:
        validated = cls.__new__(cls)
        object.__setattr__(validated, "command", command)
        object.__setattr__(validated, "_token", _VALIDATOR_TOKEN)
        return validated



@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation.

    Attributes:
        validated: Validated command, None if there were violations
        violations: All violations found, in tree order
    """

    validated: ValidatedCommand | None
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return self.validated is not None

    def unwrap(self) -> ValidatedCommand:
        """Return the validated command.

        Raises:
            CommandValidationError: If validation failed
        """
        if self.validated is None:
            raise CommandValidationError(self.violations)
        return self.validated

    @classmethod
    def failure(cls, violations: list[Violation] | tuple[Violation, ...]) -> ValidationResult:
        return cls(validated=None, violations=tuple(violations))


class CommandValidator:
    """Stateless traffic command validator.

    Session wide action id uniqueness is checked against an
    :class:`ActionIdRegistry` the caller passes per call.
    """

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        """Initialize validator.

        Args:
            config: Validator configuration (defaults if omitted)
        """
        self.config = config or ValidatorConfig()

    def validate(
        self,
        command: TrafficCommand,
        seen_ids: ActionIdRegistry | None = None,
        *,
        version_checked: bool = False,
    ) -> ValidationResult:
        """Validate a command.

        Args:
            command: Candidate command
            seen_ids: Registry of ids already issued; required in session scope
            version_checked: Skip the version check, the caller already ran
                :meth:`check_version` on this command's version

        Returns:
            ValidationResult: Validated command or the complete violation list

        Raises:
            ValueError: If session scope is configured but no registry is given
        """
        session = self.config.action_id_scope == ActionIdScope.SESSION
        if session and seen_ids is None:
            raise ValueError("Session scope validation requires an ActionIdRegistry")

        if not version_checked:
            version_violation = self.check_version(command.version)
            if version_violation is not None:
                return self._reject(command, [version_violation])

        violations = list(self._check_command(command))
        id_paths = self._first_id_paths(command)
        participant_id = command.traffic_participant_id

        if session and participant_id is not None:
            if violations:
                conflicts = seen_ids.find_seen(participant_id, id_paths)
            else:
                conflicts = seen_ids.claim(participant_id, id_paths)
            violations.extend(
                DuplicateActionId(
                    path=id_paths[action_id],
                    action_id=action_id,
                    message=f"action id {action_id} already issued to participant {participant_id}",
                )
                for action_id in conflicts
            )

        if violations:
            return self._reject(command, violations)

        logger.debug(
            f"Validated command for participant {participant_id} with {len(command)} action(s)"
        )
        return ValidationResult(validated=ValidatedCommand._issue(command))

    def check_version(self, version: InterfaceVersion | None) -> VersionIncompatible | None:
        """Run the version check alone.

        Args:
            version: Interface version reported by the sender

        Returns:
            VersionIncompatible | None: Violation if the version is not supported
        """
        supported = self.config.supported_versions
        result = check_version(version, supported, self.config.require_version)
        if isinstance(result, Incompatible):
            return VersionIncompatible(
                path="version",
                message=result.reason,
                sent=version,
                supported=(supported.minimum, supported.maximum),
            )
        return None

    def _reject(self, command: TrafficCommand, violations: list[Violation]) -> ValidationResult:
        logger.warning(
            f"Rejected command for participant {command.traffic_participant_id}: "
            f"{len(violations)} violation(s), first: {violations[0]}"
        )
        return ValidationResult.failure(violations)

    @staticmethod
    def _first_id_paths(command: TrafficCommand) -> dict[Identifier, str]:
        """Map each action id to the path where it first occurs."""
        paths: dict[Identifier, str] = {}
        for i, traffic_action in enumerate(command.action):
            action_id = traffic_action.action_header.action_id
            if action_id is not None and action_id not in paths:
                paths[action_id] = _id_path(i, traffic_action)
        return paths

    def _check_command(self, command: TrafficCommand) -> Iterator[Violation]:
        if command.timestamp is None:
            yield MissingRequiredField("timestamp")
        if command.traffic_participant_id is None:
            yield MissingRequiredField("traffic_participant_id")

        seen: set[Identifier] = set()
        for i, traffic_action in enumerate(command.action):
            base = f"action[{i}].{traffic_action.slot_name}"
            action_id = traffic_action.action_header.action_id
            if action_id is None:
                yield MissingRequiredField(_id_path(i, traffic_action))
            elif action_id in seen:
                yield DuplicateActionId(path=_id_path(i, traffic_action), action_id=action_id)
            else:
                seen.add(action_id)
            yield from self._check_action(traffic_action, base)

    def _check_action(self, traffic_action: TrafficAction, base: str) -> Iterator[Violation]:
        action = traffic_action.action
        if isinstance(action, FollowTrajectoryAction):
            yield from _check_points(
                action.trajectory_point,
                f"{base}.trajectory_point",
                require_timestamp=True,
                require_orientation=action.constrain_orientation,
            )
        elif isinstance(action, FollowPathAction):
            # timestamps on path points are ignored, never required
            yield from _check_points(
                action.path_point,
                f"{base}.path_point",
                require_timestamp=False,
                require_orientation=action.constrain_orientation,
            )
        elif isinstance(action, AcquireGlobalPositionAction):
            if action.position is None:
                yield MissingRequiredField(f"{base}.position")
        elif isinstance(action, LaneChangeAction):
            for name in ("duration", "distance"):
                value = getattr(action, name)
                if value is not None and value < 0:
                    yield InvalidValue(
                        path=f"{base}.{name}", reason=f"{name} must be non-negative, got {value}"
                    )


def _id_path(index: int, traffic_action: TrafficAction) -> str:
    return f"action[{index}].{traffic_action.slot_name}.action_header.action_id"


def _check_points(
    points: tuple[StatePoint, ...],
    path: str,
    require_timestamp: bool,
    require_orientation: bool,
) -> Iterator[Violation]:
    if not points:
        yield MissingRequiredField(path, "at least one point is required")
        return
    for j, point in enumerate(points):
        if require_timestamp and point.timestamp is None:
            yield MissingRequiredField(f"{path}[{j}].timestamp")
        if point.position is None:
            yield MissingRequiredField(f"{path}[{j}].position")
        if require_orientation and point.orientation is None:
            yield MissingRequiredField(
                f"{path}[{j}].orientation",
                "orientation is required when constrain_orientation is set",
            )


def validate(
    command: TrafficCommand,
    config: ValidatorConfig | None = None,
    seen_ids: ActionIdRegistry | None = None,
) -> ValidationResult:
    """Validate a command with a one-off validator.

    Args:
        command: Candidate command
        config: Validator configuration (defaults if omitted)
        seen_ids: Registry of ids already issued; required in session scope

    Returns:
        ValidationResult: Validated command or the complete violation list
    """
    return CommandValidator(config).validate(command, seen_ids)
