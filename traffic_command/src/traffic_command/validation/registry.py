"""Session-wide record of issued action ids."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable

from traffic_command.data.primitives import Identifier

logger = logging.getLogger(__name__)


class ActionIdRegistry:
    """Action ids already issued, per traffic participant.

    Shared between validator calls that may run on different threads, so every
    access goes through one lock. ``claim`` is an atomic check-and-insert.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._seen: dict[Identifier, set[Identifier]] = defaultdict(set)

    def find_seen(
        self, participant_id: Identifier, action_ids: Iterable[Identifier]
    ) -> list[Identifier]:
        """Return the given ids that were already claimed for the participant.

        Args:
            participant_id: Traffic participant the ids belong to
            action_ids: Ids to look up

        Returns:
            list[Identifier]: Already claimed ids, in input order
        """
        with self._lock:
            seen = self._seen.get(participant_id, set())
            return [action_id for action_id in action_ids if action_id in seen]

    def claim(
        self, participant_id: Identifier, action_ids: Iterable[Identifier]
    ) -> list[Identifier]:
        """Claim ids for the participant if none of them was claimed before.

        Nothing is recorded when any id is already taken.

        Args:
            participant_id: Traffic participant the ids belong to
            action_ids: Ids to claim

        Returns:
            list[Identifier]: Conflicting ids; empty if the claim succeeded
        """
        ids = list(action_ids)
        with self._lock:
            seen = self._seen[participant_id]
            conflicts = [action_id for action_id in ids if action_id in seen]
            if conflicts:
                return conflicts
            seen.update(ids)
        logger.debug(f"Claimed {len(ids)} action id(s) for participant {participant_id}")
        return []

    def forget(self, participant_id: Identifier) -> None:
        """Drop all ids of a participant (e.g. when its session ends)."""
        with self._lock:
            self._seen.pop(participant_id, None)

    def __contains__(self, item: tuple[Identifier, Identifier]) -> bool:
        participant_id, action_id = item
        with self._lock:
            return action_id in self._seen.get(participant_id, set())

    def __len__(self) -> int:
        with self._lock:
            return sum(len(ids) for ids in self._seen.values())
