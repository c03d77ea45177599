"""Composite values used by several action kinds."""

from __future__ import annotations

from traffic_command.data.primitives import (
    Identifier,
    Orientation3d,
    Timestamp,
    ValueModel,
    Vector3d,
)


class StatePoint(ValueModel):
    """A single trajectory or path sample.

    No field is mandatory by itself. The containing action decides which
    fields have to be set.
    """

    timestamp: Timestamp | None = None
    position: Vector3d | None = None
    orientation: Orientation3d | None = None


class ActionHeader(ValueModel):
    """Identity of an action.

    ``action_id`` is mandatory and must be unique within all traffic command
    messages exchanged with one traffic participant. It is typed optional so
    that a decoded message without it can still be represented and reported.
    """

    action_id: Identifier | None = None
