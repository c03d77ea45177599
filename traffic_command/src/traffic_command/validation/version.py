"""Interface version compatibility check."""

from __future__ import annotations

from dataclasses import dataclass

from traffic_command.config import VersionRange
from traffic_command.data.primitives import InterfaceVersion


@dataclass(frozen=True)
class Compatible:
    """The sent version can be processed."""


@dataclass(frozen=True)
class Incompatible:
    """The sent version cannot be processed.

    Attributes:
        reason: Why the version was rejected
    """

    reason: str


VersionCheck = Compatible | Incompatible


def check_version(
    sent: InterfaceVersion | None,
    supported: VersionRange,
    require_version: bool = True,
) -> VersionCheck:
    """Classify a sender interface version against the supported range.

    Runs before any field validation: field semantics of an unsupported
    version cannot be trusted.

    Args:
        sent: Version reported by the sender, None if the message carried none
        supported: Versions the receiver understands
        require_version: If False, a message without a version is accepted

    Returns:
        VersionCheck: Compatible or Incompatible(reason)
    """
    if sent is None:
        if require_version:
            return Incompatible("interface version is not set")
        return Compatible()

    if not supported.minimum.version_major <= sent.version_major <= supported.maximum.version_major:
        return Incompatible(
            f"major version {sent.version_major} is not supported (supported {supported})"
        )
    if sent not in supported:
        return Incompatible(f"version {sent} is outside supported range {supported}")
    return Compatible()
