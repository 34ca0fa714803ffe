"""Change detection between the current snapshot and the persisted state."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitwatch.models.snapshot import Snapshot


def has_changed(current: Snapshot, persisted: str | None) -> bool:
    """Return True when no state was persisted or its encoding differs from ``current``.

    The comparison is an exact string match on the canonical encoding, so it
    does not depend on which properties are tracked.
    """
    if persisted is None:
        return True
    return current.serialize() != persisted
