"""Snapshot extraction: query every tracked git property once, in a fixed order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitwatch.exceptions import GitQueryError
from gitwatch.models.snapshot import NOTFOUND_SENTINEL, Snapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from gitwatch.models.snapshot import PropertyValue
    from gitwatch.services.git_service import GitService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitProperty:
    """A tracked repository property.

    ``query`` may raise GitQueryError; ``fallback`` is recorded instead when it does.
    """

    name: str
    query: Callable[[GitService], PropertyValue]
    fallback: PropertyValue


def _head_sha1(git: GitService) -> PropertyValue:
    return git.head_commit()


def _is_dirty(git: GitService) -> PropertyValue:
    return bool(git.status_porcelain())


# Order is part of the persisted encoding: append new properties at the end.
PROPERTIES: tuple[GitProperty, ...] = (
    GitProperty("GIT_HEAD_SHA1", _head_sha1, NOTFOUND_SENTINEL),
    GitProperty("GIT_IS_DIRTY", _is_dirty, False),
)


def property_names() -> list[str]:
    """Return the tracked property names in snapshot order."""
    return [prop.name for prop in PROPERTIES]


def extract(git: GitService) -> Snapshot:
    """Capture the current repository state.

    Never raises for git failures: each failing query contributes its fallback
    value and clears the success flag.
    """
    success = True
    values: list[tuple[str, PropertyValue]] = []
    for prop in PROPERTIES:
        try:
            value = prop.query(git)
        except GitQueryError as exc:
            logger.warning("Could not read %s from %s: %s", prop.name, git.working_dir, exc)
            success = False
            value = prop.fallback
        values.append((prop.name, value))
    return Snapshot(success=success, properties=tuple(values))
