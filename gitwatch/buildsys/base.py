"""Base protocol and data classes for build-system registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class DeferredTask:
    """A command the host build runs before anything that consumes ``outputs``."""

    name: str
    command: list[str]
    inputs: list[Path] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)
    comment: str = ""


@runtime_checkable
class BuildSystem(Protocol):
    """Protocol for build-system specific task fragments."""

    name: str
    fragment_suffix: str

    def render(self, task: DeferredTask) -> str:
        """Return the build-file fragment that registers ``task``."""
        ...
