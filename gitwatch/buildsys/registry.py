"""Build-system registry and deferred-task registration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitwatch.buildsys.cmake import CMakeBuildSystem
from gitwatch.buildsys.make import MakeBuildSystem
from gitwatch.exceptions import ConfigurationError
from gitwatch.filesystem.state_store import write_atomic

if TYPE_CHECKING:
    from pathlib import Path

    from gitwatch.buildsys.base import BuildSystem, DeferredTask

logger = logging.getLogger(__name__)

BUILD_SYSTEMS: dict[str, type[CMakeBuildSystem] | type[MakeBuildSystem]] = {
    "cmake": CMakeBuildSystem,
    "make": MakeBuildSystem,
}

DEFAULT_BUILD_SYSTEM = "cmake"


def get_build_system(name: str) -> BuildSystem:
    """Create the adapter for the named build system.

    Raises ConfigurationError if the name is unknown.
    """
    build_cls = BUILD_SYSTEMS.get(name)
    if build_cls is None:
        msg = f"Unknown build system: {name!r}. Available: {list(BUILD_SYSTEMS)}"
        raise ConfigurationError(msg)
    return build_cls()


def list_build_systems() -> list[str]:
    """Return the list of supported build system names."""
    return list(BUILD_SYSTEMS.keys())


def register_task(build_system: BuildSystem, task: DeferredTask, fragment_path: Path) -> bool:
    """Write the fragment registering ``task``. Returns False if it was already up to date.

    An unchanged fragment is left untouched so the host build does not see a
    modified input and reconfigure.
    """
    content = build_system.render(task)
    if fragment_path.exists() and fragment_path.read_text(encoding="utf-8") == content:
        logger.debug("Build fragment %s is up to date", fragment_path)
        return False
    write_atomic(fragment_path, content)
    logger.info("Registered %s task %r in %s", build_system.name, task.name, fragment_path)
    return True
