"""Two-phase entry points: register the build-time check, or run it.

``setup`` runs once when the host project is configured and only registers a
task with the build system. That task re-invokes gitwatch in ``check`` mode on
every build, which compares the repository state against the state file and
regenerates the artifact when they differ. The two phases share nothing but
the state file and the configuration passed on the command line.
"""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitwatch.buildsys.base import DeferredTask
from gitwatch.buildsys.registry import register_task
from gitwatch.exceptions import ConfigurationError
from gitwatch.filesystem.state_store import load_state, save_state
from gitwatch.services.change_service import has_changed
from gitwatch.services.git_service import GitService
from gitwatch.services.render_service import regenerate
from gitwatch.services.snapshot_service import extract

if TYPE_CHECKING:
    from pathlib import Path

    from gitwatch.buildsys.base import BuildSystem
    from gitwatch.config import WatchConfig
    from gitwatch.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

CHECK_TASK_NAME = "check_git"
CHECK_COMMENT = "Checking the git repository for changes..."


class Mode(enum.Enum):
    SETUP = "setup"
    CHECK = "check"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check run."""

    changed: bool
    snapshot: Snapshot


def check_command(config: WatchConfig) -> list[str]:
    """Return the argv that re-runs this program in check mode with ``config``.

    Global options come before the subcommand; argparse only accepts them there.
    """
    argv = [
        sys.executable,
        "-m",
        "cli.gitwatch",
        "--template",
        str(config.template_path),
        "--artifact",
        str(config.artifact_path),
        "--state-file",
        str(config.state_file),
        "--working-dir",
        str(config.working_dir),
        "--git",
        config.git_executable,
        "--build-dir",
        str(config.build_dir),
    ]
    if config.debug:
        argv.append("--verbose")
    argv.append(Mode.CHECK.value)
    return argv


def default_fragment_path(config: WatchConfig, build_system: BuildSystem) -> Path:
    return config.build_dir / f"{CHECK_TASK_NAME}{build_system.fragment_suffix}"


def run_setup(
    config: WatchConfig,
    build_system: BuildSystem,
    fragment_path: Path | None = None,
) -> Path:
    """Register the deferred check task. Returns the fragment path.

    Does not query git or touch the state file or artifact.
    """
    task = DeferredTask(
        name=CHECK_TASK_NAME,
        command=check_command(config),
        inputs=[config.template_path],
        outputs=[config.artifact_path],
        comment=CHECK_COMMENT,
    )
    path = fragment_path or default_fragment_path(config, build_system)
    register_task(build_system, task, path)
    return path


def run_check(config: WatchConfig) -> CheckResult:
    """Regenerate the artifact if the repository state differs from the saved one.

    The state file is only updated after the artifact was written, so a failed
    render is retried on the next build.
    """
    git = GitService(config.working_dir, config.git_executable)
    snapshot = extract(git)
    persisted = load_state(config.state_file)
    if not has_changed(snapshot, persisted):
        logger.debug("Git state unchanged: %s", snapshot.serialize())
        return CheckResult(changed=False, snapshot=snapshot)

    logger.info("Git state changed: %s", snapshot.serialize())
    regenerate(config.template_path, config.artifact_path, snapshot)
    save_state(config.state_file, snapshot)
    return CheckResult(changed=True, snapshot=snapshot)


def dispatch(
    mode: Mode,
    config: WatchConfig,
    build_system: BuildSystem | None = None,
    fragment_path: Path | None = None,
) -> CheckResult | Path:
    """Run the phase selected by ``mode``."""
    if mode is Mode.SETUP:
        if build_system is None:
            msg = "A build system is required for setup"
            raise ConfigurationError(msg)
        return run_setup(config, build_system, fragment_path)
    return run_check(config)
