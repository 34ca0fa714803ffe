"""Git service: read-only repository queries via the git CLI."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from gitwatch.exceptions import GitQueryError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class GitService:
    """Wraps the git queries gitwatch needs, run from a fixed working directory."""

    def __init__(self, working_dir: Path, git_executable: str = "git") -> None:
        self.working_dir = working_dir
        self.git_executable = git_executable

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in the working directory.

        Raises GitQueryError if git cannot be started or exits non-zero.
        """
        cmd = [self.git_executable, *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.working_dir,
                check=False,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            msg = f"Could not run {self.git_executable!r} in {self.working_dir}: {exc}"
            raise GitQueryError(msg) from exc
        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else "no stderr"
            msg = f"git {' '.join(args)} failed (exit {result.returncode}): {stderr}"
            raise GitQueryError(msg)
        return result

    def head_commit(self) -> str:
        """Return the full hash of HEAD."""
        return self._run("rev-parse", "--verify", "HEAD").stdout.strip()

    def status_porcelain(self) -> list[str]:
        """Return the lines of ``git status --porcelain``; empty when the tree is clean."""
        output = self._run("status", "--porcelain").stdout
        return [line for line in output.splitlines() if line.strip()]
