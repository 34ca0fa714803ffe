"""Shared test fixtures for gitwatch."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import pytest

from gitwatch.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

    from gitwatch.config import WatchConfig

TEMPLATE_TEXT = (
    "#define GIT_RETRIEVED_STATE @GIT_RETRIEVED_STATE@\n"
    '#define GIT_HEAD_SHA1 "@GIT_HEAD_SHA1@"\n'
    "#define GIT_IS_DIRTY @GIT_IS_DIRTY@\n"
)


def git(repo: Path, *args: str) -> str:
    """Run a git command in ``repo`` and return its stripped stdout."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.email=gitwatch@localhost",
            "-c",
            "user.name=gitwatch",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A git repository with a single committed file."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    (repo / "README.md").write_text("hello\n")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "Initial commit")
    return repo


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    path = tmp_path / "git.h.in"
    path.write_text(TEMPLATE_TEXT)
    return path


@pytest.fixture
def watch_config(tmp_path: Path, git_repo: Path, template_file: Path) -> WatchConfig:
    """Resolved config whose build outputs live outside the watched repository."""
    return Settings(
        _env_file=None,
        template_path=template_file,
        artifact_path=tmp_path / "build" / "git.h",
        working_dir=git_repo,
        build_dir=tmp_path / "build",
    ).resolve()
