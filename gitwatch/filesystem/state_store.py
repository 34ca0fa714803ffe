"""Persisted git state: whole-file reads and atomic whole-file writes."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitwatch.models.snapshot import Snapshot


def _target_mode(path: Path) -> int:
    """Mode for a rewritten file: the existing file's mode, else 0666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step.

    The content goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new file.
    The result keeps the target's permissions, or follows the umask for a new
    file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def load_state(path: Path) -> str | None:
    """Return the persisted state, or None if no state has been saved yet.

    Undecodable bytes are replaced rather than rejected; such a state never
    matches a fresh snapshot and simply counts as a change.
    """
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def save_state(path: Path, snapshot: Snapshot) -> None:
    """Overwrite the state file with the snapshot's canonical encoding."""
    write_atomic(path, snapshot.serialize())
