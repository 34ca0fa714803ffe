"""Exception types raised by gitwatch.

Convention:
- ``ConfigurationError`` — a required setting is missing or invalid. Raised
  before any git query or file I/O so the invoking build fails immediately.
- ``GitQueryError`` — a single git query failed. The snapshot extractor
  absorbs it and records an "unknown" state; it never reaches the CLI.
- ``TemplateError`` / ``StateFileError`` — fatal for a ``check`` run. The CLI
  reports the message and exits non-zero.
- ``OSError`` from state-file or artifact writes is left as-is and is fatal too.
"""

from __future__ import annotations


class GitWatchError(Exception):
    """Base class for errors reported by the gitwatch CLI."""


class ConfigurationError(GitWatchError):
    """Raised when a required variable is missing or a setting is invalid."""


class GitQueryError(GitWatchError):
    """Raised by GitService when a git command fails or git cannot be run."""


class TemplateError(GitWatchError):
    """Raised when the template is missing or contains unresolved placeholders."""


class StateFileError(GitWatchError):
    """Raised when a persisted state file cannot be decoded."""
