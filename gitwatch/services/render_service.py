"""Artifact regeneration from ``@NAME@`` templates."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from gitwatch.exceptions import TemplateError
from gitwatch.filesystem.state_store import write_atomic

if TYPE_CHECKING:
    from pathlib import Path

    from gitwatch.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"@([A-Za-z_][A-Za-z0-9_]*)@")


def render_template(text: str, values: dict[str, str]) -> str:
    """Substitute every ``@NAME@`` placeholder in ``text``.

    Raises TemplateError listing each placeholder that has no value; a
    partially substituted result is never returned.
    """
    unresolved = sorted({m.group(1) for m in _PLACEHOLDER_RE.finditer(text)} - values.keys())
    if unresolved:
        msg = f"Unresolved template placeholders: {', '.join(unresolved)}"
        raise TemplateError(msg)
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], text)


def regenerate(template_path: Path, artifact_path: Path, snapshot: Snapshot) -> None:
    """Render the template with the snapshot and overwrite the artifact."""
    try:
        template = template_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Template not found: {template_path}"
        raise TemplateError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Template is not valid UTF-8: {template_path}: {exc}"
        raise TemplateError(msg) from exc
    try:
        content = render_template(template, snapshot.template_values())
    except TemplateError as exc:
        msg = f"{template_path}: {exc}"
        raise TemplateError(msg) from exc
    write_atomic(artifact_path, content)
    logger.info("Regenerated %s from %s", artifact_path, template_path)
