"""Makefile fragment: a phony target that consumers of the artifact depend on."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitwatch.buildsys.base import DeferredTask


def make_escape(value: str) -> str:
    """Shell-quote ``value`` and escape ``$`` for make."""
    return shlex.quote(value).replace("$", "$$")


_SAVED_GOAL = "GITWATCH_SAVED_DEFAULT_GOAL"


def _target(path: str) -> str:
    return path.replace(" ", "\\ ")


class MakeBuildSystem:
    """Emits a ``.PHONY`` target for inclusion with ``include`` from a Makefile."""

    name = "make"
    fragment_suffix = ".mk"

    def render(self, task: DeferredTask) -> str:
        prereqs = " ".join(_target(p.as_posix()) for p in task.inputs)
        lines = [
            "# Generated by gitwatch setup. Do not edit.",
            "# Leaves the including Makefile's default goal unchanged.",
            f"{_SAVED_GOAL} := $(.DEFAULT_GOAL)",
            f".PHONY: {task.name}",
            f"{task.name}: {prereqs}".rstrip(),
        ]
        if task.comment:
            lines.append(f"\t@echo {make_escape(task.comment)}")
        lines.append("\t" + " ".join(make_escape(arg) for arg in task.command))
        lines.extend(f"{_target(out.as_posix())}: {task.name} ;" for out in task.outputs)
        lines.append(f".DEFAULT_GOAL := $({_SAVED_GOAL})")
        return "\n".join(lines) + "\n"
