"""CMake fragment: an always-run custom target."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitwatch.buildsys.base import DeferredTask


def cmake_quote(value: str) -> str:
    """Quote an argument for a CMake command invocation."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


class CMakeBuildSystem:
    """Emits ``add_custom_target(... ALL ...)`` for inclusion from CMakeLists.txt."""

    name = "cmake"
    fragment_suffix = ".cmake"

    def render(self, task: DeferredTask) -> str:
        lines = [
            "# Generated by gitwatch setup. Do not edit.",
            f"add_custom_target({task.name}",
            "    ALL",
        ]
        if task.inputs:
            deps = " ".join(cmake_quote(p.as_posix()) for p in task.inputs)
            lines.append(f"    DEPENDS {deps}")
        if task.outputs:
            outs = " ".join(cmake_quote(p.as_posix()) for p in task.outputs)
            lines.append(f"    BYPRODUCTS {outs}")
        if task.comment:
            lines.append(f"    COMMENT {cmake_quote(task.comment)}")
        lines.append(f"    COMMAND {' '.join(cmake_quote(arg) for arg in task.command)}")
        lines.append("    VERBATIM)")
        return "\n".join(lines) + "\n"
