"""Tests for build-system fragments and task registration."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitwatch.buildsys.base import BuildSystem, DeferredTask
from gitwatch.buildsys.cmake import CMakeBuildSystem, cmake_quote
from gitwatch.buildsys.make import MakeBuildSystem
from gitwatch.buildsys.registry import get_build_system, list_build_systems, register_task
from gitwatch.exceptions import ConfigurationError

TASK = DeferredTask(
    name="check_git",
    command=["/usr/bin/python3", "-m", "cli.gitwatch", "check", "--template", "/src/git.h.in"],
    inputs=[Path("/src/git.h.in")],
    outputs=[Path("/build/git.h")],
    comment="Checking the git repository for changes...",
)


class TestRegistry:
    def test_list_build_systems(self) -> None:
        assert list_build_systems() == ["cmake", "make"]

    @pytest.mark.parametrize("name", ["cmake", "make"])
    def test_adapters_satisfy_protocol(self, name: str) -> None:
        adapter = get_build_system(name)
        assert isinstance(adapter, BuildSystem)
        assert adapter.name == name

    def test_unknown_build_system(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown build system"):
            get_build_system("bazel")


class TestCMakeFragment:
    def test_quote_escapes_specials(self) -> None:
        assert cmake_quote('a "b" $c\\d') == '"a \\"b\\" \\$c\\\\d"'

    def test_renders_always_run_target(self) -> None:
        text = CMakeBuildSystem().render(TASK)
        assert "add_custom_target(check_git\n    ALL\n" in text
        assert 'DEPENDS "/src/git.h.in"' in text
        assert 'BYPRODUCTS "/build/git.h"' in text
        assert 'COMMENT "Checking the git repository for changes..."' in text
        assert 'COMMAND "/usr/bin/python3" "-m" "cli.gitwatch" "check"' in text
        assert text.endswith("    VERBATIM)\n")


class TestMakeFragment:
    def test_renders_phony_target(self) -> None:
        text = MakeBuildSystem().render(TASK)
        lines = text.splitlines()
        assert ".PHONY: check_git" in lines
        assert "check_git: /src/git.h.in" in lines
        assert "\t/usr/bin/python3 -m cli.gitwatch check --template /src/git.h.in" in lines
        assert "/build/git.h: check_git ;" in lines

    def test_default_goal_is_preserved(self) -> None:
        lines = MakeBuildSystem().render(TASK).splitlines()
        save = lines.index("GITWATCH_SAVED_DEFAULT_GOAL := $(.DEFAULT_GOAL)")
        assert save < lines.index("check_git: /src/git.h.in")
        assert lines[-1] == ".DEFAULT_GOAL := $(GITWATCH_SAVED_DEFAULT_GOAL)"

    def test_comment_is_shell_quoted(self) -> None:
        text = MakeBuildSystem().render(TASK)
        assert "\t@echo 'Checking the git repository for changes...'" in text.splitlines()

    def test_dollar_escaped_for_make(self) -> None:
        task = DeferredTask(name="check_git", command=["echo", "$HOME"])
        assert "\techo '$$HOME'" in MakeBuildSystem().render(task).splitlines()


class TestRegisterTask:
    def test_writes_fragment(self, tmp_path: Path) -> None:
        fragment = tmp_path / "build" / "check_git.cmake"
        assert register_task(CMakeBuildSystem(), TASK, fragment) is True
        assert fragment.read_text() == CMakeBuildSystem().render(TASK)

    def test_unchanged_fragment_not_rewritten(self, tmp_path: Path) -> None:
        fragment = tmp_path / "check_git.mk"
        register_task(MakeBuildSystem(), TASK, fragment)
        mtime = fragment.stat().st_mtime_ns
        assert register_task(MakeBuildSystem(), TASK, fragment) is False
        assert fragment.stat().st_mtime_ns == mtime

    def test_changed_task_rewrites_fragment(self, tmp_path: Path) -> None:
        fragment = tmp_path / "check_git.cmake"
        register_task(CMakeBuildSystem(), TASK, fragment)
        other = DeferredTask(name="check_git", command=["gitwatch", "check"])
        assert register_task(CMakeBuildSystem(), other, fragment) is True
        assert '"gitwatch" "check"' in fragment.read_text()
