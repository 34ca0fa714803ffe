"""gitwatch configuration loaded from environment variables and CLI flags."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from gitwatch.exceptions import ConfigurationError

DEFAULT_STATE_FILE_NAME = "git-state"


@dataclass(frozen=True)
class WatchConfig:
    """Validated configuration with every path made absolute."""

    template_path: Path
    artifact_path: Path
    state_file: Path
    working_dir: Path
    git_executable: str
    build_dir: Path
    debug: bool = False


class Settings(BaseSettings):
    """gitwatch settings.

    Every field can be set through a ``GITWATCH_*`` environment variable; the
    CLI passes its flags as keyword arguments, which take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required at resolve time
    template_path: Path | None = None
    artifact_path: Path | None = None

    # Optional
    state_file: Path | None = None
    working_dir: Path = Path()
    git_executable: str | None = None
    build_dir: Path = Path("./build")

    debug: bool = False

    def resolve(self) -> WatchConfig:
        """Validate required settings and fill in defaults.

        Raises ConfigurationError naming every missing variable. Does not
        touch git or the filesystem beyond looking up the git executable.
        """
        template_path = self.template_path
        artifact_path = self.artifact_path
        git_executable = self.git_executable or shutil.which("git")

        missing: list[str] = []
        if template_path is None:
            missing.append("template_path")
        if artifact_path is None:
            missing.append("artifact_path")
        if not git_executable:
            missing.append("git_executable")
        if template_path is None or artifact_path is None or not git_executable:
            joined = ", ".join(f'"{name}"' for name in missing)
            raise ConfigurationError(f"Required variable(s) must be defined: {joined}")

        build_dir = self.build_dir.absolute()
        state_file = self.state_file or build_dir / DEFAULT_STATE_FILE_NAME
        return WatchConfig(
            template_path=template_path.absolute(),
            artifact_path=artifact_path.absolute(),
            state_file=state_file.absolute(),
            working_dir=self.working_dir.absolute(),
            git_executable=git_executable,
            build_dir=build_dir,
            debug=self.debug,
        )
