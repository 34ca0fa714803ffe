"""CLI for gitwatch: register and run the build-time git state check."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitwatch.buildsys.registry import DEFAULT_BUILD_SYSTEM, get_build_system, list_build_systems
from gitwatch.config import Settings
from gitwatch.dispatcher import Mode, dispatch
from gitwatch.exceptions import GitWatchError, StateFileError
from gitwatch.filesystem.state_store import load_state
from gitwatch.models.snapshot import Snapshot
from gitwatch.services.change_service import has_changed
from gitwatch.services.git_service import GitService
from gitwatch.services.snapshot_service import extract, property_names

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure CLI logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitwatch",
        description="Regenerate a file from a template whenever the git state changes",
    )
    parser.add_argument("--template", "-t", help="Template with @NAME@ placeholders")
    parser.add_argument("--artifact", "-o", help="Generated output file")
    parser.add_argument("--state-file", help="Where the last git state is kept")
    parser.add_argument("--working-dir", "-C", help="Directory git commands run from")
    parser.add_argument("--git", help="Path to the git executable (default: found on PATH)")
    parser.add_argument("--build-dir", "-B", help="Build output directory (default: ./build)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")
    setup_parser = subparsers.add_parser("setup", help="Register the check with the build system")
    setup_parser.add_argument(
        "--build-system",
        choices=list_build_systems(),
        default=DEFAULT_BUILD_SYSTEM,
        help=f"Build system to register with (default: {DEFAULT_BUILD_SYSTEM})",
    )
    setup_parser.add_argument("--fragment", help="Build file fragment to write")
    subparsers.add_parser("check", help="Regenerate the artifact if the git state changed")
    subparsers.add_parser("status", help="Show the git state without writing anything")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {
        "template_path": args.template,
        "artifact_path": args.artifact,
        "state_file": args.state_file,
        "working_dir": args.working_dir,
        "git_executable": args.git,
        "build_dir": args.build_dir,
    }
    if args.verbose:
        overrides["debug"] = True
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def _print_status(settings: Settings) -> None:
    config = settings.resolve()
    snapshot = extract(GitService(config.working_dir, config.git_executable))
    persisted = load_state(config.state_file)

    print("Git State:")
    for name, value in snapshot.template_values().items():
        print(f"  {name + ':':<22}{value}")
    if persisted is None:
        print(f"  Saved state:          none ({config.state_file})")
    else:
        try:
            saved = Snapshot.deserialize(persisted, property_names())
        except StateFileError as exc:
            print(f"  Saved state:          unreadable ({exc})")
        else:
            print(f"  Saved state:          {', '.join(saved.as_list())}")
    action = "regenerate" if has_changed(snapshot, persisted) else "nothing to do"
    print(f"  Next check:           {action} ({config.artifact_path})")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)
    _configure_logging(settings.debug)

    try:
        if args.command == "status":
            _print_status(settings)
            return
        config = settings.resolve()
        if args.command == "setup":
            fragment = Path(args.fragment).absolute() if args.fragment else None
            path = dispatch(
                Mode.SETUP,
                config,
                build_system=get_build_system(args.build_system),
                fragment_path=fragment,
            )
            print(f"Registered git check in {path}")
        else:
            dispatch(Mode.CHECK, config)
    except (GitWatchError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
