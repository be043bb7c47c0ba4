#!/usr/bin/env python3
"""CLI entry point for vertrack: show, initialize and bump a project's version."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import click
from loguru import logger

from vertrack.config import DEFAULT_LOG_LEVEL, LOG_LEVELS, VertrackConfig, load_config
from vertrack.exceptions import UnknownCommand, VertrackError
from vertrack.initializer import RecordInitializer
from vertrack.logging_setup import configure_logging
from vertrack.state import VersionStore
from vertrack.version import __version__
from vertrack.versioning import BUMPS

EXIT_INTERRUPTED = 130


def show_version(store: VersionStore) -> int:
    """Print the one-line summary of the current record."""
    print(store.load().summary())
    return 0


def init_project(store: VersionStore, initializer: RecordInitializer) -> int:
    """Collect a new record interactively and write the first state file."""
    # Fail before prompting; init_guard below is the authoritative check.
    store.check_not_initialized()

    record = initializer.run()
    store.init_guard()
    try:
        store.save(record)
    except VertrackError:
        store.release_guard()
        raise
    logger.info(f"Initialized {store.state_path}")
    return 0


def bump_version(store: VersionStore, part: str) -> int:
    """Increment ``part`` of the stored version, save, and print the new summary."""
    record = store.load().bump(part)
    store.save(record)
    print(record.summary())
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vertrack",
        description="Track a project's semantic version and build number in ver.json.",
        epilog="Commands: init, major, minor, patch. With no command, show the current version.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="init | major | minor | patch (omit to show the current version)",
    )
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        help="Directory holding the state file (default: current directory).",
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a configuration value, e.g. --set defaults.build=1. Repeatable.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level (default: WARNING).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _resolve_config(parsed: argparse.Namespace) -> VertrackConfig:
    config = load_config(parsed.config, parsed.overrides)
    update: dict[str, object] = {}
    if parsed.directory is not None:
        update["store"] = config.store.model_copy(update={"directory": parsed.directory})
    if parsed.log_level is not None:
        update["log_level"] = parsed.log_level
    return config.model_copy(update=update) if update else config


def _dispatch(command: str | None, config: VertrackConfig) -> int:
    store = VersionStore.from_config(config.store)

    if command is None:
        return show_version(store)
    if command == "init":
        return init_project(store, RecordInitializer(config.defaults))
    if command in BUMPS:
        return bump_version(store, command)
    raise UnknownCommand(f"Unknown command '{command}'", context={"command": command})


def _run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run one command, and return the process exit code."""

    parser = _build_parser()
    parsed = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(DEFAULT_LOG_LEVEL)

    try:
        config = _resolve_config(parsed)
        configure_logging(config.log_level)
        return _dispatch(parsed.command, config)
    except VertrackError as exc:
        logger.debug(f"{type(exc).__name__}: context={exc.context!r}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt, EOFError):
        print("\nAborted", file=sys.stderr)
        return EXIT_INTERRUPTED


def main() -> None:
    """Console-script entry point; exits with the command's status."""
    sys.exit(_run_cli())


if __name__ == "__main__":
    main()
