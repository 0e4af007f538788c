# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point and orchestration for shadowtree commands."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from contextlib import suppress
from typing import Final

from shadowtree import __version__
from shadowtree._internal.error_codes import error_code_for
from shadowtree.cli.commands import check as check_command
from shadowtree.cli.commands import init as init_command
from shadowtree.cli.commands import overrides as overrides_command
from shadowtree.cli.commands import resolve as resolve_command
from shadowtree.cli.helpers import echo, register_argument
from shadowtree.config.models import ConfigError
from shadowtree.core.model_types import LogFormat
from shadowtree.logging import LOG_FORMATS, LOG_LEVELS, configure_logging

logger: logging.Logger = logging.getLogger("shadowtree.cli")

SHADOWTREE_VERSION: Final[str] = __version__
CONFIG_ERROR_EXIT: Final[int] = 2

CommandHandler = Callable[[argparse.Namespace], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the ``shadowtree`` command.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the command handler, or 2 on configuration errors.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"shadowtree {SHADOWTREE_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    try:
        return handler(args)
    except ConfigError as exc:
        logger.debug("Configuration error", exc_info=exc)
        echo(f"[shadowtree] {error_code_for(exc)}: {exc}", err=True)
        return CONFIG_ERROR_EXIT


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and all subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    register_argument(
        common,
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Select logging output format (human-readable text or structured JSON).",
    )
    register_argument(
        common,
        "--log-level",
        choices=LOG_LEVELS,
        default="warning",
        help="Set verbosity of logged events.",
    )
    parser = argparse.ArgumentParser(
        prog="shadowtree",
        parents=[common],
        description="Inspect how an extension source tree overrides a core source tree.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the shadowtree version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    parents = [common]
    init_command.register_init_command(subparsers, parents=parents)
    check_command.register_check_command(subparsers, parents=parents)
    resolve_command.register_resolve_command(subparsers, parents=parents)
    overrides_command.register_overrides_command(subparsers, parents=parents)
    return parser


def _initialize_logging(log_format: str, log_level: str) -> None:
    with suppress(Exception):  # best-effort logger init
        _ = configure_logging(LogFormat.from_str(log_format), log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "check": check_command.execute_check,
        "init": init_command.execute_init,
        "overrides": overrides_command.execute_overrides,
        "resolve": resolve_command.execute_resolve,
    }


__all__ = ["main"]
