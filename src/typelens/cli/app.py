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

"""CLI entry point and orchestration for typelens commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
from collections.abc import Sequence
from contextlib import suppress
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from typelens import __version__
from typelens._internal.error_codes import error_code_for
from typelens._internal.logging_utils import structured_extra
from typelens.cli.commands import compare as compare_command
from typelens.cli.commands import diff as diff_command
from typelens.cli.commands import explain as explain_command
from typelens.cli.commands import inspect as inspect_command
from typelens.cli.commands import schema as schema_command
from typelens.cli.helpers import build_cli_context
from typelens.cli.helpers import echo as _echo
from typelens.cli.helpers import register_argument as _register_argument
from typelens.core.model_types import LogComponent, LogFormat
from typelens.exceptions import TypelensError
from typelens.logging import LOG_FORMATS, LOG_LEVELS, configure_logging

if TYPE_CHECKING:
    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import CommandHandler, SubparserCollection

logger: logging.Logger = logging.getLogger("typelens.cli")

TYPELENS_VERSION: Final[str] = __version__
DEFAULT_CONFIG_FILENAME: Final[str] = "typelens.toml"

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # typelens configuration template
    # Save this file as typelens.toml in the root of your project, or move the
    # tables below under [tool.typelens] in pyproject.toml.
    config_version = 0

    [serializer]
    # Nodes deeper than this become `unknown "..."`.
    max_depth = 10
    # Set to false to collapse callables to their rendering.
    include_signatures = true
    # Set to false to keep named aliases as generic references.
    expand_aliases = true

    [output]
    # Default output format for inspect/compare/diff/explain.
    format = "text"              # choices: text, json, markdown
    # JSON indentation.
    indent = 2
    # Display names longer than this are shortened in text output (0 disables).
    truncate = 100
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write ``CONFIG_TEMPLATE`` to ``path``.

    Returns:
        `0` once written, `1` when ``path`` exists and ``force`` is not set.
    """
    if path.exists() and not force:
        _echo(f"[typelens] Refusing to overwrite {path}; pass --force to replace it.")
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    _echo(f"[typelens] Wrote starter config to {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the typelens command line.

    Args:
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.

    Returns:
        `0` on success, `1` when a comparison found differences or a
        reference had no type, `2` when a typelens error was reported.
    """
    parser = _build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    if args.version:
        _echo(f"typelens {TYPELENS_VERSION}")
        return 0
    handler = _command_handlers().get(args.command) if args.command else None
    if handler is None:
        parser.error("a command is required")
    _initialize_logging(args.log_format, args.log_level)
    try:
        return handler(args, build_cli_context(args.config))
    except TypelensError as exc:
        return _report_error(args.command, exc)


def _report_error(command: str, exc: TypelensError) -> int:
    code = error_code_for(exc)
    logger.debug(
        "Command %s failed with %s",
        command,
        code,
        extra=structured_extra(component=LogComponent.CLI, details={"code": code}),
    )
    _echo(f"[typelens] ({code}) {exc}", err=True)
    return 2


def _register_global_options(parser: argparse.ArgumentParser) -> None:
    """Add the options that apply to every command.

    They live on the top-level parser only, so they must precede the
    subcommand on the command line.
    """
    group = parser.add_argument_group("Global options")
    _register_argument(group, "--log-format", choices=LOG_FORMATS, default="text", help="Log record format.")
    _register_argument(
        group,
        "--log-level",
        choices=LOG_LEVELS,
        default="warning",
        help="Lowest level of log records written to stderr.",
    )
    _register_argument(
        group,
        "--config",
        type=pathlib.Path,
        default=None,
        metavar="PATH",
        help="Read configuration from PATH instead of searching the working directory.",
    )
    _register_argument(group, "--version", action="store_true", help="Show the typelens version and exit.")


def _build_parser() -> argparse.ArgumentParser:
    """Return the top-level parser with every subcommand registered."""
    parser = argparse.ArgumentParser(
        prog="typelens",
        description="Inspect Python types as explicit trees and report how two types differ.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _register_global_options(parser)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for register in (
        inspect_command.register_inspect_command,
        compare_command.register_compare_command,
        diff_command.register_diff_command,
        explain_command.register_explain_command,
        schema_command.register_schema_command,
        _register_init_command,
    ):
        register(subparsers)
    return parser


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register `typelens init`, which writes the commented configuration template."""
    init = subparsers.add_parser(
        "init",
        help="Write a commented typelens.toml template",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    _register_argument(
        init,
        "-s",
        "--save-as",
        dest="output",
        type=pathlib.Path,
        default=pathlib.Path(DEFAULT_CONFIG_FILENAME),
        metavar="PATH",
        help="Where to write the template.",
    )
    _register_argument(init, "--force", action="store_true", help="Replace PATH if it already exists.")


def _initialize_logging(log_format: str, log_level: str) -> None:
    """Initialize logging for the CLI; failures are ignored."""
    with suppress(Exception):
        _ = configure_logging(LogFormat.from_str(log_format), log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    """Return a mapping of command names to their handler functions."""
    return {
        "compare": compare_command.execute_compare,
        "diff": diff_command.execute_diff,
        "explain": explain_command.execute_explain,
        "init": _execute_init,
        "inspect": inspect_command.execute_inspect,
        "schema": schema_command.execute_schema,
    }


def _execute_init(args: argparse.Namespace, _: CLIContext) -> int:
    """Execute the 'init' command to generate a configuration file."""
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
