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

"""Explain command implementation for the typelens CLI."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from typelens._internal.logging_utils import structured_extra
from typelens.api import compare_serialized, inspect_reference
from typelens.cli.commands.compare import emit_comparison
from typelens.cli.commands.inspect import report_missing_type
from typelens.cli.helpers import (
    echo,
    register_argument,
    register_output_options,
    register_serializer_options,
    resolve_serialization_options,
)
from typelens.core.model_types import LogComponent
from typelens.diagnostics import parse_types_from_error, serialized_from_hint

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("typelens.cli")


def register_explain_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `typelens explain` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common options.
    """
    explain_cmd = subparsers.add_parser(
        "explain",
        help="Compare the expected type named in a checker error with an actual type",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(explain_cmd, "message", help="Type checker error message")
    register_argument(
        explain_cmd,
        "--actual",
        required=True,
        help="Reference of the actual type (package.module:Name)",
    )
    register_output_options(explain_cmd)
    register_serializer_options(explain_cmd)


def execute_explain(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `typelens explain` command.

    Returns:
        `0` when the types match, `1` when they differ, the message is not
        recognised, or the reference has no type.
    """
    hint = parse_types_from_error(args.message)
    if hint is None:
        logger.warning(
            "Could not extract type information from error message",
            extra=structured_extra(component=LogComponent.CLI),
        )
        echo("[typelens] Could not extract type information from error message", err=True)
        return 1
    actual = inspect_reference(args.actual, options=resolve_serialization_options(args, context))
    if actual is None:
        return report_missing_type(args.actual)
    expected = serialized_from_hint(hint, file_path=actual.file_path, position=actual.position)
    return emit_comparison(compare_serialized(expected, actual), args, context)


__all__ = ["execute_explain", "register_explain_command"]
