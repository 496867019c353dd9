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

"""Inspect command implementation for the typelens CLI."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from typelens._internal.logging_utils import structured_extra
from typelens.api import inspect_reference
from typelens.cli.helpers import (
    echo,
    emit_text,
    register_argument,
    register_output_options,
    register_serializer_options,
    render_serialized_output,
    resolve_output_format,
    resolve_serialization_options,
)
from typelens.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("typelens.cli")


def report_missing_type(reference: str) -> int:
    """Warn that ``reference`` yielded no type information and return exit code 1."""
    logger.warning(
        "No type information available for %s",
        reference,
        extra=structured_extra(component=LogComponent.CLI, reference=reference),
    )
    echo(f"[typelens] No type information available for {reference}", err=True)
    return 1


def register_inspect_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `typelens inspect` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common options.
    """
    inspect_cmd = subparsers.add_parser(
        "inspect",
        help="Serialize the type found at a module reference",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        inspect_cmd,
        "reference",
        help="Reference of the form package.module:Name",
    )
    register_output_options(inspect_cmd)
    register_serializer_options(inspect_cmd)


def execute_inspect(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `typelens inspect` command.

    Args:
        args: Parsed CLI namespace.
        context: Shared CLI context carrying the loaded configuration.

    Returns:
        `0` when a type was rendered, `1` when the reference has no type.
    """
    options = resolve_serialization_options(args, context)
    serialized = inspect_reference(args.reference, options=options)
    if serialized is None:
        return report_missing_type(args.reference)
    fmt = resolve_output_format(args, context)
    emit_text(render_serialized_output(serialized, fmt, context.config.output), args.output)
    return 0


__all__ = ["execute_inspect", "register_inspect_command", "report_missing_type"]
