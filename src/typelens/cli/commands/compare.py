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

"""Compare command implementation for the typelens CLI."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from typelens.api import compare_serialized, inspect_reference
from typelens.cli.commands.inspect import report_missing_type
from typelens.cli.helpers import (
    emit_text,
    register_argument,
    register_output_options,
    register_serializer_options,
    render_comparison_output,
    resolve_output_format,
    resolve_serialization_options,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typelens.api import Comparison
    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import SubparserCollection


def emit_comparison(comparison: Comparison, args: argparse.Namespace, context: CLIContext) -> int:
    """Render ``comparison`` and return `1` when it found differences, else `0`."""
    fmt = resolve_output_format(args, context)
    emit_text(render_comparison_output(comparison, fmt, context.config.output), args.output)
    return 1 if comparison.result.has_changes else 0


def register_compare_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `typelens compare` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common options.
    """
    compare_cmd = subparsers.add_parser(
        "compare",
        help="Compare the types found at two module references",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(compare_cmd, "expected", help="Reference of the expected type")
    register_argument(compare_cmd, "actual", help="Reference of the actual type")
    register_output_options(compare_cmd)
    register_serializer_options(compare_cmd)


def execute_compare(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `typelens compare` command.

    Returns:
        `0` when the types are identical, `1` when they differ or either
        reference has no type.
    """
    options = resolve_serialization_options(args, context)
    expected = inspect_reference(args.expected, options=options)
    if expected is None:
        return report_missing_type(args.expected)
    actual = inspect_reference(args.actual, options=options)
    if actual is None:
        return report_missing_type(args.actual)
    return emit_comparison(compare_serialized(expected, actual), args, context)


__all__ = ["emit_comparison", "execute_compare", "register_compare_command"]
