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

"""Diff command implementation for the typelens CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from typelens.api import compare_files
from typelens.cli.commands.compare import emit_comparison
from typelens.cli.helpers import register_argument, register_output_options

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import SubparserCollection


def register_diff_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `typelens diff` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common options.
    """
    diff_cmd = subparsers.add_parser(
        "diff",
        help="Compare two saved `typelens inspect --format json` payloads",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(diff_cmd, "expected", type=Path, help="Payload of the expected type")
    register_argument(diff_cmd, "actual", type=Path, help="Payload of the actual type")
    register_output_options(diff_cmd)


def execute_diff(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `typelens diff` command.

    Returns:
        `0` when the payloads describe identical trees, `1` otherwise.

    Raises:
        PayloadValidationError: If either file is not a valid payload.
    """
    return emit_comparison(compare_files(args.expected, args.actual), args, context)


__all__ = ["execute_diff", "register_diff_command"]
