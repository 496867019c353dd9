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

"""Schema command implementation for the typelens CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import TYPE_CHECKING, cast

from typelens.cli.helpers import emit_text, non_negative_int, register_argument
from typelens.core.models import PayloadTarget, payload_json_schema

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typelens.cli.helpers import CLIContext
    from typelens.cli.types import SubparserCollection

SCHEMA_TARGETS: tuple[str, ...] = ("serialized-type", "diff-result")


def register_schema_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `typelens schema` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common options.
    """
    schema_cmd = subparsers.add_parser(
        "schema",
        help="Emit the JSON schema of typelens payloads",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        schema_cmd,
        "--target",
        choices=SCHEMA_TARGETS,
        default="serialized-type",
        help="Payload whose schema is emitted",
    )
    register_argument(
        schema_cmd,
        "--indent",
        type=non_negative_int,
        default=2,
        help="Indentation level for JSON output",
    )
    register_argument(
        schema_cmd,
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the schema to a path instead of stdout",
    )


def execute_schema(args: argparse.Namespace, _: CLIContext) -> int:
    """Execute the `typelens schema` command.

    Returns:
        Always `0`.
    """
    schema = payload_json_schema(cast("PayloadTarget", args.target))
    emit_text(json.dumps(schema, indent=args.indent), args.output)
    return 0


__all__ = ["SCHEMA_TARGETS", "execute_schema", "register_schema_command"]
