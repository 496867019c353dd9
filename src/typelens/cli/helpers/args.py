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

# ruff: noqa: ANN401

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Protocol

from typelens.core.model_types import OutputFormat


class ArgumentRegistrar(Protocol):
    """Interface shared by ``argparse.ArgumentParser`` and argument groups."""

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action: ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser or argument group, discarding the action handle."""
    _ = registrar.add_argument(*args, **kwargs)


def non_negative_int(raw: str) -> int:
    """Parse a non-negative integer for argparse.

    Raises:
        argparse.ArgumentTypeError: If ``raw`` is not a non-negative integer.
    """
    try:
        value = int(raw)
    except ValueError as exc:
        message = f"expected a non-negative integer, got {raw!r}"
        raise argparse.ArgumentTypeError(message) from exc
    if value < 0:
        message = f"expected a non-negative integer, got {value}"
        raise argparse.ArgumentTypeError(message)
    return value


def register_output_options(parser: argparse.ArgumentParser) -> None:
    """Register ``--format`` and ``--output`` on a command parser."""
    group = parser.add_argument_group("Output")
    register_argument(
        group,
        "-f",
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Output format (default: [output].format from the configuration, else text).",
    )
    register_argument(
        group,
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the rendered output to a file instead of stdout.",
    )


def register_serializer_options(parser: argparse.ArgumentParser) -> None:
    """Register the flags overriding ``[serializer]`` configuration."""
    group = parser.add_argument_group("Serializer")
    register_argument(
        group,
        "--max-depth",
        type=non_negative_int,
        default=None,
        help="Recursion ceiling for serialized trees.",
    )
    register_argument(
        group,
        "--no-signatures",
        action="store_true",
        help="Collapse callables to their rendering instead of expanding parameters.",
    )
    register_argument(
        group,
        "--no-expand-aliases",
        action="store_true",
        help="Leave named aliases as generic references instead of expanding them.",
    )


__all__ = [
    "ArgumentRegistrar",
    "non_negative_int",
    "register_argument",
    "register_output_options",
    "register_serializer_options",
]
