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

"""CLI context shared by command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from typelens.config.loader import load_config
from typelens.core.model_types import OutputFormat

if TYPE_CHECKING:
    import argparse
    from pathlib import Path

    from typelens.config.models import Config, SerializationOptions


@dataclass(slots=True, frozen=True)
class CLIContext:
    """Resolved configuration shared by CLI commands."""

    config: Config

    @property
    def config_path(self) -> Path | None:
        """File the configuration was loaded from, if any."""
        return self.config.source


def build_cli_context(config_path: Path | None = None, *, cwd: Path | None = None) -> CLIContext:
    """Load configuration for a CLI invocation.

    Raises:
        ConfigValidationError: If the configuration cannot be read or validated.
    """
    return CLIContext(config=load_config(config_path, search_dir=cwd))


def resolve_serialization_options(args: argparse.Namespace, context: CLIContext) -> SerializationOptions:
    """Apply serializer flags from ``args`` over the configured options."""
    return context.config.serializer.merged(
        max_depth=getattr(args, "max_depth", None),
        include_signatures=False if getattr(args, "no_signatures", False) else None,
        expand_aliases=False if getattr(args, "no_expand_aliases", False) else None,
    )


def resolve_output_format(args: argparse.Namespace, context: CLIContext) -> OutputFormat:
    """Return the ``--format`` choice, falling back to the configured format."""
    raw = getattr(args, "format", None)
    if raw is None:
        return context.config.output.format
    return OutputFormat.from_str(raw)


__all__ = ["CLIContext", "build_cli_context", "resolve_output_format", "resolve_serialization_options"]
