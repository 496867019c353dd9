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

"""Shared helper utilities for the typelens CLI."""

from __future__ import annotations

from .args import (
    ArgumentRegistrar,
    non_negative_int,
    register_argument,
    register_output_options,
    register_serializer_options,
)
from .context import CLIContext, build_cli_context, resolve_output_format, resolve_serialization_options
from .io import echo, emit_text
from .rendering import render_comparison_output, render_serialized_output

__all__ = [
    "ArgumentRegistrar",
    "CLIContext",
    "build_cli_context",
    "echo",
    "emit_text",
    "non_negative_int",
    "register_argument",
    "register_output_options",
    "register_serializer_options",
    "render_comparison_output",
    "render_serialized_output",
    "resolve_output_format",
    "resolve_serialization_options",
]
