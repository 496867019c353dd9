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

"""Rendering of command results in the selected output format."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typelens.core.model_types import OutputFormat
from typelens.formatting import truncate_type
from typelens.json import dump_json
from typelens.render.markdown import render_diff_markdown, render_serialized_markdown
from typelens.render.text import render_diff_text, render_serialized

if TYPE_CHECKING:
    from typelens.api import Comparison
    from typelens.config.models import OutputConfig
    from typelens.core.types import SerializedType


def render_serialized_output(serialized: SerializedType, fmt: OutputFormat, output: OutputConfig) -> str:
    """Render an inspected type for display."""
    match fmt:
        case OutputFormat.JSON:
            return dump_json(serialized.to_payload(), indent=output.indent)
        case OutputFormat.MARKDOWN:
            return render_serialized_markdown(serialized)
        case _:
            return render_serialized(serialized, truncate=output.truncate)


def render_comparison_output(comparison: Comparison, fmt: OutputFormat, output: OutputConfig) -> str:
    """Render a comparison for display."""
    match fmt:
        case OutputFormat.JSON:
            return dump_json(comparison.to_payload(), indent=output.indent)
        case OutputFormat.MARKDOWN:
            return render_diff_markdown(comparison.expected, comparison.actual, comparison.result)
        case _:
            lines = [
                f"Expected: {truncate_type(comparison.expected.display_name, output.truncate)}",
                f"Actual:   {truncate_type(comparison.actual.display_name, output.truncate)}",
                "",
                render_diff_text(comparison.result),
            ]
            return "\n".join(lines)


__all__ = ["render_comparison_output", "render_serialized_output"]
