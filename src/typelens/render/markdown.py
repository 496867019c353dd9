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

"""Markdown rendering of inspected types and type comparisons."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typelens.differ.type_differ import format_path

from .text import format_location, render_tree

if TYPE_CHECKING:
    from typelens.core.types import DiffResult, DiffSummary, SerializedType, TypeDiff


def _cell(text: str | None) -> str:
    if text is None:
        return "—"
    return text.replace("|", "\\|").replace("\n", " ")


def _code(text: str | None) -> str:
    if text is None:
        return "—"
    return f"`{_cell(text)}`"


def _md_header(expected: SerializedType, actual: SerializedType) -> list[str]:
    return [
        "# Type comparison",
        "",
        f"- Expected: {_code(expected.display_name)}",
        f"- Actual: {_code(actual.display_name)}",
    ]


def _md_summary(summary: DiffSummary) -> list[str]:
    return [
        "",
        "## Summary",
        "",
        "| Missing | Extra | Mismatch |",
        "| ---: | ---: | ---: |",
        f"| {summary.missing} | {summary.extra} | {summary.mismatch} |",
    ]


def _md_changes(diffs: tuple[TypeDiff, ...]) -> list[str]:
    lines = ["", "## Changes", ""]
    if not diffs:
        lines.append("_No differences_")
        return lines
    lines.extend(
        [
            "| Path | Kind | Expected | Actual | Message |",
            "| --- | --- | --- | --- | --- |",
        ],
    )
    for diff in diffs:
        lines.append(
            f"| {_code(format_path(diff.path))} | {diff.kind} | {_code(diff.expected)} | "
            f"{_code(diff.actual)} | {_cell(diff.message)} |",
        )
    return lines


def render_diff_markdown(expected: SerializedType, actual: SerializedType, result: DiffResult) -> str:
    """Render a comparison as a Markdown report.

    Args:
        expected: Snapshot of the expected type.
        actual: Snapshot of the actual type.
        result: Diff of ``expected`` against ``actual``.

    Returns:
        Markdown document with a trailing newline.
    """
    lines = _md_header(expected, actual)
    lines.extend(_md_summary(result.summary))
    lines.extend(_md_changes(result.diffs))
    return "\n".join(lines) + "\n"


def render_serialized_markdown(serialized: SerializedType) -> str:
    """Render one snapshot as a Markdown section with its tree in a code block."""
    lines = [f"# {_code(serialized.display_name)}", ""]
    location = format_location(serialized)
    if location:
        lines.extend([f"- Location: {_code(location)}", ""])
    lines.extend(["```text", render_tree(serialized.type_node), "```"])
    return "\n".join(lines) + "\n"


__all__ = ["render_diff_markdown", "render_serialized_markdown"]
