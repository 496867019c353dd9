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

"""Plain-text rendering of type trees and diff results.

Trees render one node per line, indented by depth. Children of objects and
functions are labelled with their property or parameter name, followed by
``?`` when optional and prefixed with ``readonly`` when readonly::

    object
      readonly id: primitive
      email?: primitive
      status: literal "active"
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from typelens.core.model_types import TypeKind
from typelens.differ.type_differ import format_path
from typelens.formatting import truncate_type

if TYPE_CHECKING:
    from typelens.core.types import DiffResult, SerializedType, TypeDiff, TypeNode

INDENT: Final[str] = "  "
_NAMED_CHILD_PARENTS: Final[frozenset[TypeKind]] = frozenset({TypeKind.OBJECT, TypeKind.FUNCTION})


def format_literal(node: TypeNode) -> str:
    """Render the value of a literal node, quoting strings."""
    value = node.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def describe_node(node: TypeNode, *, include_name: bool = True) -> str:
    """Return a one-line description of ``node`` without its children."""
    if node.kind is TypeKind.LITERAL:
        return f"literal {format_literal(node)}"
    if include_name and node.name:
        return f"{node.kind} {node.name}"
    return node.kind.value


def _child_label(node: TypeNode) -> str:
    label = node.name or "?"
    if node.optional:
        label += "?"
    if node.readonly:
        label = f"readonly {label}"
    return label


def _tree_lines(node: TypeNode, depth: int, *, named: bool) -> list[str]:
    prefix = INDENT * depth
    if named:
        line = f"{prefix}{_child_label(node)}: {describe_node(node, include_name=False)}"
    else:
        line = f"{prefix}{describe_node(node)}"
    lines = [line]
    child_named = node.kind in _NAMED_CHILD_PARENTS
    for child in node.children:
        lines.extend(_tree_lines(child, depth + 1, named=child_named))
    return lines


def render_tree(node: TypeNode) -> str:
    """Render ``node`` and its descendants as an indented text tree."""
    return "\n".join(_tree_lines(node, 0, named=False))


def format_location(serialized: SerializedType) -> str | None:
    """Return ``file:line:column`` (1-based) for ``serialized``, if located."""
    if serialized.file_path is None:
        return None
    if serialized.position is None:
        return serialized.file_path
    position = serialized.position
    return f"{serialized.file_path}:{position.line + 1}:{position.character + 1}"


def render_serialized(serialized: SerializedType, *, truncate: int = 100) -> str:
    """Render a snapshot: its display name, location and tree."""
    lines = [truncate_type(serialized.display_name, truncate)]
    location = format_location(serialized)
    if location:
        lines.append(f"  at {location}")
    lines.append("")
    lines.append(render_tree(serialized.type_node))
    return "\n".join(lines)


def format_diff_line(diff: TypeDiff) -> str:
    """Render one difference as a bullet line."""
    line = f"- [{diff.kind}] {format_path(diff.path)}: {diff.message}"
    details: list[str] = []
    if diff.expected is not None:
        details.append(f"expected {diff.expected}")
    if diff.actual is not None:
        details.append(f"actual {diff.actual}")
    if details:
        line += f" ({', '.join(details)})"
    return line


def render_diff_text(result: DiffResult) -> str:
    """Render a diff result as a summary line followed by one line per difference."""
    if not result.has_changes:
        return "No differences."
    summary = result.summary
    lines = [
        f"{summary.total} difference(s): "
        f"missing {summary.missing}, extra {summary.extra}, mismatch {summary.mismatch}",
    ]
    lines.extend(format_diff_line(diff) for diff in result.diffs)
    return "\n".join(lines)


__all__ = [
    "describe_node",
    "format_diff_line",
    "format_literal",
    "format_location",
    "render_diff_text",
    "render_serialized",
    "render_tree",
]
