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

"""Core data classes for serialized types and structural diffs.

This module defines the immutable dataclasses produced by the serializer and
the differ. None of them hold references to checker-owned type handles, so
every instance can be converted to a JSON payload with ``to_payload`` and
handed to a presentation layer running in another process.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from typelens._internal.exceptions import TypelensValidationError

from .model_types import DiffKind, TypeKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .type_aliases import DiffPath, LiteralValue
    from .typed import (
        DiffResultData,
        DiffSummaryData,
        PositionData,
        SerializedTypeData,
        TypeDiffData,
        TypeNodeData,
    )


def coerce_literal(value: LiteralValue) -> str:
    """Render a literal value as a string.

    Booleans use the lowercase JSON spelling so that renderings match the
    payload values exchanged with presentation collaborators.

    Args:
        value: Literal value carried by a ``literal`` node.

    Returns:
        String rendering of the value.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def literal_equals(left: LiteralValue | None, right: LiteralValue | None) -> bool:
    """Compare two literal values strictly.

    ``True`` never equals ``1`` and ``"1"`` never equals ``1``; ints and floats
    compare numerically.

    Returns:
        True when both values are of compatible types and equal.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    return left == right


def _empty_children() -> tuple[TypeNode, ...]:
    return ()


@dataclass(slots=True, frozen=True)
class TypeNode:
    """One node of a serialized type tree.

    Attributes:
        kind: Tagged variant discriminator.
        name: Type name, property/parameter name, or string rendering.
        value: Literal value; only set for ``literal`` nodes.
        children: Ordered child nodes.
        optional: Whether the property or parameter may be absent.
        readonly: Whether the property carries a readonly modifier.
    """

    kind: TypeKind
    name: str | None = None
    value: LiteralValue | None = None
    children: tuple[TypeNode, ...] = field(default_factory=_empty_children)
    optional: bool = False
    readonly: bool = False

    def __post_init__(self) -> None:
        """Normalise the kind and children container."""
        if not isinstance(self.kind, TypeKind):
            object.__setattr__(self, "kind", TypeKind.from_str(str(self.kind)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def label(self) -> str:
        """Canonical string of the node: its name, else its value, else its kind."""
        if self.name:
            return self.name
        if self.value is not None:
            return coerce_literal(self.value)
        return self.kind.value

    def to_payload(self) -> TypeNodeData:
        """Return the JSON payload for this node and its descendants."""
        payload: TypeNodeData = {"kind": self.kind.value}
        if self.name is not None:
            payload["name"] = self.name
        if self.value is not None:
            payload["value"] = self.value
        if self.children:
            payload["children"] = [child.to_payload() for child in self.children]
        if self.optional:
            payload["optional"] = True
        if self.readonly:
            payload["readonly"] = True
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> TypeNode:
        """Validate and convert a JSON payload into a ``TypeNode``.

        Raises:
            PayloadValidationError: If the payload does not match the schema.
        """
        from .models import load_type_node  # noqa: PLC0415

        return load_type_node(payload)


@dataclass(slots=True, frozen=True)
class Position:
    """Zero-based line/character location of an inspected type."""

    line: int
    character: int

    def to_payload(self) -> PositionData:
        """Return the JSON payload for this position."""
        return {"line": self.line, "character": self.character}


@dataclass(slots=True, frozen=True)
class SerializedType:
    """A named, located snapshot of one type.

    Attributes:
        id: Opaque identifier unique to one serialization call.
        display_name: Checker's canonical string rendering of the type.
        type_node: Root of the serialized tree.
        file_path: Source file the type was obtained from, if known.
        position: Location within ``file_path``, if known.
    """

    id: str
    display_name: str
    type_node: TypeNode
    file_path: str | None = None
    position: Position | None = None

    def to_payload(self) -> SerializedTypeData:
        """Return the JSON payload for this snapshot."""
        payload: SerializedTypeData = {
            "id": self.id,
            "displayName": self.display_name,
            "typeNode": self.type_node.to_payload(),
        }
        if self.file_path is not None:
            payload["filePath"] = self.file_path
        if self.position is not None:
            payload["position"] = self.position.to_payload()
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> SerializedType:
        """Validate and convert a JSON payload into a ``SerializedType``.

        Raises:
            PayloadValidationError: If the payload does not match the schema.
        """
        from .models import load_serialized_type  # noqa: PLC0415

        return load_serialized_type(payload)


@dataclass(slots=True, frozen=True)
class TypeDiff:
    """One detected structural difference.

    Attributes:
        path: Property names and ``[i]`` index markers leading from the root.
        kind: Category of the difference.
        message: Human-readable description.
        expected: Rendering of the expected side, when applicable.
        actual: Rendering of the actual side, when applicable.
    """

    path: DiffPath
    kind: DiffKind
    message: str
    expected: str | None = None
    actual: str | None = None

    def __post_init__(self) -> None:
        """Normalise the path container."""
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    def to_payload(self) -> TypeDiffData:
        """Return the JSON payload for this difference."""
        payload: TypeDiffData = {
            "path": list(self.path),
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.expected is not None:
            payload["expected"] = self.expected
        if self.actual is not None:
            payload["actual"] = self.actual
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> TypeDiff:
        """Validate and convert a JSON payload into a ``TypeDiff``.

        Raises:
            PayloadValidationError: If the payload does not match the schema.
        """
        from .models import load_type_diff  # noqa: PLC0415

        return load_type_diff(payload)


@dataclass(slots=True, frozen=True)
class DiffSummary:
    """Counts of differences by category.

    ``mismatch`` counts both type and value mismatches.
    """

    missing: int = 0
    extra: int = 0
    mismatch: int = 0

    @classmethod
    def from_diffs(cls, diffs: Iterable[TypeDiff]) -> DiffSummary:
        """Count ``diffs`` into a summary."""
        missing = extra = mismatch = 0
        for diff in diffs:
            if diff.kind is DiffKind.MISSING:
                missing += 1
            elif diff.kind is DiffKind.EXTRA:
                extra += 1
            elif diff.kind.is_mismatch:
                mismatch += 1
        return cls(missing=missing, extra=extra, mismatch=mismatch)

    @property
    def total(self) -> int:
        """Total number of counted differences."""
        return self.missing + self.extra + self.mismatch

    def to_payload(self) -> DiffSummaryData:
        """Return the JSON payload for this summary."""
        return {"missing": self.missing, "extra": self.extra, "mismatch": self.mismatch}


@dataclass(slots=True, frozen=True)
class DiffResult:
    """Full comparison output.

    Attributes:
        diffs: Differences in emission order.
        has_changes: True exactly when ``diffs`` is non-empty.
        summary: Counts derived from ``diffs``.
    """

    diffs: tuple[TypeDiff, ...]
    has_changes: bool
    summary: DiffSummary

    def __post_init__(self) -> None:
        """Normalise the diff container and check the derived fields.

        Raises:
            TypelensValidationError: If ``has_changes`` or ``summary`` disagree
                with ``diffs``.
        """
        if not isinstance(self.diffs, tuple):
            object.__setattr__(self, "diffs", tuple(self.diffs))
        if self.has_changes != bool(self.diffs):
            message = "has_changes must be true exactly when diffs is non-empty"
            raise TypelensValidationError(message)
        if self.summary != DiffSummary.from_diffs(self.diffs):
            message = "summary counts do not match diffs"
            raise TypelensValidationError(message)

    @classmethod
    def from_diffs(cls, diffs: Iterable[TypeDiff]) -> DiffResult:
        """Build a result, deriving ``has_changes`` and ``summary`` from ``diffs``."""
        materialised = tuple(diffs)
        return cls(
            diffs=materialised,
            has_changes=bool(materialised),
            summary=DiffSummary.from_diffs(materialised),
        )

    def to_payload(self) -> DiffResultData:
        """Return the JSON payload for this result."""
        return {
            "diffs": [diff.to_payload() for diff in self.diffs],
            "hasChanges": self.has_changes,
            "summary": self.summary.to_payload(),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> DiffResult:
        """Validate and convert a JSON payload into a ``DiffResult``.

        Raises:
            PayloadValidationError: If the payload does not match the schema.
        """
        from .models import load_diff_result  # noqa: PLC0415

        return load_diff_result(payload)


__all__ = [
    "DiffResult",
    "DiffSummary",
    "Position",
    "SerializedType",
    "TypeDiff",
    "TypeNode",
    "coerce_literal",
    "literal_equals",
]
