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

"""Structural comparison of serialized type trees.

``TypeDiffer.compare`` walks an expected and an actual ``TypeNode`` in lock
step. A kind mismatch is reported once and stops descent into that subtree;
otherwise each kind has its own rule:

- ``primitive`` and ``unknown`` compare names;
- ``literal`` compares values strictly (``True`` never equals ``1``);
- ``object`` matches properties by name, ignoring absent optional properties;
- ``array`` and ``tuple`` compare children by position;
- ``union`` and ``intersection`` take a set difference of member labels;
- ``generic`` compares names, then type arguments by position.

``function``, ``conditional``, ``template`` and ``indexed`` nodes only take
part in the kind check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from typelens._internal.logging_utils import structured_extra
from typelens.core.model_types import DiffKind, LogComponent, TypeKind
from typelens.core.type_aliases import ROOT_PATH_LABEL
from typelens.core.types import DiffResult, TypeDiff, coerce_literal, literal_equals

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from typelens.core.type_aliases import DiffPath
    from typelens.core.types import TypeNode

logger: logging.Logger = logging.getLogger("typelens.differ")

PATH_SEPARATOR: Final[str] = "."


def node_label(node: TypeNode) -> str:
    """Return the canonical string of ``node``: its name, else value, else kind."""
    return node.label


def index_segment(index: int) -> str:
    """Return the path segment addressing position ``index``."""
    return f"[{index}]"


def format_path(path: Iterable[str]) -> str:
    """Join ``path`` with dots; an empty path renders as ``root``."""
    segments = list(path)
    if not segments:
        return ROOT_PATH_LABEL
    return PATH_SEPARATOR.join(segments)


def filter_diffs(result: DiffResult, kind: DiffKind | str) -> tuple[TypeDiff, ...]:
    """Return the diffs of ``result`` with the given kind, in their original order."""
    wanted = kind if isinstance(kind, DiffKind) else DiffKind.from_str(kind)
    return tuple(diff for diff in result.diffs if diff.kind is wanted)


class TypeDiffer:
    """Compare two serialized type trees."""

    def compare(self, expected: TypeNode, actual: TypeNode, path: Sequence[str] = ()) -> DiffResult:
        """Compare ``expected`` against ``actual``.

        Args:
            expected: Tree describing the required type.
            actual: Tree describing the type that was found.
            path: Segments prefixed to every reported path.

        Returns:
            The differences in emission order with their summary.
        """
        diffs: list[TypeDiff] = []
        self._compare_nodes(expected, actual, tuple(path), diffs)
        result = DiffResult.from_diffs(diffs)
        logger.debug(
            "Compared %s with %s: %d difference(s)",
            node_label(expected),
            node_label(actual),
            len(diffs),
            extra=structured_extra(
                component=LogComponent.DIFFER,
                path=format_path(path),
                counts=result.summary.to_payload(),
            ),
        )
        return result

    def format_path(self, path: Iterable[str]) -> str:
        """Join ``path`` with dots; an empty path renders as ``root``."""
        return format_path(path)

    def filter_diffs(self, result: DiffResult, kind: DiffKind | str) -> tuple[TypeDiff, ...]:
        """Return the diffs of ``result`` with the given kind, in their original order."""
        return filter_diffs(result, kind)

    def _compare_nodes(self, expected: TypeNode, actual: TypeNode, path: DiffPath, diffs: list[TypeDiff]) -> None:
        if expected.kind is not actual.kind:
            diffs.append(
                TypeDiff(
                    path=path,
                    kind=DiffKind.TYPE_MISMATCH,
                    expected=node_label(expected),
                    actual=node_label(actual),
                    message=f"Type mismatch: expected {expected.kind}, got {actual.kind}",
                ),
            )
            return

        match expected.kind:
            case TypeKind.PRIMITIVE | TypeKind.UNKNOWN:
                if expected.name != actual.name:
                    diffs.append(
                        TypeDiff(
                            path=path,
                            kind=DiffKind.TYPE_MISMATCH,
                            expected=expected.name,
                            actual=actual.name,
                            message=f"Type name mismatch: expected {expected.name}, got {actual.name}",
                        ),
                    )
            case TypeKind.LITERAL:
                if not literal_equals(expected.value, actual.value):
                    expected_value = _literal_text(expected)
                    actual_value = _literal_text(actual)
                    diffs.append(
                        TypeDiff(
                            path=path,
                            kind=DiffKind.VALUE_MISMATCH,
                            expected=expected_value,
                            actual=actual_value,
                            message=f"Literal value mismatch: expected {expected_value}, got {actual_value}",
                        ),
                    )
            case TypeKind.OBJECT:
                self._compare_objects(expected, actual, path, diffs)
            case TypeKind.ARRAY | TypeKind.TUPLE:
                self._compare_positional(expected.children, actual.children, path, diffs)
            case TypeKind.UNION | TypeKind.INTERSECTION:
                self._compare_sets(expected, actual, path, diffs)
            case TypeKind.GENERIC:
                if expected.name != actual.name:
                    diffs.append(
                        TypeDiff(
                            path=path,
                            kind=DiffKind.TYPE_MISMATCH,
                            expected=expected.name,
                            actual=actual.name,
                            message=f"Generic type mismatch: expected {expected.name}, got {actual.name}",
                        ),
                    )
                self._compare_positional(expected.children, actual.children, path, diffs)
            case TypeKind.FUNCTION | TypeKind.CONDITIONAL | TypeKind.TEMPLATE | TypeKind.INDEXED:
                pass
            case _:  # pragma: no cover - TypeKind is closed
                pass

    def _compare_objects(self, expected: TypeNode, actual: TypeNode, path: DiffPath, diffs: list[TypeDiff]) -> None:
        expected_props = _properties(expected)
        actual_props = _properties(actual)

        for name, expected_prop in expected_props.items():
            actual_prop = actual_props.get(name)
            if actual_prop is None:
                if not expected_prop.optional:
                    diffs.append(
                        TypeDiff(
                            path=(*path, name),
                            kind=DiffKind.MISSING,
                            expected=node_label(expected_prop),
                            message=f"Missing property: {name}",
                        ),
                    )
                continue
            self._compare_nodes(expected_prop, actual_prop, (*path, name), diffs)

        for name, actual_prop in actual_props.items():
            if name not in expected_props:
                diffs.append(
                    TypeDiff(
                        path=(*path, name),
                        kind=DiffKind.EXTRA,
                        actual=node_label(actual_prop),
                        message=f"Extra property: {name}",
                    ),
                )

    def _compare_positional(
        self,
        expected: Sequence[TypeNode],
        actual: Sequence[TypeNode],
        path: DiffPath,
        diffs: list[TypeDiff],
    ) -> None:
        for index in range(max(len(expected), len(actual))):
            child_path = (*path, index_segment(index))
            if index >= len(expected):
                diffs.append(
                    TypeDiff(
                        path=child_path,
                        kind=DiffKind.EXTRA,
                        actual=node_label(actual[index]),
                        message=f"Extra element at index {index}",
                    ),
                )
            elif index >= len(actual):
                diffs.append(
                    TypeDiff(
                        path=child_path,
                        kind=DiffKind.MISSING,
                        expected=node_label(expected[index]),
                        message=f"Missing element at index {index}",
                    ),
                )
            else:
                self._compare_nodes(expected[index], actual[index], child_path, diffs)

    def _compare_sets(self, expected: TypeNode, actual: TypeNode, path: DiffPath, diffs: list[TypeDiff]) -> None:
        expected_labels = _ordered_labels(expected.children)
        actual_labels = _ordered_labels(actual.children)
        actual_set = set(actual_labels)
        expected_set = set(expected_labels)

        for label in expected_labels:
            if label not in actual_set:
                diffs.append(
                    TypeDiff(
                        path=path,
                        kind=DiffKind.MISSING,
                        expected=label,
                        message=f"Missing {expected.kind} member: {label}",
                    ),
                )
        for label in actual_labels:
            if label not in expected_set:
                diffs.append(
                    TypeDiff(
                        path=path,
                        kind=DiffKind.EXTRA,
                        actual=label,
                        message=f"Extra {actual.kind} member: {label}",
                    ),
                )


def _literal_text(node: TypeNode) -> str:
    return node.kind.value if node.value is None else coerce_literal(node.value)


def _properties(node: TypeNode) -> dict[str, TypeNode]:
    # Later duplicates win.
    return {node_label(child): child for child in node.children}


def _ordered_labels(children: Iterable[TypeNode]) -> list[str]:
    return list(dict.fromkeys(node_label(child) for child in children))


def compare_types(expected: TypeNode, actual: TypeNode, path: Sequence[str] = ()) -> DiffResult:
    """Compare two trees with a fresh ``TypeDiffer``."""
    return TypeDiffer().compare(expected, actual, path)


__all__ = [
    "TypeDiffer",
    "compare_types",
    "filter_diffs",
    "format_path",
    "index_segment",
    "node_label",
]
