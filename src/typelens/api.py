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

"""Public API façade for typelens inspection and comparison helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypedDict

from typelens.core.models import payload_json_schema, read_serialized_type_file
from typelens.diagnostics import parse_types_from_error, serialized_from_hint
from typelens.differ.type_differ import compare_types
from typelens.serializer.python_context import PythonTypingContext
from typelens.serializer.resolver import resolve_reference
from typelens.serializer.type_serializer import TypeSerializer

if TYPE_CHECKING:
    from pathlib import Path

    from typelens.config.models import SerializationOptions
    from typelens.core.typed import DiffResultData, SerializedTypeData
    from typelens.core.types import DiffResult, SerializedType
    from typelens.serializer.context import CheckingContext


class ComparisonData(TypedDict):
    expected: SerializedTypeData
    actual: SerializedTypeData
    result: DiffResultData


@dataclass(slots=True, frozen=True)
class Comparison:
    """Two snapshots and the diff between them."""

    expected: SerializedType
    actual: SerializedType
    result: DiffResult

    def to_payload(self) -> ComparisonData:
        """Return the JSON payload for this comparison."""
        return {
            "expected": self.expected.to_payload(),
            "actual": self.actual.to_payload(),
            "result": self.result.to_payload(),
        }


def inspect_reference(
    reference: str,
    *,
    options: SerializationOptions | None = None,
    context: CheckingContext | None = None,
) -> SerializedType | None:
    """Resolve ``package.module:Name`` and serialize the type found there.

    Returns:
        The snapshot, or ``None`` when the reference names no attribute.

    Raises:
        TypeReferenceError: If the reference is malformed or its module cannot
            be imported.
    """
    location = resolve_reference(reference)
    if location is None:
        return None
    serializer = TypeSerializer(context or PythonTypingContext())
    return serializer.serialize(location.handle, location.file_path, location.position, options)


def compare_serialized(expected: SerializedType, actual: SerializedType) -> Comparison:
    """Diff two existing snapshots."""
    return Comparison(expected=expected, actual=actual, result=compare_types(expected.type_node, actual.type_node))


def compare_references(
    expected_reference: str,
    actual_reference: str,
    *,
    options: SerializationOptions | None = None,
) -> Comparison | None:
    """Inspect two references and diff their trees.

    Returns:
        The comparison, or ``None`` when either reference names no attribute.
    """
    expected = inspect_reference(expected_reference, options=options)
    actual = inspect_reference(actual_reference, options=options)
    if expected is None or actual is None:
        return None
    return compare_serialized(expected, actual)


def compare_files(expected_path: Path, actual_path: Path) -> Comparison:
    """Diff two snapshots previously saved as JSON payloads.

    Raises:
        PayloadValidationError: If either file is not a valid payload.
    """
    return compare_serialized(read_serialized_type_file(expected_path), read_serialized_type_file(actual_path))


def explain_error(
    message: str,
    actual_reference: str,
    *,
    options: SerializationOptions | None = None,
) -> Comparison | None:
    """Compare the expected type named in a checker message with an inspected type.

    Returns:
        The comparison, or ``None`` when the message is not a recognised type
        mismatch or the reference names no attribute.
    """
    hint = parse_types_from_error(message)
    if hint is None:
        return None
    actual = inspect_reference(actual_reference, options=options)
    if actual is None:
        return None
    expected = serialized_from_hint(hint, file_path=actual.file_path, position=actual.position)
    return compare_serialized(expected, actual)


__all__ = [
    "Comparison",
    "compare_files",
    "compare_references",
    "compare_serialized",
    "explain_error",
    "inspect_reference",
    "payload_json_schema",
]
