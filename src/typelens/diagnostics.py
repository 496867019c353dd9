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

"""Extraction of expected/actual type strings from checker error messages.

Type checkers report assignment failures as prose. The patterns below pull the
two type renderings out of the common tsc, mypy and pyright phrasings so that
the expected side can be compared against a serialized actual type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal

from typelens.core.model_types import TypeKind
from typelens.core.types import SerializedType, TypeNode
from typelens.differ.type_differ import compare_types
from typelens.formatting import create_id, format_type_name

if TYPE_CHECKING:
    from typelens.core.types import DiffResult, Position

type CheckerName = Literal["tsc", "mypy", "pyright"]


@dataclass(slots=True, frozen=True)
class TypeMismatchHint:
    """Type strings recovered from one error message.

    Attributes:
        expected: Rendering of the required type.
        actual: Rendering of the offending type.
        checker: Checker whose phrasing matched.
    """

    expected: str
    actual: str
    checker: CheckerName


@dataclass(slots=True, frozen=True)
class _MessagePattern:
    checker: CheckerName
    regex: re.Pattern[str]
    actual_group: int
    expected_group: int


_PATTERNS: Final[tuple[_MessagePattern, ...]] = (
    _MessagePattern("tsc", re.compile(r"Type '(.+?)' is not assignable to type '(.+?)'"), 1, 2),
    _MessagePattern("tsc", re.compile(r"Expected type '(.+?)' but got '(.+?)'"), 2, 1),
    _MessagePattern(
        "tsc",
        re.compile(r"Argument of type '(.+?)' is not assignable to parameter of type '(.+?)'"),
        1,
        2,
    ),
    _MessagePattern(
        "mypy",
        re.compile(r'Incompatible types in assignment \(expression has type "(.+?)", variable has type "(.+?)"\)'),
        1,
        2,
    ),
    _MessagePattern(
        "mypy",
        re.compile(r'Argument \d+ to "[^"]+" has incompatible type "(.+?)"; expected "(.+?)"'),
        1,
        2,
    ),
    _MessagePattern(
        "mypy",
        re.compile(r'Incompatible return value type \(got "(.+?)", expected "(.+?)"\)'),
        1,
        2,
    ),
    _MessagePattern(
        "pyright",
        re.compile(r'Type "(.+?)" is not assignable to declared type "(.+?)"'),
        1,
        2,
    ),
    _MessagePattern(
        "pyright",
        re.compile(r'Argument of type "(.+?)" cannot be assigned to parameter "[^"]+" of type "(.+?)"'),
        1,
        2,
    ),
)


def parse_types_from_error(message: str) -> TypeMismatchHint | None:
    """Return the expected and actual type strings named in ``message``.

    Returns:
        The first matching hint, or ``None`` when no known phrasing matches.
    """
    text = format_type_name(message)
    for pattern in _PATTERNS:
        match = pattern.regex.search(text)
        if match:
            return TypeMismatchHint(
                expected=match.group(pattern.expected_group),
                actual=match.group(pattern.actual_group),
                checker=pattern.checker,
            )
    return None


def serialized_from_hint(
    hint: TypeMismatchHint,
    *,
    file_path: str | None = None,
    position: Position | None = None,
) -> SerializedType:
    """Wrap the expected side of ``hint`` as an opaque ``unknown`` node."""
    return SerializedType(
        id=f"error_expected_{create_id()}",
        display_name=hint.expected,
        type_node=TypeNode(kind=TypeKind.UNKNOWN, name=hint.expected),
        file_path=file_path,
        position=position,
    )


def compare_from_error(message: str, actual: SerializedType) -> DiffResult | None:
    """Compare the expected type named in ``message`` against ``actual``.

    Returns:
        The diff, or ``None`` when ``message`` is not a recognised mismatch.
    """
    hint = parse_types_from_error(message)
    if hint is None:
        return None
    expected = serialized_from_hint(hint, file_path=actual.file_path, position=actual.position)
    return compare_types(expected.type_node, actual.type_node)


__all__ = [
    "CheckerName",
    "TypeMismatchHint",
    "compare_from_error",
    "parse_types_from_error",
    "serialized_from_hint",
]
