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

"""TypedDict payload shapes exchanged with presentation collaborators.

Keys use the camelCase spelling of the JSON wire format. Optional keys are
omitted from payloads rather than emitted as ``null``.
"""

from __future__ import annotations

from typing import NotRequired, TypedDict

from .type_aliases import LiteralValue


class TypeNodeData(TypedDict):
    kind: str
    name: NotRequired[str]
    value: NotRequired[LiteralValue]
    children: NotRequired[list[TypeNodeData]]
    optional: NotRequired[bool]
    readonly: NotRequired[bool]


class PositionData(TypedDict):
    line: int
    character: int


class SerializedTypeData(TypedDict):
    id: str
    displayName: str
    typeNode: TypeNodeData
    filePath: NotRequired[str]
    position: NotRequired[PositionData]


class TypeDiffData(TypedDict):
    path: list[str]
    kind: str
    message: str
    expected: NotRequired[str]
    actual: NotRequired[str]


class DiffSummaryData(TypedDict):
    missing: int
    extra: int
    mismatch: int


class DiffResultData(TypedDict):
    diffs: list[TypeDiffData]
    hasChanges: bool
    summary: DiffSummaryData


__all__ = [
    "DiffResultData",
    "DiffSummaryData",
    "PositionData",
    "SerializedTypeData",
    "TypeDiffData",
    "TypeNodeData",
]
