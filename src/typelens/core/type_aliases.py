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

"""Typed aliases used across typelens internals."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Final, NewType, TypeAlias

LiteralValue: TypeAlias = str | int | float | bool
PathSegment: TypeAlias = str
DiffPath: TypeAlias = tuple[PathSegment, ...]
TypeIdentity: TypeAlias = Hashable

SerializedTypeId = NewType("SerializedTypeId", str)
TypeReference = NewType("TypeReference", str)

ROOT_PATH_LABEL: Final[str] = "root"
RETURN_SLOT_NAME: Final[str] = "return"
DEPTH_MARKER: Final[str] = "..."
CIRCULAR_MARKER: Final[str] = "[Circular]"
UNKNOWN_PRIMITIVE: Final[str] = "unknown"

__all__ = [
    "CIRCULAR_MARKER",
    "DEPTH_MARKER",
    "RETURN_SLOT_NAME",
    "ROOT_PATH_LABEL",
    "UNKNOWN_PRIMITIVE",
    "DiffPath",
    "LiteralValue",
    "PathSegment",
    "SerializedTypeId",
    "TypeIdentity",
    "TypeReference",
]
