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

"""JSON value types and the single place where typelens turns payloads into text."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import cast

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "dump_json",
    "normalise_enums_for_json",
]

type JSONValue = str | int | float | bool | dict[str, JSONValue] | list[JSONValue] | None
type JSONMapping = dict[str, JSONValue]
type JSONList = list[JSONValue]


def _json_key(key: object) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return key if isinstance(key, str) else str(key)


def normalise_enums_for_json(value: object) -> JSONValue:
    """Return ``value`` with enums replaced by their values, recursively.

    Mappings become ``dict`` with string keys, lists and tuples become
    ``list``; anything else that is not a JSON scalar is stringified.
    """
    match value:
        case Enum():
            return cast("JSONValue", value.value)
        case str() | int() | float() | bool() | None:
            return value
        case Mapping():
            items = cast("Mapping[object, object]", value).items()
            return {_json_key(key): normalise_enums_for_json(item) for key, item in items}
        case list() | tuple():
            return [normalise_enums_for_json(item) for item in cast("list[object] | tuple[object, ...]", value)]
        case _:
            return str(value)


def dump_json(payload: object, *, indent: int | None = 2) -> str:
    """Serialise ``payload`` (after enum normalisation) without a trailing newline."""
    return json.dumps(normalise_enums_for_json(payload), indent=indent, ensure_ascii=False)
