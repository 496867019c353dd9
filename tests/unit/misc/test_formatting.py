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

"""Unit tests for string formatting helpers and JSON output."""

from __future__ import annotations

import json
import re

import pytest

from typelens.core.model_types import DiffKind, TypeKind
from typelens.formatting import create_id, format_type_name, truncate_type
from typelens.json import dump_json, normalise_enums_for_json

pytestmark = pytest.mark.unit


def test_format_type_name_collapses_whitespace() -> None:
    assert format_type_name("  {\n\tid:   string;\n}  ") == "{ id: string; }"


def test_truncate_type_appends_ellipsis() -> None:
    assert truncate_type("abcdef", 3) == "abc..."


def test_truncate_type_keeps_short_strings() -> None:
    assert truncate_type("abc", 3) == "abc"
    assert truncate_type("x" * 100) == "x" * 100
    assert truncate_type("x" * 101) == "x" * 100 + "..."


def test_truncate_type_zero_disables() -> None:
    assert truncate_type("x" * 500, 0) == "x" * 500


def test_create_id_shape_and_uniqueness() -> None:
    ids = {create_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(re.fullmatch(r"\d{13,}-[0-9a-z]{7}", value) for value in ids)


def test_normalise_enums_for_json() -> None:
    payload = {TypeKind.OBJECT: [DiffKind.MISSING, (1, None)], "nested": {"ok": True}}

    assert normalise_enums_for_json(payload) == {
        "object": ["missing", [1, None]],
        "nested": {"ok": True},
    }


def test_dump_json_round_trips() -> None:
    text = dump_json({"kind": TypeKind.UNION, "name": "é"}, indent=None)

    assert json.loads(text) == {"kind": "union", "name": "é"}
    assert "é" in text
