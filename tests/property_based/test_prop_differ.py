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

"""Property-based tests for the structural differ."""

from __future__ import annotations

import pytest
from hypothesis import given

from tests.property_based.strategies import path_segments, type_nodes
from typelens.core.model_types import DiffKind
from typelens.core.types import TypeNode
from typelens.differ import compare_types, filter_diffs, format_path

pytestmark = pytest.mark.property


@given(type_nodes())
def test_compare_is_reflexive(node: TypeNode) -> None:
    result = compare_types(node, node)

    assert result.has_changes is False
    assert result.diffs == ()


@given(type_nodes(), type_nodes())
def test_summary_partitions_diffs(expected: TypeNode, actual: TypeNode) -> None:
    result = compare_types(expected, actual)

    summary = result.summary
    assert summary.total == len(result.diffs)
    assert summary.missing == len(filter_diffs(result, DiffKind.MISSING))
    assert summary.extra == len(filter_diffs(result, DiffKind.EXTRA))
    assert result.has_changes is bool(result.diffs)


@given(type_nodes(), type_nodes())
def test_missing_and_extra_swap_when_sides_swap(expected: TypeNode, actual: TypeNode) -> None:
    forward = compare_types(expected, actual).summary
    backward = compare_types(actual, expected).summary

    assert forward.mismatch == backward.mismatch
    if not _has_optional(expected) and not _has_optional(actual):
        assert forward.missing == backward.extra
        assert forward.extra == backward.missing


@given(type_nodes())
def test_payload_round_trip(node: TypeNode) -> None:
    assert TypeNode.from_payload(node.to_payload()) == node


@given(path_segments())
def test_format_path_joins_segments(path: list[str]) -> None:
    rendered = format_path(path)

    assert rendered.split(".") == path


def _has_optional(node: TypeNode) -> bool:
    return node.optional or any(_has_optional(child) for child in node.children)
