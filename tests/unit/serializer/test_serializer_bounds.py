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

"""Unit tests for the serializer's depth ceiling, cycle guard and failure handling."""

from __future__ import annotations

import pytest

from tests.fixtures.stubs import (
    FakeType,
    RaisingContext,
    StubCheckingContext,
    fake_array,
    fake_object,
    fake_primitive,
    fake_union,
)
from typelens.config import SerializationOptions
from typelens.core.model_types import DiffKind, TypeKind
from typelens.core.types import TypeNode
from typelens.differ import compare_types
from typelens.serializer import TypeSerializer
from typelens.serializer.context import PropertySymbol

pytestmark = pytest.mark.unit

DEPTH = TypeNode(kind=TypeKind.UNKNOWN, name="...")
CIRCULAR = TypeNode(kind=TypeKind.UNKNOWN, name="[Circular]")


def _nested_arrays(levels: int) -> FakeType:
    handle = fake_primitive("int")
    for _ in range(levels):
        handle = fake_array(handle)
    return handle


def _depth_of(node: TypeNode) -> int:
    if not node.children:
        return 0
    return 1 + max(_depth_of(child) for child in node.children)


def _self_referential(text: str = "Node") -> FakeType:
    node = fake_object(text, value=fake_primitive("int"))
    node.properties.append(PropertySymbol(name="next", type=fake_union(node, fake_primitive("None")), optional=True))
    return node


def test_max_depth_zero_cuts_children_only() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=0))

    node = serializer.serialize(fake_array(fake_primitive("int"))).type_node

    assert node.kind is TypeKind.ARRAY
    assert node.children == (DEPTH,)


def test_depth_marker_never_exceeds_ceiling() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=3))

    node = serializer.serialize(_nested_arrays(10)).type_node

    assert _depth_of(node) == 4
    leaf = node.children[0].children[0].children[0].children[0]
    assert leaf == DEPTH


def test_self_reference_is_expanded_twice_before_cut() -> None:
    serializer = TypeSerializer(StubCheckingContext())

    node = serializer.serialize(_self_referential()).type_node

    first_next = node.children[1]
    second_next = first_next.children[0].children[1]
    assert first_next.kind is TypeKind.UNION
    assert first_next.name == "next"
    assert first_next.optional is True
    assert first_next.children[0].kind is TypeKind.OBJECT
    assert second_next.children == (CIRCULAR, TypeNode(kind=TypeKind.PRIMITIVE, name="None"))


def test_cycle_guard_applies_before_depth_is_reached() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=50))

    node = serializer.serialize(_self_referential()).type_node

    assert _depth_of(node) == 4


def test_depth_ceiling_wins_over_cycle_guard() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=1))

    node = serializer.serialize(_self_referential()).type_node

    assert node.children[1] == TypeNode(kind=TypeKind.UNION, name="next", optional=True, children=(DEPTH, DEPTH))


def test_handle_met_again_in_a_deeper_sibling_branch_is_circular() -> None:
    shared = fake_object("Address", street=fake_primitive("str"))
    deeper = fake_object("Deeper", address=shared)
    wrapper = fake_object("Outer", address=shared, inner=fake_object("Inner", deep=fake_object("Deep", deeper=deeper)))
    serializer = TypeSerializer(StubCheckingContext())

    node = serializer.serialize(wrapper).type_node

    assert node.children[0].kind is TypeKind.OBJECT
    deep_address = node.children[1].children[0].children[0].children[0]
    assert deep_address == TypeNode(kind=TypeKind.UNKNOWN, name="address")


def test_handle_met_again_within_two_levels_is_expanded() -> None:
    shared = fake_object("Address", street=fake_primitive("str"))
    wrapper = fake_object("Outer", address=shared, inner=fake_object("Inner", address=shared))
    serializer = TypeSerializer(StubCheckingContext())

    node = serializer.serialize(wrapper).type_node

    inner_address = node.children[1].children[0]
    assert inner_address.kind is TypeKind.OBJECT
    assert inner_address.children == (TypeNode(kind=TypeKind.PRIMITIVE, name="street"),)


def test_serialize_is_reentrant_across_calls() -> None:
    serializer = TypeSerializer(StubCheckingContext())
    handle = _self_referential()

    first = serializer.serialize(handle).type_node
    second = serializer.serialize(handle).type_node

    assert first == second


def test_context_failure_degrades_subtree_to_unknown() -> None:
    broken = fake_object("Broken", x=fake_primitive("int"))
    root = fake_object("Root", ok=fake_primitive("str"), bad=broken)
    serializer = TypeSerializer(RaisingContext(broken))

    node = serializer.serialize(root).type_node

    assert node.children[0] == TypeNode(kind=TypeKind.PRIMITIVE, name="ok")
    assert node.children[1] == TypeNode(kind=TypeKind.UNKNOWN, name="bad")


def test_context_failure_at_root_keeps_rendering() -> None:
    broken = fake_object("Broken", x=fake_primitive("int"))
    serializer = TypeSerializer(RaisingContext(broken))

    snapshot = serializer.serialize(broken)

    assert snapshot.type_node == TypeNode(kind=TypeKind.UNKNOWN, name="Broken")
    assert snapshot.display_name == "Broken"


def test_rendering_failure_falls_back_to_repr() -> None:
    broken = fake_object("Broken", x=fake_primitive("int"))
    serializer = TypeSerializer(RaisingContext(broken, fail_rendering=True))

    snapshot = serializer.serialize(broken)

    assert snapshot.type_node.kind is TypeKind.UNKNOWN
    assert snapshot.display_name == repr(broken)


def test_depth_placeholder_takes_property_name_and_flags() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=0))
    handle = fake_object("Root", child=fake_primitive("int"))
    handle.properties[0] = PropertySymbol(name="child", type=fake_primitive("int"), optional=True, readonly=True)

    node = serializer.serialize(handle).type_node

    assert node.children == (TypeNode(kind=TypeKind.UNKNOWN, name="child", optional=True, readonly=True),)


def test_depth_cut_siblings_keep_distinct_property_names() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=0))
    handle = fake_object("Root", a=fake_primitive("int"), b=fake_primitive("str"))

    node = serializer.serialize(handle).type_node

    assert [child.name for child in node.children] == ["a", "b"]
    assert all(child.kind is TypeKind.UNKNOWN for child in node.children)


def test_depth_cut_objects_still_report_missing_property() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(max_depth=0))
    expected = serializer.serialize(fake_object("E", a=fake_primitive("int"), b=fake_primitive("str"))).type_node
    actual = serializer.serialize(fake_object("A", a=fake_primitive("int"))).type_node

    result = compare_types(expected, actual)

    assert [(diff.kind, diff.path) for diff in result.diffs] == [(DiffKind.MISSING, ("b",))]
