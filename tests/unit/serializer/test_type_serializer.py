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

"""Unit tests for TypeSerializer classification against a stub checking context."""

from __future__ import annotations

import re

import pytest

from tests.fixtures.stubs import (
    FakeType,
    StubCheckingContext,
    fake_alias,
    fake_array,
    fake_function,
    fake_literal,
    fake_object,
    fake_primitive,
    fake_tuple,
    fake_union,
)
from typelens.config import SerializationOptions
from typelens.core.model_types import TypeKind
from typelens.core.types import Position, TypeNode
from typelens.serializer import TypeSerializer, serialize_type
from typelens.serializer.context import CallSignature, ParameterSymbol, PropertySymbol

pytestmark = pytest.mark.unit

ID_PATTERN = re.compile(r"^\d+-[0-9a-z]{7}$")


@pytest.fixture
def serializer() -> TypeSerializer:
    return TypeSerializer(StubCheckingContext())


def test_serialize_primitive(serializer: TypeSerializer) -> None:
    snapshot = serializer.serialize(fake_primitive("str"))

    assert snapshot.type_node == TypeNode(kind=TypeKind.PRIMITIVE, name="str")
    assert snapshot.display_name == "str"


def test_serialize_top_type_as_unknown(serializer: TypeSerializer) -> None:
    node = serializer.serialize(fake_primitive("unknown")).type_node

    assert node == TypeNode(kind=TypeKind.UNKNOWN, name="unknown")


@pytest.mark.parametrize("value", ["active", 0, 1.5, False, True])
def test_serialize_literal_keeps_value(serializer: TypeSerializer, value: str | float | bool) -> None:
    node = serializer.serialize(fake_literal(value)).type_node

    assert node.kind is TypeKind.LITERAL
    assert node.value == value
    assert type(node.value) is type(value)


def test_serialize_union_preserves_member_order(serializer: TypeSerializer) -> None:
    handle = fake_union(fake_literal("a"), fake_primitive("int"), fake_primitive("None"))

    node = serializer.serialize(handle).type_node

    assert node.kind is TypeKind.UNION
    assert [child.label for child in node.children] == ["a", "int", "None"]


def test_serialize_intersection(serializer: TypeSerializer) -> None:
    handle = FakeType(text="A & B", intersection=(fake_object("A"), fake_object("B")))

    node = serializer.serialize(handle).type_node

    assert node.kind is TypeKind.INTERSECTION
    assert len(node.children) == 2


def test_union_wins_over_later_classifications(serializer: TypeSerializer) -> None:
    handle = FakeType(text="odd", union=(fake_primitive("int"),), primitive="int", array=True)

    assert serializer.serialize(handle).type_node.kind is TypeKind.UNION


def test_serialize_array_with_element(serializer: TypeSerializer) -> None:
    node = serializer.serialize(fake_array(fake_primitive("int"))).type_node

    assert node == TypeNode(kind=TypeKind.ARRAY, children=(TypeNode(kind=TypeKind.PRIMITIVE, name="int"),))


def test_serialize_array_without_element(serializer: TypeSerializer) -> None:
    node = serializer.serialize(fake_array(None)).type_node

    assert node == TypeNode(kind=TypeKind.ARRAY)


def test_serialize_tuple_slots(serializer: TypeSerializer) -> None:
    node = serializer.serialize(fake_tuple(fake_primitive("int"), fake_primitive("str"))).type_node

    assert node.kind is TypeKind.TUPLE
    assert [child.name for child in node.children] == ["int", "str"]


def test_serialize_function_signature(serializer: TypeSerializer) -> None:
    handle = fake_function(
        [("name", fake_primitive("str"), False), ("loud", fake_primitive("bool"), True)],
        fake_primitive("str"),
    )

    node = serializer.serialize(handle).type_node

    assert node.kind is TypeKind.FUNCTION
    assert node.name == "function"
    assert [(child.name, child.optional) for child in node.children] == [
        ("name", False),
        ("loud", True),
        ("return", False),
    ]
    assert node.children[-1].kind is TypeKind.PRIMITIVE


def test_serialize_function_uses_first_overload(serializer: TypeSerializer) -> None:
    other = CallSignature(
        parameters=(ParameterSymbol(name="raw", type=fake_primitive("bytes")),),
        return_type=fake_primitive("float"),
    )
    handle = fake_function([("raw", fake_primitive("str"), False)], fake_primitive("int"), overloads=[other])

    node = serializer.serialize(handle).type_node

    assert [child.label for child in node.children] == ["raw", "return"]
    assert len(node.children) == 2


def test_function_without_signatures_option_collapses(serializer: TypeSerializer) -> None:
    handle = fake_function([("x", fake_primitive("int"), False)], fake_primitive("int"), text="(x: int) -> int")

    node = serializer.serialize(handle, options=SerializationOptions(include_signatures=False)).type_node

    assert node == TypeNode(kind=TypeKind.FUNCTION, name="(x: int) -> int")


@pytest.mark.parametrize(
    ("flag", "kind"),
    [
        ("conditional", TypeKind.CONDITIONAL),
        ("template", TypeKind.TEMPLATE),
        ("indexed", TypeKind.INDEXED),
    ],
)
def test_opaque_kinds_carry_type_string(serializer: TypeSerializer, flag: str, kind: TypeKind) -> None:
    handle = FakeType(text="T extends U ? X : Y", **{flag: True})  # type: ignore[arg-type]

    node = serializer.serialize(handle).type_node

    assert node == TypeNode(kind=kind, name="T extends U ? X : Y")


def test_serialize_object_properties(serializer: TypeSerializer) -> None:
    handle = FakeType(
        text="User",
        properties=[
            PropertySymbol(name="id", type=fake_primitive("int"), readonly=True),
            PropertySymbol(name="email", type=fake_primitive("str"), optional=True),
        ],
    )

    node = serializer.serialize(handle).type_node

    assert node.kind is TypeKind.OBJECT
    assert node.children == (
        TypeNode(kind=TypeKind.PRIMITIVE, name="id", readonly=True),
        TypeNode(kind=TypeKind.PRIMITIVE, name="email", optional=True),
    )


def test_property_name_replaces_rendered_name(serializer: TypeSerializer) -> None:
    handle = fake_object("Box", content=FakeType(text="Tag"))

    node = serializer.serialize(handle).type_node

    assert node.children[0].name == "content"
    assert node.children[0].kind is TypeKind.UNKNOWN


def test_generic_reference_with_arguments(serializer: TypeSerializer) -> None:
    handle = fake_alias("Promise", fake_primitive("string"))

    node = serializer.serialize(handle).type_node

    assert node == TypeNode(
        kind=TypeKind.GENERIC,
        name="Promise",
        children=(TypeNode(kind=TypeKind.PRIMITIVE, name="string"),),
    )


def test_alias_without_arguments_falls_through_to_unknown(serializer: TypeSerializer) -> None:
    node = serializer.serialize(fake_alias("Opaque")).type_node

    assert node == TypeNode(kind=TypeKind.UNKNOWN, name="Opaque")


def test_unclassifiable_handle_is_unknown_with_rendering(serializer: TypeSerializer) -> None:
    node = serializer.serialize(FakeType(text="symbol")).type_node

    assert node == TypeNode(kind=TypeKind.UNKNOWN, name="symbol")


def test_expand_aliases_resolves_target(serializer: TypeSerializer) -> None:
    target = fake_object("{ id: int }", id=fake_primitive("int"))
    handle = fake_alias("UserId", target=target)

    node = serializer.serialize(handle).type_node

    assert node.kind is TypeKind.OBJECT
    assert node.children[0].name == "id"


def test_alias_resolution_stops_on_self_reference(serializer: TypeSerializer) -> None:
    handle = fake_alias("Loop")
    handle.target = handle

    node = serializer.serialize(handle).type_node

    assert node == TypeNode(kind=TypeKind.UNKNOWN, name="Loop")


def test_no_expand_aliases_keeps_generic_reference(serializer: TypeSerializer) -> None:
    target = fake_object("{ id: int }", id=fake_primitive("int"))
    handle = fake_alias("User", target=target)

    node = serializer.serialize(handle, options=SerializationOptions(expand_aliases=False)).type_node

    assert node == TypeNode(kind=TypeKind.GENERIC, name="User")


def test_serialize_records_location_and_fresh_ids(serializer: TypeSerializer) -> None:
    handle = fake_primitive("int")
    position = Position(line=4, character=2)

    first = serializer.serialize(handle, "models.py", position)
    second = serializer.serialize(handle, "models.py", position)

    assert first.file_path == "models.py"
    assert first.position == position
    assert ID_PATTERN.match(first.id)
    assert first.id != second.id


def test_serialize_type_function_uses_given_options() -> None:
    handle = fake_array(fake_array(fake_primitive("int")))

    snapshot = serialize_type(StubCheckingContext(), handle, options=SerializationOptions(max_depth=1))

    assert snapshot.type_node.children[0].children[0] == TypeNode(kind=TypeKind.UNKNOWN, name="...")


def test_serializer_default_options_apply_per_instance() -> None:
    serializer = TypeSerializer(StubCheckingContext(), SerializationOptions(include_signatures=False))
    handle = fake_function([], fake_primitive("None"), text="() -> None")

    assert serializer.serialize(handle).type_node.name == "() -> None"
