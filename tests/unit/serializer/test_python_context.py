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

"""Unit tests for PythonTypingContext against real runtime annotations."""

from __future__ import annotations

import collections.abc
import typing
from typing import Any, Literal, LiteralString, Optional

import pytest

from tests.fixtures import typing_samples as samples
from typelens.config import SerializationOptions
from typelens.core.model_types import TypeKind
from typelens.core.types import TypeNode
from typelens.serializer import PythonTypingContext, TypeSerializer, render_annotation
from typelens.serializer.python_context import unwrap_qualifiers

pytestmark = pytest.mark.unit


@pytest.fixture
def context() -> PythonTypingContext:
    return PythonTypingContext()


@pytest.fixture
def serializer(context: PythonTypingContext) -> TypeSerializer:
    return TypeSerializer(context)


def _node(serializer: TypeSerializer, annotation: object, **options: Any) -> TypeNode:
    return serializer.serialize(annotation, options=SerializationOptions(**options)).type_node


def _children(node: TypeNode) -> dict[str, TypeNode]:
    return {child.label: child for child in node.children}


@pytest.mark.parametrize(
    ("annotation", "name"),
    [
        (int, "int"),
        (str, "str"),
        (bool, "bool"),
        (float, "float"),
        (bytes, "bytes"),
        (None, "None"),
        (type(None), "None"),
        (Any, "Any"),
        (typing.Never, "Never"),
        (typing.NoReturn, "Never"),
    ],
)
def test_primitives(serializer: TypeSerializer, annotation: object, name: str) -> None:
    assert _node(serializer, annotation) == TypeNode(kind=TypeKind.PRIMITIVE, name=name)


def test_object_is_top_type(serializer: TypeSerializer) -> None:
    assert _node(serializer, object) == TypeNode(kind=TypeKind.UNKNOWN, name="unknown")


def test_single_literal(serializer: TypeSerializer) -> None:
    assert _node(serializer, Literal["fast"]) == TypeNode(kind=TypeKind.LITERAL, value="fast")


def test_literal_none_is_primitive(serializer: TypeSerializer) -> None:
    assert _node(serializer, Literal[None]) == TypeNode(kind=TypeKind.PRIMITIVE, name="None")


def test_multi_value_literal_becomes_union_of_literals(serializer: TypeSerializer) -> None:
    node = _node(serializer, Literal["a", 1, True])

    assert node.kind is TypeKind.UNION
    assert [child.value for child in node.children] == ["a", 1, True]


def test_optional_is_union_with_none(serializer: TypeSerializer) -> None:
    node = _node(serializer, Optional[int])  # noqa: UP045

    assert node == TypeNode(
        kind=TypeKind.UNION,
        children=(TypeNode(kind=TypeKind.PRIMITIVE, name="int"), TypeNode(kind=TypeKind.PRIMITIVE, name="None")),
    )


def test_pipe_union_keeps_member_order(serializer: TypeSerializer) -> None:
    node = _node(serializer, str | int | None)

    assert [child.name for child in node.children] == ["str", "int", "None"]


@pytest.mark.parametrize(
    "annotation",
    [list[int], collections.abc.Sequence[int], collections.abc.MutableSequence[int], tuple[int, ...]],
)
def test_array_forms(serializer: TypeSerializer, annotation: object) -> None:
    assert _node(serializer, annotation) == TypeNode(
        kind=TypeKind.ARRAY,
        children=(TypeNode(kind=TypeKind.PRIMITIVE, name="int"),),
    )


def test_bare_list_is_array_without_element(serializer: TypeSerializer) -> None:
    assert _node(serializer, list) == TypeNode(kind=TypeKind.ARRAY)


def test_fixed_tuple(serializer: TypeSerializer) -> None:
    node = _node(serializer, tuple[int, str])

    assert node.kind is TypeKind.TUPLE
    assert [child.name for child in node.children] == ["int", "str"]


def test_callable_annotation(serializer: TypeSerializer) -> None:
    node = _node(serializer, collections.abc.Callable[[int, str], bool])

    assert node.kind is TypeKind.FUNCTION
    assert [child.name for child in node.children] == ["arg0", "arg1", "return"]
    assert node.children[-1].kind is TypeKind.PRIMITIVE


def test_callable_with_ellipsis_parameters(serializer: TypeSerializer) -> None:
    node = _node(serializer, collections.abc.Callable[..., int])

    assert node.children[0] == TypeNode(kind=TypeKind.PRIMITIVE, name="...", optional=True)


def test_function_signature(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.greet)

    assert node.name == "function"
    assert node.children == (
        TypeNode(kind=TypeKind.PRIMITIVE, name="name"),
        TypeNode(kind=TypeKind.PRIMITIVE, name="excited", optional=True),
        TypeNode(kind=TypeKind.PRIMITIVE, name="return"),
    )


def test_variadic_parameters_are_optional(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.collect)

    assert [(child.name, child.optional) for child in node.children] == [
        ("*values", True),
        ("**options", True),
        ("return", False),
    ]


def test_overloaded_function_uses_first_overload(context: PythonTypingContext) -> None:
    signatures = context.call_signatures(samples.parse)

    assert len(signatures) == 2
    assert signatures[0].parameters[0].type is str
    assert signatures[0].return_type is int


def test_function_without_signatures(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.greet, include_signatures=False)

    assert node == TypeNode(kind=TypeKind.FUNCTION, name="(name: str, excited: bool = ...) -> str")


def test_literal_string_is_template(serializer: TypeSerializer) -> None:
    assert _node(serializer, LiteralString) == TypeNode(kind=TypeKind.TEMPLATE, name="LiteralString")


def test_typed_dict_modifiers(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.UserRecord)

    children = _children(node)
    assert node.kind is TypeKind.OBJECT
    assert list(children) == ["id", "email", "status"]
    assert children["id"].readonly is True
    assert children["email"].optional is True
    assert children["status"].kind is TypeKind.UNION


def test_typed_dict_total_false_marks_keys_optional(serializer: TypeSerializer) -> None:
    children = _children(_node(serializer, samples.Movie))

    assert children["title"].optional is True
    assert children["title"].readonly is True
    assert children["year"].optional is True


def test_self_referential_typed_dict_terminates(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Node, max_depth=5)

    second_next = node.children[1].children[0].children[1]
    assert node.kind is TypeKind.OBJECT
    assert node.children[1].name == "next"
    assert second_next.kind is TypeKind.UNION
    assert second_next.children[0] == TypeNode(kind=TypeKind.UNKNOWN, name="[Circular]")


def test_frozen_dataclass_fields_are_readonly(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Point)

    assert node.children == (
        TypeNode(kind=TypeKind.PRIMITIVE, name="x", readonly=True),
        TypeNode(kind=TypeKind.PRIMITIVE, name="y", readonly=True),
    )


def test_dataclass_unwraps_annotated_fields(serializer: TypeSerializer) -> None:
    children = _children(_node(serializer, samples.Tagged))

    assert children["tags"].kind is TypeKind.ARRAY
    assert children["weight"] == TypeNode(kind=TypeKind.PRIMITIVE, name="weight")


def test_named_tuple_fields_are_readonly(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Pair)

    assert [(child.name, child.readonly) for child in node.children] == [("left", True), ("right", True)]


def test_pydantic_model_fields(serializer: TypeSerializer) -> None:
    children = _children(_node(serializer, samples.Profile))

    assert children["name"].optional is False
    assert children["nickname"].optional is True
    assert children["nickname"].kind is TypeKind.UNION
    assert children["slug"].readonly is True
    assert children["name"].readonly is False


def test_frozen_pydantic_model_is_readonly(serializer: TypeSerializer) -> None:
    children = _children(_node(serializer, samples.Settings))

    assert children["host"].readonly is True
    assert children["port"].optional is True


def test_annotated_class_skips_class_vars(serializer: TypeSerializer) -> None:
    children = _children(_node(serializer, samples.Plain))

    assert list(children) == ["limit", "label"]
    assert children["limit"].readonly is True


def test_enum_class_is_not_an_object(context: PythonTypingContext) -> None:
    from enum import Enum  # noqa: PLC0415

    class Color(Enum):
        RED = "red"

    assert context.properties_of_type(Color) == ()


def test_builtin_classes_have_no_properties(context: PythonTypingContext) -> None:
    assert context.properties_of_type(dict) == ()


def test_type_alias_expands_by_default(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Coordinates)

    assert node.kind is TypeKind.TUPLE
    assert len(node.children) == 2


def test_type_alias_kept_as_generic(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Coordinates, expand_aliases=False)

    assert node == TypeNode(kind=TypeKind.GENERIC, name="Coordinates")


def test_parameterized_alias_substitutes_arguments(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Box[int])

    assert node == TypeNode(kind=TypeKind.ARRAY, children=(TypeNode(kind=TypeKind.PRIMITIVE, name="int"),))


def test_parameterized_alias_kept_as_generic(serializer: TypeSerializer) -> None:
    node = _node(serializer, samples.Box[int], expand_aliases=False)

    assert node == TypeNode(
        kind=TypeKind.GENERIC,
        name="Box",
        children=(TypeNode(kind=TypeKind.PRIMITIVE, name="int"),),
    )


def test_structural_forms_stay_structural_without_alias_expansion(serializer: TypeSerializer) -> None:
    assert _node(serializer, list[int], expand_aliases=False).kind is TypeKind.ARRAY
    assert _node(serializer, int | str, expand_aliases=False).kind is TypeKind.UNION


def test_parameterized_generic_class(serializer: TypeSerializer) -> None:
    node = _node(serializer, dict[str, int])

    assert node == TypeNode(
        kind=TypeKind.GENERIC,
        name="dict",
        children=(TypeNode(kind=TypeKind.PRIMITIVE, name="str"), TypeNode(kind=TypeKind.PRIMITIVE, name="int")),
    )


def test_type_identity_shares_equal_annotations(context: PythonTypingContext) -> None:
    assert context.type_identity(list[int]) == context.type_identity(list[int])


@pytest.mark.parametrize(
    ("annotation", "rendered"),
    [
        (int, "int"),
        (None, "None"),
        (Optional[samples.Point], "Point | None"),  # noqa: UP045
        (dict[str, list[int]], "dict[str, list[int]]"),
        (Literal["a", 1], "Literal['a', 1]"),
        (collections.abc.Callable[[int], str], "Callable[[int], str]"),
        (tuple[()], "tuple[()]"),
        (samples.Coordinates, "Coordinates"),
    ],
)
def test_render_annotation(annotation: object, rendered: str) -> None:
    assert render_annotation(annotation) == rendered


def test_unwrap_qualifiers_reports_flags() -> None:
    qualified = unwrap_qualifiers(typing.Final[typing.Annotated[int, "meta"]])

    assert qualified.type is int
    assert qualified.readonly is True
    assert qualified.required is None


def test_unwrap_bare_class_var_leaves_any() -> None:
    qualified = unwrap_qualifiers(typing.ClassVar)

    assert qualified.type is Any
    assert qualified.class_var is True
