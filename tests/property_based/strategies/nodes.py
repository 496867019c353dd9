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

"""Strategies producing serialized type trees."""

from __future__ import annotations

from dataclasses import replace

from hypothesis import strategies as st

from typelens.core.model_types import TypeKind
from typelens.core.types import TypeNode

NAMES = st.from_regex(r"[a-z][a-z0-9_]{0,7}", fullmatch=True)
LITERAL_VALUES = st.one_of(
    st.text(max_size=8),
    st.integers(min_value=-1000, max_value=1000),
    st.booleans(),
)
PRIMITIVE_NAMES = st.sampled_from(["str", "int", "float", "bool", "None", "Any"])
OPAQUE_KINDS = st.sampled_from([TypeKind.CONDITIONAL, TypeKind.TEMPLATE, TypeKind.INDEXED, TypeKind.UNKNOWN])
POSITIONAL_KINDS = st.sampled_from([TypeKind.ARRAY, TypeKind.TUPLE, TypeKind.UNION, TypeKind.INTERSECTION])


def leaf_nodes() -> st.SearchStrategy[TypeNode]:
    """Nodes without children."""
    return st.one_of(
        PRIMITIVE_NAMES.map(lambda name: TypeNode(kind=TypeKind.PRIMITIVE, name=name)),
        LITERAL_VALUES.map(lambda value: TypeNode(kind=TypeKind.LITERAL, value=value)),
        st.builds(lambda kind, name: TypeNode(kind=kind, name=name), OPAQUE_KINDS, NAMES),
    )


def unique_children(children: st.SearchStrategy[TypeNode]) -> st.SearchStrategy[tuple[TypeNode, ...]]:
    """Object children carrying distinct property names."""
    named = st.tuples(NAMES, children, st.booleans(), st.booleans()).map(
        lambda item: replace(item[1], name=item[0], optional=item[2], readonly=item[3]),
    )
    return st.lists(named, max_size=4, unique_by=lambda node: node.name).map(tuple)


def _extend(children: st.SearchStrategy[TypeNode]) -> st.SearchStrategy[TypeNode]:
    return st.one_of(
        st.builds(
            lambda kind, items: TypeNode(kind=kind, children=tuple(items)),
            POSITIONAL_KINDS,
            st.lists(children, max_size=4),
        ),
        unique_children(children).map(lambda items: TypeNode(kind=TypeKind.OBJECT, children=items)),
        st.builds(
            lambda name, items: TypeNode(kind=TypeKind.GENERIC, name=name, children=tuple(items)),
            NAMES,
            st.lists(children, max_size=3),
        ),
        st.builds(
            lambda items, returned: TypeNode(
                kind=TypeKind.FUNCTION,
                name="function",
                children=(*items, replace(returned, name="return")),
            ),
            st.lists(children, max_size=3),
            children,
        ),
    )


def type_nodes(max_leaves: int = 20) -> st.SearchStrategy[TypeNode]:
    """Arbitrary trees without duplicate object property names."""
    return st.recursive(leaf_nodes(), _extend, max_leaves=max_leaves)


def path_segments() -> st.SearchStrategy[list[str]]:
    """Property names and index markers."""
    index = st.integers(min_value=0, max_value=99).map(lambda value: f"[{value}]")
    return st.lists(st.one_of(NAMES, index), min_size=1, max_size=6)
