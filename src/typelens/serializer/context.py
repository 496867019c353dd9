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

"""Checking-context protocol consumed by the type serializer.

A checking context owns the opaque type handles of some type checker and
answers the structural queries the serializer needs. The serializer never
inspects a handle itself; every decision is delegated to one of the queries
below. Concrete contexts subclass ``CheckingContext`` explicitly and override
the queries their checker supports; the remaining queries keep their
"not this shape" defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence

    from typelens.core.type_aliases import LiteralValue


def _no_handles() -> tuple[object, ...]:
    return ()


@dataclass(slots=True, frozen=True)
class ParameterSymbol:
    """One parameter of a call signature.

    Attributes:
        name: Declared parameter name.
        type: Type handle of the parameter.
        optional: Whether callers may omit the argument.
    """

    name: str
    type: object
    optional: bool = False


def _no_parameters() -> tuple[ParameterSymbol, ...]:
    return ()


@dataclass(slots=True, frozen=True)
class CallSignature:
    """A single call signature of a callable type.

    Attributes:
        parameters: Parameters in declaration order.
        return_type: Type handle of the return value.
    """

    parameters: tuple[ParameterSymbol, ...] = field(default_factory=_no_parameters)
    return_type: object = None


@dataclass(slots=True, frozen=True)
class PropertySymbol:
    """A named property of a structural object type.

    Attributes:
        name: Property name.
        type: Type handle of the property value.
        optional: Whether the property may be absent.
        readonly: Whether the declaration carries a readonly modifier.
    """

    name: str
    type: object
    optional: bool = False
    readonly: bool = False


@dataclass(slots=True, frozen=True)
class AliasReference:
    """Named alias carried by a type handle.

    Attributes:
        name: Alias or generic class name.
        type_arguments: Type argument handles, in order.
    """

    name: str
    type_arguments: tuple[object, ...] = field(default_factory=_no_handles)


class CheckingContext(Protocol):
    """Queries a type checker answers about its type handles.

    Only ``type_to_string`` is required. Every other query has a default that
    reports "not this shape", so a context supporting a subset of the type
    system stays small.
    """

    def type_to_string(self, type_: object) -> str:
        """Return the checker's canonical rendering of ``type_``."""
        ...  # pragma: no cover  # pylint: disable=unnecessary-ellipsis

    def type_identity(self, type_: object) -> Hashable:
        """Return a key identifying ``type_`` for cycle detection.

        The default is object identity, which matches checkers that intern
        their type handles.
        """
        return id(type_)

    def union_members(self, type_: object) -> Sequence[object] | None:
        """Return the members of a union type, or ``None``."""
        return None

    def intersection_members(self, type_: object) -> Sequence[object] | None:
        """Return the constituents of an intersection type, or ``None``."""
        return None

    def literal_value(self, type_: object) -> LiteralValue | None:
        """Return the value of a string, number or boolean literal type, or ``None``."""
        return None

    def primitive_name(self, type_: object) -> str | None:
        """Return the canonical name of a primitive type, or ``None``.

        The top type is reported as ``"unknown"``.
        """
        return None

    def is_array_type(self, type_: object) -> bool:
        """Return True for homogeneous array types."""
        return False

    def array_element_type(self, type_: object) -> object | None:
        """Return the element type of an array, or ``None`` when unavailable."""
        return None

    def tuple_element_types(self, type_: object) -> Sequence[object] | None:
        """Return the slot types of a fixed tuple, or ``None``."""
        return None

    def call_signatures(self, type_: object) -> Sequence[CallSignature]:
        """Return the call signatures of ``type_``; empty when not callable."""
        return ()

    def is_conditional_type(self, type_: object) -> bool:
        """Return True for conditional types."""
        return False

    def is_template_literal_type(self, type_: object) -> bool:
        """Return True for template literal types."""
        return False

    def is_indexed_access_type(self, type_: object) -> bool:
        """Return True for indexed access types."""
        return False

    def properties_of_type(self, type_: object) -> Sequence[PropertySymbol]:
        """Return the resolvable properties of ``type_``."""
        return ()

    def alias_reference(self, type_: object) -> AliasReference | None:
        """Return the alias symbol carried by ``type_``, or ``None``."""
        return None

    def resolve_alias(self, type_: object) -> object | None:
        """Return the type a lazily evaluated alias stands for, or ``None``."""
        return None


__all__ = [
    "AliasReference",
    "CallSignature",
    "CheckingContext",
    "ParameterSymbol",
    "PropertySymbol",
]
