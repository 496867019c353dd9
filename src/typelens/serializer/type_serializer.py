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

"""Serialization of checker type handles into ``TypeNode`` trees.

``TypeSerializer`` walks a type handle through a ``CheckingContext`` and
classifies every node into one of the closed ``TypeKind`` variants. The walk is
bounded twice: a hard ``max_depth`` ceiling checked before any inspection, and
a cycle guard that cuts re-expansion of a handle that reappears more than two
levels below the depth where the call first met it.

All bookkeeping lives in a ``_SerializationRun`` created per ``serialize``
call, so one serializer may be shared freely between threads.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Final

from typelens._internal.logging_utils import structured_extra
from typelens.config.models import SerializationOptions
from typelens.core.model_types import LogComponent, TypeKind
from typelens.core.type_aliases import (
    CIRCULAR_MARKER,
    DEPTH_MARKER,
    RETURN_SLOT_NAME,
    UNKNOWN_PRIMITIVE,
)
from typelens.core.types import Position, SerializedType, TypeNode
from typelens.formatting import create_id

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Sequence

    from .context import CallSignature, CheckingContext, PropertySymbol

logger: logging.Logger = logging.getLogger("typelens.serializer")

# A handle may reappear this many levels below its first occurrence before the
# cycle guard cuts it.
CIRCULAR_DEPTH_GAP: Final[int] = 2
FUNCTION_NODE_NAME: Final[str] = "function"


class _SerializationRun:
    """Call-scoped state of one top-level serialization."""

    __slots__ = ("context", "options", "visited")

    def __init__(self, context: CheckingContext, options: SerializationOptions) -> None:
        self.context = context
        self.options = options
        # identity -> depth at which the call first met the handle
        self.visited: dict[Hashable, int] = {}

    def serialize(self, type_: object, depth: int) -> TypeNode:
        if depth > self.options.max_depth:
            return TypeNode(kind=TypeKind.UNKNOWN, name=DEPTH_MARKER)

        identity = self._identity(type_)
        first_seen = self.visited.get(identity)
        if first_seen is not None and depth - first_seen > CIRCULAR_DEPTH_GAP:
            return TypeNode(kind=TypeKind.UNKNOWN, name=CIRCULAR_MARKER)

        self.visited.setdefault(identity, depth)
        return self._classify_guarded(type_, depth)

    def _identity(self, type_: object) -> Hashable:
        try:
            return self.context.type_identity(type_)
        except Exception as exc:
            logger.debug(
                "type_identity failed; falling back to object identity: %s",
                exc,
                extra=structured_extra(component=LogComponent.SERIALIZER),
            )
            return id(type_)

    def type_string(self, type_: object) -> str:
        try:
            return self.context.type_to_string(type_)
        except Exception as exc:
            logger.debug(
                "type_to_string failed: %s",
                exc,
                extra=structured_extra(component=LogComponent.SERIALIZER),
            )
            return repr(type_)

    def _classify_guarded(self, type_: object, depth: int) -> TypeNode:
        try:
            return self._classify(type_, depth)
        except Exception as exc:
            logger.debug(
                "Checking context query failed; degrading to unknown: %s",
                exc,
                extra=structured_extra(component=LogComponent.SERIALIZER, depth=depth),
            )
            return TypeNode(kind=TypeKind.UNKNOWN, name=self.type_string(type_))

    def _children(self, handles: Iterable[object], depth: int) -> tuple[TypeNode, ...]:
        return tuple(self.serialize(handle, depth + 1) for handle in handles)

    def _resolve_aliases(self, type_: object) -> object:
        seen: set[int] = {id(type_)}
        target = type_
        while (resolved := self.context.resolve_alias(target)) is not None:
            if id(resolved) in seen:
                break
            seen.add(id(resolved))
            target = resolved
        return target

    def _classify(self, type_: object, depth: int) -> TypeNode:  # noqa: C901, PLR0911
        context = self.context
        if not self.options.expand_aliases:
            alias = context.alias_reference(type_)
            if alias is not None:
                return TypeNode(
                    kind=TypeKind.GENERIC,
                    name=alias.name,
                    children=self._children(alias.type_arguments, depth),
                )
        else:
            type_ = self._resolve_aliases(type_)

        if (members := context.union_members(type_)) is not None:
            return TypeNode(kind=TypeKind.UNION, children=self._children(members, depth))
        if (members := context.intersection_members(type_)) is not None:
            return TypeNode(kind=TypeKind.INTERSECTION, children=self._children(members, depth))
        if (value := context.literal_value(type_)) is not None:
            return TypeNode(kind=TypeKind.LITERAL, value=value)
        if (primitive := context.primitive_name(type_)) is not None:
            if primitive == UNKNOWN_PRIMITIVE:
                return TypeNode(kind=TypeKind.UNKNOWN, name=UNKNOWN_PRIMITIVE)
            return TypeNode(kind=TypeKind.PRIMITIVE, name=primitive)
        if context.is_array_type(type_):
            element = context.array_element_type(type_)
            children = () if element is None else self._children((element,), depth)
            return TypeNode(kind=TypeKind.ARRAY, children=children)
        if (slots := context.tuple_element_types(type_)) is not None:
            return TypeNode(kind=TypeKind.TUPLE, children=self._children(slots, depth))
        if signatures := context.call_signatures(type_):
            return self._function(type_, signatures, depth)
        if context.is_conditional_type(type_):
            return TypeNode(kind=TypeKind.CONDITIONAL, name=self.type_string(type_))
        if context.is_template_literal_type(type_):
            return TypeNode(kind=TypeKind.TEMPLATE, name=self.type_string(type_))
        if context.is_indexed_access_type(type_):
            return TypeNode(kind=TypeKind.INDEXED, name=self.type_string(type_))
        if properties := context.properties_of_type(type_):
            return TypeNode(kind=TypeKind.OBJECT, children=self._properties(properties, depth))
        alias = context.alias_reference(type_)
        if alias is not None and alias.type_arguments:
            return TypeNode(
                kind=TypeKind.GENERIC,
                name=alias.name,
                children=self._children(alias.type_arguments, depth),
            )
        return TypeNode(kind=TypeKind.UNKNOWN, name=self.type_string(type_))

    def _function(self, type_: object, signatures: Sequence[CallSignature], depth: int) -> TypeNode:
        if not self.options.include_signatures:
            return TypeNode(kind=TypeKind.FUNCTION, name=self.type_string(type_))
        # Overloads beyond the first signature are not represented.
        signature = signatures[0]
        children: list[TypeNode] = []
        for parameter in signature.parameters:
            node = self.serialize(parameter.type, depth + 1)
            children.append(_attach(node, parameter.name, optional=parameter.optional))
        returned = self.serialize(signature.return_type, depth + 1)
        children.append(_attach(returned, RETURN_SLOT_NAME))
        return TypeNode(kind=TypeKind.FUNCTION, name=FUNCTION_NODE_NAME, children=tuple(children))

    def _properties(self, properties: Sequence[PropertySymbol], depth: int) -> tuple[TypeNode, ...]:
        children: list[TypeNode] = []
        for prop in properties:
            node = self.serialize(prop.type, depth + 1)
            children.append(_attach(node, prop.name, optional=prop.optional, readonly=prop.readonly))
        return tuple(children)


def _attach(node: TypeNode, name: str, *, optional: bool = False, readonly: bool = False) -> TypeNode:
    return replace(node, name=name, optional=optional, readonly=readonly)


class TypeSerializer:
    """Convert type handles of a checking context into serialized trees.

    Args:
        context: Checking context that owns the handles passed to
            ``serialize``.
        options: Default options used when ``serialize`` is called without
            explicit options.
    """

    def __init__(self, context: CheckingContext, options: SerializationOptions | None = None) -> None:
        self.context = context
        self.options = options or SerializationOptions()

    def serialize(
        self,
        type_: object,
        source_file: str | None = None,
        position: Position | None = None,
        options: SerializationOptions | None = None,
    ) -> SerializedType:
        """Serialize ``type_`` into a ``SerializedType``.

        Args:
            type_: Opaque handle understood by the bound context.
            source_file: File the handle was obtained from.
            position: Location within ``source_file``.
            options: Per-call options; defaults to the serializer's options.

        Returns:
            A fresh snapshot with a new id. Unsupported shapes degrade to
            ``unknown`` nodes rather than raising.
        """
        effective = options or self.options
        started = time.perf_counter()
        run = _SerializationRun(self.context, effective)
        type_node = run.serialize(type_, 0)
        display_name = run.type_string(type_)
        logger.debug(
            "Serialized %s as %s",
            display_name,
            type_node.kind,
            extra=structured_extra(
                component=LogComponent.SERIALIZER,
                kind=type_node.kind,
                duration_ms=(time.perf_counter() - started) * 1000,
                details={"maxDepth": effective.max_depth},
            ),
        )
        return SerializedType(
            id=create_id(),
            display_name=display_name,
            type_node=type_node,
            file_path=source_file,
            position=position,
        )


def serialize_type(
    context: CheckingContext,
    type_: object,
    source_file: str | None = None,
    position: Position | None = None,
    options: SerializationOptions | None = None,
) -> SerializedType:
    """Serialize ``type_`` with a throwaway ``TypeSerializer`` bound to ``context``."""
    return TypeSerializer(context).serialize(type_, source_file, position, options)


__all__ = ["CIRCULAR_DEPTH_GAP", "TypeSerializer", "serialize_type"]
