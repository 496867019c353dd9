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

"""Resolution of ``module:attribute`` references into type handles."""

from __future__ import annotations

import importlib
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING

import typing_extensions

from typelens._internal.exceptions import TypeReferenceError
from typelens._internal.logging_utils import structured_extra
from typelens.core.model_types import LogComponent
from typelens.core.types import Position

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger("typelens.resolver")


@dataclass(slots=True, frozen=True)
class TypeLocation:
    """A type handle together with where it was found.

    Attributes:
        handle: Annotation object understood by ``PythonTypingContext``.
        file_path: Source file defining the handle, when known.
        position: Zero-based location of the definition, when known.
        label: The reference the handle was resolved from.
    """

    handle: object
    file_path: str | None
    position: Position | None
    label: str


def split_reference(reference: str) -> tuple[str, tuple[str, ...]]:
    """Split ``pkg.module:Outer.Inner`` into a module name and attribute path.

    Without a colon the last dotted component is taken as the attribute.

    Raises:
        TypeReferenceError: If either part is empty.
    """
    text = reference.strip()
    if ":" in text:
        module_name, _, qualname = text.partition(":")
    else:
        module_name, _, qualname = text.rpartition(".")
    parts = tuple(qualname.split(".")) if qualname else ()
    if not module_name or not parts or not all(parts):
        raise TypeReferenceError(reference, "expected 'package.module:Name'")
    return module_name, parts


def _is_type_like(value: object) -> bool:
    if isinstance(value, (type, typing.TypeAliasType, typing_extensions.TypeAliasType, types.UnionType)):
        return True
    if inspect.isroutine(value) or typing_extensions.get_origin(value) is not None:
        return True
    return type(value).__module__ in {"typing", "typing_extensions"}


def _annotation_of(owner: object, name: str) -> tuple[bool, object]:
    if not isinstance(owner, (types.ModuleType, type)):
        return False, None
    raw: Mapping[str, object] = inspect.get_annotations(owner)
    if name not in raw:
        return False, None
    try:
        hints = typing_extensions.get_type_hints(owner, include_extras=True)
    except (NameError, TypeError):
        return True, raw[name]
    return True, hints.get(name, raw[name])


def _source_file(obj: object) -> str | None:
    try:
        return inspect.getsourcefile(obj)  # pyright: ignore[reportArgumentType]
    except TypeError:
        return None


def _source_location(value: object, owner: object) -> tuple[str | None, Position | None]:
    file_path = _source_file(value)
    if file_path is None:
        return _source_file(owner), None
    try:
        _, line = inspect.getsourcelines(value)  # pyright: ignore[reportArgumentType]
    except (OSError, TypeError):
        return file_path, None
    return file_path, Position(line=max(line - 1, 0), character=0)


def resolve_reference(reference: str) -> TypeLocation | None:
    """Import a module attribute and return it as a type handle.

    Annotated names resolve to their annotation; other values that are not
    themselves types resolve to their class.

    Args:
        reference: ``package.module:Qualified.name``.

    Returns:
        The resolved location, or ``None`` when the attribute does not exist.

    Raises:
        TypeReferenceError: If the reference is malformed or importing the
            module fails for any reason.
    """
    module_name, parts = split_reference(reference)
    try:
        owner: object = importlib.import_module(module_name)
    except Exception as exc:
        raise TypeReferenceError(reference, str(exc) or type(exc).__name__) from exc

    value: object = owner
    for index, part in enumerate(parts):
        is_last = index == len(parts) - 1
        if is_last:
            annotated, annotation = _annotation_of(value, part)
            if annotated:
                file_path = _source_file(value)
                logger.debug(
                    "Resolved %s to its annotation",
                    reference,
                    extra=structured_extra(component=LogComponent.RESOLVER, reference=reference),
                )
                return TypeLocation(handle=annotation, file_path=file_path, position=None, label=reference)
        if not hasattr(value, part):
            logger.debug(
                "Attribute %s not found while resolving %s",
                part,
                reference,
                extra=structured_extra(component=LogComponent.RESOLVER, reference=reference),
            )
            return None
        owner = value
        value = getattr(value, part)

    handle = value if _is_type_like(value) else type(value)
    file_path, position = _source_location(handle, owner)
    logger.debug(
        "Resolved %s",
        reference,
        extra=structured_extra(component=LogComponent.RESOLVER, reference=reference),
    )
    return TypeLocation(handle=handle, file_path=file_path, position=position, label=reference)


__all__ = ["TypeLocation", "resolve_reference", "split_reference"]
