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

"""Checking context for Python runtime type annotations.

``PythonTypingContext`` treats annotation objects (``int``, ``list[str]``,
``Literal["a"]``, TypedDict classes, functions, PEP 695 aliases, ...) as type
handles. The mapping onto the serializer's classification is:

- unions: ``X | Y``, ``Optional[X]`` and multi-value ``Literal``;
- literals: single-value ``Literal`` of ``str``, ``int``, ``float`` or ``bool``;
- primitives: ``str``, ``int``, ``float``, ``complex``, ``bool``, ``bytes``,
  ``None``, ``Any`` and ``Never``; ``object`` is the top type;
- arrays: ``list[T]``, ``Sequence[T]``, ``MutableSequence[T]`` and
  ``tuple[T, ...]``; fixed tuples: ``tuple[A, B]``;
- callables: ``Callable[[...], R]`` and plain functions or methods;
- template literal: ``LiteralString``;
- objects: TypedDicts, dataclasses, NamedTuples, pydantic models and other
  annotated classes;
- generics: parameterized generic classes and type aliases.

Python has no intersection, conditional or indexed-access types.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import types
import typing
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, override

import typing_extensions
from pydantic import BaseModel

from typelens.core.type_aliases import UNKNOWN_PRIMITIVE

from .context import AliasReference, CallSignature, CheckingContext, ParameterSymbol, PropertySymbol

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sequence

    from typelens.core.type_aliases import LiteralValue

_NONE_TYPE: Final = type(None)
_UNION_ORIGINS: Final[tuple[object, ...]] = (typing.Union, types.UnionType)
_ARRAY_ORIGINS: Final[tuple[object, ...]] = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
# Parameterized forms classified structurally rather than as named generics.
_STRUCTURAL_ORIGINS: Final[tuple[object, ...]] = (
    *_UNION_ORIGINS,
    *_ARRAY_ORIGINS,
    tuple,
    collections.abc.Callable,
)
_ALIAS_TYPES: Final[tuple[type, ...]] = (typing.TypeAliasType, typing_extensions.TypeAliasType)
_NEVER_FORMS: Final[tuple[object, ...]] = (typing.Never, typing.NoReturn, typing_extensions.Never)
_LITERAL_STRING_FORMS: Final[tuple[object, ...]] = (typing.LiteralString, typing_extensions.LiteralString)
_PRIMITIVE_CLASSES: Final[tuple[tuple[type, str], ...]] = (
    (bool, "bool"),
    (int, "int"),
    (float, "float"),
    (complex, "complex"),
    (str, "str"),
    (bytes, "bytes"),
)
_READONLY_QUALIFIERS: Final[tuple[object, ...]] = (typing.Final, typing_extensions.ReadOnly)
_REQUIRED_QUALIFIERS: Final[tuple[object, ...]] = (typing.Required, typing_extensions.Required)
_NOT_REQUIRED_QUALIFIERS: Final[tuple[object, ...]] = (typing.NotRequired, typing_extensions.NotRequired)
_CLASSVAR_QUALIFIERS: Final[tuple[object, ...]] = (typing.ClassVar,)
_QUALIFIERS: Final[tuple[object, ...]] = (
    *_READONLY_QUALIFIERS,
    *_REQUIRED_QUALIFIERS,
    *_NOT_REQUIRED_QUALIFIERS,
    *_CLASSVAR_QUALIFIERS,
)
_TYPING_MODULES: Final[frozenset[str]] = frozenset({"builtins", "typing", "typing_extensions"})


def _is_one_of(value: object, candidates: Sequence[object]) -> bool:
    return any(value is candidate for candidate in candidates)


@dataclasses.dataclass(slots=True, frozen=True)
class _Qualified:
    """An annotation with its type qualifiers removed."""

    type: object
    readonly: bool = False
    required: bool | None = None
    class_var: bool = False


def unwrap_qualifiers(annotation: object) -> _Qualified:
    """Strip ``Annotated`` and declaration qualifiers from ``annotation``.

    ``Final`` and ``ReadOnly`` mark the result readonly; ``Required`` and
    ``NotRequired`` set ``required``; a bare ``Final`` or ``ClassVar`` leaves
    ``Any``.
    """
    readonly = False
    required: bool | None = None
    class_var = False
    current = annotation
    while True:
        origin = typing_extensions.get_origin(current)
        if origin is typing.Annotated or origin is typing_extensions.Annotated:
            current = typing_extensions.get_args(current)[0]
            continue
        qualifier = origin if origin is not None else current
        if not _is_one_of(qualifier, _QUALIFIERS):
            break
        readonly = readonly or _is_one_of(qualifier, _READONLY_QUALIFIERS)
        class_var = class_var or _is_one_of(qualifier, _CLASSVAR_QUALIFIERS)
        if _is_one_of(qualifier, _REQUIRED_QUALIFIERS):
            required = True
        elif _is_one_of(qualifier, _NOT_REQUIRED_QUALIFIERS):
            required = False
        args = typing_extensions.get_args(current)
        current = args[0] if args else Any
    return _Qualified(type=current, readonly=readonly, required=required, class_var=class_var)


def _class_name(cls: type) -> str:
    if cls is _NONE_TYPE:
        return "None"
    return cls.__qualname__


def render_annotation(annotation: object) -> str:  # noqa: C901, PLR0911, PLR0912
    """Render a runtime annotation the way it would be written in source.

    Module prefixes are dropped: ``typing.Optional[pkg.mod.User]`` renders as
    ``User | None``.
    """
    if annotation is None or annotation is _NONE_TYPE:
        return "None"
    if annotation is Ellipsis:
        return "..."
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, typing.ForwardRef):
        return annotation.__forward_arg__
    if isinstance(annotation, list):
        return "[" + ", ".join(render_annotation(item) for item in annotation) + "]"
    if isinstance(annotation, _ALIAS_TYPES):
        return annotation.__name__
    if isinstance(annotation, (typing.TypeVar, typing.ParamSpec, typing.TypeVarTuple)):
        return annotation.__name__
    if inspect.isroutine(annotation):
        return _render_callable(annotation)

    origin = typing_extensions.get_origin(annotation)
    args = typing_extensions.get_args(annotation)
    if origin is None:
        if isinstance(annotation, type):
            return _class_name(annotation)
        name = getattr(annotation, "_name", None) or getattr(annotation, "__name__", None)
        return str(name) if name else repr(annotation)
    if _is_one_of(origin, _UNION_ORIGINS):
        return " | ".join(render_annotation(arg) for arg in args)
    if origin is typing.Literal or origin is typing_extensions.Literal:
        return "Literal[" + ", ".join(repr(arg) for arg in args) + "]"
    if origin is typing.Annotated or origin is typing_extensions.Annotated:
        return render_annotation(args[0])
    if origin is collections.abc.Callable and args:
        params, returned = args[0], args[-1]
        return f"Callable[{render_annotation(params)}, {render_annotation(returned)}]"
    if origin is tuple and not args:
        return "tuple[()]"
    base = render_annotation(origin)
    if not args:
        return base
    return f"{base}[{', '.join(render_annotation(arg) for arg in args)}]"


def _safe_signature(func: Callable[..., object]) -> inspect.Signature | None:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def _function_hints(func: Callable[..., object]) -> dict[str, object]:
    try:
        return typing_extensions.get_type_hints(func, include_extras=True)
    except (NameError, TypeError, AttributeError):
        return dict(inspect.get_annotations(func))


def _render_callable(func: Callable[..., object]) -> str:
    signature = _safe_signature(func)
    if signature is None:
        return getattr(func, "__qualname__", repr(func))
    hints = _function_hints(func)
    rendered: list[str] = []
    for parameter in signature.parameters.values():
        prefix = ""
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            prefix = "*"
        elif parameter.kind is inspect.Parameter.VAR_KEYWORD:
            prefix = "**"
        text = prefix + parameter.name
        if parameter.name in hints:
            text += f": {render_annotation(hints[parameter.name])}"
        if parameter.default is not inspect.Parameter.empty:
            text += " = ..."
        rendered.append(text)
    returned = render_annotation(hints.get("return", Any))
    return f"({', '.join(rendered)}) -> {returned}"


def _parameter_name(parameter: inspect.Parameter) -> str:
    if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{parameter.name}"
    if parameter.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{parameter.name}"
    return parameter.name


def _signature_of(func: Callable[..., object]) -> CallSignature | None:
    signature = _safe_signature(func)
    if signature is None:
        return None
    hints = _function_hints(func)
    parameters = tuple(
        ParameterSymbol(
            name=_parameter_name(parameter),
            type=hints.get(parameter.name, Any),
            optional=parameter.default is not inspect.Parameter.empty
            or parameter.kind in {inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD},
        )
        for parameter in signature.parameters.values()
    )
    return CallSignature(parameters=parameters, return_type=hints.get("return", Any))


def _class_hints(cls: type) -> dict[str, object]:
    try:
        return typing_extensions.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError, AttributeError):
        hints: dict[str, object] = {}
        for base in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(base))
        return hints


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


class PythonTypingContext(CheckingContext):
    """Checking context whose type handles are Python annotation objects."""

    @override
    def type_to_string(self, type_: object) -> str:
        return render_annotation(unwrap_qualifiers(type_).type)

    @override
    def type_identity(self, type_: object) -> Hashable:
        """Use the annotation itself when hashable so equal aliases share an identity."""
        try:
            hash(type_)
        except TypeError:
            return id(type_)
        return type_

    @override
    def union_members(self, type_: object) -> Sequence[object] | None:
        bare = unwrap_qualifiers(type_).type
        origin = typing_extensions.get_origin(bare)
        if _is_one_of(origin, _UNION_ORIGINS):
            return typing_extensions.get_args(bare)
        if origin is typing.Literal or origin is typing_extensions.Literal:
            values = typing_extensions.get_args(bare)
            if len(values) > 1:
                return tuple(typing.Literal[value] for value in values)
        return None

    @override
    def literal_value(self, type_: object) -> LiteralValue | None:
        bare = unwrap_qualifiers(type_).type
        origin = typing_extensions.get_origin(bare)
        if origin is not typing.Literal and origin is not typing_extensions.Literal:
            return None
        values = typing_extensions.get_args(bare)
        if len(values) != 1:
            return None
        value = values[0]
        if isinstance(value, Enum) or not isinstance(value, (str, int, float, bool)):
            return None
        return value

    @override
    def primitive_name(self, type_: object) -> str | None:  # noqa: PLR0911
        bare = unwrap_qualifiers(type_).type
        if bare is None or bare is _NONE_TYPE:
            return "None"
        origin = typing_extensions.get_origin(bare)
        if origin is typing.Literal or origin is typing_extensions.Literal:
            if typing_extensions.get_args(bare) == (None,):
                return "None"
            return None
        if bare is Any or bare is typing_extensions.Any:
            return "Any"
        if _is_one_of(bare, _NEVER_FORMS):
            return "Never"
        if bare is object:
            return UNKNOWN_PRIMITIVE
        for cls, name in _PRIMITIVE_CLASSES:
            if bare is cls:
                return name
        return None

    @override
    def is_array_type(self, type_: object) -> bool:
        bare = unwrap_qualifiers(type_).type
        if bare is list:
            return True
        origin = typing_extensions.get_origin(bare)
        if _is_one_of(origin, _ARRAY_ORIGINS):
            return True
        args = typing_extensions.get_args(bare)
        return origin is tuple and len(args) == 2 and args[1] is Ellipsis  # noqa: PLR2004

    @override
    def array_element_type(self, type_: object) -> object | None:
        args = typing_extensions.get_args(unwrap_qualifiers(type_).type)
        return args[0] if args else None

    @override
    def tuple_element_types(self, type_: object) -> Sequence[object] | None:
        bare = unwrap_qualifiers(type_).type
        if typing_extensions.get_origin(bare) is not tuple:
            return None
        return typing_extensions.get_args(bare)

    @override
    def call_signatures(self, type_: object) -> Sequence[CallSignature]:
        bare = unwrap_qualifiers(type_).type
        origin = typing_extensions.get_origin(bare)
        if origin is collections.abc.Callable:
            args = typing_extensions.get_args(bare)
            if not args:
                return ()
            params, returned = args[0], args[-1]
            if isinstance(params, list):
                parameters = tuple(
                    ParameterSymbol(name=f"arg{index}", type=param) for index, param in enumerate(params)
                )
            else:
                parameters = (ParameterSymbol(name="...", type=Any, optional=True),)
            return (CallSignature(parameters=parameters, return_type=returned),)
        if not (inspect.isfunction(bare) or inspect.ismethod(bare)):
            return ()
        candidates = [*typing.get_overloads(bare)] or [bare]
        signatures = [sig for sig in map(_signature_of, candidates) if sig is not None]
        return tuple(signatures)

    @override
    def is_template_literal_type(self, type_: object) -> bool:
        return _is_one_of(unwrap_qualifiers(type_).type, _LITERAL_STRING_FORMS)

    @override
    def properties_of_type(self, type_: object) -> Sequence[PropertySymbol]:
        bare = unwrap_qualifiers(type_).type
        if not isinstance(bare, type) or bare.__module__ in _TYPING_MODULES or issubclass(bare, Enum):
            return ()
        if typing_extensions.is_typeddict(bare):
            return self._typed_dict_properties(bare)
        if issubclass(bare, BaseModel):
            return self._model_properties(bare)
        if dataclasses.is_dataclass(bare):
            return self._dataclass_properties(bare)
        if _is_named_tuple(bare):
            hints = _class_hints(bare)
            return tuple(
                PropertySymbol(name=name, type=hints.get(name, Any), readonly=True) for name in bare._fields
            )
        return self._annotated_properties(bare)

    def _typed_dict_properties(self, cls: type) -> tuple[PropertySymbol, ...]:
        optional_keys: frozenset[str] = getattr(cls, "__optional_keys__", frozenset())
        readonly_keys: frozenset[str] = getattr(cls, "__readonly_keys__", frozenset())
        properties: list[PropertySymbol] = []
        for name, annotation in _class_hints(cls).items():
            qualified = unwrap_qualifiers(annotation)
            optional = name in optional_keys if qualified.required is None else not qualified.required
            properties.append(
                PropertySymbol(
                    name=name,
                    type=qualified.type,
                    optional=optional,
                    readonly=qualified.readonly or name in readonly_keys,
                ),
            )
        return tuple(properties)

    def _model_properties(self, cls: type[BaseModel]) -> tuple[PropertySymbol, ...]:
        frozen_model = bool(cls.model_config.get("frozen", False))
        return tuple(
            PropertySymbol(
                name=name,
                type=info.annotation if info.annotation is not None else Any,
                optional=not info.is_required(),
                readonly=frozen_model or bool(info.frozen),
            )
            for name, info in cls.model_fields.items()
        )

    def _dataclass_properties(self, cls: type) -> tuple[PropertySymbol, ...]:
        params = getattr(cls, "__dataclass_params__", None)
        frozen = bool(getattr(params, "frozen", False))
        hints = _class_hints(cls)
        properties: list[PropertySymbol] = []
        for item in dataclasses.fields(cls):
            qualified = unwrap_qualifiers(hints.get(item.name, item.type))
            properties.append(
                PropertySymbol(name=item.name, type=qualified.type, readonly=frozen or qualified.readonly),
            )
        return tuple(properties)

    def _annotated_properties(self, cls: type) -> tuple[PropertySymbol, ...]:
        properties: list[PropertySymbol] = []
        for name, annotation in _class_hints(cls).items():
            qualified = unwrap_qualifiers(annotation)
            if qualified.class_var:
                continue
            properties.append(PropertySymbol(name=name, type=qualified.type, readonly=qualified.readonly))
        return tuple(properties)

    @override
    def alias_reference(self, type_: object) -> AliasReference | None:
        bare = unwrap_qualifiers(type_).type
        if isinstance(bare, _ALIAS_TYPES):
            return AliasReference(name=bare.__name__)
        origin = typing_extensions.get_origin(bare)
        if origin is None:
            return None
        if isinstance(origin, _ALIAS_TYPES):
            return AliasReference(name=origin.__name__, type_arguments=typing_extensions.get_args(bare))
        if not isinstance(origin, type) or _is_one_of(origin, _STRUCTURAL_ORIGINS):
            return None
        return AliasReference(name=render_annotation(origin), type_arguments=typing_extensions.get_args(bare))

    @override
    def resolve_alias(self, type_: object) -> object | None:
        bare = unwrap_qualifiers(type_).type
        if isinstance(bare, _ALIAS_TYPES):
            return bare.__value__
        origin = typing_extensions.get_origin(bare)
        if not isinstance(origin, _ALIAS_TYPES):
            return None
        value = origin.__value__
        params: tuple[object, ...] = origin.__type_params__
        args = typing_extensions.get_args(bare)
        if not params or len(args) != len(params):
            return value
        try:
            return value[args]
        except TypeError:
            return value


__all__ = ["PythonTypingContext", "render_annotation", "unwrap_qualifiers"]
