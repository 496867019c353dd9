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

"""Pydantic models mirroring the payload TypedDict definitions.

These models provide runtime validation for payloads read back from JSON
(for example, two saved ``typelens inspect --format json`` outputs handed to
``typelens diff``) and JSON Schema generation for presentation collaborators.
Validated models are converted into the immutable dataclasses of
``typelens.core.types``.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

from typelens._internal.exceptions import PayloadValidationError, TypelensValidationError

from .model_types import DiffKind, TypeKind
from .types import DiffResult, DiffSummary, Position, SerializedType, TypeDiff, TypeNode

if TYPE_CHECKING:
    from pathlib import Path

STRICT_MODEL_CONFIG: ConfigDict = ConfigDict(extra="forbid", populate_by_name=True)

PayloadTarget = Literal["serialized-type", "diff-result"]


def alias_field(
    camel_name: str,
    *,
    default: object = ...,
    default_factory: Callable[[], object] | None = None,
) -> Any:  # noqa: ANN401 # JUSTIFIED: Must return Any to work with Pydantic field annotations
    """Return a Field configured with matching validation and serialization aliases.

    Args:
        camel_name: Canonical camelCase field name in the payload schema.
        default: Default value for the field (use ... for required fields).
        default_factory: Factory function to generate default values.

    Returns:
        FieldInfo that reads and writes the camelCase name while exposing a
        snake_case attribute on the model.
    """
    aliases = AliasChoices(camel_name)
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            validation_alias=aliases,
            serialization_alias=camel_name,
        )
    return Field(
        default=default,
        validation_alias=aliases,
        serialization_alias=camel_name,
    )


def _empty_node_list() -> list[TypeNodeModel]:
    return []


class TypeNodeModel(BaseModel):
    """Pydantic model for a serialized type node.

    Attributes:
        kind: Tagged variant discriminator.
        name: Optional type, property or parameter name.
        value: Literal value, only allowed on ``literal`` nodes.
        children: Ordered child nodes.
        optional: Whether the property or parameter may be absent.
        readonly: Whether the property is readonly.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    kind: TypeKind
    name: str | None = None
    value: StrictBool | StrictInt | StrictFloat | StrictStr | None = None
    children: list[TypeNodeModel] = Field(default_factory=_empty_node_list)
    optional: bool = False
    readonly: bool = False

    @model_validator(mode="after")
    def _value_only_on_literals(self) -> Self:
        if self.value is not None and self.kind is not TypeKind.LITERAL:
            message = f"value is only allowed on literal nodes, not {self.kind.value}"
            raise ValueError(message)
        return self

    def to_node(self) -> TypeNode:
        """Convert the validated model into a ``TypeNode``."""
        return TypeNode(
            kind=self.kind,
            name=self.name,
            value=self.value,
            children=tuple(child.to_node() for child in self.children),
            optional=self.optional,
            readonly=self.readonly,
        )


TypeNodeModel.model_rebuild()


class PositionModel(BaseModel):
    """Pydantic model for a zero-based source position."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class SerializedTypeModel(BaseModel):
    """Pydantic model for a serialized type snapshot.

    Attributes:
        id: Opaque snapshot identifier.
        displayName: Checker rendering of the type.
        typeNode: Root node of the serialized tree.
        filePath: Optional source file path.
        position: Optional position within the source file.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    id: str
    display_name: str = alias_field("displayName")
    type_node: TypeNodeModel = alias_field("typeNode")
    file_path: str | None = alias_field("filePath", default=None)
    position: PositionModel | None = None

    def to_serialized(self) -> SerializedType:
        """Convert the validated model into a ``SerializedType``."""
        position = None
        if self.position is not None:
            position = Position(line=self.position.line, character=self.position.character)
        return SerializedType(
            id=self.id,
            display_name=self.display_name,
            type_node=self.type_node.to_node(),
            file_path=self.file_path,
            position=position,
        )


class TypeDiffModel(BaseModel):
    """Pydantic model for one structural difference."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    path: list[str]
    kind: DiffKind
    message: str
    expected: str | None = None
    actual: str | None = None

    def to_diff(self) -> TypeDiff:
        """Convert the validated model into a ``TypeDiff``."""
        return TypeDiff(
            path=tuple(self.path),
            kind=self.kind,
            message=self.message,
            expected=self.expected,
            actual=self.actual,
        )


class DiffSummaryModel(BaseModel):
    """Pydantic model for diff summary counts."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    missing: int = Field(ge=0)
    extra: int = Field(ge=0)
    mismatch: int = Field(ge=0)


def _empty_diff_list() -> list[TypeDiffModel]:
    return []


class DiffResultModel(BaseModel):
    """Pydantic model for a complete comparison result."""

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    diffs: list[TypeDiffModel] = Field(default_factory=_empty_diff_list)
    has_changes: bool = alias_field("hasChanges")
    summary: DiffSummaryModel

    def to_result(self) -> DiffResult:
        """Convert the validated model into a ``DiffResult``.

        Raises:
            TypelensValidationError: If the derived fields disagree with ``diffs``.
        """
        diffs = tuple(entry.to_diff() for entry in self.diffs)
        summary = DiffSummary(
            missing=self.summary.missing,
            extra=self.summary.extra,
            mismatch=self.summary.mismatch,
        )
        return DiffResult(diffs=diffs, has_changes=self.has_changes, summary=summary)


def load_type_node(payload: Mapping[str, object], *, source: str = "<payload>") -> TypeNode:
    """Validate a type node payload.

    Args:
        payload: Raw mapping, typically decoded JSON.
        source: Description of the payload origin used in error messages.

    Returns:
        The validated ``TypeNode``.

    Raises:
        PayloadValidationError: If validation fails.
    """
    try:
        return TypeNodeModel.model_validate(payload).to_node()
    except ValidationError as exc:
        raise PayloadValidationError(source, exc) from exc


def load_serialized_type(payload: Mapping[str, object], *, source: str = "<payload>") -> SerializedType:
    """Validate a serialized type payload.

    Args:
        payload: Raw mapping, typically decoded JSON.
        source: Description of the payload origin used in error messages.

    Returns:
        The validated ``SerializedType``.

    Raises:
        PayloadValidationError: If validation fails.
    """
    try:
        return SerializedTypeModel.model_validate(payload).to_serialized()
    except ValidationError as exc:
        raise PayloadValidationError(source, exc) from exc


def load_type_diff(payload: Mapping[str, object], *, source: str = "<payload>") -> TypeDiff:
    """Validate a single difference payload.

    Raises:
        PayloadValidationError: If validation fails.
    """
    try:
        return TypeDiffModel.model_validate(payload).to_diff()
    except ValidationError as exc:
        raise PayloadValidationError(source, exc) from exc


def load_diff_result(payload: Mapping[str, object], *, source: str = "<payload>") -> DiffResult:
    """Validate a diff result payload.

    Args:
        payload: Raw mapping, typically decoded JSON.
        source: Description of the payload origin used in error messages.

    Returns:
        The validated ``DiffResult``.

    Raises:
        PayloadValidationError: If validation fails or the summary is inconsistent.
    """
    try:
        return DiffResultModel.model_validate(payload).to_result()
    except (ValidationError, TypelensValidationError) as exc:
        raise PayloadValidationError(source, exc) from exc


def read_serialized_type_file(path: Path) -> SerializedType:
    """Read and validate a serialized type written as JSON.

    Args:
        path: JSON file produced by ``typelens inspect --format json``.

    Returns:
        The validated ``SerializedType``.

    Raises:
        PayloadValidationError: If the file cannot be read, decoded or validated.
    """
    source = str(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PayloadValidationError(source, exc) from exc
    if not isinstance(raw, dict):
        raise PayloadValidationError(source, TypeError("expected a JSON object"))
    return load_serialized_type(raw, source=source)


def payload_json_schema(target: PayloadTarget = "serialized-type") -> dict[str, Any]:
    """Return the JSON Schema of a payload.

    Args:
        target: ``serialized-type`` or ``diff-result``.

    Returns:
        JSON Schema dictionary using the camelCase wire names.
    """
    model: type[BaseModel] = SerializedTypeModel if target == "serialized-type" else DiffResultModel
    return model.model_json_schema(by_alias=True)


__all__ = [
    "DiffResultModel",
    "DiffSummaryModel",
    "PayloadTarget",
    "PositionModel",
    "SerializedTypeModel",
    "TypeDiffModel",
    "TypeNodeModel",
    "load_diff_result",
    "load_serialized_type",
    "load_type_diff",
    "load_type_node",
    "payload_json_schema",
    "read_serialized_type_file",
]
