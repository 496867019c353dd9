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

"""Configuration models and validation for typelens.

This module defines the data models for typelens configuration, including both
Pydantic models for loading and validation from TOML files or option mappings,
and frozen dataclass models for runtime use.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from typelens._internal.exceptions import TypelensValidationError
from typelens.core.model_types import OutputFormat

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_VERSION: Final[int] = 0
DEFAULT_MAX_DEPTH: Final[int] = 10
DEFAULT_INDENT: Final[int] = 2
DEFAULT_TRUNCATE: Final[int] = 100


class ConfigValidationError(TypelensValidationError):
    """Raised when configuration data contains invalid values."""


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of typelens.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the root configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid typelens configuration in {path}: {error}")


def require_non_negative_int(value: object, *, context: str) -> int:
    """Return ``value`` when it is a non-negative int.

    Raises:
        ConfigValidationError: If ``value`` is not an int or is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        message = f"{context} must be an integer (got {value!r})"
        raise ConfigValidationError(message)
    if value < 0:
        message = f"{context} must be non-negative (got {value})"
        raise ConfigValidationError(message)
    return value


@dataclass(slots=True, frozen=True)
class SerializationOptions:
    """Options recognised by the type serializer.

    Attributes:
        max_depth: Recursion ceiling; nodes deeper than this become ``"..."``.
        include_signatures: Expand function parameters and return types.
        expand_aliases: Expand named aliases to their structure instead of
            leaving them as references.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    include_signatures: bool = True
    expand_aliases: bool = True

    def __post_init__(self) -> None:
        """Validate the recursion ceiling."""
        _ = require_non_negative_int(self.max_depth, context="max_depth")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> SerializationOptions:
        """Build options from a mapping using camelCase or snake_case keys.

        Args:
            data: Mapping such as ``{"maxDepth": 5, "includeSignatures": False}``.

        Returns:
            Validated serialization options.

        Raises:
            ConfigValidationError: If the mapping contains unknown keys or
                invalid values.
        """
        try:
            model = SerializationOptionsModel.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigValidationError(str(exc)) from exc
        return model.to_options()

    def merged(
        self,
        *,
        max_depth: int | None = None,
        include_signatures: bool | None = None,
        expand_aliases: bool | None = None,
    ) -> SerializationOptions:
        """Return a copy with the non-``None`` overrides applied."""
        return replace(
            self,
            max_depth=self.max_depth if max_depth is None else max_depth,
            include_signatures=self.include_signatures if include_signatures is None else include_signatures,
            expand_aliases=self.expand_aliases if expand_aliases is None else expand_aliases,
        )


@dataclass(slots=True, frozen=True)
class OutputConfig:
    """Rendering defaults for the CLI.

    Attributes:
        format: Default output format.
        indent: JSON indentation width.
        truncate: Maximum display-name length in text output; 0 disables.
    """

    format: OutputFormat = OutputFormat.TEXT
    indent: int = DEFAULT_INDENT
    truncate: int = DEFAULT_TRUNCATE


def _default_serialization_options() -> SerializationOptions:
    return SerializationOptions()


def _default_output_config() -> OutputConfig:
    return OutputConfig()


@dataclass(slots=True, frozen=True)
class Config:
    """Top-level configuration for typelens.

    Attributes:
        serializer: Options forwarded to the type serializer.
        output: CLI rendering defaults.
        source: File the configuration was loaded from, if any.
    """

    serializer: SerializationOptions = field(default_factory=_default_serialization_options)
    output: OutputConfig = field(default_factory=_default_output_config)
    source: Path | None = None


class SerializationOptionsModel(BaseModel):
    """Pydantic model validating serializer options."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", populate_by_name=True)

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=0,
        validation_alias=AliasChoices("max_depth", "maxDepth"),
    )
    include_signatures: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_signatures", "includeSignatures"),
    )
    expand_aliases: bool = Field(
        default=True,
        validation_alias=AliasChoices("expand_aliases", "expandAliases"),
    )

    def to_options(self) -> SerializationOptions:
        """Convert to the runtime dataclass."""
        return SerializationOptions(
            max_depth=self.max_depth,
            include_signatures=self.include_signatures,
            expand_aliases=self.expand_aliases,
        )


class OutputConfigModel(BaseModel):
    """Pydantic model validating CLI output defaults."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    format: OutputFormat = OutputFormat.TEXT
    indent: int = Field(default=DEFAULT_INDENT, ge=0)
    truncate: int = Field(default=DEFAULT_TRUNCATE, ge=0)

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: object) -> object:
        if isinstance(value, str):
            return OutputFormat.from_str(value)
        return value

    def to_output(self) -> OutputConfig:
        """Convert to the runtime dataclass."""
        return OutputConfig(format=self.format, indent=self.indent, truncate=self.truncate)


def _default_serializer_model() -> SerializationOptionsModel:
    return SerializationOptionsModel()


def _default_output_model() -> OutputConfigModel:
    return OutputConfigModel()


class ConfigModel(BaseModel):
    """Pydantic model for a complete configuration document."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    config_version: int = CONFIG_VERSION
    serializer: SerializationOptionsModel = Field(default_factory=_default_serializer_model)
    output: OutputConfigModel = Field(default_factory=_default_output_model)


def config_from_model(model: ConfigModel, *, source: Path | None = None) -> Config:
    """Convert a validated configuration model into the runtime dataclass.

    Raises:
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
    """
    if model.config_version != CONFIG_VERSION:
        raise UnsupportedConfigVersionError(model.config_version, CONFIG_VERSION)
    return Config(
        serializer=model.serializer.to_options(),
        output=model.output.to_output(),
        source=source,
    )


__all__ = [
    "CONFIG_VERSION",
    "DEFAULT_MAX_DEPTH",
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "OutputConfig",
    "OutputConfigModel",
    "SerializationOptions",
    "SerializationOptionsModel",
    "UnsupportedConfigVersionError",
    "config_from_model",
    "require_non_negative_int",
]
