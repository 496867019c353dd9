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

"""Model types and enumerations for typelens.

This module defines the closed enumerations used throughout typelens:

- ``TypeKind``: the tagged variant discriminator of a serialized type node
- ``DiffKind``: the categories of structural difference reported by the differ
- Logging and output format enumerations shared by the CLI layers
"""

from __future__ import annotations

from enum import StrEnum


class TypeKind(StrEnum):
    """Discriminator for ``TypeNode`` variants.

    Attributes:
        PRIMITIVE: Built-in scalar types (``string``, ``number``, ``None``...).
        LITERAL: A literal value type; the node carries ``value``.
        OBJECT: Structural object; children are named properties.
        ARRAY: Homogeneous sequence; a single element child.
        TUPLE: Fixed-arity sequence; one child per slot.
        UNION: Set of alternatives.
        INTERSECTION: Set of constituents that all apply.
        FUNCTION: Callable; parameter children followed by ``return``.
        GENERIC: Named generic instantiation; children are type arguments.
        CONDITIONAL: Conditional type, kept as its string rendering.
        TEMPLATE: Template literal type, kept as its string rendering.
        INDEXED: Indexed access type, kept as its string rendering.
        UNKNOWN: Fallback, depth and cycle markers, and the top type.
    """

    PRIMITIVE = "primitive"
    LITERAL = "literal"
    OBJECT = "object"
    ARRAY = "array"
    TUPLE = "tuple"
    UNION = "union"
    INTERSECTION = "intersection"
    FUNCTION = "function"
    GENERIC = "generic"
    CONDITIONAL = "conditional"
    TEMPLATE = "template"
    INDEXED = "indexed"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, raw: str) -> TypeKind:
        """Create a TypeKind enum from a string value.

        Args:
            raw: String representation of the kind.

        Returns:
            TypeKind enum value.

        Raises:
            ValueError: If the string does not match any TypeKind value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown type kind '{raw}'"
            raise ValueError(msg) from exc


class DiffKind(StrEnum):
    """Categories of structural difference.

    Attributes:
        MISSING: Present in the expected tree, absent from the actual tree.
        EXTRA: Present in the actual tree, absent from the expected tree.
        TYPE_MISMATCH: Kinds or type names differ.
        VALUE_MISMATCH: Literal values differ.
    """

    MISSING = "missing"
    EXTRA = "extra"
    TYPE_MISMATCH = "type-mismatch"
    VALUE_MISMATCH = "value-mismatch"

    @classmethod
    def from_str(cls, raw: str) -> DiffKind:
        """Create a DiffKind enum from a string value.

        Underscores are accepted in place of hyphens so that
        ``type_mismatch`` and ``type-mismatch`` are equivalent.

        Args:
            raw: String representation of the diff kind.

        Returns:
            DiffKind enum value.

        Raises:
            ValueError: If the string does not match any DiffKind value.
        """
        value = raw.strip().lower().replace("_", "-")
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown diff kind '{raw}'"
            raise ValueError(msg) from exc

    @property
    def is_mismatch(self) -> bool:
        """Return True for the kinds counted into ``DiffSummary.mismatch``."""
        return self in {DiffKind.TYPE_MISMATCH, DiffKind.VALUE_MISMATCH}


class LogFormat(StrEnum):
    """Supported log output formats."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Logical components attached to structured log records."""

    CLI = "cli"
    CONFIG = "config"
    SERIALIZER = "serializer"
    DIFFER = "differ"
    RESOLVER = "resolver"


class OutputFormat(StrEnum):
    """Rendering formats supported by the CLI."""

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"

    @classmethod
    def from_str(cls, raw: str) -> OutputFormat:
        """Create an OutputFormat enum from a string value.

        Args:
            raw: String representation of the output format.

        Returns:
            OutputFormat enum value.

        Raises:
            ValueError: If the string does not match any OutputFormat value.
        """
        value = raw.strip().lower()
        if value == "md":
            value = OutputFormat.MARKDOWN.value
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown output format '{raw}'"
            raise ValueError(msg) from exc


__all__ = [
    "DiffKind",
    "LogComponent",
    "LogFormat",
    "OutputFormat",
    "TypeKind",
]
