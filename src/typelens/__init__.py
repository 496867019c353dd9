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

"""typelens - inspect and compare types as explicit, serializable trees.

Provides a type serializer that turns type handles from a checking context
into ``TypeNode`` trees, a structural differ that reports the differences
between two trees, and a checking context for Python runtime annotations.
"""

from __future__ import annotations

from typelens.exceptions import (
    PayloadValidationError,
    TypelensError,
    TypelensTypeError,
    TypelensValidationError,
    TypeReferenceError,
)

from .api import (
    Comparison,
    compare_files,
    compare_references,
    compare_serialized,
    explain_error,
    inspect_reference,
    payload_json_schema,
)
from .config import Config, SerializationOptions, load_config
from .core.model_types import DiffKind, TypeKind
from .core.types import DiffResult, DiffSummary, Position, SerializedType, TypeDiff, TypeNode
from .differ import TypeDiffer, compare_types, filter_diffs, format_path
from .serializer import CheckingContext, PythonTypingContext, TypeSerializer, resolve_reference, serialize_type

__all__ = [
    "CheckingContext",
    "Comparison",
    "Config",
    "DiffKind",
    "DiffResult",
    "DiffSummary",
    "PayloadValidationError",
    "Position",
    "PythonTypingContext",
    "SerializationOptions",
    "SerializedType",
    "TypeDiff",
    "TypeDiffer",
    "TypeKind",
    "TypeNode",
    "TypeReferenceError",
    "TypeSerializer",
    "TypelensError",
    "TypelensTypeError",
    "TypelensValidationError",
    "__version__",
    "compare_files",
    "compare_references",
    "compare_serialized",
    "compare_types",
    "explain_error",
    "filter_diffs",
    "format_path",
    "inspect_reference",
    "load_config",
    "payload_json_schema",
    "resolve_reference",
    "serialize_type",
]

__version__ = "0.1.0"
