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

"""Type serialization: checking contexts, the serializer and reference resolution."""

from __future__ import annotations

from .context import AliasReference, CallSignature, CheckingContext, ParameterSymbol, PropertySymbol
from .python_context import PythonTypingContext, render_annotation
from .resolver import TypeLocation, resolve_reference
from .type_serializer import TypeSerializer, serialize_type

__all__ = [
    "AliasReference",
    "CallSignature",
    "CheckingContext",
    "ParameterSymbol",
    "PropertySymbol",
    "PythonTypingContext",
    "TypeLocation",
    "TypeSerializer",
    "render_annotation",
    "resolve_reference",
    "serialize_type",
]
