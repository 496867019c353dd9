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

"""Core type definitions and data structures for typelens.

This package provides the data model shared by the serializer, the differ and
the presentation layers:

- Model types: enums for type kinds, diff kinds, log and output formats
- Type aliases: literal values, diff paths and marker constants
- Core types: immutable dataclasses for type trees and diff results
- Typed payloads: TypedDict shapes of the JSON wire format
- Models: pydantic validation and JSON Schema for those payloads
"""

from __future__ import annotations

from . import model_types, models, type_aliases, typed, types

__all__ = [
    "model_types",
    "models",
    "type_aliases",
    "typed",
    "types",
]
