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

"""Stable ``TLxxx`` codes printed alongside CLI errors.

Codes are grouped by area: ``TL0xx`` generic, ``TL1xx`` validation and
configuration, ``TL2xx`` payloads, ``TL3xx`` type references.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final, NewType

from typelens.config.models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
)

from .exceptions import (
    PayloadValidationError,
    TypelensError,
    TypelensTypeError,
    TypelensValidationError,
    TypeReferenceError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

DEFAULT_ERROR_CODE: Final[ErrorCode] = ErrorCode("TL000")

_REGISTRY: Final[Mapping[type[BaseException], ErrorCode]] = MappingProxyType(
    {
        TypelensError: DEFAULT_ERROR_CODE,
        TypelensValidationError: ErrorCode("TL100"),
        TypelensTypeError: ErrorCode("TL101"),
        ConfigValidationError: ErrorCode("TL110"),
        UnsupportedConfigVersionError: ErrorCode("TL111"),
        ConfigReadError: ErrorCode("TL112"),
        InvalidConfigFileError: ErrorCode("TL113"),
        PayloadValidationError: ErrorCode("TL200"),
        TypeReferenceError: ErrorCode("TL300"),
    },
)


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return the code of the nearest registered class in ``exc``'s MRO.

    Exceptions outside the typelens hierarchy get ``TL000``.
    """
    registered = (_REGISTRY.get(cls) for cls in type(exc).__mro__)
    return next((code for code in registered if code is not None), DEFAULT_ERROR_CODE)


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Map ``module.ClassName`` of every registered exception to its code."""
    return {f"{cls.__module__}.{cls.__qualname__}": code for cls, code in _REGISTRY.items()}


__all__ = ["DEFAULT_ERROR_CODE", "ErrorCode", "error_code_catalog", "error_code_for"]
