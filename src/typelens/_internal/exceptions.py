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

"""Common exception hierarchy for typelens."""

from __future__ import annotations

__all__ = [
    "PayloadValidationError",
    "TypeReferenceError",
    "TypelensError",
    "TypelensTypeError",
    "TypelensValidationError",
]


class TypelensError(Exception):
    """Base error for all typelens exceptions."""


class TypelensValidationError(TypelensError, ValueError):
    """Raised when input data fails validation checks."""


class TypelensTypeError(TypelensError, TypeError):
    """Raised when input data has an unexpected type."""


class TypeReferenceError(TypelensValidationError):
    """Raised when a ``module:attribute`` reference cannot be imported."""

    def __init__(self, reference: str, reason: str) -> None:
        """Initialise the error with the offending reference.

        Args:
            reference: Raw reference string supplied by the caller.
            reason: Human-readable explanation of the failure.
        """
        self.reference = reference
        self.reason = reason
        super().__init__(f"Cannot resolve '{reference}': {reason}")


class PayloadValidationError(TypelensValidationError):
    """Raised when a serialized type or diff payload fails schema validation."""

    def __init__(self, source: str, error: Exception) -> None:
        """Initialise the error with the payload source and underlying failure.

        Args:
            source: Description of where the payload came from (usually a path).
            error: Underlying validation or decoding exception.
        """
        self.source = source
        self.error = error
        super().__init__(f"Invalid typelens payload in {source}: {error}")
