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

"""Display helpers for type strings and serialization ids."""

from __future__ import annotations

import re
import secrets
import string
import time
from typing import Final

_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_ID_ALPHABET: Final[str] = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH: Final[int] = 7
TRUNCATION_SUFFIX: Final[str] = "..."
DEFAULT_MAX_LENGTH: Final[int] = 100


def format_type_name(name: str) -> str:
    """Collapse runs of whitespace in ``name`` into single spaces and strip it."""
    return _WHITESPACE_RE.sub(" ", name).strip()


def truncate_type(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Shorten ``text`` to ``max_length`` characters followed by ``...``.

    Args:
        text: Type string to shorten.
        max_length: Number of characters kept; strings at or below this
            length are returned unchanged. ``0`` disables truncation.

    Returns:
        The original or shortened string.
    """
    if max_length <= 0 or len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_SUFFIX


def create_id() -> str:
    """Return an identifier of the form ``<epoch-ms>-<7 base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{time.time_ns() // 1_000_000}-{suffix}"


__all__ = ["create_id", "format_type_name", "truncate_type"]
