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

"""Terminal and file output for CLI commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from pathlib import Path


def _stream(*, err: bool) -> TextIO:
    return sys.stderr if err else sys.stdout


def echo(message: str, *, newline: bool = True, err: bool = False) -> None:
    """Write ``message`` to stdout, or to stderr when ``err`` is set."""
    _ = _stream(err=err).write(f"{message}\n" if newline else message)


def emit_text(text: str, output: Path | None = None) -> None:
    """Print ``text``, or write it to ``output`` and announce the path.

    Files always end with exactly one newline; parent directories are created.
    """
    body = text.rstrip("\n")
    if output is None:
        echo(body)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    _ = output.write_text(f"{body}\n", encoding="utf-8")
    echo(f"[typelens] Wrote {output}")


__all__ = ["echo", "emit_text"]
