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

"""Typing seams between the CLI entry point and its command modules."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    import argparse

    from typelens.cli.helpers.context import CLIContext

__all__ = ["CommandHandler", "SubparserCollection"]

type CommandHandler = Callable[[argparse.Namespace, CLIContext], int]


class SubparserCollection(Protocol):
    """The ``add_parser`` half of ``argparse._SubParsersAction``.

    Command modules register themselves against this protocol so that they do
    not depend on argparse's private action class.
    """

    def add_parser(self, name: str, **kwargs: Any) -> argparse.ArgumentParser: ...
