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

"""Text and Markdown presentation of type trees and diffs."""

from __future__ import annotations

from .markdown import render_diff_markdown, render_serialized_markdown
from .text import render_diff_text, render_serialized, render_tree

__all__ = [
    "render_diff_markdown",
    "render_diff_text",
    "render_serialized",
    "render_serialized_markdown",
    "render_tree",
]
