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

"""Configuration discovery and loading for typelens.

Configuration files may hold the settings at the top level (``typelens.toml``,
``.typelens.toml``) or nested under ``[tool.typelens]`` for PEP 518 style
project files. ``pyproject.toml`` is only considered when it carries that
table.
"""

from __future__ import annotations

import logging
import tomllib as toml
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from typelens._internal.logging_utils import structured_extra
from typelens.core.model_types import LogComponent

from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("typelens.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("typelens.toml", ".typelens.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
TOOL_SECTION: Final[str] = "typelens"


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return toml.loads(path.read_text(encoding="utf-8"))
    except (OSError, toml.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def _tool_section(raw_map: dict[str, object]) -> dict[str, object] | None:
    tool_obj = raw_map.get("tool")
    if not isinstance(tool_obj, dict):
        return None
    section = cast("dict[str, object]", tool_obj).get(TOOL_SECTION)
    if isinstance(section, dict):
        return cast("dict[str, object]", section)
    return None


def _candidate_paths(search_dir: Path) -> list[Path]:
    candidates = [search_dir / name for name in CONFIG_FILENAMES]
    candidates.append(search_dir / PYPROJECT_FILENAME)
    return candidates


def config_from_mapping(raw_map: dict[str, object], *, source: Path | None = None) -> Config:
    """Validate a raw configuration mapping.

    Args:
        raw_map: Parsed TOML document, either flat or nested under
            ``[tool.typelens]``.
        source: File the mapping was read from, used in error messages.

    Returns:
        Runtime configuration.

    Raises:
        InvalidConfigFileError: If validation fails.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
    """
    section = _tool_section(raw_map)
    if section is not None:
        raw_map = section
    try:
        model = ConfigModel.model_validate(raw_map)
    except ValidationError as exc:
        raise InvalidConfigFileError(source or Path("<config>"), exc) from exc
    return config_from_model(model, source=source)


def load_config(explicit_path: Path | None = None, *, search_dir: Path | None = None) -> Config:
    """Load typelens configuration from a TOML file or use defaults.

    The search order is:

    1. ``explicit_path`` when provided (a missing file is an error);
    2. ``typelens.toml`` then ``.typelens.toml`` in ``search_dir``;
    3. ``pyproject.toml`` in ``search_dir`` when it has a ``[tool.typelens]``
       table.

    Args:
        explicit_path: Configuration file chosen by the user.
        search_dir: Directory to search; defaults to the current directory.

    Returns:
        The loaded configuration, or defaults when no file applies.

    Raises:
        ConfigReadError: If a file cannot be read or parsed as TOML.
        InvalidConfigFileError: If a file fails validation.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
    """
    if explicit_path is not None:
        if not explicit_path.is_file():
            raise ConfigReadError(explicit_path, FileNotFoundError("file not found"))
        config = config_from_mapping(_read_toml(explicit_path), source=explicit_path)
        logger.debug(
            "Loaded configuration from %s",
            explicit_path,
            extra=structured_extra(component=LogComponent.CONFIG, path=explicit_path),
        )
        return config

    root = (search_dir or Path.cwd()).resolve()
    for candidate in _candidate_paths(root):
        if not candidate.is_file():
            continue
        raw_map = _read_toml(candidate)
        if candidate.name == PYPROJECT_FILENAME and _tool_section(raw_map) is None:
            continue
        config = config_from_mapping(raw_map, source=candidate)
        logger.debug(
            "Loaded configuration from %s",
            candidate,
            extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
        )
        return config

    logger.debug(
        "No configuration file found in %s; using defaults",
        root,
        extra=structured_extra(component=LogComponent.CONFIG, path=root),
    )
    return Config()


__all__ = ["CONFIG_FILENAMES", "config_from_mapping", "load_config"]
