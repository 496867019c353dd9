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

"""Structured logging for typelens.

Every module logs through a child of the ``typelens`` logger. Records may carry
structured fields passed via ``extra=structured_extra(...)``; the JSON
formatter emits them as top-level keys and the text formatter prefixes the
component name.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Final, Literal, TypedDict, Unpack, cast, override

from typelens.core.model_types import LogComponent, LogFormat
from typelens.json import normalise_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "typelens"
LOG_FORMAT_ENV: Final[str] = "TYPELENS_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "TYPELENS_LOG_LEVEL"
DEFAULT_LEVEL_NAME: Final[str] = "info"

_LEVELS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    },
)

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(member.value for member in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = cast(
    "tuple[Literal['debug', 'info', 'warning', 'error'], ...]",
    tuple(_LEVELS),
)
COMPONENT_LOGGERS: Final[tuple[str, ...]] = tuple(
    f"{ROOT_LOGGER_NAME}.{component.value}" for component in LogComponent
)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Outcome of ``configure_logging``.

    Attributes:
        format: Formatter installed on the ``typelens`` handler.
        level: Numeric level applied to the root and component loggers.
        level_name: Lower-case name of ``level``.
    """

    format: LogFormat
    level: int
    level_name: str


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured fields attached to typelens log records."""

    kind: str
    depth: int
    duration_ms: float
    counts: Mapping[str, int]
    path: str
    reference: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    kind: str
    depth: int
    duration_ms: float
    counts: Mapping[str, int]
    path: str | os.PathLike[str]
    reference: str
    details: Mapping[str, object]


def _non_empty_mapping(value: object) -> dict[str, object] | None:
    if isinstance(value, Mapping) and value:
        return dict(cast("Mapping[str, object]", value))
    return None


# Field name -> converter; a converter returning None drops the field.
_FIELD_CONVERTERS: Final[Mapping[str, Callable[[object], object | None]]] = MappingProxyType(
    {
        "kind": str,
        "depth": lambda value: int(cast("int", value)),
        "duration_ms": lambda value: round(float(cast("float", value)), 3),
        "counts": _non_empty_mapping,
        "path": lambda value: os.fspath(cast("str | os.PathLike[str]", value)),
        "reference": str,
        "details": _non_empty_mapping,
    },
)
STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *_FIELD_CONVERTERS)


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra=`` mapping for a log call.

    ``None`` values and empty ``counts``/``details`` mappings are omitted.

    Args:
        component: Subsystem emitting the record.
        **kwargs: Optional structured fields.

    Returns:
        Mapping suitable for the ``extra`` parameter of a logging call.
    """
    extra: dict[str, object] = {"component": component}
    for key, raw in cast("dict[str, object]", kwargs).items():
        converter = _FIELD_CONVERTERS.get(key)
        if converter is None or raw is None:
            continue
        value = converter(raw)
        if value is not None:
            extra[key] = value
    return cast("StructuredLogExtra", extra)


def _structured_fields(record: logging.LogRecord) -> dict[str, object]:
    return {field: record.__dict__[field] for field in STRUCTURED_FIELDS if field in record.__dict__}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, structured fields included."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **_structured_fields(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalise_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Single-line ``[LEVEL] component: message`` output for terminals."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        component = record.__dict__.get("component")
        if component is None:
            return line
        prefix = f"[{record.levelname}] "
        return f"{prefix}{component}: {line.removeprefix(prefix)}"


def resolve_log_level(level: str | int) -> tuple[int, str]:
    """Return the numeric level and lower-case name for ``level``.

    Unrecognised names fall back to ``info``.
    """
    if isinstance(level, int):
        return level, logging.getLevelName(level).lower()
    name = level.strip().lower()
    if name not in _LEVELS:
        name = DEFAULT_LEVEL_NAME
    return _LEVELS[name], name


def _resolve_format(preferred: LogFormat | str | None) -> LogFormat:
    raw = preferred if preferred is not None else os.getenv(LOG_FORMAT_ENV)
    if not raw:
        return LogFormat.TEXT
    return raw if isinstance(raw, LogFormat) else LogFormat.from_str(raw)


def _build_handler(log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler()
    formatter = JSONLogFormatter() if log_format is LogFormat.JSON else TextLogFormatter()
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install a single handler on the ``typelens`` logger.

    Args:
        log_format: ``text`` or ``json``. ``None`` consults
            ``TYPELENS_LOG_FORMAT``, then defaults to ``text``.
        log_level: Level name or number. ``None`` consults
            ``TYPELENS_LOG_LEVEL``, then defaults to ``info``.

    Returns:
        The applied configuration. Previously installed handlers are replaced
        and the component loggers receive the same level.
    """
    selected_format = _resolve_format(log_format)
    raw_level = log_level if log_level is not None else os.getenv(LOG_LEVEL_ENV) or DEFAULT_LEVEL_NAME
    level, level_name = resolve_log_level(raw_level)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_handler(selected_format))
    root_logger.setLevel(level)
    root_logger.propagate = False
    for name in COMPONENT_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return LogConfig(format=selected_format, level=level, level_name=level_name)


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "JSONLogFormatter",
    "LogConfig",
    "StructuredLogExtra",
    "TextLogFormatter",
    "configure_logging",
    "resolve_log_level",
    "structured_extra",
]
