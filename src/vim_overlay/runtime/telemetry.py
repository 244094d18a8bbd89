"""Telemetry services built on the standard ``logging`` package.

This module exposes a narrow surface area for the rest of the interpreter:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block with its metadata
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional

from rich.logging import RichHandler

from .config import env, env_flag

DEFAULT_LOGGER_NAME = env("LOGGER", "vim_overlay") or "vim_overlay"

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


@dataclass(slots=True)
class TelemetryConfig:
    """Where and how verbosely telemetry lines are written."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""


class _JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)
        return json.dumps(payload, default=str)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()
    if key == "development":
        return TelemetryConfig(level="DEBUG", console=True, colored=True)
    if key == "production":
        log_path = env("LOG_FILE") or "vim_overlay.log"
        return TelemetryConfig(level="INFO", console=False, log_file=log_path)
    if key in {"performance", "performance_analysis"}:
        log_path = env("LOG_FILE") or "vim_overlay-performance.log"
        return TelemetryConfig(
            level="DEBUG", console=False, json_format=True, log_file=log_path
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        level=(env("LOG_LEVEL") or "INFO").upper(),
        console=not env_flag("DISABLE_CONSOLE", False),
        colored=not env_flag("NO_COLOR", False),
        json_format=env_flag("LOG_JSON", False),
        log_file=env("LOG_FILE") or "",
    )


def _build_handlers(config: TelemetryConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if config.console:
        if config.colored:
            handlers.append(RichHandler(show_path=False, rich_tracebacks=True))
        else:
            plain = logging.StreamHandler()
            plain.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
            handlers.append(plain)
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        if config.json_format:
            file_handler.setFormatter(_JsonLineFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        handlers.append(file_handler)
    if not handlers:
        handlers.append(logging.NullHandler())
    return handlers


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> TelemetryConfig:
    """Replace the handlers on the package root logger; returns the adopted config.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(config):
        root.addHandler(handler)
    root.setLevel(config.level)
    root.propagate = False

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()
    return config


def _ensure_config() -> TelemetryConfig:
    if _ACTIVE_CONFIG is None:
        return configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the package root logger."""

    _ensure_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if not (
        logger_name == DEFAULT_LOGGER_NAME
        or logger_name.startswith(f"{DEFAULT_LOGGER_NAME}.")
    ):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return resolved


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(
        _resolve_level(level),
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"fields": payload},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            level, "%s %s", message, _format_pairs(payload), extra={"fields": payload}
        )

    def fail(self, reason: str) -> None:
        self._emit(logging.ERROR, "span::fail", {"reason": reason})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and log it on completion.

    Parameters
    ----------
    name:
        Operation name recorded as ``span``.
    logger_name:
        Target logger; defaults to the package logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Initial metadata attached to every record the span writes.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    else:
        if log.isEnabledFor(logging.DEBUG):
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            handle._emit(
                logging.DEBUG, "span::done", {"elapsed_ms": f"{elapsed_ms:.3f}"}
            )


logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetryConfig",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
