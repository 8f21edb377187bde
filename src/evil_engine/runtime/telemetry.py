"""Telemetry services built directly on telelog.

Everything in the engine logs through this module:

``configure(...)`` -- adopt a telelog config, a named preset or the env
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- structured ``event::`` lines
``trace(message, ...)`` -- debug-level ``trace::`` lines for key handling
``span(name, ...)`` -- profiled block, optionally tracked as a component

Settings come from ``EVIL_ENGINE_*`` environment variables unless a preset
or an explicit ``telelog.Config`` is given.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EVIL_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "evil_engine")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class LogSettings:
    """Flat view of the telelog options the engine cares about."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffered: bool = False
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        console = not _env_flag("DISABLE_CONSOLE")
        buffered = _env_flag("LOG_BUFFERED")
        return cls(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=console,
            colored=console and not _env_flag("NO_COLOR"),
            json=_env_flag("LOG_JSON"),
            file=_env("LOG_FILE"),
            buffered=buffered,
            buffer_size=int(_env("LOG_BUFFER_SIZE") or "2048") if buffered else None,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
            if self.buffer_size:
                config.with_buffer_size(self.buffer_size)
        return config


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG"),
    "production": LogSettings(
        console=False, file="evil_engine.log", buffered=True
    ),
    "performance": LogSettings(
        level="DEBUG",
        console=False,
        json=True,
        file="evil_engine-performance.log",
        buffered=True,
    ),
}


def preset_settings(preset: str) -> LogSettings:
    """Settings for a named preset; ``EVIL_ENGINE_LOG_FILE`` overrides the file."""

    try:
        settings = PRESETS[preset.lower()]
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise ValueError(
            f"Unknown preset '{preset}' (expected one of {known})."
        ) from None
    log_file = _env("LOG_FILE")
    if log_file and settings.file:
        settings = replace(settings, file=log_file)
    return settings


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``config`` and ``preset`` are mutually exclusive; with neither, settings
    are read from the environment.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = preset_settings(preset).build()
    elif config is None:
        config = LogSettings.from_env().build()

    # span() profiles every block
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}" if payload else message)


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


def trace(message: str, *, logger_name: Optional[str] = None, **data: Any) -> None:
    _emit(get_logger(logger_name), "debug", f"trace::{message}", data)


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is logged if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component called ``name``; a
    string picks the component name. ``metadata`` becomes logger context
    while the block runs.
    """

    log = get_logger(logger_name)
    component_name: Optional[str] = name if component is True else (component or None)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger=log, name=name, component=component_name)
    handle.metadata.update(context)

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
    "trace",
]
