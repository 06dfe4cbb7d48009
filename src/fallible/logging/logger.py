"""Structured logging with bound context.

Used by the sequencer to trace step execution when FALLIBLE_TRACE_STEPS is
enabled. Human-readable console output for development, JSON lines for
aggregation.

Quick Start:
    >>> from fallible.logging import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("signup")
    >>> log.debug("step succeeded", step="validate_name", index=0)
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

import orjson

from fallible.errors import JsonDict, JsonValue

if TYPE_CHECKING:
    from types import TracebackType

    from fallible.config import FallibleSettings

# Context var for scoped context (persists across nested calls)
_log_context: ContextVar[JsonDict] = ContextVar("log_context", default={})


# ─────────────────────────────────────────────────────────────────────────────
# Core Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context.

    Immutable - bind() returns a new logger with merged context.

    Example:
        >>> log = BoundLogger(context={"logger": "signup"})
        >>> log.info("sequence finished", outcome="success")
        # => 10:30:45.120 [info] sequence finished logger="signup" outcome="success"
    """

    context: JsonDict = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int = logging.DEBUG

    def bind(self, **kw: JsonValue) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer, _level=self._level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           _renderer=self._renderer, _level=self._level)

    def with_level(self, level: int) -> BoundLogger:
        """Create new logger with a different minimum level."""
        return BoundLogger(context=self.context, _renderer=self._renderer, _level=level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= self._level

    def _log(self, level: int, event: str, **kw: JsonValue) -> None:
        if level < self._level:
            return
        # Merge contexts: scoped -> bound -> call-site
        merged = {**_log_context.get(), **self.context, **kw}
        (self._renderer or _get_renderer()).render(LogEntry(time.time(), _level_name(level), event, merged))

    def debug(self, event: str, **kw: JsonValue) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: JsonValue) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: JsonValue) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: JsonValue) -> None: self._log(logging.ERROR, event, **kw)


@dataclass(slots=True)
class LogEntry:
    """Log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


class log_context:
    """Context manager adding key-value pairs to all log entries within the scope."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: JsonValue) -> None:
        self._ctx: JsonDict = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _log_context.reset(self._token)  # type: ignore[arg-type]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        dim, reset = (_DIM, _RESET) if self.colors else ("", "")
        level = _LEVEL_COLORS.get(entry.level, "") if self.colors else ""
        parts = [f"{dim}{entry.ts_human}{reset}"] if self.show_timestamp else []
        parts.append(f"{level}[{entry.level}]{reset} {entry.event}")
        parts += [f"{k}={_format_value(v)}" for k, v in sorted(entry.context.items())]
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        print(orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                            **entry.context}, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(),
              file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_renderer: ContextVar[LogRenderer | None] = ContextVar("log_renderer", default=None)
_default_level: ContextVar[int] = ContextVar("log_level", default=logging.INFO)


def configure_logging(
    format: str = "console",  # noqa: A002 - matches stdlib naming
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none"."""
    _default_level.set(getattr(logging, level.upper(), logging.INFO))
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer.set(renderer)
    return renderer


def configure_from_settings(settings: FallibleSettings | None = None, *, output: TextIO | None = None) -> LogRenderer:
    """Apply the logging section of FallibleSettings (defaults to get_settings())."""
    from fallible.config import get_settings

    cfg = (settings or get_settings()).logging
    return configure_logging(cfg.format, cfg.level, output=output, colors=cfg.colors)


def set_renderer(renderer: LogRenderer, level: str | None = None) -> None:
    """Install a custom renderer, e.g. one that captures entries."""
    _renderer.set(renderer)
    if level:
        _default_level.set(getattr(logging, level.upper(), logging.INFO))


def reset_logging() -> None:
    """Forget the installed renderer; the next logger re-reads FALLIBLE_LOG_* settings."""
    _renderer.set(None)
    _default_level.set(logging.INFO)


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Get a structured logger. Name is added to context as 'logger'.

    Until configure_logging() or set_renderer() is called, the first logger
    applies the logging section of get_settings().
    """
    _get_renderer()
    ctx = {**initial_context, **({"logger": name} if name else {})}
    return BoundLogger(context=ctx, _level=_default_level.get())


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        renderer = configure_from_settings()
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


_RESET, _DIM = "\033[0m", "\033[2m"
_LEVEL_COLORS = {"debug": _DIM, "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m"}


def _level_name(level: int) -> str:
    return logging.getLevelName(level).lower()


def _format_value(v: object) -> str:
    return orjson.dumps(v, option=orjson.OPT_NON_STR_KEYS, default=repr).decode()
