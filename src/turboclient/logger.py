"""Injectable logging capability with Rich output on stderr.

The client never writes diagnostics on its own; every message goes through a
:class:`Logger` supplied by the caller (or the :class:`RichLogger` default).
A logger exposes three operations, each taking a *context* mapping that
carries correlation fields (request id, caller name, ...) and a message:

* :meth:`Logger.info`
* :meth:`Logger.debug`
* :meth:`Logger.error`

The default verbosity is read from the ``T8C_LOG`` environment variable
(``DEBUG``, ``INFO``, ``WARN`` or ``ERROR``; anything else means ``INFO``).
"""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Mapping
from typing import Any, Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

LOG_LEVEL_ENV = "T8C_LOG"

LogContext = Mapping[str, Any]


class LogLevel(enum.IntEnum):
    """Verbosity thresholds, lowest first."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def from_name(cls, name: Optional[str]) -> LogLevel:
        """Map a level name to a :class:`LogLevel`, defaulting to ``INFO``.

        Args:
            name: Level name in any case, or ``None``.

        Returns:
            The matching level, or :attr:`INFO` for empty/unknown names.
        """
        if not name:
            return cls.INFO
        return cls.__members__.get(name.strip().upper(), cls.INFO)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> LogLevel:
        """Read the level from ``T8C_LOG`` in *environ* (default :data:`os.environ`)."""
        env = os.environ if environ is None else environ
        return cls.from_name(env.get(LOG_LEVEL_ENV))


@runtime_checkable
class Logger(Protocol):
    """Capability the client logs through."""

    def info(self, ctx: LogContext, message: str, **fields: Any) -> None: ...

    def debug(self, ctx: LogContext, message: str, **fields: Any) -> None: ...

    def error(self, ctx: LogContext, message: str, **fields: Any) -> None: ...


class RichLogger:
    """Default :class:`Logger` that renders messages on stderr with Rich.

    Each line carries the level, the message, and any ``key=value`` pairs
    from the context and the call's keyword fields.

    Args:
        level: Minimum level to emit.  When ``None`` the level is read from
            ``T8C_LOG``.
        no_color: Disable Rich markup.  Colour is also disabled when
            ``NO_COLOR`` is set or ``TERM=dumb``.
        console: Optional pre-built console (mainly for tests).
    """

    def __init__(
        self,
        level: Optional[LogLevel] = None,
        no_color: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        self._level = level if level is not None else LogLevel.from_env()
        self._no_color = no_color or _should_disable_color()
        self._console = console or Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def level(self) -> LogLevel:
        """The minimum level this logger emits."""
        return self._level

    def info(self, ctx: LogContext, message: str, **fields: Any) -> None:
        self._emit(LogLevel.INFO, ctx, message, fields)

    def debug(self, ctx: LogContext, message: str, **fields: Any) -> None:
        self._emit(LogLevel.DEBUG, ctx, message, fields)

    def error(self, ctx: LogContext, message: str, **fields: Any) -> None:
        self._emit(LogLevel.ERROR, ctx, message, fields)

    def _emit(
        self,
        level: LogLevel,
        ctx: LogContext,
        message: str,
        fields: Mapping[str, Any],
    ) -> None:
        if level < self._level:
            return
        pairs = {**ctx, **fields}
        suffix = "".join(f" {k}={v}" for k, v in pairs.items())
        line = f"level={level.name} msg={message}{suffix}"
        if self._no_color:
            self._console.print(line, markup=False, highlight=False, soft_wrap=True)
        else:
            style = _LEVEL_STYLES[level]
            self._console.print(f"[{style}]{escape(line)}[/{style}]", highlight=False, soft_wrap=True)


class NullLogger:
    """A :class:`Logger` that discards every message."""

    def info(self, ctx: LogContext, message: str, **fields: Any) -> None:
        pass

    def debug(self, ctx: LogContext, message: str, **fields: Any) -> None:
        pass

    def error(self, ctx: LogContext, message: str, **fields: Any) -> None:
        pass


class LogConfig:
    """The logger and correlation context a client logs with.

    Args:
        logger: The :class:`Logger` implementation.
        ctx: Correlation fields attached to every message.
    """

    def __init__(self, logger: Logger, ctx: LogContext):
        self.logger = logger
        self.ctx = ctx

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(self.ctx, message, **fields)

    def debug(self, message: str, **fields: Any) -> None:
        self.logger.debug(self.ctx, message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.logger.error(self.ctx, message, **fields)


def set_log_config(
    logger: Optional[Logger] = None,
    ctx: Optional[LogContext] = None,
) -> LogConfig:
    """Build a :class:`LogConfig`, filling in defaults for missing parts.

    Args:
        logger: Logger to use.  Defaults to a new :class:`RichLogger`.
        ctx: Correlation context.  Defaults to an empty mapping.

    Returns:
        A ready-to-use :class:`LogConfig`.
    """
    return LogConfig(
        logger=logger if logger is not None else RichLogger(),
        ctx=dict(ctx) if ctx is not None else {},
    )


_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "default",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "bold red",
}


def _should_disable_color() -> bool:
    """Return True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False
