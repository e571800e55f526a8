"""A small logging front end over :class:`~devlog.handler.Handler`.

Provides :class:`Logger` with ``debug``/``info``/``warning``/``error``/
``critical`` methods and scope derivation, plus :func:`set_default` and
:func:`get_default` for a process-wide default logger.
"""

import logging
import sys
import threading
from typing import IO, Any

from .attrs import Attr, Level, Record, args_to_attrs
from .handler import Handler, HandlerOptions
from .stdlib import DevLogHandler


class Logger:
    """Builds records and passes them to a handler.

    Example:
        >>> log = Logger(Handler(sys.stderr))
        >>> log.info("Connection established", peer_id="abc123")
        >>> req = log.with_group("request").with_(method="GET")
        >>> req.warning("slow", elapsed_ms=812)
    """

    def __init__(self, handler: Handler):
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def with_(self, *args: Any, **attrs: Any) -> "Logger":
        """Derive a logger whose records carry the given attributes."""
        new_attrs = args_to_attrs(args) + _kw_attrs(attrs)
        if not new_attrs:
            return self
        return Logger(self._handler.with_attrs(new_attrs))

    def with_group(self, name: str) -> "Logger":
        """Derive a logger whose later attributes are nested under ``name``."""
        if not name:
            return self
        return Logger(self._handler.with_group(name))

    def log(self, level: int, message: str, /, *args: Any, **attrs: Any) -> None:
        if not self._handler.enabled(level):
            return
        record = Record.now(level, message, *args).add(*_kw_attrs(attrs))
        self._handler.handle(record)

    def debug(self, message: str, /, *args: Any, **attrs: Any) -> None:
        self.log(Level.DEBUG, message, *args, **attrs)

    def info(self, message: str, /, *args: Any, **attrs: Any) -> None:
        self.log(Level.INFO, message, *args, **attrs)

    def warning(self, message: str, /, *args: Any, **attrs: Any) -> None:
        self.log(Level.WARN, message, *args, **attrs)

    def error(self, message: str, /, *args: Any, **attrs: Any) -> None:
        self.log(Level.ERROR, message, *args, **attrs)

    def critical(self, message: str, /, *args: Any, **attrs: Any) -> None:
        self.log(Level.CRITICAL, message, *args, **attrs)


def _kw_attrs(attrs: dict[str, Any]) -> list[Attr]:
    return [Attr(key, value) for key, value in attrs.items()]


# =============================================================================
# Default Logger
# =============================================================================


_default_logger: Logger | None = None
_default_lock = threading.Lock()


def set_default(
    stream: IO | None = None,
    options: HandlerOptions | None = None,
    *,
    stdlib: bool = True,
) -> Logger:
    """Install a devlog handler as the process-wide default.

    Args:
        stream: Where records are written. Defaults to ``sys.stderr``.
        options: Handler options; ``None`` uses the defaults.
        stdlib: Also route the standard library root logger through a
            :class:`~devlog.stdlib.DevLogHandler` over the same handler,
            replacing one installed by an earlier call. The root level is
            pinned to a fixed minimum level, or left open (``NOTSET``) when
            the level is a ``LevelVar``.

    Returns:
        The new default :class:`Logger`.
    """
    global _default_logger

    handler = Handler(stream if stream is not None else sys.stderr, options)
    logger = Logger(handler)

    with _default_lock:
        _default_logger = logger

    if stdlib:
        root = logging.getLogger()
        for h in list(root.handlers):
            if isinstance(h, DevLogHandler):
                root.removeHandler(h)
        root.addHandler(DevLogHandler(handler))
        # A changeable leveler is checked by DevLogHandler.emit on every record,
        # so the root logger must let everything through to it.
        level = handler.options.level
        if level is None or isinstance(level, int):
            root.setLevel(handler.min_level())
        else:
            root.setLevel(logging.NOTSET)

    return logger


def get_default() -> Logger:
    """Return the default logger, creating one on stderr on first use."""
    global _default_logger

    with _default_lock:
        if _default_logger is None:
            _default_logger = Logger(Handler(sys.stderr))
        return _default_logger
