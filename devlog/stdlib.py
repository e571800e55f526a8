"""Route standard library ``logging`` records through a devlog handler."""

import logging
import traceback
from datetime import datetime
from typing import IO

from .attrs import Attr, Record
from .handler import Handler, HandlerOptions

# Attribute names every LogRecord has. Anything else came in through ``extra``.
_DEFAULT_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class DevLogHandler(logging.Handler):
    """``logging.Handler`` that renders records with a devlog :class:`Handler`.

    Fields passed with ``extra=`` become attributes, in the order given.
    When the record carries ``exc_info`` the formatted traceback is added as
    an ``exception`` attribute.

    Example:
        >>> logging.getLogger().addHandler(DevLogHandler.from_stream(sys.stderr))
        >>> logging.getLogger("app").warning("disk low", extra={"free_mb": 120})
    """

    def __init__(self, handler: Handler, level: int = logging.NOTSET):
        super().__init__(level)
        self.handler = handler

    @classmethod
    def from_stream(cls, stream: IO, options: HandlerOptions | None = None) -> "DevLogHandler":
        return cls(Handler(stream, options))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if not self.handler.enabled(record.levelno):
                return
            self.handler.handle(to_record(record))
        except Exception:
            self.handleError(record)


def to_record(record: logging.LogRecord) -> Record:
    """Convert a standard library record into a devlog :class:`Record`."""
    attrs = [
        Attr(key, value)
        for key, value in record.__dict__.items()
        if key not in _DEFAULT_RECORD_ATTRS and not key.startswith("_")
    ]
    if record.exc_info and record.exc_info[0] is not None:
        attrs.append(Attr("exception", "".join(traceback.format_exception(*record.exc_info)).rstrip()))
    elif record.exc_text:
        attrs.append(Attr("exception", record.exc_text))

    return Record(
        time=datetime.fromtimestamp(record.created).astimezone(),
        level=record.levelno,
        message=record.getMessage(),
        attrs=tuple(attrs),
    )
