"""The devlog handler: renders records as indented, colorized lines."""

import copy
import io
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO, Any

from . import colors
from .attrs import Attr, Kind, Level, Record, level_name, resolve_level
from .scope import GroupOrAttrs, Scope

# Marks the start of an attribute line; preceded by the indentation.
ATTR_PREFIX = "↳"
# Delimiter between an attribute's key and its value.
KVD = ":"
SPACES_PER_LEVEL = 4
# Layout shared by the record time and time-valued attributes.
TIME_FORMAT = "%H:%M:%S"


@dataclass(frozen=True)
class HandlerOptions:
    """
    Parameters
    - level: Level | LevelVar | int | None
        Minimum level handled. None means ``Level.INFO``. A ``LevelVar`` is
        read on every call.
    - color: bool, default True
        Wrap level names and keys in ANSI color codes.
    """

    level: Any = None
    color: bool = True


class Handler:
    """
    Handler writes each record as a first line with time, level and message,
    followed by one line per attribute. Groups entered with ``with_group`` and
    group-valued attributes indent the attributes under them.

    Example output (colors omitted)::

        23:00:00 INFO request served
         ↳ http:
             ↳ method: GET
             ↳ status: 200

    Handlers derived with ``with_attrs``/``with_group`` share the stream and
    the lock of the handler they came from. A record is rendered before the
    lock is taken and written with a single ``write`` call.
    """

    def __init__(self, stream: IO, options: HandlerOptions | None = None):
        self._stream = stream
        self._options = options or HandlerOptions()
        self._lock = threading.Lock()
        self._scope = Scope()
        self._binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def stream(self) -> IO:
        return self._stream

    @property
    def scope(self) -> Scope:
        return self._scope

    def min_level(self) -> int:
        return resolve_level(self._options.level, Level.INFO)

    def enabled(self, level: int) -> bool:
        """Report whether records at ``level`` are handled."""
        return level >= self.min_level()

    def with_attrs(self, attrs: Iterable[Attr]) -> "Handler":
        """Return a handler whose scope ends with ``attrs``; ``self`` if empty."""
        attrs = tuple(attrs)
        if not attrs:
            return self
        return self._with_group_or_attrs(GroupOrAttrs(attrs=attrs))

    def with_group(self, name: str) -> "Handler":
        """Return a handler with group ``name`` appended; ``self`` if empty."""
        if not name:
            return self
        return self._with_group_or_attrs(GroupOrAttrs(group=name))

    def _with_group_or_attrs(self, goa: GroupOrAttrs) -> "Handler":
        out = copy.copy(self)
        out._scope = self._scope.extend(goa)
        return out

    def handle(self, record: Record) -> None:
        """
        Render ``record`` and write it to the stream.

        Exceptions raised by the stream's ``write`` propagate to the caller.
        """
        data: str | bytes = self.render(record)
        if self._binary:
            data = data.encode("utf-8")
        with self._lock:
            self._stream.write(data)

    def render(self, record: Record) -> str:
        buf = io.StringIO()

        if record.time is not None:
            buf.write(record.time.strftime(TIME_FORMAT) + " ")
        level = self._paint(colors.level_color(record.level), level_name(record.level))
        buf.write(f"{level} {record.message}\n")

        indent = 0
        scope = self._scope
        if record.num_attrs == 0:
            scope = scope.without_trailing_groups()
        for goa in scope:
            if goa.group:
                buf.write(f"{self._indent(indent)} {ATTR_PREFIX} {self._gray(goa.group)}:\n")
                indent += 1
            else:
                for a in goa.attrs:
                    self._append_attr(buf, a, indent)
        for a in record.attrs:
            self._append_attr(buf, a, indent)

        return buf.getvalue()

    def _append_attr(self, buf: io.StringIO, a: Attr, indent: int) -> None:
        a = a.resolve()
        if a.is_empty():
            return

        kind = a.kind
        if kind == Kind.GROUP:
            attrs = a.value
            if not attrs:
                return
            # Named groups get a header line; anonymous ones are inlined.
            if a.key:
                buf.write(f"{self._indent(indent)} {ATTR_PREFIX} {self._gray(a.key)}:\n")
                indent += 1
            for ga in attrs:
                self._append_attr(buf, ga, indent)
            return

        if kind == Kind.TIME:
            value = a.value.strftime(TIME_FORMAT)
        else:
            value = str(a.value)
        buf.write(f"{self._indent(indent)} {ATTR_PREFIX} {self._gray(a.key)}{KVD} {value}\n")

    @staticmethod
    def _indent(level: int) -> str:
        return " " * (level * SPACES_PER_LEVEL)

    def _paint(self, color: str, s: str) -> str:
        if not self._options.color:
            return s
        return colors.text(color, s)

    def _gray(self, s: str) -> str:
        return self._paint(colors.GRAY, s)

    def __repr__(self) -> str:
        return f"Handler(level={level_name(self.min_level())}, scope={len(self._scope)})"
