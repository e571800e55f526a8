"""Levels, attributes and records consumed by the :mod:`devlog` handler."""

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Protocol, runtime_checkable


# =============================================================================
# Levels
# =============================================================================


class Level(IntEnum):
    """Severity tiers, numbered like the standard library ``logging`` levels."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    CRITICAL = 50

    def level(self) -> int:
        return int(self)

    def __str__(self) -> str:
        return level_name(self)

    @classmethod
    def parse(cls, text: str) -> int:
        """Parse ``"info"``, ``"WARN+2"``, ``"ERROR-1"`` or ``"35"`` into a level.

        Returns a :class:`Level` member when the text names a tier exactly,
        otherwise a plain ``int``.

        Raises:
            ValueError: if the text is not a level.
        """
        raw = text.strip()
        try:
            return _as_level(int(raw))
        except ValueError:
            pass

        name, offset = raw, 0
        for sign in ("+", "-"):
            if sign in raw:
                name, _, num = raw.partition(sign)
                try:
                    offset = int(num)
                except ValueError:
                    raise ValueError(f"invalid level offset in {text!r}") from None
                if sign == "-":
                    offset = -offset
                break

        base = _LEVEL_ALIASES.get(name.strip().upper())
        if base is None:
            raise ValueError(f"unknown level: {text!r}")
        return _as_level(base + offset)


_LEVEL_ALIASES = {
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "WARN": Level.WARN,
    "WARNING": Level.WARN,
    "ERROR": Level.ERROR,
    "CRITICAL": Level.CRITICAL,
    "FATAL": Level.CRITICAL,
}


def _as_level(value: int) -> int:
    try:
        return Level(value)
    except ValueError:
        return value


def level_name(level: int) -> str:
    """Name of ``level``, with an offset from the nearest tier at or below it.

    >>> level_name(20), level_name(25), level_name(8)
    ('INFO', 'INFO+5', 'DEBUG-2')
    """
    level = int(level)
    base = Level.DEBUG
    for tier in Level:
        if tier <= level:
            base = tier
    offset = level - base
    if offset == 0:
        return base.name
    return f"{base.name}{offset:+d}"


class LevelVar:
    """A level that can be changed while handlers holding it are in use."""

    def __init__(self, level: int = Level.INFO):
        self._lock = threading.Lock()
        self._level = int(level)

    def level(self) -> int:
        with self._lock:
            return self._level

    def set(self, level: int) -> None:
        with self._lock:
            self._level = int(level)

    def __repr__(self) -> str:
        return f"LevelVar({level_name(self.level())})"


def resolve_level(leveler: Any, default: int = Level.INFO) -> int:
    """Turn a leveler (``Level``, ``LevelVar``, int or None) into an int."""
    if leveler is None:
        return int(default)
    if hasattr(leveler, "level"):
        return int(leveler.level())
    return int(leveler)


# =============================================================================
# Attributes
# =============================================================================


class Kind(Enum):
    ANY = "any"
    STRING = "string"
    TIME = "time"
    GROUP = "group"
    LOG_VALUER = "log_valuer"


@runtime_checkable
class LogValuer(Protocol):
    """A value that produces its loggable form only when it is rendered."""

    def log_value(self) -> Any: ...


BAD_KEY = "!BADKEY"
_MAX_RESOLVE = 100


class Group(tuple):
    """Children of a group attribute. Only values of this type render as groups."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Group({list(self)!r})"


@dataclass(frozen=True)
class Attr:
    """A key/value pair. Mapping values are stored as groups."""

    key: str = ""
    value: Any = None

    def __post_init__(self):
        if isinstance(self.value, Mapping):
            object.__setattr__(self, "value", _group_from_mapping(self.value))
        elif isinstance(self.value, list) and self.value and all(
            isinstance(a, Attr) for a in self.value
        ):
            object.__setattr__(self, "value", Group(self.value))

    @property
    def kind(self) -> Kind:
        return kind_of(self.value)

    def is_empty(self) -> bool:
        """True for the ``Attr("", None)`` sentinel, which handlers ignore."""
        return self.key == "" and self.value is None

    def resolve(self) -> "Attr":
        """Return this attribute with any :class:`LogValuer` value forced."""
        if not isinstance(self.value, LogValuer):
            return self
        value = self.value
        for _ in range(_MAX_RESOLVE):
            try:
                value = value.log_value()
            except Exception as e:
                return Attr(self.key, f"!ERROR:{e}")
            if not isinstance(value, LogValuer):
                return Attr(self.key, value)
        return Attr(self.key, "!ERROR:LogValue called too many times")


def kind_of(value: Any) -> Kind:
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, datetime):
        return Kind.TIME
    if isinstance(value, Group):
        return Kind.GROUP
    if isinstance(value, tuple) and value and all(isinstance(a, Attr) for a in value):
        return Kind.GROUP
    if isinstance(value, LogValuer):
        return Kind.LOG_VALUER
    return Kind.ANY


def _group_from_mapping(mapping: Mapping) -> Group:
    return Group(Attr(str(k), v) for k, v in mapping.items())


def string(key: str, value: str) -> Attr:
    return Attr(key, str(value))


def time(key: str, value: datetime) -> Attr:
    return Attr(key, value)


def group(key: str, *args: Any) -> Attr:
    """Group attribute; ``args`` accepts the same forms as :meth:`Record.add`."""
    return Attr(key, Group(args_to_attrs(args)))


def any_(key: str, value: Any) -> Attr:
    return Attr(key, value)


def args_to_attrs(args) -> list[Attr]:
    """Convert a mix of ``Attr`` objects and ``key, value`` pairs to attributes.

    A non-string, non-``Attr`` item or a key without a value becomes an
    attribute under the ``!BADKEY`` key.
    """
    out: list[Attr] = []
    items = list(args)
    i = 0
    while i < len(items):
        item = items[i]
        if isinstance(item, Attr):
            out.append(item)
            i += 1
        elif isinstance(item, str) and i + 1 < len(items):
            out.append(Attr(item, items[i + 1]))
            i += 2
        else:
            out.append(Attr(BAD_KEY, item))
            i += 1
    return out


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Record:
    """One log event. ``time=None`` means the time is omitted from output."""

    time: datetime | None
    level: int
    message: str
    attrs: tuple[Attr, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "attrs", tuple(self.attrs))

    @classmethod
    def now(cls, level: int, message: str, *args: Any) -> "Record":
        return cls(datetime.now().astimezone(), level, message, tuple(args_to_attrs(args)))

    @property
    def num_attrs(self) -> int:
        return len(self.attrs)

    def add(self, *args: Any) -> "Record":
        """Return a copy with ``args`` appended to the attributes."""
        if not args:
            return self
        return Record(self.time, self.level, self.message, self.attrs + tuple(args_to_attrs(args)))
