"""Convenience exports for the :mod:`devlog` package."""

from .attrs import (  # noqa: F401
    Attr,
    Group,
    Kind,
    Level,
    LevelVar,
    LogValuer,
    Record,
    any_,
    group,
    level_name,
    string,
    time,
)
from .errors import DevLogException  # noqa: F401
from .handler import Handler, HandlerOptions  # noqa: F401
from .logger import Logger, get_default, set_default  # noqa: F401
from .otel import DevLogRecordExporter, configure_logger_provider  # noqa: F401
from .rx import render_to  # noqa: F401
from .scope import GroupOrAttrs, Scope  # noqa: F401
from .stdlib import DevLogHandler  # noqa: F401

__all__ = [
    "Level",
    "LevelVar",
    "level_name",
    "Kind",
    "Attr",
    "Group",
    "LogValuer",
    "Record",
    "string",
    "time",
    "group",
    "any_",

    "GroupOrAttrs",
    "Scope",
    "Handler",
    "HandlerOptions",
    "DevLogException",

    # facade
    "Logger",
    "set_default",
    "get_default",

    # bridges
    "DevLogHandler",
    "DevLogRecordExporter",
    "configure_logger_provider",
    "render_to",
]
