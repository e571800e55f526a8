"""Rx operator that prints :class:`~devlog.attrs.Record` items from a stream."""

from typing import Any

from reactivex import Observable

from .attrs import Record
from .errors import DevLogException
from .handler import Handler
from .logger import Logger


def render_to(target: Handler | Logger):
    """
    The operator writes ``Record`` items through ``target`` and forwards other items.
    Records below the target's level are dropped. If the stream fails, the
    error is wrapped in :class:`DevLogException` and sent downstream.
    """
    handler = target.handler if isinstance(target, Logger) else target

    def _render_to(source):
        def subscribe(observer, scheduler=None):

            def on_next(value: Any) -> None:
                if not isinstance(value, Record):
                    observer.on_next(value)
                    return
                if not handler.enabled(value.level):
                    return
                try:
                    handler.handle(value)
                except Exception as e:
                    observer.on_error(DevLogException(e, note="Error writing record"))

            return source.subscribe(
                on_next=on_next,
                on_error=observer.on_error,
                on_completed=observer.on_completed,
                scheduler=scheduler,
            )

        return Observable(subscribe)

    return _render_to
