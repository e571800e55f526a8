import logging
import sys

import reactivex as rx

from devlog import (
    Attr,
    Level,
    LevelVar,
    HandlerOptions,
    Record,
    group,
    render_to,
    set_default,
)

# this example prints a few records through every entry point: the Logger,
# the standard library logging module and an Rx stream.

level = LevelVar(Level.DEBUG)
log = set_default(sys.stderr, HandlerOptions(level=level))

log.info("server started", host="::", port=8888)

req = log.with_group("request").with_(method="GET", path="/items")
req.debug("cache miss", key="items:all")
req.warning("slow response", elapsed_ms=812, upstream={"name": "db", "retries": 2})

logging.getLogger("app").error("upload failed", extra={"file": "a.bin", "size": 1024})

level.set(Level.WARN)
log.info("not printed")

rx.from_(
    [
        Record.now(Level.ERROR, "stream record", group("peer", "id", "abc123")),
        "passed through",
    ]
).pipe(render_to(log)).subscribe(print)

log.critical("shutting down", Attr("reason", "signal"))
