"""Error types for :mod:`devlog`."""


class DevLogException(Exception):
    """Wraps a failure raised while writing a record, with where it happened."""

    def __init__(self, exception: Exception, source: str = "devlog", note: str = ""):
        super().__init__(f"<{source}> {note}: {exception}")
        self.exception = exception
        self.source = source
        self.note = note

    def __str__(self):
        return f"<{self.source}> {self.note}: {self.exception}"
