"""OTel log-record exporter that writes through a devlog handler.

Plugs into an OpenTelemetry ``LoggerProvider`` via ``SimpleLogRecordProcessor``
or ``BatchLogRecordProcessor`` and prints each record in the devlog layout.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from opentelemetry._logs import LogRecord, SeverityNumber
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import (
    LogRecordExporter,
    LogRecordExportResult,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.resources import Resource

from .attrs import Attr, Level, Record
from .handler import Handler

if TYPE_CHECKING:
    from opentelemetry.sdk._logs._internal import ReadableLogRecord


def severity_to_level(severity: SeverityNumber | None) -> int:
    """Map an OTel severity number onto a devlog level tier."""
    if severity is None or severity == SeverityNumber.UNSPECIFIED:
        return Level.INFO
    n = severity.value
    if n < SeverityNumber.INFO.value:
        return Level.DEBUG
    if n < SeverityNumber.WARN.value:
        return Level.INFO
    if n < SeverityNumber.ERROR.value:
        return Level.WARN
    if n < SeverityNumber.FATAL.value:
        return Level.ERROR
    return Level.CRITICAL


def otel_to_record(record: LogRecord) -> Record:
    """Convert an OTel ``LogRecord`` into a devlog :class:`Record`."""
    timestamp = None
    if record.timestamp:
        timestamp = datetime.fromtimestamp(record.timestamp / 1e9).astimezone()
    attrs = record.attributes or {}
    return Record(
        time=timestamp,
        level=severity_to_level(record.severity_number),
        message="" if record.body is None else str(record.body),
        attrs=tuple(Attr(str(k), v) for k, v in attrs.items()),
    )


class DevLogRecordExporter(LogRecordExporter):
    """OTel LogRecordExporter that renders records with a devlog handler.

    Example:
        >>> exporter = DevLogRecordExporter(Handler(sys.stderr))
        >>> tracer_provider, logger_provider = configure_telemetry(
        ...     log_exporter=exporter, batch_logs=False,
        ... )
    """

    def __init__(self, handler: Handler):
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def export(self, batch: Sequence["ReadableLogRecord"]) -> LogRecordExportResult:
        """Render each record in ``batch`` that the handler is enabled for.

        Returns:
            LogRecordExportResult.SUCCESS, or FAILURE if the stream raised.
        """
        try:
            for readable_record in batch:
                record = otel_to_record(readable_record.log_record)
                if self._handler.enabled(record.level):
                    self._handler.handle(record)
            return LogRecordExportResult.SUCCESS
        except Exception:
            return LogRecordExportResult.FAILURE

    def shutdown(self) -> None:
        """Shutdown the exporter (no-op; the stream belongs to the caller)."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        stream = self._handler.stream
        if hasattr(stream, "flush"):
            stream.flush()
        return True


def configure_logger_provider(
    handler: Handler,
    service_name: str = "devlog",
    service_version: str = "",
) -> LoggerProvider:
    """Create a LoggerProvider whose records are printed by ``handler``.

    Records are exported immediately (``SimpleLogRecordProcessor``) so output
    interleaves correctly with other terminal output. The global provider is
    not touched.

    Example:
        >>> provider = configure_logger_provider(Handler(sys.stderr), "my-app")
        >>> otel_logger = provider.get_logger("my-app")
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
        }
    )
    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(
        SimpleLogRecordProcessor(DevLogRecordExporter(handler))
    )
    return provider
