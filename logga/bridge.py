"""
Interop with the standard library `logging` module.

- LoggingHandler: a logging.Handler that publishes records on a logga bus
- forward_to_logging: a logga handler that re-emits events through logging
"""

import logging
from typing import Optional

from logga.bus import EventBus, default_bus
from logga.events import LogData, LogLevel


# Records produced by logga itself carry this attribute, so that bridging
# in both directions at once does not loop
MARKER = 'logga'

STDLIB_LEVELS = {
    LogLevel.error: logging.ERROR,
    LogLevel.warn: logging.WARNING,
    LogLevel.info: logging.INFO,
    LogLevel.debug: logging.DEBUG,
}


def level_for(levelno: int) -> LogLevel:
    """Map a stdlib level number onto a LogLevel"""
    if levelno >= logging.ERROR:
        return LogLevel.error
    if levelno >= logging.WARNING:
        return LogLevel.warn
    if levelno >= logging.INFO:
        return LogLevel.info
    return LogLevel.debug


class LoggingHandler(logging.Handler):
    """
    Publishes stdlib log records as LogData.

    Example:
        logging.getLogger().addHandler(LoggingHandler())
    """

    def __init__(self, level: int = logging.NOTSET, bus: Optional[EventBus] = None):
        super().__init__(level)
        self.bus = bus if bus is not None else default_bus
        self._formatter = logging.Formatter()

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(record, MARKER, False):
            return
        try:
            stack = None
            if record.exc_info:
                stack = self._formatter.formatException(record.exc_info)
            data = LogData(
                tag=record.name,
                level=level_for(record.levelno),
                message=record.getMessage(),
                stack=stack
            )
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
            return
        self.bus.publish(data)


def forward_to_logging(data: LogData) -> None:
    """Handler that logs an event to `logging.getLogger(data.tag)`"""
    text = data.message
    if data.stack is not None:
        text += '\n' + data.stack
    logging.getLogger(data.tag).log(STDLIB_LEVELS[data.level], '%s', text, extra={MARKER: True})
