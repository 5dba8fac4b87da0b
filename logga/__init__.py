"""
logga: Minimal structured logging through a publish/subscribe bus

Loggers publish tagged, leveled events; any number of handlers receive
them. The default handler prints colourful lines to a terminal and JSON
lines otherwise.
"""

from logga.bus import EventBus, LogHandler
from logga.errors import InvalidLevelError, LogFormatError, LoggaError
from logga.events import LogData, LogLevel, PlainMessage, StructuredMessage
from logga.filters import HandlerFilter
from logga.formats import parse_log_line, validate_log_line
from logga.handlers import (
    DefaultHandler,
    DefaultHandlerOptions,
    Throttle,
    ThrottleOptions,
    default_handler,
)
from logga.logger import (
    Logger,
    add_handler,
    get_logger,
    handlers,
    remove_all_handlers,
    remove_handler,
    remove_handlers,
    replace_handlers,
)

__all__ = [
    'EventBus', 'LogHandler',
    'LoggaError', 'InvalidLevelError', 'LogFormatError',
    'LogData', 'LogLevel', 'PlainMessage', 'StructuredMessage',
    'HandlerFilter',
    'parse_log_line', 'validate_log_line',
    'DefaultHandler', 'DefaultHandlerOptions', 'Throttle', 'ThrottleOptions', 'default_handler',
    'Logger', 'add_handler', 'get_logger', 'handlers',
    'remove_all_handlers', 'remove_handler', 'remove_handlers', 'replace_handlers',
]
__version__ = '1.0.0'
