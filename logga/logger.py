"""
Loggers and handler subscription.

    from logga import get_logger

    log = get_logger('my-app')
    log.info('Server started')
    log.error({'message': 'Request failed', 'stack': trace})

Events go to every handler registered on the bus. Unless something else
registered a handler first, the default handler is registered when logga
is imported, so output appears without any setup.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Pattern, Union

from logga.bus import EventBus, LogHandler, default_bus
from logga.events import LogData, LogEvent, LogLevel, to_log_data
from logga.filters import HandlerFilter
from logga.handlers import default_handler


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else default_bus


@dataclass(frozen=True)
class Logger:
    """Emits events with a fixed tag"""
    tag: str
    bus: EventBus = field(default=default_bus, repr=False, compare=False)

    def log(self, level: LogLevel, event: LogEvent) -> None:
        self.bus.publish(to_log_data(self.tag, level, event))

    def error(self, event: LogEvent) -> None:
        self.log(LogLevel.error, event)

    def warn(self, event: LogEvent) -> None:
        self.log(LogLevel.warn, event)

    def info(self, event: LogEvent) -> None:
        self.log(LogLevel.info, event)

    def debug(self, event: LogEvent) -> None:
        self.log(LogLevel.debug, event)


def get_logger(tag: str, bus: Optional[EventBus] = None) -> Logger:
    """
    Get a logger for an application or package.

    Args:
        tag: The application or package name, attached to every event
        bus: Bus to publish on (default: the process-wide bus)

    Example:
        log = get_logger('my-app')
        log.warn('Disk almost full')
    """
    return Logger(tag, _bus(bus))


def handlers(bus: Optional[EventBus] = None) -> List[LogHandler]:
    """All registered handlers, in delivery order"""
    return _bus(bus).handlers()


def add_handler(
    handler: LogHandler,
    handler_filter: Optional[Union[HandlerFilter, Mapping[str, Any]]] = None,
    *,
    tags: Optional[Union[str, Iterable[str]]] = None,
    max_level=None,
    message_regex: Optional[Union[str, Pattern]] = None,
    func: Optional[Callable[[LogData], bool]] = None,
    bus: Optional[EventBus] = None
) -> LogHandler:
    """
    Add a handler, optionally filtering the events it receives.

    Args:
        handler: Function called with each LogData
        handler_filter: A HandlerFilter, or a mapping of the filter fields
            below (snake_case or camelCase keys); keyword arguments take
            precedence over its fields
        tags: Only events with one of these tags
        max_level: Only events at this level or more severe
        message_regex: Only events whose message matches (re.search)
        func: Only events for which this returns True
        bus: Bus to register on (default: the process-wide bus)

    Returns:
        The registered handler: `handler` itself when no filter is given,
        otherwise a wrapper. Pass it to `remove_handler` to remove it.
    """
    handler_filter = HandlerFilter.coerce(handler_filter).merge(HandlerFilter.build(
        tags=tags,
        max_level=max_level,
        message_regex=message_regex,
        func=func
    ))
    if not handler_filter.is_empty:
        handler = handler_filter.wrap(handler)
    return _bus(bus).register(handler)


def remove_handler(handler: LogHandler, bus: Optional[EventBus] = None) -> None:
    """
    Remove a handler.

    Only the first registration is removed if the handler was added more
    than once.
    """
    _bus(bus).unregister(handler)


def remove_handlers(bus: Optional[EventBus] = None) -> None:
    """Remove all handlers, including the default one"""
    _bus(bus).unregister_all()


remove_all_handlers = remove_handlers


def replace_handlers(handler: LogHandler, bus: Optional[EventBus] = None) -> LogHandler:
    """
    Replace all existing handlers with `handler`.

    Typically used to customise the default handler:

        replace_handlers(lambda data: default_handler(data, {'max_level': 'debug'}))
    """
    remove_handlers(bus)
    return add_handler(handler, bus=bus)


def install_default_handler(bus: Optional[EventBus] = None) -> bool:
    """
    Register the default handler if no handler is registered yet.

    Returns:
        True if the default handler was registered
    """
    bus = _bus(bus)
    if bus.handlers():
        return False
    bus.register(default_handler)
    return True


install_default_handler()
