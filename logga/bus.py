"""
EventBus - synchronous publish/subscribe for log events.

Producers publish LogData, handlers receive it:
- in registration order
- on the publisher's call stack (no queueing)
- without isolation: an exception raised by a handler propagates
  to the caller of `publish`
"""

from typing import Callable, List

from logga.events import LogData


# A handler receives one event and returns nothing of interest
LogHandler = Callable[[LogData], None]


class EventBus:
    """
    Registry of log handlers with synchronous fan-out.

    The process-wide instance is `default_bus`; separate instances can be
    created and passed to the logger and subscription functions, e.g. in
    tests.
    """

    def __init__(self):
        # Insertion order is delivery order
        self._handlers: List[LogHandler] = []

    def publish(self, data: LogData) -> None:
        """
        Deliver an event to every registered handler.

        Handlers registered or removed while the event is being delivered
        only affect later events.
        """
        for handler in list(self._handlers):
            handler(data)

    def register(self, handler: LogHandler) -> LogHandler:
        """
        Add a handler.

        Registering the same handler twice creates two entries.

        Returns:
            The handler, to be used for `unregister`
        """
        self._handlers.append(handler)
        return handler

    def unregister(self, handler: LogHandler) -> None:
        """Remove the first registration of `handler`, if any"""
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def unregister_all(self) -> None:
        """Remove all handlers"""
        self._handlers.clear()

    def handlers(self) -> List[LogHandler]:
        """Snapshot of the registered handlers, in delivery order"""
        return list(self._handlers)

    def reset(self) -> None:
        """Return the bus to its initial, empty state"""
        self.unregister_all()

    def __len__(self) -> int:
        return len(self._handlers)


# Lives for the whole process; seeded with the default handler on import of logga
default_bus = EventBus()
