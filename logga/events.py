"""
Log event model: levels, producer messages and the emitted LogData record.
"""

import traceback
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Union

from logga.errors import InvalidLevelError


class LogLevel(IntEnum):
    """
    Severity of a log event.

    Lower values are more severe, so filtering "at or above a severity"
    means `level <= ceiling`.
    """
    error = 0
    warn = 1
    info = 2
    debug = 3

    @property
    def label(self) -> str:
        return self.name.upper()

    @classmethod
    def parse(cls, value: Any) -> 'LogLevel':
        """
        Interpret a level given as a LogLevel, an int or a name.

        Raises:
            InvalidLevelError: If the value is not a known level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidLevelError(f"Invalid log level: {value}")
        if isinstance(value, str):
            name = value.strip().lower()
            if name == 'warning':
                name = 'warn'
            if name in cls.__members__:
                return cls[name]
        raise InvalidLevelError(f"Invalid log level: {value!r}")


@dataclass(frozen=True)
class PlainMessage:
    """A message given as plain text"""
    text: str


@dataclass(frozen=True)
class StructuredMessage:
    """A message with an optional stack trace attached"""
    message: Optional[str] = None
    stack: Optional[str] = None


# What a producer may pass to a logger method
LogEvent = Union[str, PlainMessage, StructuredMessage, Mapping[str, Any], BaseException]


@dataclass(frozen=True)
class LogData:
    """
    The record delivered to handlers.

    `message` is always a string; `stack` is only set when the producer
    supplied one.
    """
    tag: str
    level: LogLevel
    message: str = ''
    stack: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'tag': self.tag,
            'level': int(self.level),
            'message': self.message,
        }
        if self.stack is not None:
            data['stack'] = self.stack
        return data


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def normalize(event: Any) -> StructuredMessage:
    """
    Reduce whatever a producer passed into a StructuredMessage.

    Never raises: unrecognised input becomes an empty message.
    """
    if isinstance(event, str):
        return StructuredMessage(message=event)
    if isinstance(event, PlainMessage):
        return StructuredMessage(message=_text(event.text))
    if isinstance(event, StructuredMessage):
        return StructuredMessage(message=_text(event.message), stack=_text(event.stack))
    if isinstance(event, BaseException):
        stack = None
        if event.__traceback__ is not None:
            stack = ''.join(
                traceback.format_exception(type(event), event, event.__traceback__)
            ).rstrip('\n')
        return StructuredMessage(message=str(event), stack=stack)
    if isinstance(event, Mapping):
        return StructuredMessage(
            message=_text(event.get('message')),
            stack=_text(event.get('stack'))
        )
    return StructuredMessage()


def to_log_data(tag: str, level: LogLevel, event: Any) -> LogData:
    """Build the LogData record for one logger call"""
    info = normalize(event)
    return LogData(
        tag=tag,
        level=LogLevel(level),
        message=info.message if info.message is not None else '',
        stack=info.stack
    )
