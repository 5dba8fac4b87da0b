"""
Declarative filtering of the events a handler receives.
"""

import functools
import re
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional, Pattern, Union

from logga.bus import LogHandler
from logga.events import LogData, LogLevel


def _pick(options: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in options:
            return options[key]
    return None


@dataclass(frozen=True)
class HandlerFilter:
    """
    Predicates an event must all pass to reach a handler.

    Checked in order, stopping at the first failure:
    tags, max_level, message_regex, func.
    """
    tags: Optional[FrozenSet[str]] = None
    max_level: Optional[LogLevel] = None
    message_regex: Optional[Pattern] = None
    func: Optional[Callable[[LogData], bool]] = None

    @classmethod
    def build(
        cls,
        tags: Optional[Union[str, Iterable[str]]] = None,
        max_level=None,
        message_regex: Optional[Union[str, Pattern]] = None,
        func: Optional[Callable[[LogData], bool]] = None
    ) -> 'HandlerFilter':
        """
        Create a filter from loosely typed arguments.

        A single tag may be given as a string, the level as anything
        `LogLevel.parse` accepts and the regex as a pattern string.
        """
        if isinstance(tags, str):
            tags = [tags]
        return cls(
            tags=frozenset(tags) if tags is not None else None,
            max_level=LogLevel.parse(max_level) if max_level is not None else None,
            message_regex=re.compile(message_regex) if isinstance(message_regex, str) else message_regex,
            func=func
        )

    @classmethod
    def coerce(cls, value: Any) -> 'HandlerFilter':
        """
        Build a filter from None, an instance, or a mapping with either
        snake_case or camelCase keys.

        Raises:
            TypeError: If `value` is none of these
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.build(
                tags=value.get('tags'),
                max_level=_pick(value, 'max_level', 'maxLevel'),
                message_regex=_pick(value, 'message_regex', 'messageRegex'),
                func=value.get('func')
            )
        raise TypeError(f"Expected a HandlerFilter or mapping, got {type(value).__name__}")

    def merge(self, other: 'HandlerFilter') -> 'HandlerFilter':
        """Combine two filters, fields set on `other` taking precedence"""
        return HandlerFilter(
            tags=other.tags if other.tags is not None else self.tags,
            max_level=other.max_level if other.max_level is not None else self.max_level,
            message_regex=other.message_regex if other.message_regex is not None else self.message_regex,
            func=other.func if other.func is not None else self.func
        )

    @property
    def is_empty(self) -> bool:
        return (
            self.tags is None
            and self.max_level is None
            and self.message_regex is None
            and self.func is None
        )

    def accepts(self, data: LogData) -> bool:
        if self.tags is not None and data.tag not in self.tags:
            return False
        if self.max_level is not None and data.level > self.max_level:
            return False
        if self.message_regex is not None and not self.message_regex.search(data.message):
            return False
        if self.func is not None and not self.func(data):
            return False
        return True

    def wrap(self, handler: LogHandler) -> LogHandler:
        """Return a new handler that calls `handler` for accepted events only"""
        def filtered(data: LogData) -> None:
            if self.accepts(data):
                handler(data)

        functools.update_wrapper(filtered, handler, updated=())
        return filtered
