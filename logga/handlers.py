"""
The built-in default handler.

Prints events to stderr:
- with emoji, colours and (optionally) the stack if stderr is a terminal
- as JSON lines otherwise, e.g. when redirected to a log file

and optionally throttles bursts of similar events and exits the process
after an error.
"""

import os
import sys
import threading
import time
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional

from logga.errors import InvalidLevelError
from logga.events import LogData, LogLevel
from logga.formats import render_human, render_json
from logga.sinks import Sink, detect_sink


DEFAULT_THROTTLE_DURATION = 1000


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _pick(options: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in options:
            return options[key]
    return None


@dataclass(frozen=True)
class ThrottleOptions:
    """
    Throttling of events sharing a signature.

    `signature` is a template in which `${tag}`, `${level}` and
    `${message}` are replaced by the event's fields; `duration` is the
    minimum number of milliseconds between two printed events with the
    same signature.
    """
    signature: str = ''
    duration: float = DEFAULT_THROTTLE_DURATION

    @classmethod
    def coerce(cls, value: Any) -> Optional['ThrottleOptions']:
        """Build options from an instance or mapping, defaulting bad fields"""
        if isinstance(value, cls):
            signature, duration = value.signature, value.duration
        elif isinstance(value, Mapping):
            signature, duration = value.get('signature'), value.get('duration')
        else:
            return None

        if not isinstance(signature, str):
            signature = ''
        if isinstance(duration, bool) or not isinstance(duration, Real) or duration < 0:
            duration = DEFAULT_THROTTLE_DURATION
        return cls(signature=signature, duration=duration)

    def signature_for(self, data: LogData) -> str:
        return (
            self.signature
            .replace('${tag}', data.tag)
            .replace('${level}', str(int(data.level)))
            .replace('${message}', data.message)
        )


@dataclass(frozen=True)
class DefaultHandlerOptions:
    """
    Options for `default_handler`.

    Attributes:
        max_level: Most verbose level printed (default: info)
        throttle: Throttling of similar events (default: no throttling)
        show_stack: Print stacks in terminal output (default: False)
        exit_on_error: Exit the process after printing an error (default: True)
        fast_time: Epoch milliseconds instead of ISO time in JSON (default: False)
    """
    max_level: LogLevel = LogLevel.info
    throttle: Optional[ThrottleOptions] = None
    show_stack: bool = False
    exit_on_error: bool = True
    fast_time: bool = False

    @classmethod
    def coerce(cls, options: Any = None) -> 'DefaultHandlerOptions':
        """
        Build options from None, an instance, or a mapping with either
        snake_case or camelCase keys. Missing or malformed fields take
        their default.
        """
        if isinstance(options, cls):
            values: Dict[str, Any] = {
                'max_level': options.max_level,
                'throttle': options.throttle,
                'show_stack': options.show_stack,
                'exit_on_error': options.exit_on_error,
                'fast_time': options.fast_time,
            }
        elif isinstance(options, Mapping):
            values = {
                'max_level': _pick(options, 'max_level', 'maxLevel'),
                'throttle': options.get('throttle'),
                'show_stack': _pick(options, 'show_stack', 'showStack'),
                'exit_on_error': _pick(options, 'exit_on_error', 'exitOnError'),
                'fast_time': _pick(options, 'fast_time', 'fastTime'),
            }
        else:
            return cls()

        try:
            max_level = LogLevel.parse(values['max_level'])
        except InvalidLevelError:
            max_level = LogLevel.info

        return cls(
            max_level=max_level,
            throttle=ThrottleOptions.coerce(values['throttle']),
            show_stack=_bool(values['show_stack'], False),
            exit_on_error=_bool(values['exit_on_error'], True),
            fast_time=_bool(values['fast_time'], False),
        )


class Throttle:
    """
    Last emission time (epoch milliseconds) per event signature.

    Entries are never evicted; signatures are expected to be few.
    """

    def __init__(self):
        self._last: Dict[str, float] = {}

    def allow(self, signature: str, duration: float, now: Optional[float] = None) -> bool:
        """
        Record an emission for `signature` unless one happened less than
        `duration` milliseconds ago.

        Returns:
            True if the event should be emitted
        """
        if now is None:
            now = time.time() * 1000
        last = self._last.get(signature)
        if last is not None and now - last < duration:
            return False
        self._last[signature] = now
        return True

    def clear(self) -> None:
        self._last.clear()

    def __len__(self) -> int:
        return len(self._last)


# Shared by every DefaultHandler not given its own
throttle_state = Throttle()


def exit_process(status: int) -> None:
    """
    Terminate the process with `status`.

    On the main thread this raises SystemExit so cleanup handlers run. On
    any other thread SystemExit would only end that thread, so the output
    streams are flushed and the process is ended with os._exit.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(status)
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            try:
                stream.flush()
            except (OSError, ValueError):
                pass
    os._exit(status)


class DefaultHandler:
    """
    Renders events to a sink.

    Args:
        sink: Output sink (default: detected on every call)
        throttle: Throttle state (default: the process-wide `throttle_state`)
        exit_func: Called with status 1 to terminate after an error;
            None disables exiting
        clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        throttle: Optional[Throttle] = None,
        exit_func: Optional[Callable[[int], Any]] = exit_process,
        clock: Callable[[], float] = time.time
    ):
        self.sink = sink
        self.throttle = throttle if throttle is not None else throttle_state
        self.exit_func = exit_func
        self.clock = clock

    def __call__(self, data: LogData, options: Any = None) -> None:
        opts = DefaultHandlerOptions.coerce(options)

        if data.level > opts.max_level:
            return

        now = self.clock()
        if opts.throttle is not None:
            signature = opts.throttle.signature_for(data)
            if not self.throttle.allow(signature, opts.throttle.duration, now * 1000):
                return

        sink = self.sink if self.sink is not None else detect_sink()
        if sink.is_interactive():
            line = render_human(data, show_stack=opts.show_stack, color=sink.supports_color())
        else:
            line = render_json(data, fast_time=opts.fast_time, now=now)
        sink.write(line)

        if opts.exit_on_error and data.level == LogLevel.error and self.exit_func is not None:
            self.exit_func(1)

    def __repr__(self) -> str:
        return f'<DefaultHandler sink={self.sink!r}>'


default_handler = DefaultHandler()
