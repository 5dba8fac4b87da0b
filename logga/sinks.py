"""
Output sinks for the default handler.

A sink tells the handler whether a person is watching (so output should be
human-readable) and writes finished lines.
"""

import logging
import sys
from typing import IO, Optional

import click

from logga.bridge import MARKER


class Sink:
    """Interface for the destination of rendered log lines"""

    def is_interactive(self) -> bool:
        raise NotImplementedError

    def supports_color(self) -> bool:
        return True

    def write(self, line: str) -> None:
        raise NotImplementedError


class StreamSink(Sink):
    """
    Writes to a text stream, stderr by default.

    When no stream is given, `sys.stderr` is looked up on every call so
    that redirection (and test capture) after import is honoured.
    """

    def __init__(self, stream: Optional[IO[str]] = None):
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    def is_interactive(self) -> bool:
        isatty = getattr(self.stream, 'isatty', None)
        if isatty is None:
            return False
        try:
            return bool(isatty())
        except ValueError:
            # Closed stream
            return False

    def write(self, line: str) -> None:
        # Styling is decided by the renderer, so keep ANSI codes as given
        click.echo(line, file=self.stream, color=True)


class ConsoleSink(Sink):
    """
    Fallback when the process has no stderr (e.g. pythonw or an embedded
    interpreter). Lines go to the standard logging machinery, uncoloured.

    When logging has no handlers for the logger, lines are written to the
    interpreter's original stderr (`sys.__stderr__`) instead; if that is
    missing too, they are dropped.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('logga')

    def is_interactive(self) -> bool:
        return True

    def supports_color(self) -> bool:
        return False

    def write(self, line: str) -> None:
        if not self.logger.hasHandlers() and sys.__stderr__ is not None:
            click.echo(line, file=sys.__stderr__)
            return
        self.logger.error('%s', line, extra={MARKER: True})


def detect_sink() -> Sink:
    """Pick a sink for the current process state (not cached)"""
    if sys.stderr is None:
        return ConsoleSink()
    return StreamSink()
