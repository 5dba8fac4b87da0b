"""
Unit tests for output sinks.
"""

import io
import logging
import sys
import uuid
from unittest.mock import Mock

from logga.sinks import ConsoleSink, StreamSink, detect_sink


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestStreamSink:
    """Test StreamSink"""

    def test_write_appends_newline(self):
        stream = io.StringIO()

        StreamSink(stream).write('a line')

        assert stream.getvalue() == 'a line\n'

    def test_write_keeps_colours(self):
        stream = io.StringIO()

        StreamSink(stream).write('\x1b[31mred\x1b[0m')

        assert stream.getvalue() == '\x1b[31mred\x1b[0m\n'

    def test_is_interactive(self):
        assert StreamSink(FakeTTY()).is_interactive() is True
        assert StreamSink(io.StringIO()).is_interactive() is False

    def test_closed_stream_is_not_interactive(self):
        stream = io.StringIO()
        stream.close()

        assert StreamSink(stream).is_interactive() is False

    def test_defaults_to_current_stderr(self, capsys):
        sink = StreamSink()

        sink.write('to stderr')

        assert sink.stream is sys.stderr
        assert capsys.readouterr().err == 'to stderr\n'


class TestConsoleSink:
    """Test ConsoleSink"""

    def test_is_plain_console(self):
        sink = ConsoleSink(Mock())

        assert sink.is_interactive() is True
        assert sink.supports_color() is False

    def test_unconfigured_logging_falls_back_to_original_stderr(self, monkeypatch):
        """Lines are not lost when logging has no handlers"""
        logger = logging.getLogger(f'test_console_{uuid.uuid4().hex[:8]}')
        logger.propagate = False
        original = io.StringIO()
        monkeypatch.setattr(sys, '__stderr__', original)

        ConsoleSink(logger).write('WARN  app visible')

        assert original.getvalue() == 'WARN  app visible\n'

    def test_write_goes_to_logger(self):
        logger = Mock()

        ConsoleSink(logger).write('a line')

        logger.error.assert_called_once_with('%s', 'a line', extra={'logga': True})


class TestDetectSink:
    """Test detect_sink"""

    def test_stderr_available(self):
        assert isinstance(detect_sink(), StreamSink)

    def test_stderr_missing(self, monkeypatch):
        monkeypatch.setattr(sys, 'stderr', None)

        sink = detect_sink()

        monkeypatch.undo()
        assert isinstance(sink, ConsoleSink)
