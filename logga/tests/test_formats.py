"""
Unit tests for terminal and JSON rendering.
"""

import json

import click
import pytest

from logga.errors import LogFormatError
from logga.events import LogData, LogLevel
from logga.formats import (
    escape,
    iso_time,
    parse_log_line,
    render_human,
    render_json,
    validate_log_line,
)


class TestRenderJson:
    """Test render_json"""

    def test_exact_line(self):
        data = LogData(tag='app', level=LogLevel.error, message='hi')

        line = render_json(data, now=0)

        assert line == '{"time":"1970-01-01T00:00:00.000Z","tag":"app","level":0,"message":"hi"}'

    def test_with_stack(self):
        data = LogData(tag='app', level=LogLevel.error, message='hi', stack='trace')

        line = render_json(data, now=0)

        assert line.endswith(',"message":"hi","stack":"trace"}')

    def test_fast_time(self):
        data = LogData(tag='app', level=LogLevel.info, message='hi')

        line = render_json(data, fast_time=True, now=1.5)

        assert line.startswith('{"time":1500,')
        assert json.loads(line)['time'] == 1500

    def test_current_time_by_default(self):
        data = LogData(tag='app', level=LogLevel.info, message='hi')

        stamp = json.loads(render_json(data))['time']

        assert stamp[4] == '-' and stamp[10] == 'T' and stamp.endswith('Z')

    def test_round_trip_of_special_characters(self):
        """Escaped characters parse back to the original strings"""
        message = 'quote " backslash \\ slash / feed \f newline \n return \r tab \t'
        data = LogData(tag='a/b', level=LogLevel.warn, message=message, stack='at x\n  at y')

        line = render_json(data, now=0)
        parsed = json.loads(line)

        assert '\n' not in line
        assert '\\/' in line
        assert parsed['level'] == 1
        assert parsed['message'] == message
        assert parsed['tag'] == 'a/b'
        assert parsed['stack'] == 'at x\n  at y'

    def test_unicode_is_kept(self):
        data = LogData(tag='app', level=LogLevel.info, message='naïve 🐛')

        assert 'naïve 🐛' in render_json(data, now=0)


class TestEscape:
    """Test escape"""

    @pytest.mark.parametrize('text,expected', [
        ('plain', '"plain"'),
        ('a/b', '"a\\/b"'),
        ('\\/', '"\\\\\\/"'),
        ('tab\t', '"tab\\t"'),
    ])
    def test_escape(self, text, expected):
        assert escape(text) == expected
        assert json.loads(escape(text)) == text

    def test_iso_time(self):
        assert iso_time(86400.25) == '1970-01-02T00:00:00.250Z'


class TestRenderHuman:
    """Test render_human"""

    @pytest.mark.parametrize('level,expected', [
        (LogLevel.error, '🚨 ERROR app hello'),
        (LogLevel.warn, '⚠ WARN  app hello'),
        (LogLevel.info, '🛈 INFO  app hello'),
        (LogLevel.debug, '🐛 DEBUG app hello'),
    ])
    def test_layout(self, level, expected):
        line = render_human(LogData(tag='app', level=level, message='hello'))

        assert click.unstyle(line) == expected

    def test_colours(self):
        line = render_human(LogData(tag='app', level=LogLevel.error, message='hello'))

        assert click.style('ERROR', fg='red', bold=True) in line
        assert click.style('app', fg='cyan') in line

    def test_plain(self):
        line = render_human(LogData(tag='app', level=LogLevel.warn, message='hello'), color=False)

        assert line == 'WARN  app hello'

    def test_stack_hidden_by_default(self):
        data = LogData(tag='app', level=LogLevel.error, message='hello', stack='trace')

        assert 'trace' not in render_human(data)

    def test_show_stack(self):
        data = LogData(tag='app', level=LogLevel.error, message='hello', stack='trace')

        line = render_human(data, show_stack=True, color=False)

        assert line == 'ERROR app hello\n  trace'


class TestParseLogLine:
    """Test parse_log_line and validate_log_line"""

    def test_parse_rendered_line(self):
        data = LogData(tag='app', level=LogLevel.debug, message='hi', stack='trace')

        assert parse_log_line(render_json(data)) == data

    def test_parse_fast_time_line(self):
        data = LogData(tag='app', level=LogLevel.info, message='hi')

        assert parse_log_line(render_json(data, fast_time=True)) == data

    @pytest.mark.parametrize('line', [
        'Plain text log entry',
        '[1, 2]',
        '{"time":"t","tag":"app","level":0}',
        '{"time":"t","tag":"app","level":9,"message":"m"}',
        '{"time":"t","tag":"app","level":"0","message":"m"}',
        '{"time":null,"tag":"app","level":0,"message":"m"}',
        '{"time":"t","tag":1,"level":0,"message":"m"}',
        '{"time":"t","tag":"app","level":0,"message":"m","stack":5}',
    ])
    def test_invalid_lines(self, line):
        with pytest.raises(LogFormatError):
            parse_log_line(line)
        assert validate_log_line(line) is False

    def test_validate_valid_line(self):
        line = '{"time":"2026-10-19T20:30:00.000Z","tag":"app","level":2,"message":"ok"}'

        assert validate_log_line(line) is True
