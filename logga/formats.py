"""
Rendering of LogData for people (terminal) and machines (JSON lines).

Machine line format, one object per line:

    {"time":"2026-10-19T20:30:00.123Z","tag":"app","level":0,"message":"...","stack":"..."}

`time` is epoch milliseconds instead of an ISO string in fast-time mode,
and `stack` is only present when the event has one.
"""

import json
import time
from datetime import datetime, timezone
from typing import Optional

import click

from logga.errors import InvalidLevelError, LogFormatError
from logga.events import LogData, LogLevel


# Indexed by LogLevel
EMOJIS = ['🚨', '⚠', '🛈', '🐛']
COLOURS = ['red', 'yellow', 'blue', 'bright_black']


def escape(text: str) -> str:
    """JSON string literal for `text`, with `/` escaped as well"""
    return json.dumps(text, ensure_ascii=False).replace('/', '\\/')


def iso_time(now: float) -> str:
    """ISO-8601 UTC timestamp with millisecond precision"""
    stamp = datetime.fromtimestamp(now, tz=timezone.utc)
    return stamp.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def render_json(data: LogData, fast_time: bool = False, now: Optional[float] = None) -> str:
    """
    Render an event as a single JSON line (without the trailing newline).

    Args:
        data: The event
        fast_time: Use epoch milliseconds instead of an ISO string
        now: Time of the event in epoch seconds (default: current time)
    """
    if now is None:
        now = time.time()
    stamp = str(int(now * 1000)) if fast_time else escape(iso_time(now))
    line = (
        f'{{"time":{stamp},"tag":{escape(data.tag)},'
        f'"level":{int(data.level)},"message":{escape(data.message)}'
    )
    if data.stack is not None:
        line += f',"stack":{escape(data.stack)}'
    return line + '}'


def render_human(data: LogData, show_stack: bool = False, color: bool = True) -> str:
    """
    Render an event for a terminal: emoji, coloured level, cyan tag, message.

    With `color=False` a plain `LEVEL tag message` line is produced.
    """
    index = min(max(int(data.level), 0), len(EMOJIS) - 1)
    label = LogLevel(index).label.ljust(5)
    if color:
        entry = (
            f"{EMOJIS[index]} {click.style(label, fg=COLOURS[index], bold=True)} "
            f"{click.style(data.tag, fg='cyan')} {data.message}"
        )
    else:
        entry = f"{label} {data.tag} {data.message}"
    if show_stack and data.stack is not None:
        entry += '\n  ' + data.stack
    return entry


def parse_log_line(line: str) -> LogData:
    """
    Parse a machine-readable log line back into LogData.

    Raises:
        LogFormatError: If the line is not a valid log record
    """
    try:
        record = json.loads(line)
    except (json.JSONDecodeError, TypeError) as e:
        raise LogFormatError(f"Not JSON: {e}")

    if not isinstance(record, dict):
        raise LogFormatError("Log line is not a JSON object")

    for field in ('time', 'tag', 'level', 'message'):
        if field not in record:
            raise LogFormatError(f"Missing required field: {field}")

    stamp = record['time']
    if isinstance(stamp, bool) or not isinstance(stamp, (str, int)):
        raise LogFormatError(f"Invalid time: {stamp!r}")
    if not isinstance(record['tag'], str) or not isinstance(record['message'], str):
        raise LogFormatError("Fields tag and message must be strings")
    stack = record.get('stack')
    if stack is not None and not isinstance(stack, str):
        raise LogFormatError("Field stack must be a string")
    if not isinstance(record['level'], int):
        raise LogFormatError(f"Invalid level: {record['level']!r}")

    try:
        level = LogLevel.parse(record['level'])
    except InvalidLevelError as e:
        raise LogFormatError(str(e))

    return LogData(tag=record['tag'], level=level, message=record['message'], stack=stack)


def validate_log_line(line: str) -> bool:
    """
    Check that a line is a well-formed machine-readable log record.

    Returns:
        True if valid, False otherwise
    """
    try:
        parse_log_line(line)
    except LogFormatError:
        return False
    return True
