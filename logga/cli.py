#!/usr/bin/env python3
"""
Command line tools: example output, a throughput benchmark and a
validator for JSON-lines log files.
"""

import sys
import time
from pathlib import Path

import click

from logga.errors import LogFormatError
from logga.events import LogLevel
from logga.formats import parse_log_line
from logga.handlers import DefaultHandlerOptions, default_handler
from logga.logger import get_logger, replace_handlers


LEVEL_NAMES = [level.name for level in LogLevel]


@click.group()
def main():
    """logga command line tools"""
    pass


@main.command()
@click.option('--level', type=click.Choice(LEVEL_NAMES), default='debug', show_default=True,
              help='Most verbose level to print')
@click.option('--exit-on-error/--no-exit-on-error', default=False, show_default=True,
              help='Exit after the first error, as the default handler does')
def example(level: str, exit_on_error: bool):
    """
    Log one event per level, then an error from a caught exception.

    Run with stderr redirected (e.g. `2> log.json`) for JSON output.
    """
    options = DefaultHandlerOptions(
        max_level=LogLevel[level],
        show_stack=True,
        exit_on_error=exit_on_error
    )
    replace_handlers(lambda data: default_handler(data, options))

    log = get_logger('example')
    log.debug('This is line five.')
    log.info('Everything is just fine.')
    log.warn('Oh, oh, not so much.')
    log.error('Aaargh, an error!')

    try:
        raise RuntimeError('I am an error object.')
    except RuntimeError as e:
        log.error(e)


@main.command()
@click.option('--count', default=10000, show_default=True, type=click.IntRange(min=1),
              help='Number of events to log')
@click.option('--fast-time/--no-fast-time', default=True, show_default=True,
              help='Epoch milliseconds instead of ISO time in JSON output')
def bench(count: int, fast_time: bool):
    """
    Time logging errors through the default handler.

    Best run with stderr redirected to /dev/null.
    """
    options = DefaultHandlerOptions(fast_time=fast_time, exit_on_error=False)
    replace_handlers(lambda data: default_handler(data, options))

    log = get_logger('bench')
    start = time.perf_counter()
    for _ in range(count):
        log.error('derp')
    elapsed = time.perf_counter() - start

    rate = count / elapsed if elapsed > 0 else float('inf')
    click.echo(f"logga: {rate:,.0f} events/s ({count} events in {elapsed:.3f}s)")


@main.command()
@click.argument('log_file', type=click.Path(exists=True, dir_okay=False))
def validate(log_file: str):
    """Check that every line of a JSON-lines log file is a valid record"""
    checked = 0
    invalid = 0
    with Path(log_file).open(encoding='utf-8') as f:
        for number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            checked += 1
            try:
                parse_log_line(line)
            except LogFormatError as e:
                invalid += 1
                click.echo(f"Line {number}: {e}", err=True)

    click.echo(f"{checked - invalid}/{checked} lines valid")
    if invalid:
        sys.exit(1)


if __name__ == '__main__':
    main()
