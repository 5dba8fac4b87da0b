"""
Exceptions raised by logga.
"""


class LoggaError(Exception):
    """Base class for logga errors"""
    pass


class InvalidLevelError(LoggaError, ValueError):
    """A value could not be interpreted as a log level"""
    pass


class LogFormatError(LoggaError):
    """A machine-readable log line is malformed"""
    pass
