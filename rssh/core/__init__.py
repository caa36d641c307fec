"""
Core infrastructure layer
"""
from .client import ConnectionTarget, SessionNegotiator
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console

__all__ = [
    "ConnectionTarget",
    "SessionNegotiator",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
]
