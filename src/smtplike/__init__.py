"""smtplike - Server engine for SMTP-like line protocols."""

from .core import (
    HELLO,
    GOODBYE,
    UNAVAILABLE,
    UNKNOWN_CMD,
    UNKNOWN_CMD_MSG,
    BodyReadError,
    CommandEntry,
    CommandTable,
    ConnectionClosed,
    Reply,
    Session,
    run,
)

__version__ = "0.1.0"

__all__ = [
    "HELLO",
    "GOODBYE",
    "UNAVAILABLE",
    "UNKNOWN_CMD",
    "UNKNOWN_CMD_MSG",
    "BodyReadError",
    "CommandEntry",
    "CommandTable",
    "ConnectionClosed",
    "Reply",
    "Session",
    "run",
]
