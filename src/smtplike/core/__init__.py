"""Core protocol engine for SMTP-like line protocols."""

from .reply import (
    HELLO,
    GOODBYE,
    UNAVAILABLE,
    UNKNOWN_CMD,
    UNKNOWN_CMD_MSG,
    Reply,
    encode_reply,
    format_reply,
    is_terminal,
)
from .command_table import CommandEntry, CommandTable, Handler
from .session import Session, BodyReadError, ConnectionClosed
from .dispatcher import run

__all__ = [
    "HELLO",
    "GOODBYE",
    "UNAVAILABLE",
    "UNKNOWN_CMD",
    "UNKNOWN_CMD_MSG",
    "Reply",
    "encode_reply",
    "format_reply",
    "is_terminal",
    "CommandEntry",
    "CommandTable",
    "Handler",
    "Session",
    "BodyReadError",
    "ConnectionClosed",
    "run",
]
