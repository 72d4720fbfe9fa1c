"""Reply codes and the wire encoding of multi-line replies."""

from typing import NamedTuple

# 1xx positive preliminary, 2xx positive completion, 3xx positive
# intermediate, 4xx transient negative, 5xx permanent negative.
HELLO = 220  # Conventional greeting code
GOODBYE = 221  # Handler returning this ends the session
UNAVAILABLE = 421  # Also ends the session
UNKNOWN_CMD = 500  # Sent for unmatched or empty command lines

UNKNOWN_CMD_MSG = "Unknown command"

TERMINAL_CODES = frozenset({GOODBYE, UNAVAILABLE})

MIN_CODE = 0
MAX_CODE = 999


class Reply(NamedTuple):
    """A status code and a message whose lines are separated by '\\n'."""

    code: int
    message: str


def is_terminal(code: int) -> bool:
    """Check if a reply code ends the session."""
    return code in TERMINAL_CODES


def format_reply(code: int, message: str) -> str:
    """
    Format a reply as SMTP-style wire text.

    Every line but the last uses '-' between code and text, the last
    uses a space. All lines end with CRLF.

    Args:
        code: Status code in the range 0-999.
        message: Reply text, lines separated by '\\n'. An empty message
                 produces a single line with no text.

    Returns:
        The formatted reply text.

    Raises:
        ValueError: If the code is out of range.
    """
    if not MIN_CODE <= code <= MAX_CODE:
        raise ValueError(f"Reply code must be in {MIN_CODE}-{MAX_CODE}: {code}")

    lines = message.split("\n")
    parts = [f"{code:03d}-{line}\r\n" for line in lines[:-1]]
    parts.append(f"{code:03d} {lines[-1]}\r\n")
    return "".join(parts)


def encode_reply(code: int, message: str, encoding: str = "utf-8") -> bytes:
    """Format a reply and encode it for the wire."""
    return format_reply(code, message).encode(encoding, errors="surrogateescape")
