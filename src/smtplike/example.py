"""Example protocol served by the smtplike-example command.

"help" is a good command to start with. Don't try to speak SMTP to it,
it gets offended.
"""

import logging
from dataclasses import dataclass, field

from .core import (
    GOODBYE,
    HELLO,
    UNAVAILABLE,
    BodyReadError,
    CommandTable,
    Reply,
    Session,
)

logger = logging.getLogger(__name__)

HELP_TEXT = """commands:
help
helo
how are you
how is [someone]
tell [someone]
quit"""

HOW_USAGE = "usage:\n    how are you\n    how is [name]"


@dataclass
class ExampleContext:
    """Per-connection state of the example protocol.

    Attributes:
        greeted: Whether the client has said helo.
        told: (recipient, body lines) for every completed tell.
    """

    greeted: bool = False
    told: list[tuple[str, list[str]]] = field(default_factory=list)


def greet(args: list[str], session: Session[ExampleContext]) -> Reply:
    return Reply(HELLO, "may i help you?")


def help_(args: list[str], session: Session[ExampleContext]) -> Reply:
    return Reply(214, HELP_TEXT)


def helo(args: list[str], session: Session[ExampleContext]) -> Reply:
    session.context.greeted = True
    return Reply(250, "oh, hi!")


def how(args: list[str], session: Session[ExampleContext]) -> Reply:
    if not session.context.greeted:
        return Reply(503, "say helo first")

    if len(args) == 2:
        if args == ["are", "you"]:
            return Reply(200, "fine, thanks")
        if args[0] == "is":
            return Reply(201, f"{args[1]} is ok")
    return Reply(501, HOW_USAGE)


def tell(args: list[str], session: Session[ExampleContext]) -> Reply:
    """Read a message for someone, ended by a line holding a single '.'."""
    if len(args) != 1:
        return Reply(501, "usage: tell [someone]")

    try:
        lines = session.read_body(354, "go ahead, end with a single .", ".")
    except BodyReadError as e:
        logger.debug(f"Message for {args[0]} lost after {len(e.lines)} line(s)")
        return Reply(451, "message lost")

    session.context.told.append((args[0], lines))
    return Reply(250, f"will tell {args[0]} ({len(lines)} lines)")


def smtp(args: list[str], session: Session[ExampleContext]) -> Reply:
    return Reply(UNAVAILABLE, "what is it, ESMTP?  service unavailable!")


def quit_(args: list[str], session: Session[ExampleContext]) -> Reply:
    return Reply(GOODBYE, "bye")


def build_example_table() -> CommandTable:
    """Build the command table of the example protocol."""
    return CommandTable(
        [
            ("", greet),
            ("help", help_),
            ("helo", helo),
            ("how", how),
            ("tell", tell),
            ("quit", quit_),
            ("mail", smtp),
            ("rcpt", smtp),
            ("data", smtp),
        ]
    )
