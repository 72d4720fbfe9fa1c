"""Dispatch loop driving one session against a command table."""

import logging
from typing import Any

from ..interfaces import Connection
from .command_table import CommandEntry, CommandTable
from .reply import UNKNOWN_CMD, UNKNOWN_CMD_MSG, Reply, is_terminal
from .session import DEFAULT_ENCODING, Session

logger = logging.getLogger(__name__)


def run(
    table: CommandTable,
    connection: Connection,
    context: Any = None,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """
    Serve the protocol described by table on connection.

    If the table has a greeting entry, its handler is called first with
    no arguments. Then each line received is split into a command and
    arguments; the command is matched case-insensitively and its handler
    called with the arguments and the session. Lines with no command, or
    an unknown one, get UNKNOWN_CMD. Each reply is sent to the client;
    GOODBYE or UNAVAILABLE ends the session.

    The connection is closed before this returns or raises.

    Args:
        table: The command table, shared by all sessions.
        connection: Connection to the client.
        context: Application context, available to handlers as
                 session.context.
        encoding: Text encoding used on the wire.

    Raises:
        ConnectionClosed: If the client disconnects mid-session.
        OSError: If reading from or writing to the connection fails,
                 including failures recorded by Session.read_body().
    """
    session = Session(connection, context, encoding=encoding)
    try:
        _serve(table, session)
    finally:
        connection.close()


def _serve(table: CommandTable, session: Session[Any]) -> None:
    greeting = table.greeting
    if greeting is not None:
        reply = _call_handler(greeting, [], session)
        session._respond(reply.code, reply.message)
        if is_terminal(reply.code):
            logger.debug(f"Session ended by greeting with {reply.code}")
            return

    while True:
        line = session.read_line()

        matched = table.match(line)
        if matched is None:
            logger.debug(f"Unknown command: {line.rstrip()!r}")
            reply = Reply(UNKNOWN_CMD, UNKNOWN_CMD_MSG)
        else:
            entry, args = matched
            logger.debug(f"Command: {entry.token} {args}")
            reply = _call_handler(entry, args, session)

        session._respond(reply.code, reply.message)
        if is_terminal(reply.code):
            logger.debug(f"Session ended with {reply.code}")
            return


def _call_handler(entry: CommandEntry, args: list[str], session: Session[Any]) -> Reply:
    """Call a handler; an error recorded on the session overrides its result."""
    try:
        code, message = entry.handler(args, session)
    except Exception:
        if session.error is not None:
            raise session.error
        raise

    if session.error is not None:
        raise session.error
    return Reply(code, message)
