"""Per-connection session state and the continuation reader."""

import logging
from typing import Generic, TypeVar

from ..interfaces import Connection
from .reply import encode_reply

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")

DEFAULT_ENCODING = "utf-8"


class ConnectionClosed(ConnectionError):
    """The peer closed the connection before a full line was read."""


class BodyReadError(Exception):
    """Reading a multi-line body failed.

    Attributes:
        error: The underlying I/O failure, also recorded on the session.
        lines: Body lines collected before the failure.
    """

    def __init__(self, error: OSError, lines: list[str] | None = None):
        super().__init__(f"Failed to read body: {error}")
        self.error = error
        self.lines = lines or []


def chop(line: str) -> str:
    """Strip one trailing '\\n', then one trailing '\\r'."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class Session(Generic[ContextT]):
    """State of one client connection.

    Handlers receive the session along with their arguments. Beyond the
    application context, the only thing a handler can do with it is
    read a multi-line body with read_body().
    """

    def __init__(
        self,
        connection: Connection,
        context: ContextT,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.connection = connection
        self.encoding = encoding
        self._context = context
        self._error: OSError | None = None

    @property
    def context(self) -> ContextT:
        """Application context given when the session was started."""
        return self._context

    @property
    def error(self) -> OSError | None:
        """I/O failure recorded by read_body(), if any. Never cleared."""
        return self._error

    def read_line(self) -> str:
        """
        Read one line from the connection, terminator included.

        Raises:
            ConnectionClosed: If the stream ends before a '\\n' is seen.
            OSError: If reading fails.
        """
        data = self.connection.readline()
        if not data.endswith(b"\n"):
            raise ConnectionClosed("Connection closed by peer")
        return data.decode(self.encoding, errors="surrogateescape")

    def _respond(self, code: int, message: str) -> None:
        """Send a reply in a single write."""
        self.connection.write(encode_reply(code, message, self.encoding))

    def read_body(self, code: int, message: str, terminator: str) -> list[str]:
        """
        Prompt for and read a multi-line body.

        Sends the reply (code, message), then reads lines until one equals
        terminator once its trailing '\\n' and '\\r' are stripped. The
        terminator line is not returned. Body lines are returned as
        received, line endings included.

        If this fails, the error is recorded on the session and the
        dispatch loop ends the session with it after the handler returns,
        whatever the handler returns.

        Example:

            def data(args, session):
                try:
                    lines = session.read_body(354, "End data with <CRLF>.<CRLF>", ".")
                except BodyReadError:
                    return 0, ""  # ignored, the session is ending
                store(lines)
                return 250, "Ok"

        Args:
            code: Code of the prompt reply.
            message: Text of the prompt reply.
            terminator: Line that ends the body.

        Returns:
            The body lines.

        Raises:
            BodyReadError: If sending the prompt or reading the body fails.
        """
        if self._error is not None:
            raise BodyReadError(self._error) from self._error

        try:
            self._respond(code, message)
        except OSError as e:
            self._error = e
            raise BodyReadError(e) from e

        lines: list[str] = []
        while True:
            try:
                line = self.read_line()
            except OSError as e:
                logger.debug(f"Body read failed after {len(lines)} line(s): {e}")
                self._error = e
                raise BodyReadError(e, lines) from e

            if chop(line) == terminator:
                break
            lines.append(line)

        logger.debug(f"Read body of {len(lines)} line(s)")
        return lines
