"""Ordered command table and command-line matching."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union

from .reply import Reply

if TYPE_CHECKING:
    from ..interfaces import Connection
    from .session import Session

logger = logging.getLogger(__name__)

Handler = Callable[[list[str], "Session[Any]"], Union[Reply, tuple[int, str]]]


@dataclass(frozen=True)
class CommandEntry:
    """A command token and the handler it dispatches to."""

    token: str
    handler: Handler

    @property
    def is_greeting(self) -> bool:
        """Check if this is the greeting entry (empty token)."""
        return self.token == ""


class CommandTable:
    """Immutable, ordered mapping of command tokens to handlers.

    The entry at index 0 may have an empty token, in which case its
    handler greets the client when a session starts and is never matched
    against client input. Tokens are compared case-insensitively.

    If the same token is registered twice, the first registration wins
    and later ones are unreachable.
    """

    def __init__(
        self,
        entries: Iterable[CommandEntry | tuple[str, Handler]],
    ):
        """
        Build the table.

        Args:
            entries: CommandEntry objects or (token, handler) pairs, in
                     matching order. Only the first may have an empty token.

        Raises:
            ValueError: If an empty token appears after index 0, or a
                        token contains whitespace.
        """
        normalized = []
        for position, item in enumerate(entries):
            entry = item if isinstance(item, CommandEntry) else CommandEntry(*item)
            token = entry.token.lower()

            if token == "" and position != 0:
                raise ValueError(
                    f"Empty command token only allowed at index 0, found at {position}"
                )
            if token != "" and token.split() != [token]:
                raise ValueError(f"Command token contains whitespace: {entry.token!r}")

            normalized.append(CommandEntry(token=token, handler=entry.handler))

        self._entries: tuple[CommandEntry, ...] = tuple(normalized)

        index: dict[str, CommandEntry] = {}
        for entry in self._entries:
            if entry.is_greeting:
                continue
            if entry.token in index:
                logger.warning(f"Duplicate command {entry.token!r} is unreachable")
                continue
            index[entry.token] = entry
        self._index = index

    @property
    def entries(self) -> tuple[CommandEntry, ...]:
        """All entries in registration order."""
        return self._entries

    @property
    def greeting(self) -> CommandEntry | None:
        """The greeting entry, or None if the table has none."""
        if self._entries and self._entries[0].is_greeting:
            return self._entries[0]
        return None

    def commands(self) -> list[str]:
        """Get the reachable command tokens in registration order."""
        return list(self._index)

    def lookup(self, token: str) -> CommandEntry | None:
        """Find the entry for a command token, ignoring case."""
        if not token:
            return None
        return self._index.get(token.lower())

    def match(self, line: str) -> tuple[CommandEntry, list[str]] | None:
        """
        Match a command line against the table.

        Args:
            line: A line received from the client, with or without its
                  line terminator.

        Returns:
            The matching entry and the remaining arguments, or None if
            the line holds no tokens or the command is unknown.
        """
        fields = line.split()
        if not fields:
            return None

        entry = self.lookup(fields[0])
        if entry is None:
            return None
        return entry, fields[1:]

    def run(
        self,
        connection: "Connection",
        context: Any = None,
        encoding: str = "utf-8",
    ) -> None:
        """Serve one connection with this table. See dispatcher.run()."""
        from .dispatcher import run

        run(self, connection, context, encoding=encoding)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
