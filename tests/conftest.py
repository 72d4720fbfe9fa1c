"""Pytest configuration and fixtures."""

import re

import pytest

from smtplike.interfaces import Connection


class FakeConnection(Connection):
    """In-memory connection fed from a byte string.

    Reads fail with read_error once the scripted input is used up, or
    return b"" (end of stream) if read_error is None. Writes fail with
    write_error from the write_error_at'th write on.
    """

    def __init__(
        self,
        data: bytes = b"",
        read_error: OSError | None = None,
        write_error: OSError | None = None,
        write_error_at: int = 0,
    ):
        self._lines = re.findall(rb"[^\n]*\n|[^\n]+\Z", data)
        self.read_error = read_error
        self.write_error = write_error
        self.write_error_at = write_error_at
        self.writes: list[bytes] = []
        self.reads = 0
        self.close_count = 0

    def readline(self) -> bytes:
        self.reads += 1
        if self._lines:
            return self._lines.pop(0)
        if self.read_error is not None:
            raise self.read_error
        return b""

    def write(self, data: bytes) -> None:
        if self.write_error is not None and len(self.writes) >= self.write_error_at:
            raise self.write_error
        self.writes.append(data)

    def close(self) -> None:
        self.close_count += 1

    @property
    def output(self) -> bytes:
        """Everything written, concatenated."""
        return b"".join(self.writes)

    @property
    def unread(self) -> list[bytes]:
        """Lines not read yet."""
        return list(self._lines)


@pytest.fixture
def make_connection():
    """Factory for scripted in-memory connections."""
    return FakeConnection
