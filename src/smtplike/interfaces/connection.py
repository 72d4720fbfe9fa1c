"""Abstract interface for a client connection."""

from abc import ABC, abstractmethod


class Connection(ABC):
    """Abstract byte stream to a single client."""

    @abstractmethod
    def readline(self) -> bytes:
        """Read up to and including the next b"\\n".

        Returns:
            The line. A result without a trailing b"\\n" (possibly empty)
            means the stream ended.

        Raises:
            OSError: If reading fails.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of data.

        Raises:
            OSError: If writing fails.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection."""
        pass
