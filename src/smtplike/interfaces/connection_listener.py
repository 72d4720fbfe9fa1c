"""Abstract interface for accepting client connections."""

from abc import ABC, abstractmethod
from typing import Callable

from .connection import Connection


class ConnectionListener(ABC):
    """Abstract interface for accepting connections."""

    @abstractmethod
    def on_connection(self, callback: Callable[[Connection], None]) -> None:
        """Register the callback for accepted connections.

        The callback receives the new Connection and owns it from then on.
        Implementations may call it from any thread.
        """
        pass

    @abstractmethod
    def start(self) -> None:
        """Start accepting connections."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop accepting connections and release resources."""
        pass
