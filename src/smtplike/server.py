"""ProtocolServer - Runs a command table over a connection listener."""

import logging
import threading
from typing import Any, Callable

from .interfaces import Connection, ConnectionListener
from .core import CommandTable, ConnectionClosed, run
from .config import Config

logger = logging.getLogger(__name__)


class ProtocolServer:
    """Serves one protocol to every connection a listener accepts.

    Each connection gets a fresh context from the context factory and is
    driven by the dispatch loop until the client says goodbye, the
    service becomes unavailable, or the connection fails. A failing
    session is logged and does not affect the others.
    """

    def __init__(
        self,
        table: CommandTable,
        listener: ConnectionListener,
        context_factory: Callable[[], Any] | None = None,
        config: Config | None = None,
    ):
        """
        Initialize the server.

        Args:
            table: The command table, shared by all sessions.
            listener: Listener accepting client connections.
            context_factory: Called once per connection to create the
                             application context. None gives handlers a
                             None context.
            config: Server configuration (uses defaults if None).
        """
        self.table = table
        self.listener = listener
        self.context_factory = context_factory
        self.config = config or Config()

        self._active: set[Connection] = set()
        self._lock = threading.Lock()

        self.listener.on_connection(self._handle_connection)

    def start(self) -> None:
        """Start accepting connections."""
        logger.info("Starting protocol server...")
        self.listener.start()
        logger.info(f"Server started with {len(self.table.commands())} command(s)")

    def stop(self) -> None:
        """Stop accepting connections."""
        logger.info("Stopping protocol server...")
        self.listener.stop()
        logger.info("Server stopped")

    def active_sessions(self) -> int:
        """Get the number of sessions currently running."""
        with self._lock:
            return len(self._active)

    def _handle_connection(self, connection: Connection) -> None:
        """
        Serve one accepted connection to completion.

        Args:
            connection: The new connection. Closed when this returns.
        """
        peer = getattr(connection, "peer", "unknown")
        logger.info(f"[{peer}] Session started")

        try:
            context = self.context_factory() if self.context_factory else None
        except Exception as e:
            logger.error(f"[{peer}] Failed to create context: {e}")
            connection.close()
            return

        with self._lock:
            self._active.add(connection)
        try:
            run(self.table, connection, context, encoding=self.config.encoding)
            logger.info(f"[{peer}] Session ended")
        except ConnectionClosed:
            logger.info(f"[{peer}] Client disconnected")
        except OSError as e:
            logger.warning(f"[{peer}] Connection error: {e}")
        except Exception as e:
            logger.error(f"[{peer}] Error: {e}")
        finally:
            with self._lock:
                self._active.discard(connection)
