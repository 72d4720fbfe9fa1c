"""TCP socket transport."""

import logging
import socket
import threading
from typing import Callable

from ..interfaces import Connection, ConnectionListener

logger = logging.getLogger(__name__)


class SocketConnection(Connection):
    """Connection over a connected stream socket."""

    def __init__(self, sock: socket.socket, address: tuple | None = None):
        """
        Wrap a connected socket.

        Args:
            sock: The connected socket. It is owned by this object.
            address: The peer address, if known.
        """
        self._sock = sock
        self._reader = sock.makefile("rb")
        self._closed = False
        self._lock = threading.Lock()
        self.address = address

    @property
    def peer(self) -> str:
        """Peer address as 'host:port', or 'unknown'."""
        if not self.address:
            return "unknown"
        return f"{self.address[0]}:{self.address[1]}"

    def readline(self) -> bytes:
        return self._reader.readline()

    def write(self, data: bytes) -> None:
        self._sock.sendall(data)

    def shutdown(self) -> None:
        """Shut down both directions, waking up a blocked readline()."""
        with self._lock:
            if self._closed:
                return
            try:
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # Peer may already be gone

    def close(self) -> None:
        """Close the connection. Later calls do nothing."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._reader.close()
        self._sock.close()

    def is_closed(self) -> bool:
        """Check if close() has been called."""
        return self._closed


class TcpListener(ConnectionListener):
    """Listens on a TCP port and hands each connection to a callback.

    Connections are accepted on a background thread and every callback
    runs on a thread of its own.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 1234, backlog: int = 16):
        """
        Initialize the listener.

        Args:
            host: Address to bind.
            port: Port to bind. 0 picks a free port, see address.
            backlog: Listen queue length.
        """
        self.host = host
        self.port = port
        self.backlog = backlog
        self._sock: socket.socket | None = None
        self._callback: Callable[[Connection], None] | None = None
        self._accept_thread: threading.Thread | None = None
        self._running = threading.Event()
        self._connections: dict[SocketConnection, threading.Thread] = {}
        self._lock = threading.Lock()

    @property
    def address(self) -> tuple[str, int]:
        """The bound (host, port).

        Raises:
            RuntimeError: If not started.
        """
        if self._sock is None:
            raise RuntimeError("Not listening. Call start() first.")
        host, port = self._sock.getsockname()[:2]
        return host, port

    def on_connection(self, callback: Callable[[Connection], None]) -> None:
        self._callback = callback

    def start(self) -> None:
        """Bind, listen and start accepting on a background thread."""
        if self._sock is not None:
            raise RuntimeError("Already listening")

        self._sock = socket.create_server((self.host, self.port), backlog=self.backlog)
        self._running.set()
        self._accept_thread = threading.Thread(
            target=self._accept_loop, name="smtplike-accept", daemon=True
        )
        self._accept_thread.start()
        host, port = self.address
        logger.info(f"Listening on {host}:{port}")

    def stop(self) -> None:
        """Stop accepting and shut down the connections still open.

        Waits for the threads serving those connections to finish.
        """
        if self._sock is None:
            return

        self._running.clear()
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # Not connected on some platforms
        self._sock.close()

        if self._accept_thread is not None:
            self._accept_thread.join(timeout=5)
            self._accept_thread = None
        self._sock = None

        with self._lock:
            sessions = list(self._connections.items())
        for connection, _ in sessions:
            connection.shutdown()
        for _, thread in sessions:
            if thread is not threading.current_thread():
                thread.join(timeout=5)
        logger.info("Listener stopped")

    def is_listening(self) -> bool:
        """Check if currently accepting connections."""
        return self._running.is_set()

    def connection_count(self) -> int:
        """Get the number of connections still being served."""
        with self._lock:
            return len(self._connections)

    def _accept_loop(self) -> None:
        sock = self._sock
        while self._running.is_set():
            try:
                client, address = sock.accept()
            except OSError as e:
                if not self._running.is_set():
                    break
                logger.warning(f"Accept failed: {e}")
                continue

            connection = SocketConnection(client, address)
            logger.debug(f"[{connection.peer}] Accepted")
            thread = threading.Thread(
                target=self._serve_connection,
                args=(connection,),
                name=f"smtplike-{connection.peer}",
                daemon=True,
            )
            with self._lock:
                self._connections[connection] = thread
                thread.start()

    def _serve_connection(self, connection: SocketConnection) -> None:
        try:
            if self._callback is None:
                logger.warning(f"[{connection.peer}] No handler registered, closing")
                return
            self._callback(connection)
        finally:
            connection.close()
            with self._lock:
                self._connections.pop(connection, None)
