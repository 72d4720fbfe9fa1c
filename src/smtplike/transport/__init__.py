"""Transport implementations for smtplike."""

from .tcp_transport import SocketConnection, TcpListener

__all__ = ["SocketConnection", "TcpListener"]
