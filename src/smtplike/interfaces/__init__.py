"""Abstract interfaces for smtplike."""

from .connection import Connection
from .connection_listener import ConnectionListener

__all__ = ["Connection", "ConnectionListener"]
