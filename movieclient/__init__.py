"""Interactive HTTP/1.1 client for a movie library service: request building, transport, session state and commands."""

__version__ = "1.0.0"

__all__ = ["admin", "cli", "connection", "library", "messages", "session"]