"""TLS chat server, terminal client, account and history helpers, and an idle-timeout echo."""

__version__ = "0.1.0"
__all__ = ["accounts", "client", "history", "idle", "server"]