"""mailctl: a session-authenticated in-memory mail store with a line-oriented shell."""

__version__ = "0.1.0"
