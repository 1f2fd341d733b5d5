"""ProjectDesk - project tracking API server, client and CLI."""

__version__ = "0.3.0"
