"""Uptime monitor for HTTP endpoints."""

__version__ = "1.0.0"
