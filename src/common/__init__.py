"""Shared helpers: HTTP transport, logging and archive handling."""
