"""Command line interface for SimpleWeb."""

from .main import app, main


__all__ = ["app", "main"]
