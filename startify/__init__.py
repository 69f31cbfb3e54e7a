"""Startify: remember recently opened files and hand off to the editor."""

__version__ = "0.1.0"
