"""Notify when a command finishes, through one or more notification services."""

__version__ = "3.8.0"
