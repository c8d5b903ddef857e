"""Rollbar setup wizard — scaffold Rollbar into an existing web project."""

__version__ = "1.0.0"
