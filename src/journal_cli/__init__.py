"""Operator CLI for the journal admin backend."""

__version__ = "0.1.0"
