"""Operator status records, condition builders and a handler that flushes them."""

__version__ = "0.1.0"