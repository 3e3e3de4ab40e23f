"""Ordered list of typed string nodes and the report writer built on it."""

__all__ = ["strlist", "tester"]