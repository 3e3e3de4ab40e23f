"""Command shell and memory model of an ARM instruction-level simulator."""

__all__ = ["memory", "shell"]