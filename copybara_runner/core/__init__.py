"""Core logic: configuration, document rendering, and the container runner."""

__all__ = [
    "config",
    "exit_codes",
    "host",
    "runner",
    "sky",
]
