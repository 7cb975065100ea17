"""Evaluator helper modules for the Kite runtime."""

__all__ = [
    "bind",
    "blocks",
    "chains",
    "common",
    "expr",
    "fn",
    "helpers",
    "loops",
]
