"""Compiler diagnostics that point at a position in the source text."""

from __future__ import annotations


def format_error(source: str, pos: int, message: str) -> str:
    """Render the source line with a caret under ``pos`` followed by ``message``."""
    return f"{source}\n{' ' * pos}^ {message}"


class CompileError(Exception):
    """An error found while tokenizing or parsing, tied to a source position."""

    def __init__(self, source: str, pos: int, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.pos = pos
        self.message = message

    def __str__(self) -> str:
        return format_error(self.source, self.pos, self.message)