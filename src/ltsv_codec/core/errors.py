"""Errors raised by the LTSV codec."""

from __future__ import annotations


class LtsvError(Exception):
    """Base error for this package."""


class FormatError(LtsvError, ValueError):
    """Raised when the input contains a character that cannot appear in a label."""

    def __init__(self, message: str, *, line: int) -> None:
        super().__init__(f"line {line}: {message}")
        self.message = message
        self.line = line
