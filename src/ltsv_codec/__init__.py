"""Codec for LTSV (Labeled Tab-Separated Values) records."""

from __future__ import annotations

from .core import (
    FormatError,
    LineTerminator,
    LtsvError,
    Reader,
    ReaderOptions,
    Record,
    Writer,
    WriterOptions,
    read_records,
    write_records,
)

__all__ = [
    "FormatError",
    "LineTerminator",
    "LtsvError",
    "Reader",
    "ReaderOptions",
    "Record",
    "Writer",
    "WriterOptions",
    "read_records",
    "write_records",
]
