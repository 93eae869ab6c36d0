"""LTSV reader, writer and file helpers."""

from __future__ import annotations

from .errors import FormatError, LtsvError
from .files import (
    aiter_records,
    aread_records,
    awrite_records,
    iter_records,
    open_text,
    read_records,
    write_records,
)
from .models import (
    LineTerminator,
    ReaderOptions,
    Record,
    WriterOptions,
    resolve_reader_options,
    resolve_writer_options,
    select_labels,
)
from .reader import Reader
from .writer import Writer

__all__ = [
    "FormatError",
    "LineTerminator",
    "LtsvError",
    "Reader",
    "ReaderOptions",
    "Record",
    "Writer",
    "WriterOptions",
    "aiter_records",
    "aread_records",
    "awrite_records",
    "iter_records",
    "open_text",
    "read_records",
    "resolve_reader_options",
    "resolve_writer_options",
    "select_labels",
    "write_records",
]
