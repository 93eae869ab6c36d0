"""LTSV writer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .models import (
    DEFAULT_DELIMITER,
    DEFAULT_ENCODING,
    LineTerminator,
    parse_line_terminator,
    validate_delimiter,
)
from .stream import DEFAULT_BUFFER_SIZE, TextSink

LOGGER = logging.getLogger(__name__)


class Writer:
    """Write LTSV records to a text or byte stream.

    Entries are written in the mapping's iteration order. Output is buffered;
    call :meth:`flush` (or use :meth:`write_all` or the context manager) before
    relying on it being in the stream.
    """

    def __init__(
        self,
        stream: Any,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        line_terminator: LineTerminator | str = LineTerminator.LF,
        use_crlf: bool = False,
        encoding: str = DEFAULT_ENCODING,
        errors: str = "strict",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.delimiter = delimiter
        self.line_terminator = LineTerminator.CRLF if use_crlf else parse_line_terminator(line_terminator)
        self._sink = TextSink(stream, encoding=encoding, errors=errors, buffer_size=buffer_size)

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()
        else:
            self._flush_after_error()

    def write_record(self, record: Mapping[str, str]) -> None:
        """Serialize one record followed by the line terminator."""
        validate_delimiter(self.delimiter)
        line = self.delimiter.join(f"{label}:{field}" for label, field in record.items())
        self._sink.write(line + parse_line_terminator(self.line_terminator).value)

    def flush(self) -> None:
        """Write any buffered output to the underlying stream."""
        self._sink.flush()

    def write_all(self, records: Iterable[Mapping[str, str]]) -> None:
        """Write every record, then flush. The first error is re-raised after flushing."""
        try:
            for record in records:
                self.write_record(record)
        except Exception:
            self._flush_after_error()
            raise
        self.flush()

    def _flush_after_error(self) -> None:
        try:
            self.flush()
        except OSError:
            LOGGER.debug("Flush after failed write also failed", exc_info=True)
