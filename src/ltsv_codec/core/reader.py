"""Streaming LTSV reader.

Each call to :meth:`Reader.read_record` assembles ``label:value`` pairs into a
dict until a line break (or end of stream) ends the record. Segments without a
colon carry no label and are discarded; a line made only of such segments
produces no record at all.

Example:
    >>> import io
    >>> Reader(io.StringIO("host:127.0.0.1\\tuser:frank\\n")).read_all()
    [{'host': '127.0.0.1', 'user': 'frank'}]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from .errors import FormatError
from .models import DEFAULT_DELIMITER, DEFAULT_ENCODING, Record, validate_comment, validate_delimiter
from .stream import DEFAULT_BUFFER_SIZE, CharSource

LOGGER = logging.getLogger(__name__)


class Reader:
    """Read LTSV records from a text or byte stream.

    ``delimiter`` and ``comment`` are plain attributes and may be changed
    before the first read. ``comment`` is disabled when None or empty.
    """

    def __init__(
        self,
        stream: Any,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        comment: str | None = None,
        encoding: str = DEFAULT_ENCODING,
        errors: str = "replace",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.delimiter = delimiter
        self.comment = comment
        self.line = 0
        self._source = CharSource(stream, encoding=encoding, errors=errors, buffer_size=buffer_size)
        self._label: list[str] = []
        self._field: list[str] = []

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        record = self.read_record()
        if record is None:
            raise StopIteration
        return record

    def read_record(self) -> Record | None:
        """Read one record. Returns None once the stream is exhausted.

        Raises:
            FormatError: if a label contains a control or non-printable character.
            OSError: propagated from the underlying stream.
        """
        validate_delimiter(self.delimiter)
        validate_comment(self.comment, self.delimiter)

        self.line += 1
        record: Record = {}
        while True:
            if self.comment and self._source.peek() == self.comment:
                self._skip_line()
                continue

            label, end_of_line = self._parse_label()
            if label is None:
                if not end_of_line:
                    continue
                if record:
                    return record
                if self._source.peek() is None:
                    return None
                continue

            field, end_of_record = self._parse_field()
            record[label] = field
            if end_of_record:
                return record

    def read_all(self) -> list[Record]:
        """Read records until the end of the stream."""
        return list(self)

    def _skip_line(self) -> None:
        LOGGER.debug("line %d: skipping comment", self.line)
        while True:
            ch = self._source.read()
            if ch is None or ch == "\n":
                return

    def _parse_label(self) -> tuple[str | None, bool]:
        """Scan up to a colon. Returns (label, end_of_line); label is None when absent."""
        buf = self._label
        buf.clear()
        while True:
            ch = self._source.read()
            if ch == ":":
                label = "".join(buf).strip()
                return (label or None), False
            if ch is None or ch == "\n" or ch == self.delimiter:
                if buf:
                    LOGGER.debug("line %d: dropping segment without label", self.line)
                return None, ch != self.delimiter
            if not ch.isprintable():
                raise FormatError("invalid character in label", line=self.line)
            buf.append(ch)

    def _parse_field(self) -> tuple[str, bool]:
        """Scan a value. Returns (field, end_of_record)."""
        buf = self._field
        buf.clear()
        while True:
            ch = self._source.read()
            if ch is None or ch == "\n":
                return "".join(buf), True
            if ch == self.delimiter:
                return "".join(buf), False
            buf.append(ch)
