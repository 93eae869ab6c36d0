"""Buffered character source and sink shared by the reader and writer.

Both accept either text streams (``str`` chunks) or byte streams, which are
decoded/encoded with the configured encoding.
"""

from __future__ import annotations

import codecs
import io
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 4096


def is_binary(stream: Any) -> bool:
    """Return True when the stream reads or writes bytes rather than text."""
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(stream, io.TextIOBase):
        return False
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


class CharSource:
    """Read-ahead character source.

    A ``\\r\\n`` pair is folded into a single ``\\n``, including when the two
    characters arrive in different chunks. A lone ``\\r`` is returned as-is.
    Buffered byte streams are read with ``read1`` so a pipe yields records as
    soon as their bytes arrive.
    """

    def __init__(
        self,
        stream: Any,
        *,
        encoding: str = "utf-8",
        errors: str = "replace",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")
        self._read = getattr(stream, "read1", None) or stream.read
        self._decoder = codecs.getincrementaldecoder(encoding)(errors) if is_binary(stream) else None
        self._buffer_size = buffer_size
        self._buffer = ""
        self._pos = 0
        self._eof = False

    def _fill(self) -> bool:
        """Make sure an unread character is buffered. False at end of stream."""
        while self._pos >= len(self._buffer):
            if self._eof:
                return False
            data = self._read(self._buffer_size)
            if not data:
                self._eof = True
            if self._decoder is not None:
                data = self._decoder.decode(data, final=self._eof)
            self._buffer = data
            self._pos = 0
        return True

    def peek(self) -> str | None:
        """Return the next raw character without consuming it (None at end)."""
        if not self._fill():
            return None
        return self._buffer[self._pos]

    def read(self) -> str | None:
        """Consume and return the next character (None at end)."""
        if not self._fill():
            return None
        ch = self._buffer[self._pos]
        self._pos += 1
        if ch == "\r" and self._fill() and self._buffer[self._pos] == "\n":
            self._pos += 1
            return "\n"
        return ch


class TextSink:
    """Pending-output buffer in front of a text or byte stream."""

    def __init__(
        self,
        stream: Any,
        *,
        encoding: str = "utf-8",
        errors: str = "strict",
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")
        self._stream = stream
        self._binary = is_binary(stream)
        self._encoding = encoding
        self._errors = errors
        self._buffer_size = buffer_size
        self._pending: list[str] = []
        self._pending_len = 0

    @property
    def pending(self) -> int:
        """Number of characters not yet handed to the stream."""
        return self._pending_len

    def write(self, text: str) -> None:
        self._pending.append(text)
        self._pending_len += len(text)
        if self._pending_len >= self._buffer_size:
            self.drain()

    def drain(self) -> None:
        """Hand pending text to the stream without flushing the stream itself."""
        if not self._pending:
            return
        text = "".join(self._pending)
        self._pending.clear()
        self._pending_len = 0
        if self._binary:
            self._stream.write(text.encode(self._encoding, self._errors))
        else:
            self._stream.write(text)

    def flush(self) -> None:
        self.drain()
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()
        LOGGER.debug("Flushed LTSV output")
