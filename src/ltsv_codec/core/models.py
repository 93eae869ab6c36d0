"""Core data models and options for the LTSV codec."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum

# One line's worth of label -> value entries. Later labels overwrite earlier ones.
Record = dict[str, str]

DEFAULT_DELIMITER = "\t"
DEFAULT_ENCODING = "utf-8"

_CHAR_ALIASES = {
    "\\t": "\t",
    "tab": "\t",
    "space": " ",
}


class LineTerminator(str, Enum):
    """Line endings the writer can emit. The reader accepts both."""

    LF = "\n"
    CRLF = "\r\n"


def parse_line_terminator(value: str | LineTerminator) -> LineTerminator:
    """Parse `lf`/`crlf` (or the literal terminator) into a LineTerminator."""
    if isinstance(value, LineTerminator):
        return value
    name = value.strip().upper()
    if name in LineTerminator.__members__:
        return LineTerminator[name]
    try:
        return LineTerminator(value)
    except ValueError as exc:
        raise ValueError(f"Unknown line terminator {value!r}. Allowed: lf, crlf") from exc


def parse_char(value: str, setting: str) -> str:
    """Parse a single-character setting, accepting a few named escapes."""
    ch = _CHAR_ALIASES.get(value.lower(), value) if len(value) > 1 else value
    if len(ch) != 1:
        raise ValueError(f"{setting} must be a single character, got {value!r}")
    return ch


def validate_delimiter(delimiter: str) -> None:
    """Reject delimiters that would collide with the label or line syntax."""
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if delimiter in (":", "\r", "\n"):
        raise ValueError(f"delimiter cannot be {delimiter!r}")


def validate_comment(comment: str | None, delimiter: str) -> None:
    """Reject comment characters that can never start a line."""
    if not comment:
        return
    if not isinstance(comment, str) or len(comment) != 1:
        raise ValueError(f"comment must be a single character, got {comment!r}")
    if comment in ("\r", "\n"):
        raise ValueError(f"comment cannot be {comment!r}")
    if comment == delimiter:
        raise ValueError("comment cannot be the same character as the delimiter")


def select_labels(record: Mapping[str, str], labels: Iterable[str] | None) -> Record:
    """Return the record restricted to `labels`, in that order (all labels when None)."""
    if labels is None:
        return dict(record)
    return {label: record[label] for label in labels if label in record}


@dataclass(frozen=True, slots=True)
class ReaderOptions:
    delimiter: str = DEFAULT_DELIMITER
    comment: str | None = None
    encoding: str = DEFAULT_ENCODING
    errors: str = "replace"

    def __post_init__(self) -> None:
        validate_delimiter(self.delimiter)
        validate_comment(self.comment, self.delimiter)


@dataclass(frozen=True, slots=True)
class WriterOptions:
    delimiter: str = DEFAULT_DELIMITER
    line_terminator: LineTerminator = LineTerminator.LF
    encoding: str = DEFAULT_ENCODING
    errors: str = "strict"

    def __post_init__(self) -> None:
        validate_delimiter(self.delimiter)
        object.__setattr__(self, "line_terminator", parse_line_terminator(self.line_terminator))


def _env_char(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return parse_char(value, name)


def resolve_reader_options(opts: ReaderOptions | None = None) -> ReaderOptions:
    """Return reader options with optional env overrides applied."""
    if opts is None:
        opts = ReaderOptions()

    changes: dict[str, object] = {}
    delimiter = _env_char("LTSV_DELIMITER")
    if delimiter is not None:
        changes["delimiter"] = delimiter
    comment = os.getenv("LTSV_COMMENT")
    if comment is not None:
        changes["comment"] = parse_char(comment, "LTSV_COMMENT") if comment else None
    encoding = os.getenv("LTSV_ENCODING")
    if encoding:
        changes["encoding"] = encoding

    if not changes:
        return opts
    return replace(opts, **changes)


def resolve_writer_options(opts: WriterOptions | None = None) -> WriterOptions:
    """Return writer options with optional env overrides applied."""
    if opts is None:
        opts = WriterOptions()

    changes: dict[str, object] = {}
    delimiter = _env_char("LTSV_DELIMITER")
    if delimiter is not None:
        changes["delimiter"] = delimiter
    terminator = os.getenv("LTSV_LINE_TERMINATOR")
    if terminator:
        try:
            changes["line_terminator"] = parse_line_terminator(terminator)
        except ValueError as exc:
            raise ValueError("LTSV_LINE_TERMINATOR must be 'lf' or 'crlf'") from exc
    encoding = os.getenv("LTSV_ENCODING")
    if encoding:
        changes["encoding"] = encoding

    if not changes:
        return opts
    return replace(opts, **changes)
