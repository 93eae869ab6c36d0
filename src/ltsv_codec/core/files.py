"""File helpers around the reader and writer.

Plain and gzip files are supported, synchronously and through aiofiles.
Files are always opened with ``newline=""`` so the reader sees carriage
returns untranslated.
"""

from __future__ import annotations

import gzip
import io
import logging
from collections.abc import AsyncIterator, Iterable, Iterator, Mapping
from contextlib import asynccontextmanager
from itertools import islice
from pathlib import Path
from typing import IO

import aiofiles
from aiofiles.threadpool import wrap

from .models import Record, ReaderOptions, WriterOptions, resolve_reader_options, resolve_writer_options
from .reader import Reader
from .writer import Writer

LOGGER = logging.getLogger(__name__)


def _is_gzip(path: Path) -> bool:
    return path.suffix.lower() == ".gz"


def _check_input(path: str | Path) -> Path:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"LTSV file not found: {path}")
    return path


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit <= 0:
        raise ValueError("limit must be > 0")


def open_text(path: str | Path, mode: str = "r", *, encoding: str = "utf-8", errors: str = "replace") -> IO[str]:
    """Open an LTSV file for text I/O (plain or gzip)."""
    path = Path(path)
    if _is_gzip(path):
        return gzip.open(path, mode=mode + "t", encoding=encoding, errors=errors, newline="")
    return path.open(mode, encoding=encoding, errors=errors, newline="")


@asynccontextmanager
async def _aopen_text(path: Path, mode: str, *, encoding: str, errors: str):
    """Open an LTSV file for async text I/O (plain or gzip)."""
    if _is_gzip(path):
        f = gzip.open(path, mode=mode + "t", encoding=encoding, errors=errors, newline="")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, mode, encoding=encoding, errors=errors, newline="") as f:
            yield f


def _reader(stream, opts: ReaderOptions) -> Reader:
    return Reader(stream, delimiter=opts.delimiter, comment=opts.comment)


def _writer(stream, opts: WriterOptions) -> Writer:
    return Writer(stream, delimiter=opts.delimiter, line_terminator=opts.line_terminator)


def iter_records(path: str | Path, *, options: ReaderOptions | None = None) -> Iterator[Record]:
    """Yield records from an LTSV file.

    Without ``options`` the defaults are used, with LTSV_* environment overrides.
    """
    path = _check_input(path)
    opts = options or resolve_reader_options()
    with open_text(path, encoding=opts.encoding, errors=opts.errors) as f:
        yield from _reader(f, opts)


def read_records(
    path: str | Path,
    *,
    options: ReaderOptions | None = None,
    limit: int | None = None,
) -> list[Record]:
    """Collect records from an LTSV file, stopping after ``limit`` records."""
    _check_limit(limit)
    return list(islice(iter_records(path, options=options), limit))


def write_records(
    path: str | Path,
    records: Iterable[Mapping[str, str]],
    *,
    options: WriterOptions | None = None,
    append: bool = False,
) -> int:
    """Write records to an LTSV file and return how many were written."""
    path = Path(path)
    opts = options or resolve_writer_options()
    count = 0
    with open_text(path, "a" if append else "w", encoding=opts.encoding, errors=opts.errors) as f:
        with _writer(f, opts) as writer:
            for record in records:
                writer.write_record(record)
                count += 1
    LOGGER.debug("Wrote %d records to %s", count, path)
    return count


async def aiter_records(path: str | Path, *, options: ReaderOptions | None = None) -> AsyncIterator[Record]:
    """Async variant of :func:`iter_records`.

    The file is read through aiofiles in one go, then parsed on the calling thread.
    """
    path = _check_input(path)
    opts = options or resolve_reader_options()
    async with _aopen_text(path, "r", encoding=opts.encoding, errors=opts.errors) as f:
        text = await f.read()
    for record in _reader(io.StringIO(text, newline=""), opts):
        yield record


async def aread_records(
    path: str | Path,
    *,
    options: ReaderOptions | None = None,
    limit: int | None = None,
) -> list[Record]:
    """Async variant of :func:`read_records`."""
    _check_limit(limit)
    out: list[Record] = []
    async for record in aiter_records(path, options=options):
        if limit is not None and len(out) >= limit:
            break
        out.append(record)
    return out


async def awrite_records(
    path: str | Path,
    records: Iterable[Mapping[str, str]],
    *,
    options: WriterOptions | None = None,
    append: bool = False,
) -> int:
    """Async variant of :func:`write_records`."""
    path = Path(path)
    opts = options or resolve_writer_options()
    buf = io.StringIO(newline="")
    count = 0
    with _writer(buf, opts) as writer:
        for record in records:
            writer.write_record(record)
            count += 1
    async with _aopen_text(path, "a" if append else "w", encoding=opts.encoding, errors=opts.errors) as f:
        await f.write(buf.getvalue())
    LOGGER.debug("Wrote %d records to %s", count, path)
    return count
