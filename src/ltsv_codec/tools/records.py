"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ltsv_codec.core.files import aread_records, awrite_records
from ltsv_codec.core.models import (
    LineTerminator,
    ReaderOptions,
    WriterOptions,
    parse_char,
    select_labels,
)
from ltsv_codec.core.paths import resolve_input_path, resolve_output_path
from ltsv_codec.tools.models import ReadResult, WriteRequest, WriteResult

LOGGER = logging.getLogger(__name__)

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return min(limit, HARD_LIMIT)


def _parse_labels(labels: Sequence[str] | None) -> list[str] | None:
    """Strip user-supplied labels; an empty selection means all labels."""
    if not labels:
        return None
    out = [s.strip() for s in labels if s.strip()]
    return out or None


async def read_ltsv_impl(
    *,
    path: str,
    delimiter: str = "\t",
    comment: str | None = None,
    limit: int | None = None,
    labels: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Implementation for the `read_ltsv` MCP tool."""
    resolved = resolve_input_path(path)
    options = ReaderOptions(
        delimiter=parse_char(delimiter, "delimiter"),
        comment=parse_char(comment, "comment") if comment else None,
    )
    limit_eff = _resolve_limit(limit)
    selected = _parse_labels(labels)

    # One extra record tells us whether the result was cut short.
    records = await aread_records(resolved, options=options, limit=limit_eff + 1)
    truncated = len(records) > limit_eff
    records = [select_labels(r, selected) for r in records[:limit_eff]]
    LOGGER.debug("read_ltsv %s: %d records (truncated=%s)", resolved, len(records), truncated)

    return ReadResult(
        path=str(resolved),
        count=len(records),
        truncated=truncated,
        records=records,
    ).model_dump()


async def write_ltsv_impl(
    *,
    path: str,
    records: list[dict[str, Any]],
    delimiter: str = "\t",
    use_crlf: bool = False,
    append: bool = False,
) -> dict[str, Any]:
    """Implementation for the `write_ltsv` MCP tool."""
    try:
        request = WriteRequest(records=records)
    except ValidationError as exc:
        raise ValueError(f"records must be a list of string-to-string objects: {exc}") from exc

    resolved = resolve_output_path(path)
    options = WriterOptions(
        delimiter=parse_char(delimiter, "delimiter"),
        line_terminator=LineTerminator.CRLF if use_crlf else LineTerminator.LF,
    )
    count = await awrite_records(resolved, request.records, options=options, append=append)
    return WriteResult(path=str(resolved), count=count).model_dump()
