"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: read records from and write records to LTSV files
- Resources: help text, a sample file, the result schema and parsed files by URI

Run locally (stdio):
    python -m ltsv_codec.server.ltsv_server
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from ltsv_codec.log_config import configure_logging
from ltsv_codec.resources.registry import register_resources
from ltsv_codec.tools.records import read_ltsv_impl, write_ltsv_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("ltsv-codec", json_response=True)

register_resources(mcp)


@mcp.tool()
async def read_ltsv(
    path: str,
    delimiter: str = "\t",
    comment: str | None = None,
    limit: int | None = None,
    labels: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Read records from an LTSV file.

    Parameters
    ----------
    path:
        Path to a local LTSV file under LTSV_BASE_DIR. Supports plain text and .gz.
    delimiter:
        Field delimiter (single character, default tab).
    comment:
        Optional comment character; lines starting with it are skipped.
    limit:
        Maximum number of records returned (default 200, hard-capped at 5000).
    labels:
        Only return these labels, in this order.

    Returns
    -------
    dict:
        {"path": str, "count": int, "truncated": bool, "records": list[dict]}
    """
    return await read_ltsv_impl(
        path=path,
        delimiter=delimiter,
        comment=comment,
        limit=limit,
        labels=labels,
    )


@mcp.tool()
async def write_ltsv(
    path: str,
    records: list[dict[str, str]],
    delimiter: str = "\t",
    use_crlf: bool = False,
    append: bool = False,
) -> dict[str, Any]:
    """Write records to an LTSV file under LTSV_BASE_DIR.

    Values must be strings; they are written verbatim.

    Returns
    -------
    dict:
        {"path": str, "count": int}
    """
    return await write_ltsv_impl(
        path=path,
        records=records,
        delimiter=delimiter,
        use_crlf=use_crlf,
        append=append,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
