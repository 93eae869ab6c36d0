"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from ltsv_codec.core.files import aread_records
from ltsv_codec.core.models import Record
from ltsv_codec.core.paths import ALLOWED_FILE_SUFFIXES, BASE_DIR_ENV, base_dir, resolve_input_path
from ltsv_codec.tools.models import ReadResult

SAMPLE_LTSV = (
    "host:127.0.0.1\tident:-\tuser:frank\ttime:[10/Oct/2000:13:55:36 -0700]\treq:GET /apache_pb.gif HTTP/1.0\n"
    "status:200\tsize:2326\treferer:http://www.example.com/start.html\tua:Mozilla/4.08 [en] (Win98; I ;Nav)\n"
)


def help_text() -> str:
    """Return a short list of available resource URIs."""
    allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
    return (
        "Resources:\n"
        "- app://ltsv/help\n"
        "- app://ltsv/examples/sample\n"
        "- app://ltsv/schemas/read-result\n"
        f"- ltsv://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed}, .gz)\n"
        f"\nBase directory: {base_dir()}\n"
    )


async def parsed_records(path: str) -> list[Record]:
    """Return every record of an LTSV file within LTSV_BASE_DIR."""
    return await aread_records(resolve_input_path(path))


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://ltsv/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return help_text()

    @mcp.resource("app://ltsv/examples/sample")
    def sample() -> str:
        """Return a tiny sample LTSV file for demos and tests."""
        return SAMPLE_LTSV

    @mcp.resource("app://ltsv/schemas/read-result")
    def read_result_schema() -> dict[str, Any]:
        """Return the JSON schema of read_ltsv results."""
        return ReadResult.model_json_schema()

    @mcp.resource("ltsv://{path}")
    async def parsed_file(path: str) -> list[Record]:
        """Return every record of an LTSV file within LTSV_BASE_DIR."""
        return await parsed_records(path)
