"""Request/response models for the MCP tools."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr


class ReadResult(BaseModel):
    path: str = Field(description="Resolved path of the file that was read.")
    count: int = Field(ge=0, description="Number of records returned.")
    truncated: bool = Field(
        default=False, description="True when more records exist beyond the limit."
    )
    records: list[dict[str, str]] = Field(default_factory=list)


class WriteRequest(BaseModel):
    # Values are opaque text; numbers and other JSON types are rejected, not coerced.
    records: list[dict[StrictStr, StrictStr]]


class WriteResult(BaseModel):
    path: str = Field(description="Resolved path of the file that was written.")
    count: int = Field(ge=0, description="Number of records written.")
