"""Logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import os


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    Logs go to stderr so they never mix with records written to stdout.
    """
    level_name = os.getenv("LTSV_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
