from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

ACCESS_LOG = (
    "host:127.0.0.1\tident:-\tuser:frank\n"
    "status:200\tsize:2326\n"
)


@pytest.fixture
def write_ltsv() -> Callable[[Path, str], None]:
    def _write(path: Path, text: str) -> None:
        # Bytes, so line endings reach the reader exactly as given.
        path.write_bytes(text.encode("utf-8"))

    return _write


@pytest.fixture
def access_log(tmp_path: Path, write_ltsv) -> Path:
    path = tmp_path / "access.ltsv"
    write_ltsv(path, ACCESS_LOG)
    return path
