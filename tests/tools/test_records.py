from __future__ import annotations

from pathlib import Path

import pytest

from ltsv_codec.core.files import read_records
from ltsv_codec.tools import records as records_module
from ltsv_codec.tools.models import ReadResult
from ltsv_codec.tools.records import read_ltsv_impl, write_ltsv_impl


@pytest.fixture(autouse=True)
def _base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LTSV_BASE_DIR", str(tmp_path))


@pytest.mark.asyncio
async def test_read_ltsv_impl(access_log: Path) -> None:
    out = await read_ltsv_impl(path=access_log.name)

    assert out["count"] == 2
    assert out["truncated"] is False
    assert out["path"] == str(access_log.resolve())
    assert out["records"][0] == {"host": "127.0.0.1", "ident": "-", "user": "frank"}
    ReadResult.model_validate(out)


@pytest.mark.asyncio
async def test_read_ltsv_impl_limit_and_labels(access_log: Path) -> None:
    out = await read_ltsv_impl(path=str(access_log), limit=1, labels=["user", " host "])

    assert out["count"] == 1
    assert out["truncated"] is True
    assert list(out["records"][0].items()) == [("user", "frank"), ("host", "127.0.0.1")]


@pytest.mark.asyncio
async def test_read_ltsv_impl_hard_limit(
    tmp_path: Path, write_ltsv, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(records_module, "HARD_LIMIT", 2)
    path = tmp_path / "many.ltsv"
    write_ltsv(path, "".join(f"n:{i}\n" for i in range(5)))

    out = await read_ltsv_impl(path=path.name, limit=100)

    assert out["count"] == 2
    assert out["truncated"] is True


@pytest.mark.asyncio
async def test_read_ltsv_impl_comment_and_delimiter(tmp_path: Path, write_ltsv) -> None:
    path = tmp_path / "custom.ltsv"
    write_ltsv(path, "# skip me\na:1,b:2\n")

    out = await read_ltsv_impl(path=path.name, delimiter=",", comment="#")

    assert out["records"] == [{"a": "1", "b": "2"}]


@pytest.mark.asyncio
async def test_read_ltsv_impl_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="escapes base dir"):
        await read_ltsv_impl(path="../outside.ltsv")


@pytest.mark.asyncio
async def test_read_ltsv_impl_rejects_suffix(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="File type not allowed"):
        await read_ltsv_impl(path=path.name)


@pytest.mark.asyncio
async def test_read_ltsv_impl_invalid_limit(access_log: Path) -> None:
    with pytest.raises(ValueError, match="limit"):
        await read_ltsv_impl(path=access_log.name, limit=0)


@pytest.mark.asyncio
async def test_write_ltsv_impl(tmp_path: Path) -> None:
    out = await write_ltsv_impl(
        path="out.ltsv",
        records=[{"a": "1", "b": "2"}, {"c": "3"}],
        use_crlf=True,
    )

    assert out == {"path": str((tmp_path / "out.ltsv").resolve()), "count": 2}
    assert (tmp_path / "out.ltsv").read_bytes() == b"a:1\tb:2\r\nc:3\r\n"
    assert read_records(tmp_path / "out.ltsv") == [{"a": "1", "b": "2"}, {"c": "3"}]


@pytest.mark.asyncio
async def test_write_ltsv_impl_rejects_non_string_values() -> None:
    with pytest.raises(ValueError, match="string-to-string"):
        await write_ltsv_impl(path="out.ltsv", records=[{"status": 200}])
