from __future__ import annotations

import io

import pytest

from ltsv_codec.core.models import LineTerminator
from ltsv_codec.core.reader import Reader
from ltsv_codec.core.writer import Writer

RECORDS = [
    {"host": "127.0.0.1", "ident": "-", "user": "frank", "time": "[10/Oct/2000:13:55:36 -0700]"},
    {"status": "200", "size": "2326", "ua": "Mozilla/4.08 [en] (Win98; I ;Nav)"},
    {"trim space": "こんばんは", "ha,s.p-un_ct": " おはよう "},
]


def test_write_record_format() -> None:
    buf = io.StringIO()
    writer = Writer(buf)
    writer.write_record({"a": "1", "b": "2"})
    writer.flush()
    assert buf.getvalue() == "a:1\tb:2\n"


def test_output_is_buffered_until_flush() -> None:
    buf = io.StringIO()
    writer = Writer(buf)
    writer.write_record({"a": "1"})
    assert buf.getvalue() == ""
    writer.flush()
    assert buf.getvalue() == "a:1\n"


def test_large_output_is_written_through() -> None:
    buf = io.StringIO()
    writer = Writer(buf, buffer_size=8)
    writer.write_record({"label": "value"})
    assert buf.getvalue() == "label:value\n"


def test_crlf_terminator() -> None:
    buf = io.StringIO(newline="")
    writer = Writer(buf, use_crlf=True)
    writer.write_all([{"a": "1"}, {"b": "2"}])
    assert buf.getvalue() == "a:1\r\nb:2\r\n"


def test_line_terminator_by_name() -> None:
    buf = io.StringIO(newline="")
    writer = Writer(buf, line_terminator="crlf")
    assert writer.line_terminator is LineTerminator.CRLF


def test_custom_delimiter() -> None:
    buf = io.StringIO()
    Writer(buf, delimiter=",").write_all([{"a": "1", "b": "2"}])
    assert buf.getvalue() == "a:1,b:2\n"


def test_empty_record_writes_blank_line() -> None:
    buf = io.StringIO()
    Writer(buf).write_all([{}])
    assert buf.getvalue() == "\n"


def test_byte_sink_is_encoded() -> None:
    buf = io.BytesIO()
    Writer(buf).write_all([{"名前": "太郎"}])
    assert buf.getvalue() == "名前:太郎\n".encode("utf-8")


@pytest.mark.parametrize("use_crlf", [False, True])
def test_written_records_read_back(use_crlf: bool) -> None:
    buf = io.StringIO(newline="")
    Writer(buf, use_crlf=use_crlf).write_all(RECORDS)
    buf.seek(0)
    assert Reader(buf).read_all() == RECORDS


def test_write_all_flushes_after_failure() -> None:
    class BadRecord(dict):
        def items(self):
            raise RuntimeError("bad record")

    buf = io.StringIO()
    writer = Writer(buf)
    with pytest.raises(RuntimeError, match="bad record"):
        writer.write_all([{"a": "1"}, BadRecord(), {"c": "3"}])
    assert buf.getvalue() == "a:1\n"


def test_write_error_propagates_and_first_error_wins() -> None:
    class Sink:
        def write(self, text: str) -> int:
            raise OSError("sink full")

        def flush(self) -> None:
            raise OSError("flush failed")

    writer = Writer(Sink(), buffer_size=1)
    with pytest.raises(OSError, match="sink full"):
        writer.write_all([{"a": "1"}])


def test_flush_calls_stream_flush() -> None:
    class Sink(io.StringIO):
        flushed = 0

        def flush(self) -> None:
            self.flushed += 1
            super().flush()

    sink = Sink()
    with Writer(sink) as writer:
        writer.write_record({"a": "1"})
    assert sink.getvalue() == "a:1\n"
    assert sink.flushed == 1
