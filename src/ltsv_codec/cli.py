from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterator, Sequence
from dataclasses import replace
from itertools import islice
from typing import TextIO

from ltsv_codec.core.errors import LtsvError
from ltsv_codec.core.files import iter_records, write_records
from ltsv_codec.core.models import (
    Record,
    parse_char,
    resolve_reader_options,
    resolve_writer_options,
    select_labels,
)
from ltsv_codec.core.reader import Reader
from ltsv_codec.core.writer import Writer
from ltsv_codec.log_config import configure_logging


def _parse_labels(s: str) -> list[str]:
    out = [part.strip() for part in s.split(",") if part.strip()]
    if not out:
        raise argparse.ArgumentTypeError("At least one label must be provided")
    return out


def _parse_char_arg(s: str) -> str:
    try:
        return parse_char(s, "argument")
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_int(s: str) -> int:
    value = int(s)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def _json_records(lines: TextIO) -> Iterator[Record]:
    """Parse one JSON object per line; values must already be strings."""
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        obj = json.loads(line)
        if not isinstance(obj, dict) or not all(isinstance(v, str) for v in obj.values()):
            raise ValueError(f"stdin line {line_no}: expected an object with string values")
        yield obj


def _cmd_read(args: argparse.Namespace) -> None:
    opts = resolve_reader_options()
    if args.delimiter is not None:
        opts = replace(opts, delimiter=args.delimiter)
    if args.comment is not None:
        opts = replace(opts, comment=args.comment)

    if args.path == "-":
        records = Reader(
            sys.stdin.buffer,
            delimiter=opts.delimiter,
            comment=opts.comment,
            encoding=opts.encoding,
            errors=opts.errors,
        )
    else:
        records = iter_records(args.path, options=opts)

    count = 0
    for record in islice(records, args.limit):
        print(json.dumps(select_labels(record, args.labels), ensure_ascii=False))
        count += 1
    print(f"Read {count} records.", file=sys.stderr)


def _cmd_write(args: argparse.Namespace) -> None:
    opts = resolve_writer_options()
    if args.delimiter is not None:
        opts = replace(opts, delimiter=args.delimiter)
    if args.crlf:
        opts = replace(opts, line_terminator="crlf")

    records = _json_records(sys.stdin)
    if args.path == "-":
        writer = Writer(
            sys.stdout.buffer,
            delimiter=opts.delimiter,
            line_terminator=opts.line_terminator,
            encoding=opts.encoding,
            errors=opts.errors,
        )
        writer.write_all(records)
        return

    count = write_records(args.path, records, options=opts, append=args.append)
    print(f"Wrote {count} records.", file=sys.stderr)


def _cmd_serve(args: argparse.Namespace) -> None:
    from ltsv_codec.server.ltsv_server import main as serve

    serve()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ltsv-codec", description="Read and write LTSV records.")
    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("read", help="Print LTSV records as JSON lines")
    r.add_argument("path", help="LTSV file (.gz supported), or - for stdin")
    r.add_argument("--delimiter", type=_parse_char_arg, default=None, help="Field delimiter (default: tab)")
    r.add_argument("--comment", type=_parse_char_arg, default=None, help="Skip lines starting with this character")
    r.add_argument("--limit", type=_positive_int, default=None, help="Stop after N records")
    r.add_argument("--labels", type=_parse_labels, default=None, help="Comma-separated labels to keep, in order")
    r.set_defaults(func=_cmd_read)

    w = sub.add_parser("write", help="Write JSON lines from stdin as LTSV")
    w.add_argument("path", help="Output file (.gz supported), or - for stdout")
    w.add_argument("--delimiter", type=_parse_char_arg, default=None, help="Field delimiter (default: tab)")
    w.add_argument("--crlf", action="store_true", help="End records with CRLF instead of LF")
    w.add_argument("--append", action="store_true", help="Append to the output file")
    w.set_defaults(func=_cmd_write)

    s = sub.add_parser("serve", help="Run the MCP server over stdio")
    s.set_defaults(func=_cmd_serve)
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        args.func(args)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (LtsvError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
