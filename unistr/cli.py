from __future__ import annotations

import argparse
import json
import re
import sys
from typing import Any, BinaryIO, TextIO

from .config import load_settings, use_settings
from .errors import UnistrError
from .observability.logging import configure_logging, get_logger
from .primitives import primitive_names
from .value import Str

_INT_RE = re.compile(r"^-?\d+$")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="unistr",
        description="Apply one codepoint-aware string operation to input text.",
    )
    p.add_argument("operation", nargs="?", help="operation name, e.g. toUpper, slice, padLeft")
    p.add_argument("args", nargs="*", help="operation arguments; integers are passed as int")
    p.add_argument("--text", default=None, help="input text (default: read bytes from stdin)")
    p.add_argument("--encoding", default=None, help="input encoding (default: autodetect)")
    p.add_argument("--config", default=None, help="YAML settings file")
    p.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="log level",
    )
    p.add_argument("--list", action="store_true", help="list available primitives and exit")
    return p


def _parse_arg(value: str) -> Any:
    if _INT_RE.match(value):
        return int(value)
    return value


def _read_input(args: argparse.Namespace, stdin: BinaryIO) -> bytes:
    if args.text is not None:
        return args.text.encode(args.encoding or "utf-8")
    return stdin.read()


def _emit(result: Any, stdout: BinaryIO) -> None:
    if isinstance(result, Str):
        stdout.write(bytes(result))
        stdout.write(b"\n")
        return
    if isinstance(result, list):
        result = [str(item) for item in result]
    stdout.write(json.dumps(result, ensure_ascii=False).encode("utf-8"))
    stdout.write(b"\n")


def main(
    argv: list[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=args.log_level)
    log = get_logger("unistr.cli")

    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr

    if args.list:
        stdout.write("\n".join(primitive_names()).encode("utf-8") + b"\n")
        return 0
    if not args.operation:
        print("unistr: an operation is required (see --list)", file=stderr)
        return 2

    try:
        if args.config:
            use_settings(load_settings(args.config))
        value = Str(_read_input(args, stdin), args.encoding)
        result = value.call(args.operation, *(_parse_arg(a) for a in args.args))
    except (UnistrError, LookupError, ValueError, TypeError) as e:
        log.debug("cli_failed", operation=args.operation, error=type(e).__name__)
        print(f"unistr: {e}", file=stderr)
        return 2

    _emit(result, stdout)
    return 0
