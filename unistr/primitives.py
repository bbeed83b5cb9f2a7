"""Codepoint-aware text primitives and the semantic dispatch table.

Every primitive takes the decoded text as its first argument and counts in
codepoints, which is what Python's `str` already does. The registry is
closed: `resolve()` only ever returns functions registered here.
"""

from __future__ import annotations

from typing import Callable, Mapping

from .config import get_settings
from .errors import InvalidOperationError, StrIndexError

__all__ = [
    "OPERATIONS",
    "PAD_BOTH",
    "PAD_LEFT",
    "PAD_RIGHT",
    "Primitive",
    "primitive_names",
    "resolve",
]

Primitive = Callable[..., object]

PAD_LEFT = "left"
PAD_RIGHT = "right"
PAD_BOTH = "both"

_PRIMITIVES: dict[str, Primitive] = {}

# Semantic operation name -> primitive name. Names missing here are looked up
# in the registry as-is.
OPERATIONS: dict[str, str] = {
    "toUpper": "upper",
    "toLower": "lower",
    "slice": "substr",
    "length": "length",
    "indexOf": "index_of",
    "pad": "pad",
    "find": "find",
    "to_upper": "upper",
    "to_lower": "lower",
    "lastIndexOf": "last_index_of",
    "trimLeft": "trim_left",
    "trimRight": "trim_right",
    "startsWith": "starts_with",
    "endsWith": "ends_with",
    "firstToLower": "first_to_lower",
    "sprintf": "format",
    "padLeft": "pad_left",
    "padRight": "pad_right",
    "padBoth": "pad_both",
    "firstToUpper": "first_to_upper",
}


def primitive(name: str) -> Callable[[Primitive], Primitive]:
    def register(fn: Primitive) -> Primitive:
        if name in _PRIMITIVES:
            raise ValueError(f"primitive {name!r} registered twice")
        _PRIMITIVES[name] = fn
        return fn

    return register


def resolve(operation: str) -> Primitive:
    """Map an operation name to its primitive, or raise InvalidOperationError."""

    name = OPERATIONS.get(operation, operation)
    fn = _PRIMITIVES.get(name)
    if fn is None:
        raise InvalidOperationError(operation)
    return fn


def primitive_names() -> list[str]:
    return sorted(_PRIMITIVES)


def _clamp_start(text: str, start: int) -> int:
    size = len(text)
    if start < 0:
        return max(size + start, 0)
    return min(start, size)


@primitive("upper")
def upper(text: str) -> str:
    return text.upper()


@primitive("lower")
def lower(text: str) -> str:
    return text.lower()


@primitive("length")
def length(text: str) -> int:
    return len(text)


@primitive("substr")
def substr(text: str, start: int, length: int | None = None) -> str:
    """Codepoint substring.

    A negative `start` counts from the end. A negative `length` stops that
    many codepoints before the end. Ranges past either end yield "".
    """

    begin = _clamp_start(text, start)
    if length is None:
        end = len(text)
    elif length < 0:
        end = len(text) + length
    else:
        end = begin + length
    if end <= begin:
        return ""
    return text[begin:end]


@primitive("index_of")
def index_of(text: str, needle: str, offset: int = 0) -> int:
    if offset > len(text) or offset < -len(text):
        raise StrIndexError(offset, len(text))
    return text.find(needle, _clamp_start(text, offset))


@primitive("last_index_of")
def last_index_of(text: str, needle: str) -> int:
    return text.rfind(needle)


@primitive("count")
def count(text: str, needle: str) -> int:
    if needle == "":
        raise ValueError("needle must not be empty")
    return text.count(needle)


@primitive("contains")
def contains(text: str, needle: str) -> bool:
    return needle in text


@primitive("starts_with")
def starts_with(text: str, prefix: str) -> bool:
    return text.startswith(prefix)


@primitive("ends_with")
def ends_with(text: str, suffix: str) -> bool:
    return text.endswith(suffix)


@primitive("find")
def find(text: str, needle: str, before: bool = False) -> str | None:
    """Text from the first occurrence of `needle` onwards (or before it).

    Returns None when `needle` does not occur.
    """

    pos = text.find(needle)
    if pos < 0:
        return None
    return text[:pos] if before else text[pos:]


def _fill_run(fill: str, size: int) -> str:
    if size <= 0:
        return ""
    times, rest = divmod(size, len(fill))
    return fill * times + fill[:rest]


@primitive("pad")
def pad(text: str, length: int, fill: str | None = None, side: str = PAD_RIGHT) -> str:
    """Pad `text` to `length` codepoints with repetitions of `fill`.

    For PAD_BOTH the left side gets half of the padding (rounded down) and
    the right side the rest. Without `fill` the configured default is used.
    """

    fill = get_settings().default_fill if fill is None else str(fill)
    if fill == "":
        raise ValueError("padding fill must not be empty")
    if side not in (PAD_LEFT, PAD_RIGHT, PAD_BOTH):
        raise ValueError(f"unknown padding side: {side!r}")

    missing = length - len(text)
    if missing <= 0:
        return text
    if side == PAD_LEFT:
        return _fill_run(fill, missing) + text
    if side == PAD_RIGHT:
        return text + _fill_run(fill, missing)
    left = missing // 2
    return _fill_run(fill, left) + text + _fill_run(fill, missing - left)


@primitive("replace")
def replace(text: str, old: str, new: str, count: int | None = None) -> str:
    if old == "":
        return text
    if count is None:
        return text.replace(old, new)
    if count < 0:
        raise ValueError("replacement count must not be negative")
    return text.replace(old, new, count)


@primitive("format")
def format(text: str, *args: object) -> str:  # noqa: A001
    """printf-style positional substitution (`%s`, `%d`, `%05.2f`, ...).

    A literal percent sign must be written `%%`; a lone `%` raises ValueError.
    """

    if len(args) == 1 and isinstance(args[0], Mapping):
        return text % args[0]
    return text % args


@primitive("trim")
def trim(text: str, chars: str | None = None) -> str:
    return text.strip(chars)


@primitive("trim_left")
def trim_left(text: str, chars: str | None = None) -> str:
    return text.lstrip(chars)


@primitive("trim_right")
def trim_right(text: str, chars: str | None = None) -> str:
    return text.rstrip(chars)


@primitive("repeat")
def repeat(text: str, times: int) -> str:
    if times < 0:
        raise ValueError("repeat count must not be negative")
    return text * times


@primitive("reverse")
def reverse(text: str) -> str:
    return text[::-1]


@primitive("split")
def split(text: str, separator: str | None = None, limit: int = -1) -> list[str]:
    return text.split(separator, limit)


@primitive("first_to_upper")
def first_to_upper(text: str) -> str:
    return substr(text, 0, 1).upper() + substr(text, 1)


@primitive("first_to_lower")
def first_to_lower(text: str) -> str:
    return substr(text, 0, 1).lower() + substr(text, 1)


@primitive("pad_left")
def pad_left(text: str, length: int, fill: str | None = None) -> str:
    return pad(text, length, fill, PAD_LEFT)


@primitive("pad_right")
def pad_right(text: str, length: int, fill: str | None = None) -> str:
    return pad(text, length, fill, PAD_RIGHT)


@primitive("pad_both")
def pad_both(text: str, length: int, fill: str | None = None) -> str:
    return pad(text, length, fill, PAD_BOTH)


@primitive("append")
def append(text: str, other: str) -> str:
    return text + other


@primitive("prepend")
def prepend(text: str, other: str) -> str:
    return other + text


@primitive("insert")
def insert(text: str, position: int, other: str) -> str:
    return substr(text, 0, position) + other + substr(text, position)
