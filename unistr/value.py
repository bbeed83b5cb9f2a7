"""The codepoint-aware string value.

`Str` keeps its text as a validated UTF-8 buffer and counts every index in
codepoints, so multi-byte characters are never split::

    >>> s = Str(b"caf\\xc3\\xa9", "UTF-8")
    >>> len(s), bytes(s[3])
    (4, b'\\xc3\\xa9')

Mutability follows `bytearray`: derivation operations (append, replace,
slice, pad, ...) return a new Str and leave the receiver alone, while
indexed assignment and deletion (`s[i] = x`, `del s[i]`) edit the receiver
in place. A Str is therefore unhashable, and it is not safe to share one
across threads without external locking.
"""

from __future__ import annotations

from typing import Any

from . import primitives
from .config import get_settings
from .cursor import StrCursor
from .encoding import CANONICAL, detect_encoding, transcode
from .errors import EncodingError, InvalidOperationError, StrIndexError
from .observability.logging import get_logger

__all__ = ["Str"]

_log = get_logger("unistr.value")

_RawText = bytes | bytearray | memoryview | str


def _coerce_text(value: Any) -> str:
    """Turn an operation argument into text.

    bytes are taken as UTF-8; anything else goes through str().
    """

    if isinstance(value, Str):
        return value.text
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(f"argument is not valid UTF-8: {e}", encoding=CANONICAL) from e
    return str(value)


def _coerce_arg(value: Any) -> Any:
    if isinstance(value, (Str, bytes, bytearray, memoryview)):
        return _coerce_text(value)
    return value


def _encode(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"text cannot be stored as UTF-8: {e}", encoding=CANONICAL) from e


def _check_index(index: Any) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Str indices must be integers, not {type(index).__name__}")
    return index


class Str:
    """A Unicode string value indexed by codepoint."""

    # `_text` mirrors `_buffer` so codepoint indexing never re-decodes.
    __slots__ = ("_buffer", "_encoding", "_text")

    def __init__(self, raw: _RawText | Str = b"", encoding: str | None = None):
        if isinstance(raw, (Str, str)) and encoding:
            raise TypeError("encoding only applies to bytes input; text is already decoded")

        if isinstance(raw, Str):
            self._buffer = raw._buffer
            self._text = raw._text
            self._encoding = raw._encoding
            return

        if isinstance(raw, str):
            self._buffer = _encode(raw)
            self._text = raw
            self._encoding = CANONICAL
            return

        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"Str expects bytes or str, not {type(raw).__name__}")
        data = bytes(raw)

        if not encoding:
            encoding = detect_encoding(data)
            if encoding is None:
                raise EncodingError(
                    "could not detect encoding; candidates were "
                    + ", ".join(get_settings().detect_order)
                )

        self._buffer = transcode(data, encoding)
        self._text = self._buffer.decode("utf-8")
        self._encoding = encoding

    @classmethod
    def new(cls, raw: _RawText | Str = b"", encoding: str | None = None) -> Str:
        return cls(raw, encoding)

    @classmethod
    def from_text(cls, text: str) -> Str:
        return cls(text)

    @property
    def buffer(self) -> bytes:
        """Canonical UTF-8 bytes."""
        return self._buffer

    @property
    def encoding(self) -> str:
        """Encoding label given (or detected) at construction."""
        return self._encoding

    @property
    def text(self) -> str:
        return self._text

    # -- dispatch ----------------------------------------------------------

    def call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Run a named primitive over this value.

        Textual results come back as new Str values (lists of text as lists
        of Str); anything else is returned unchanged.

        Raises:
            InvalidOperationError: If `operation` names no primitive.
        """

        try:
            fn = primitives.resolve(operation)
        except InvalidOperationError:
            _log.debug("operation_rejected", operation=operation)
            raise

        result = fn(
            self.text,
            *(_coerce_arg(a) for a in args),
            **{k: _coerce_arg(v) for k, v in kwargs.items()},
        )
        return self._wrap(result)

    @classmethod
    def _wrap(cls, result: Any) -> Any:
        if isinstance(result, str):
            return cls(result)
        if isinstance(result, list) and all(isinstance(item, str) for item in result):
            return [cls(item) for item in result]
        return result

    # -- named operations --------------------------------------------------

    def to_upper(self) -> Str:
        return self.call("toUpper")

    def to_lower(self) -> Str:
        return self.call("toLower")

    def length(self) -> int:
        return len(self.text)

    def slice(self, start: int, length: int | None = None) -> Str:  # noqa: A003
        return self.call("slice", start, length)

    def index_of(self, needle: Any, offset: int = 0) -> int:
        return self.call("indexOf", needle, offset)

    def find(self, needle: Any, before: bool = False) -> Str | None:
        return self.call("find", needle, before)

    def append(self, other: Any) -> Str:
        return Str(self.text + _coerce_text(other))

    def prepend(self, other: Any) -> Str:
        return Str(_coerce_text(other) + self.text)

    def insert(self, position: int, other: Any) -> Str:
        return self.call("insert", position, _coerce_text(other))

    def pad(self, length: int, fill: Any = None, side: str = primitives.PAD_RIGHT) -> Str:
        if fill is not None:
            fill = _coerce_text(fill)
        return self.call("pad", length, fill, side)

    def pad_left(self, length: int, fill: Any = None) -> Str:
        return self.pad(length, fill, primitives.PAD_LEFT)

    def pad_right(self, length: int, fill: Any = None) -> Str:
        return self.pad(length, fill, primitives.PAD_RIGHT)

    def pad_both(self, length: int, fill: Any = None) -> Str:
        return self.pad(length, fill, primitives.PAD_BOTH)

    def replace(self, old: Any, new: Any, count: int | None = None) -> Str:
        return self.call("replace", _coerce_text(old), _coerce_text(new), count)

    def format(self, *args: Any) -> Str:  # noqa: A003
        return self.call("format", *args)

    def first_to_upper(self) -> Str:
        return self.slice(0, 1).to_upper().append(self.slice(1))

    # -- indexed access ----------------------------------------------------

    def exists(self, index: int) -> bool:
        index = _check_index(index)
        return 0 <= index < len(self)

    def _require(self, index: int) -> int:
        if not self.exists(index):
            raise StrIndexError(index, len(self))
        return index

    def get(self, index: int) -> Str:
        index = self._require(index)
        return Str(self.text[index])

    def set(self, index: int, value: Any) -> None:  # noqa: A003
        """Replace the codepoint at `index` with `value`, in place."""

        index = self._require(index)
        replacement = _coerce_text(value)
        text = self._text
        self._store(text[:index] + replacement + text[index + 1 :])

    def unset(self, index: int) -> None:
        """Remove the codepoint at `index`, in place."""

        index = self._require(index)
        text = self._text
        self._store(text[:index] + text[index + 1 :])

    def _store(self, text: str) -> None:
        # Encode first so a failure leaves both fields untouched.
        self._buffer = _encode(text)
        self._text = text

    def __getitem__(self, index: int) -> Str:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        self.unset(index)

    # -- iteration ---------------------------------------------------------

    def cursor(self) -> StrCursor:
        return StrCursor(self)

    def __iter__(self) -> StrCursor:
        cur = StrCursor(self)
        cur.rewind()
        return cur

    # -- stringification and comparison ------------------------------------

    def __bytes__(self) -> bytes:
        return self._buffer

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Str({self.text!r}, encoding={self._encoding!r})"

    def __len__(self) -> int:
        return len(self.text)

    def __contains__(self, needle: Any) -> bool:
        return _coerce_text(needle) in self.text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Str):
            return self._buffer == other._buffer
        if isinstance(other, str):
            return self.text == other
        if isinstance(other, (bytes, bytearray)):
            return self._buffer == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Any) -> Str:
        if not isinstance(other, (Str, str, bytes, bytearray)):
            return NotImplemented
        return self.append(other)

    def __radd__(self, other: Any) -> Str:
        if not isinstance(other, (str, bytes, bytearray)):
            return NotImplemented
        return self.prepend(other)
