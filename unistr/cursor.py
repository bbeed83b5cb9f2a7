from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value import Str


class StrCursor:
    """Codepoint cursor over a Str.

    The cursor only references the value; several cursors may walk the same
    Str independently. Bounds are re-checked against the value on every step,
    so in-place edits made mid-traversal are observed.

    Supports both the explicit protocol (rewind/valid/current/key/next) and
    Python iteration::

        cur = StrCursor(s)
        cur.rewind()
        while cur.valid():
            print(cur.key(), cur.current())
            cur.next()
    """

    __slots__ = ("_value", "_index")

    def __init__(self, value: Str):
        self._value = value
        self._index: int | None = None

    def _position(self) -> int:
        if self._index is None:
            raise RuntimeError("cursor used before rewind()")
        return self._index

    def rewind(self) -> None:
        self._index = 0

    def valid(self) -> bool:
        return self._value.exists(self._position())

    def current(self) -> Str:
        return self._value.get(self._position())

    def key(self) -> int:
        return self._position()

    def next(self) -> None:  # noqa: A003
        self._index = self._position() + 1

    def __iter__(self) -> StrCursor:
        return self

    def __next__(self) -> Str:
        if self._index is None:
            self.rewind()
        if not self.valid():
            raise StopIteration
        item = self.current()
        self.next()
        return item
