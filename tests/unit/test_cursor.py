from __future__ import annotations

import pytest

from unistr import Str, StrCursor


def _walk(cur: StrCursor) -> list[tuple[int, str]]:
    out: list[tuple[int, str]] = []
    cur.rewind()
    while cur.valid():
        out.append((cur.key(), str(cur.current())))
        cur.next()
    return out


def test_traversal_matches_sequential_indexing() -> None:
    s = Str("abc")
    cur = s.cursor()
    assert _walk(cur) == [(0, "a"), (1, "b"), (2, "c")]
    assert not cur.valid()


def test_rewind_restarts_traversal() -> None:
    cur = Str("añ😀").cursor()
    first = _walk(cur)
    second = _walk(cur)
    assert first == second == [(0, "a"), (1, "ñ"), (2, "😀")]


def test_python_iteration() -> None:
    s = Str("héllo")
    assert [str(c) for c in s] == ["h", "é", "l", "l", "o"]
    assert [str(c) for c in s] == ["h", "é", "l", "l", "o"]


def test_independent_cursors() -> None:
    s = Str("xyz")
    a = iter(s)
    b = iter(s)
    assert str(next(a)) == "x"
    assert str(next(a)) == "y"
    assert str(next(b)) == "x"
    assert a.key() == 2
    assert b.key() == 1


def test_cursor_sees_in_place_edits() -> None:
    s = Str("abcd")
    cur = iter(s)
    next(cur)
    del s[3]
    assert [str(c) for c in cur] == ["b", "c"]


def test_cursor_requires_rewind() -> None:
    cur = StrCursor(Str("a"))
    with pytest.raises(RuntimeError):
        cur.valid()
    with pytest.raises(RuntimeError):
        cur.key()


def test_empty_value_is_never_valid() -> None:
    cur = Str("").cursor()
    cur.rewind()
    assert not cur.valid()
    assert list(Str("")) == []


def test_long_traversal_visits_every_codepoint() -> None:
    s = Str("é" * 20000)
    assert sum(1 for _ in s) == 20000
