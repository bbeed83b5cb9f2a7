from __future__ import annotations

import pytest

from unistr import primitives
from unistr.config import Settings, use_settings
from unistr.errors import InvalidOperationError, StrIndexError


def test_semantic_table_resolves_to_registered_primitives() -> None:
    for operation, name in primitives.OPERATIONS.items():
        assert name in primitives.primitive_names(), operation
        assert primitives.resolve(operation) is primitives.resolve(name)


def test_resolve_unknown() -> None:
    with pytest.raises(InvalidOperationError):
        primitives.resolve("frobnicate")


def test_case_mapping_is_full_unicode() -> None:
    assert primitives.upper("straße") == "STRASSE"
    assert primitives.lower("ΣΑΣ") == "σας"


@pytest.mark.parametrize(
    ("start", "length", "expected"),
    [
        (0, 2, "ñá"),
        (2, None, "é😀"),
        (-1, None, "😀"),
        (-10, 1, "ñ"),
        (1, -1, "áé"),
        (3, -2, ""),
        (4, 1, ""),
        (0, 0, ""),
    ],
)
def test_substr(start: int, length: int | None, expected: str) -> None:
    assert primitives.substr("ñáé😀", start, length) == expected


def test_index_of_offsets() -> None:
    assert primitives.index_of("añaña", "ñ") == 1
    assert primitives.index_of("añaña", "ñ", 2) == 3
    assert primitives.index_of("añaña", "ñ", -2) == 3
    assert primitives.index_of("añaña", "", 5) == 5
    with pytest.raises(StrIndexError):
        primitives.index_of("añaña", "a", 6)
    with pytest.raises(StrIndexError):
        primitives.index_of("añaña", "a", -6)


def test_search_helpers() -> None:
    assert primitives.last_index_of("añaña", "ñ") == 3
    assert primitives.count("añaña", "ña") == 2
    assert primitives.starts_with("über", "üb")
    assert primitives.ends_with("über", "er")
    assert not primitives.contains("über", "x")
    with pytest.raises(ValueError):
        primitives.count("abc", "")


def test_pad_sides() -> None:
    assert primitives.pad("ü", 4, "-", primitives.PAD_LEFT) == "---ü"
    assert primitives.pad("ü", 4, "-", primitives.PAD_RIGHT) == "ü---"
    assert primitives.pad("ü", 4, "-", primitives.PAD_BOTH) == "-ü--"
    assert primitives.pad("üüü", 2, "-") == "üüü"


def test_pad_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        primitives.pad("a", 3, "")
    with pytest.raises(ValueError):
        primitives.pad("a", 3, "-", "middle")


def test_pad_default_fill_comes_from_settings() -> None:
    assert primitives.pad_left("7", 3) == "  7"
    use_settings(Settings(default_fill="0"))
    assert primitives.pad_left("7", 3) == "007"


def test_replace_rules() -> None:
    assert primitives.replace("aaa", "a", "b", 0) == "aaa"
    assert primitives.replace("aaa", "a", "bé", 2) == "bébéa"
    with pytest.raises(ValueError):
        primitives.replace("aaa", "a", "b", -1)


def test_format_positional_and_mapping() -> None:
    assert primitives.format("%s=%d", "ñ", 3) == "ñ=3"
    assert primitives.format("%(k)s!", {"k": "ü"}) == "ü!"
    with pytest.raises(TypeError):
        primitives.format("%s %s", "only-one")


def test_trim_repeat_reverse_split() -> None:
    assert primitives.trim("  ñ  ") == "ñ"
    assert primitives.trim_left("··x··", "·") == "x··"
    assert primitives.trim_right("··x··", "·") == "··x"
    assert primitives.repeat("é", 3) == "ééé"
    assert primitives.reverse("añ😀") == "😀ña"
    assert primitives.split("a b  c") == ["a", "b", "c"]
    assert primitives.split("a,b,c", ",", 1) == ["a", "b,c"]
    with pytest.raises(ValueError):
        primitives.repeat("a", -1)


def test_first_letter_case() -> None:
    assert primitives.first_to_upper("ñu") == "Ñu"
    assert primitives.first_to_lower("ÉTÉ") == "éTÉ"
    assert primitives.first_to_upper("") == ""


def test_concatenation_primitives() -> None:
    assert primitives.append("a", "é") == "aé"
    assert primitives.prepend("a", "é") == "éa"
    assert primitives.insert("日本", 1, "・") == "日・本"
    assert primitives.insert("日本", 9, "!") == "日本!"
