from __future__ import annotations

from collections.abc import Iterator

import pytest

from unistr.config import get_settings, use_settings


@pytest.fixture(autouse=True)
def _restore_settings() -> Iterator[None]:
    previous = get_settings()
    yield
    use_settings(previous)
