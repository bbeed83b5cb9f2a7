"""Encoding resolution and transcoding to the canonical UTF-8 buffer."""

from __future__ import annotations

import codecs
from typing import Iterable

from .config import get_settings
from .errors import EncodingError
from .observability.logging import get_logger

__all__ = ["CANONICAL", "detect_encoding", "resolve_encoding", "transcode"]

CANONICAL = "UTF-8"

_log = get_logger("unistr.encoding")


def resolve_encoding(label: str) -> codecs.CodecInfo:
    if not isinstance(label, str) or not label.strip():
        raise EncodingError("encoding label must be a non-empty string")
    try:
        return codecs.lookup(label)
    except LookupError as e:
        raise EncodingError("unknown encoding", encoding=label) from e


def _decodes_as(raw: bytes, label: str) -> bool:
    try:
        raw.decode(resolve_encoding(label).name, "strict")
    except (UnicodeDecodeError, LookupError):
        return False
    return True


def detect_encoding(raw: bytes, candidates: Iterable[str] | None = None) -> str | None:
    """Return the first candidate label under which `raw` decodes strictly.

    Best effort only: short inputs are frequently valid in several encodings,
    so order the candidates from most to least restrictive. Returns None when
    no candidate fits.
    """

    order = tuple(candidates) if candidates is not None else get_settings().detect_order
    for label in order:
        if _decodes_as(raw, label):
            _log.debug("encoding_detected", encoding=label, size=len(raw))
            return label
    _log.debug("encoding_undetected", candidates=list(order), size=len(raw))
    return None


def transcode(raw: bytes, encoding: str) -> bytes:
    """Decode `raw` from `encoding` and re-encode it as canonical UTF-8."""

    codec = resolve_encoding(encoding)
    try:
        text = raw.decode(codec.name, "strict")
        return text.encode("utf-8", "strict")
    except (UnicodeError, LookupError) as e:
        _log.debug("transcode_failed", encoding=encoding, reason=str(e))
        raise EncodingError(f"cannot transcode to {CANONICAL}: {e}", encoding=encoding) from e
