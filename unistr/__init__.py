"""unistr: codepoint-aware string values over a canonical UTF-8 buffer."""

from __future__ import annotations

from .config import Settings, get_settings, load_settings, use_settings
from .cursor import StrCursor
from .errors import ConfigError, EncodingError, InvalidOperationError, StrIndexError, UnistrError
from .primitives import PAD_BOTH, PAD_LEFT, PAD_RIGHT
from .value import Str

__all__ = [
    "__version__",
    "ConfigError",
    "EncodingError",
    "InvalidOperationError",
    "PAD_BOTH",
    "PAD_LEFT",
    "PAD_RIGHT",
    "Settings",
    "Str",
    "StrCursor",
    "StrIndexError",
    "UnistrError",
    "get_settings",
    "load_settings",
    "use_settings",
]

__version__ = "0.1.0"
