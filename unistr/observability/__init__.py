from __future__ import annotations

from .logging import KVLogger, configure_logging, get_logger

__all__ = ["KVLogger", "configure_logging", "get_logger"]
