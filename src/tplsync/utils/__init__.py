"""Utility modules for tplsync."""

from .console import console, err_console
from .filesystem import atomic_write_text, read_text_if_exists
from .logs import configure_logging, mask_secret, preview

__all__ = [
    "console",
    "err_console",
    "atomic_write_text",
    "read_text_if_exists",
    "configure_logging",
    "mask_secret",
    "preview",
]
