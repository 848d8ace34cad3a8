"""Debug logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import err_console


def configure_logging(debug: bool = False) -> None:
    """Route tplsync log records to stderr through rich.

    Only warnings are shown unless ``debug`` is set.
    """
    handler = RichHandler(
        console=err_console,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("tplsync")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def mask_secret(value: str, visible: int = 5) -> str:
    """Return ``value`` truncated for log output, e.g. ``abcde... (masked)``."""
    if not value:
        return ""
    return f"{value[:visible]}... (masked)"


def preview(text: str, limit: int = 200) -> str:
    """Return the first ``limit`` characters of ``text`` for debug traces."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
