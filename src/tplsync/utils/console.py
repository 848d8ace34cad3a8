"""Shared rich consoles."""

from __future__ import annotations

from rich.console import Console

# soft_wrap keeps each message on one line in CI logs.
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
