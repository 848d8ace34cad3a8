"""Synchronization logic for tplsync."""

from .codec import LocalLayout, decode_revision, encode_local
from .orchestrator import SyncResult, TemplateSync
from .resolver import resolve_revision

__all__ = [
    "LocalLayout",
    "decode_revision",
    "encode_local",
    "SyncResult",
    "TemplateSync",
    "resolve_revision",
]
