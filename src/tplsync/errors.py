"""Error types raised by tplsync.

Every error is fatal to the current pull/push; the CLI reports the message
and exits non-zero.
"""

from __future__ import annotations

from typing import Optional


class TemplateSyncError(Exception):
    """Base class for all template sync failures."""


class ConfigError(TemplateSyncError):
    """Raise when required configuration is missing or malformed"""


class RemoteError(TemplateSyncError):
    """Raise when the template service rejects a call or returns an error body"""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ResolutionError(TemplateSyncError):
    """Raise when the latest revision of a template cannot be determined"""


class InvalidRevision(ResolutionError):
    """Raise when the service reports a revision counter below zero"""


class ImmutableRevision(TemplateSyncError):
    """Raise when a push targets a published revision"""


class MissingInput(TemplateSyncError):
    """Raise when a local file required for push is absent"""


class CodecError(TemplateSyncError):
    """Raise when a payload is not valid base64, JSON or YAML"""


class LocalIOError(TemplateSyncError):
    """Raise when a local template file cannot be read or written"""
