"""Configuration management for tplsync."""

from .settings import DEFAULT_BASE_PATH, SerializationMode, SyncConfig

__all__ = ["DEFAULT_BASE_PATH", "SerializationMode", "SyncConfig"]
