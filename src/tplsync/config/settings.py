"""Runtime configuration for a single pull or push.

Values come from CLI flags, which fall back to the same environment
variables the CI workflow exports (SG_TOKEN, SG_TEMPLATE_ID, ...).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..errors import ConfigError
from ..remote import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, TemplateRef, parse_template_ref

DEFAULT_BASE_PATH = ".sg"

_TRUTHY = ("1", "true", "yes", "on")


class SerializationMode(str, Enum):
    """Format of the local schema files."""

    JSON = "json"
    YAML = "yaml"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class SyncConfig:
    token: str
    ref: TemplateRef
    base_url: str = DEFAULT_BASE_URL
    base_path: Path = Path(DEFAULT_BASE_PATH)
    mode: SerializationMode = SerializationMode.JSON
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @classmethod
    def build(
        cls,
        *,
        token: Optional[str],
        template_id: Optional[str],
        org: Optional[str] = None,
        base_url: Optional[str] = None,
        base_path: Optional[str | Path] = None,
        use_yaml: bool = False,
        timeout: Optional[float] = None,
        debug: bool = False,
    ) -> "SyncConfig":
        """Validate raw settings and return a config.

        Raises ConfigError naming every missing required setting.
        """
        if not token or not template_id:
            required = (("SG_TOKEN", token), ("SG_TEMPLATE_ID", template_id))
            missing = " ".join(name for name, value in required if not value)
            raise ConfigError(f"Missing required environment variables: {missing}")

        if timeout is not None and timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {timeout}")

        return cls(
            token=token,
            ref=parse_template_ref(template_id, org),
            base_url=(base_url or DEFAULT_BASE_URL).rstrip("/"),
            base_path=Path(base_path or DEFAULT_BASE_PATH),
            mode=SerializationMode.YAML if use_yaml else SerializationMode.JSON,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            debug=debug,
        )

    @classmethod
    def from_env(cls, *, use_yaml: Optional[bool] = None) -> "SyncConfig":
        """Build a config from SG_* environment variables."""
        raw_timeout = os.getenv("SG_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError:
            raise ConfigError(f"SG_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if use_yaml is None:
            use_yaml = os.getenv("SG_USE_YAML", "").strip().lower() in _TRUTHY
        return cls.build(
            token=os.getenv("SG_TOKEN"),
            template_id=os.getenv("SG_TEMPLATE_ID"),
            org=os.getenv("SG_ORG_ID"),
            base_url=os.getenv("SG_BASE_URL"),
            base_path=os.getenv("SG_BASE_PATH"),
            use_yaml=use_yaml,
            timeout=timeout,
            debug=os.getenv("DEBUG", "").strip().lower() in _TRUTHY,
        )
