"""Template identifiers in the two addressing schemes of the template service.

Examples:
  - /demo-org/vpc-template        -> TemplatePath(org="demo-org", name="vpc-template")
  - /demo-org/vpc-template:3      -> same, pinned to revision 3
  - org="demo-org", "vpc-template:3" -> OrgTemplate(org="demo-org", name="vpc-template", revision=3)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional, Union
from urllib.parse import quote

from ..errors import ConfigError

_REVISION_RE = re.compile(r"^(?P<base>.+):(?P<revision>\d+)$")


def split_revision(value: str) -> tuple[str, Optional[int]]:
    """Split a trailing ``:<digits>`` revision suffix off ``value``."""
    m = _REVISION_RE.match(value)
    if m:
        return m.group("base"), int(m.group("revision"))
    return value, None


@dataclass(frozen=True)
class TemplatePath:
    """Opaque ``/<org>/<name>[:<rev>]`` identifier, org taken from the path."""

    org: str
    name: str
    revision: Optional[int] = None

    @property
    def is_pinned(self) -> bool:
        return self.revision is not None

    @property
    def unpinned_id(self) -> str:
        return f"/{self.org}/{self.name}"

    @property
    def template_id(self) -> str:
        if self.revision is None:
            return self.unpinned_id
        return f"{self.unpinned_id}:{self.revision}"

    def with_revision(self, revision: int) -> "TemplatePath":
        return replace(self, revision=revision)

    def detail_path(self) -> str:
        return f"/api/v1/templatetypes/IAC{quote(self.template_id, safe='/:')}"

    def __str__(self) -> str:
        return self.template_id


@dataclass(frozen=True)
class OrgTemplate:
    """Template addressed by an explicit organization plus ``<name>[:<rev>]``."""

    org: str
    name: str
    revision: Optional[int] = None

    @property
    def is_pinned(self) -> bool:
        return self.revision is not None

    @property
    def template_id(self) -> str:
        if self.revision is None:
            return f"{self.org}/{self.name}"
        return f"{self.org}/{self.name}:{self.revision}"

    def with_revision(self, revision: int) -> "OrgTemplate":
        return replace(self, revision=revision)

    def summary_path(self) -> str:
        return f"/api/v1/templatetypes/IAC/{quote(self.org)}/{quote(self.name)}/"

    def detail_path(self) -> str:
        if self.revision is None:
            return self.summary_path()
        return (
            f"/api/v1/templatetypes/IAC/{quote(self.org)}/"
            f"{quote(self.name)}:{self.revision}/"
        )

    def __str__(self) -> str:
        return self.template_id


TemplateRef = Union[TemplatePath, OrgTemplate]


def parse_template_path(value: str) -> TemplatePath:
    """Parse a slash-delimited template identifier.

    A missing leading slash is tolerated; the first segment is the org.
    """
    raw = value.strip()
    base, revision = split_revision(raw)
    parts = base.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(
            f"Invalid template id {value!r}: expected /<org>/<name>[:<revision>]"
        )
    org, name = parts
    return TemplatePath(org=org, name=name, revision=revision)


def parse_template_ref(template_id: str, org: Optional[str] = None) -> TemplateRef:
    """Build a reference from configuration values.

    With ``org`` set the identifier is read as a template name in that org;
    otherwise it must be a full ``/<org>/<name>`` path.
    """
    if not template_id or not template_id.strip():
        raise ConfigError("Template id must not be empty")
    if not org:
        return parse_template_path(template_id)

    base, revision = split_revision(template_id.strip())
    name = base.strip("/")
    if not name or "/" in name:
        raise ConfigError(
            f"Invalid template name {template_id!r}: expected <name>[:<revision>] "
            f"when an org is given"
        )
    return OrgTemplate(org=org.strip(), name=name, revision=revision)
