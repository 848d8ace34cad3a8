"""Resolve template references to a concrete revision."""

from __future__ import annotations

import logging

from ..errors import ConfigError, ResolutionError
from ..remote import (
    OrgTemplate,
    TemplatePath,
    TemplateRef,
    TemplateStoreClient,
    parse_template_path,
)

logger = logging.getLogger(__name__)


def _latest_from_list(ref: TemplatePath, client: TemplateStoreClient) -> TemplatePath:
    revisions = client.list_revisions(ref)
    logger.debug("Template list for %s has %d entries", ref, len(revisions))
    if not revisions:
        raise ResolutionError(f"Could not determine latest TemplateId for {ref}")

    latest = revisions[-1]
    latest_id = latest.get("TemplateId") if isinstance(latest, dict) else None
    if not latest_id or latest_id == "null":
        raise ResolutionError(f"Could not determine latest TemplateId for {ref}")

    try:
        resolved = parse_template_path(str(latest_id))
    except ConfigError as exc:
        raise ResolutionError(
            f"Latest TemplateId {latest_id!r} for {ref} is malformed: {exc}"
        ) from exc
    if resolved.revision is None or resolved.revision < 0:
        raise ResolutionError(
            f"Latest TemplateId {latest_id!r} for {ref} does not name a revision"
        )
    return resolved


def _latest_from_summary(ref: OrgTemplate, client: TemplateStoreClient) -> OrgTemplate:
    summary = client.get_summary(ref.org, ref.name)
    latest = summary.latest_revision
    logger.debug("NextRevision for %s is %d", ref, summary.next_revision)
    if latest < 0:
        raise ResolutionError(
            f"Template {ref} has no revisions (NextRevision={summary.next_revision})"
        )
    return ref.with_revision(latest)


def resolve_revision(ref: TemplateRef, client: TemplateStoreClient) -> TemplateRef:
    """Return ``ref`` pinned to a revision.

    Pinned references come back unchanged without touching the network.
    Otherwise the latest revision is looked up: the last entry of the
    revision list for slash-delimited ids, or ``NextRevision - 1`` for
    org + name references.
    """
    if ref.is_pinned:
        return ref
    if isinstance(ref, TemplatePath):
        return _latest_from_list(ref, client)
    return _latest_from_summary(ref, client)
