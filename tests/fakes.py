"""In-memory stand-ins for the template service used across tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from tplsync.errors import InvalidRevision
from tplsync.remote import RevisionDetails, TemplateSummary


class FakeClient:
    """Records every call made by the sync engine."""

    def __init__(
        self,
        *,
        revisions: Optional[List[Dict[str, Any]]] = None,
        next_revision: Optional[int] = None,
        details: Optional[RevisionDetails] = None,
    ) -> None:
        self.revisions = revisions or []
        self.next_revision = next_revision
        self.details = details or RevisionDetails(
            template_id=None, is_public=False, long_description=None
        )
        self.calls: List[Tuple[str, str]] = []
        self.patches: List[Dict[str, Any]] = []

    def list_revisions(self, ref) -> List[Dict[str, Any]]:
        self.calls.append(("list", ref.template_id))
        return self.revisions

    def get_summary(self, org: str, name: str) -> TemplateSummary:
        self.calls.append(("summary", f"{org}/{name}"))
        assert self.next_revision is not None
        if self.next_revision - 1 < 0:
            raise InvalidRevision(f"NextRevision={self.next_revision}")
        return TemplateSummary(next_revision=self.next_revision)

    def get_revision(self, ref) -> RevisionDetails:
        self.calls.append(("get", ref.template_id))
        return self.details

    def patch_revision(self, ref, document: Dict[str, Any]) -> RevisionDetails:
        self.calls.append(("patch", ref.template_id))
        self.patches.append(document)
        return self.details
