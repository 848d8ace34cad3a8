"""Pull and push of a single template revision."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import SyncConfig
from ..errors import ImmutableRevision
from ..remote import TemplateRef, TemplateStoreClient
from ..utils import console
from .codec import LocalLayout, decode_revision, encode_local
from .resolver import resolve_revision

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of a completed pull or push.

    ``written`` holds the local files a pull rewrote, or the files sent by a
    push. ``unchanged`` holds pulled files whose content already matched and
    ``skipped`` names the files left alone because the remote field was empty.
    """

    template_id: str
    written: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.written)


class TemplateSync:
    """Runs pull/push for the template named in ``config``.

    Every step either completes or raises; nothing is retried. Progress
    messages go to ``progress``, the shared stdout console by default.
    """

    def __init__(
        self,
        config: SyncConfig,
        client: Optional[TemplateStoreClient] = None,
        progress: Optional[Console] = None,
    ) -> None:
        self.config = config
        self.progress = progress or console
        self.client = client or TemplateStoreClient(
            config.base_url, config.token, timeout=config.timeout
        )
        self.layout = LocalLayout(config.base_path, config.mode)

    def resolve(self) -> TemplateRef:
        ref = self.config.ref
        if ref.is_pinned:
            self.progress.print("Revision specified in template id, using it directly.")
            return ref
        self.progress.print("Revision not specified in template id, resolving latest...")
        pinned = resolve_revision(ref, self.client)
        logger.debug("Resolved %s -> %s", ref, pinned)
        return pinned

    def pull(self) -> SyncResult:
        """Fetch the latest (or pinned) revision into the local files."""
        self.progress.print("Running template pull...")
        ref = self.resolve()
        self.progress.print(f"Using TemplateId: {ref}", markup=False)

        details = self.client.get_revision(ref)
        decoded = decode_revision(details, self.layout)

        self.progress.print("Template pull completed successfully", style="green")
        return SyncResult(
            template_id=ref.template_id,
            written=decoded.written,
            unchanged=decoded.unchanged,
            skipped=decoded.skipped,
        )

    def push(self) -> SyncResult:
        """Patch the target revision with the local files.

        Raises ImmutableRevision, without patching, when the revision is
        already published.
        """
        self.progress.print("Running template push...")
        # Checked before any request so a broken checkout never reaches the service.
        self.layout.require_push_inputs()

        ref = self.resolve()
        self.progress.print(f"Using TemplateId: {ref}", markup=False)

        self.progress.print("Validating template status...")
        details = self.client.get_revision(ref)
        if details.is_public:
            raise ImmutableRevision(
                f"Cannot update a published template revision: {ref}"
            )
        self.progress.print("Template is not published. Proceeding with update.")

        self.progress.print(
            f"Preparing template data from {self.layout.base_path}", markup=False
        )
        document = encode_local(self.layout)
        self.client.patch_revision(ref, document)

        self.progress.print("Template push completed successfully", style="green")
        written = [self.layout.schema_path, self.layout.ui_path]
        skipped: List[str] = []
        if "LongDescription" in document:
            written.insert(0, self.layout.documentation_path)
        else:
            skipped.append(self.layout.documentation_path.name)
        return SyncResult(template_id=ref.template_id, written=written, skipped=skipped)
