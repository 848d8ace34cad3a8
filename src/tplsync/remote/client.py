"""HTTP client for the StackGuardian template service.

Wraps the four endpoints the sync engine needs (list revisions, revision
summary, revision detail, partial update) and turns every failure shape the
service produces into a ``RemoteError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..errors import InvalidRevision, RemoteError
from ..utils import mask_secret, preview
from .refs import OrgTemplate, TemplatePath, TemplateRef

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.app.stackguardian.io"
DEFAULT_TIMEOUT = 30.0
LIST_REVISIONS_PATH = "/api/v1/templatetypes/IAC/templates/listall/"


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass
class RevisionDetails:
    """The parts of a template revision the sync engine reads."""

    template_id: Optional[str]
    is_public: bool
    long_description: Optional[str]
    input_schemas: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_msg(cls, msg: Dict[str, Any]) -> "RevisionDetails":
        schemas = msg.get("InputSchemas") or []
        if not isinstance(schemas, list):
            raise RemoteError(
                f"Unexpected InputSchemas value in response: {type(schemas).__name__}"
            )
        return cls(
            template_id=msg.get("TemplateId"),
            is_public=_as_bool(msg.get("IsPublic", False)),
            long_description=msg.get("LongDescription"),
            input_schemas=[s for s in schemas if isinstance(s, dict)],
        )

    @property
    def schema_pair(self) -> Dict[str, Any]:
        """Return ``InputSchemas[0]`` or an empty dict."""
        return self.input_schemas[0] if self.input_schemas else {}


@dataclass(frozen=True)
class TemplateSummary:
    next_revision: int

    @property
    def latest_revision(self) -> int:
        return self.next_revision - 1


class TemplateStoreClient:
    """Authenticated access to template revisions.

    Every request carries the API key and the ``x-sg-orgid`` header for the
    organization that owns the template.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, org: str) -> Dict[str, str]:
        return {
            "Authorization": f"apikey {self.token}",
            "x-sg-orgid": org,
            "Accept": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        org: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        require_msg: bool = True,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._headers(org)
        logger.debug("%s %s", method, url)
        logger.debug(
            "Headers: Authorization: apikey %s, x-sg-orgid: %s",
            mask_secret(self.token),
            org,
        )
        if body is not None:
            headers["Content-Type"] = "application/json"
            logger.debug("Request body: %s", preview(json.dumps(body)))

        try:
            resp = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteError(f"Request to {url} failed: {exc}") from exc

        logger.debug(
            "Response %s: %s", resp.status_code, preview(resp.text or "")
        )
        return self._unwrap(resp, url, require_msg)

    def _unwrap(
        self, resp: requests.Response, url: str, require_msg: bool = True
    ) -> Any:
        try:
            data = resp.json()
        except ValueError:
            data = None

        # The service reports some failures with a 200 status and an
        # ``errors`` field, so the body is checked before the status code.
        if isinstance(data, dict):
            errors = data.get("errors")
            if errors is not None and errors is not False:
                message = errors if isinstance(errors, str) else json.dumps(errors)
                raise RemoteError(message, status_code=resp.status_code)

        if resp.status_code is None or resp.status_code >= 300:
            if isinstance(data, dict) and data.get("message"):
                detail = str(data["message"])
            else:
                detail = (resp.text or "")[:200]
            raise RemoteError(
                f"Template service error {resp.status_code} for {url}: {detail}",
                status_code=resp.status_code,
            )

        if not require_msg and not (isinstance(data, dict) and "msg" in data):
            # A 2xx without a body (204) or without ``msg`` still succeeded.
            return None
        if not isinstance(data, dict):
            raise RemoteError(
                f"Template service returned a non-JSON response for {url}",
                status_code=resp.status_code,
            )
        if "msg" not in data:
            raise RemoteError(
                f"Template service response for {url} has no 'msg' field",
                status_code=resp.status_code,
            )
        return data["msg"]

    def list_revisions(self, ref: TemplatePath) -> List[Dict[str, Any]]:
        """Return revision descriptors for ``ref``, oldest first."""
        msg = self._request(
            "GET",
            LIST_REVISIONS_PATH,
            ref.org,
            params={"TemplateId": ref.unpinned_id},
        )
        if msg is None:
            return []
        if not isinstance(msg, list):
            raise RemoteError(
                f"Unexpected revision list for {ref.unpinned_id}: {type(msg).__name__}"
            )
        return msg

    def get_summary(self, org: str, name: str) -> TemplateSummary:
        """Return the revision counter of ``org``/``name``."""
        ref = OrgTemplate(org=org, name=name)
        msg = self._request("GET", ref.summary_path(), org)
        raw = msg.get("NextRevision") if isinstance(msg, dict) else None
        try:
            next_revision = int(raw)
        except (TypeError, ValueError):
            raise InvalidRevision(
                f"Template {org}/{name} reports no usable NextRevision: {raw!r}"
            ) from None
        summary = TemplateSummary(next_revision=next_revision)
        if summary.latest_revision < 0:
            raise InvalidRevision(
                f"Template {org}/{name} has no revisions (NextRevision={next_revision})"
            )
        return summary

    def get_revision(self, ref: TemplateRef) -> RevisionDetails:
        msg = self._request("GET", ref.detail_path(), ref.org)
        if not isinstance(msg, dict):
            raise RemoteError(f"Unexpected revision details for {ref}")
        return RevisionDetails.from_msg(msg)

    def patch_revision(
        self, ref: TemplateRef, document: Dict[str, Any]
    ) -> RevisionDetails:
        """Partially update ``ref``; fields absent from ``document`` are kept."""
        msg = self._request(
            "PATCH", ref.detail_path(), ref.org, body=document, require_msg=False
        )
        if isinstance(msg, dict):
            return RevisionDetails.from_msg(msg)
        # A plain status message or an empty body carries no revision details.
        return RevisionDetails(
            template_id=ref.template_id,
            is_public=False,
            long_description=document.get("LongDescription"),
            input_schemas=list(document.get("InputSchemas", [])),
        )
