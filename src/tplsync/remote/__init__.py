"""Remote template service access."""

from .client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    RevisionDetails,
    TemplateStoreClient,
    TemplateSummary,
)
from .refs import (
    OrgTemplate,
    TemplatePath,
    TemplateRef,
    parse_template_path,
    parse_template_ref,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "RevisionDetails",
    "TemplateStoreClient",
    "TemplateSummary",
    "OrgTemplate",
    "TemplatePath",
    "TemplateRef",
    "parse_template_path",
    "parse_template_ref",
]
