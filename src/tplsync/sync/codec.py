"""Conversion between the remote revision payload and the local file set.

Remote side: ``LongDescription`` plus ``InputSchemas[0]`` carrying
``encodedData`` (input schema) and ``uiSchemaData`` (UI schema), each a
base64-encoded JSON document.

Local side, under the base path:

    documentation.md
    schema.json | schema.yaml
    ui.json     | ui.yaml

The extension pair follows the serialization mode the caller passes in.
Nothing here looks at file contents or extensions to guess the format.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..config import SerializationMode
from ..errors import CodecError, LocalIOError, MissingInput
from ..remote import RevisionDetails
from ..utils import atomic_write_text, console, read_text_if_exists

logger = logging.getLogger(__name__)

DOCUMENTATION_FILE = "documentation.md"
SCHEMA_STEM = "schema"
UI_STEM = "ui"
SCHEMA_TYPE = "FORM_JSONSCHEMA"

# (remote field, local file stem)
SCHEMA_SLOTS: Tuple[Tuple[str, str], ...] = (
    ("encodedData", SCHEMA_STEM),
    ("uiSchemaData", UI_STEM),
)


@dataclass(frozen=True)
class LocalLayout:
    """Paths of the local template files for one serialization mode."""

    base_path: Path
    mode: SerializationMode = SerializationMode.JSON

    @property
    def documentation_path(self) -> Path:
        return self.base_path / DOCUMENTATION_FILE

    def slot_path(self, stem: str) -> Path:
        return self.base_path / f"{stem}.{self.mode.extension}"

    @property
    def schema_path(self) -> Path:
        return self.slot_path(SCHEMA_STEM)

    @property
    def ui_path(self) -> Path:
        return self.slot_path(UI_STEM)

    def require_push_inputs(self) -> None:
        """Raise MissingInput unless both schema files are present."""
        try:
            if not self.base_path.is_dir():
                raise MissingInput(f"Base path {self.base_path} does not exist")
            for path in (self.schema_path, self.ui_path):
                if not path.is_file():
                    raise MissingInput(f"{path} not found")
        except OSError as exc:
            raise LocalIOError(f"Cannot inspect {self.base_path}: {exc}") from exc


@dataclass
class DecodeResult:
    written: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def dump_document(data: Any, mode: SerializationMode) -> str:
    """Pretty-print ``data`` in the local format, keeping key order."""
    if mode is SerializationMode.YAML:
        return yaml.safe_dump(
            data, sort_keys=False, default_flow_style=False, allow_unicode=True
        )
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def load_document(text: str, mode: SerializationMode, source: str = "<document>") -> Any:
    try:
        if mode is SerializationMode.YAML:
            return yaml.safe_load(text)
        return json.loads(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise CodecError(f"Malformed {mode.value.upper()} in {source}: {exc}") from exc


def decode_payload(encoded: str, mode: SerializationMode, source: str = "<payload>") -> str:
    """Turn a base64 JSON payload into the text of a local schema file."""
    # The service may hand back line-wrapped base64.
    compact = "".join(encoded.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CodecError(f"Malformed base64 in {source}: {exc}") from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CodecError(f"{source} is not UTF-8 text: {exc}") from exc

    data = load_document(text, SerializationMode.JSON, source)
    return dump_document(data, mode)


def encode_payload(text: str, mode: SerializationMode, source: str = "<file>") -> str:
    """Turn the text of a local schema file into a base64 JSON payload.

    JSON files are validated and sent byte for byte; YAML files are
    converted to JSON first.
    """
    data = load_document(text, mode, source)
    if mode is SerializationMode.YAML:
        text = dump_document(data, SerializationMode.JSON)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_revision(details: RevisionDetails, layout: LocalLayout) -> DecodeResult:
    """Write the documentation and schema pair of ``details`` under ``layout``.

    Every payload is decoded before anything is written, so a malformed
    slot leaves all local files untouched. Empty fields are skipped and the
    corresponding files are left as they are. Files whose content already
    matches are not rewritten.
    """
    result = DecodeResult()
    pending: List[Tuple[Path, str]] = []

    description = details.long_description
    if description:
        logger.debug("LongDescription: %s", description[:200])
        pending.append((layout.documentation_path, description))
    else:
        console.print(
            f"No LongDescription found, {DOCUMENTATION_FILE} not updated",
            style="yellow",
        )
        result.skipped.append(DOCUMENTATION_FILE)

    pair = details.schema_pair
    for field_name, stem in SCHEMA_SLOTS:
        target = layout.slot_path(stem)
        encoded = pair.get(field_name)
        if not encoded:
            console.print(
                f"No {field_name} found in InputSchemas[0], {target.name} not updated",
                style="yellow",
                markup=False,
            )
            result.skipped.append(target.name)
            continue
        logger.debug("%s length: %d", field_name, len(encoded))
        pending.append((target, decode_payload(str(encoded), layout.mode, field_name)))

    try:
        layout.base_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LocalIOError(f"Cannot create {layout.base_path}: {exc}") from exc
    for path, content in pending:
        if _is_current(path, content):
            console.print(f"Unchanged {path}", markup=False)
            result.unchanged.append(path)
            continue
        try:
            atomic_write_text(path, content)
        except OSError as exc:
            raise LocalIOError(f"Cannot write {path}: {exc}") from exc
        console.print(f"Saved {path}", markup=False)
        result.written.append(path)
    return result


def _is_current(path: Path, content: str) -> bool:
    try:
        return read_text_if_exists(path) == content
    except (OSError, UnicodeDecodeError):
        return False


def _read_local(path: Path) -> str | None:
    try:
        return read_text_if_exists(path)
    except UnicodeDecodeError as exc:
        raise CodecError(f"{path} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise LocalIOError(f"Cannot read {path}: {exc}") from exc


def encode_local(layout: LocalLayout) -> Dict[str, Any]:
    """Build the partial update document for the files under ``layout``.

    ``LongDescription`` is left out entirely when documentation.md is
    missing, so the remote description is kept.
    """
    schema_entry: Dict[str, Any] = {"type": SCHEMA_TYPE}
    for field_name, stem in SCHEMA_SLOTS:
        path = layout.slot_path(stem)
        text = _read_local(path)
        if text is None:
            raise MissingInput(f"{path} not found")
        schema_entry[field_name] = encode_payload(text, layout.mode, str(path))
        logger.debug(
            "Read and encoded %s (%d characters)", path, len(schema_entry[field_name])
        )

    document: Dict[str, Any] = {}
    description = _read_local(layout.documentation_path)
    if description is None:
        console.print(
            f"Warning: {layout.documentation_path} not found",
            style="yellow",
            markup=False,
        )
    else:
        logger.debug("Read %s (%d characters)", DOCUMENTATION_FILE, len(description))
        document["LongDescription"] = description
    document["InputSchemas"] = [schema_entry]
    return document
