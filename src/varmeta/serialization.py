"""JSON serialization of variable metadata records.

The output document is defined explicitly by ``OUTPUT_SCHEMA``: each entry
maps an output key to a ``VariableMetadata`` field. Value-label mappings are
written as objects keyed by the string form of each integer code, so the
placeholder becomes ``{"0": ""}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from varmeta.models.metadata import VariableMetadata

OUTPUT_SCHEMA: tuple[tuple[str, str], ...] = (
    ("Variable Indices", "indices"),
    ("Number of Variables", "count"),
    ("Variable Names", "names"),
    ("Variable Labels", "labels"),
    ("Value Label Names", "value_label_set_names"),
    ("Value Labels", "value_label_sets"),
    ("Is String Variable Indicators", "is_string"),
)
"""Output key and source field, in document order."""


class SerializationError(ValueError):
    """Raised when a document cannot be turned back into a record."""


def metadata_to_document(record: VariableMetadata) -> dict[str, Any]:
    """Map a record onto the output schema.

    Returns a new dict of plain JSON types; the record is not modified.
    """
    doc: dict[str, Any] = {}
    for key, field in OUTPUT_SCHEMA:
        value = getattr(record, field)
        if field == "value_label_sets":
            value = [{str(code): label for code, label in labels.items()} for labels in value]
        elif isinstance(value, tuple):
            value = list(value)
        doc[key] = value
    return doc


def metadata_to_json(record: VariableMetadata, indent: int | None = None) -> str:
    return json.dumps(metadata_to_document(record), indent=indent, ensure_ascii=False)


def _parse_codes(labels: Any, position: int) -> dict[int, str]:
    """Convert string codes back to ints.

    Only the canonical decimal form written by ``metadata_to_document`` is
    accepted, so two keys can never collapse onto the same code
    (``"1"`` and ``"01"`` would otherwise both become 1).
    """
    if not isinstance(labels, dict):
        raise SerializationError(f"Value Labels entry {position} is not an object")
    parsed: dict[int, str] = {}
    for code, label in labels.items():
        try:
            int_code = int(code)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Value Labels entry {position} has non-integer code {code!r}"
            ) from e
        if str(int_code) != code:
            raise SerializationError(
                f"Value Labels entry {position} has non-canonical code {code!r}"
            )
        parsed[int_code] = label
    return parsed


def metadata_from_document(doc: dict[str, Any]) -> VariableMetadata:
    """Rebuild a record from a document produced by ``metadata_to_document``.

    Values are validated strictly: no coercion of strings or floats to
    integers, or of strings and integers to booleans.

    Raises:
        SerializationError: If a key is missing or the content is invalid.
    """
    if not isinstance(doc, dict):
        raise SerializationError("Metadata document must be a JSON object")

    missing = [key for key, _ in OUTPUT_SCHEMA if key not in doc]
    if missing:
        raise SerializationError(f"Metadata document is missing keys: {', '.join(missing)}")

    fields: dict[str, Any] = {}
    for key, field in OUTPUT_SCHEMA:
        value = doc[key]
        if field == "count":
            fields[field] = value
            continue
        if not isinstance(value, list):
            raise SerializationError(f"{key} must be an array")
        if field == "value_label_sets":
            value = [_parse_codes(labels, i) for i, labels in enumerate(value)]
        fields[field] = tuple(value)

    try:
        return VariableMetadata.model_validate(fields, strict=True)
    except ValidationError as e:
        raise SerializationError(f"Invalid metadata document: {e}") from e


def metadata_from_json(text: str) -> VariableMetadata:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Metadata document is not valid JSON: {e}") from e
    return metadata_from_document(doc)


def write_metadata_json(record: VariableMetadata, output_path: Path, indent: int = 2) -> Path:
    """Write a record's JSON document to ``output_path``.

    Returns:
        The path written.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(metadata_to_json(record, indent=indent), encoding="utf-8")
    logger.info("Wrote variable metadata JSON: {path}", path=output_path)
    return output_path
