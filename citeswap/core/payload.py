"""Recovery and decoding of Citavi placeholder payloads.

Citavi stores the metadata of a citation as Base64 encoded JSON inside the
field code of a Word content control::

    ADDIN CitaviPlaceholder{eyJFbnRyaWVzIjpbey...}

Word may split that field code over several ``w:instrText`` runs, so the
payload is reassembled from all fragments before decoding.
"""
import base64
import binascii
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import DEFAULT_PLACEHOLDER_MARKER
from ..exceptions import MetadataShapeError, PayloadDecodeError
from .models import ReferenceRecord

logger = logging.getLogger(__name__)

OPEN_DELIMITER = "{"
CLOSE_DELIMITER = "}"


def assemble_payload(
    fragments: Iterable[str],
    marker: str = DEFAULT_PLACEHOLDER_MARKER,
) -> Optional[str]:
    """Concatenate the field code fragments of one placeholder.

    Args:
        fragments: Text of the ``w:instrText`` runs in document order
        marker: Field code prefix identifying a Citavi placeholder

    Returns:
        The encoded payload, or None if the first fragment is not a
        placeholder field code (or there are no fragments)
    """
    parts: List[str] = []
    for position, fragment in enumerate(fragments):
        text = fragment or ""
        if position == 0 and not text.startswith(marker):
            return None
        if text.startswith(marker):
            text = text[len(marker):]
            if text.startswith(OPEN_DELIMITER):
                text = text[len(OPEN_DELIMITER):]
        if text.endswith(CLOSE_DELIMITER):
            parts.append(text[: -len(CLOSE_DELIMITER)])
            break
        parts.append(text)
    if not parts:
        return None
    return "".join(parts)


def decode_json(payload: str) -> Any:
    """Decode a Base64 payload into its JSON value.

    Raises:
        PayloadDecodeError: If the payload is not valid Base64 or JSON
    """
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadDecodeError(f"Error when decoding Base64: {e}") from e
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadDecodeError(f"Decoded payload is not valid JSON: {e}") from e


def _object(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _original_string(page_range: Dict[str, Any], name: str) -> str:
    page = _object(page_range.get(name))
    if page is None:
        return ""
    return _string(page.get("OriginalString")) or ""


def parse_entries(data: Any) -> List[ReferenceRecord]:
    """Extract reference records from decoded Citavi metadata.

    Every element of ``Entries`` must be an object holding a ``Reference``
    object; otherwise the whole payload is rejected. ``PageRange`` is
    optional per entry.

    Raises:
        MetadataShapeError: If the structure does not match
    """
    root = _object(data)
    if root is None:
        raise MetadataShapeError("Decoded payload is not a JSON object", path="$")

    entries = root.get("Entries")
    if not isinstance(entries, list):
        raise MetadataShapeError("'Entries' is missing or not a list", path="$.Entries")

    records: List[ReferenceRecord] = []
    for i, entry in enumerate(entries):
        entry_obj = _object(entry)
        if entry_obj is None:
            raise MetadataShapeError(
                f"Entry {i} is not an object", path=f"$.Entries[{i}]"
            )
        reference = _object(entry_obj.get("Reference"))
        if reference is None:
            raise MetadataShapeError(
                f"Entry {i} has no 'Reference' object",
                path=f"$.Entries[{i}].Reference",
            )

        title = _string(reference.get("Title")) or ""
        subtitle = _string(reference.get("Subtitle"))
        if subtitle is not None:
            title = f"{title} {subtitle}"

        page_start = page_end = ""
        page_range = _object(entry_obj.get("PageRange"))
        if page_range is not None:
            page_start = _original_string(page_range, "StartPage")
            page_end = _original_string(page_range, "EndPage")

        records.append(
            ReferenceRecord(
                title=title,
                year=_string(reference.get("Year")) or "",
                page_start=page_start,
                page_end=page_end,
            )
        )
    return records


def decode_payload(payload: str) -> List[ReferenceRecord]:
    """Decode an assembled payload into reference records.

    Args:
        payload: Marker-stripped Base64 text

    Returns:
        Reference records in ``Entries`` order

    Raises:
        PayloadDecodeError: If Base64 or JSON decoding fails
        MetadataShapeError: If the metadata lacks the expected structure
    """
    return parse_entries(decode_json(payload))
