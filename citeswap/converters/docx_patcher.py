"""Rewrite Citavi placeholders in WordprocessingML parts.

Each Citavi citation is a ``w:sdt`` content control. Its field code
(``w:instrText``) carries the encoded reference metadata, its
``w:sdtContent`` holds the visible citation text. The patcher appends a
Pandoc marker such as `` [@Smith2001, 12-14]`` to that visible text.
"""
import json
import logging
import os
from typing import List, Optional

from docx.oxml.ns import nsmap, qn
from lxml import etree

from ..config import DEFAULT_PLACEHOLDER_MARKER
from ..core.citation import render_citations
from ..core.models import PartResult
from ..core.payload import assemble_payload, decode_json, parse_entries
from ..core.resolver import CitationResolver
from ..exceptions import MetadataShapeError, PayloadDecodeError

logger = logging.getLogger(__name__)

NAMESPACES = {"w": nsmap["w"]}

PLACEHOLDER_PATH = ".//w:sdt"
FIELD_CODE_PATH = ".//w:instrText"
VISIBLE_TEXT_PATH = "./w:sdtContent//w:r/w:t"


class DocumentPatcher:
    """Patch every placeholder of a part tree in place."""

    def __init__(
        self,
        resolver: CitationResolver,
        marker: str = DEFAULT_PLACEHOLDER_MARKER,
        payload_dump_dir: Optional[str] = None,
    ):
        """Initialize the patcher.

        Args:
            resolver: Resolver backed by the loaded bibliography
            marker: Field code prefix identifying Citavi placeholders
            payload_dump_dir: If set, decoded payloads are written there as JSON
        """
        self.resolver = resolver
        self.marker = marker
        self.payload_dump_dir = payload_dump_dir
        self._dumped = 0

    def patch_tree(self, root: etree._Element, part_name: str = "") -> PartResult:
        """Patch all placeholders below ``root``.

        Problems with a single placeholder are logged and that placeholder is
        skipped; they never abort the pass.

        Returns:
            Counts for the part, including the number of resolved citations
        """
        result = PartResult(part_name=part_name)
        logger.debug(f"Root element of {part_name or 'part'}: {etree.QName(root).localname}")

        for sdt in placeholder_elements(root):
            fragments = [
                node.text or ""
                for node in sdt.iterfind(FIELD_CODE_PATH, namespaces=NAMESPACES)
            ]
            payload = assemble_payload(fragments, marker=self.marker)
            if not payload:
                continue
            result.placeholders_seen += 1

            try:
                data = decode_json(payload)
                self._dump(data)
                records = parse_entries(data)
            except PayloadDecodeError as e:
                logger.warning(f"Skipping placeholder in {part_name}: {e}")
                result.skipped += 1
                continue
            except MetadataShapeError as e:
                logger.warning(f"Skipping placeholder in {part_name}: {e} ({e.path})")
                result.skipped += 1
                continue

            resolution = self.resolver.resolve(records)
            result.citation_count += resolution.resolved_count
            rendered = render_citations(resolution.citations)

            if self._append_text(sdt, rendered):
                result.placeholders_patched += 1

        logger.info(
            f"We found {result.citation_count} citations in {part_name or 'part'} "
            f"({result.placeholders_patched}/{result.placeholders_seen} placeholders patched)"
        )
        return result

    @staticmethod
    def _append_text(sdt: etree._Element, rendered: str) -> bool:
        text_node = sdt.find(VISIBLE_TEXT_PATH, namespaces=NAMESPACES)
        if text_node is None:
            logger.debug("Placeholder has no visible text run; citation not appended")
            return False
        text_node.text = f"{text_node.text or ''} {rendered}"
        text_node.set(qn("xml:space"), "preserve")
        return True

    def _dump(self, data) -> None:
        if not self.payload_dump_dir:
            return
        path = os.path.join(self.payload_dump_dir, f"payload{self._dumped}.json")
        try:
            os.makedirs(self.payload_dump_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.warning(f"Could not dump payload to {path}: {e}")
            return
        self._dumped += 1


def placeholder_elements(root: etree._Element) -> List[etree._Element]:
    """All content controls of a part, in document order."""
    return list(root.iterfind(PLACEHOLDER_PATH, namespaces=NAMESPACES))
