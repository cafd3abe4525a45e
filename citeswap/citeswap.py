"""Main Citeswap class - entry point for the library."""
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from lxml import etree

from .config import Config
from .converters.docx_container import (
    DocxContainer,
    parse_part,
    serialize_part,
    write_part_files,
)
from .converters.docx_patcher import DocumentPatcher
from .core.bibliography import BibliographyIndex
from .core.models import ConversionResult, PartResult
from .core.resolver import CitationResolver
from .exceptions import ConfigurationError
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


class Citeswap:
    """Replace Citavi citations in Word documents with Pandoc citation keys.

    Example:
        >>> from citeswap import Citeswap
        >>> swap = Citeswap()
        >>> swap.load_bibliography("bib.bib")
        >>> result = swap.convert("thesis.docx")
        >>> result.citation_count
        42
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        bibliography: Optional[BibliographyIndex] = None,
        log_level: Optional[Union[int, str]] = None,
    ):
        """Initialize Citeswap.

        Args:
            config: Optional Config object (loaded from environment if omitted)
            bibliography: Already built bibliography index
            log_level: Logging level (defaults to config.log_level)
        """
        if config is None:
            config = Config.from_env()
        self.config = config

        setup_logging(level=log_level if log_level is not None else config.log_level)

        self.bibliography = bibliography

    def load_bibliography(self, bib_path: str) -> BibliographyIndex:
        """Parse the BibTeX file once and keep the index for all documents.

        Raises:
            BibTeXError: If the bibliography cannot be read or parsed
        """
        self.bibliography = BibliographyIndex.from_bibtex_file(bib_path)
        self.bibliography.log_summary()
        return self.bibliography

    def _patcher(self) -> DocumentPatcher:
        if self.bibliography is None:
            raise ConfigurationError("No bibliography loaded. Call load_bibliography() first.")
        return DocumentPatcher(
            CitationResolver(self.bibliography),
            marker=self.config.placeholder_marker,
            payload_dump_dir=self.config.payload_dump_dir,
        )

    def convert_tree(self, root: etree._Element, part_name: str = "") -> PartResult:
        """Patch one already parsed part tree in place."""
        return self._patcher().patch_tree(root, part_name=part_name)

    def default_output_path(self, docx_path: str) -> str:
        source = Path(docx_path)
        return os.path.join(self.config.output_dir, f"{source.stem}_citekeys{source.suffix}")

    def convert(self, docx_path: str, output_path: Optional[str] = None) -> ConversionResult:
        """Convert all configured parts of a .docx document.

        Args:
            docx_path: Input document
            output_path: Patched .docx destination (defaults to output_dir)

        Returns:
            ConversionResult with per-part citation counts and written files

        Raises:
            DocumentError: If the document cannot be opened or a part is not XML
            ConversionError: If output files cannot be written
        """
        patcher = self._patcher()
        result = ConversionResult(source=str(docx_path))
        patched: Dict[str, bytes] = {}

        with DocxContainer(docx_path) as docx:
            for part_name in self.config.document_parts:
                data = docx.read_part(part_name)
                if data is None:
                    logger.info(f"{part_name} not present in {docx_path}")
                    continue
                logger.info(f"Found: {part_name}")
                root = parse_part(data, part_name)
                result.parts.append(patcher.patch_tree(root, part_name=part_name))
                patched[part_name] = serialize_part(root)

            result.output_path = docx.write_patched(
                output_path or self.default_output_path(docx_path), patched
            )

        if self.config.write_part_files and patched:
            result.part_files = write_part_files(self.config.output_dir, patched)

        logger.info(
            f"Converted {docx_path}: {result.citation_count} citations "
            f"in {len(result.parts)} parts"
        )
        return result
