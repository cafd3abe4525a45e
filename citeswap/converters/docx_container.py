"""Reading and rewriting the parts of a .docx container."""
import logging
import os
import zipfile
from pathlib import Path
from typing import Dict, Mapping, Optional

from lxml import etree

from ..exceptions import ConversionError, DocumentError

logger = logging.getLogger(__name__)

_XML_PARSER = etree.XMLParser(resolve_entities=False, huge_tree=True)

# Standalone file names used for the well-known parts.
PART_FILE_NAMES = {
    "word/document.xml": "NEWDOC.xml",
    "word/footnotes.xml": "NEWFN.xml",
}


def parse_part(data: bytes, part_name: str = "") -> etree._Element:
    """Parse the bytes of an XML part.

    Raises:
        DocumentError: If the part is not well-formed XML
    """
    try:
        return etree.fromstring(data, _XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise DocumentError(f"Part {part_name or '<unnamed>'} is not valid XML: {e}") from e


def serialize_part(root: etree._Element) -> bytes:
    """Serialize a part tree the way Word writes it."""
    return etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", standalone=True
    )


def part_file_name(part_name: str) -> str:
    """File name for writing a patched part on its own."""
    return PART_FILE_NAMES.get(part_name, Path(part_name).name)


class DocxContainer:
    """Read access to the zip archive behind a .docx file.

    Example:
        >>> with DocxContainer("thesis.docx") as docx:
        ...     body = docx.read_part("word/document.xml")
    """

    def __init__(self, path: str):
        """Open the container.

        Args:
            path: Path to the .docx file

        Raises:
            DocumentError: If the file is missing or not a zip archive
        """
        self.path = str(path)
        try:
            self._zip = zipfile.ZipFile(self.path)
        except FileNotFoundError:
            raise DocumentError(f"Document not found: {self.path}")
        except (zipfile.BadZipFile, OSError) as e:
            raise DocumentError(f"Could not open {self.path} as .docx: {e}") from e

    def __enter__(self) -> "DocxContainer":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self._zip.close()

    def read_part(self, name: str) -> Optional[bytes]:
        """Return the bytes of a part, or None if the container lacks it."""
        try:
            return self._zip.read(name)
        except KeyError:
            return None

    def write_patched(self, output_path: str, replacements: Mapping[str, bytes]) -> str:
        """Write a copy of the container with some parts replaced.

        Args:
            output_path: Destination .docx path
            replacements: Part name to new part bytes

        Returns:
            The output path

        Raises:
            ConversionError: If the output cannot be written
        """
        if os.path.abspath(output_path) == os.path.abspath(self.path):
            raise ConversionError("Refusing to overwrite the source document")

        try:
            os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
            with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as out:
                for info in self._zip.infolist():
                    data = replacements.get(info.filename)
                    if data is None:
                        data = self._zip.read(info.filename)
                    out.writestr(info, data)
        except OSError as e:
            raise ConversionError(f"Failed to write {output_path}: {e}") from e

        logger.info(f"✓ DOCX saved: {output_path}")
        return output_path


def write_part_files(output_dir: str, parts: Mapping[str, bytes]) -> Dict[str, str]:
    """Write patched parts as standalone XML files.

    Returns:
        Part name to written file path
    """
    written: Dict[str, str] = {}
    try:
        os.makedirs(output_dir, exist_ok=True)
        for part_name, data in parts.items():
            target = os.path.join(output_dir, part_file_name(part_name))
            with open(target, "wb") as f:
                f.write(data)
            written[part_name] = target
            logger.info(f"Wrote {part_name} to {target}")
    except OSError as e:
        raise ConversionError(f"Failed to write part files to {output_dir}: {e}") from e
    return written
