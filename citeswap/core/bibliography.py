"""Bibliography index answering title lookups."""
import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional, Tuple

from ..converters.bibtex_parser import parse_bibtex, parse_bibtex_file
from .models import BibliographyEntry
from .normalize import normalize_title

logger = logging.getLogger(__name__)


class BibliographyIndex:
    """Read-only list of bibliography entries searchable by title.

    Entries keep their file order. Lookups are an exact comparison of
    normalized titles and the earliest matching entry wins, so duplicate
    titles in the bibliography always resolve to the same key.

    Example:
        >>> index = BibliographyIndex.from_bibtex_file("bib.bib")
        >>> index.find_by_title("Die Ökonomie")
        'Smith2001'
    """

    def __init__(self, entries: Iterable[BibliographyEntry]):
        self._entries: Tuple[BibliographyEntry, ...] = tuple(entries)
        # Entries without a title can never match and are left out.
        self._keyed: Tuple[Tuple[str, BibliographyEntry], ...] = tuple(
            (normalize_title(entry.title), entry)
            for entry in self._entries
            if entry.title is not None
        )

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "BibliographyIndex":
        """Build an index from bibtexparser record dictionaries."""
        return cls(BibliographyEntry.from_bibtex(record) for record in records)

    @classmethod
    def from_bibtex(cls, content: str) -> "BibliographyIndex":
        """Build an index from BibTeX source text."""
        return cls.from_records(parse_bibtex(content))

    @classmethod
    def from_bibtex_file(cls, file_path: str) -> "BibliographyIndex":
        """Build an index from a .bib file.

        Raises:
            BibTeXError: If the file cannot be read or parsed
        """
        index = cls.from_records(parse_bibtex_file(file_path))
        logger.info(f"Loaded bibliography {file_path} with {len(index)} entries")
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def find_entry(self, title: str) -> Optional[BibliographyEntry]:
        """Return the first entry whose title matches, or None."""
        wanted = normalize_title(title)
        for key, entry in self._keyed:
            if key == wanted and entry.key:
                return entry
        return None

    def find_by_title(self, title: str) -> Optional[str]:
        """Return the citation key of the first entry matching ``title``.

        Args:
            title: Raw title; normalized before comparison

        Returns:
            Citation key, or None if no entry matches
        """
        entry = self.find_entry(title)
        return entry.key if entry is not None else None

    def summary(self) -> Dict[str, Any]:
        """Entry counts for reporting."""
        types = Counter(entry.entry_type or "unknown" for entry in self._entries)
        return {
            "entries": len(self._entries),
            "with_title": len(self._keyed),
            "without_key": sum(1 for entry in self._entries if not entry.key),
            "entry_types": dict(sorted(types.items())),
        }

    def log_summary(self) -> None:
        stats = self.summary()
        logger.info(
            f"Bibliography: {stats['entries']} entries, "
            f"{stats['with_title']} with title, {stats['without_key']} without key"
        )
        for entry_type, count in stats["entry_types"].items():
            logger.info(f"  {entry_type}: {count}")
