"""Data models for Citeswap."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class BibliographyEntry:
    """One record of the BibTeX bibliography.

    Attributes:
        key: BibTeX citation key (the ``ID`` of the record)
        fields: Lower-cased field name to value mapping
        entry_type: BibTeX entry type (article, book, ...)
    """

    key: str
    fields: Mapping[str, str] = field(default_factory=dict)
    entry_type: str = ""

    @property
    def title(self) -> Optional[str]:
        """Title field, or None if the record has none."""
        return self.fields.get("title")

    @classmethod
    def from_bibtex(cls, entry: Dict[str, Any]) -> "BibliographyEntry":
        """Create an entry from a bibtexparser record dictionary."""
        return cls(
            key=str(entry.get("ID", "")),
            fields={
                str(k).lower(): str(v)
                for k, v in entry.items()
                if k not in ("ID", "ENTRYTYPE")
            },
            entry_type=str(entry.get("ENTRYTYPE", "")),
        )


@dataclass(frozen=True)
class ReferenceRecord:
    """A reference extracted from one decoded placeholder payload.

    Attributes:
        title: Title, with the subtitle appended if the payload had one
        year: Publication year as written in the payload
        page_start: Original string of the cited start page
        page_end: Original string of the cited end page
    """

    title: str = ""
    year: str = ""
    page_start: str = ""
    page_end: str = ""

    @property
    def pages(self) -> str:
        """Cited pages as ``start``, ``start-end`` or empty string.

        An end page without a start page yields the end page alone rather
        than a dangling ``-end`` range.
        """
        if not self.page_start:
            return self.page_end
        if self.page_end and self.page_end != self.page_start:
            return f"{self.page_start}-{self.page_end}"
        return self.page_start


@dataclass(frozen=True)
class ResolvedCitation:
    """A reference matched (or not) against the bibliography."""

    title: str
    year: str = ""
    citation_key: str = ""
    pages: str = ""

    @property
    def resolved(self) -> bool:
        """True if a bibliography entry was found for the title."""
        return bool(self.citation_key)

    def __str__(self) -> str:
        return f"Title: {self.title}, Year: {self.year}, CitationKey: {self.citation_key}"


@dataclass(frozen=True)
class ResolutionResult:
    """Resolver output for one placeholder."""

    citations: List[ResolvedCitation]
    resolved_count: int = 0


@dataclass
class PartResult:
    """Outcome of patching one document part.

    Attributes:
        part_name: Name of the part inside the container
        citation_count: Number of references resolved to a citation key
        placeholders_seen: Placeholder elements found in the part
        placeholders_patched: Placeholders whose visible text was rewritten
        skipped: Placeholders skipped because their payload was unusable
    """

    part_name: str
    citation_count: int = 0
    placeholders_seen: int = 0
    placeholders_patched: int = 0
    skipped: int = 0


@dataclass
class ConversionResult:
    """Outcome of converting one .docx document."""

    source: str
    parts: List[PartResult] = field(default_factory=list)
    output_path: Optional[str] = None
    part_files: Dict[str, str] = field(default_factory=dict)

    @property
    def citation_count(self) -> int:
        """Total resolved citations over all parts."""
        return sum(p.citation_count for p in self.parts)

