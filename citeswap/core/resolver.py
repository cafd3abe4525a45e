"""Resolution of extracted references to BibTeX citation keys."""
import logging
from typing import TYPE_CHECKING, Iterable, List

from .models import ReferenceRecord, ResolutionResult, ResolvedCitation
from .normalize import normalize_title

if TYPE_CHECKING:
    from .bibliography import BibliographyIndex

logger = logging.getLogger(__name__)


class CitationResolver:
    """Look up each reference of a placeholder in the bibliography."""

    def __init__(self, bibliography: "BibliographyIndex"):
        self.bibliography = bibliography

    def resolve_one(self, record: ReferenceRecord) -> ResolvedCitation:
        """Resolve a single reference; the key stays empty on a miss."""
        key = self.bibliography.find_by_title(record.title)
        if key is None:
            logger.warning(
                f"Could not find any matching entries for {record.title!r} "
                f"in BibTeX file (normalized: {normalize_title(record.title)!r})"
            )
            key = ""
        citation = ResolvedCitation(
            title=record.title,
            year=record.year,
            citation_key=key,
            pages=record.pages,
        )
        logger.debug(str(citation))
        return citation

    def resolve(self, records: Iterable[ReferenceRecord]) -> ResolutionResult:
        """Resolve all references of one placeholder.

        Args:
            records: Reference records in payload order

        Returns:
            One resolved citation per record, plus the number of records
            that received a citation key
        """
        citations: List[ResolvedCitation] = [self.resolve_one(r) for r in records]
        resolved = sum(1 for c in citations if c.resolved)
        logger.debug(f"Resolved {resolved} of {len(citations)} references")
        return ResolutionResult(citations=citations, resolved_count=resolved)
