"""Rendering of resolved citations as Pandoc citation markers."""
from typing import Iterable

from .models import ResolvedCitation


def render_citation(citation: ResolvedCitation) -> str:
    """Render one citation as `` [@key]`` or `` [@key, pages]``.

    Unresolved citations are rendered with an empty key (`` [@]``).
    """
    if citation.pages:
        return f" [@{citation.citation_key}, {citation.pages}]"
    return f" [@{citation.citation_key}]"


def render_citations(citations: Iterable[ResolvedCitation]) -> str:
    """Concatenate the markers of all citations of one placeholder.

    Args:
        citations: Resolved citations in payload order

    Returns:
        Marker string; every marker carries its own leading space
    """
    return "".join(render_citation(c) for c in citations)
