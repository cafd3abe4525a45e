"""Citeswap - Citavi citations to Pandoc citation keys.

Reads the Citavi placeholders embedded in a Word document, matches each
cited reference against a BibTeX bibliography by title, and appends
Pandoc citation markers such as ``[@Smith2001, 12-14]`` to the visible
citation text.
"""

from .config import Config
from .exceptions import (
    CiteswapError,
    ConfigurationError,
    BibTeXError,
    DocumentError,
    ConversionError,
    PayloadDecodeError,
    MetadataShapeError,
)
from .core.models import (
    BibliographyEntry,
    ReferenceRecord,
    ResolvedCitation,
    PartResult,
    ConversionResult,
)
from .citeswap import Citeswap

__version__ = "0.1.0"
__all__ = [
    "Citeswap",
    "Config",
    "BibliographyEntry",
    "ReferenceRecord",
    "ResolvedCitation",
    "PartResult",
    "ConversionResult",
    "CiteswapError",
    "ConfigurationError",
    "BibTeXError",
    "DocumentError",
    "ConversionError",
    "PayloadDecodeError",
    "MetadataShapeError",
]
