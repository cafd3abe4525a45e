"""BibTeX loading for the bibliography index."""
import logging
import bibtexparser
from bibtexparser.bparser import BibTexParser
from bibtexparser.customization import convert_to_unicode
from typing import List, Dict, Any

from ..exceptions import BibTeXError

logger = logging.getLogger(__name__)


def parse_bibtex(content: str) -> List[Dict[str, Any]]:
    """Parse BibTeX content using bibtexparser library.

    Args:
        content: BibTeX content as string

    Returns:
        List of parsed BibTeX entry dictionaries, in file order

    Raises:
        BibTeXError: If parsing fails
    """
    try:
        parser = BibTexParser(
            common_strings=True,  # Use common_strings for standard abbreviations
            ignore_nonstandard_types=False,  # Citavi exports @online, @thesis, @report ...
        )
        parser.customization = convert_to_unicode  # Citavi exports LaTeX-escaped umlauts
        parser.ignore_comments = True

        bib_database = bibtexparser.loads(content, parser=parser)
    except Exception as e:
        logger.error(f"BibTeX parsing failed: {e}\nContent snippet: {content[:200]}...")
        raise BibTeXError(f"Failed to parse BibTeX content: {e}") from e

    if not bib_database.entries:
        logger.warning("bibtexparser parsed the string but found no valid entries.")
        return []

    logger.info(f"Successfully parsed {len(bib_database.entries)} BibTeX entries")
    return bib_database.entries


def parse_bibtex_file(file_path: str) -> List[Dict[str, Any]]:
    """Parse a BibTeX file.

    Args:
        file_path: Path to .bib file

    Returns:
        List of parsed BibTeX entries

    Raises:
        BibTeXError: If file reading or parsing fails
    """
    try:
        with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
            content = f.read()
    except FileNotFoundError:
        raise BibTeXError(f"BibTeX file not found: {file_path}")
    except OSError as e:
        raise BibTeXError(f"Failed to read BibTeX file {file_path}: {e}") from e
    return parse_bibtex(content)
