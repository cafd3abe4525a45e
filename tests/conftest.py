"""Shared fixtures: Citavi payloads, WordprocessingML parts and .docx files."""

import base64
import json
import zipfile
from pathlib import Path

import pytest

from citeswap.config import Config
from citeswap.core.bibliography import BibliographyIndex

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
MARKER = "ADDIN CitaviPlaceholder"

BIBTEX = r"""
@book{Smith2001,
  title = {die okonomie},
  author = {Smith, John},
  year = {2001},
}

@article{Doe2010,
  title = {Grundlagen der Straßenplanung},
  author = {Doe, Jane},
  year = {2010},
  journal = {Verkehr},
}

@misc{NoTitle2000,
  author = {Nobody},
  year = {2000},
}
"""


def _entry(title, year="2001", subtitle=None, start=None, end=None):
    reference = {"Title": title, "Year": year}
    if subtitle is not None:
        reference["Subtitle"] = subtitle
    entry = {"Reference": reference}
    if start is not None or end is not None:
        page_range = {}
        if start is not None:
            page_range["StartPage"] = {"OriginalString": start}
        if end is not None:
            page_range["EndPage"] = {"OriginalString": end}
        entry["PageRange"] = page_range
    return entry


def _encode(data):
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")


@pytest.fixture
def citavi_entry():
    """Factory for one element of the Citavi ``Entries`` list."""
    return _entry


@pytest.fixture
def encode_payload():
    """Factory turning Citavi metadata into a Base64 payload."""
    return _encode


def _placeholder(fragments, visible="(Smith 2001)"):
    runs = "".join(
        f'<w:r><w:instrText xml:space="preserve">{f}</w:instrText></w:r>'
        for f in fragments
    )
    visible_run = f"<w:r><w:t>{visible}</w:t></w:r>" if visible is not None else ""
    return (
        "<w:sdt><w:sdtPr><w:alias w:val=\"Citavi\"/></w:sdtPr><w:sdtContent>"
        '<w:r><w:fldChar w:fldCharType="begin"/></w:r>'
        f"{runs}"
        '<w:r><w:fldChar w:fldCharType="separate"/></w:r>'
        f"{visible_run}"
        '<w:r><w:fldChar w:fldCharType="end"/></w:r>'
        "</w:sdtContent></w:sdt>"
    )


def _field_code(payload):
    return f"{MARKER}{{{payload}}}"


def _document(*placeholders, root="document"):
    paragraphs = "".join(
        f"<w:p><w:r><w:t>Text before.</w:t></w:r>{p}</w:p>" for p in placeholders
    )
    if root == "footnotes":
        return (
            f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:footnotes xmlns:w="{W_NS}"><w:footnote w:id="1">{paragraphs}'
            f"</w:footnote></w:footnotes>"
        ).encode("utf-8")
    return (
        f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{paragraphs}</w:body></w:document>'
    ).encode("utf-8")


@pytest.fixture
def make_placeholder():
    """Factory for a ``w:sdt`` element with the given field code fragments."""
    return _placeholder


@pytest.fixture
def field_code():
    """Factory for a complete single-run Citavi field code."""
    return _field_code


@pytest.fixture
def make_document():
    """Factory for the bytes of a document (or footnotes) part."""
    return _document


@pytest.fixture
def make_docx(tmp_path):
    """Factory writing a minimal .docx with the given parts."""

    def _make(parts, name="thesis.docx"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as docx:
            docx.writestr(
                "[Content_Types].xml",
                '<?xml version="1.0" encoding="UTF-8"?><Types/>',
            )
            for part_name, data in parts.items():
                docx.writestr(part_name, data)
        return path

    return _make


@pytest.fixture
def bibtex_content():
    return BIBTEX


@pytest.fixture
def bib_file(tmp_path) -> Path:
    path = tmp_path / "bib.bib"
    path.write_text(BIBTEX, encoding="utf-8")
    return path


@pytest.fixture
def bibliography():
    return BibliographyIndex.from_bibtex(BIBTEX)


@pytest.fixture
def config(tmp_path):
    return Config(output_dir=str(tmp_path / "output"))
