"""Tests for patching placeholders in document parts."""

import json

from lxml import etree

from citeswap.converters.docx_container import parse_part
from citeswap.converters.docx_patcher import NAMESPACES, DocumentPatcher
from citeswap.core.resolver import CitationResolver

W_T = ".//w:sdt/w:sdtContent//w:r/w:t"


def _visible_texts(root):
    return [t.text for t in root.iterfind(W_T, namespaces=NAMESPACES)]


class TestDocumentPatcher:
    """Placeholders receive their rendered citation markers."""

    def _patcher(self, bibliography, **kwargs):
        return DocumentPatcher(CitationResolver(bibliography), **kwargs)

    def test_resolved_citation(self, bibliography, make_document, make_placeholder,
                               field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie", "2001")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)])))

        result = self._patcher(bibliography).patch_tree(root, "word/document.xml")

        assert result.citation_count == 1
        assert result.placeholders_patched == 1
        assert _visible_texts(root) == ["(Smith 2001)  [@Smith2001]"]

    def test_pages(self, bibliography, make_document, make_placeholder,
                   field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie", start="12", end="14")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)])))

        self._patcher(bibliography).patch_tree(root)

        assert _visible_texts(root) == ["(Smith 2001)  [@Smith2001, 12-14]"]

    def test_unresolved_title(self, bibliography, make_document, make_placeholder,
                              field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("No Such Book")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)])))

        result = self._patcher(bibliography).patch_tree(root)

        assert result.citation_count == 0
        assert _visible_texts(root) == ["(Smith 2001)  [@]"]

    def test_split_field_code(self, bibliography, make_document, make_placeholder,
                              encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie")]})
        fragments = [
            f"ADDIN CitaviPlaceholder{{{payload[:10]}",
            payload[10:20],
            f"{payload[20:]}}}",
        ]
        root = parse_part(make_document(make_placeholder(fragments)))

        result = self._patcher(bibliography).patch_tree(root)

        assert result.citation_count == 1

    def test_bad_placeholder_does_not_affect_others(self, bibliography, make_document,
                                                    make_placeholder, field_code,
                                                    encode_payload, citavi_entry):
        good = encode_payload({"Entries": [citavi_entry("Die Ökonomie")]})
        shapeless = encode_payload({"NoEntries": True})
        root = parse_part(make_document(
            make_placeholder([field_code("%%%not-base64%%%")], visible="(Bad)"),
            make_placeholder([field_code(shapeless)], visible="(Shapeless)"),
            make_placeholder([field_code(good)], visible="(Good)"),
        ))

        result = self._patcher(bibliography).patch_tree(root)

        assert result.placeholders_seen == 3
        assert result.skipped == 2
        assert result.citation_count == 1
        assert _visible_texts(root) == ["(Bad)", "(Shapeless)", "(Good)  [@Smith2001]"]

    def test_non_citavi_content_control_is_ignored(self, bibliography, make_document,
                                                   make_placeholder):
        root = parse_part(make_document(
            make_placeholder(["ADDIN ZOTERO_ITEM CSL_CITATION {}"], visible="(Zotero)")
        ))

        result = self._patcher(bibliography).patch_tree(root)

        assert result.placeholders_seen == 0
        assert _visible_texts(root) == ["(Zotero)"]

    def test_missing_visible_text(self, bibliography, make_document, make_placeholder,
                                  field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)], visible=None)))

        result = self._patcher(bibliography).patch_tree(root)

        assert result.citation_count == 1
        assert result.placeholders_patched == 0

    def test_preserve_space_is_set(self, bibliography, make_document, make_placeholder,
                                   field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)])))

        self._patcher(bibliography).patch_tree(root)

        node = root.find(W_T, namespaces=NAMESPACES)
        assert node.get("{http://www.w3.org/XML/1998/namespace}space") == "preserve"

    def test_footnotes_part(self, bibliography, make_document, make_placeholder,
                            field_code, encode_payload, citavi_entry):
        payload = encode_payload({"Entries": [citavi_entry("Grundlagen der Straßenplanung")]})
        root = parse_part(make_document(make_placeholder([field_code(payload)]), root="footnotes"))

        result = self._patcher(bibliography).patch_tree(root, "word/footnotes.xml")

        assert result.citation_count == 1
        assert etree.QName(root).localname == "footnotes"

    def test_payload_dump(self, bibliography, make_document, make_placeholder, field_code,
                          encode_payload, citavi_entry, tmp_path):
        data = {"Entries": [citavi_entry("Die Ökonomie")]}
        root = parse_part(make_document(make_placeholder([field_code(encode_payload(data))])))
        dump_dir = tmp_path / "dump"

        self._patcher(bibliography, payload_dump_dir=str(dump_dir)).patch_tree(root)

        dumped = json.loads((dump_dir / "payload0.json").read_text(encoding="utf-8"))
        assert dumped == data

    def test_failing_payload_dump_does_not_stop_patching(self, bibliography, make_document,
                                                        make_placeholder, field_code,
                                                        encode_payload, citavi_entry, tmp_path, caplog):
        payload = encode_payload({"Entries": [citavi_entry("Die Ökonomie")]})
        root = parse_part(make_document(
            make_placeholder([field_code(payload)], visible="(First)"),
            make_placeholder([field_code(payload)], visible="(Second)"),
        ))
        not_a_dir = tmp_path / "dump"
        not_a_dir.write_text("occupied")

        result = self._patcher(bibliography, payload_dump_dir=str(not_a_dir)).patch_tree(root)

        assert result.citation_count == 2
        assert result.placeholders_patched == 2
        assert _visible_texts(root) == ["(First)  [@Smith2001]", "(Second)  [@Smith2001]"]
        assert "Could not dump payload" in caplog.text
