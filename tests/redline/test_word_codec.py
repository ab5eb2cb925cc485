"""
Tests for the Word Document Codec
=================================
"""

import io
from datetime import datetime, timezone

import pytest
from docx import Document
from docx.oxml.ns import qn

from config_logging import DocumentCodecError
from redline.extractor import extract
from redline.models import DiffSegment, FormattingFlags
from redline.word_codec import EXPORT_TITLE, EMPTY_EXPORT_TEXT, export_word_document, import_word_document


def _docx_bytes(build):
    document = Document()
    build(document)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _formatted_document(document):
    paragraph = document.add_paragraph()
    run = paragraph.add_run("Bold")
    run.bold = True
    paragraph.add_run(" plain & ")
    run = paragraph.add_run("slanted")
    run.italic = True
    document.add_paragraph("Second")


SEGMENTS = [
    DiffSegment(value="Payment is due Net "),
    DiffSegment(value="30", removed=True, change_id="change-0-remove"),
    DiffSegment(value="45", added=True, formatting=FormattingFlags(bold=True), change_id="change-1-add"),
    DiffSegment(value=" days.\nSecond paragraph."),
]


class TestImport:
    """Tests for reading .docx files."""

    def test_text_and_html(self):
        result = import_word_document(_docx_bytes(_formatted_document), filename="msa.docx")
        assert result.text == "Bold plain & slanted\nSecond"
        assert result.html == (
            "<p><strong>Bold</strong> plain &amp; <em>slanted</em></p><p>Second</p>"
        )
        assert result.formatting == [FormattingFlags(bold=True), FormattingFlags(italic=True)]

    def test_html_feeds_extractor(self):
        result = import_word_document(_docx_bytes(_formatted_document))
        extraction = extract(result.html)
        assert extraction.plain_text == result.text
        bold = extraction.formatting_ranges[0]
        assert extraction.plain_text[bold.start:bold.end] == "Bold"

    def test_blank_paragraphs_skipped(self):
        def build(document):
            document.add_paragraph("a")
            document.add_paragraph("")
            document.add_paragraph("   ")
            document.add_paragraph("b")

        result = import_word_document(_docx_bytes(build))
        assert result.text == "a\nb"
        assert result.html == "<p>a</p><p>b</p>"
        assert extract(result.html).plain_text == result.text

    def test_invalid_bytes(self):
        with pytest.raises(DocumentCodecError) as exc_info:
            import_word_document(b"not a zip file", filename="broken.docx")
        assert exc_info.value.status_code == 422
        assert "valid .docx" in exc_info.value.message


class TestExport:
    """Tests for tracked-changes export."""

    @pytest.fixture
    def exported(self):
        data = export_word_document(SEGMENTS, author="Reviewer",
                                    date=datetime(2024, 2, 15, 9, 30, tzinfo=timezone.utc))
        return Document(io.BytesIO(data))

    def test_heading(self, exported):
        assert exported.paragraphs[0].text == EXPORT_TITLE

    def test_revision_marks(self, exported):
        body = exported.element.body
        insertions = list(body.iter(qn('w:ins')))
        deletions = list(body.iter(qn('w:del')))
        assert len(insertions) == 1
        assert len(deletions) == 1

        assert insertions[0].get(qn('w:author')) == "Reviewer"
        assert insertions[0].get(qn('w:date')) == "2024-02-15T09:30:00Z"
        assert ''.join(t.text for t in insertions[0].iter(qn('w:t'))) == "45"
        assert list(insertions[0].iter(qn('w:b')))

        assert ''.join(t.text for t in deletions[0].iter(qn('w:delText'))) == "30"

    def test_revision_ids_unique(self, exported):
        body = exported.element.body
        ids = [el.get(qn('w:id')) for el in list(body.iter(qn('w:ins'))) + list(body.iter(qn('w:del')))]
        assert len(ids) == len(set(ids))

    def test_paragraph_per_line(self, exported):
        texts = [p.text for p in exported.paragraphs]
        assert "Second paragraph." in texts

    def test_track_revisions_enabled(self, exported):
        assert exported.settings.element.find(qn('w:trackRevisions')) is not None

    def test_default_author(self):
        document = Document(io.BytesIO(export_word_document(SEGMENTS)))
        (insertion,) = document.element.body.iter(qn('w:ins'))
        assert insertion.get(qn('w:author'))

    def test_empty(self):
        document = Document(io.BytesIO(export_word_document([])))
        assert [p.text for p in document.paragraphs] == [EXPORT_TITLE, EMPTY_EXPORT_TEXT]
