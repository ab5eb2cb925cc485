"""
Tests for the Text/Formatting Extractor
=======================================
"""

from unittest.mock import patch

import pytest

from redline.content import (
    Node, PlainText, HtmlContent, StructuredDoc, to_rich_content, looks_like_html,
    NODE_TEXT, NODE_ELEMENT, NODE_OTHER
)
from redline.extractor import (
    extract, extract_from_node, strip_tags, has_content, validate_extraction
)
from redline.models import FormattingFlags, FormattingRange


BOLD = FormattingFlags(bold=True)


class TestRichContent:
    """Tests for classifying raw input."""

    def test_plain_string(self):
        assert to_rich_content("Hello") == PlainText("Hello")

    def test_comparison_operator_is_not_html(self):
        assert not looks_like_html("stop if a < b")
        assert isinstance(to_rich_content("a < b"), PlainText)

    def test_html_string(self):
        assert to_rich_content("x<b>y</b>") == HtmlContent("x<b>y</b>")

    def test_structured_document(self):
        doc = {'type': 'doc', 'content': []}
        assert to_rich_content(doc) == StructuredDoc(doc)

    def test_none_is_empty_text(self):
        assert to_rich_content(None) == PlainText("")


class TestExtractHtml:
    """Tests for HTML extraction."""

    def test_bold_range(self):
        result = extract("<p><strong>Hello</strong> world</p>")
        assert result.plain_text == "Hello world"
        assert result.formatting_ranges == [FormattingRange(0, 5, BOLD)]

    def test_paragraphs_become_newlines(self):
        assert extract("<p>One</p><p>Two</p>").plain_text == "One\nTwo"

    def test_line_break(self):
        assert extract("Line<br>break").plain_text == "Line\nbreak"

    def test_nested_formatting_merges(self):
        result = extract("<p><strong><em>x</em></strong>y</p>")
        assert result.plain_text == "xy"
        assert result.formatting_ranges == [
            FormattingRange(0, 1, FormattingFlags(bold=True, italic=True))
        ]

    def test_underline_tags(self):
        result = extract("<p><u>under</u> and <ins>ins</ins></p>")
        assert result.plain_text == "under and ins"
        assert [r.formatting for r in result.formatting_ranges] == [
            FormattingFlags(underline=True), FormattingFlags(underline=True)
        ]

    def test_adjacent_equal_ranges_coalesce(self):
        result = extract("<p><b>ab</b><strong>cd</strong></p>")
        assert result.formatting_ranges == [FormattingRange(0, 4, BOLD)]

    def test_script_and_comments_skipped(self):
        assert extract("<p>a<script>var x;</script><!-- c -->b</p>").plain_text == "ab"

    def test_whitespace_collapsed(self):
        assert extract("<p>  a   b  </p>").plain_text == "a b"

    def test_non_breaking_space_kept(self):
        assert extract("<p>a&nbsp;b</p>").plain_text == "a\xa0b"

    def test_entities_decoded(self):
        assert extract("<p>Fish &amp; Chips</p>").plain_text == "Fish & Chips"

    @pytest.mark.parametrize("html", [
        "<p><strong>Hello</strong>   world  </p><p><em>again</em></p>",
        "<div><b>A</b><br><i>B</i></div>  <p> <u>C </u></p>",
        "<ul><li><b>one</b></li><li>two <em>three</em></li></ul>",
    ])
    def test_ranges_index_into_text(self, html):
        result = extract(html)
        length = len(result.plain_text)
        for fmt_range in result.formatting_ranges:
            assert 0 <= fmt_range.start < fmt_range.end <= length

    def test_bold_text_matches_range(self):
        result = extract("<p>Pay <b>within 45 days</b> of receipt.</p>")
        (fmt_range,) = result.formatting_ranges
        assert result.plain_text[fmt_range.start:fmt_range.end] == "within 45 days"


class TestExtractOther:
    """Tests for plain text, structured documents and node trees."""

    def test_plain_text_verbatim(self):
        result = extract("  spaced   text  ")
        assert result.plain_text == "  spaced   text  "
        assert result.formatting_ranges == []

    def test_structured_document_text(self):
        doc = {
            'type': 'doc',
            'content': [
                {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Hello'}]},
                {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'World'}]},
            ]
        }
        result = extract(doc)
        assert result.plain_text == "Hello\nWorld"
        assert result.formatting_ranges == []

    def test_node_tree(self):
        root = Node(kind=NODE_ELEMENT, tag_name='p', children=[
            Node(kind=NODE_ELEMENT, tag_name='b', children=[Node(kind=NODE_TEXT, text='Hi')]),
            Node(kind=NODE_OTHER),
            Node(kind=NODE_TEXT, text=' there'),
        ])
        result = extract_from_node(root)
        assert result.plain_text == "Hi there"
        assert result.formatting_ranges == [FormattingRange(0, 2, BOLD)]

    def test_has_content(self):
        assert has_content("<p>x</p>")
        assert not has_content("<p>   </p>")
        assert not has_content(None)


class TestHelpers:
    """Tests for tag stripping and range validation."""

    def test_strip_tags(self):
        assert strip_tags("<p>a &amp; b</p><p>c</p>") == "a & b\nc"

    def test_strip_tags_removes_scripts(self):
        assert strip_tags("<p>x</p><script>alert(1)</script>") == "x"

    def test_validate_extraction_drops_bad_ranges(self):
        ranges = [
            FormattingRange(0, 3, BOLD),
            FormattingRange(2, 2, BOLD),
            FormattingRange(4, 10, BOLD),
        ]
        assert validate_extraction("Hello", ranges, 'original') == [FormattingRange(0, 3, BOLD)]

    @patch('redline.extractor.html_to_node', side_effect=ValueError("bad markup"))
    def test_parse_failure_falls_back_to_stripped_text(self, mock_parse):
        result = extract("<p><b>Hi</b> there</p><p>x</p>")
        assert mock_parse.called
        assert result.plain_text == "Hi there\nx"
        assert result.formatting_ranges == []
