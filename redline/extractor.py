"""
Text/Formatting Extractor v1.1.0
================================
Turns rich content into the text a reader sees plus bold/italic/underline
ranges aligned to exact offsets of that text.

Characters and range boundaries are accumulated in the same depth-first
pass, so offsets never need to be re-aligned afterwards.

v1.1.0: Structured (editor JSON) documents supported for plain text
v1.0.1: Tag-stripping fallback when the HTML parser fails
"""

import re
import html as html_lib
from typing import List, Optional, Any

from config_logging import get_logger

from .content import (
    Node, PlainText, HtmlContent, StructuredDoc, RichContent,
    NODE_TEXT, NODE_ELEMENT, html_to_node, to_rich_content,
)
from .models import FormattingFlags, FormattingRange, PlainExtraction

logger = get_logger('redline.extractor')

# HTML whitespace (non-breaking spaces are visible and kept)
_WHITESPACE_RE = re.compile(r'[ \t\r\n\f]+')

BLOCK_TAGS = frozenset({
    'p', 'div', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'li', 'ul', 'ol',
    'blockquote', 'pre', 'section', 'article', 'header', 'footer',
    'table', 'tr', 'td', 'th', 'hr',
})

SKIPPED_TAGS = frozenset({'script', 'style', 'noscript', 'head', 'title', 'template'})

FORMATTING_TAGS = {
    'strong': FormattingFlags(bold=True),
    'b': FormattingFlags(bold=True),
    'em': FormattingFlags(italic=True),
    'i': FormattingFlags(italic=True),
    'u': FormattingFlags(underline=True),
    'ins': FormattingFlags(underline=True),
}

# Editor JSON node types rendered as their own line
STRUCTURED_BLOCK_TYPES = frozenset({
    'paragraph', 'heading', 'listItem', 'blockquote', 'codeBlock',
    'tableRow', 'tableCell',
})


class _Accumulator:
    """Per-call output buffer; owns the running offset and open ranges."""

    def __init__(self):
        self.chunks: List[str] = []
        self.length = 0
        self.ranges: List[list] = []  # [start, end, flags]

    @property
    def last_char(self) -> str:
        return self.chunks[-1][-1] if self.chunks else ''

    def append_text(self, raw: str, formatting: FormattingFlags):
        text = _WHITESPACE_RE.sub(' ', raw)
        if text.startswith(' ') and self.last_char in ('', '\n', ' '):
            text = text[1:]
        if not text:
            return

        start = self.length
        self.chunks.append(text)
        self.length += len(text)

        if not formatting.is_empty:
            self._add_range(start, self.length, formatting)

    def _add_range(self, start: int, end: int, formatting: FormattingFlags):
        if self.ranges:
            last = self.ranges[-1]
            if last[1] == start and last[2] == formatting:
                last[1] = end
                return
        self.ranges.append([start, end, formatting])

    def newline(self):
        self.trim_trailing(' ')
        self.chunks.append('\n')
        self.length += 1

    def ensure_newline(self):
        if self.length and self.last_char != '\n':
            self.newline()

    def trim_trailing(self, chars: str):
        """Drop trailing characters in `chars`, clipping ranges to the new end."""
        while self.chunks and self.chunks[-1][-1] in chars:
            self.chunks[-1] = self.chunks[-1][:-1]
            self.length -= 1
            if not self.chunks[-1]:
                self.chunks.pop()

        clipped = []
        for start, end, flags in self.ranges:
            end = min(end, self.length)
            if start < end:
                clipped.append([start, end, flags])
        self.ranges = clipped

    def result(self) -> PlainExtraction:
        self.trim_trailing('\n ')
        return PlainExtraction(
            plain_text=''.join(self.chunks),
            formatting_ranges=[FormattingRange(s, e, f) for s, e, f in self.ranges],
        )


def _walk(node: Node, inherited: FormattingFlags, out: _Accumulator):
    """Depth-first traversal carrying the inherited formatting."""
    if node.kind == NODE_TEXT:
        out.append_text(node.text, inherited)
        return
    if node.kind != NODE_ELEMENT:
        return

    tag = node.tag_name
    if tag in SKIPPED_TAGS:
        return
    if tag == 'br':
        out.newline()
        return

    is_block = tag in BLOCK_TAGS
    if is_block:
        out.ensure_newline()

    formatting = inherited.merge(FORMATTING_TAGS.get(tag))
    for child in node.children:
        _walk(child, formatting, out)

    if is_block:
        out.ensure_newline()


def extract_from_node(root: Node) -> PlainExtraction:
    """Extract plain text and formatting ranges from a Node tree."""
    out = _Accumulator()
    _walk(root, FormattingFlags(), out)
    return out.result()


def strip_tags(html: str) -> str:
    """
    Approximate reader-visible text by stripping tags with regexes.

    Used only when the HTML parser fails; formatting is lost.
    """
    if not html:
        return ""
    text = re.sub(r'(?is)<(script|style)\b.*?</\1\s*>', '', html)
    text = re.sub(r'(?i)<br\s*/?>', '\n', text)
    text = re.sub(r'(?i)</(p|div|h[1-6]|li|blockquote|tr)\s*>', '\n', text)
    text = re.sub(r'<[^>]*>', '', text)
    text = html_lib.unescape(text)
    lines = [_WHITESPACE_RE.sub(' ', line).strip() for line in text.split('\n')]
    return '\n'.join(line for line in lines if line)


def _structured_text(tree: Any) -> str:
    """Concatenate leaf 'text' fields of an editor JSON document."""
    out: List[str] = []

    def visit(node: Any):
        if isinstance(node, str):
            out.append(node)
            return
        if isinstance(node, list):
            for child in node:
                visit(child)
            return
        if not isinstance(node, dict):
            return

        node_type = node.get('type')
        if node_type == 'hardBreak':
            out.append('\n')
            return
        is_block = node_type in STRUCTURED_BLOCK_TYPES
        if is_block and out and not out[-1].endswith('\n'):
            out.append('\n')
        text = node.get('text')
        if isinstance(text, str):
            out.append(text)
        visit(node.get('content') or [])
        if is_block and out and not out[-1].endswith('\n'):
            out.append('\n')

    visit(tree)
    return ''.join(out).rstrip('\n')


def extract(content: Any) -> PlainExtraction:
    """
    Produce a PlainExtraction for any supported content.

    Args:
        content: RichContent, or raw input accepted by to_rich_content()

    Returns:
        PlainExtraction whose ranges index into its plain_text
    """
    content = to_rich_content(content)

    if isinstance(content, PlainText):
        return PlainExtraction(plain_text=content.text)

    if isinstance(content, HtmlContent):
        try:
            root = html_to_node(content.html)
        except Exception as e:
            logger.warning(f"HTML parse failed, falling back to tag stripping: {e}",
                           html_length=len(content.html))
            return PlainExtraction(plain_text=strip_tags(content.html))
        extraction = extract_from_node(root)
        logger.debug("Extracted HTML content",
                     text_length=len(extraction.plain_text),
                     range_count=len(extraction.formatting_ranges))
        return extraction

    if isinstance(content, StructuredDoc):
        # Formatting extraction is not supported for editor JSON documents
        return PlainExtraction(plain_text=_structured_text(content.tree))

    raise TypeError(f"Unsupported content type: {type(content).__name__}")


def has_content(content: Any) -> bool:
    """True when the content holds any non-whitespace reader-visible text."""
    return bool(extract(content).plain_text.strip())


def validate_extraction(
    plain_text: str,
    ranges: List[FormattingRange],
    side: Optional[str] = None
) -> List[FormattingRange]:
    """
    Check ranges against the text they claim to index.

    Ranges that are empty or fall outside the text indicate text and
    ranges computed independently of each other; they are logged and
    dropped so formatting cannot bleed onto the wrong characters.

    Returns:
        The ranges that are valid for plain_text
    """
    text_length = len(plain_text)
    valid = [r for r in ranges if 0 <= r.start < r.end <= text_length]
    dropped = len(ranges) - len(valid)
    if dropped:
        logger.warning(
            f"Dropped {dropped} formatting range(s) misaligned with {side or 'the'} text",
            side=side, dropped=dropped, text_length=text_length
        )
    return valid
