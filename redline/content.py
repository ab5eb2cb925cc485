"""
Rich Content Types v1.0.0
=========================
Tagged union for the content handed to the extractor, and a minimal
tree-walker node that decouples extraction from the HTML parser.

Any parser can feed the extractor as long as it produces Node trees;
html_to_node() adapts BeautifulSoup output.
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

# Something that looks like an opening, closing or self-closing tag
_TAG_RE = re.compile(r'<\s*/?\s*[a-zA-Z][a-zA-Z0-9]*(\s[^<>]*)?/?\s*>')

NODE_TEXT = 'text'
NODE_ELEMENT = 'element'
NODE_OTHER = 'other'


@dataclass
class Node:
    """
    Parser-independent document node.

    Attributes:
        kind: 'text', 'element' or 'other' (comments, doctypes, ...)
        text: Character data for text nodes
        tag_name: Lower-case tag name for element nodes
        children: Child nodes in document order
    """
    kind: str
    text: str = ""
    tag_name: str = ""
    children: List['Node'] = field(default_factory=list)


@dataclass(frozen=True)
class PlainText:
    """Unformatted text; extracted verbatim."""
    text: str


@dataclass(frozen=True)
class HtmlContent:
    """HTML-formatted rich text."""
    html: str


@dataclass(frozen=True)
class StructuredDoc:
    """Editor JSON document (nested dicts with 'text' / 'content')."""
    tree: Any


RichContent = Union[PlainText, HtmlContent, StructuredDoc]


def looks_like_html(value: str) -> bool:
    """True when the string contains at least one markup tag."""
    return bool(value) and '<' in value and _TAG_RE.search(value) is not None


def to_rich_content(value: Any) -> RichContent:
    """
    Classify raw input into the RichContent union.

    Args:
        value: A RichContent, a string (HTML or plain) or a structured
               document (dict / list)

    Returns:
        The matching RichContent variant
    """
    if isinstance(value, (PlainText, HtmlContent, StructuredDoc)):
        return value
    if value is None:
        return PlainText("")
    if isinstance(value, (dict, list)):
        return StructuredDoc(value)
    text = str(value)
    if looks_like_html(text):
        return HtmlContent(text)
    return PlainText(text)


def _soup_to_node(element) -> Node:
    if isinstance(element, Comment):
        return Node(kind=NODE_OTHER)
    if isinstance(element, NavigableString):
        # Doctype, CData etc. are NavigableString subclasses too
        if type(element) is not NavigableString:
            return Node(kind=NODE_OTHER)
        return Node(kind=NODE_TEXT, text=str(element))
    if isinstance(element, Tag):
        return Node(
            kind=NODE_ELEMENT,
            tag_name=(element.name or '').lower(),
            children=[_soup_to_node(child) for child in element.children],
        )
    return Node(kind=NODE_OTHER)


def html_to_node(html: str) -> Node:
    """
    Parse an HTML string into a Node tree rooted at a synthetic element.

    Raises whatever the underlying parser raises on unparseable input.
    """
    soup = BeautifulSoup(html, 'html.parser')
    root = Node(kind=NODE_ELEMENT, tag_name='#document')
    root.children = [_soup_to_node(child) for child in soup.contents]
    return root
