"""
Rendering Projector v1.0.0
==========================
Pure projections of annotated segments / sentences into presentation
strings: raw diff markup, marked HTML, sentence-anchored HTML and
clipboard payloads. Inputs are never modified.
"""

import html
from typing import List, Optional, Sequence

from .models import ClipboardPayload, DiffSegment, FormattingFlags, Sentence

EMPTY_PLACEHOLDER = '<p class="redline-empty">No content to compare.</p>'

INSERTION_STYLE = "color: blue; text-decoration: underline; text-decoration-skip-ink: none;"
DELETION_STYLE = "color: red; text-decoration: line-through; text-decoration-skip-ink: none;"


def render_raw_markup(segments: Sequence[DiffSegment]) -> str:
    """Plain-text diff markup: {++inserted++} and {--deleted--}."""
    out = []
    for segment in segments:
        if segment.added:
            out.append(f"{{++{segment.value}++}}")
        elif segment.removed:
            out.append(f"{{--{segment.value}--}}")
        else:
            out.append(segment.value)
    return ''.join(out)


def wrap_formatting(text: str, formatting: Optional[FormattingFlags]) -> str:
    """Apply <u>, then <em>, then <strong> (bold outermost)."""
    if formatting is None:
        return text
    if formatting.underline:
        text = f"<u>{text}</u>"
    if formatting.italic:
        text = f"<em>{text}</em>"
    if formatting.bold:
        text = f"<strong>{text}</strong>"
    return text


def _render_piece(segment: DiffSegment, text: str) -> str:
    inner = wrap_formatting(html.escape(text), segment.formatting)
    if not segment.is_change:
        return inner

    tag = 'ins' if segment.added else 'del'
    if segment.change_id:
        return f'<{tag} data-change-id="{html.escape(segment.change_id)}">{inner}</{tag}>'
    return f"<{tag}>{inner}</{tag}>"


def render_marked_html(segments: Sequence[DiffSegment]) -> str:
    """
    Paragraph-structured HTML redline.

    Segments are regrouped at newlines into <p> elements; insertions are
    wrapped in <ins>, deletions in <del>, formatting in <strong>/<em>/<u>.

    Returns:
        HTML string, or a placeholder paragraph when there is no content
    """
    paragraphs: List[List[str]] = []
    current: List[str] = []

    for segment in segments:
        for index, line in enumerate(segment.value.split('\n')):
            if index > 0:
                paragraphs.append(current)
                current = []
            if line:
                current.append(_render_piece(segment, line))
    paragraphs.append(current)

    rendered = [f"<p>{''.join(parts)}</p>" for parts in paragraphs if parts]
    if not rendered:
        return EMPTY_PLACEHOLDER
    return ''.join(rendered)


def render_sentence_html(
    sentences: Sequence[Sentence],
    highlighted_id: Optional[str] = None
) -> str:
    """
    Redline HTML with one anchored <span> per sentence.

    The span ids match Sentence.id so a summary item can scroll to and
    highlight its sentence.
    """
    if not sentences:
        return EMPTY_PLACEHOLDER

    out = []
    for sentence in sentences:
        css = "redline-sentence"
        if sentence.id == highlighted_id:
            css += " redline-sentence-active"
        pieces = []
        for part in sentence.parts:
            lines = part.value.split('\n')
            pieces.append('<br>'.join(_render_piece(part, line) if line else '' for line in lines))
        out.append(f'<span id="{html.escape(sentence.id)}" class="{css}">{"".join(pieces)}</span>')
    return ''.join(out)


def render_clipboard_html(segments: Sequence[DiffSegment]) -> str:
    """Inline-styled HTML suitable for pasting into word processors."""
    out = []
    for segment in segments:
        escaped = html.escape(segment.value).replace('\n', '<br>')
        if segment.added:
            out.append(f'<span style="{INSERTION_STYLE}">{escaped}</span>')
        elif segment.removed:
            out.append(f'<span style="{DELETION_STYLE}">{escaped}</span>')
        else:
            out.append(f"<span>{escaped}</span>")
    return ''.join(out)


def render_clipboard_text(segments: Sequence[DiffSegment]) -> str:
    """Plain concatenation of every segment value, without markup."""
    return ''.join(segment.value for segment in segments)


def render_clipboard(segments: Sequence[DiffSegment]) -> ClipboardPayload:
    """Rich and plain clipboard representations of the same redline."""
    return ClipboardPayload(
        html=render_clipboard_html(segments),
        text=render_clipboard_text(segments),
    )
