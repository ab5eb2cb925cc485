"""
Sentence Segmenter v1.0.0
=========================
Groups annotated diff segments into sentence units for summarization
and highlight navigation.

A sentence ends after one or more of . ! ? followed by whitespace (the
whitespace stays with the sentence) or by the end of the text. Segments
spanning a boundary are cut; concatenating every sentence's parts gives
back the input segments' text exactly.
"""

import re
from typing import Iterator, List, Sequence

from .models import DiffSegment, Sentence

SENTENCE_END_RE = re.compile(r'[.!?]+(?:\s+|\Z)')


def iter_sentence_boundaries(text: str) -> Iterator[int]:
    """
    Yield the end offset of every sentence in a single forward scan.

    The final offset of the text is not yielded unless a terminator
    closes it.
    """
    for match in SENTENCE_END_RE.finditer(text):
        if match.end() > match.start():
            yield match.end()


def build_sentence(index: int, parts: List[DiffSegment]) -> Sentence:
    """Create a Sentence, deriving has_edits and raw_text from its parts."""
    has_edits = any(p.is_change and p.value.strip() for p in parts)

    raw = []
    for part in parts:
        if part.added:
            raw.append(f"[ADDED: {part.value}]")
        elif part.removed:
            raw.append(f"[REMOVED: {part.value}]")
        else:
            raw.append(part.value)

    return Sentence(
        id=f"sentence-{index}",
        parts=list(parts),
        has_edits=has_edits,
        raw_text=''.join(raw),
    )


def _fragment(segment: DiffSegment, value: str) -> DiffSegment:
    return DiffSegment(
        value=value,
        added=segment.added,
        removed=segment.removed,
        formatting=segment.formatting,
        change_id=segment.change_id,
    )


def segment_into_sentences(segments: Sequence[DiffSegment]) -> List[Sentence]:
    """
    Split a segment sequence into sentences.

    Args:
        segments: Annotated diff segments in document order

    Returns:
        Sentences with ids sentence-0, sentence-1, ...; leftover parts
        after the last terminator form a final sentence
    """
    full_text = ''.join(s.value for s in segments)
    boundaries = iter_sentence_boundaries(full_text)
    next_boundary = next(boundaries, None)

    sentences: List[Sentence] = []
    current: List[DiffSegment] = []
    offset = 0

    for segment in segments:
        seg_start = offset
        seg_end = offset + len(segment.value)
        cursor = seg_start

        # A segment may contain several boundaries
        while next_boundary is not None and next_boundary <= seg_end:
            if next_boundary > cursor:
                current.append(_fragment(segment, segment.value[cursor - seg_start:next_boundary - seg_start]))
                cursor = next_boundary
            if current:
                sentences.append(build_sentence(len(sentences), current))
                current = []
            next_boundary = next(boundaries, None)

        if cursor < seg_end:
            current.append(_fragment(segment, segment.value[cursor - seg_start:]))
        offset = seg_end

    if current:
        sentences.append(build_sentence(len(sentences), current))

    return sentences
