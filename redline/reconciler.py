"""
Formatting Reconciler v1.0.0
============================
Maps text-only diff segments back onto the formatting ranges of the
side they were read from, splitting segments at formatting boundaries
and assigning change ids.

Reading rules:
- added segments read the modified side and advance the modified cursor
- removed segments read the original side and advance the original cursor
- equal segments read the modified side (the document being edited) and
  advance both cursors

The pass is a fold over an immutable ReconcileState; each call starts
from a fresh state, so concurrent calls never share cursors.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from config_logging import get_logger

from .extractor import validate_extraction
from .models import DiffSegment, FormattingFlags, FormattingRange

logger = get_logger('redline.reconciler')


class ReconcileState(NamedTuple):
    """Cursor state threaded through the fold."""
    original_offset: int = 0
    modified_offset: int = 0
    next_change_id: int = 0


def make_change_id(counter: int, segment: DiffSegment) -> str:
    """Identifier of one logical edit, e.g. 'change-3-add'."""
    return f"change-{counter}-{'add' if segment.added else 'remove'}"


def formatting_for_span(
    start: int,
    end: int,
    ranges: Sequence[FormattingRange]
) -> Optional[FormattingFlags]:
    """
    Union of the flags of every range that fully contains [start, end).

    Partially overlapping ranges contribute nothing.

    Returns:
        The merged flags, or None when no flag applies
    """
    flags = FormattingFlags()
    for fmt_range in ranges:
        if fmt_range.contains(start, end):
            flags = flags.merge(fmt_range.formatting)
    return None if flags.is_empty else flags


def split_points(
    start: int,
    end: int,
    ranges: Sequence[FormattingRange]
) -> List[int]:
    """
    Cut points for the span [start, end): its endpoints plus every range
    boundary strictly inside it, sorted.
    """
    inner = set()
    for fmt_range in ranges:
        for boundary in (fmt_range.start, fmt_range.end):
            if start < boundary < end:
                inner.add(boundary)
    return [start] + sorted(inner) + [end]


def split_segment(
    segment: DiffSegment,
    offset: int,
    ranges: Sequence[FormattingRange],
    change_id: Optional[str] = None
) -> List[DiffSegment]:
    """
    Cut one segment at formatting boundaries.

    Args:
        segment: Segment to annotate
        offset: Offset of the segment's first character on the side it is read from
        ranges: Formatting ranges of that side
        change_id: Id shared by every resulting piece (added/removed only)

    Returns:
        Pieces each carrying one consistent formatting state
    """
    end = offset + len(segment.value)
    points = split_points(offset, end, ranges)

    pieces = []
    for piece_start, piece_end in zip(points, points[1:]):
        pieces.append(DiffSegment(
            value=segment.value[piece_start - offset:piece_end - offset],
            added=segment.added,
            removed=segment.removed,
            formatting=formatting_for_span(piece_start, piece_end, ranges),
            change_id=change_id,
        ))
    return pieces


def reconcile_step(
    state: ReconcileState,
    segment: DiffSegment,
    original_ranges: Sequence[FormattingRange],
    modified_ranges: Sequence[FormattingRange]
) -> Tuple[ReconcileState, List[DiffSegment]]:
    """Annotate one segment; returns the advanced state and its pieces."""
    length = len(segment.value)

    if segment.added:
        change_id = make_change_id(state.next_change_id, segment)
        pieces = split_segment(segment, state.modified_offset, modified_ranges, change_id)
        return state._replace(
            modified_offset=state.modified_offset + length,
            next_change_id=state.next_change_id + 1,
        ), pieces

    if segment.removed:
        change_id = make_change_id(state.next_change_id, segment)
        pieces = split_segment(segment, state.original_offset, original_ranges, change_id)
        return state._replace(
            original_offset=state.original_offset + length,
            next_change_id=state.next_change_id + 1,
        ), pieces

    pieces = split_segment(segment, state.modified_offset, modified_ranges)
    return state._replace(
        original_offset=state.original_offset + length,
        modified_offset=state.modified_offset + length,
    ), pieces


def reconcile(
    segments: Sequence[DiffSegment],
    original_ranges: Sequence[FormattingRange],
    modified_ranges: Sequence[FormattingRange],
    original_text: Optional[str] = None,
    modified_text: Optional[str] = None
) -> List[DiffSegment]:
    """
    Re-annotate diff segments with formatting and change ids.

    When original_text / modified_text are given, the ranges are validated
    against them and the segments are checked to reconstruct both texts;
    mismatches are logged because they mean the formatting is misaligned.

    Returns:
        New segment list; the input is not modified
    """
    if original_text is not None:
        original_ranges = validate_extraction(original_text, list(original_ranges), 'original')
    if modified_text is not None:
        modified_ranges = validate_extraction(modified_text, list(modified_ranges), 'modified')

    state = ReconcileState()
    output: List[DiffSegment] = []
    for segment in segments:
        state, pieces = reconcile_step(state, segment, original_ranges, modified_ranges)
        output.extend(pieces)

    _check_alignment(segments, original_text, modified_text)

    logger.debug(f"Reconciled {len(segments)} segments into {len(output)}",
                 change_count=state.next_change_id)
    return output


def _check_alignment(
    segments: Sequence[DiffSegment],
    original_text: Optional[str],
    modified_text: Optional[str]
):
    if original_text is not None:
        rebuilt = ''.join(s.value for s in segments if not s.added)
        if rebuilt != original_text:
            logger.warning("Diff segments do not reconstruct the original text",
                           expected_length=len(original_text), actual_length=len(rebuilt))
    if modified_text is not None:
        rebuilt = ''.join(s.value for s in segments if not s.removed)
        if rebuilt != modified_text:
            logger.warning("Diff segments do not reconstruct the modified text",
                           expected_length=len(modified_text), actual_length=len(rebuilt))
