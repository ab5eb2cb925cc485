"""
Tests for the Formatting Reconciler
===================================
"""

from redline.models import DiffSegment, FormattingFlags, FormattingRange
from redline.reconciler import (
    ReconcileState, formatting_for_span, make_change_id, reconcile, reconcile_step,
    split_points, split_segment
)


BOLD = FormattingFlags(bold=True)
ITALIC = FormattingFlags(italic=True)


class TestSpanHelpers:
    """Tests for range lookups and cut points."""

    def test_formatting_requires_full_containment(self):
        ranges = [FormattingRange(0, 5, BOLD)]
        assert formatting_for_span(0, 5, ranges) == BOLD
        assert formatting_for_span(1, 3, ranges) == BOLD
        assert formatting_for_span(3, 7, ranges) is None

    def test_overlapping_ranges_merge(self):
        ranges = [FormattingRange(0, 10, BOLD), FormattingRange(2, 6, ITALIC)]
        assert formatting_for_span(2, 6, ranges) == FormattingFlags(bold=True, italic=True)

    def test_split_points(self):
        ranges = [FormattingRange(2, 4, BOLD), FormattingRange(0, 10, ITALIC)]
        assert split_points(0, 6, ranges) == [0, 2, 4, 6]
        assert split_points(5, 8, ranges) == [5, 8]

    def test_split_segment(self):
        segment = DiffSegment(value="Hello world")
        pieces = split_segment(segment, 0, [FormattingRange(0, 5, BOLD)])
        assert pieces == [
            DiffSegment(value="Hello", formatting=BOLD),
            DiffSegment(value=" world"),
        ]

    def test_change_id_format(self):
        assert make_change_id(3, DiffSegment(value="x", added=True)) == "change-3-add"
        assert make_change_id(0, DiffSegment(value="x", removed=True)) == "change-0-remove"


class TestReconcileStep:
    """Tests for the fold step."""

    def test_equal_advances_both_cursors(self):
        state, pieces = reconcile_step(ReconcileState(), DiffSegment(value="abc"), [], [])
        assert state == ReconcileState(original_offset=3, modified_offset=3, next_change_id=0)
        assert pieces[0].change_id is None

    def test_added_advances_modified_only(self):
        state, pieces = reconcile_step(
            ReconcileState(2, 2, 4), DiffSegment(value="xy", added=True), [], []
        )
        assert state == ReconcileState(original_offset=2, modified_offset=4, next_change_id=5)
        assert pieces == [DiffSegment(value="xy", added=True, change_id="change-4-add")]

    def test_removed_advances_original_only(self):
        state, _ = reconcile_step(ReconcileState(), DiffSegment(value="gone", removed=True), [], [])
        assert state == ReconcileState(original_offset=4, modified_offset=0, next_change_id=1)


class TestReconcile:
    """Tests for whole-sequence reconciliation."""

    def test_identical_bold_text_splits(self):
        ranges = [FormattingRange(0, 5, BOLD)]
        result = reconcile([DiffSegment(value="Hello world")], ranges, ranges,
                           "Hello world", "Hello world")
        assert result == [
            DiffSegment(value="Hello", formatting=BOLD),
            DiffSegment(value=" world"),
        ]

    def test_each_side_reads_its_own_ranges(self):
        # original "Net 30 days" with "30" bold; modified "Net 45 days" with "45" italic
        segments = [
            DiffSegment(value="Net "),
            DiffSegment(value="30", removed=True),
            DiffSegment(value="45", added=True),
            DiffSegment(value=" days"),
        ]
        result = reconcile(segments, [FormattingRange(4, 6, BOLD)], [FormattingRange(4, 6, ITALIC)])
        assert result[1] == DiffSegment(value="30", removed=True, formatting=BOLD,
                                        change_id="change-0-remove")
        assert result[2] == DiffSegment(value="45", added=True, formatting=ITALIC,
                                        change_id="change-1-add")
        assert result[3].formatting is None

    def test_equal_segments_take_modified_formatting(self):
        segments = [DiffSegment(value="Same")]
        result = reconcile(segments, [FormattingRange(0, 4, BOLD)], [])
        assert result == [DiffSegment(value="Same")]

    def test_split_pieces_share_change_id(self):
        # modified "Hello big world", "big" bold
        segments = [DiffSegment(value="Hello"), DiffSegment(value=" big world", added=True)]
        result = reconcile(segments, [], [FormattingRange(6, 9, BOLD)])
        added = [s for s in result if s.added]
        assert [s.value for s in added] == [" ", "big", " world"]
        assert {s.change_id for s in added} == {"change-0-add"}
        assert added[1].formatting == BOLD

    def test_text_preserved(self):
        segments = [
            DiffSegment(value="ab"),
            DiffSegment(value="cd", removed=True),
            DiffSegment(value="ef", added=True),
            DiffSegment(value="gh"),
        ]
        ranges = [FormattingRange(1, 3, BOLD), FormattingRange(3, 5, ITALIC)]
        result = reconcile(segments, ranges, ranges)
        assert ''.join(s.value for s in result) == "abcdefgh"
        assert ''.join(s.value for s in result if not s.added) == "abcdgh"
        assert ''.join(s.value for s in result if not s.removed) == "abefgh"

    def test_formatting_is_contained(self):
        modified_text = "ab ef gh"
        ranges = [FormattingRange(1, 4, BOLD)]
        segments = [DiffSegment(value="ab "), DiffSegment(value="ef", added=True),
                    DiffSegment(value=" gh")]
        offset = 0
        for piece in reconcile(segments, [], ranges, modified_text=modified_text):
            end = offset + len(piece.value)
            if piece.formatting is not None:
                assert any(r.contains(offset, end) for r in ranges)
            offset = end

    def test_misaligned_ranges_dropped(self):
        result = reconcile([DiffSegment(value="abc")], [], [FormattingRange(1, 99, BOLD)],
                           original_text="abc", modified_text="abc")
        assert result == [DiffSegment(value="abc")]

    def test_input_not_modified(self):
        segments = [DiffSegment(value="x", added=True)]
        reconcile(segments, [], [])
        assert segments == [DiffSegment(value="x", added=True)]

    def test_counter_restarts_per_call(self):
        segments = [DiffSegment(value="x", added=True)]
        first = reconcile(segments, [], [])
        second = reconcile(segments, [], [])
        assert first[0].change_id == second[0].change_id == "change-0-add"
