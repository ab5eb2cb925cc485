"""
Tests for the Redline Differ
============================
"""

import pytest

from config_logging import ValidationError
from redline.differ import RedlineDiffer, compute_diff, get_diff_stats, tokenize
from redline.models import DiffMode, DiffSegment, DiffStats


PAIRS = [
    ("Payment is due Net 30 days.", "Payment is due Net 45 days."),
    ("The quick brown fox", "The slow brown fox jumps"),
    ("Line one\nLine two\n", "Line one\nLine 2\nLine three"),
    ("", "Brand new text."),
    ("Removed entirely.", ""),
    ("1.5% per month", "1.0% per month, compounded"),
]


def _original(segments):
    return ''.join(s.value for s in segments if not s.added)


def _modified(segments):
    return ''.join(s.value for s in segments if not s.removed)


@pytest.fixture
def differ():
    return RedlineDiffer(timeout=0)


class TestCharDiff:
    """Tests for character-level diffs."""

    def test_identical(self, differ):
        assert differ.diff("abc", "abc") == [DiffSegment(value="abc")]

    def test_both_empty(self, differ):
        assert differ.diff("", "") == []

    def test_insert_only(self, differ):
        assert differ.diff("", "new") == [DiffSegment(value="new", added=True)]

    def test_delete_only(self, differ):
        assert differ.diff("old", "") == [DiffSegment(value="old", removed=True)]

    def test_replacement(self, differ):
        segments = differ.diff("The quick brown fox", "The slow brown fox")
        assert any(s.removed and "quick" in s.value for s in segments)
        assert any(s.added and "slow" in s.value for s in segments)
        assert segments[0] == DiffSegment(value="The ")

    @pytest.mark.parametrize("original,modified", PAIRS)
    def test_reconstruction(self, differ, original, modified):
        segments = differ.diff(original, modified)
        assert _original(segments) == original
        assert _modified(segments) == modified

    def test_no_empty_or_duplicate_kinds(self, differ):
        segments = differ.diff("Net 30 days from invoice", "Net 45 days from receipt of invoice")
        assert all(s.value for s in segments)
        for previous, current in zip(segments, segments[1:]):
            assert previous.kind != current.kind

    def test_no_formatting_or_ids(self, differ):
        for segment in differ.diff("a b c", "a x c"):
            assert segment.formatting is None
            assert segment.change_id is None


class TestWordDiff:
    """Tests for word-level diffs."""

    def test_payment_terms(self, differ):
        segments = differ.diff("Payment is due Net 30 days.", "Payment is due Net 45 days.", 'word')
        assert segments == [
            DiffSegment(value="Payment is due Net "),
            DiffSegment(value="30", removed=True),
            DiffSegment(value="45", added=True),
            DiffSegment(value=" days."),
        ]

    def test_whole_words_only(self, differ):
        segments = differ.diff("within thirty days", "within thirteen days", DiffMode.WORD)
        changed = [s.value for s in segments if s.is_change]
        assert changed == ["thirty", "thirteen"]

    @pytest.mark.parametrize("original,modified", PAIRS)
    def test_reconstruction(self, differ, original, modified):
        segments = differ.diff(original, modified, 'word')
        assert _original(segments) == original
        assert _modified(segments) == modified

    def test_tokenize_round_trip(self):
        text = "Net 30 days, 1.5% per-month!\n  Next."
        assert ''.join(tokenize(text)) == text
        assert tokenize("a, b") == ["a", ",", " ", "b"]


class TestDifferHelpers:
    """Tests for module-level helpers."""

    def test_unknown_mode(self, differ):
        with pytest.raises(ValidationError):
            differ.diff("a", "b", 'sentence')

    def test_compute_diff(self):
        assert compute_diff("same", "same") == [DiffSegment(value="same")]

    def test_stats(self):
        segments = [
            DiffSegment(value="a"),
            DiffSegment(value="b", removed=True),
            DiffSegment(value="c", added=True),
            DiffSegment(value="d", added=True),
        ]
        assert get_diff_stats(segments) == DiffStats(insertions=2, deletions=1)
        assert get_diff_stats([]) == DiffStats()

    def test_segment_cannot_be_both(self):
        with pytest.raises(ValueError):
            DiffSegment(value="x", added=True, removed=True)
