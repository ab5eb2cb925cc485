"""
Tests for the Sentence Segmenter
================================
"""

from redline.models import DiffSegment, FormattingFlags
from redline.sentences import build_sentence, iter_sentence_boundaries, segment_into_sentences


def _texts(sentences):
    return [s.text for s in sentences]


class TestBoundaries:
    """Tests for the boundary scan."""

    def test_terminators_with_trailing_whitespace(self):
        assert list(iter_sentence_boundaries("One. Two! Three?")) == [5, 10, 16]

    def test_decimal_is_not_a_boundary(self):
        assert list(iter_sentence_boundaries("Interest of 1.5% per month")) == []

    def test_repeated_terminators(self):
        assert list(iter_sentence_boundaries("Wait?! Yes.")) == [7, 11]

    def test_newline_counts_as_whitespace(self):
        assert list(iter_sentence_boundaries("Title.\nBody")) == [7]


class TestSegmentIntoSentences:
    """Tests for grouping segments into sentences."""

    def test_single_segment_cut(self):
        sentences = segment_into_sentences([DiffSegment(value="One. Two")])
        assert _texts(sentences) == ["One. ", "Two"]
        assert [s.id for s in sentences] == ["sentence-0", "sentence-1"]

    def test_no_terminator_single_sentence(self):
        segments = [
            DiffSegment(value="no "),
            DiffSegment(value="punctuation", added=True),
            DiffSegment(value=" at all"),
        ]
        sentences = segment_into_sentences(segments)
        assert len(sentences) == 1
        assert sentences[0].parts == segments

    def test_empty(self):
        assert segment_into_sentences([]) == []

    def test_segment_spanning_boundaries(self):
        segments = [DiffSegment(value="A. B. C", added=True, change_id="change-0-add")]
        sentences = segment_into_sentences(segments)
        assert _texts(sentences) == ["A. ", "B. ", "C"]
        for sentence in sentences:
            assert sentence.parts[0].added
            assert sentence.parts[0].change_id == "change-0-add"

    def test_boundary_inside_later_segment(self):
        segments = [
            DiffSegment(value="Due in "),
            DiffSegment(value="30", removed=True),
            DiffSegment(value="45", added=True),
            DiffSegment(value=" days. Interest applies."),
        ]
        sentences = segment_into_sentences(segments)
        assert _texts(sentences) == ["Due in 3045 days. ", "Interest applies."]
        assert sentences[0].has_edits
        assert not sentences[1].has_edits

    def test_coverage(self):
        segments = [
            DiffSegment(value="First clause. Sec"),
            DiffSegment(value="ond", removed=True, formatting=FormattingFlags(bold=True)),
            DiffSegment(value="ond clause! Third?", added=True),
            DiffSegment(value="\nFourth"),
        ]
        sentences = segment_into_sentences(segments)
        rebuilt = ''.join(part.value for s in sentences for part in s.parts)
        assert rebuilt == ''.join(s.value for s in segments)

    def test_formatting_carried_onto_fragments(self):
        bold = FormattingFlags(bold=True)
        sentences = segment_into_sentences([DiffSegment(value="A. B.", formatting=bold)])
        assert all(s.parts[0].formatting == bold for s in sentences)


class TestBuildSentence:
    """Tests for edit detection and model text."""

    def test_replacement_mid_sentence_has_edits(self):
        sentence = build_sentence(0, [
            DiffSegment(value="Net "),
            DiffSegment(value="30", removed=True),
            DiffSegment(value="45", added=True),
            DiffSegment(value=" days."),
        ])
        assert sentence.has_edits
        assert sentence.raw_text == "Net [REMOVED: 30][ADDED: 45] days."

    def test_whitespace_only_change_is_not_an_edit(self):
        sentence = build_sentence(2, [DiffSegment(value="a"), DiffSegment(value="  ", added=True)])
        assert sentence.id == "sentence-2"
        assert not sentence.has_edits

    def test_to_dict(self):
        data = build_sentence(0, [DiffSegment(value="x")]).to_dict()
        assert data == {
            'id': 'sentence-0',
            'parts': [{'value': 'x'}],
            'hasEdits': False,
            'rawText': 'x',
        }
