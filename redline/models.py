"""
Redline Models v1.0.0
=====================
Data classes shared by the extraction, diff, reconciliation,
sentence segmentation and rendering stages.

Wire format (to_dict) uses camelCase keys so the payloads can be
consumed directly by the editor front end.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Any, Union


class DiffMode(Enum):
    """Granularity of the diff engine."""
    CHAR = 'char'
    WORD = 'word'

    @classmethod
    def parse(cls, value: Union[str, 'DiffMode', None]) -> 'DiffMode':
        """Accept a DiffMode or its string value ('char' / 'word')."""
        if isinstance(value, DiffMode):
            return value
        if value is None:
            return cls.CHAR
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class FormattingFlags:
    """
    Bold / italic / underline state of a run of text.

    None means "not specified", which is distinct from False.
    """
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        """True when no flag is switched on."""
        return not (self.bold or self.italic or self.underline)

    def merge(self, other: Optional['FormattingFlags']) -> 'FormattingFlags':
        """Union of the flags that are switched on in either side."""
        if other is None:
            return self
        return FormattingFlags(
            bold=True if (self.bold or other.bold) else None,
            italic=True if (self.italic or other.italic) else None,
            underline=True if (self.underline or other.underline) else None,
        )

    def to_dict(self) -> Dict[str, bool]:
        """Convert to dictionary, omitting unspecified keys."""
        return {
            key: value
            for key, value in (
                ('bold', self.bold),
                ('italic', self.italic),
                ('underline', self.underline),
            )
            if value is not None
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['FormattingFlags']:
        if not data:
            return None
        return cls(
            bold=data.get('bold'),
            italic=data.get('italic'),
            underline=data.get('underline'),
        )


@dataclass(frozen=True)
class FormattingRange:
    """
    Formatting over the half-open span [start, end) of a plain text.

    Attributes:
        start: First character offset covered
        end: Offset one past the last covered character
        formatting: Flags that apply to the whole span
    """
    start: int
    end: int
    formatting: FormattingFlags

    def contains(self, start: int, end: int) -> bool:
        """True when [start, end) lies entirely inside this range."""
        return self.start <= start and end <= self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start,
            'end': self.end,
            'formatting': self.formatting.to_dict(),
        }


@dataclass
class PlainExtraction:
    """Reader-visible text of a piece of content plus its formatting ranges."""
    plain_text: str
    formatting_ranges: List[FormattingRange] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'plainText': self.plain_text,
            'formattingRanges': [r.to_dict() for r in self.formatting_ranges],
        }


@dataclass(frozen=True)
class DiffSegment:
    """
    A contiguous run of text tagged as unchanged, inserted or deleted.

    Attributes:
        value: Text of the segment
        added: Segment only exists in the modified text
        removed: Segment only exists in the original text
        formatting: Formatting shared by every character of the segment
        change_id: Identifier shared by all fragments of one logical edit
    """
    value: str
    added: bool = False
    removed: bool = False
    formatting: Optional[FormattingFlags] = None
    change_id: Optional[str] = None

    def __post_init__(self):
        if self.added and self.removed:
            raise ValueError("A diff segment cannot be both added and removed")

    @property
    def is_change(self) -> bool:
        return self.added or self.removed

    @property
    def kind(self) -> str:
        if self.added:
            return 'added'
        if self.removed:
            return 'removed'
        return 'equal'

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {'value': self.value}
        if self.added:
            data['added'] = True
        if self.removed:
            data['removed'] = True
        if self.formatting is not None and self.formatting.to_dict():
            data['formatting'] = self.formatting.to_dict()
        if self.change_id is not None:
            data['changeId'] = self.change_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DiffSegment':
        return cls(
            value=str(data.get('value', '')),
            added=bool(data.get('added', False)),
            removed=bool(data.get('removed', False)),
            formatting=FormattingFlags.from_dict(data.get('formatting')),
            change_id=data.get('changeId'),
        )


@dataclass(frozen=True)
class DiffStats:
    """Number of added and removed segments (not characters)."""
    insertions: int = 0
    deletions: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {'insertions': self.insertions, 'deletions': self.deletions}


@dataclass
class Sentence:
    """
    Sentence-level grouping of diff segments.

    Attributes:
        id: Sequence-ordered identifier ("sentence-0", "sentence-1", ...)
        parts: Segments (or fragments of segments) forming the sentence
        has_edits: True when a part is added/removed with non-whitespace text
        raw_text: Text with [ADDED: ...] / [REMOVED: ...] markers for the model
    """
    id: str
    parts: List[DiffSegment] = field(default_factory=list)
    has_edits: bool = False
    raw_text: str = ""

    @property
    def text(self) -> str:
        return ''.join(p.value for p in self.parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'parts': [p.to_dict() for p in self.parts],
            'hasEdits': self.has_edits,
            'rawText': self.raw_text,
        }


@dataclass
class SummaryItem:
    """Plain-English description of the change in one sentence."""
    sentence_id: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {'sentenceId': self.sentence_id, 'description': self.description}


@dataclass
class SummaryResult:
    """Model-generated summary of all edited sentences."""
    items: List[SummaryItem] = field(default_factory=list)
    high_level_summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [i.to_dict() for i in self.items],
            'highLevelSummary': self.high_level_summary,
        }


@dataclass
class ClipboardPayload:
    """Rich and plain representations offered together on copy."""
    html: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {'html': self.html, 'text': self.text}


@dataclass
class WordImportResult:
    """
    Result of importing a .docx file.

    Attributes:
        text: Paragraph text joined with newlines
        html: Paragraphs rendered with <strong>/<em>/<u> markup
        formatting: Flags of every formatted run, in document order
    """
    text: str
    html: str
    formatting: List[FormattingFlags] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'html': self.html,
            'formatting': [f.to_dict() for f in self.formatting],
        }


@dataclass
class PlaybookEntry:
    """A discrete review rule extracted from a playbook document."""
    id: str
    text: str
    approved: bool = False
    source: str = ""
    original_index: int = 0
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'text': self.text,
            'approved': self.approved,
            'source': self.source,
            'originalIndex': self.original_index,
        }
        if self.category:
            data['category'] = self.category
        return data


@dataclass
class RedlineResult:
    """
    Complete comparison of two pieces of content.

    Attributes:
        segments: Reconciled segments (formatting + change ids)
        stats: Insertion/deletion segment counts
        sentences: Sentence grouping of the segments
        mode: Diff granularity used
    """
    segments: List[DiffSegment] = field(default_factory=list)
    stats: DiffStats = field(default_factory=DiffStats)
    sentences: List[Sentence] = field(default_factory=list)
    mode: DiffMode = DiffMode.CHAR

    @property
    def edited_sentences(self) -> List[Sentence]:
        return [s for s in self.sentences if s.has_edits]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mode': self.mode.value,
            'segments': [s.to_dict() for s in self.segments],
            'stats': self.stats.to_dict(),
            'sentences': [s.to_dict() for s in self.sentences],
        }
