"""
Redline Differ v2.0.0
=====================
Change segments between two plain-text strings.

Two granularities:
- char (default): diff-match-patch character diff followed by semantic
  cleanup, which folds noisy single-character edits into readable blocks
- word: difflib.SequenceMatcher over word / whitespace / punctuation tokens

v2.0.0: Emits flat segment sequences instead of aligned line rows
v1.0.1: Added comprehensive logging for diagnostics
"""

import re
import difflib
from typing import List, Optional, Union

import diff_match_patch as dmp_module

from config_logging import get_logger, get_config, ValidationError

from .models import DiffSegment, DiffMode, DiffStats

logger = get_logger('redline.differ')

# Runs of word characters, runs of whitespace, runs of other punctuation
_TOKEN_RE = re.compile(r'\w+|\s+|[^\w\s]+')

# diff-match-patch operation codes
DIFF_DELETE = -1
DIFF_INSERT = 1
DIFF_EQUAL = 0


class RedlineDiffer:
    """
    Diff engine producing equal / added / removed segments.

    Instances hold no per-call state, so one differ can serve
    any number of comparisons.
    """

    def __init__(self, timeout: Optional[float] = None, edit_cost: int = 4):
        """
        Initialize the differ.

        Args:
            timeout: diff-match-patch deadline in seconds; 0 disables it
                     (defaults to the configured diff_timeout)
            edit_cost: Cost of an empty edit for efficiency cleanup
        """
        if timeout is None:
            timeout = get_config().diff_timeout
        self.dmp = dmp_module.diff_match_patch()
        self.dmp.Diff_Timeout = timeout
        self.dmp.Diff_EditCost = edit_cost

    def diff(
        self,
        original: str,
        modified: str,
        mode: Union[str, DiffMode] = DiffMode.CHAR
    ) -> List[DiffSegment]:
        """
        Compare two strings.

        Args:
            original: Original plain text
            modified: Modified plain text
            mode: 'char' or 'word'

        Returns:
            Ordered segments; joining non-removed values gives `modified`,
            joining non-added values gives `original`
        """
        try:
            mode = DiffMode.parse(mode)
        except ValueError:
            raise ValidationError(f"Unknown diff mode: {mode!r}", field='mode')

        original = original or ""
        modified = modified or ""
        if not original and not modified:
            return []

        if mode is DiffMode.WORD:
            segments = self._diff_words(original, modified)
        else:
            segments = self._diff_chars(original, modified)

        logger.debug(f"Diff complete: {len(segments)} segments",
                     mode=mode.value, original_length=len(original),
                     modified_length=len(modified))
        return segments

    def _diff_chars(self, original: str, modified: str) -> List[DiffSegment]:
        """Character diff using diff-match-patch with semantic cleanup."""
        diffs = self.dmp.diff_main(original, modified)
        self.dmp.diff_cleanupSemantic(diffs)

        segments = []
        for op, text in diffs:
            if op == DIFF_EQUAL:
                segments.append(DiffSegment(value=text))
            elif op == DIFF_DELETE:
                segments.append(DiffSegment(value=text, removed=True))
            elif op == DIFF_INSERT:
                segments.append(DiffSegment(value=text, added=True))
        return _coalesce(segments)

    def _diff_words(self, original: str, modified: str) -> List[DiffSegment]:
        """Token diff using difflib; a replaced run yields removed then added."""
        old_tokens = tokenize(original)
        new_tokens = tokenize(modified)

        segments = []
        matcher = difflib.SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                segments.append(DiffSegment(value=''.join(old_tokens[i1:i2])))
            elif tag == 'delete':
                segments.append(DiffSegment(value=''.join(old_tokens[i1:i2]), removed=True))
            elif tag == 'insert':
                segments.append(DiffSegment(value=''.join(new_tokens[j1:j2]), added=True))
            elif tag == 'replace':
                segments.append(DiffSegment(value=''.join(old_tokens[i1:i2]), removed=True))
                segments.append(DiffSegment(value=''.join(new_tokens[j1:j2]), added=True))

        return _coalesce(segments)


def tokenize(text: str) -> List[str]:
    """
    Split text into word, whitespace and punctuation tokens.

    Joining the tokens always gives back the input.
    """
    return _TOKEN_RE.findall(text)


def _coalesce(segments: List[DiffSegment]) -> List[DiffSegment]:
    """Merge neighbouring segments of the same kind and drop empty ones."""
    merged: List[DiffSegment] = []
    for segment in segments:
        if not segment.value:
            continue
        if merged and merged[-1].kind == segment.kind:
            previous = merged.pop()
            segment = DiffSegment(
                value=previous.value + segment.value,
                added=segment.added,
                removed=segment.removed,
            )
        merged.append(segment)
    return merged


def compute_diff(
    original: str,
    modified: str,
    mode: Union[str, DiffMode] = DiffMode.CHAR
) -> List[DiffSegment]:
    """
    Compute the change segments between two strings.

    Args:
        original: Original plain text
        modified: Modified plain text
        mode: 'char' (default) or 'word'

    Returns:
        List of DiffSegment without formatting or change ids
    """
    return RedlineDiffer().diff(original, modified, mode)


def get_diff_stats(segments: List[DiffSegment]) -> DiffStats:
    """Count added and removed segments."""
    return DiffStats(
        insertions=sum(1 for s in segments if s.added),
        deletions=sum(1 for s in segments if s.removed),
    )
