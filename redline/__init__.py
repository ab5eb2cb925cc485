"""
Redline Module v1.0.0
=====================
Formatting-aware redline comparison of two versions of a document.

Features:
- Character- or word-level diff of plain text, HTML or editor JSON
- Bold/italic/underline carried onto every diff fragment
- Sentence grouping with edit detection for model summaries
- HTML, raw markup and clipboard renderings
- Word (.docx) import and tracked-changes export, PDF export
- Playbook rule extraction
"""

from .routes import redline_blueprint
from .differ import RedlineDiffer, compute_diff, get_diff_stats
from .extractor import extract
from .reconciler import reconcile
from .sentences import segment_into_sentences
from .pipeline import build_redline
from .models import (
    DiffMode,
    FormattingFlags,
    FormattingRange,
    PlainExtraction,
    DiffSegment,
    DiffStats,
    Sentence,
    SummaryItem,
    SummaryResult,
    RedlineResult
)

__version__ = "1.0.0"
__all__ = [
    'redline_blueprint',
    'RedlineDiffer',
    'compute_diff',
    'get_diff_stats',
    'extract',
    'reconcile',
    'segment_into_sentences',
    'build_redline',
    'DiffMode',
    'FormattingFlags',
    'FormattingRange',
    'PlainExtraction',
    'DiffSegment',
    'DiffStats',
    'Sentence',
    'SummaryItem',
    'SummaryResult',
    'RedlineResult'
]
