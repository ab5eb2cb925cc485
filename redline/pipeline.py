"""
Redline Pipeline
================
extract (both sides) -> diff -> reconcile -> sentence grouping.

Everything is recomputed from scratch on each call.
"""

from typing import Any, Optional, Union

from config_logging import get_logger, get_config, handle_errors, ValidationError

from .differ import RedlineDiffer, get_diff_stats
from .extractor import extract
from .models import DiffMode, RedlineResult
from .reconciler import reconcile
from .sentences import segment_into_sentences

logger = get_logger('redline.pipeline')


@handle_errors(logger)
def build_redline(
    original: Any,
    modified: Any,
    mode: Optional[Union[str, DiffMode]] = None,
    differ: Optional[RedlineDiffer] = None
) -> RedlineResult:
    """
    Compare two pieces of content.

    Args:
        original: Original content (plain text, HTML or editor JSON)
        modified: Modified content (plain text, HTML or editor JSON)
        mode: 'char' or 'word' (defaults to the configured diff mode)
        differ: Differ to reuse (a new one is created otherwise)

    Returns:
        RedlineResult with reconciled segments, stats and sentences
    """
    try:
        mode = DiffMode.parse(mode or get_config().diff_mode)
    except ValueError:
        raise ValidationError(f"Unknown diff mode: {mode!r}", field='mode')
    differ = differ or RedlineDiffer()

    with logger.log_operation('build_redline', mode=mode.value):
        original_extraction = extract(original)
        modified_extraction = extract(modified)

        raw_segments = differ.diff(
            original_extraction.plain_text,
            modified_extraction.plain_text,
            mode
        )
        segments = reconcile(
            raw_segments,
            original_extraction.formatting_ranges,
            modified_extraction.formatting_ranges,
            original_text=original_extraction.plain_text,
            modified_text=modified_extraction.plain_text,
        )

    return RedlineResult(
        segments=segments,
        stats=get_diff_stats(segments),
        sentences=segment_into_sentences(segments),
        mode=mode,
    )
