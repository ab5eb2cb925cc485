"""
Word Document Codec v1.0.0
==========================
Imports .docx files as text + formatted HTML, and exports redlines as
.docx files with native Word revision marks (w:ins / w:del).

Import walks python-docx runs, so per-run bold/italic/underline survive
into the HTML the extractor consumes. Export writes the revision XML
directly because python-docx has no API for tracked changes.
"""

import io
import html
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_UNDERLINE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from config_logging import get_logger, get_config, DocumentCodecError

from .models import DiffSegment, FormattingFlags, WordImportResult
from .render import wrap_formatting

logger = get_logger('redline.word_codec')

EXPORT_TITLE = "Redline Comparison"
EMPTY_EXPORT_TEXT = "No changes to display."
DEFAULT_EXPORT_FILENAME = "redline-comparison.docx"

# Settings children that must come after w:trackRevisions
_SETTINGS_AFTER_TRACK_REVISIONS = {
    qn(tag) for tag in (
        'w:doNotTrackMoves', 'w:doNotTrackFormatting', 'w:documentProtection',
        'w:autoFormatOverride', 'w:styleLockTheme', 'w:styleLockQFSet',
        'w:defaultTabStop', 'w:autoHyphenation', 'w:consecutiveHyphenLimit',
        'w:hyphenationZone', 'w:doNotHyphenateCaps', 'w:showEnvelope',
        'w:summaryLength', 'w:clickAndTypeStyle', 'w:defaultTableStyle',
        'w:evenAndOddHeaders', 'w:bookFoldRevPrinting', 'w:bookFoldPrinting',
        'w:bookFoldPrintingSheets', 'w:drawingGridHorizontalSpacing',
        'w:drawingGridVerticalSpacing', 'w:displayHorizontalDrawingGridEvery',
        'w:displayVerticalDrawingGridEvery', 'w:doNotUseMarginsForDrawingGridOrigin',
        'w:drawingGridHorizontalOrigin', 'w:drawingGridVerticalOrigin',
        'w:doNotShadeFormData', 'w:noPunctuationKerning', 'w:characterSpacingControl',
        'w:printTwoOnOne', 'w:strictFirstAndLastChars', 'w:noLineBreaksAfter',
        'w:noLineBreaksBefore', 'w:savePreviewPicture', 'w:doNotValidateAgainstSchema',
        'w:saveInvalidXml', 'w:ignoreMixedContent', 'w:alwaysShowPlaceholderText',
        'w:doNotDemarcateInvalidXml', 'w:saveXmlDataOnly', 'w:useXSLTWhenSaving',
        'w:saveThroughXslt', 'w:showXMLTags', 'w:alwaysMergeEmptyNamespace',
        'w:updateFields', 'w:hdrShapeDefaults', 'w:footnotePr', 'w:endnotePr',
        'w:compat', 'w:docVars', 'w:rsids', 'w:attachedSchema', 'w:themeFontLang',
        'w:clrSchemeMapping', 'w:doNotIncludeSubdocsInStats',
        'w:doNotAutoCompressPictures', 'w:forceUpgrade', 'w:captions',
        'w:readModeInkLockDown', 'w:smartTagType', 'w:schemaLibrary',
        'w:shapeDefaults', 'w:doNotEmbedSmartTags', 'w:decimalSymbol', 'w:listSeparator',
    )
}


# =============================================================================
# IMPORT
# =============================================================================

def _run_flags(run) -> FormattingFlags:
    underline = run.underline
    has_underline = underline not in (None, False) and underline != WD_UNDERLINE.NONE
    return FormattingFlags(
        bold=True if run.bold else None,
        italic=True if run.italic else None,
        underline=True if has_underline else None,
    )


def import_word_document(data: bytes, filename: Optional[str] = None) -> WordImportResult:
    """
    Read a .docx file.

    Args:
        data: Raw file bytes
        filename: Original filename (logging only)

    Returns:
        WordImportResult with the newline-joined text of every non-blank
        paragraph, its HTML and the flags of every formatted run

    Raises:
        DocumentCodecError: the bytes are not a readable .docx file
    """
    try:
        document = Document(io.BytesIO(data))
    except Exception as e:
        logger.error(f"Error importing Word document: {e}", source_file=filename)
        raise DocumentCodecError(
            "Failed to import Word document. Please ensure it is a valid .docx file.",
            operation='import', filename=filename
        ) from e

    texts: List[str] = []
    paragraphs_html: List[str] = []
    formatting: List[FormattingFlags] = []

    for paragraph in document.paragraphs:
        # Blank paragraphs carry no visible text in either view
        if not paragraph.text.strip():
            continue
        texts.append(paragraph.text)
        pieces = []
        for run in paragraph.runs:
            if not run.text:
                continue
            flags = _run_flags(run)
            if not flags.is_empty:
                formatting.append(flags)
            pieces.append(wrap_formatting(html.escape(run.text), flags))
        paragraphs_html.append(f"<p>{''.join(pieces)}</p>")

    logger.info(f"Imported Word document with {len(texts)} paragraphs",
                source_file=filename, formatted_runs=len(formatting))

    return WordImportResult(
        text='\n'.join(texts),
        html=''.join(paragraphs_html),
        formatting=formatting,
    )


# =============================================================================
# EXPORT
# =============================================================================

def _enable_track_revisions(document):
    """Add <w:trackRevisions/> to the settings part in schema order."""
    settings = document.settings.element
    if settings.find(qn('w:trackRevisions')) is not None:
        return
    element = OxmlElement('w:trackRevisions')
    for index, child in enumerate(settings):
        if child.tag in _SETTINGS_AFTER_TRACK_REVISIONS:
            settings.insert(index, element)
            return
    settings.append(element)


def _run_properties(formatting: Optional[FormattingFlags]):
    if formatting is None or formatting.is_empty:
        return None
    rpr = OxmlElement('w:rPr')
    if formatting.bold:
        rpr.append(OxmlElement('w:b'))
    if formatting.italic:
        rpr.append(OxmlElement('w:i'))
    if formatting.underline:
        underline = OxmlElement('w:u')
        underline.set(qn('w:val'), 'single')
        rpr.append(underline)
    return rpr


def _make_run(text: str, formatting: Optional[FormattingFlags], deleted: bool = False):
    run = OxmlElement('w:r')
    rpr = _run_properties(formatting)
    if rpr is not None:
        run.append(rpr)
    text_element = OxmlElement('w:delText' if deleted else 'w:t')
    text_element.set(qn('xml:space'), 'preserve')
    text_element.text = text
    run.append(text_element)
    return run


def _make_revision(tag: str, run, revision_id: int, author: str, date: str):
    revision = OxmlElement(tag)
    revision.set(qn('w:id'), str(revision_id))
    revision.set(qn('w:author'), author)
    revision.set(qn('w:date'), date)
    revision.append(run)
    return revision


def export_word_document(
    segments: Sequence[DiffSegment],
    author: Optional[str] = None,
    date: Optional[datetime] = None
) -> bytes:
    """
    Build a .docx redline with native insertion/deletion revisions.

    Args:
        segments: Annotated diff segments
        author: Revision author (defaults to the configured author tag)
        date: Revision timestamp (defaults to now, UTC)

    Returns:
        The .docx file as bytes

    Raises:
        DocumentCodecError: the document could not be written
    """
    author = author or get_config().revision_author
    stamp = (date or datetime.now(timezone.utc)).strftime('%Y-%m-%dT%H:%M:%SZ')

    try:
        document = Document()
        _enable_track_revisions(document)

        heading = document.add_heading(EXPORT_TITLE, level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

        revision_id = 0
        body_paragraphs = 0
        current = []

        def flush():
            nonlocal current, body_paragraphs
            paragraph = document.add_paragraph()
            for element in current:
                paragraph._p.append(element)
            current = []
            body_paragraphs += 1

        for segment in segments:
            lines = segment.value.split('\n')
            for index, line in enumerate(lines):
                if index > 0:
                    flush()
                if not line:
                    continue
                if segment.removed:
                    element = _make_revision('w:del', _make_run(line, segment.formatting, deleted=True),
                                             revision_id, author, stamp)
                    revision_id += 1
                elif segment.added:
                    element = _make_revision('w:ins', _make_run(line, segment.formatting),
                                             revision_id, author, stamp)
                    revision_id += 1
                else:
                    element = _make_run(line, segment.formatting)
                current.append(element)

        if current:
            flush()

        if body_paragraphs == 0:
            placeholder = document.add_paragraph(EMPTY_EXPORT_TEXT)
            placeholder.alignment = WD_ALIGN_PARAGRAPH.CENTER

        buffer = io.BytesIO()
        document.save(buffer)
    except Exception as e:
        logger.error(f"Error exporting Word document: {e}", exc_info=True)
        raise DocumentCodecError("Failed to export Word document.", operation='export') from e

    logger.info(f"Exported Word redline with {revision_id} revisions",
                revisions=revision_id, paragraphs=body_paragraphs)
    return buffer.getvalue()
