"""
PDF Redline Export
==================
Renders annotated diff segments with insertions in blue/underlined and
deletions in red/struck through; returns bytes when no output path is given.
"""

import io
import html
from datetime import datetime
from typing import List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, HRFlowable

from config_logging import get_logger, DocumentCodecError

from .models import DiffSegment, DiffStats, SummaryResult

logger = get_logger('redline.pdf_export')

INSERTION_COLOR = '#1d4ed8'
DELETION_COLOR = '#dc2626'
DEFAULT_PDF_FILENAME = "redline-comparison.pdf"


class RedlinePdfExporter:
    """Generate a PDF redline from annotated diff segments."""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Create custom paragraph styles for the redline."""
        self.styles.add(ParagraphStyle(
            name='RedlineTitle', parent=self.styles['Heading1'],
            fontSize=16, alignment=TA_CENTER, spaceAfter=6,
            textColor=colors.HexColor('#1e293b')
        ))
        self.styles.add(ParagraphStyle(
            name='RedlineSubtitle', parent=self.styles['Normal'],
            fontSize=9, alignment=TA_CENTER, spaceAfter=12,
            textColor=colors.HexColor('#64748b')
        ))
        self.styles.add(ParagraphStyle(
            name='RedlineBody', parent=self.styles['Normal'],
            fontName='Times-Roman', fontSize=11, leading=15, spaceAfter=6,
            textColor=colors.HexColor('#1f2937')
        ))
        self.styles.add(ParagraphStyle(
            name='RedlineSection', parent=self.styles['Heading2'],
            fontSize=11, spaceBefore=14, spaceAfter=6,
            textColor=colors.HexColor('#1e293b'), fontName='Helvetica-Bold'
        ))

    @staticmethod
    def _markup(segment: DiffSegment, text: str) -> str:
        """reportlab paragraph markup for one line of a segment."""
        markup = html.escape(text, quote=False)
        formatting = segment.formatting
        if formatting is not None:
            if formatting.underline:
                markup = f"<u>{markup}</u>"
            if formatting.italic:
                markup = f"<i>{markup}</i>"
            if formatting.bold:
                markup = f"<b>{markup}</b>"
        if segment.added:
            return f'<font color="{INSERTION_COLOR}"><u>{markup}</u></font>'
        if segment.removed:
            return f'<font color="{DELETION_COLOR}"><strike>{markup}</strike></font>'
        return markup

    def paragraphs(self, segments: Sequence[DiffSegment]) -> List[str]:
        """Group segment markup into newline-delimited paragraphs."""
        paragraphs: List[str] = []
        current: List[str] = []
        for segment in segments:
            for index, line in enumerate(segment.value.split('\n')):
                if index > 0:
                    paragraphs.append(''.join(current))
                    current = []
                if line:
                    current.append(self._markup(segment, line))
        paragraphs.append(''.join(current))
        return paragraphs

    def generate(
        self,
        segments: Sequence[DiffSegment],
        output_path: Optional[str] = None,
        title: str = "Redline Comparison",
        stats: Optional[DiffStats] = None,
        summary: Optional[SummaryResult] = None
    ) -> Optional[bytes]:
        """
        Build the PDF.

        Args:
            segments: Annotated diff segments
            output_path: File to write; bytes are returned when omitted
            title: Document title
            stats: Insertion/deletion counts for the subtitle
            summary: Optional model summary appended after the redline

        Returns:
            PDF bytes when output_path is None, otherwise None

        Raises:
            DocumentCodecError: reportlab failed to build the document
        """
        target = output_path or io.BytesIO()
        elements = [
            Paragraph(html.escape(title, quote=False), self.styles['RedlineTitle']),
        ]

        subtitle = f"Generated {datetime.now().strftime('%Y-%m-%d %H:%M')}"
        if stats is not None:
            subtitle += f" | {stats.insertions} insertion(s), {stats.deletions} deletion(s)"
        elements.append(Paragraph(subtitle, self.styles['RedlineSubtitle']))
        elements.append(HRFlowable(width="100%", thickness=0.5, color=colors.HexColor('#cbd5e1')))
        elements.append(Spacer(1, 0.15 * inch))

        body = [p for p in self.paragraphs(segments) if p]
        if not body:
            elements.append(Paragraph("No changes to display.", self.styles['RedlineSubtitle']))
        for paragraph in body:
            elements.append(Paragraph(paragraph, self.styles['RedlineBody']))

        if summary is not None:
            elements.append(Paragraph("SUMMARY OF CHANGES", self.styles['RedlineSection']))
            if summary.high_level_summary:
                elements.append(Paragraph(html.escape(summary.high_level_summary, quote=False),
                                          self.styles['RedlineBody']))
            for item in summary.items:
                elements.append(Paragraph(
                    f"<b>{html.escape(item.sentence_id, quote=False)}:</b> "
                    f"{html.escape(item.description, quote=False)}",
                    self.styles['RedlineBody']
                ))

        try:
            doc = SimpleDocTemplate(target, pagesize=letter,
                                    leftMargin=0.9 * inch, rightMargin=0.9 * inch,
                                    topMargin=0.8 * inch, bottomMargin=0.8 * inch,
                                    title=title)
            doc.build(elements)
        except Exception as e:
            logger.error(f"Error exporting PDF redline: {e}", exc_info=True)
            raise DocumentCodecError("Failed to export PDF document.", operation='export_pdf') from e

        if output_path:
            return None
        return target.getvalue()
