"""
Redline Flask Routes
====================
API endpoints for the redline comparison workspace.

Every endpoint recomputes from the request body; nothing is stored
between requests.
"""

import io
import time
from functools import wraps
from flask import Blueprint, request, jsonify, send_file, g

from config_logging import (
    get_logger, get_config, ValidationError, ProcessingError, FileError,
    DocumentCodecError, SummarizationError, MissingCredentialsError,
    sanitize_filename, validate_file_extension
)

from .models import DiffSegment
from .extractor import has_content
from .pipeline import build_redline
from .render import render_marked_html, render_raw_markup, render_clipboard, render_sentence_html
from .summarizer import generate_redline_summary
from .word_codec import import_word_document, export_word_document, DEFAULT_EXPORT_FILENAME
from .pdf_export import RedlinePdfExporter, DEFAULT_PDF_FILENAME
from .playbook import parse_playbook
from .samples import SAMPLE_ORIGINAL, SAMPLE_MODIFIED

logger = get_logger('redline.routes')

redline_blueprint = Blueprint('redline', __name__)

DOCX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def _error_response(code: str, message: str, status: int):
    return jsonify({
        'success': False,
        'error': {
            'code': code,
            'message': message,
            'correlation_id': getattr(g, 'correlation_id', 'unknown')
        }
    }), status


def handle_redline_errors(f):
    """
    Decorator for standardized API error handling in redline routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 5.0:
                logger.warning(f"Slow redline API call: {f.__name__} took {elapsed:.1f}s")

            return result

        except (ValidationError, FileError) as e:
            logger.warning(f"Validation error in {f.__name__}: {e}")
            return _error_response(e.code, e.message, 400)
        except MissingCredentialsError as e:
            logger.warning(f"Missing credentials in {f.__name__}: {e}")
            return _error_response(e.code, e.message, 503)
        except DocumentCodecError as e:
            logger.warning(f"Document codec error in {f.__name__}: {e}")
            return _error_response(e.code, e.message, 422)
        except SummarizationError as e:
            logger.error(f"Summarization error in {f.__name__}: {e}")
            return _error_response(e.code, e.message, 502)
        except ProcessingError as e:
            logger.error(f"Processing error in {f.__name__}: {e}")
            return _error_response(e.code, e.message, 500)
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response('INTERNAL_ERROR', 'An unexpected error occurred', 500)

    return decorated


# =============================================================================
# REQUEST HELPERS
# =============================================================================

def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _comparison_inputs(data: dict):
    if 'original' not in data or 'modified' not in data:
        raise ValidationError("Both 'original' and 'modified' are required",
                              field='original' if 'original' not in data else 'modified')
    return data['original'], data['modified'], data.get('mode')


def _segments_from_body(data: dict):
    """Segments posted directly, or computed from original/modified."""
    if 'segments' in data:
        raw = data['segments']
        if not isinstance(raw, list):
            raise ValidationError("'segments' must be a list", field='segments')
        try:
            segments = [DiffSegment.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid segment: {e}", field='segments')
        return segments, None
    result = build_redline(*_comparison_inputs(data))
    return result.segments, result.stats


def _uploaded_docx():
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded", field='file')
    filename = sanitize_filename(upload.filename)
    if not validate_file_extension(filename, get_config().allowed_extensions):
        raise FileError(f"Unsupported file type: {filename}", filename=filename)
    return upload.read(), filename


# =============================================================================
# ENDPOINTS
# =============================================================================

@redline_blueprint.route('/sample', methods=['GET'])
@handle_redline_errors
def get_sample():
    """
    Get the sample agreement pair.

    Returns:
        JSON with original and modified text
    """
    return jsonify({
        'success': True,
        'original': SAMPLE_ORIGINAL,
        'modified': SAMPLE_MODIFIED
    })


@redline_blueprint.route('/compare', methods=['POST'])
@handle_redline_errors
def compare():
    """
    Compare two pieces of content.

    Request body:
        original: text, HTML or editor JSON
        modified: text, HTML or editor JSON
        mode: 'char' (default) or 'word'
        highlight: optional sentence id to mark active

    Returns:
        JSON with segments, stats, sentences and every rendering
    """
    data = _json_body()
    result = build_redline(*_comparison_inputs(data))

    payload = result.to_dict()
    payload.update({
        'success': True,
        'html': render_marked_html(result.segments),
        'sentenceHtml': render_sentence_html(result.sentences, data.get('highlight')),
        'raw': render_raw_markup(result.segments),
        'clipboard': render_clipboard(result.segments).to_dict(),
    })

    logger.info("Comparison complete", mode=result.mode.value,
                insertions=result.stats.insertions, deletions=result.stats.deletions)
    return jsonify(payload)


@redline_blueprint.route('/summary', methods=['POST'])
@handle_redline_errors
def summary():
    """
    Summarize the edits between two pieces of content.

    Returns:
        JSON with items (sentenceId, description) and highLevelSummary
    """
    data = _json_body()
    original, modified, mode = _comparison_inputs(data)
    if not has_content(original) and not has_content(modified):
        raise ValidationError("Both documents are empty", field='original')
    result = build_redline(original, modified, mode)
    summary_result = generate_redline_summary(result.sentences)
    return jsonify({
        'success': True,
        'summary': summary_result.to_dict()
    })


@redline_blueprint.route('/import', methods=['POST'])
@handle_redline_errors
def import_document():
    """
    Import a .docx upload as text + formatted HTML.

    Form data:
        file: .docx file
    """
    data, filename = _uploaded_docx()
    result = import_word_document(data, filename=filename)
    payload = result.to_dict()
    payload['success'] = True
    payload['filename'] = filename
    return jsonify(payload)


@redline_blueprint.route('/export/docx', methods=['POST'])
@handle_redline_errors
def export_docx():
    """
    Download the redline as a .docx with tracked changes.

    Request body: either 'segments' or 'original' + 'modified' (+ 'mode')
    """
    data = _json_body()
    segments, _ = _segments_from_body(data)
    content = export_word_document(segments, author=data.get('author'))
    return send_file(
        io.BytesIO(content),
        mimetype=DOCX_MIMETYPE,
        as_attachment=True,
        download_name=DEFAULT_EXPORT_FILENAME
    )


@redline_blueprint.route('/export/pdf', methods=['POST'])
@handle_redline_errors
def export_pdf():
    """
    Download the redline as a PDF.

    Request body: either 'segments' or 'original' + 'modified' (+ 'mode')
    """
    data = _json_body()
    segments, stats = _segments_from_body(data)
    content = RedlinePdfExporter().generate(segments, stats=stats)
    return send_file(
        io.BytesIO(content),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=DEFAULT_PDF_FILENAME
    )


@redline_blueprint.route('/playbook', methods=['POST'])
@handle_redline_errors
def upload_playbook():
    """
    Extract review rules from a .docx playbook.

    Form data:
        file: .docx file
    """
    data, filename = _uploaded_docx()
    entries = parse_playbook(data, filename)
    return jsonify({
        'success': True,
        'source': filename,
        'entries': [entry.to_dict() for entry in entries]
    })
