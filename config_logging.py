#!/usr/bin/env python3
"""
Redline Configuration & Logging Module
======================================
Centralized configuration, structured logging, and error types shared by
the redline engine, its document collaborators and the HTTP surface.

Version: module v1.2
"""

import os
import sys
import json
import logging
import uuid
import time
import functools
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Callable
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager
import threading

from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
DEFAULT_MAX_UPLOAD_MB = 25          # Default max upload size in megabytes
MAX_SAFE_UPLOAD_MB = 200            # Maximum safe upload limit in megabytes
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_REVISION_AUTHOR = "RedlineNow"
DEFAULT_DIFF_MODE = "char"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep

DEFAULT_MAX_UPLOAD_BYTES = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
MAX_SAFE_UPLOAD_BYTES = MAX_SAFE_UPLOAD_MB * 1024 * 1024

__version__ = "1.2.0"
VERSION = __version__
APP_NAME = "Redline"

# Optional .env beside the project root; real environment variables win
load_dotenv(Path(__file__).parent / '.env', override=False)


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

@dataclass
class AppConfig:
    """Application configuration with secure defaults."""

    # Server settings
    host: str = "127.0.0.1"  # Localhost only by default
    port: int = 5060
    debug: bool = False
    max_content_length: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_extensions: tuple = ('.docx',)

    # Diff engine
    diff_mode: str = DEFAULT_DIFF_MODE
    diff_timeout: float = 0.0  # 0 = no deadline, keeps char diffs deterministic

    # Collaborators
    gemini_api_key: str = field(default_factory=lambda: os.environ.get('GEMINI_API_KEY', ''))
    gemini_model: str = DEFAULT_GEMINI_MODEL
    summary_max_retries: int = 3
    revision_author: str = DEFAULT_REVISION_AUTHOR

    # Paths
    base_dir: Path = field(default_factory=lambda: Path(__file__).parent)
    log_dir: Path = field(default_factory=lambda: Path(__file__).parent / 'logs')

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # Options: json, text
    log_to_file: bool = False
    log_to_console: bool = True

    def __post_init__(self):
        """Normalize and secure configuration."""
        if self.log_to_file:
            self.log_dir.mkdir(exist_ok=True)

        self.diff_mode = (self.diff_mode or DEFAULT_DIFF_MODE).lower()

        # Force debug=False in production environment
        if os.environ.get('REDLINE_ENV', 'development').lower() == 'production':
            self.debug = False
            self.log_level = "WARNING"

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load configuration from environment variables."""
        return cls(
            host=os.environ.get('REDLINE_HOST', '127.0.0.1'),
            port=int(os.environ.get('REDLINE_PORT', '5060')),
            debug=os.environ.get('REDLINE_DEBUG', 'false').lower() == 'true',
            max_content_length=int(os.environ.get('REDLINE_MAX_UPLOAD', str(DEFAULT_MAX_UPLOAD_BYTES))),
            diff_mode=os.environ.get('REDLINE_DIFF_MODE', DEFAULT_DIFF_MODE),
            diff_timeout=float(os.environ.get('REDLINE_DIFF_TIMEOUT', '0')),
            gemini_api_key=os.environ.get('GEMINI_API_KEY', ''),
            gemini_model=os.environ.get('REDLINE_GEMINI_MODEL', DEFAULT_GEMINI_MODEL),
            summary_max_retries=int(os.environ.get('REDLINE_SUMMARY_RETRIES', '3')),
            revision_author=os.environ.get('REDLINE_REVISION_AUTHOR', DEFAULT_REVISION_AUTHOR),
            log_level=os.environ.get('REDLINE_LOG_LEVEL', 'INFO'),
            log_format=os.environ.get('REDLINE_LOG_FORMAT', 'json'),
            log_to_file=os.environ.get('REDLINE_LOG_TO_FILE', 'false').lower() == 'true',
        )

    def validate(self) -> tuple:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if self.debug and os.environ.get('REDLINE_ENV') == 'production':
            errors.append("Debug mode cannot be enabled in production")

        if self.max_content_length > MAX_SAFE_UPLOAD_BYTES:
            errors.append(f"Max content length exceeds safe limit ({MAX_SAFE_UPLOAD_MB}MB)")

        if self.diff_mode not in ('char', 'word'):
            errors.append(f"Invalid diff_mode: {self.diff_mode}. Must be 'char' or 'word'")

        if self.diff_timeout < 0:
            errors.append("diff_timeout cannot be negative")

        if self.log_format not in ('json', 'text'):
            errors.append(f"Invalid log_format: {self.log_format}")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured JSON logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[AppConfig] = None):
        self.name = name
        self.config = config or get_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))
        self.logger.handlers.clear()

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler with rotation
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        record = self._build_log_record('DEBUG', message, **kwargs)
        self.logger.debug(json.dumps(record) if self.config.log_format == 'json' else message, extra=kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        record = self._build_log_record('INFO', message, **kwargs)
        self.logger.info(json.dumps(record) if self.config.log_format == 'json' else message, extra=kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        record = self._build_log_record('WARNING', message, **kwargs)
        self.logger.warning(json.dumps(record) if self.config.log_format == 'json' else message, extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        record = self._build_log_record('ERROR', message, **kwargs)
        if exc_info:
            import traceback
            record['traceback'] = traceback.format_exc()
        self.logger.error(json.dumps(record) if self.config.log_format == 'json' else message,
                          exc_info=exc_info, extra=kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    _RESERVED = ('name', 'msg', 'args', 'created', 'filename', 'funcName',
                 'levelname', 'levelno', 'lineno', 'module', 'msecs',
                 'pathname', 'process', 'processName', 'relativeCreated',
                 'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
                 'message', 'taskName')

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, get_config())


# =============================================================================
# ERROR HANDLING UTILITIES
# =============================================================================

class RedlineError(Exception):
    """Base exception for the redline application."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 status_code: int = 500, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(RedlineError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400,
                         details={'field': field, **kwargs})


class FileError(RedlineError):
    """File handling error."""
    def __init__(self, message: str, filename: Optional[str] = None, **kwargs):
        super().__init__(message, code="FILE_ERROR", status_code=400,
                         details={'filename': filename, **kwargs})


class ProcessingError(RedlineError):
    """Comparison processing error."""
    def __init__(self, message: str, stage: Optional[str] = None, **kwargs):
        super().__init__(message, code="PROCESSING_ERROR", status_code=500,
                         details={'stage': stage, **kwargs})


class DocumentCodecError(RedlineError):
    """Word document import/export failure."""
    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(message, code="DOCUMENT_CODEC_ERROR", status_code=422,
                         details={'operation': operation, **kwargs})


class SummarizationError(RedlineError):
    """Language-model call or response parsing failure."""
    def __init__(self, message: str = "Failed to generate summary. Please try again.", **kwargs):
        super().__init__(message, code="SUMMARIZATION_ERROR", status_code=502, details=kwargs)


class MissingCredentialsError(RedlineError):
    """The language-model API key is not configured."""
    def __init__(self, message: str = "Gemini API key is missing. Please set GEMINI_API_KEY.", **kwargs):
        super().__init__(message, code="MISSING_CREDENTIALS", status_code=503, details=kwargs)


def handle_errors(logger: Optional[StructuredLogger] = None):
    """Decorator for standardized error handling."""
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            try:
                return func(*args, **kwargs)
            except RedlineError:
                raise
            except FileNotFoundError as e:
                _logger.error(f"File not found: {e}", exc_info=True)
                raise FileError(f"File not found: {e}")
            except ValueError as e:
                _logger.error(f"Validation error: {e}", exc_info=True)
                raise ValidationError(str(e))
            except Exception as e:
                _logger.exception(f"Unexpected error in {func.__name__}: {e}")
                raise ProcessingError(f"An unexpected error occurred: {type(e).__name__}")
        return wrapper
    return decorator


# =============================================================================
# UPLOAD UTILITIES
# =============================================================================

def sanitize_filename(filename: str) -> str:
    """Sanitize a filename to prevent path traversal attacks."""
    import re
    filename = filename.replace('/', '').replace('\\', '').replace('\x00', '')
    filename = filename.lstrip('.')
    filename = re.sub(r'[^\w\-_\. ]', '_', filename)
    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:255 - len(ext)] + ext
    return filename or 'unnamed'


def validate_file_extension(filename: str, allowed: tuple = ('.docx',)) -> bool:
    """Validate file extension."""
    return filename.lower().endswith(allowed)
