"""
Gemini Client
=============
Thin wrapper over google-genai shared by the summarizer and the
playbook parser.

Environment:
  GEMINI_API_KEY        API key (required for model calls)
  REDLINE_GEMINI_MODEL  model id (default gemini-2.5-flash)
"""

import re
import time
import functools
from typing import Any, Callable, Optional

from google import genai
from google.genai import errors as genai_errors

from config_logging import get_logger, get_config, MissingCredentialsError

logger = get_logger('redline.llm')

# Suggested wait from a rate-limit message, e.g. "retry in 18.8s"
_RETRY_DELAY_RE = re.compile(r"retry[^\d]*(\d+(?:\.\d+)?)\s*s", re.IGNORECASE)

_CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class ModelCallError(RuntimeError):
    """The model call failed after retries or returned no text."""


@functools.lru_cache(maxsize=4)
def _get_client(api_key: str) -> "genai.Client":
    """Return (and cache) a Gemini client for the given key."""
    return genai.Client(api_key=api_key)


def resolve_api_key(api_key: Optional[str] = None) -> str:
    """
    Return the API key to use, raising when none is configured.

    Raises:
        MissingCredentialsError: no key passed and GEMINI_API_KEY unset
    """
    key = api_key or get_config().gemini_api_key
    if not key:
        raise MissingCredentialsError()
    return key


def _parse_retry_delay(error: Exception) -> Optional[float]:
    match = _RETRY_DELAY_RE.search(str(error))
    if match:
        return float(match.group(1))
    delay = getattr(error, "retry_delay", None)
    if delay is not None:
        return float(delay)
    return None


def strip_code_fences(text: str) -> str:
    """Remove markdown ```json fences the model sometimes wraps JSON in."""
    return _CODE_FENCE_RE.sub('', text or '').strip()


def call_model(
    prompt: str,
    *,
    client: Any = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    max_retries: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep
) -> str:
    """
    Send a prompt to Gemini and return the response text.

    Rate-limit (429) errors are retried with the suggested delay, up to
    max_retries times; daily quota exhaustion is not retried.

    Args:
        prompt: Prompt text
        client: Object exposing models.generate_content (built from the
                API key when omitted)
        api_key: Overrides GEMINI_API_KEY
        model: Overrides the configured model id
        max_retries: Overrides the configured retry count
        sleep: Wait function between retries

    Raises:
        MissingCredentialsError: no client given and no API key configured
        ModelCallError: empty response or retries exhausted
        google.genai.errors.APIError: non-retryable API failure
    """
    config = get_config()
    model = model or config.gemini_model
    max_retries = config.summary_max_retries if max_retries is None else max_retries

    if client is None:
        client = _get_client(resolve_api_key(api_key))

    attempt = 0
    while True:
        try:
            response = client.models.generate_content(model=model, contents=prompt)
            text = getattr(response, 'text', None)
            if not text:
                raise ModelCallError("Gemini returned an empty response")
            return text

        except genai_errors.ClientError as exc:
            if exc.code != 429:
                raise
            if "PerDay" in str(exc):
                raise ModelCallError(f"Daily request quota for {model} exhausted: {exc}") from exc

            attempt += 1
            if attempt > max_retries:
                raise ModelCallError(f"Rate limited after {max_retries} retries") from exc

            delay = _parse_retry_delay(exc) or (2 ** attempt * 5)
            logger.warning(f"Gemini rate limit, retrying in {delay:.0f}s",
                           attempt=attempt, max_retries=max_retries)
            sleep(delay)
