"""
Redline Summarizer
==================
Sends the edited sentences of a redline to Gemini and parses the
structured summary it returns.

Only sentences with has_edits are sent. Results are never cached; the
caller discards them whenever either text changes.
"""

import json
from typing import Any, List, Optional, Sequence

from config_logging import get_logger, SummarizationError, MissingCredentialsError

from .llm import call_model, resolve_api_key, strip_code_fences
from .models import Sentence, SummaryItem, SummaryResult

logger = get_logger('redline.summarizer')

NO_CHANGES_SUMMARY = "No changes detected."

SUMMARY_PROMPT = """
You are a legal expert assistant. Analyze the following list of sentences from a legal document redline.
Each sentence has an ID and text where additions are marked with [ADDED: ...] and deletions with [REMOVED: ...].

For each sentence:
1. Generate a concise, plain-English description of what changed (e.g., "Changed payment terms from 30 to 45 days").

Then, generate a single "highLevelSummary" paragraph that summarizes the overall impact of these changes.

Return the result as a JSON object with this structure:
{{
  "items": [
    {{ "sentenceId": "...", "description": "..." }}
  ],
  "highLevelSummary": "..."
}}

Here are the sentences:
{sentences}
"""


def edited_sentences(sentences: Sequence[Sentence]) -> List[Sentence]:
    return [s for s in sentences if s.has_edits]


def build_summary_prompt(sentences: Sequence[Sentence]) -> str:
    """Prompt listing every edited sentence as {id, text}."""
    payload = [{'id': s.id, 'text': s.raw_text} for s in edited_sentences(sentences)]
    return SUMMARY_PROMPT.format(sentences=json.dumps(payload, ensure_ascii=False))


def parse_summary_response(text: str) -> SummaryResult:
    """
    Parse the model's JSON answer.

    Raises:
        SummarizationError: the text is not the expected JSON object
    """
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise SummarizationError(details_reason=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        raise SummarizationError(details_reason="Response is not a JSON object")

    items = []
    for item in data.get('items') or []:
        if not isinstance(item, dict) or 'sentenceId' not in item:
            continue
        items.append(SummaryItem(
            sentence_id=str(item['sentenceId']),
            description=str(item.get('description', '')),
        ))

    return SummaryResult(
        items=items,
        high_level_summary=str(data.get('highLevelSummary', '')),
    )


def generate_redline_summary(
    sentences: Sequence[Sentence],
    *,
    client: Any = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> SummaryResult:
    """
    Summarize the edits of a redline.

    Args:
        sentences: Output of segment_into_sentences()
        client: Gemini client override (tests)
        api_key: API key override
        model: Model id override

    Raises:
        MissingCredentialsError: no API key configured and no client given
        SummarizationError: the call or the response parsing failed
    """
    if client is None:
        resolve_api_key(api_key)

    edited = edited_sentences(sentences)
    if not edited:
        return SummaryResult(items=[], high_level_summary=NO_CHANGES_SUMMARY)

    prompt = build_summary_prompt(edited)
    logger.info(f"Requesting summary for {len(edited)} edited sentence(s)",
                sentence_count=len(edited))

    try:
        text = call_model(prompt, client=client, api_key=api_key, model=model)
    except MissingCredentialsError:
        raise
    except Exception as e:
        logger.error(f"Error generating summary: {e}", exc_info=True)
        raise SummarizationError(details_reason=str(e)) from e

    result = parse_summary_response(text)
    logger.info("Summary generated", item_count=len(result.items))
    return result
