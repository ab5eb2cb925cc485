"""
Playbook Parser
===============
Turns a Word playbook (free-form review guidance) into discrete rules.

Gemini extracts the rules; when the model call or its JSON fails, the
playbook falls back to one entry per blank-line-separated paragraph.
"""

import re
import json
import time
from typing import Any, List, Optional, Sequence

from config_logging import get_logger, MissingCredentialsError

from .llm import call_model, resolve_api_key, strip_code_fences
from .models import PlaybookEntry
from .word_codec import import_word_document

logger = get_logger('redline.playbook')

PLAYBOOK_PROMPT = """
You are analyzing a legal playbook document. Extract individual rules, guidelines, or instructions from the following text.
Each rule should be a discrete, actionable guideline that can be applied to document review.

Return the result as a JSON array of objects with this structure:
[
  {{ "text": "Rule or guideline text here", "category": "optional category if apparent" }},
  ...
]

Extract rules that are:
- Specific and actionable
- Clear guidelines for document review
- Distinct from each other (don't duplicate similar rules)

Here is the playbook text:
{text}
"""

_JSON_ARRAY_RE = re.compile(r'\[[\s\S]*\]')


def _entry_id(stamp: int, index: int) -> str:
    return f"playbook-entry-{stamp}-{index}"


def parse_playbook_response(text: str, source: str, stamp: Optional[int] = None) -> List[PlaybookEntry]:
    """
    Parse the model's JSON array of rules.

    Raises:
        ValueError: the response holds no usable JSON array
    """
    stamp = int(time.time() * 1000) if stamp is None else stamp
    cleaned = strip_code_fences(text)
    match = _JSON_ARRAY_RE.search(cleaned)
    parsed = json.loads(match.group(0) if match else cleaned)
    if not isinstance(parsed, list):
        raise ValueError("Playbook response is not a JSON array")

    entries = []
    for index, item in enumerate(parsed):
        if not isinstance(item, dict) or not str(item.get('text', '')).strip():
            continue
        entries.append(PlaybookEntry(
            id=_entry_id(stamp, index),
            text=str(item['text']).strip(),
            source=source,
            original_index=index,
            category=item.get('category') or None,
        ))
    return entries


def split_paragraph_entries(text: str, source: str, stamp: Optional[int] = None) -> List[PlaybookEntry]:
    """One entry per blank-line-separated paragraph (one per line if none)."""
    stamp = int(time.time() * 1000) if stamp is None else stamp
    paragraphs = [p.strip() for p in re.split(r'\n\s*\n', text) if p.strip()]
    if len(paragraphs) <= 1:
        paragraphs = [line.strip() for line in text.split('\n') if line.strip()]
    return [
        PlaybookEntry(id=_entry_id(stamp, index), text=para, source=source, original_index=index)
        for index, para in enumerate(paragraphs)
    ]


def parse_playbook(
    data: bytes,
    source: str,
    *,
    client: Any = None,
    api_key: Optional[str] = None
) -> List[PlaybookEntry]:
    """
    Extract review rules from a .docx playbook.

    Raises:
        DocumentCodecError: the file is not a readable .docx
        MissingCredentialsError: no API key configured and no client given
    """
    playbook_text = import_word_document(data, filename=source).text

    if client is None:
        resolve_api_key(api_key)

    try:
        response = call_model(PLAYBOOK_PROMPT.format(text=playbook_text),
                              client=client, api_key=api_key)
        entries = parse_playbook_response(response, source)
    except MissingCredentialsError:
        raise
    except Exception as e:
        logger.warning(f"Error parsing playbook with AI, splitting paragraphs instead: {e}")
        entries = split_paragraph_entries(playbook_text, source)

    logger.info(f"Parsed playbook into {len(entries)} entries", entry_count=len(entries))
    return entries


def get_approved_rules(entries: Sequence[PlaybookEntry]) -> List[PlaybookEntry]:
    return [entry for entry in entries if entry.approved]


def get_pending_entries(entries: Sequence[PlaybookEntry]) -> List[PlaybookEntry]:
    return [entry for entry in entries if not entry.approved]
