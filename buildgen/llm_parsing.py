from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional

from buildgen.errors import ModelOutputError

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)

NON_JSON_MESSAGE = "Gemini returned non-JSON output"


def extract_json_text(text: Optional[str]) -> str:
    """Best-effort JSON substring of a model reply.

    If the reply contains a fenced block (optionally tagged ``json``), return the
    trimmed content of the first one; otherwise return the whole reply trimmed.
    This does not check that the result is valid JSON.
    """
    t = text or ""
    m = _FENCE_RE.search(t)
    if m:
        return m.group(1).strip()
    return t.strip()


def parse_model_json(text: Optional[str]) -> Any:
    """Extract and decode the model reply; raise ModelOutputError on failure.

    The raw reply is logged for diagnosis but never put on the exception.
    """
    candidate = extract_json_text(text)
    try:
        return json.loads(candidate)
    except ValueError as exc:
        log.warning("Failed to parse Gemini response (%s): %s", exc, (text or "")[:2000])
        raise ModelOutputError(NON_JSON_MESSAGE) from exc


def extract_gemini_text(payload: Dict[str, Any]) -> Optional[str]:
    """First non-empty text part of a generateContent response body."""
    if not isinstance(payload, dict):
        return None
    for cand in payload.get("candidates") or []:
        if not isinstance(cand, dict):
            continue
        content = cand.get("content") or {}
        for part in content.get("parts") or []:
            if not isinstance(part, dict):
                continue
            txt = part.get("text")
            if isinstance(txt, str) and txt.strip():
                return txt
    return None
