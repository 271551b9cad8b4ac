from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from buildgen.config import GEMINI_API_KEY, GEMINI_MODEL, LLM_TIMEOUT_SECS, TEMPERATURE
from buildgen.dimensions import BuildLimits
from buildgen.errors import ModelNotConfiguredError, UpstreamRequestError
from buildgen.llm_parsing import extract_gemini_text, parse_model_json
from buildgen.llm_prompts import build_prompt

log = logging.getLogger(__name__)

GEMINI_ENDPOINT_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiClient:
    """
    Thin wrapper around Gemini's generateContent REST call.

    One request per call, no retry. The parsed JSON comes back as-is; shape
    checks belong to the sanitizer.
    """

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        timeout: Optional[float] = LLM_TIMEOUT_SECS,
        temperature: float = TEMPERATURE,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self._http = session or requests

    @property
    def endpoint(self) -> str:
        return GEMINI_ENDPOINT_TEMPLATE.format(model=self.model)

    def generate_structure(self, prompt: str, limits: BuildLimits, template: str = "simple") -> Any:
        if not self.api_key:
            raise ModelNotConfiguredError("Gemini model not initialized")

        body = {
            "contents": [{"parts": [{"text": build_prompt(prompt, limits, template)}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
            },
        }
        log.info(
            "gemini: requesting structure model=%s template=%s limits=%dx%dx%d",
            self.model,
            template,
            limits.width,
            limits.height,
            limits.depth,
        )
        try:
            resp = self._http.post(
                self.endpoint,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("Gemini request error: %r", e)
            raise UpstreamRequestError("Gemini request failed") from e

        if resp.status_code != 200:
            log.warning("Gemini HTTP %s: %s", resp.status_code, (resp.text or "")[:400])
            raise UpstreamRequestError(
                f"Gemini returned HTTP {resp.status_code}",
                context={"status": resp.status_code},
            )

        try:
            data = resp.json()
        except ValueError as e:
            log.warning("Gemini: non-JSON HTTP body")
            raise UpstreamRequestError("Gemini returned a non-JSON response body") from e

        text = extract_gemini_text(data)
        if not text:
            log.warning("Gemini: empty response text")
            raise UpstreamRequestError("Gemini returned an empty response")

        return parse_model_json(text)


def create_client(api_key: Optional[str] = None) -> Optional[GeminiClient]:
    """Build the process-wide client, or None when no key is configured."""
    key = (GEMINI_API_KEY if api_key is None else api_key).strip()
    if not key:
        log.info("gemini: no API key configured; fallback structure will be served")
        return None
    return GeminiClient(key)


def client_status(client: Optional[GeminiClient]) -> Dict[str, Any]:
    if client is None:
        return {"provider": None, "model": None, "has_token": False, "using": "fallback"}
    return {
        "provider": "gemini",
        "model": client.model,
        "has_token": bool(client.api_key),
        "using": "gemini",
    }
