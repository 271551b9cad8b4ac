from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from buildgen.blocks import ALLOWED_BLOCKS
from buildgen.config import Profile, get_profile
from buildgen.dimensions import BuildLimits
from buildgen.errors import ModelNotConfiguredError
from buildgen.fallback import get_fallback_structure
from buildgen.llm_client import GeminiClient
from buildgen.sanitize import sanitize

log = logging.getLogger(__name__)


class StructureGenerator:
    """
    Orchestrates one generation: model call (or fallback), then a single
    sanitize pass. The model client is injected; None means fallback only.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        profile: Optional[Profile] = None,
        allowed_blocks: Optional[Iterable[str]] = None,
    ):
        self.client = client
        self.profile = profile or get_profile()
        self.allowed_blocks: FrozenSet[str] = (
            ALLOWED_BLOCKS if allowed_blocks is None else frozenset(allowed_blocks)
        )

    def generate(self, prompt: str, limits: BuildLimits) -> Tuple[Dict[str, Any], str]:
        """Return (sanitized structure, source) where source is 'gemini' or 'fallback'."""
        if not (prompt or "").strip():
            raise ValueError("prompt required")

        structure: Any = None
        source = "fallback"
        if self.client is not None:
            try:
                structure = self.client.generate_structure(prompt, limits, self.profile.template)
                source = "gemini"
            except ModelNotConfiguredError:
                log.warning("generate: model client not initialized; serving fallback structure")
        if source == "fallback":
            structure = get_fallback_structure()
        log.info("generate: source=%s profile=%s prompt=%s", source, self.profile.name, prompt.strip()[:60])

        return sanitize(structure, limits, self.profile.sanitize_mode, self.allowed_blocks), source
