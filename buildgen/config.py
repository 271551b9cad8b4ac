from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from buildgen.errors import ConfigurationError

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip()

try:
    MAX_DIM = int(os.getenv("MAX_DIM", "32"))
except ValueError:
    MAX_DIM = 32
try:
    MAX_HEIGHT = int(os.getenv("MAX_HEIGHT", "128"))
except ValueError:
    MAX_HEIGHT = 128

try:
    TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))
except ValueError:
    TEMPERATURE = 0.7

# No timeout in the upstream contract; this only bounds a hung connection
try:
    LLM_TIMEOUT_SECS = int(os.getenv("LLM_TIMEOUT_SECS", "75"))
except ValueError:
    LLM_TIMEOUT_SECS = 75

DEFAULT_BLOCKS_FILE = Path(__file__).resolve().parent / "data" / "allowed_blocks.json"
ALLOWED_BLOCKS_FILE = Path(os.getenv("ALLOWED_BLOCKS_FILE", "").strip() or DEFAULT_BLOCKS_FILE)

BUILD_PROFILE = os.getenv("BUILD_PROFILE", "simple").strip().lower() or "simple"
SANITIZE_MODE = os.getenv("SANITIZE_MODE", "").strip().lower() or None


@dataclass(frozen=True)
class Profile:
    """Prompt template plus the sanitize mode that goes with it."""

    name: str
    template: str
    sanitize_mode: str


PROFILES: Dict[str, Profile] = {
    "simple": Profile(name="simple", template="simple", sanitize_mode="strict"),
    "rich_directional": Profile(name="rich_directional", template="rich_directional", sanitize_mode="lenient"),
}

_MODES = {"strict", "lenient"}


def get_profile(name: Optional[str] = None, sanitize_mode: Optional[str] = None) -> Profile:
    """
    Resolve a profile by name (defaults to BUILD_PROFILE). A sanitize_mode
    (or the SANITIZE_MODE env override) replaces the profile's default mode.
    """
    key = (name or BUILD_PROFILE).strip().lower()
    profile = PROFILES.get(key)
    if profile is None:
        raise ConfigurationError(
            f"unknown build profile '{key}'",
            context={"known": sorted(PROFILES)},
        )
    mode = (sanitize_mode or SANITIZE_MODE or profile.sanitize_mode).strip().lower()
    if mode not in _MODES:
        raise ConfigurationError(f"unknown sanitize mode '{mode}'", context={"known": sorted(_MODES)})
    if mode == profile.sanitize_mode:
        return profile
    return Profile(name=profile.name, template=profile.template, sanitize_mode=mode)
