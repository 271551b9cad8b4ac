from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from buildgen.config import ALLOWED_BLOCKS_FILE
from buildgen.errors import ConfigurationError

log = logging.getLogger(__name__)

AIR = "minecraft:air"
AIR_KEY = "_"

STATE_RE = re.compile(r"^(?P<name>[a-z0-9_.-]+:[a-z0-9_./-]+)(?:\[(?P<props>[^\]]*)\])?$")


def load_allowed_blocks(path: Optional[Path] = None) -> FrozenSet[str]:
    """
    Read the allow-list from a JSON array of block identifiers.
    The list is data so new blocks can be added without touching validation.
    """
    path = Path(path or ALLOWED_BLOCKS_FILE)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"cannot load allowed blocks from {path}: {exc}") from exc
    if not isinstance(raw, list) or not all(isinstance(b, str) and b.strip() for b in raw):
        raise ConfigurationError(f"allowed blocks file {path} must be a JSON array of strings")
    blocks = frozenset(base_block_id(b) for b in raw)
    log.debug("blocks: loaded %d allowed blocks from %s", len(blocks), path)
    return blocks


def base_block_id(block_id: str) -> str:
    """'minecraft:oak_door[facing=north]' -> 'minecraft:oak_door'"""
    return (block_id or "").split("[", 1)[0].strip()


def parse_block_state(block_id: str) -> Tuple[str, Dict[str, str]]:
    """Split an identifier into its base id and block-state properties."""
    m = STATE_RE.match((block_id or "").strip())
    if not m:
        raise ValueError(f"malformed block identifier: {block_id!r}")
    props: Dict[str, str] = {}
    raw_props = m.group("props")
    if raw_props:
        for item in raw_props.split(","):
            if "=" not in item:
                raise ValueError(f"malformed block property {item!r} in {block_id!r}")
            k, v = item.split("=", 1)
            props[k.strip()] = v.strip()
    return m.group("name"), props


def is_allowed(block_id: str, allowed: Optional[Iterable[str]] = None) -> bool:
    # Block-state suffixes are ignored; only the base id has to be listed
    pool = ALLOWED_BLOCKS if allowed is None else allowed
    return base_block_id(block_id) in pool


ALLOWED_BLOCKS: FrozenSet[str] = load_allowed_blocks()
