from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

from buildgen.blocks import AIR, AIR_KEY
from buildgen.dimensions import BuildLimits
from buildgen.errors import StructureValidationError
from buildgen.validators import collect_content_errors, validate_structure

log = logging.getLogger(__name__)


class SanitizeMode(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


def sanitize(
    structure: Any,
    limits: BuildLimits,
    mode: Union[SanitizeMode, str] = SanitizeMode.STRICT,
    allowed_blocks: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Check and repair a structure in place and return it.

    Missing size/palette/layers (or wrongly typed ones) always fail. Strict
    mode also fails on out-of-bounds size or a block that is not on the
    allow-list; lenient mode only logs those. The only repair is adding
    "_" -> minecraft:air to the palette. A layer count that disagrees with
    size y is logged, never fatal.
    """
    mode = SanitizeMode(mode)
    # repair a missing or blank air entry before the value rules see it
    raw_palette = structure.get("palette") if isinstance(structure, dict) else None
    if isinstance(raw_palette, dict):
        air = raw_palette.get(AIR_KEY)
        if air is None or (isinstance(air, str) and not air.strip()):
            raw_palette[AIR_KEY] = AIR
    validate_structure(structure)

    sx, sy, sz = structure["size"]
    palette = structure["palette"]
    layers = structure["layers"]
    log.info(
        "sanitize: dimensions %dx%dx%d (requested ~%dx%dx%d) mode=%s",
        sx, sy, sz, limits.width, limits.height, limits.depth, mode.value,
    )
    log.info("sanitize: palette has %d block types", len(palette))
    log.info("sanitize: structure has %d layers", len(layers))

    problems = collect_content_errors(structure, limits, allowed_blocks)
    if problems:
        if mode is SanitizeMode.STRICT:
            first = problems[0]
            raise StructureValidationError(first["message"], errors=problems)
        for p in problems:
            log.warning("sanitize: lenient mode accepting %s: %s", p["path"], p["message"])

    if len(layers) != sy:
        log.warning("sanitize: layer count %d does not match height %d", len(layers), sy)

    return structure
