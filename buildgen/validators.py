from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jsonschema import Draft202012Validator

from buildgen.blocks import AIR, ALLOWED_BLOCKS, is_allowed, parse_block_state
from buildgen.dimensions import BuildLimits
from buildgen.errors import StructureValidationError

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "structure.schema.json"
REQUIRED_FIELDS = ("size", "palette", "layers")


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def layer_index(key: Any) -> Optional[int]:
    """Layer keys arrive as ints or, from JSON objects, as decimal strings."""
    if isinstance(key, int) and not isinstance(key, bool):
        return key if key >= 0 else None
    if isinstance(key, str) and key.strip().isdigit():
        return int(key.strip())
    return None


def collect_errors(structure: Any) -> List[Dict[str, str]]:
    """
    Structural rules, fatal in every sanitize mode.
    Return a list of {"path": "...", "message": "..."} dicts; messages for
    missing fields contain the word 'required'.
    """
    errors: List[Dict[str, str]] = []
    if not isinstance(structure, dict):
        errors.append({"path": "(root)", "message": "structure must be an object"})
        return errors

    missing = [f for f in REQUIRED_FIELDS if structure.get(f) is None]
    for field in missing:
        errors.append({"path": field, "message": f"required property '{field}' is missing"})
    if missing:
        return errors  # can't go deeper safely

    for err in sorted(_validator().iter_errors(structure), key=lambda e: [str(p) for p in e.path]):
        loc = ".".join(str(p) for p in err.path) or "(root)"
        errors.append({"path": loc, "message": str(err.message)})

    # Non-string keys only show up when a dict is built in Python rather than
    # decoded from JSON, and the schema's propertyNames rules skip them.
    palette = structure["palette"]
    if isinstance(palette, dict):
        for key in palette:
            if not isinstance(key, str):
                errors.append({"path": "palette", "message": f"palette key must be a string, got {key!r}"})
    layers = structure["layers"]
    if isinstance(layers, dict):
        for key in layers:
            if not isinstance(key, str) and layer_index(key) is None:
                errors.append({"path": "layers", "message": f"layer key must be a non-negative integer, got {key!r}"})
    return errors


def collect_content_errors(
    structure: Dict[str, Any],
    limits: BuildLimits,
    allowed_blocks: Optional[Iterable[str]] = None,
) -> List[Dict[str, str]]:
    """Size bounds, block allow-list and block-state syntax; callers decide whether these are fatal."""
    errors: List[Dict[str, str]] = []
    sx, sy, sz = structure["size"]
    if sx > limits.width:
        errors.append({"path": "size.0", "message": f"size x={sx} exceeds max horizontal dimension {limits.width}"})
    if sy > limits.height:
        errors.append({"path": "size.1", "message": f"size y={sy} exceeds max height {limits.height}"})
    if sz > limits.depth:
        errors.append({"path": "size.2", "message": f"size z={sz} exceeds max horizontal dimension {limits.depth}"})

    # air is always permitted so the injected "_" entry never trips strict mode
    pool = (ALLOWED_BLOCKS if allowed_blocks is None else frozenset(allowed_blocks)) | {AIR}
    for key, block in structure["palette"].items():
        if not is_allowed(block, pool):
            errors.append({
                "path": f"palette.{key}",
                "message": f"palette block '{block}' (key '{key}') is not allowed",
            })
            continue
        try:
            parse_block_state(block)
        except ValueError as exc:
            errors.append({"path": f"palette.{key}", "message": f"palette block '{block}' (key '{key}'): {exc}"})
    return errors


def validate_structure(structure: Any) -> None:
    """Raise StructureValidationError if any structural rule fails."""
    errs = collect_errors(structure)
    if not errs:
        return
    if any("required property" in e["message"] for e in errs):
        message = "Structure missing one of size/palette/layers"
    else:
        message = f"structure failed validation at {errs[0]['path']}: {errs[0]['message']}"
    raise StructureValidationError(message, errors=errs)
