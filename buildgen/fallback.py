from __future__ import annotations

import copy
from typing import Any, Dict

# Simple 8x4x8 house served when the model API is not configured.
# A = cobblestone, B = oak planks, D = glass, _ = air
_FALLBACK_HOUSE: Dict[str, Any] = {
    "name": "fallback_house",
    "size": [8, 4, 8],
    "palette": {
        "A": "minecraft:cobblestone",
        "B": "minecraft:oak_planks",
        "C": "minecraft:oak_fence",
        "D": "minecraft:glass",
        "_": "minecraft:air",
    },
    "layers": {
        # floor
        "0": [
            ["A", "A", "A", "A", "A", "A", "A", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "B", "B", "B", "B", "B", "B", "A"],
            ["A", "A", "A", "A", "A", "A", "A", "A"],
        ],
        # walls, door opening on the front row
        "1": [
            ["A", "A", "A", "_", "_", "A", "A", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "A", "A", "A", "A", "A", "A", "A"],
        ],
        # walls with windows
        "2": [
            ["A", "A", "D", "_", "_", "D", "A", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["D", "_", "_", "_", "_", "_", "_", "D"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["D", "_", "_", "_", "_", "_", "_", "D"],
            ["A", "_", "_", "_", "_", "_", "_", "A"],
            ["A", "A", "D", "A", "A", "D", "A", "A"],
        ],
        # roof
        "3": [["B"] * 8 for _ in range(8)],
    },
}


def get_fallback_structure() -> Dict[str, Any]:
    """Return a fresh copy of the built-in house; identical on every call."""
    return copy.deepcopy(_FALLBACK_HOUSE)
