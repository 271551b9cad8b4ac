from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from buildgen.config import MAX_DIM, MAX_HEIGHT


@dataclass(frozen=True)
class BuildLimits:
    width: int
    depth: int
    height: int

    @property
    def max_dim(self) -> int:
        return max(self.width, self.depth)


def _clamp(value: Optional[int], upper: int) -> Optional[int]:
    # 0 and None both mean "not requested"
    if not value:
        return None
    return max(1, min(int(value), upper))


def resolve_limits(
    max_dim: Optional[int] = None,
    width: Optional[int] = None,
    depth: Optional[int] = None,
    height: Optional[int] = None,
    *,
    max_horizontal: int = MAX_DIM,
    max_height: int = MAX_HEIGHT,
) -> BuildLimits:
    """
    Turn request dimension hints into limits the service can honor.

    Older clients send one square `max_dim`; newer ones send width/depth/height.
    Every value is clamped to the configured maxima, and anything missing
    defaults to them.
    """
    square = _clamp(max_dim, max_horizontal)
    w = _clamp(width, max_horizontal) or square or max_horizontal
    d = _clamp(depth, max_horizontal) or square or max_horizontal
    h = _clamp(height, max_height) or max_height
    return BuildLimits(width=w, depth=d, height=h)
