from __future__ import annotations

import math
from typing import Sequence, Tuple


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def to_px(pt: Sequence[float]) -> Tuple[int, int]:
    return (int(round(pt[0])), int(round(pt[1])))


def heading_degrees(start: Sequence[float], end: Sequence[float]) -> float:
    """Angle of the 2D vector start -> end, atan2 convention, in degrees."""
    return math.degrees(math.atan2(end[1] - start[1], end[0] - start[0]))


def is_descending_chain(chain: Sequence[Sequence[float]]) -> bool:
    """True if no point in the chain is lower on screen (greater y) than the one before it."""
    for prev, cur in zip(chain, chain[1:]):
        if cur[1] > prev[1]:
            return False
    return True
