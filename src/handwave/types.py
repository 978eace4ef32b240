from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple


Point = Tuple[float, ...]  # (x, y) or (x, y, z), screen coordinates (y grows downward)

FINGER_NAMES: Tuple[str, ...] = ("thumb", "index", "middle", "ring", "pinky")


def is_point(p) -> bool:
    """True for anything with at least an x and a y coordinate."""
    try:
        return len(p) >= 2
    except TypeError:
        return False


@dataclass(frozen=True)
class LandmarkFrame:
    """
    One hand observation for one video frame.

    `fingers` maps each finger name to its landmark chain, ordered from the
    wrist side to the fingertip.
    """

    fingers: Mapping[str, Sequence[Point]]
    palm_base: Point
    confidence: float = 1.0
    landmarks: Tuple[Point, ...] = ()
    handedness: Optional[str] = None

    def is_complete(self) -> bool:
        for name in FINGER_NAMES:
            chain = self.fingers.get(name)
            if chain is None or len(chain) < 2:
                return False
            if not all(is_point(p) for p in chain):
                return False
        return is_point(self.palm_base)

    def fingertip(self, name: str) -> Point:
        return self.fingers[name][-1]

    def all_points(self) -> Tuple[Point, ...]:
        if self.landmarks:
            return tuple(self.landmarks)
        pts = [self.palm_base]
        for name in FINGER_NAMES:
            pts.extend(self.fingers.get(name, ()))
        return tuple(pts)


class WaveState(enum.Enum):
    INITIAL = 1
    LEFT_EXCEEDED = 2
    RIGHT_EXCEEDED = 3


@dataclass(frozen=True)
class WaveEvent:
    """Classifier output for a single frame."""

    wave_detected: bool
    heading: Optional[float]
    wave_ready: bool
    state: WaveState
    overall_wave_count: int
    contiguous_wave_count: int
    last_threshold_angle: Optional[float]
