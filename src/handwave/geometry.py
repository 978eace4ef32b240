from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .utils import heading_degrees


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class HeadingSegment:
    """Segment from the palm base to the middle fingertip."""

    start: Point2
    end: Point2

    @classmethod
    def from_points(cls, start: Sequence[float], end: Sequence[float]) -> "HeadingSegment":
        return cls(start=(float(start[0]), float(start[1])), end=(float(end[0]), float(end[1])))

    @property
    def heading(self) -> float:
        """Heading in degrees; 0 along +x, 90 along +y (screen down)."""
        return heading_degrees(self.start, self.end)

    @property
    def length(self) -> float:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        return (dx * dx + dy * dy) ** 0.5

    def orthogonal_projection(self, point: Sequence[float]) -> Point2:
        """
        Foot of the perpendicular from `point` onto the line through this segment.

        The line is treated as infinite, so the result may lie outside the segment.
        A zero-length segment projects everything onto its start point.
        """
        ax, ay = self.start
        dx = self.end[0] - ax
        dy = self.end[1] - ay
        denom = dx * dx + dy * dy
        if denom == 0:
            return (ax, ay)
        t = ((point[0] - ax) * dx + (point[1] - ay) * dy) / denom
        return (ax + t * dx, ay + t * dy)


@dataclass(frozen=True)
class TightBoundingBox:
    """Axis-aligned box around a set of keypoints, plus the points that define each edge."""

    left: float
    top: float
    right: float
    bottom: float
    leftmost: Point2
    rightmost: Point2
    topmost: Point2
    bottommost: Point2

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point2:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> Optional["TightBoundingBox"]:
        pts = [(float(p[0]), float(p[1])) for p in points]
        if not pts:
            return None
        # Ties keep the first point seen.
        leftmost = rightmost = topmost = bottommost = pts[0]
        for p in pts[1:]:
            if p[0] < leftmost[0]:
                leftmost = p
            if p[0] > rightmost[0]:
                rightmost = p
            if p[1] < topmost[1]:
                topmost = p
            if p[1] > bottommost[1]:
                bottommost = p
        return cls(
            left=leftmost[0],
            top=topmost[1],
            right=rightmost[0],
            bottom=bottommost[1],
            leftmost=leftmost,
            rightmost=rightmost,
            topmost=topmost,
            bottommost=bottommost,
        )
