from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import cv2
import numpy as np

from .geometry import HeadingSegment, TightBoundingBox
from .types import FINGER_NAMES, LandmarkFrame, WaveEvent
from .utils import to_px


KEYPOINT_COLOR = (0, 255, 0)
SKELETON_COLOR = (0, 200, 0)
BOX_COLOR = (0, 0, 255)
HEADING_COLOR = (255, 0, 0)
EXTREME_COLOR = (255, 255, 255)


def draw_bbox(frame, bbox: Sequence[float], color=(0, 255, 0), thickness=2):
    x0, y0, x1, y1 = (int(round(v)) for v in bbox)
    cv2.rectangle(frame, (x0, y0), (x1, y1), color, thickness)
    return frame


def draw_point(frame, pt: Sequence[float], color=(0, 0, 255), radius=5):
    cv2.circle(frame, to_px(pt), radius, color, -1, lineType=cv2.LINE_AA)
    return frame


def draw_line(frame, p0: Sequence[float], p1: Sequence[float], color=(255, 255, 255), thickness=1):
    cv2.line(frame, to_px(p0), to_px(p1), color, thickness, cv2.LINE_AA)
    return frame


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.5, thickness=1):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Sequence[float]], color=(255, 255, 0), thickness=2, closed=False):
    pts = np.array([to_px(p) for p in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness, cv2.LINE_AA)
    return frame


def draw_keypoints(frame, hand: LandmarkFrame, color=KEYPOINT_COLOR, radius=5) -> Optional[TightBoundingBox]:
    """Dot every keypoint and return the tight box around them."""
    points = hand.all_points()
    for pt in points:
        draw_point(frame, pt, color=color, radius=radius)
    return TightBoundingBox.from_points(points)


def draw_skeleton(frame, hand: LandmarkFrame, color=SKELETON_COLOR, thickness=1):
    for name in FINGER_NAMES:
        chain = hand.fingers.get(name)
        if not chain:
            continue
        draw_polyline(frame, chain, color=color, thickness=thickness)
        draw_line(frame, hand.palm_base, chain[0], color=color, thickness=thickness)
    return frame


def draw_rotated_box(frame, box: TightBoundingBox, heading_deg: float, color=BOX_COLOR, thickness=1):
    """The tight box, re-centered and turned so its vertical axis follows the heading."""
    rect = (box.center, (box.width, box.height), heading_deg - 90.0)
    corners = cv2.boxPoints(rect)
    return draw_polyline(frame, corners, color=color, thickness=thickness, closed=True)


def draw_heading(frame, segment: HeadingSegment, color=HEADING_COLOR, thickness=2):
    return draw_line(frame, segment.start, segment.end, color=color, thickness=thickness)


def draw_hud(frame, lines: Sequence[str], org: Tuple[int, int] = (6, 18), line_height: int = 18, color=(255, 255, 255)):
    x, y = org
    for line in lines:
        draw_text(frame, line, (x, y), color=color)
        y += line_height
    return frame


def draw_wave_overlay(frame, hand: Optional[LandmarkFrame], event: WaveEvent, segment: Optional[HeadingSegment] = None):
    """
    Full per-hand overlay: keypoints, skeleton, tight and rotated boxes, heading
    line, projection lines to the extreme points and a small label stack.
    """
    if hand is None:
        return frame

    box = draw_keypoints(frame, hand)
    draw_skeleton(frame, hand)
    if box is None:
        return frame
    draw_bbox(frame, (box.left, box.top, box.right, box.bottom), color=BOX_COLOR, thickness=1)

    # A zero-length segment has no direction to align to.
    if segment is not None and segment.length > 0:
        draw_heading(frame, segment)
        draw_rotated_box(frame, box, segment.heading)
        for pt in (box.leftmost, box.rightmost):
            draw_line(frame, segment.orthogonal_projection(pt), pt, color=EXTREME_COLOR)

    for pt in (box.leftmost, box.rightmost, box.topmost, box.bottommost):
        draw_point(frame, pt, color=EXTREME_COLOR, radius=3)

    labels = [
        f"{hand.confidence:.2f}",
        f"Wave count: {event.contiguous_wave_count}",
        f"Is hand in 'handwave' position: {event.wave_ready}",
    ]
    x = int(round(box.left))
    y = int(round(box.top)) - 12
    for label in labels:
        draw_text(frame, label, (x, max(12, y)), color=BOX_COLOR)
        y -= 14
    return frame
