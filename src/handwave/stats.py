from __future__ import annotations

import time
from typing import Optional


class DetectionRateTracker:
    """Hand detections per second over the current unbroken run of detections."""

    def __init__(self) -> None:
        self.contiguous_detections = 0
        self._first_detection_s: Optional[float] = None
        self._last_detection_s: Optional[float] = None

    def observe(self, detected: bool, now: Optional[float] = None) -> None:
        if not detected:
            self.contiguous_detections = 0
            self._first_detection_s = None
            self._last_detection_s = None
            return
        now = time.monotonic() if now is None else now
        if self.contiguous_detections == 0:
            self._first_detection_s = now
        self.contiguous_detections += 1
        self._last_detection_s = now

    def rate(self, now: Optional[float] = None) -> float:
        if self.contiguous_detections == 0 or self._first_detection_s is None:
            return 0.0
        if now is None:
            now = self._last_detection_s
        elapsed = now - self._first_detection_s
        if elapsed <= 0:
            return 0.0
        return self.contiguous_detections / elapsed
