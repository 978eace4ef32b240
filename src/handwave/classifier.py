from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .geometry import HeadingSegment
from .types import FINGER_NAMES, LandmarkFrame, WaveEvent, WaveState
from .utils import is_descending_chain


logger = logging.getLogger(__name__)

# The thumb base can sit lower than the palm while waving, so it is left out.
PALM_CHECK_FINGERS = ("index", "middle", "ring", "pinky")


@dataclass(frozen=True)
class WaveConfig:
    """
    Angular thresholds, in degrees, for wave detection.

    Headings above `left_threshold` count as the left extreme, headings below
    `right_threshold` as the right extreme. Anything in between is the
    hysteresis band and leaves the state machine untouched.

    By default the palm base may not sit lower on screen than the index, middle,
    ring and pinky bases. `palm_below_finger_bases` flips that comparison,
    which is what raw MediaPipe landmarks of an upright hand look like (wrist
    below the knuckles).
    """

    left_threshold: float = -75.0
    right_threshold: float = -100.0
    palm_below_finger_bases: bool = False

    def __post_init__(self) -> None:
        if not self.right_threshold < self.left_threshold:
            raise ValueError(
                f"right_threshold ({self.right_threshold}) must be below "
                f"left_threshold ({self.left_threshold})"
            )


class HandWaveClassifier:
    """
    Per-frame hand wave detector.

    Feed one `LandmarkFrame` (or None when no hand was found) per video frame to
    `update()`. A wave is counted each time the heading swings from one
    threshold extreme across to the other while the hand stays in an open-palm
    pose; losing the pose resets the contiguous count.
    """

    def __init__(self, config: Optional[WaveConfig] = None) -> None:
        self.config = config or WaveConfig()
        self._state = WaveState.INITIAL
        self._overall_wave_count = 0
        self._contiguous_wave_count = 0
        self._last_threshold_angle: Optional[float] = None
        self._heading: Optional[float] = None
        self._wave_ready = False

    @property
    def state(self) -> WaveState:
        return self._state

    @property
    def overall_wave_count(self) -> int:
        return self._overall_wave_count

    @property
    def contiguous_wave_count(self) -> int:
        return self._contiguous_wave_count

    @property
    def last_threshold_angle(self) -> Optional[float]:
        return self._last_threshold_angle

    @property
    def heading(self) -> Optional[float]:
        return self._heading

    @property
    def wave_ready(self) -> bool:
        return self._wave_ready

    def is_wave_ready_pose(self, frame: Optional[LandmarkFrame]) -> bool:
        """Open palm, fingers pointing up: palm base on the configured side of the finger bases, every chain rising."""
        if frame is None or not frame.is_complete():
            return False

        palm_y = frame.palm_base[1]
        for name in PALM_CHECK_FINGERS:
            base_y = frame.fingers[name][0][1]
            if self.config.palm_below_finger_bases:
                if palm_y < base_y:
                    return False
            elif palm_y > base_y:
                return False

        for name in FINGER_NAMES:
            if not is_descending_chain(frame.fingers[name]):
                return False

        return True

    def heading_segment(self, frame: LandmarkFrame) -> HeadingSegment:
        return HeadingSegment.from_points(frame.palm_base, frame.fingertip("middle"))

    def compute_heading(self, frame: LandmarkFrame) -> float:
        return self.heading_segment(frame).heading

    def reset(self) -> None:
        """Back to INITIAL. The overall count is kept."""
        if self._state is not WaveState.INITIAL:
            logger.debug("wave state %s -> INITIAL", self._state.name)
        self._state = WaveState.INITIAL
        self._contiguous_wave_count = 0
        self._last_threshold_angle = None

    def update(self, frame: Optional[LandmarkFrame]) -> WaveEvent:
        complete = frame is not None and frame.is_complete()
        self._heading = self.compute_heading(frame) if complete else None
        self._wave_ready = self.is_wave_ready_pose(frame)

        wave_detected = False
        if not self._wave_ready:
            self.reset()
        else:
            heading = self._heading
            if heading > self.config.left_threshold:
                if self._state is WaveState.RIGHT_EXCEEDED:
                    wave_detected = True
                self._enter(WaveState.LEFT_EXCEEDED, heading)
            elif heading < self.config.right_threshold:
                if self._state is WaveState.LEFT_EXCEEDED:
                    wave_detected = True
                self._enter(WaveState.RIGHT_EXCEEDED, heading)

            if wave_detected:
                self._overall_wave_count += 1
                self._contiguous_wave_count += 1
                logger.debug(
                    "wave detected at %.1f deg (contiguous=%d, overall=%d)",
                    heading,
                    self._contiguous_wave_count,
                    self._overall_wave_count,
                )

        return WaveEvent(
            wave_detected=wave_detected,
            heading=self._heading,
            wave_ready=self._wave_ready,
            state=self._state,
            overall_wave_count=self._overall_wave_count,
            contiguous_wave_count=self._contiguous_wave_count,
            last_threshold_angle=self._last_threshold_angle,
        )

    def _enter(self, state: WaveState, heading: float) -> None:
        if state is not self._state:
            logger.debug("wave state %s -> %s at %.1f deg", self._state.name, state.name, heading)
        self._state = state
        self._last_threshold_angle = heading
