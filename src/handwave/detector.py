from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import cv2

from .model_assets import ensure_hand_landmarker_task
from .types import LandmarkFrame, Point
from .utils import clamp_int


logger = logging.getLogger(__name__)

PALM_BASE_IDX = 0

# MediaPipe 21-point hand layout, wrist side first.
FINGER_LANDMARK_IDS: Dict[str, Tuple[int, ...]] = {
    "thumb": (1, 2, 3, 4),
    "index": (5, 6, 7, 8),
    "middle": (9, 10, 11, 12),
    "ring": (13, 14, 15, 16),
    "pinky": (17, 18, 19, 20),
}

NUM_HAND_LANDMARKS = 21


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    static_image_mode: bool,
    max_num_hands: int,
    model_complexity: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=max_num_hands,
        model_complexity=model_complexity,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    max_num_hands: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> _TasksBackend:
    """
    Fallback for MediaPipe builds without `mp.solutions`.

    The Tasks HandLandmarker needs a `.task` model asset on disk.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.VIDEO,
        num_hands=max_num_hands,
        min_hand_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


def landmark_frame_from_points(
    points: Sequence[Point],
    confidence: float = 1.0,
    handedness: Optional[str] = None,
) -> Optional[LandmarkFrame]:
    """Group a flat 21-point MediaPipe landmark list into finger chains."""
    if len(points) < NUM_HAND_LANDMARKS:
        return None
    fingers = {name: tuple(points[i] for i in ids) for name, ids in FINGER_LANDMARK_IDS.items()}
    return LandmarkFrame(
        fingers=fingers,
        palm_base=points[PALM_BASE_IDX],
        confidence=confidence,
        landmarks=tuple(points),
        handedness=handedness,
    )


class HandLandmarkDetector:
    """
    Hand landmark detector using MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default). Output
    landmarks are in pixel coordinates, y growing downward.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        max_num_hands: int = 1,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = "models/hand_landmarker.task",
        frame_interval_ms: int = 33,
    ) -> None:
        self._static_image_mode = static_image_mode
        self._frame_interval_ms = frame_interval_ms
        self._tasks_timestamp_ms = 0
        self._tasks: Optional[_TasksBackend] = None
        self._solutions = _try_create_solutions_backend(
            static_image_mode=static_image_mode,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

        if self._solutions is not None:
            logger.info("using MediaPipe solutions backend")
            return

        try:
            self._tasks = _try_create_tasks_backend(
                model_path=tasks_model_path,
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except FileNotFoundError as e:
            raise RuntimeError(
                "MediaPipe does not provide `mp.solutions` here, and the Tasks HandLandmarker\n"
                f"fallback needs a model file on disk: {tasks_model_path}"
            ) from e
        except ImportError as e:
            raise RuntimeError(
                "Could not initialize MediaPipe Hands: neither `mp.solutions` nor the Tasks API "
                "is importable from the installed `mediapipe` package."
            ) from e
        logger.info("using MediaPipe Tasks backend (%s)", tasks_model_path)

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandLandmarkDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> List[LandmarkFrame]:
        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            hand_landmarks_list = [hl.landmark for hl in (results.multi_hand_landmarks or [])]
            handedness = []
            for entry in results.multi_handedness or []:
                c = entry.classification[0] if entry.classification else None
                handedness.append((getattr(c, "label", None), getattr(c, "score", None)))
        elif self._tasks is not None:
            result = self._detect_tasks(frame_rgb)
            hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
            handedness = []
            for cats in getattr(result, "handedness", None) or []:
                c = cats[0] if cats else None
                handedness.append((getattr(c, "category_name", None), getattr(c, "score", None)))
        else:
            return []

        frames: List[LandmarkFrame] = []
        for i, landmarks in enumerate(hand_landmarks_list):
            label, score = handedness[i] if i < len(handedness) else (None, None)
            frame = self._build_landmark_frame(landmarks, label, score, w, h)
            if frame is not None:
                frames.append(frame)
        return frames

    def detect_primary(self, frame_bgr) -> Optional[LandmarkFrame]:
        frames = self.detect(frame_bgr)
        return frames[0] if frames else None

    def _detect_tasks(self, frame_rgb):
        mp = self._tasks.mp
        if not hasattr(mp, "Image") or not hasattr(mp, "ImageFormat"):
            raise RuntimeError("Your MediaPipe build does not expose `mp.Image` required for the Tasks API.")
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        if self._static_image_mode:
            return self._tasks.landmarker.detect(mp_image)
        # VIDEO mode requires monotonically increasing timestamps.
        self._tasks_timestamp_ms += self._frame_interval_ms
        return self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

    def _build_landmark_frame(
        self, landmarks, label: Optional[str], score: Optional[float], w: int, h: int
    ) -> Optional[LandmarkFrame]:
        points: List[Point] = []
        for lm in landmarks:
            x_px = clamp_int(int(round(float(lm.x) * w)), 0, w - 1)
            y_px = clamp_int(int(round(float(lm.y) * h)), 0, h - 1)
            points.append((float(x_px), float(y_px), float(getattr(lm, "z", 0.0))))

        confidence = 1.0 if score is None else float(score)
        return landmark_frame_from_points(points, confidence=confidence, handedness=label)
