from .classifier import HandWaveClassifier, WaveConfig
from .geometry import HeadingSegment, TightBoundingBox
from .transmit import AngleTransmitter, encode_angle_line
from .types import FINGER_NAMES, LandmarkFrame, WaveEvent, WaveState

__all__ = [
    "AngleTransmitter",
    "FINGER_NAMES",
    "HandWaveClassifier",
    "HeadingSegment",
    "LandmarkFrame",
    "TightBoundingBox",
    "WaveConfig",
    "WaveEvent",
    "WaveState",
    "encode_angle_line",
]
