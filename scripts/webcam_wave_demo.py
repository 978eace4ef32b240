#!/usr/bin/env python3
"""
Webcam hand wave detector.

Hold an open hand up to the camera with the palm facing it and wave. The
overlay shows the heading line, wave-ready flag and wave count. With
--serial-port, the heading is written as one "<angle + 180>\\n" line per frame.
"""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from handwave.classifier import HandWaveClassifier, WaveConfig  # noqa: E402
from handwave.detector import HandLandmarkDetector  # noqa: E402
from handwave.drawing import draw_hud, draw_wave_overlay  # noqa: E402
from handwave.stats import DetectionRateTracker  # noqa: E402
from handwave.transmit import AngleTransmitter  # noqa: E402


logger = logging.getLogger("webcam_wave_demo")


def main() -> int:
    ap = argparse.ArgumentParser(description="Webcam hand wave detector demo.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=640, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=480, help="Capture height (best effort)")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--left-threshold", type=float, default=-75.0, help="Left wave threshold in degrees")
    ap.add_argument("--right-threshold", type=float, default=-100.0, help="Right wave threshold in degrees")
    ap.add_argument(
        "--palm-above-fingers",
        action="store_true",
        help="Require the palm base not to sit below the finger bases (default: the upright-hand rule, wrist below knuckles)",
    )
    ap.add_argument(
        "--serial-port",
        default=None,
        help="Device or file to write heading lines to (e.g. /dev/ttyACM0); off by default",
    )
    ap.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    classifier = HandWaveClassifier(
        WaveConfig(
            left_threshold=args.left_threshold,
            right_threshold=args.right_threshold,
            palm_below_finger_bases=not args.palm_above_fingers,
        )
    )
    rate = DetectionRateTracker()

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(args.camera, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise RuntimeError(
            f"Could not open camera index {args.camera}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, args.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, args.height)

    serial_stream = open(args.serial_port, "wb", buffering=0) if args.serial_port else None
    with AngleTransmitter(serial_stream) as transmitter, HandLandmarkDetector(max_num_hands=1) as detector:
        while True:
            ok, frame = cap.read()
            if not ok:
                break

            if not args.no_mirror:
                frame = cv2.flip(frame, 1)

            hand = detector.detect_primary(frame)
            rate.observe(hand is not None)
            event = classifier.update(hand)
            if event.wave_detected:
                logger.info("wave! contiguous=%d overall=%d", event.contiguous_wave_count, event.overall_wave_count)
            if event.wave_ready:
                transmitter.send(event.heading)

            segment = classifier.heading_segment(hand) if hand is not None and hand.is_complete() else None
            draw_wave_overlay(frame, hand, event, segment)

            hud = [f"Hand detected: {hand is not None}"]
            if hand is not None:
                hud.append(f"Hand detections / sec: {rate.rate():.1f}")
            hud.append(f"Overall waves: {event.overall_wave_count} | press q to quit")
            draw_hud(frame, hud)

            cv2.imshow("handwave - wave detector", frame)
            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break

    cap.release()
    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
