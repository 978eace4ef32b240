from __future__ import annotations

import argparse
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from handwave.classifier import HandWaveClassifier, WaveConfig  # noqa: E402
from handwave.detector import HandLandmarkDetector  # noqa: E402
from handwave.drawing import draw_wave_overlay  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify the hand pose in a single image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument(
        "--palm-above-fingers",
        action="store_true",
        help="Require the palm base not to sit below the finger bases (default: the upright-hand rule)",
    )
    args = ap.parse_args()

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    classifier = HandWaveClassifier(WaveConfig(palm_below_finger_bases=not args.palm_above_fingers))
    with HandLandmarkDetector(static_image_mode=True, max_num_hands=1) as detector:
        hand = detector.detect_primary(frame)

    event = classifier.update(hand)
    segment = classifier.heading_segment(hand) if hand is not None and hand.is_complete() else None
    out = draw_wave_overlay(frame, hand, event, segment)

    ok = cv2.imwrite(args.out, out)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    if hand is None:
        print("no hand detected")
        return 0
    heading = "n/a" if event.heading is None else f"{event.heading:.1f}"
    print(
        f"{hand.handedness} confidence={hand.confidence:.2f} "
        f"wave_ready={event.wave_ready} heading={heading} state={event.state.name}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
