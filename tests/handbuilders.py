import math

from handwave.types import LandmarkFrame


def make_hand(heading_deg=-90.0, palm=(0.0, 0.0), reach=100.0, confidence=0.9):
    """
    Build an upright open hand whose middle fingertip sits at `heading_deg` from the palm base.

    Finger bases share the palm's y, and every chain rises toward the tip.
    """
    px, py = palm
    tip = (px + reach * math.cos(math.radians(heading_deg)), py + reach * math.sin(math.radians(heading_deg)))

    def straight_up(x):
        return tuple((px + x, py - step * 10.0) for step in range(4))

    middle = tuple(
        (px + (tip[0] - px) * t, py + (tip[1] - py) * t) for t in (0.0, 1 / 3, 2 / 3, 1.0)
    )
    fingers = {
        "thumb": straight_up(-30.0),
        "index": straight_up(-15.0),
        "middle": middle,
        "ring": straight_up(15.0),
        "pinky": straight_up(30.0),
    }
    return LandmarkFrame(fingers=fingers, palm_base=(px, py), confidence=confidence)


def with_finger(hand, name, chain):
    fingers = dict(hand.fingers)
    fingers[name] = tuple(chain)
    return LandmarkFrame(fingers=fingers, palm_base=hand.palm_base, confidence=hand.confidence)


def with_palm(hand, palm):
    return LandmarkFrame(fingers=dict(hand.fingers), palm_base=palm, confidence=hand.confidence)
