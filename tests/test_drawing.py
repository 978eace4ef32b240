import numpy as np

from handwave.classifier import HandWaveClassifier
from handwave.drawing import draw_hud, draw_keypoints, draw_wave_overlay
from handwave.geometry import HeadingSegment

from handbuilders import make_hand


def _canvas():
    return np.zeros((480, 640, 3), dtype=np.uint8)


class TestOverlay:
    def test_no_hand_leaves_frame_blank(self):
        classifier = HandWaveClassifier()
        frame = _canvas()
        draw_wave_overlay(frame, None, classifier.update(None))
        assert not frame.any()

    def test_overlay_draws_on_frame(self):
        classifier = HandWaveClassifier()
        hand = make_hand(-70.0, palm=(320.0, 400.0))
        event = classifier.update(hand)
        frame = _canvas()
        out = draw_wave_overlay(frame, hand, event, classifier.heading_segment(hand))
        assert out is frame
        assert frame.any()

    def test_keypoints_return_tight_box(self):
        hand = make_hand(-90.0, palm=(320.0, 400.0))
        box = draw_keypoints(_canvas(), hand)
        assert box.bottom == 400.0
        assert box.left == 290.0
        assert box.right == 350.0

    def test_hud(self):
        frame = _canvas()
        draw_hud(frame, ["Hand detected: false"])
        assert frame[:30].any()

    def test_zero_length_heading_draws_like_no_heading(self):
        classifier = HandWaveClassifier()
        hand = make_hand(-90.0, palm=(320.0, 400.0))
        event = classifier.update(hand)
        segment = HeadingSegment.from_points(hand.palm_base, hand.palm_base)
        with_segment = draw_wave_overlay(_canvas(), hand, event, segment)
        without_segment = draw_wave_overlay(_canvas(), hand, event, None)
        assert np.array_equal(with_segment, without_segment)
        assert not np.array_equal(with_segment, draw_wave_overlay(_canvas(), hand, event, classifier.heading_segment(hand)))
