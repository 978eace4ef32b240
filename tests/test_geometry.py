import pytest

from handwave.geometry import HeadingSegment, TightBoundingBox


class TestHeadingSegment:
    def test_projection_onto_vertical_line(self):
        seg = HeadingSegment.from_points((0, 0), (0, -10))
        assert seg.orthogonal_projection((5, -3)) == pytest.approx((0.0, -3.0))

    def test_projection_beyond_segment_end(self):
        seg = HeadingSegment.from_points((0, 0), (10, 10))
        assert seg.orthogonal_projection((20, 20)) == pytest.approx((20.0, 20.0))
        assert seg.orthogonal_projection((0, 10)) == pytest.approx((5.0, 5.0))

    def test_zero_length_segment(self):
        seg = HeadingSegment.from_points((3, 4), (3, 4))
        assert seg.orthogonal_projection((10, 10)) == (3.0, 4.0)
        assert seg.length == 0.0

    def test_drops_z(self):
        seg = HeadingSegment.from_points((0, 0, 1.0), (3, 4, -2.0))
        assert seg.end == (3.0, 4.0)
        assert seg.length == pytest.approx(5.0)


class TestTightBoundingBox:
    def test_empty(self):
        assert TightBoundingBox.from_points([]) is None

    def test_extremes(self):
        box = TightBoundingBox.from_points([(5, 5), (1, 7), (9, 2), (4, 12)])
        assert (box.left, box.top, box.right, box.bottom) == (1.0, 2.0, 9.0, 12.0)
        assert box.leftmost == (1.0, 7.0)
        assert box.rightmost == (9.0, 2.0)
        assert box.topmost == (9.0, 2.0)
        assert box.bottommost == (4.0, 12.0)
        assert box.width == 8.0
        assert box.height == 10.0
        assert box.center == (5.0, 7.0)

    def test_single_point(self):
        box = TightBoundingBox.from_points([(2, 3, 0.1)])
        assert box.width == 0.0
        assert box.leftmost == box.bottommost == (2.0, 3.0)
