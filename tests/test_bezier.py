"""Tests for cubic Bezier curves."""

import math

import numpy
import pytest

from cornu.curve.bezier import BezierCubic
from cornu.curve.offset import PiecewiseLinearOffset


def quarter_turn(weighted=False):
    return BezierCubic.from_directed_points((0, 0, 0), (1, 1, math.pi / 2), weighted=weighted)


class TestEvaluation:
    def test_straight_control_polygon(self):
        """Evenly spaced collinear control points give a uniformly parameterized line."""
        curve = BezierCubic((0, 0), (1, 0), (2, 0), (3, 0))
        assert curve.kind == 'BezierCubic'
        assert curve.point(0.5) == pytest.approx([1.5, 0])
        assert curve.length == pytest.approx(3)
        assert curve.direction(0.7) == pytest.approx(0)
        assert curve.curvature(0.7) == pytest.approx(0)
        assert curve.length_fraction(0.25) == pytest.approx(0.25)

    def test_vectorized(self):
        curve = quarter_turn()
        t = numpy.linspace(0, 1, 7)
        assert curve.point(t).shape == (7, 2)
        assert curve.direction(t).shape == (7,)
        assert curve.curvature(t).shape == (7,)
        assert curve.point(t)[3] == pytest.approx(curve.point(0.5))

    def test_end_points(self):
        curve = quarter_turn()
        assert tuple(curve.start_point) == pytest.approx((0, 0, 0))
        assert tuple(curve.end_point) == pytest.approx((1, 1, math.pi / 2))
        assert curve.curvature(0.5) > 0

    def test_derivative_points(self):
        curve = BezierCubic((0, 0), (1, 2), (3, 2), (4, 0))
        assert curve.derivative_points(0) == pytest.approx([3, 6])
        assert curve.derivative_points(1) == pytest.approx([3, -6])

    def test_stationary_start(self):
        """Where the derivative vanishes the heading falls back to the first distinct control point."""
        curve = BezierCubic((0, 0), (0, 0), (1, 1), (2, 1))
        assert curve.direction(0) == pytest.approx(math.pi / 4)
        assert curve.curvature(0) == math.inf

    def test_turn(self):
        assert quarter_turn().turn(0, 1) == pytest.approx(math.pi / 2)
        curve = BezierCubic((0, 0), (1, 2), (3, -2), (4, 0))
        assert curve.turn(0, 1) == pytest.approx(0, abs=1e-12)
        assert curve.turn(0, 0.5) < 0

    def test_end_heading_normalized(self):
        """Heading back along the x axis is reported as -pi."""
        curve = BezierCubic((0, 0), (0, 1), (1, 0), (0, 0))
        assert curve.direction(1) == pytest.approx(-math.pi)

    def test_control_points_read_only(self):
        curve = quarter_turn()
        assert curve.control_points.shape == (4, 2)
        with pytest.raises(ValueError):
            curve.control_points[1, 0] = 3


class TestFromDirectedPoints:
    def test_unweighted_control_points(self):
        half = math.sqrt(2) / 2
        curve = quarter_turn()
        assert curve.control_points == pytest.approx(numpy.array([[0, 0], [half, 0], [1, 1 - half], [1, 1]]))

    def test_weighted_symmetric_matches_unweighted(self):
        """With both ends equally far from the other's heading line, the weights are equal."""
        assert quarter_turn(weighted=True).control_points == pytest.approx(quarter_turn().control_points)

    def test_weighted_asymmetric(self):
        curve = BezierCubic.from_directed_points((0, 0, 0), (4, 1, math.pi / 4), shape=1, weighted=True)
        c = curve.control_points
        first = math.hypot(*(c[1] - c[0]))
        second = math.hypot(*(c[3] - c[2]))
        assert first + second == pytest.approx(math.hypot(4, 1))
        assert first != pytest.approx(second)

    def test_weighted_collinear(self):
        curve = BezierCubic.from_directed_points((0, 0, 0), (4, 0, 0), weighted=True)
        assert curve.control_points[1] == pytest.approx([2, 0])
        assert curve.control_points[2] == pytest.approx([2, 0])

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            BezierCubic.from_directed_points((1, 1, 0), (1, 1, 1))
        for shape in (0, -1, math.inf, math.nan):
            with pytest.raises(ValueError):
                BezierCubic.from_directed_points((0, 0, 0), (1, 1, 0), shape=shape)
        with pytest.raises(TypeError):
            BezierCubic.from_directed_points(None, (1, 1, 0))


class TestSplit:
    def test_pieces_follow_original(self):
        curve = BezierCubic((0, 0), (1, 2), (3, 2), (4, 0))
        first, second = curve.split(0.3)
        assert first.point(1) == pytest.approx(curve.point(0.3))
        assert first.point(0.5) == pytest.approx(curve.point(0.15))
        assert second.point(0.5) == pytest.approx(curve.point(0.65))
        assert first.length + second.length == pytest.approx(curve.length)

    @pytest.mark.parametrize('t', [-0.1, 1.5, math.nan])
    def test_out_of_range(self, t):
        with pytest.raises(ValueError):
            BezierCubic((0, 0), (1, 2), (3, 2), (4, 0)).split(t)


class TestArcLength:
    def test_fraction_at_length_inverts_length_fraction(self):
        curve = BezierCubic((0, 0), (1, 2), (3, 2), (4, 0))
        for t in (0.1, 0.3, 0.8):
            s = curve.length_fraction(t) * curve.length
            assert curve.fraction_at_length(s) == pytest.approx(t, abs=1e-9)
        assert curve.fraction_at_length(0) == 0
        assert curve.fraction_at_length(curve.length) == 1

    def test_offsets_indexed_by_length(self):
        """Offsets are a function of the fraction of length, not of the Bezier parameter."""
        curve = BezierCubic((0, 0), (0.1, 0), (0.2, 0), (3, 0))
        offsets = PiecewiseLinearOffset.of(0, 0, 1, 1)
        t = curve.fraction_at_length(1.5)
        assert curve.offset_point(t, offsets) == pytest.approx([1.5, 0.5])
