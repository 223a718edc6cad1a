"""Tests for straight lines and circular arcs."""

import math

import numpy
import pytest

from cornu.curve import curves
from cornu.curve import flatten
from cornu.curve.offset import PiecewiseLinearOffset


class TestStraight:
    def test_position_and_heading(self):
        line = curves.Straight((1, 2, 0), 10)
        assert line.kind == 'Straight'
        assert line.is_straight
        assert line.length == 10
        assert line.point(0.5) == pytest.approx([6, 2])
        assert tuple(line.end_point) == pytest.approx((11, 2, 0))
        assert line.direction(0.3) == 0
        assert line.curvature(0.3) == 0
        assert line.start_radius == math.inf

    def test_heading_normalized(self):
        line = curves.Straight((0, 0, 2 * math.pi + 0.5), 4)
        assert line.direction(0.5) == pytest.approx(0.5)
        assert line.turn(0, 1) == 0
        assert line.point(1) == pytest.approx([4 * math.cos(0.5), 4 * math.sin(0.5)])

    def test_vectorized_points(self):
        line = curves.Straight((0, 0, math.pi / 2), 4)
        points = line.point(numpy.linspace(0, 1, 5))
        assert points.shape == (5, 2)
        assert points[:, 1] == pytest.approx([0, 1, 2, 3, 4])

    def test_between(self):
        line = curves.Straight.between((0, 0), (3, 4))
        assert line.length == pytest.approx(5)
        assert line.start_point.direction == pytest.approx(math.atan2(4, 3))
        assert line.point(1) == pytest.approx([3, 4])

    def test_fraction_at_length(self):
        line = curves.Straight((0, 0, 0), 10)
        assert line.fraction_at_length(2.5) == pytest.approx(0.25)
        assert line.length_fraction(0.25) == pytest.approx(0.25)
        with pytest.raises(ValueError):
            line.fraction_at_length(11)

    @pytest.mark.parametrize('length', [0, -1, math.nan, math.inf])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError):
            curves.Straight((0, 0, 0), length)

    def test_invalid_points(self):
        with pytest.raises(TypeError):
            curves.Straight(None, 1)
        with pytest.raises(ValueError):
            curves.Straight.between((1, 1), (1, 1))

    def test_offset_point_is_left(self):
        line = curves.Straight((0, 0, 0), 10)
        assert line.offset_point(0.5, PiecewiseLinearOffset.constant(2)) == pytest.approx([5, 2])

    def test_offset_direction_follows_slope(self):
        """An offset growing by 10 over a length of 10 turns the offset line by 45 degrees."""
        line = curves.Straight((0, 0, 0), 10)
        offsets = PiecewiseLinearOffset.of(0, 0, 1, 10)
        assert line.offset_direction(0.5, offsets) == pytest.approx(math.pi / 4)

    def test_to_polyline(self):
        line = curves.Straight((0, 0, 0), 10)
        polyline = line.to_polyline(flatten.MaxDeviation(0.1))
        assert polyline == pytest.approx(numpy.array([[0, 0], [10, 0]]))


class TestArc:
    def test_left_quarter_circle(self):
        arc = curves.Arc((0, 0, 0), 10, True, math.pi / 2)
        assert arc.kind == 'Arc'
        assert not arc.is_straight
        assert arc.center == pytest.approx((0, 10))
        assert arc.length == pytest.approx(5 * math.pi)
        assert tuple(arc.end_point) == pytest.approx((10, 10, math.pi / 2))
        assert arc.curvature(0.5) == pytest.approx(0.1)
        assert arc.start_radius == pytest.approx(10)

    def test_right_quarter_circle(self):
        arc = curves.Arc((0, 0, 0), 10, False, math.pi / 2)
        assert arc.center == pytest.approx((0, -10))
        assert tuple(arc.end_point) == pytest.approx((10, -10, -math.pi / 2))
        assert arc.curvature(0.5) == pytest.approx(-0.1)
        assert arc.end_radius == pytest.approx(-10)

    def test_points_on_circle(self):
        arc = curves.Arc((1, 2, 0.3), 5, True, 4)
        points = arc.point(numpy.linspace(0, 1, 20))
        radii = numpy.hypot(*(points - numpy.array(arc.center)).T)
        assert radii == pytest.approx(numpy.full(20, 5))

    def test_multiple_turns(self):
        arc = curves.Arc((0, 0, 0), 10, True, 4 * math.pi + 1)
        assert arc.direction(1) == pytest.approx(1)
        assert arc.turn(0, 1) == pytest.approx(4 * math.pi + 1)
        assert arc.point(1) == pytest.approx([10 * math.sin(1), 10 - 10 * math.cos(1)])
        right = curves.Arc((0, 0, 0), 10, False, 3 * math.pi)
        assert right.turn(0, 0.5) == pytest.approx(-1.5 * math.pi)
        directions = right.direction(numpy.linspace(0, 1, 13))
        assert (directions >= -math.pi).all() and (directions < math.pi).all()
        assert numpy.cos(directions) == pytest.approx(numpy.cos(numpy.linspace(0, 3 * math.pi, 13)))

    def test_degenerate_arcs(self):
        """Zero radius or zero angle give zero-length arcs rather than errors."""
        assert curves.Arc((0, 0, 0), 0, True, 1).length == 0
        assert curves.Arc((0, 0, 0), 5, True, 0).length == 0

    @pytest.mark.parametrize('radius, angle', [(-1, 1), (1, -1), (math.nan, 1), (1, math.inf)])
    def test_invalid_arcs(self, radius, angle):
        with pytest.raises(ValueError):
            curves.Arc((0, 0, 0), radius, True, angle)

    def test_offset_towards_center(self):
        arc = curves.Arc((0, 0, 0), 10, True, math.pi)
        offsets = PiecewiseLinearOffset.constant(2)
        point = arc.offset_point(0.5, offsets)
        assert math.hypot(*(point - numpy.array(arc.center))) == pytest.approx(8)
        assert arc.offset_direction(0.5, offsets) == pytest.approx(arc.direction(0.5))
