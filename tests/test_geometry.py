"""Tests for polyline helpers."""

import math

import numpy
import pytest

from cornu.curve import geometry


class TestPolyline:
    def test_make_polyline_is_read_only(self):
        polyline = geometry.make_polyline([(0, 0), (1, 0), (1, 1)])
        assert polyline.shape == (3, 2)
        with pytest.raises(ValueError):
            polyline[0, 0] = 5

    def test_make_polyline_needs_two_points(self):
        with pytest.raises(ValueError):
            geometry.make_polyline([(0, 0)])

    def test_bounds(self):
        assert geometry.bounds([(1, -2), (-3, 4), (0, 0)]) == pytest.approx((-3, -2, 1, 4))


class TestSegments:
    def test_closest_point_clamped_to_segment(self):
        closest, fractions = geometry.closest_point_to_line_segments(numpy.array([3.0, 1.0]),
            [(0, 0), (0, 0)], [(2, 0), (0, 2)])
        assert closest == pytest.approx(numpy.array([[2, 0], [0, 1]]))
        assert fractions == pytest.approx([1, 0.5])

    def test_zero_length_segment(self):
        closest, fractions = geometry.closest_point_to_line_segments(numpy.array([3.0, 4.0]), (0, 0), (0, 0))
        assert closest == pytest.approx(numpy.array([[0, 0]]))
        assert geometry.distance_to_segment(numpy.array([3.0, 4.0]), (0, 0), (0, 0)) == pytest.approx(5)

    def test_side_of_line(self):
        assert geometry.side_of_line((1, 1), (0, 0), (2, 0)) == 1
        assert geometry.side_of_line((1, -1), (0, 0), (2, 0)) == -1
        assert geometry.side_of_line((1, 0), (0, 0), (2, 0)) == 0

    def test_find_perp_points_left(self):
        assert geometry.find_perp(0) == pytest.approx([0, 1])
        assert geometry.find_perp([0, math.pi / 2]) == pytest.approx(numpy.array([[0, 1], [-1, 0]]))
