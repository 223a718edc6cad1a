import math

import numpy
from scipy import optimize

from .. import point as _point
from .. import util
from . import curves
from . import spiral

class BezierCubic(curves.Curve):
    """Cubic Bezier curve defined by a start point, two control points and an
    end point.

    The fraction t is the Bezier parameter, which is in general not linear in
    arc length; see length_fraction() and fraction_at_length().

    The heading at the start is towards the first control point that differs
    from the start point (and likewise backwards from the end). A curve whose
    control points all coincide has heading 0.
    """

    kind = 'BezierCubic'

    def __init__(self, start, control1, control2, end):
        points = [util.check_point(p, name) for p, name in
            zip((start, control1, control2, end), ('start', 'control1', 'control2', 'end'))]
        self._points = numpy.array(points, dtype=float)
        self._points.flags.writeable = False
        start_heading = _first_heading(self._points)
        if start_heading is None:
            self._start_heading = self._end_heading = 0.0
        else:
            self._start_heading = start_heading
            self._end_heading = _first_heading(self._points[::-1]) + math.pi
        self._length = float(self._arc_length(1.0))

    @classmethod
    def from_directed_points(cls, start, end, shape=1.0, weighted=False):
        """Bezier curve from start to end, leaving and arriving along their
        headings.

        Parameters:
            start, end: DirectedPoint2d (or (x, y, direction) triples).
            shape: scale of the control point distances; larger values give a
                more pointy curve.
            weighted: if False, each control point lies shape * d / 2 from its
                end point, with d the distance between start and end. If True,
                the total shape * d is divided between the control points in
                proportion to the distance of each end point from the heading
                line through the other.
        """
        start = _point.as_directed(start, 'start')
        end = _point.as_directed(end, 'end')
        distance = _point.distance(start, end)
        if distance == 0:
            raise ValueError('Cannot place control points: start and end points coincide.')
        shape = util.check_finite(shape, 'shape')
        if shape <= 0:
            raise ValueError('Shape must be above 0 (got {}).'.format(shape))
        start_vector = numpy.array([math.cos(start.direction), math.sin(start.direction)])
        end_vector = numpy.array([math.cos(end.direction), math.sin(end.direction)])
        p0 = numpy.array(start[:2])
        p3 = numpy.array(end[:2])
        if weighted:
            distance *= shape
            d_start = abs(_cross(end_vector, p0 - p3))
            d_end = abs(_cross(start_vector, p3 - p0))
            if d_start + d_end == 0:
                w_start = w_end = 0.5
            else:
                w_start = d_start / (d_start + d_end)
                w_end = d_end / (d_start + d_end)
            control1 = p0 + distance * w_start * start_vector
            control2 = p3 - distance * w_end * end_vector
        else:
            distance *= shape / 2
            control1 = p0 + distance * start_vector
            control2 = p3 - distance * end_vector
        return cls(p0, control1, control2, p3)

    @property
    def control_points(self):
        """Read-only array of shape (4, 2): start, control1, control2, end."""
        return self._points

    def point(self, t):
        return _bernstein(t) @ self._points

    def derivative_points(self, t):
        """First derivative of position with respect to t; shape (2) or (n, 2)."""
        t = numpy.asarray(t, dtype=float)[..., numpy.newaxis]
        p = self._points
        m = 1 - t
        return 3 * (m**2 * (p[1] - p[0]) + 2 * t * m * (p[2] - p[1]) + t**2 * (p[3] - p[2]))

    def _second_derivative_points(self, t):
        t = numpy.asarray(t, dtype=float)[..., numpy.newaxis]
        p = self._points
        return 6 * ((1 - t) * (p[2] - 2 * p[1] + p[0]) + t * (p[3] - 2 * p[2] + p[1]))

    def direction(self, t):
        t = numpy.asarray(t, dtype=float)
        d = self.derivative_points(t)
        fallback = numpy.where(t < 0.5, self._start_heading, self._end_heading)
        stationary = (d == 0).all(axis=-1)
        return _point.normalize_angle(numpy.where(stationary, fallback, numpy.arctan2(d[..., 1], d[..., 0]))) * 1.0

    def curvature(self, t):
        d = self.derivative_points(t)
        dd = self._second_derivative_points(t)
        speed = numpy.hypot(d[..., 0], d[..., 1])
        with numpy.errstate(divide='ignore', invalid='ignore'):
            curvature = _cross(d, dd) / speed**3
        return numpy.where(speed == 0, math.inf, curvature) * 1.0

    def _speed(self, t):
        d = self.derivative_points(t)
        return numpy.hypot(d[..., 0], d[..., 1])

    def _arc_length(self, t):
        if numpy.ndim(t) == 0:
            return spiral.gauss_legendre(self._speed, 0.0, float(t))
        return numpy.array([spiral.gauss_legendre(self._speed, 0.0, ti) for ti in numpy.ravel(t)]).reshape(
            numpy.shape(t))

    def length_fraction(self, t):
        if self._length == 0:
            return numpy.asarray(t, dtype=float) * 1.0
        return self._arc_length(t) / self._length

    def fraction_at_length(self, s):
        s = util.check_finite(s, 'length along the curve')
        if s < 0 or s > self._length:
            raise ValueError('Length {} along the curve is outside the range [0, {}].'.format(s, self._length))
        if s == 0:
            return 0.0
        if s == self._length:
            return 1.0
        return optimize.brentq(lambda t: self._arc_length(t) - s, 0.0, 1.0, xtol=1e-12)

    def split(self, t):
        """Split the curve at fraction t with de Casteljau's algorithm; return
        the two BezierCubic pieces before and after t."""
        t = util.check_fraction(t)
        p0, p1, p2, p3 = self._points
        p01 = p0 + t * (p1 - p0)
        p12 = p1 + t * (p2 - p1)
        p23 = p2 + t * (p3 - p2)
        p012 = p01 + t * (p12 - p01)
        p123 = p12 + t * (p23 - p12)
        p0123 = p012 + t * (p123 - p012)
        return BezierCubic(p0, p01, p012, p0123), BezierCubic(p0123, p123, p23, p3)

    def __repr__(self):
        return 'BezierCubic({})'.format(', '.join(str(tuple(p)) for p in self._points.tolist()))

def _bernstein(t):
    t = numpy.asarray(t, dtype=float)
    m = 1 - t
    return numpy.stack([m**3, 3 * t * m**2, 3 * t**2 * m, t**3], axis=-1)

def _cross(a, b):
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]

def _first_heading(points):
    for p in points[1:]:
        d = p - points[0]
        if d.any():
            return math.atan2(d[1], d[0])
    return None
