"""Parametric plane curves.

Every curve is parameterized by a fraction t in [0, 1] from its start to its
end. The evaluation methods accept a scalar t, or an array of n values in which
case they return arrays with a leading axis of length n: point(t) returns a
position of shape (2) or (n, 2); direction(t) and curvature(t) return a scalar
or an array of shape (n).

Headings from direction(t) are normalized to [-pi, pi). The total signed
change of heading between two fractions, which may exceed a full turn, is
given by turn(t0, t1).

Curvature is signed: positive for curves turning left (counterclockwise).
Offsets, given as a PiecewiseLinearOffset of the fraction of length along the
curve, displace the curve perpendicular to its heading, positive to the left.
"""

import math

import numpy

from .. import point as _point
from .. import util
from . import geometry

class Curve:
    """Base class for plane curves; subclasses implement point(), direction(),
    curvature() and the length property."""

    kind = None

    @property
    def is_straight(self):
        return False

    @property
    def length(self):
        return self._length

    def point(self, t):
        raise NotImplementedError()

    def direction(self, t):
        raise NotImplementedError()

    def curvature(self, t):
        raise NotImplementedError()

    def turn(self, t0, t1):
        """Signed change of heading from fraction t0 to fraction t1, not
        wrapped to a single turn.

        This base version adds up the wrapped heading changes between five
        evenly spaced fractions, which is exact while the heading turns less
        than pi between neighbouring samples."""
        directions = self.direction(numpy.linspace(t0, t1, 5))
        return float(_point.normalize_angle(numpy.diff(directions)).sum())

    @property
    def start_point(self):
        x, y = self.point(0.0)
        return _point.DirectedPoint2d(float(x), float(y), float(self.direction(0.0)))

    @property
    def end_point(self):
        x, y = self.point(1.0)
        return _point.DirectedPoint2d(float(x), float(y), float(self.direction(1.0)))

    @property
    def start_curvature(self):
        return float(self.curvature(0.0))

    @property
    def end_curvature(self):
        return float(self.curvature(1.0))

    @property
    def start_radius(self):
        return _radius(self.start_curvature)

    @property
    def end_radius(self):
        return _radius(self.end_curvature)

    def length_fraction(self, t):
        """Fraction of the total length covered at curve fraction t."""
        return numpy.asarray(t, dtype=float) * 1.0

    def fraction_at_length(self, s):
        """Curve fraction at arc length s from the start, 0 <= s <= length."""
        s = util.check_finite(s, 'length along the curve')
        if s < 0 or s > self.length:
            raise ValueError('Length {} along the curve is outside the range [0, {}].'.format(s, self.length))
        if self.length == 0:
            return 0.0
        return s / self.length

    def offset_point(self, t, offsets):
        """Position at fraction t displaced to the left by the offset at the
        corresponding fraction of length."""
        offset = offsets.get(self.length_fraction(t))
        perp = geometry.find_perp(self.direction(t))
        return self.point(t) + numpy.asarray(offset)[..., numpy.newaxis] * perp

    def offset_direction(self, t, offsets, slope=None):
        """Heading of the offset curve at scalar fraction t.

        The slope of the offsets (per unit fraction of length) defaults to the
        one at the length fraction of t; at knots the caller may pass the slope
        of the segment on either side."""
        direction = float(self.direction(t))
        if self.length == 0:
            return direction
        fraction = float(self.length_fraction(t))
        if slope is None:
            slope = offsets.get_derivative(fraction)
        curvature = float(self.curvature(t))
        if not math.isfinite(curvature):
            return direction
        return direction + math.atan2(slope / self.length, 1 - offsets.get(fraction) * curvature)

    def to_polyline(self, flattener, offsets=None):
        """Return a polyline of shape (n, 2) approximating this curve (displaced
        by the given offsets, if any) as controlled by the flattener."""
        return flattener.flatten(self, offsets)

    def __repr__(self):
        return '{}(start={}, end={}, length={!r})'.format(type(self).__name__, tuple(self.start_point),
            tuple(self.end_point), self.length)

def _radius(curvature):
    if curvature == 0:
        return math.inf
    return 1 / curvature

class Straight(Curve):
    """Straight segment of a given length along the heading of its start point."""

    kind = 'Straight'

    def __init__(self, start, length):
        self._start = _point.as_directed(start, 'start')
        length = util.check_finite(length, 'length')
        if length <= 0:
            raise ValueError('Length must be above 0 (got {}).'.format(length))
        self._length = length
        self._cos = math.cos(self._start.direction)
        self._sin = math.sin(self._start.direction)

    @classmethod
    def between(cls, start, end):
        """Straight segment from point start to point end (only the x, y
        coordinates of each are used)."""
        start = _point.directed_toward(start, end)
        return cls(start, _point.distance(start, end))

    @property
    def is_straight(self):
        return True

    def point(self, t):
        s = numpy.asarray(t, dtype=float) * self._length
        return numpy.stack([self._start.x + s * self._cos, self._start.y + s * self._sin], axis=-1)

    def direction(self, t):
        return numpy.asarray(t, dtype=float) * 0 + _point.normalize_angle(self._start.direction)

    def curvature(self, t):
        return numpy.asarray(t, dtype=float) * 0

    def turn(self, t0, t1):
        return 0.0

    @property
    def start_point(self):
        return self._start

    @property
    def end_point(self):
        x, y = _point.location(self._start, self._length)
        return _point.DirectedPoint2d(x, y, self._start.direction)

class Arc(Curve):
    """Circular arc from a start point, turning left or right with a given
    radius through a given angle (in radians, not negative)."""

    kind = 'Arc'

    def __init__(self, start, radius, left, angle):
        self._start = _point.as_directed(start, 'start')
        radius = util.check_finite(radius, 'radius')
        angle = util.check_finite(angle, 'angle')
        if radius < 0:
            raise ValueError('Radius may not be negative (got {}).'.format(radius))
        if angle < 0:
            raise ValueError('Angle may not be negative (got {}).'.format(angle))
        util.check_not_none(left, 'left')
        self._radius = radius
        self._angle = angle
        self._left = bool(left)
        self._sign = 1 if self._left else -1
        self._length = radius * angle
        perp = geometry.find_perp(self._start.direction)
        self._center = numpy.array(self._start[:2]) + self._sign * radius * perp

    @property
    def radius(self):
        return self._radius

    @property
    def angle(self):
        return self._angle

    @property
    def left(self):
        return self._left

    @property
    def center(self):
        return _point.Point2d(*self._center)

    def _heading(self, t):
        return self._start.direction + self._sign * self._angle * numpy.asarray(t, dtype=float)

    def point(self, t):
        return self._center - self._sign * self._radius * geometry.find_perp(self._heading(t))

    def direction(self, t):
        return _point.normalize_angle(self._heading(t)) * 1.0

    def turn(self, t0, t1):
        return self._sign * self._angle * (t1 - t0)

    def curvature(self, t):
        curvature = self._sign / self._radius if self._radius > 0 else self._sign * math.inf
        return numpy.asarray(t, dtype=float) * 0 + curvature

    @property
    def start_point(self):
        return self._start
