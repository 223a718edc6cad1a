"""Clothoids: plane curves whose curvature varies linearly with arc length.

A clothoid of length L from a start point (x0, y0, theta0), with curvature k0
at the start and k1 at the end, has sharpness c = (k1 - k0) / L and heading
    theta(s) = theta0 + k0*s + c*s**2/2.
Its clothoid parameter A = 1/sqrt(|c|) is infinite when the curvature is
constant (arcs and straight lines).

Clothoids can be constructed between two directed points with
Clothoid.between(), which fits the curvatures and length with
cornu.curve.fit.fit_clothoid(), or from a start point with
Clothoid.with_length() or Clothoid.with_a().

Example:
    from cornu.curve import clothoid, flatten
    c = clothoid.Clothoid.between((0, 0, 0), (20, 10, 0))
    polyline = c.to_polyline(flatten.MaxDeviation(0.01))
"""

import math

import numpy

from .. import point as _point
from .. import util
from . import curves
from . import fit
from . import spiral

class Clothoid(curves.Curve):
    """Clothoid from a start point with given start and end curvatures and
    length. Usually constructed with one of the classmethods.

    Parameters:
        start: DirectedPoint2d (or (x, y, direction) triple).
        start_curvature, end_curvature: signed curvatures (positive turns left).
        length: arc length, not negative.
        end: if given, the DirectedPoint2d the curve was fitted to reach; the
            small residual between it and the computed end position is spread
            linearly over the curve, so that point(1) equals the end point.
        applied_shape: 'Straight', 'Arc' or 'Clothoid'; by default derived from
            the curvatures.
        converged: whether the fit that produced the parameters met its
            tolerances.
    """

    kind = 'Clothoid'

    def __init__(self, start, start_curvature, end_curvature, length, end=None, applied_shape=None,
            converged=True):
        self._start = _point.as_directed(start, 'start')
        self._start_curvature = util.check_finite(start_curvature, 'start_curvature')
        self._end_curvature = util.check_finite(end_curvature, 'end_curvature')
        length = util.check_finite(length, 'length')
        if length < 0:
            raise ValueError('Length may not be negative (got {}).'.format(length))
        if applied_shape is None:
            applied_shape = _shape_of(self._start_curvature, self._end_curvature)
        if applied_shape not in (fit.STRAIGHT, fit.ARC, fit.CLOTHOID):
            raise ValueError('Unknown shape {!r}.'.format(applied_shape))
        self._length = length
        self._applied_shape = applied_shape
        self._converged = bool(converged)
        if length > 0:
            self._sharpness = (self._end_curvature - self._start_curvature) / length
        else:
            self._sharpness = 0.0
        self._drift = numpy.zeros(2)
        if end is not None:
            end = _point.as_directed(end, 'end')
            self._drift = numpy.array(end[:2]) - self._spiral_points(length)

    @classmethod
    def between(cls, start, end, angle_tolerance=fit.ANGLE_TOLERANCE, position_tolerance=fit.POSITION_TOLERANCE,
            max_iterations=fit.MAX_ITERATIONS):
        """Fit a clothoid (or, where it suffices, a straight line or circular
        arc) from start to end, both DirectedPoint2d.

        See cornu.curve.fit.fit_clothoid() for the parameters. If the fit does
        not converge, a NonconvergenceWarning is issued and the best estimate
        is used, with converged set to False.
        """
        start = _point.as_directed(start, 'start')
        end = _point.as_directed(end, 'end')
        result = fit.fit_clothoid(start, end, angle_tolerance, position_tolerance, max_iterations)
        return cls(start, result.start_curvature, result.end_curvature, result.length, end=end,
            applied_shape=result.shape, converged=result.converged)

    @classmethod
    def with_length(cls, start, length, start_curvature, end_curvature):
        """Clothoid from start with the given length and curvatures."""
        length = util.check_finite(length, 'length')
        if length <= 0:
            raise ValueError('Length must be above 0 (got {}).'.format(length))
        return cls(start, start_curvature, end_curvature, length)

    @classmethod
    def with_a(cls, start, a, start_curvature, end_curvature):
        """Clothoid from start with clothoid parameter A and the given
        curvatures; its length is A**2 * |end_curvature - start_curvature|."""
        a = util.check_finite(a, 'A')
        if a <= 0:
            raise ValueError('A must be above 0 (got {}).'.format(a))
        start_curvature = util.check_finite(start_curvature, 'start_curvature')
        end_curvature = util.check_finite(end_curvature, 'end_curvature')
        if start_curvature == end_curvature:
            raise ValueError('Start and end curvature are equal: the clothoid would have zero length.')
        return cls(start, start_curvature, end_curvature, a**2 * abs(end_curvature - start_curvature))

    @property
    def a(self):
        if self._sharpness == 0:
            return math.inf
        return 1 / math.sqrt(abs(self._sharpness))

    @property
    def sharpness(self):
        return self._sharpness

    @property
    def applied_shape(self):
        return self._applied_shape

    @property
    def converged(self):
        return self._converged

    @property
    def is_straight(self):
        return self._applied_shape == fit.STRAIGHT

    def _spiral_points(self, s):
        x0, y0, theta0 = self._start
        return spiral.spiral_points(x0, y0, theta0, self._start_curvature, self._sharpness, s)

    def point(self, t):
        t = numpy.asarray(t, dtype=float)
        return self._spiral_points(t * self._length) + t[..., numpy.newaxis] * self._drift

    def _heading(self, t):
        return spiral.spiral_headings(self._start.direction, self._start_curvature, self._sharpness,
            numpy.asarray(t, dtype=float) * self._length)

    def direction(self, t):
        return _point.normalize_angle(self._heading(t)) * 1.0

    def turn(self, t0, t1):
        return float(self._heading(t1) - self._heading(t0))

    def curvature(self, t):
        return self._start_curvature + self._sharpness * self._length * numpy.asarray(t, dtype=float)

    @property
    def start_point(self):
        return self._start

    @property
    def start_curvature(self):
        return self._start_curvature

    @property
    def end_curvature(self):
        return self._end_curvature

    def __repr__(self):
        return ('Clothoid(start={}, start_curvature={!r}, end_curvature={!r}, length={!r}, a={!r}, '
            'applied_shape={!r})').format(tuple(self._start), self._start_curvature, self._end_curvature,
            self._length, self.a, self._applied_shape)

def _shape_of(start_curvature, end_curvature):
    if start_curvature != end_curvature:
        return fit.CLOTHOID
    if start_curvature == 0:
        return fit.STRAIGHT
    return fit.ARC
