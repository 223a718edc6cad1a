"""Convert curves into polylines.

Each flattener has a flatten(curve, offsets=None) method returning a read-only
array of shape (n, 2), n >= 2; curve.to_polyline(flattener, offsets) is
equivalent. NumSegments samples the curve at fixed fractions. The adaptive
flatteners (MaxDeviation, MaxAngle, MaxDeviationAndAngle) start from the curve
end points and repeatedly bisect any interval whose chord does not meet their
error bounds.

If offsets (a PiecewiseLinearOffset) are given, the displaced curve is
flattened instead, and its error bounds are checked against the displaced
curve. Every interior knot of the offsets becomes a vertex of the polyline, and
the heading of the displaced curve on either side of each knot is considered
separately.

Adaptive refinement is bounded: an interval is not bisected more than
max_depth times, and the polyline does not grow beyond max_points points. If
a bound stops refinement, the polyline is returned as it stands and a
NonconvergenceWarning is issued.

Example:
    from cornu.curve import clothoid, flatten
    curve = clothoid.Clothoid.with_length((0, 0, 0), 50, 0, 0.1)
    polyline = flatten.MaxDeviationAndAngle(0.01, 0.02).flatten(curve)
"""

import collections
import logging
import math

import numpy

from .. import point as _point
from .. import util
from . import geometry

_logger = logging.getLogger(__name__)

MAX_DEPTH = 30
MAX_POINTS = 100000

_Interval = collections.namedtuple('_Interval', ('t0', 'p0', 'd0', 't1', 'p1', 'd1', 'depth'))

class _Trace:
    """Positions and headings along a curve, or along the curve displaced by
    offsets if these are given."""

    def __init__(self, curve, offsets):
        self.curve = curve
        self.offsets = offsets
        self.knots = {}
        if offsets is not None and curve.length > 0:
            for knot in offsets.interior_knots():
                self.knots[curve.fraction_at_length(knot * curve.length)] = knot

    def fractions(self):
        """Curve fractions that must appear as vertices: both ends and the
        fraction of each interior offset knot."""
        return sorted({0.0, 1.0}.union(self.knots))

    def points(self, t):
        if self.offsets is None:
            return self.curve.point(t)
        return self.curve.offset_point(t, self.offsets)

    def direction(self, t, slope=None):
        if self.offsets is None:
            return float(self.curve.direction(t))
        return self.curve.offset_direction(t, self.offsets, slope)

    def knot_directions(self, t):
        """Headings (arriving, leaving) at a vertex fraction t. These differ at
        knots of the offsets, where the slope of the offsets changes."""
        if self.offsets is None:
            direction = self.direction(t)
            return direction, direction
        knot = self.knots.get(t, float(self.curve.length_fraction(t)))
        arriving = self.direction(t, self.offsets.get_derivative(knot))
        leaving = self.direction(t, self.offsets.get_derivative(numpy.nextafter(knot, 2)))
        return arriving, leaving

class Flattener:
    """Base class for flatteners; subclasses implement _needs_split().

    Parameters:
        max_depth: maximum number of times an interval between two initial
            vertices may be bisected.
        max_points: maximum number of points in the polyline.
    """

    def __init__(self, max_depth=MAX_DEPTH, max_points=MAX_POINTS):
        if int(max_depth) < 1:
            raise ValueError('max_depth must be at least 1 (got {}).'.format(max_depth))
        if int(max_points) < 2:
            raise ValueError('max_points must be at least 2 (got {}).'.format(max_points))
        self.max_depth = int(max_depth)
        self.max_points = int(max_points)

    def flatten(self, curve, offsets=None):
        """Return a polyline of shape (n, 2) approximating the curve, displaced
        by the offsets if given."""
        util.check_not_none(curve, 'curve')
        trace = _Trace(curve, offsets)
        fractions = trace.fractions()
        if curve.length == 0 or curve.is_straight:
            return geometry.make_polyline(trace.points(numpy.array(fractions)))
        return geometry.make_polyline(self._refine(trace, fractions))

    def _refine(self, trace, fractions):
        points = trace.points(numpy.array(fractions))
        directions = [trace.knot_directions(t) for t in fractions]
        stack = []
        for i in reversed(range(len(fractions) - 1)):
            stack.append(_Interval(fractions[i], points[i], directions[i][1],
                fractions[i+1], points[i+1], directions[i+1][0], 0))
        polyline = [points[0]]
        capped = False
        while stack:
            interval = stack.pop()
            if len(polyline) + len(stack) + 1 >= self.max_points or interval.depth >= self.max_depth:
                if self._needs_split(trace, interval, *self._midpoint(trace, interval)):
                    capped = True
                polyline.append(interval.p1)
                continue
            t, p, d = self._midpoint(trace, interval)
            if self._needs_split(trace, interval, t, p, d):
                depth = interval.depth + 1
                stack.append(_Interval(t, p, d, interval.t1, interval.p1, interval.d1, depth))
                stack.append(_Interval(interval.t0, interval.p0, interval.d0, t, p, d, depth))
            else:
                polyline.append(interval.p1)
        if capped:
            util.warn_nonconvergence(_logger, '%s stopped refining %s at %d points (max_depth=%d, max_points=%d).',
                self, trace.curve, len(polyline), self.max_depth, self.max_points)
        _logger.debug('%s flattened %s into %d points', self, trace.curve, len(polyline))
        return polyline

    def _midpoint(self, trace, interval):
        t = (interval.t0 + interval.t1) / 2
        return t, trace.points(t), trace.direction(t)

    def _needs_split(self, trace, interval, t, p, d):
        raise NotImplementedError()

    def __repr__(self):
        return '{}()'.format(type(self).__name__)

def _check_positive(value, name):
    value = util.check_finite(value, name)
    if value <= 0:
        raise ValueError('{} must be above 0 (got {}).'.format(name, value))
    return value

def position_error(point, p0, p1, max_deviation):
    """True if point lies farther than max_deviation from the segment p0-p1."""
    return geometry.distance_to_segment(point, p0, p1) > max_deviation

def inflection(trace, interval, t):
    """True if the curve points a quarter and three quarters along the
    interval lie on opposite sides of its chord."""
    q1 = trace.points((interval.t0 + t) / 2)
    q3 = trace.points((t + interval.t1) / 2)
    return geometry.side_of_line(q1, interval.p0, interval.p1) != geometry.side_of_line(q3, interval.p0, interval.p1)

def loop_back(trace, interval):
    """True if the curve heading turns by more than a right angle across the
    interval, counting every full turn."""
    return abs(trace.curve.turn(interval.t0, interval.t1)) > math.pi / 2

def direction_error(chord_direction, direction0, direction1, max_angle):
    """True if the chord heading differs too much from the heading of the
    curve at either end of the chord."""
    return (abs(_point.normalize_angle(chord_direction - direction0)) > max_angle or
        abs(_point.normalize_angle(chord_direction - direction1)) >= max_angle)

def _chord(interval):
    d = interval.p1 - interval.p0
    return math.hypot(d[0], d[1]), math.atan2(d[1], d[0])

class NumSegments(Flattener):
    """Flatten into a fixed number of segments of equal curve fraction.

    With offsets, the fractions of the interior knots are added as vertices.
    """

    def __init__(self, num_segments):
        super().__init__()
        util.check_not_none(num_segments, 'num_segments')
        if int(num_segments) < 1:
            raise ValueError('Number of segments must be at least 1 (got {}).'.format(num_segments))
        self.num_segments = int(num_segments)

    def flatten(self, curve, offsets=None):
        util.check_not_none(curve, 'curve')
        trace = _Trace(curve, offsets)
        fractions = numpy.linspace(0, 1, self.num_segments + 1)
        if trace.knots:
            fractions = numpy.union1d(fractions, list(trace.knots))
        return geometry.make_polyline(trace.points(fractions))

    def __repr__(self):
        return 'NumSegments({})'.format(self.num_segments)

class MaxDeviation(Flattener):
    """Flatten so that no chord deviates more than max_deviation from the
    curve.

    Besides the deviation at the middle of each chord, intervals are bisected
    if the curve crosses the chord (an inflection) while the chord is longer
    than max_deviation. Intervals over which the curve heading turns by more
    than a right angle, counting full turns, are also bisected so that loops
    are not missed.
    """

    def __init__(self, max_deviation, max_depth=MAX_DEPTH, max_points=MAX_POINTS):
        super().__init__(max_depth, max_points)
        self.max_deviation = _check_positive(max_deviation, 'max_deviation')

    def _needs_split(self, trace, interval, t, p, d):
        if position_error(p, interval.p0, interval.p1, self.max_deviation):
            return True
        length, chord_direction = _chord(interval)
        if length > self.max_deviation and inflection(trace, interval, t):
            return True
        return loop_back(trace, interval)

    def __repr__(self):
        return 'MaxDeviation({!r})'.format(self.max_deviation)

class MaxAngle(Flattener):
    """Flatten so that no chord heading differs more than max_angle (in
    radians) from the curve heading.

    The heading is checked at both ends and at the middle of each interval,
    and intervals over which the curve turns by more than a right angle are
    always bisected.
    """

    def __init__(self, max_angle, max_depth=MAX_DEPTH, max_points=MAX_POINTS):
        super().__init__(max_depth, max_points)
        self.max_angle = _check_positive(max_angle, 'max_angle')

    def _needs_split(self, trace, interval, t, p, d):
        length, chord_direction = _chord(interval)
        if direction_error(chord_direction, interval.d0, interval.d1, self.max_angle):
            return True
        if abs(_point.normalize_angle(chord_direction - d)) > self.max_angle:
            return True
        return loop_back(trace, interval)

    def __repr__(self):
        return 'MaxAngle({!r})'.format(self.max_angle)

class MaxDeviationAndAngle(Flattener):
    """Flatten so that chords meet both the max_deviation and the max_angle
    bounds."""

    def __init__(self, max_deviation, max_angle, max_depth=MAX_DEPTH, max_points=MAX_POINTS):
        super().__init__(max_depth, max_points)
        self.max_deviation = _check_positive(max_deviation, 'max_deviation')
        self.max_angle = _check_positive(max_angle, 'max_angle')

    def _needs_split(self, trace, interval, t, p, d):
        if position_error(p, interval.p0, interval.p1, self.max_deviation):
            return True
        length, chord_direction = _chord(interval)
        if direction_error(chord_direction, interval.d0, interval.d1, self.max_angle):
            return True
        if length > self.max_deviation and inflection(trace, interval, t):
            return True
        return loop_back(trace, interval)

    def __repr__(self):
        return 'MaxDeviationAndAngle({!r}, {!r})'.format(self.max_deviation, self.max_angle)
