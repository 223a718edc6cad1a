import collections
import math

from . import util

Point2d = collections.namedtuple('Point2d', ('x', 'y'))
DirectedPoint2d = collections.namedtuple('DirectedPoint2d', ('x', 'y', 'direction'))

def normalize_angle(angle):
    """Return the equivalent angle in the range [-pi, pi)."""
    return (angle + math.pi) % (2 * math.pi) - math.pi

def distance(p0, p1):
    """Euclidean distance between the positions of two points."""
    return math.hypot(p1[0] - p0[0], p1[1] - p0[1])

def interpolate(p0, p1, fraction):
    """Return the Point2d a given fraction of the way from p0 to p1."""
    return Point2d((1 - fraction) * p0[0] + fraction * p1[0], (1 - fraction) * p0[1] + fraction * p1[1])

def directed_toward(point, through_point):
    """Return a DirectedPoint2d at 'point' heading towards 'through_point'.

    Raises ValueError if the two points coincide, as no direction can be
    determined in that case."""
    point = util.check_point(point, 'point')
    through_point = util.check_point(through_point, 'through_point')
    dx = through_point[0] - point[0]
    dy = through_point[1] - point[1]
    if dx == 0 and dy == 0:
        raise ValueError('Through-point coincides with point: direction is undetermined.')
    return DirectedPoint2d(point[0], point[1], math.atan2(dy, dx))

def location(directed_point, length):
    """Return the Point2d at a given distance along the heading of directed_point."""
    x, y, direction = directed_point
    return Point2d(x + length * math.cos(direction), y + length * math.sin(direction))

def as_directed(point, name='point'):
    """Validate a (x, y, direction) triple and return it as a DirectedPoint2d."""
    point = util.check_point(point, name, size=3)
    return DirectedPoint2d(*point)
