import numpy

def make_polyline(points):
    """Return a new read-only float array of shape (n, 2) holding the given points.

    Raises ValueError if fewer than two points are given."""
    polyline = numpy.array(points, dtype=float).reshape(-1, 2)
    if len(polyline) < 2:
        raise ValueError('A polyline requires at least 2 points.')
    polyline.flags.writeable = False
    return polyline

def bounds(points):
    """Return the bounding box (xmin, ymin, xmax, ymax) of an array of points."""
    points = numpy.asarray(points).reshape(-1, 2)
    xmin, ymin = points.min(axis=0)
    xmax, ymax = points.max(axis=0)
    return xmin, ymin, xmax, ymax

def closest_point_to_line_segments(point, lines_start, lines_end):
    """Project a point onto each of a set of line segments.

    Parameters:
    point: position of shape (2)
    lines_start, lines_end: segment end points, of shape (2) or (n,2)
    Returns the closest point on each segment, shape (n,2), and its fractional
    position from start to end, clamped to [0, 1]. Zero-length segments have
    their start point as the closest point."""
    starts = numpy.atleast_2d(numpy.asarray(lines_start, dtype=float))
    segments = numpy.atleast_2d(numpy.asarray(lines_end, dtype=float)) - starts
    squared_lengths = (segments**2).sum(axis=1)
    projections = ((numpy.asarray(point, dtype=float) - starts) * segments).sum(axis=1)
    fractions = numpy.divide(projections, squared_lengths, out=numpy.zeros_like(projections),
        where=squared_lengths > 0).clip(0, 1)
    return starts + fractions[:,numpy.newaxis] * segments, fractions

def distance_to_segment(point, p0, p1):
    """Distance from a point to the line segment p0-p1."""
    closest_points, fractions = closest_point_to_line_segments(point, p0, p1)
    return numpy.sqrt(((point - closest_points[0])**2).sum())

def side_of_line(point, p0, p1):
    """Return +1 if point lies left of the directed line p0->p1, -1 if right,
    and 0 if on the line."""
    cross = (p1[0] - p0[0]) * (point[1] - p0[1]) - (p1[1] - p0[1]) * (point[0] - p0[0])
    return numpy.sign(cross)

def find_perp(directions):
    """Return the left-hand perpendiculars of the headings in 'directions'.

    Parameters:
    directions: scalar heading in radians, or array of n headings.
    Returns an array of shape (2) or (n,2) containing the perpendicular vectors
    (-sin, cos) of each heading."""
    directions = numpy.asarray(directions, dtype=float)
    return numpy.stack([-numpy.sin(directions), numpy.cos(directions)], axis=-1)
