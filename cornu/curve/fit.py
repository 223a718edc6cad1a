"""Fit a clothoid (Euler spiral) between two directed points.

The general case follows the G1 Hermite interpolation scheme of:
    Bertolazzi E. & Frego M. (2015) "G1 fitting with clothoids",
    Mathematical Methods in the Applied Sciences 38(5), pp. 881-897.

With the headings phi0 and phi1 of both end points measured relative to the
chord between them, a clothoid of length L starting with curvature k0 and
sharpness c has a relative heading of
    phi0 + (delta - A)*tau + A*tau**2,  tau = s / L,  delta = phi1 - phi0
where A = c*L**2/2. The end point lies on the chord exactly when
    Y(A) = integral from 0 to 1 of sin(phi0 + (delta - A)*tau + A*tau**2) dtau
vanishes, which is solved for A with Newton's method; the length then follows
from the chord length r as L = r / X(A), with X the matching cosine integral.

Simpler shapes are recognized first by classify_shape(); see that function for
the decision table.
"""

import collections
import logging
import math

import numpy
from scipy import optimize

from .. import point as _point
from .. import util
from . import spiral

_logger = logging.getLogger(__name__)

# 1/10th of a degree
ANGLE_TOLERANCE = 2 * math.pi / 3600
POSITION_TOLERANCE = 1e-6
ROOT_TOLERANCE = 1e-12
MAX_ITERATIONS = 50

STRAIGHT = 'Straight'
ARC = 'Arc'
CLOTHOID = 'Clothoid'

ClothoidFit = collections.namedtuple('ClothoidFit',
    ('shape', 'start_curvature', 'end_curvature', 'length', 'converged', 'iterations'))

# coefficients of the initial guess for A, from Bertolazzi & Frego (2015)
_GUESS_COEFFICIENTS = (2.989696028701907, 0.716228953608281, -0.458969738821509,
    -0.502821153340377, 0.261062141752652, -0.045854475238709)

def relative_headings(start, end):
    """Return (chord_length, phi0, phi1): the distance between two directed
    points and the headings of each relative to the chord from start to end,
    normalized to [-pi, pi)."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    chord_direction = math.atan2(dy, dx)
    phi0 = _point.normalize_angle(start[2] - chord_direction)
    phi1 = _point.normalize_angle(end[2] - chord_direction)
    return math.hypot(dx, dy), phi0, phi1

def classify_shape(start, end, angle_tolerance=ANGLE_TOLERANCE, position_tolerance=POSITION_TOLERANCE):
    """Decide which shape connects two directed points.

    Decision table, first match wins:
        1. positions coincide (within position_tolerance):
           'Straight' if the headings agree within angle_tolerance,
           otherwise ValueError (no curve joins a point to itself with a turn).
        2. both headings match the chord heading within angle_tolerance:
           'Straight'.
        3. the headings are mirror images about the chord within
           angle_tolerance (a single circular arc fits): 'Arc'.
        4. otherwise: 'Clothoid'.
    """
    chord, phi0, phi1 = relative_headings(start, end)
    if chord <= position_tolerance:
        if abs(_point.normalize_angle(end[2] - start[2])) < angle_tolerance:
            return STRAIGHT
        raise ValueError('Start and end points coincide but their directions differ.')
    if abs(phi0) < angle_tolerance and abs(phi1) < angle_tolerance:
        return STRAIGHT
    if abs(phi0 + phi1) < angle_tolerance:
        return ARC
    return CLOTHOID

def fit_clothoid(start, end, angle_tolerance=ANGLE_TOLERANCE, position_tolerance=POSITION_TOLERANCE,
        max_iterations=MAX_ITERATIONS):
    """Find the curvatures and length of the curve between two directed points.

    Parameters:
        start, end: DirectedPoint2d (or (x, y, direction) triples).
        angle_tolerance: headings within this many radians are considered equal
            when recognizing straight lines and arcs.
        position_tolerance: maximum distance between the fitted and requested
            end point, scaled by the chord length for chords longer than 1.
        max_iterations: bound on the Newton iterations.

    Returns: ClothoidFit(shape, start_curvature, end_curvature, length,
        converged, iterations).

    If the iteration budget is exhausted or the fitted curve misses the end
    point, the best estimate is returned with converged=False, and a
    NonconvergenceWarning is issued.
    """
    start = _point.as_directed(start, 'start')
    end = _point.as_directed(end, 'end')
    angle_tolerance = util.check_finite(angle_tolerance, 'angle_tolerance')
    position_tolerance = util.check_finite(position_tolerance, 'position_tolerance')
    if angle_tolerance <= 0 or position_tolerance <= 0:
        raise ValueError('Tolerances must be above 0.')
    if int(max_iterations) < 1:
        raise ValueError('max_iterations must be at least 1.')

    shape = classify_shape(start, end, angle_tolerance, position_tolerance)
    chord, phi0, phi1 = relative_headings(start, end)
    _logger.debug('Shape between %s and %s classified as %s', start, end, shape)
    if shape == STRAIGHT:
        return ClothoidFit(STRAIGHT, 0.0, 0.0, chord, True, 0)
    if shape == ARC:
        turn = phi1 - phi0
        length = chord * abs(turn / 2) / abs(math.sin(turn / 2))
        curvature = turn / length
        return ClothoidFit(ARC, curvature, curvature, length, True, 0)

    a, iterations, converged = _solve_a(phi0, phi1, int(max_iterations))
    x, y = _chord_integrals(a, phi0, phi1)
    if not (x > 0 and math.isfinite(a)):
        util.warn_nonconvergence(_logger, 'No clothoid solution found between %s and %s; falling back to an arc.',
            start, end)
        turn = phi1 - phi0
        length = chord * max(1.0, abs(turn / 2) / max(abs(math.sin(turn / 2)), 1e-12))
        curvature = turn / length
        return ClothoidFit(ARC, curvature, curvature, length, False, iterations)

    length = chord / x
    delta = phi1 - phi0
    start_curvature = (delta - a) / length
    end_curvature = (delta + a) / length
    sharpness = (end_curvature - start_curvature) / length
    fitted_end = spiral.spiral_points(start[0], start[1], start[2], start_curvature, sharpness, length)
    miss = math.hypot(fitted_end[0] - end[0], fitted_end[1] - end[1])
    if miss > position_tolerance * max(1.0, chord):
        converged = False
    if not converged:
        util.warn_nonconvergence(_logger, 'Clothoid fit between %s and %s stopped after %d iterations, '
            'missing the end point by %g.', start, end, iterations, miss)
    _logger.debug('Clothoid fit: A=%g, length=%g, %d iterations', a, length, iterations)
    return ClothoidFit(CLOTHOID, start_curvature, end_curvature, length, converged, iterations)

def initial_guess(phi0, phi1):
    """Approximate solution A of Y(A) = 0, accurate to a few percent for
    headings within (-pi, pi)."""
    x = phi0 / math.pi
    y = phi1 / math.pi
    xy = x * y
    c0, c1, c2, c3, c4, c5 = _GUESS_COEFFICIENTS
    return (phi0 + phi1) * (c0 + xy * (c1 + c2 * xy) + (c3 + c4 * xy) * (x**2 + y**2) + c5 * (x**4 + y**4))

def _chord_integrals(a, phi0, phi1):
    """Return (X(A), Y(A)): the end point of a unit-length clothoid with
    relative start heading phi0 and turn phi1 - phi0."""
    delta = phi1 - phi0
    x, y = spiral.spiral_points(0.0, 0.0, phi0, delta - a, 2 * a, 1.0)
    return x, y

def _chord_integral_derivative(a, phi0, phi1):
    # d/dA of Y(A) = integral of cos(heading) * (tau**2 - tau)
    delta = phi1 - phi0
    def integrand(tau):
        return numpy.cos(phi0 + (delta - a) * tau + a * tau**2) * (tau**2 - tau)
    return spiral.gauss_legendre(integrand, 0.0, 1.0)

def _solve_a(phi0, phi1, max_iterations):
    """Newton search for the root of Y(A); returns (A, iterations, converged)."""
    def func(a):
        return _chord_integrals(a, phi0, phi1)[1]
    def fprime(a):
        return _chord_integral_derivative(a, phi0, phi1)

    best = None
    total_iterations = 0
    for guess in (initial_guess(phi0, phi1), 3 * (phi0 + phi1)):
        root, result = optimize.newton(func, guess, fprime=fprime, tol=ROOT_TOLERANCE, maxiter=max_iterations,
            full_output=True, disp=False)
        total_iterations += result.iterations
        valid = math.isfinite(root) and _chord_integrals(root, phi0, phi1)[0] > 0
        if valid and result.converged:
            return root, total_iterations, True
        if valid and (best is None or abs(func(root)) < abs(func(best))):
            best = root
    if best is None:
        best = initial_guess(phi0, phi1)
    return best, total_iterations, False
