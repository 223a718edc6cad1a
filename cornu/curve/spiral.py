"""Positions along plane curves of constant sharpness.

A curve of constant sharpness c (rate of change of curvature with arc length)
starting at (x0, y0) with heading theta0 and curvature k0 has heading
    theta(s) = theta0 + k0*s + c*s**2/2
and position given by the integral of (cos(theta), sin(theta)) ds. For c == 0
this is a circular arc (or a straight line when k0 == 0), otherwise a clothoid,
whose position is expressed in terms of the Fresnel integrals.
"""

import numpy
from scipy import special

# Below this value of |c|*s**2 (the heading contributed by the sharpness term),
# the curve is evaluated as an arc with the exact total turn.
SHARPNESS_THRESHOLD = 1e-8

# Fresnel arguments beyond this size lose the oscillating part of C and S to
# rounding; such curves are integrated by quadrature instead.
FRESNEL_LIMIT = 1e3

_GL_NODES, _GL_WEIGHTS = numpy.polynomial.legendre.leggauss(24)

def gauss_legendre(function, a, b):
    """Integrate a vectorized function over [a, b] with 24-point Gauss-Legendre
    quadrature. The function may return arrays of shape (24, ...)."""
    half = 0.5 * (b - a)
    x = 0.5 * (a + b) + half * _GL_NODES
    values = numpy.asarray(function(x))
    weights = _GL_WEIGHTS.reshape((-1,) + (1,) * (values.ndim - 1))
    return half * (weights * values).sum(axis=0)

def spiral_headings(theta0, k0, sharpness, s):
    """Heading at arc length(s) s along a curve of constant sharpness."""
    s = numpy.asarray(s, dtype=float)
    return theta0 + k0 * s + 0.5 * sharpness * s**2

def spiral_points(x0, y0, theta0, k0, sharpness, s):
    """Return positions along a curve of constant sharpness.

    Parameters:
        x0, y0, theta0: start position and heading.
        k0: curvature at the start.
        sharpness: change in curvature per unit length.
        s: scalar or array of arc lengths from the start.

    Returns: array of shape (2) for scalar s, or (n, 2) for an array of n
        arc lengths.
    """
    s = numpy.asarray(s, dtype=float)
    s_max = numpy.abs(s).max() if s.size else 0
    if abs(sharpness) * s_max**2 < SHARPNESS_THRESHOLD:
        dx, dy = _arc_offsets(theta0, k0, sharpness, s)
    else:
        dx, dy = _fresnel_offsets(theta0, k0, sharpness, s)
        if dx is None:
            dx, dy = _quadrature_offsets(theta0, k0, sharpness, s)
    return numpy.stack([x0 + dx, y0 + dy], axis=-1)

def _arc_offsets(theta0, k0, sharpness, s):
    # chord of an arc with the same total turn: length s*sinc(turn/2), heading at half the turn
    turn = k0 * s + 0.5 * sharpness * s**2
    chord = s * numpy.sinc(turn / (2 * numpy.pi))
    heading = theta0 + turn / 2
    return chord * numpy.cos(heading), chord * numpy.sin(heading)

def _fresnel_offsets(theta0, k0, sharpness, s):
    """Clothoid position relative to its start via the Fresnel integrals.

    Completing the square, theta(s) = sharpness/2 * (s + k0/sharpness)**2 + phi,
    and substituting u = (s + k0/sharpness) * sqrt(|sharpness|/pi) turns the
    integral into the standard Fresnel integrals C(u) and S(u), with the sign
    of S following the sign of the sharpness.

    Returns (None, None) if the Fresnel arguments are too large for C and S to
    retain precision."""
    scale = numpy.sqrt(numpy.pi / abs(sharpness))
    sign = numpy.sign(sharpness)
    u_start = k0 / sharpness / scale
    u_end = u_start + s / scale
    if max(abs(u_start), numpy.abs(u_end).max()) > FRESNEL_LIMIT:
        return None, None
    phi = theta0 - k0**2 / (2 * sharpness)
    s_start, c_start = special.fresnel(u_start)
    s_end, c_end = special.fresnel(u_end)
    dc = c_end - c_start
    ds = sign * (s_end - s_start)
    cos_phi = numpy.cos(phi)
    sin_phi = numpy.sin(phi)
    return scale * (cos_phi * dc - sin_phi * ds), scale * (sin_phi * dc + cos_phi * ds)

def _quadrature_offsets(theta0, k0, sharpness, s):
    # composite Gauss-Legendre over panels that each turn at most half a radian
    s_max = numpy.abs(s).max()
    turn = abs(k0) * s_max + 0.5 * abs(sharpness) * s_max**2
    panels = min(int(turn / 0.5) + 1, 4096)
    edges = numpy.linspace(0, 1, panels + 1)
    half = 0.5 * (edges[1:] - edges[:-1])
    nodes = (0.5 * (edges[1:] + edges[:-1])[:, numpy.newaxis] + half[:, numpy.newaxis] * _GL_NODES).ravel()
    weights = (half[:, numpy.newaxis] * _GL_WEIGHTS).ravel()
    # shape of s, plus one trailing axis over the quadrature nodes
    arc = s[..., numpy.newaxis] * nodes
    heading = spiral_headings(theta0, k0, sharpness, arc)
    dx = s * (weights * numpy.cos(heading)).sum(axis=-1)
    dy = s * (weights * numpy.sin(heading)).sum(axis=-1)
    return dx, dy
