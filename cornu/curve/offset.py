import bisect
import math

import numpy

from .. import util

class PiecewiseLinearOffset:
    """Lateral offset as a piecewise-linear function of the fraction of length
    along a curve.

    The function is defined by knots (fraction, offset), with fractions in the
    range [0, 1]. Between knots the offset is interpolated linearly; beyond the
    first and last knot it is held constant. Positive offsets lie to the left
    of the curve.

    Construct from a mapping {fraction: offset} or an iterable of
    (fraction, offset) pairs; see also the of() and constant() classmethods.
    Instances are immutable.

    Example:
        offsets = PiecewiseLinearOffset({0: 2, 0.2: 2, 0.8: 5, 1: 5})
        offsets.get(0.5) # 3.5
    """

    def __init__(self, knots):
        util.check_not_none(knots, 'knots')
        if hasattr(knots, 'items'):
            knots = knots.items()
        pairs = []
        for pair in knots:
            key, value = pair
            util.check_not_none(key, 'knot fraction')
            util.check_not_none(value, 'knot offset')
            key = float(key)
            if math.isnan(key) or key < 0 or key > 1:
                raise ValueError('Knot fraction {} is outside the range [0, 1].'.format(key))
            if key == 0 and math.copysign(1, key) < 0:
                raise ValueError('Knot fraction -0.0 is not allowed.')
            pairs.append((key, util.check_finite(value, 'knot offset')))
        if not pairs:
            raise ValueError('At least one knot is required.')
        pairs.sort()
        keys = [key for key, value in pairs]
        for k0, k1 in zip(keys[:-1], keys[1:]):
            if k0 == k1:
                raise ValueError('Duplicate knot fraction {}.'.format(k0))
        self._keys = tuple(keys)
        self._values = tuple(value for key, value in pairs)

    @classmethod
    def of(cls, *fractions_and_offsets):
        """Construct from a flat sequence: of(f0, v0, f1, v1, ...)."""
        if len(fractions_and_offsets) < 2 or len(fractions_and_offsets) % 2:
            raise ValueError('An even number of at least 2 values is required (got {}).'.format(
                len(fractions_and_offsets)))
        return cls(zip(fractions_and_offsets[::2], fractions_and_offsets[1::2]))

    @classmethod
    def constant(cls, offset):
        """A constant lateral offset along the whole curve."""
        return cls([(0.0, offset)])

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    @property
    def keys(self):
        return self._keys

    @property
    def values(self):
        return self._values

    def items(self):
        return zip(self._keys, self._values)

    def full_keys(self):
        """Knot fractions, extended with 0 and 1 if not already present."""
        keys = list(self._keys)
        if keys[0] > 0:
            keys.insert(0, 0.0)
        if keys[-1] < 1:
            keys.append(1.0)
        return tuple(keys)

    def full_values(self):
        """Offsets at each of full_keys."""
        return tuple(self.get(key) for key in self.full_keys())

    def interior_knots(self):
        """Knot fractions strictly between 0 and 1."""
        return tuple(key for key in self._keys if 0 < key < 1)

    def get(self, fraction):
        """Offset at a fraction (scalar or array) along the curve.

        Finite fractions outside [0, 1] are clamped to the first or last knot
        value; NaN or infinite fractions raise ValueError."""
        if numpy.ndim(fraction) == 0:
            fraction = util.check_finite(fraction, 'fraction')
            return float(numpy.interp(fraction, self._keys, self._values))
        fraction = numpy.asarray(fraction, dtype=float)
        if not numpy.isfinite(fraction).all():
            raise ValueError('fractions must be finite.')
        return numpy.interp(fraction, self._keys, self._values)

    def get_derivative(self, fraction):
        """Slope d(offset)/d(fraction) at a fraction along the curve.

        At an interior knot, the slope of the segment ending at that knot is
        used; at fraction 0, the slope of the segment starting there. Outside
        the range of the knots the slope is 0."""
        fraction = util.check_finite(fraction, 'fraction')
        keys = self._keys
        if fraction == 0.0:
            upper = bisect.bisect_right(keys, fraction)
            lower = upper - 1
        else:
            upper = bisect.bisect_left(keys, fraction)
            lower = upper - 1
        if lower < 0 or upper >= len(keys):
            return 0.0
        return (self._values[upper] - self._values[lower]) / (keys[upper] - keys[lower])

    def __eq__(self, other):
        if not isinstance(other, PiecewiseLinearOffset):
            return NotImplemented
        return self._keys == other._keys and self._values == other._values

    def __hash__(self):
        return hash((self._keys, self._values))

    def __repr__(self):
        knots = ', '.join('{!r}: {!r}'.format(k, v) for k, v in self.items())
        return '{}({{{}}})'.format(type(self).__name__, knots)
