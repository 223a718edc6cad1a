import logging
import math
import warnings

class NonconvergenceWarning(RuntimeWarning):
    """An iterative computation ran out of its iteration budget before reaching
    the requested tolerance; the best available estimate was used instead."""
    pass

def warn_nonconvergence(logger, message, *args):
    """Log a message at debug level and issue it as a NonconvergenceWarning."""
    logger.debug(message, *args)
    warnings.warn(message % args, NonconvergenceWarning, stacklevel=3)

def check_not_none(value, name):
    if value is None:
        raise TypeError('{} may not be None.'.format(name))
    return value

def check_finite(value, name):
    """Return value as a float, raising ValueError if it is NaN or infinite."""
    check_not_none(value, name)
    value = float(value)
    if not math.isfinite(value):
        raise ValueError('{} must be finite (got {}).'.format(name, value))
    return value

def check_fraction(t, name='fraction'):
    """Raise ValueError if t is outside the range [0, 1]."""
    t = check_finite(t, name)
    if t < 0 or t > 1:
        raise ValueError('{} must be in the range [0, 1] (got {}).'.format(name, t))
    return t

def check_point(point, name, size=2):
    """Validate that point is a sequence whose first 'size' entries are finite
    numbers; return them as a tuple of floats."""
    check_not_none(point, name)
    if len(point) < size:
        raise ValueError('{} must have at least {} coordinates.'.format(name, size))
    return tuple(check_finite(point[i], name) for i in range(size))

_root_logger = logging.getLogger('cornu')
_root_logger.addHandler(logging.NullHandler())
