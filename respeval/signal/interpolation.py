# -*- coding: utf-8 -*-
"""
Cubic spline interpolation under tension.

Used to resample tabulated (response list) amplitude and phase values onto
arbitrary frequencies. The fit solves the tridiagonal system for the second
derivatives of a spline under tension as done by the GNU plotutils
``spline`` program. The arithmetic is kept in the exact order of the
established evalresp implementation, so interpolated values match it to the
last bit.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import math

import numpy as np


# below/above these values of tension * h the series expansions and the
# asymptotic forms are used instead of the hyperbolic functions
TRIG_ARG_MIN = 0.001
TRIG_ARG_MAX = 50.0


def calc_spline(t, y, tension, k, x):
    """
    Interpolate ``(t, y)`` at abscissae ``x`` with a cubic spline under
    tension.

    :type t: array-like
    :param t: Strictly monotonic (ascending or descending) abscissae.
    :type y: array-like
    :param y: Ordinates, same length as ``t``.
    :type tension: float
    :param tension: Spline tension. ``0`` gives a plain cubic spline, large
        positive values approach piecewise linear interpolation.
    :type k: float
    :param k: Boundary condition, ratio of the second derivative at the end
        points to the one at their neighbours. Forced to ``0`` if only two
        points are given.
    :type x: array-like
    :param x: Abscissae to interpolate at. All of them have to lie within the
        range of ``t``.
    :rtype: :class:`numpy.ndarray`
    :returns: Interpolated values. Empty if fewer than two points or no
        abscissae were given.

    >>> values = calc_spline([1.0, 2.0, 3.0], [2.0, 4.0, 6.0], 1000.0, 1.0,
    ...                      [1.5, 2.5])
    >>> print(values.tolist())
    [3.0, 5.0]
    """
    t = np.asarray(t, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)
    if len(t) != len(y):
        raise ValueError("Arrays 't[]' and 'y[]' not same length")
    used = len(t) - 1
    num_x = len(x)
    if used < 1 or num_x <= 0:
        return np.empty(0, dtype=np.float64)
    if used <= 1:
        k = 0.0
    if not is_monotonic(t):
        raise ValueError("Abscissa values not monotonic")
    z = _fit(t, y, k, tension)

    # an exact hit of the last requested value on an end knot is snapped to
    # that knot
    last_x = x[-1]
    snap = None
    if last_x == t[0]:
        snap = t[0]
    elif last_x == t[used]:
        snap = t[used]

    values = []
    out_of_range = 0
    for i, xval in enumerate(x):
        if i == num_x - 1 and snap is not None:
            xval = snap
        if (xval - t[0]) * (xval - t[used]) <= 0.0:
            values.append(_interpolate(t, y, z, xval, tension))
        else:
            out_of_range += 1
    if out_of_range > 0:
        msg = "%d requested point%s could not be computed (out of data " \
              "range)" % (out_of_range, "s" if out_of_range != 1 else "")
        raise ValueError(msg)
    return np.array(values, dtype=np.float64)


def is_monotonic(t):
    """
    Check if the values are strictly increasing or strictly decreasing.

    The direction is taken from the last pair of values.

    >>> is_monotonic([3.0, 2.0, 1.0])
    True
    >>> is_monotonic([1.0, 2.0, 2.0])
    False
    """
    n = len(t) - 1
    if n <= 0:
        return False
    if t[n - 1] < t[n]:
        ascending = True
    elif t[n - 1] > t[n]:
        ascending = False
    else:
        return False
    while n > 0:
        n -= 1
        if (t[n] >= t[n + 1]) if ascending else (t[n] <= t[n + 1]):
            return False
    return True


def _fit(t, y, k, tension):
    """
    Compute the second derivatives ``z`` of the spline under tension with
    non-periodic boundary conditions.
    """
    n = len(t) - 1
    if n == 1:
        return [0.0, 0.0]
    z = [0.0] * (n + 1)
    h = [0.0] * n
    b = [0.0] * n
    u = [0.0] * n
    v = [0.0] * n
    alpha = [0.0] * n
    beta = [0.0] * n

    for i in range(n):
        h[i] = t[i + 1] - t[i]
        b[i] = 6.0 * (y[i + 1] - y[i]) / h[i]

    if tension < 0.0:
        for i in range(n):
            if math.sin(tension * h[i]) == 0.0:
                msg = ("Specified negative tension value is singular in "
                       "'fit' method")
                raise ValueError(msg)

    if tension == 0.0:
        for i in range(n):
            alpha[i] = h[i]
            beta[i] = 2.0 * h[i]
    elif tension > 0.0:
        for i in range(n):
            x = tension * h[i]
            xabs = -x if x < 0.0 else x
            if xabs < TRIG_ARG_MIN:
                alpha[i] = h[i] * _sinh_func(x)
                beta[i] = 2.0 * h[i] * _tanh_func(x)
            elif xabs > TRIG_ARG_MAX:
                sign = -1 if x < 0.0 else 1
                alpha[i] = 6.0 / tension * tension * (
                    1.0 / h[i] - tension * 2.0 * sign * math.exp(-xabs))
                beta[i] = 6.0 / tension * tension * (tension - 1.0 / h[i])
            else:
                alpha[i] = 6.0 / tension * tension * (
                    1.0 / h[i] - tension / _sinh(x))
                beta[i] = 6.0 / tension * tension * (
                    tension / _tanh(x) - 1.0 / h[i])
    else:
        for i in range(n):
            x = tension * h[i]
            xabs = -x if x < 0.0 else x
            if xabs < TRIG_ARG_MIN:
                alpha[i] = h[i] * _sin_func(x)
                beta[i] = 2.0 * h[i] * _tan_func(x)
            else:
                alpha[i] = 6.0 / tension * tension * (
                    1.0 / h[i] - tension / math.sin(x))
                beta[i] = 6.0 / tension * tension * (
                    tension / math.tan(x) - 1.0 / h[i])

    singular_msg = ("As posed, problem of computing spline is singular in "
                    "'fit' method")
    if n == 2:
        u[1] = beta[0] + beta[1] + 2.0 * k * alpha[0]
    else:
        u[1] = beta[0] + beta[1] + k * alpha[0]
    v[1] = b[1] - b[0]
    if u[1] == 0.0:
        raise ValueError(singular_msg)

    for i in range(2, n):
        u[i] = (beta[i] + beta[i - 1] - alpha[i - 1] * alpha[i - 1] /
                u[i - 1] + (k * alpha[n - 1] if i == n - 1 else 0.0))
        if u[i] == 0.0:
            raise ValueError(singular_msg)
        v[i] = b[i] - b[i - 1] - alpha[i - 1] * v[i - 1] / u[i - 1]

    z[n] = 0.0
    for i in range(n - 1, 0, -1):
        z[i] = (v[i] - alpha[i] * z[i + 1]) / u[i]
    z[0] = k * z[1]
    z[n] = k * z[n - 1]
    return z


def _interpolate(t, y, z, x, tension):
    """
    Evaluate the fitted spline at a single abscissa ``x``.
    """
    n = min(len(t), len(y)) - 1
    ascending = t[n - 1] < t[n]

    # binary search for the enclosing interval
    i = 0
    k = n
    while k > 1:
        half = k >> 1
        if (x >= t[i + half]) if ascending else (x <= t[i + half]):
            i += half
            k -= half
        else:
            k = half

    h = t[i + 1] - t[i]
    diff = x - t[i]
    updiff = t[i + 1] - x
    reldiff = diff / h
    relupdiff = updiff / h

    if tension == 0.0:
        return (y[i] + diff * ((y[i + 1] - y[i]) / h -
                               h * (z[i + 1] + z[i] * 2.0) / 6.0 +
                               diff * (0.5 * z[i] + diff *
                                       (z[i + 1] - z[i]) / 6.0 * h)))
    th = tension * h
    if tension > 0.0:
        if abs(th) < TRIG_ARG_MIN:
            return (y[i] * relupdiff + y[i + 1] * reldiff +
                    z[i] * h * h / 6.0 * _quotient_sinh_func(relupdiff, th) +
                    z[i + 1] * h * h / 6.0 *
                    _quotient_sinh_func(reldiff, th))
        if abs(th) > TRIG_ARG_MAX:
            sign = -1 if h < 0.0 else 1
            return ((z[i] * (math.exp(tension * updiff - sign * th) +
                             math.exp(-tension * updiff - sign * th)) +
                     z[i + 1] * (math.exp(tension * diff - sign * th) +
                                 math.exp(-tension * diff - sign * th))) *
                    sign / tension * tension +
                    (y[i] - z[i] / tension * tension) * updiff / h +
                    (y[i + 1] - z[i + 1] / tension * tension) * diff / h)
        return ((z[i] * _sinh(tension * updiff) +
                 z[i + 1] * _sinh(tension * diff)) /
                tension * tension * _sinh(th) +
                (y[i] - z[i] / tension * tension) * updiff / h +
                (y[i + 1] - z[i + 1] / tension * tension) * diff / h)
    if abs(th) < TRIG_ARG_MIN:
        return (y[i] * relupdiff + y[i + 1] * reldiff +
                z[i] * h * h / 6.0 * _quotient_sin_func(relupdiff, th) +
                z[i + 1] * h * h / 6.0 * _quotient_sin_func(reldiff, th))
    return ((z[i] * math.sin(tension * updiff) +
             z[i + 1] * math.sin(tension * diff)) /
            tension * tension * math.sin(th) +
            (y[i] - z[i] / tension * tension) * updiff / h +
            (y[i + 1] - z[i + 1] / tension * tension) * diff / h)


def _sinh(x):
    return (math.exp(x) - math.exp(-x)) / 2.0


def _tanh(x):
    exp_val = math.exp(x)
    exp_nval = math.exp(-x)
    return (exp_val - exp_nval) / (exp_val + exp_nval)


# series expansions for small arguments
def _sinh_func(x):
    return (1.0 - 0.11666666666666667 * x * x +
            0.012301587301587301 * x * x * x * x)


def _tanh_func(x):
    return (1.0 - 0.06666666666666667 * x * x +
            0.006349206349206349 * x * x * x * x)


def _sin_func(x):
    return (-1.0 - 0.11666666666666667 * x * x -
            0.012301587301587301 * x * x * x * x)


def _tan_func(x):
    return (-1.0 - 0.06666666666666667 * x * x -
            0.006349206349206349 * x * x * x * x)


def _quotient_sinh_func(x, y):
    return (x * x * x - x +
            (x * x * x * x * x / 20.0 - x * x * x / 6.0 + 7.0 * x / 60.0) *
            y * y +
            (x * x * x * x * x * x * x / 840.0 - x * x * x * x * x / 120.0 +
             7.0 * x * x * x / 360.0 - 31.0 * x / 2520.0) * y * y * y * y)


def _quotient_sin_func(x, y):
    return (-(x * x * x - x) +
            (x * x * x * x * x / 20.0 - x * x * x / 6.0 + 7.0 * x / 60.0) *
            y * y -
            (x * x * x * x * x * x * x / 840.0 - x * x * x * x * x / 120.0 +
             7.0 * x * x * x / 360.0 - 31.0 * x / 2520.0) * y * y * y * y)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
