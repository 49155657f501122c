# -*- coding: utf-8 -*-
"""
Base utilities and constants for respeval.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from math import pi


# Magnitude below which a gain, sensitivity or response value counts as zero.
SMALL_FLOAT_VAL = 1e-40

TWO_PI = pi * 2


class ComparingObject(object):
    """
    Simple base class that implements == and != based on self.__dict__
    """

    def __eq__(self, other):
        return (isinstance(other, self.__class__) and
                self.__dict__ == other.__dict__)

    def __ne__(self, other):
        return not self.__eq__(other)


def is_zero(value):
    """
    Check if a real or complex value is zero within
    :const:`SMALL_FLOAT_VAL`.

    For complex values both the real and the imaginary part have to be
    smaller than the threshold.

    >>> is_zero(0.0)
    True
    >>> is_zero(1e-41 + 1e-3j)
    False
    """
    if isinstance(value, complex):
        return (abs(value.real) < SMALL_FLOAT_VAL and
                abs(value.imag) < SMALL_FLOAT_VAL)
    return abs(value) < SMALL_FLOAT_VAL


def is_negative_one(value):
    """
    Check if value equals -1 within :const:`SMALL_FLOAT_VAL`.

    >>> is_negative_one(-1.0)
    True
    >>> is_negative_one(-0.999)
    False
    """
    if value > -1:
        return value + 1 < SMALL_FLOAT_VAL
    return -1 - value < SMALL_FLOAT_VAL


def resolve_stage_range(num_stages, start_stage=0, stop_stage=0):
    """
    Translate 1-based start/stop stage numbers into a 0-based inclusive
    range of stage indices.

    A start value <= 0 selects the first stage. A stop value larger than the
    start value is clamped to the last stage, otherwise a stop value <= 0
    selects the last stage and any other value selects only the start stage.

    :type num_stages: int
    :param num_stages: Number of stages in the response.
    :type start_stage: int
    :param start_stage: 1-based number of the first stage to use.
    :type stop_stage: int
    :param stop_stage: 1-based number of the last stage to use.
    :rtype: tuple(int, int)
    :returns: 0-based indices of the first and last stage, or ``None`` if
        the start stage lies beyond the last stage.

    >>> resolve_stage_range(3)
    (0, 2)
    >>> resolve_stage_range(3, 2, 9)
    (1, 2)
    >>> resolve_stage_range(3, 2, 1)
    (1, 1)
    >>> print(resolve_stage_range(3, 4))
    None
    """
    start = start_stage or 0
    stop = stop_stage or 0
    if start <= 0:
        start = 1
    start -= 1
    if stop > start:
        stop -= 1
        if stop >= num_stages:
            stop = num_stages - 1
    else:
        stop = num_stages - 1 if stop <= 0 else start
    if start >= num_stages:
        return None
    return start, stop


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
