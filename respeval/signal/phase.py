# -*- coding: utf-8 -*-
"""
Phase wrapping/unwrapping, frequency clipping and unit conversion of
complex spectra.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging

import numpy as np

from respeval.core.units import (ACCEL_UNIT_CONV, DISPLACE_UNIT_CONV)


logger = logging.getLogger('respeval.signal.phase')


def unwrap_phase(phase, first_non_negative=False):
    """
    Unwrap phase values given in degrees.

    Whenever two consecutive values differ by more than 180 degrees, a
    multiple of 360 degrees is added to all following values.

    :type phase: :class:`numpy.ndarray`
    :param phase: Phase values in degrees.
    :type first_non_negative: bool
    :param first_non_negative: Shift all values by 360 degrees if the first
        value is negative.
    :returns: The unwrapped phase values or the very same ``phase`` object if
        nothing had to be changed.

    >>> unwrap_phase([170.0, -170.0, -150.0]).tolist()
    [170.0, 190.0, 210.0]
    """
    if len(phase) <= 0:
        return phase
    ret = np.empty(len(phase), dtype=np.float64)
    offset = 0.0
    changed = False
    previous = phase[0]
    if first_non_negative and previous < 0.0:
        previous += 360.0
        offset = 360.0
        changed = True
    ret[0] = previous
    for i in range(1, len(phase)):
        value = phase[i] + offset
        diff = value - previous
        if diff > 180.0:
            offset -= 360.0
            value -= 360.0
            changed = True
        elif diff < -180.0:
            offset += 360.0
            value += 360.0
            changed = True
        ret[i] = previous = value
    return ret if changed else phase


def wrap_phase(phase):
    """
    Wrap phase values given in degrees into the range [-180, 180].

    If the first value is already outside of that range, the offset is
    preset accordingly before walking the array.

    :type phase: :class:`numpy.ndarray`
    :param phase: Phase values in degrees.
    :returns: The wrapped phase values or the very same ``phase`` object if
        no value had to be wrapped inside the loop.

    >>> wrap_phase(np.array([170.0, 190.0, 210.0])).tolist()
    [170.0, -170.0, -150.0]
    """
    if len(phase) <= 0:
        return phase
    offset = 0.0
    changed = False
    value = phase[0]
    if value > 180.0:
        offset -= 360.0
        while value + offset > 180.0:
            offset -= 360.0
    elif value < -180.0:
        offset += 360.0
        while value + offset < -180.0:
            offset += 360.0
    ret = np.empty(len(phase), dtype=np.float64)
    for i in range(len(phase)):
        value = phase[i] + offset
        if value > 180.0:
            offset -= 360.0
            value -= 360.0
            changed = True
        elif value < -180.0:
            offset += 360.0
            value += 360.0
            changed = True
        ret[i] = value
    return ret if changed else phase


def _clip_note(count, where):
    return "Note:  %d frequenc%s clipped from %s of requested range" % (
        count, "ies" if count != 1 else "y", where)


def clip_frequencies(frequencies, check, notes=None):
    """
    Remove requested frequencies lying outside of the range of ``check``.

    A clipped value that lies within 0.0001% of the corresponding end of the
    ``check`` range is kept and replaced by that end value.

    :type frequencies: :class:`numpy.ndarray`
    :param frequencies: Requested frequencies.
    :type check: :class:`numpy.ndarray`
    :param check: Frequencies defining the valid range (ascending or
        descending).
    :type notes: list, optional
    :param notes: If given, notes about clipped values are appended to it
        (and logged).
    :returns: The clipped frequencies, an empty array if all values were
        clipped or the very same ``frequencies`` object if nothing changed.

    >>> notes = []
    >>> clip_frequencies(np.array([0.5, 1.0, 2.0, 9.0]),
    ...                  np.array([1.0, 5.0]), notes).tolist()
    [1.0, 2.0]
    >>> print(notes[0])
    Note:  1 frequency clipped from beginning of requested range
    """
    length = len(frequencies)
    if len(check) <= 0 or length <= 0:
        return frequencies
    first = check[0]
    last = check[-1]
    if first > last:
        first, last = last, first

    start = 0
    while start < length and (frequencies[start] < first or
                              frequencies[start] > last):
        start += 1
    fix_first = False
    if start > 0 and abs(first - frequencies[start - 1]) < first * 1e-6:
        start -= 1
        fix_first = True

    end = length - 1
    while end > 0 and (frequencies[end] > last or frequencies[end] < first):
        end -= 1
    fix_last = False
    if end < length - 1 and abs(frequencies[end + 1] - last) < last * 1e-6:
        end += 1
        fix_last = True

    if start > end:
        return np.empty(0, dtype=np.float64)
    new_length = end - start + 1
    if new_length == length and not fix_first and not fix_last:
        return frequencies

    ret = np.array(frequencies[start:end + 1], dtype=np.float64)
    if fix_first:
        ret[0] = first
    if fix_last:
        ret[-1] = last
    if notes is not None:
        clipped_end = length - end - 1
        if start > 0:
            notes.append(_clip_note(start, "beginning"))
            logger.info(notes[-1])
        if clipped_end > 0:
            notes.append(_clip_note(clipped_end, "end"))
            logger.info(notes[-1])
    return ret


def _integrate(values, w):
    """
    Multiply by ``-i/w``, values at ``w == 0`` become zero.
    """
    factor = np.zeros(values.shape, dtype=np.complex128)
    nonzero = w != 0.0
    factor.imag[nonzero] = -1.0 / w[nonzero]
    return values * factor


def _differentiate(values, w):
    """
    Multiply by ``i*w``.
    """
    factor = np.zeros(values.shape, dtype=np.complex128)
    factor.imag = w
    return values * factor


def convert_units(values, w, input_conversion, output_conversion):
    """
    Convert a complex spectrum between displacement, velocity and
    acceleration.

    Conversions always go through velocity, i.e. an input in displacement
    is first integrated to velocity and then differentiated again if the
    requested output is displacement.

    :type values: :class:`numpy.ndarray`
    :param values: Complex spectrum.
    :type w: :class:`numpy.ndarray`
    :param w: Angular frequencies of the spectrum.
    :type input_conversion: int
    :param input_conversion: Unit conversion index of the input units.
    :type output_conversion: int
    :param output_conversion: Requested unit conversion index.
    :rtype: :class:`numpy.ndarray`
    """
    values = np.array(values, dtype=np.complex128)
    if output_conversion == input_conversion:
        return values
    w = np.broadcast_to(np.asarray(w, dtype=np.float64), values.shape)
    if input_conversion == DISPLACE_UNIT_CONV:
        values = _integrate(values, w)
    elif input_conversion == ACCEL_UNIT_CONV:
        values = _differentiate(values, w)
    if output_conversion == DISPLACE_UNIT_CONV:
        values = _differentiate(values, w)
    elif output_conversion == ACCEL_UNIT_CONV:
        values = _integrate(values, w)
    return values


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
