# -*- coding: utf-8 -*-
"""
Evaluation of the transfer functions of single response stages.

All evaluators accept a scalar or an array of (angular) frequencies and
return complex128 values of the same shape. The formulas, including the
sign convention of the digital poles and zeros and the phase correction of
asymmetric FIR filters, follow evalresp exactly.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import numpy as np


FIR_UNKNOWN = "FIR"
FIR_SYM1 = "FIR_SYM1"
FIR_SYM2 = "FIR_SYM2"
FIR_ASYM = "FIR_ASYM"

# allowed deviation of the sum of asymmetric FIR coefficients from 1.0
FIR_NORM_TOL = 0.02


def _to_complex(real, imag):
    real, imag = np.broadcast_arrays(np.asarray(real, dtype=np.float64),
                                     np.asarray(imag, dtype=np.float64))
    ret = np.empty(real.shape, dtype=np.complex128)
    ret.real = real
    ret.imag = imag
    return ret


def _values(coefficients):
    return [float(c) for c in coefficients]


def analog_trans(zeros, poles, norm_fact, freq):
    """
    Response of an analog poles and zeros filter.

    :type zeros: list of complex
    :param zeros: Zeros of the transfer function.
    :type poles: list of complex
    :param poles: Poles of the transfer function.
    :type norm_fact: float
    :param norm_fact: Normalization factor (A0).
    :type freq: float or :class:`numpy.ndarray`
    :param freq: Imaginary part of the complex frequency ``s``, i.e. the
        angular frequency for LAPLACE filters or the frequency in Hz for
        ANALOG filters.
    :rtype: :class:`numpy.ndarray` of complex128
    """
    freq = np.asarray(freq, dtype=np.float64)
    num = _to_complex(np.ones(freq.shape), np.ones(freq.shape))
    den = num.copy()
    for zero in zeros:
        num = num * _to_complex(0.0 - zero.real, freq - zero.imag)
    for pole in poles:
        den = den * _to_complex(0.0 - pole.real, freq - pole.imag)
    temp = np.conj(den) * num
    mod_squared = den.real * den.real + den.imag * den.imag
    return _to_complex(norm_fact * (temp.real / mod_squared),
                       norm_fact * (temp.imag / mod_squared))


def iir_pz_trans(zeros, poles, norm_fact, sint, w):
    """
    Response of a digital (z-transform) poles and zeros filter.

    The roots are subtracted from ``(cos(w * sint), sin(w * sint))``.

    :type zeros: list of complex
    :param zeros: Zeros of the transfer function.
    :type poles: list of complex
    :param poles: Poles of the transfer function.
    :type norm_fact: float
    :param norm_fact: Normalization factor (H0).
    :type sint: float
    :param sint: Input sample interval of the stage in seconds.
    :type w: float or :class:`numpy.ndarray`
    :param w: Angular frequency.
    :rtype: :class:`numpy.ndarray` of complex128
    """
    wsint = np.asarray(w, dtype=np.float64) * sint
    cos_wsint = np.cos(wsint)
    sin_wsint = np.sin(wsint)
    mod = np.ones(wsint.shape)
    pha = np.zeros(wsint.shape)
    for zero in zeros:
        r = cos_wsint - zero.real
        i = sin_wsint - zero.imag
        mod = mod * np.sqrt(r * r + i * i)
        pha = np.where((r != 0.0) | (i != 0.0), pha + np.arctan2(i, r), pha)
    for pole in poles:
        r = cos_wsint - pole.real
        i = sin_wsint - pole.imag
        mod = mod / np.sqrt(r * r + i * i)
        pha = np.where((r != 0.0) | (i != 0.0), pha - np.arctan2(i, r), pha)
    return _to_complex(mod * np.cos(pha) * norm_fact,
                       mod * np.sin(pha) * norm_fact)


def _trig_sum(coefficients, wsint):
    xre = np.full(wsint.shape, coefficients[0])
    xim = np.zeros(wsint.shape)
    for i in range(1, len(coefficients)):
        xre = xre + coefficients[i] * np.cos(-(i * wsint))
        xim = xim + coefficients[i] * np.sin(-(i * wsint))
    return xre, xim


def iir_trans(numerator, denominator, norm_fact, sint, w):
    """
    Response of an IIR filter given by its numerator and denominator
    coefficients.

    :type numerator: list of float
    :param numerator: Numerator coefficients.
    :type denominator: list of float
    :param denominator: Denominator coefficients.
    :type norm_fact: float
    :param norm_fact: Normalization factor.
    :type sint: float
    :param sint: Input sample interval of the stage in seconds.
    :type w: float or :class:`numpy.ndarray`
    :param w: Angular frequency.
    :rtype: :class:`numpy.ndarray` of complex128
    """
    numerator = _values(numerator)
    denominator = _values(denominator)
    wsint = np.asarray(w, dtype=np.float64) * sint
    if numerator:
        xre, xim = _trig_sum(numerator, wsint)
        amp = np.sqrt(xre * xre + xim * xim)
        phase = np.arctan2(xim, xre)
    else:
        amp = np.zeros(wsint.shape)
        phase = np.zeros(wsint.shape)
    if denominator:
        xre, xim = _trig_sum(denominator, wsint)
        amp = amp / np.sqrt(xre * xre + xim * xim)
        phase = phase - np.arctan2(xim, xre)
    return _to_complex(amp * np.cos(phase) * norm_fact,
                       amp * np.sin(phase) * norm_fact)


def fir_symmetry(numerator):
    """
    Classify the symmetry of FIR filter coefficients.

    Coefficient pairs are compared from both ends inward. Two coefficients
    only match if both their values and their errors are equal.

    :type numerator: list
    :param numerator: FIR coefficients, floats or
        :class:`~respeval.core.util.types.FilterCoefficient` objects.
    :rtype: str
    :returns: :const:`FIR_SYM1` for an odd number of symmetric coefficients,
        :const:`FIR_SYM2` for an even number, :const:`FIR_ASYM` otherwise and
        :const:`FIR_UNKNOWN` for fewer than two coefficients.

    >>> fir_symmetry([1.0, 2.0, 1.0])
    'FIR_SYM1'
    >>> fir_symmetry([1.0, 2.0, 2.0, 1.0])
    'FIR_SYM2'
    >>> fir_symmetry([1.0, 2.0, 3.0])
    'FIR_ASYM'
    """
    count = len(numerator)
    if count <= 1:
        return FIR_UNKNOWN
    i = 0
    j = count - 1
    while True:
        first = numerator[i]
        second = numerator[j]
        if first is not second and (
                float(first) != float(second) or
                getattr(first, "error", 0.0) !=
                getattr(second, "error", 0.0)):
            return FIR_ASYM
        i += 1
        j -= 1
        if i >= j:
            break
    return FIR_SYM1 if i == j else FIR_SYM2


def fir_trans(numerator, norm_fact, sint, w, symmetry):
    """
    Response of a FIR filter.

    Symmetric filters are evaluated as real valued, zero phase filters.
    Asymmetric filters get a phase correction of ``w * (N - 1) / 2 * sint``,
    filters with all coefficients equal are evaluated in closed form.

    :type numerator: list of float
    :param numerator: FIR coefficients.
    :type norm_fact: float
    :param norm_fact: Normalization factor.
    :type sint: float
    :param sint: Input sample interval of the stage in seconds.
    :type w: float or :class:`numpy.ndarray`
    :param w: Angular frequency.
    :type symmetry: str
    :param symmetry: Symmetry as returned by :func:`fir_symmetry`. Unknown
        symmetry is treated as asymmetric.
    :rtype: :class:`numpy.ndarray` of complex128
    """
    coefficients = _values(numerator)
    count = len(coefficients)
    w = np.asarray(w, dtype=np.float64)
    wsint = w * sint
    if count <= 0:
        return np.zeros(wsint.shape, dtype=np.complex128)

    if symmetry == FIR_SYM1:
        half = (count + 1) // 2
        r_val = np.zeros(wsint.shape)
        for i in range(half - 1):
            r_val = r_val + coefficients[i] * np.cos(wsint * (half - (i + 1)))
        return _to_complex((coefficients[half - 1] + 2.0 * r_val) * norm_fact,
                           0.0)
    if symmetry == FIR_SYM2:
        half = count // 2
        r_val = np.zeros(wsint.shape)
        for i in range(half):
            r_val = r_val + coefficients[i] * np.cos(
                wsint * ((half - (i + 1)) + 0.5))
        return _to_complex(2.0 * r_val * norm_fact, 0.0)

    value = coefficients[0]
    if all(c == value for c in coefficients[1:]):
        with np.errstate(divide='ignore', invalid='ignore'):
            closed = np.sin(wsint / 2.0 * count) / np.sin(wsint / 2.0) * value
        return _to_complex(np.where(wsint == 0.0, 1.0, closed) * norm_fact,
                           0.0)

    r_val = np.zeros(wsint.shape)
    i_val = np.zeros(wsint.shape)
    for i, c in enumerate(coefficients):
        arg = wsint * i
        r_val = r_val + c * np.cos(arg)
        i_val = i_val + c * -np.sin(arg)
    mod = np.sqrt(r_val * r_val + i_val * i_val)
    pha = np.arctan2(i_val, r_val) + (w * ((count - 1) / 2.0) * sint)
    return _to_complex(mod * np.cos(pha) * norm_fact,
                       mod * np.sin(pha) * norm_fact)


def normalize_fir_coefficients(numerator):
    """
    Scale FIR coefficients to unity gain at zero frequency.

    :type numerator: list of float
    :param numerator: FIR coefficients.
    :rtype: tuple(list, float)
    :returns: The scaled coefficients and the original coefficient sum. If
        the sum is within :const:`FIR_NORM_TOL` of 1.0 the very same
        ``numerator`` object is returned.

    >>> coefficients, total = normalize_fir_coefficients([1.0, 3.0])
    >>> print(coefficients, total)
    [0.25, 0.75] 4.0
    """
    total = 0.0
    for c in numerator:
        total += float(c)
    if not numerator or 1.0 - FIR_NORM_TOL <= total <= 1.0 + FIR_NORM_TOL:
        return numerator, total
    return [float(c) / total for c in numerator], total


def delay_rotation(w, delay):
    """
    Phase rotation ``exp(i * w * delay)`` used for the delay correction of
    asymmetric FIR filters.
    """
    arg = np.asarray(w, dtype=np.float64) * delay
    return _to_complex(np.cos(arg), np.sin(arg))


def response_list_trans(amplitude, phase, phase_conversion):
    """
    Complex response from tabulated amplitude and phase.

    :type phase_conversion: float
    :param phase_conversion: Factor converting the phase values to
        radians.
    """
    phase = np.asarray(phase, dtype=np.float64) * phase_conversion
    amplitude = np.asarray(amplitude, dtype=np.float64)
    return _to_complex(amplitude * np.cos(phase), amplitude * np.sin(phase))


def polynomial_trans(coefficients, x):
    """
    Response of a polynomial stage, the first derivative of the MacLaurin
    series at the sample value ``x``.

    :rtype: complex
    :returns: Real valued response, negative values are represented with a
        phase of pi. ``None`` if there are no coefficients.
    """
    values = _values(coefficients)
    if not values:
        return None
    amp = 0.0
    for j in range(1, len(values)):
        amp += values[j] * j * x ** (j - 1)
    phase = 0.0 if amp >= 0.0 else np.pi
    return complex(amp * np.cos(phase), amp * np.sin(phase))


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
