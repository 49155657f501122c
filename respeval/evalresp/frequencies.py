# -*- coding: utf-8 -*-
"""
Frequency grids for response calculations.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import numpy as np

from respeval.evalresp.calculation import calculate
from respeval.evalresp.options import CalculationOptions


def frequency_grid(min_freq, max_freq, num_freqs, log_spacing=True):
    """
    Frequencies between ``min_freq`` and ``max_freq`` (both included).

    :type min_freq: float
    :param min_freq: Lowest frequency in Hz.
    :type max_freq: float
    :param max_freq: Highest frequency in Hz.
    :type num_freqs: int
    :param num_freqs: Number of frequencies.
    :type log_spacing: bool
    :param log_spacing: Logarithmically spaced frequencies if ``True``,
        linearly spaced ones otherwise.
    :rtype: :class:`numpy.ndarray`

    >>> frequency_grid(0.0, 10.0, 3, log_spacing=False).tolist()
    [0.0, 5.0, 10.0]
    """
    num_freqs = int(num_freqs)
    if num_freqs <= 0:
        msg = "Number of frequencies has to be positive, got %d" % num_freqs
        raise ValueError(msg)
    if num_freqs == 1:
        return np.array([min_freq], dtype=np.float64)
    if log_spacing:
        if min_freq <= 0 or max_freq <= 0:
            msg = ("Logarithmic frequency spacing needs positive frequency "
                   "limits")
            raise ValueError(msg)
        return 10 ** np.linspace(np.log10(min_freq), np.log10(max_freq),
                                 num_freqs)
    return np.linspace(min_freq, max_freq, num_freqs)


def next_pow_2(n):
    """
    Smallest power of two that is strictly greater than ``n`` (at least 2).

    >>> next_pow_2(1000)
    1024
    >>> next_pow_2(1024)
    2048
    """
    result = 2
    while result <= n:
        result *= 2
    return result


def fft_frequencies(nsamp, sampling_rate):
    """
    Frequencies of the positive half of the FFT of a time series.

    :type nsamp: int
    :param nsamp: Number of samples of the time series. The FFT length is
        the next power of two greater than that.
    :type sampling_rate: float
    :param sampling_rate: Sampling rate of the time series in Hz.
    :rtype: tuple(:class:`numpy.ndarray`, float)
    :returns: The frequencies (starting at zero) and the frequency spacing.

    >>> freqs, delfrq = fft_frequencies(5, 8.0)
    >>> print(freqs.tolist(), delfrq)
    [0.0, 1.0, 2.0, 3.0, 4.0] 1.0
    """
    nfft = next_pow_2(nsamp)
    nfreq = nfft // 2 + 1
    delfrq = 1.0 / (nfft * (1.0 / sampling_rate))
    freqs = np.empty(nfreq, dtype=np.float64)
    value = 0.0
    # accumulated by repeated addition
    for i in range(nfreq):
        freqs[i] = value
        value += delfrq
    return freqs, delfrq


def transfer_function(response, nsamp, sampling_rate, output="DEF",
                      options=None):
    """
    Combined complex response of all stages on the FFT frequency grid of a
    time series, e.g. for deconvolution.

    :type response: :class:`~respeval.core.response.Response`
    :param response: The response to calculate.
    :type nsamp: int
    :param nsamp: Number of samples of the time series.
    :type sampling_rate: float
    :param sampling_rate: Sampling rate of the time series in Hz.
    :type output: str
    :param output: Output units, see
        :func:`~respeval.evalresp.calculation.calculate`.
    :rtype: tuple(:class:`numpy.ndarray`, :class:`numpy.ndarray`)
    :returns: The complex response and the frequencies.
    """
    freqs, _ = fft_frequencies(nsamp, sampling_rate)
    if options is None:
        options = CalculationOptions()
    result = calculate(response, freqs, output=output, options=options)
    return result.spectrum, result.frequencies


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
