# -*- coding: utf-8 -*-
"""
respeval.evalresp - Response evaluation engine
==============================================

This package checks, normalizes and calculates instrument responses:

* :func:`~respeval.evalresp.validation.validate` checks a
  :class:`~respeval.core.response.Response` for structural consistency,
* :func:`~respeval.evalresp.normalization.normalize` brings the stage gains
  to a common reference frequency,
* :func:`~respeval.evalresp.calculation.calculate` evaluates the complex
  response at arbitrary frequencies.

>>> from respeval.core import Response, ResponseStage, Gain
>>> from respeval.core.units import METER_PER_SECOND, VOLT
>>> from respeval.evalresp import validate, calculate
>>> stage = ResponseStage(1, "LAPLACE", gain=Gain(2000.0, 1.0),
...                       input_units=METER_PER_SECOND, output_units=VOLT)
>>> response = Response([stage])
>>> validate(response)
>>> result = calculate(response, [1.0, 2.0], output="DEF")
>>> print(result.amplitude.tolist())
[2000.0, 2000.0]

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from respeval.evalresp.options import CalculationOptions  # NOQA
from respeval.evalresp.validation import validate  # NOQA
from respeval.evalresp.normalization import (  # NOQA
    NormalizationTable, normalize)
from respeval.evalresp.calculation import (  # NOQA
    CalculationResult, StageSpectrum, calculate)
from respeval.evalresp.frequencies import (  # NOQA
    fft_frequencies, frequency_grid, next_pow_2, transfer_function)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
