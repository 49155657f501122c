# -*- coding: utf-8 -*-
"""
respeval.core - Data model of respeval
======================================

The :class:`~respeval.core.response.Response` object holds an ordered list
of :class:`~respeval.core.response.ResponseStage` objects. Each stage carries
at most one filter, an optional gain, decimation and normalization, and the
resolved physical units (:class:`~respeval.core.units.Unit`) of its input
and output.

>>> from respeval.core import (Response, ResponseStage, PolesZerosFilter,
...                            Gain, Normalization)
>>> from respeval.core.units import METER_PER_SECOND, VOLT
>>> stage = ResponseStage(1, "LAPLACE (RADIANS/SECOND)",
...                       filter=PolesZerosFilter(poles=[-1 + 0j]),
...                       gain=Gain(1.0, 1.0),
...                       normalization=Normalization(1.0, 1.0),
...                       input_units=METER_PER_SECOND, output_units=VOLT)
>>> print(stage.transfer_function_type)
LAPLACE

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from respeval.core.response import (  # NOQA
    ANALOG, COMPOSITE, DIGITAL, LAPLACE, CoefficientsFilter, Decimation,
    Gain, InstrumentSensitivity, Normalization, PolesZerosFilter,
    PolynomialFilter, Response, ResponseListFilter, ResponseStage)
from respeval.core.units import Unit  # NOQA


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
