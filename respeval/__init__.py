# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
#  Purpose: Convenience imports for respeval
# -----------------------------------------------------------------------------
"""
respeval: Evaluation of seismic instrument responses
====================================================

respeval computes the complex frequency response of an instrument described
as a cascade of stages (poles and zeros, FIR/IIR coefficients, response
lists and polynomials), reproducing the numerical behavior of evalresp.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
# don't change order
from respeval.core.util import _get_version_string
__version__ = _get_version_string(abbrev=10)
from respeval.core import (  # NOQA
    Response, ResponseStage, InstrumentSensitivity, Unit)
from respeval.core.util.types import (  # NOQA
    RespEvalException, ValidationError, NormalizationError, CalcError)
from respeval.evalresp import (  # NOQA
    validate, normalize, calculate, CalculationOptions)


__all__ = ["__version__", "Response", "ResponseStage",
           "InstrumentSensitivity", "Unit", "RespEvalException",
           "ValidationError", "NormalizationError", "CalcError", "validate",
           "normalize", "calculate", "CalculationOptions"]


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
