# -*- coding: utf-8 -*-
"""
Various types used in respeval.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""


class CustomComplex(complex):
    """
    Helper class to inherit from and which stores a complex number that is
    extendable.
    """
    def __new__(cls, *args):
        return super(CustomComplex, cls).__new__(cls, *args)

    def __init__(self, *args):
        pass


class CustomFloat(float):
    """
    Helper class to inherit from and which stores a float number that is
    extendable.
    """
    def __new__(cls, *args):
        return super(CustomFloat, cls).__new__(cls, *args)

    def __init__(self, *args):
        pass


class FloatWithUncertainties(CustomFloat):
    """
    Helper class to inherit from and which stores a float with
    upper/lower uncertainties.
    """
    def __new__(cls, value, **kwargs):
        return super(FloatWithUncertainties, cls).__new__(cls, value)

    def __init__(self, value, lower_uncertainty=None, upper_uncertainty=None):
        # set uncertainties, if initialized with similar type
        if isinstance(value, FloatWithUncertainties):
            if lower_uncertainty is None:
                lower_uncertainty = value.lower_uncertainty
            if upper_uncertainty is None:
                upper_uncertainty = value.upper_uncertainty
        self.lower_uncertainty = lower_uncertainty
        self.upper_uncertainty = upper_uncertainty


class FilterCoefficient(CustomFloat):
    """
    A filter or polynomial coefficient together with its error.

    Two coefficients are only considered symmetric counterparts in a FIR
    filter if both value and error match, so the error is kept alongside
    the value.

    >>> c = FilterCoefficient(0.25, error=1e-6)
    >>> print(c, c.error)
    0.25 1e-06
    """
    def __new__(cls, value, **kwargs):
        return super(FilterCoefficient, cls).__new__(cls, value)

    def __init__(self, value, error=None):
        if error is None:
            error = value.error if isinstance(value, FilterCoefficient) \
                else 0.0
        self.error = float(error)

    def __repr__(self):
        return "FilterCoefficient(%r, error=%r)" % (float(self), self.error)


class ComplexWithUncertainties(CustomComplex):
    """
    Complex class which can also store uncertainties for real and imaginary
    part.
    """
    lower_uncertainty = None
    upper_uncertainty = None

    def __new__(cls, *args, **kwargs):
        return super(ComplexWithUncertainties, cls).__new__(cls, *args)

    def __init__(self, *args, **kwargs):
        upper_uncertainty = kwargs.pop("upper_uncertainty", None)
        lower_uncertainty = kwargs.pop("lower_uncertainty", None)
        super(ComplexWithUncertainties, self).__init__(*args)
        if lower_uncertainty is None and \
                isinstance(args[0], ComplexWithUncertainties):
            lower_uncertainty = args[0].lower_uncertainty
        if upper_uncertainty is None and \
                isinstance(args[0], ComplexWithUncertainties):
            upper_uncertainty = args[0].upper_uncertainty
        if lower_uncertainty is not None:
            self.lower_uncertainty = complex(lower_uncertainty)
        if upper_uncertainty is not None:
            self.upper_uncertainty = complex(upper_uncertainty)


class RespEvalException(Exception):
    pass


class ValidationError(RespEvalException):
    """
    Raised if a response fails the structural checks done before any
    numerical evaluation.
    """
    pass


class NormalizationError(RespEvalException):
    """
    Raised if gains and normalization factors of a response can not be
    brought to a common reference frequency.
    """
    pass


class CalcError(RespEvalException):
    """
    Raised if a frequency response can not be computed.
    """
    pass
