# -*- coding: utf-8 -*-
from respeval.core.util import (CalcError, ComplexWithUncertainties,
                                FilterCoefficient, FloatWithUncertainties,
                                NormalizationError, RespEvalException,
                                ValidationError)


class TestUtilTypes:
    """
    Test suite for respeval.core.util.types
    """
    def test_float_with_uncertainties(self):
        f = FloatWithUncertainties(2.5, lower_uncertainty=0.1,
                                   upper_uncertainty=0.2)
        assert f == 2.5
        assert f.lower_uncertainty == 0.1
        assert f.upper_uncertainty == 0.2
        # uncertainties are taken over from another instance
        g = FloatWithUncertainties(f)
        assert g == 2.5
        assert g.lower_uncertainty == 0.1
        assert g.upper_uncertainty == 0.2
        h = FloatWithUncertainties(3)
        assert h.lower_uncertainty is None
        assert h.upper_uncertainty is None

    def test_complex_with_uncertainties(self):
        c = ComplexWithUncertainties(1.0, -2.0)
        assert c == complex(1.0, -2.0)
        assert c.lower_uncertainty is None
        c = ComplexWithUncertainties(-1 + 1j, lower_uncertainty=0.1 + 0.1j,
                                     upper_uncertainty=0.2 + 0.2j)
        assert c.real == -1.0
        assert c.imag == 1.0
        assert c.lower_uncertainty == 0.1 + 0.1j
        assert c.upper_uncertainty == 0.2 + 0.2j
        d = ComplexWithUncertainties(c)
        assert d == c
        assert d.lower_uncertainty == 0.1 + 0.1j
        assert d.upper_uncertainty == 0.2 + 0.2j

    def test_filter_coefficient(self):
        c = FilterCoefficient(0.5)
        assert c == 0.5
        assert c.error == 0.0
        c = FilterCoefficient(0.5, error=1e-3)
        assert c.error == 1e-3
        # error is taken over from another coefficient
        assert FilterCoefficient(c).error == 1e-3
        assert repr(c) == "FilterCoefficient(0.5, error=0.001)"
        assert c + 1.0 == 1.5

    def test_exception_hierarchy(self):
        for cls in (ValidationError, NormalizationError, CalcError):
            assert issubclass(cls, RespEvalException)
            assert issubclass(cls, Exception)
