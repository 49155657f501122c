# -*- coding: utf-8 -*-
import inspect

from respeval.core.util.decorator import raise_as
from respeval.core.util.types import CalcError, ValidationError
import pytest


class TestUtilDecorator:
    def test_raise_as(self):
        """
        Tests the @raise_as decorator
        """
        @raise_as(CalcError, "Error calculating response")
        def divide(a, b=1.0):
            return a / b

        assert divide(6.0, b=2.0) == 3.0
        with pytest.raises(CalcError) as e:
            divide(1.0, 0.0)
        assert str(e.value).startswith("Error calculating response:  ")
        assert isinstance(e.value.__cause__, ZeroDivisionError)

    def test_raise_as_passes_domain_errors(self):
        """
        Errors that already are domain errors are not wrapped again.
        """
        @raise_as(CalcError, "Error calculating response")
        def fail():
            raise ValidationError("No stages in response.")

        with pytest.raises(ValidationError, match="^No stages in response"):
            fail()

    def test_raise_as_keeps_signature(self):
        @raise_as(CalcError, "prefix")
        def func(response, frequencies, output="DEF"):
            """Docstring."""
            return output

        params = list(inspect.signature(func).parameters)
        assert params == ["response", "frequencies", "output"]
        assert func.__doc__ == "Docstring."
        assert func.__name__ == "func"
