# -*- coding: utf-8 -*-
"""
Decorators used in respeval.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from decorator import decorator

from respeval.core.util.types import RespEvalException


def raise_as(exception_class, prefix):
    """
    Decorator that re-raises unexpected errors of the decorated function as
    ``exception_class``, with the given message prefix.

    Exceptions derived from
    :class:`~respeval.core.util.types.RespEvalException` already carry a
    meaningful message and pass through untouched.

    :type exception_class: type
    :param exception_class: Exception class to raise.
    :type prefix: str
    :param prefix: Prefix of the new error message, the original error is
        appended after a colon.

    >>> from respeval.core.util.types import CalcError
    >>> @raise_as(CalcError, "Error calculating response")
    ... def f():
    ...     return 1 / 0
    >>> f()  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    respeval.core.util.types.CalcError: Error calculating response:  ...
    """
    @decorator
    def _raise_as(func, *args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RespEvalException:
            raise
        except (ArithmeticError, ValueError, TypeError, IndexError,
                AttributeError) as e:
            msg = "%s:  %s" % (prefix, e)
            raise exception_class(msg) from e
    return _raise_as
