# -*- coding: utf-8 -*-
"""
Various utilities for respeval

.. note:: Please import all utilities within your custom applications from this
    module rather than from any sub module, e.g.

    >>> from respeval.core.util import AttribDict  # good

    instead of

    >>> from respeval.core.util.attribdict import AttribDict  # bad

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from respeval.core.util.attribdict import AttribDict
from respeval.core.util.base import (SMALL_FLOAT_VAL, TWO_PI,
                                     ComparingObject, is_negative_one,
                                     is_zero, resolve_stage_range)
from respeval.core.util.decorator import raise_as
from respeval.core.util.types import (CalcError, ComplexWithUncertainties,
                                      FilterCoefficient,
                                      FloatWithUncertainties,
                                      NormalizationError, RespEvalException,
                                      ValidationError)
from respeval.core.util.version import get_git_version as _get_version_string
