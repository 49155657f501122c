# -*- coding: utf-8 -*-
"""
Structural checks of a response before it is evaluated.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging

from respeval.core.response import (ANALOG, DIGITAL, LAPLACE,
                                    CoefficientsFilter, PolesZerosFilter,
                                    PolynomialFilter, ResponseListFilter)
from respeval.core.util.types import ValidationError


logger = logging.getLogger('respeval.evalresp.validation')

LIST_FREQUENCY_UNITS = (None, "HZ", "HERTZ")
LIST_PHASE_UNITS = (None, "DEGREES", "DEGREE", "RADIANS", "RADIAN")


def validate(response, skip_units=False):
    """
    Check a response for consistency.

    For a response to be valid:

    * it has to have at least one stage,
    * input units of each stage have to match the output units of the
      previous stage (not checked after a polynomial stage),
    * each stage needs a filter or a valid gain,
    * poles and zeros filters need a normalization,
    * digital poles and zeros and coefficient filters need a decimation,
    * a response list has to be the only stage and must not have a
      normalization,
    * in multi-stage responses every stage needs a valid gain, a single
      stage response needs a valid stage gain or overall sensitivity.

    :type response: :class:`~respeval.core.response.Response`
    :param response: The response to check.
    :type skip_units: bool
    :param skip_units: Do not check the units of consecutive stages.
    :raises: :class:`~respeval.core.util.types.ValidationError` describing
        the first problem found.
    """
    stages = response.response_stages
    num_stages = len(stages)
    if num_stages <= 0:
        raise ValidationError("No stages in response.")

    polynomial_seen = False
    previous_units = None
    for i, stage in enumerate(stages):
        number = i + 1
        if stage is None:
            msg = "No data entered for stage #%d (out of %d stages)" % (
                number, num_stages)
            raise ValidationError(msg)
        if stage.transfer_function_type is None:
            raise ValidationError("No transfer type for stage #%d" % number)

        if not skip_units and not polynomial_seen:
            if stage.input_units is None:
                raise ValidationError("No input units for stage #%d" % number)
            if stage.output_units is None:
                msg = "No output units for stage #%d" % number
                raise ValidationError(msg)
            if previous_units is not None and \
                    stage.input_units != previous_units:
                msg = ("Input units (%s) for stage #%d do not match output "
                       "units (%s) of previous stage") % (
                           stage.input_units, number, previous_units)
                raise ValidationError(msg)
            previous_units = stage.output_units

        filt = stage.filter
        if filt is None:
            if not stage.has_valid_gain():
                raise ValidationError("No filters in stage #%d" % number)
            continue

        if isinstance(filt, PolynomialFilter):
            polynomial_seen = True
        elif num_stages > 1 and not stage.has_valid_gain():
            msg = "No gain value for stage #%d of multi-stage response" % \
                number
            raise ValidationError(msg)

        needs_decimation = False
        if isinstance(filt, PolesZerosFilter):
            if stage.normalization is None:
                msg = ("No normalization for poles/zeros filter in stage "
                       "#%d") % number
                raise ValidationError(msg)
            if stage.transfer_function_type == DIGITAL:
                needs_decimation = True
            elif stage.transfer_function_type not in (LAPLACE, ANALOG):
                msg = ("Invalid transfer type for poles/zeros filter in "
                       "stage #%d") % number
                raise ValidationError(msg)
        elif isinstance(filt, CoefficientsFilter):
            if stage.transfer_function_type != DIGITAL:
                msg = ("Invalid transfer type for coefficients filter in "
                       "stage #%d") % number
                raise ValidationError(msg)
            needs_decimation = True
        elif isinstance(filt, ResponseListFilter):
            _validate_response_list(stage, number, num_stages)

        if needs_decimation and stage.decimation is None:
            msg = "Required decimation not found in stage #%d" % number
            raise ValidationError(msg)

    if num_stages == 1 and not polynomial_seen and \
            not response.has_valid_sensitivity() and \
            not stages[0].has_valid_gain():
        msg = "No 'stage 0' response sensitivity or gain value for single " \
              "stage"
        raise ValidationError(msg)
    logger.debug("Response with %d stage(s) is valid", num_stages)


def _validate_response_list(stage, number, num_stages):
    filt = stage.filter
    if number > 1 or num_stages > 1:
        msg = "Other stages not allowed with Response List in stage #%d" % \
            number
        raise ValidationError(msg)
    if stage.normalization is not None:
        msg = ("Normalization not allowed with Response List in stage "
               "#%d") % number
        raise ValidationError(msg)
    if filt.frequency_unit not in LIST_FREQUENCY_UNITS:
        msg = ("Freq units (\"%s\") not 'Hertz' ('Sec^-1') in Response "
               "List in stage #%d") % (filt.frequency_unit, number)
        raise ValidationError(msg)
    if filt.phase_unit not in LIST_PHASE_UNITS:
        msg = ("Phase units (\"%s\") not 'Degrees' or 'Radians' in "
               "Response List in stage #%d") % (filt.phase_unit, number)
        raise ValidationError(msg)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
