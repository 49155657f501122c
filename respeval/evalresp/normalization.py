# -*- coding: utf-8 -*-
"""
Normalization of stage gains to a common reference frequency.

The gains of the stages of a response are not necessarily given at the same
frequency. Before the response can be calculated, each filter stage is
evaluated at its gain frequency and at the reference frequency and the gain
is scaled accordingly. The results are collected in a
:class:`NormalizationTable`, the response itself is never modified.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging

import numpy as np

from respeval.core.response import (ANALOG, DIGITAL, LAPLACE,
                                    CoefficientsFilter, InstrumentSensitivity,
                                    PolesZerosFilter, PolynomialFilter)
from respeval.core.util.base import TWO_PI, is_zero, resolve_stage_range
from respeval.core.util.decorator import raise_as
from respeval.core.util.types import NormalizationError
from respeval.signal.transfer import (FIR_ASYM, analog_trans, fir_symmetry,
                                      fir_trans, iir_pz_trans, iir_trans,
                                      normalize_fir_coefficients)


logger = logging.getLogger('respeval.evalresp.normalization')


class NormalizationTable(object):
    """
    Result of :func:`normalize`.

    :ivar sensitivities: Array of length ``N + 1`` holding the combined
        sensitivity at index 0 and the normalized gain of stage ``n`` at
        index ``n``. Stages outside of the selected range keep ``1.0``.
    :ivar frequency: Reference frequency in Hz.
    :ivar start: 0-based index of the first stage used.
    :ivar stop: 0-based index of the last stage used.
    :ivar normalization_factors: Mapping of 0-based stage index to
        ``(factor, frequency)`` of rescaled filter normalizations.
    :ivar fir_coefficients: Mapping of 0-based stage index to the
        renormalized coefficients of asymmetric FIR filters.
    :ivar overall_sensitivity: Synthesized
        :class:`~respeval.core.response.InstrumentSensitivity` of a single
        stage response, or ``None``.
    :ivar first_unit: Input units of the first stage used.
    :ivar last_unit: Output units of the last stage used.
    :ivar notes: List of non-fatal diagnostic messages.
    """
    def __init__(self, num_stages, frequency, start, stop):
        self.sensitivities = np.ones(num_stages + 1, dtype=np.float64)
        self.frequency = frequency
        self.start = start
        self.stop = stop
        self.normalization_factors = {}
        self.fir_coefficients = {}
        self.overall_sensitivity = None
        self.first_unit = None
        self.last_unit = None
        self.notes = []

    def __str__(self):
        return ("Normalization at %g Hz of stages %d to %d, "
                "calculated sensitivity: %g") % (
                    self.frequency, self.start + 1, self.stop + 1,
                    self.calculated_sensitivity)

    @property
    def calculated_sensitivity(self):
        return self.sensitivities[0]

    def get_normalization(self, index, stage):
        """
        ``(factor, frequency)`` of the normalization of the stage with the
        given 0-based index. A rescaled normalization takes precedence over
        the one of the stage, ``None`` is returned if there is neither.
        """
        if index in self.normalization_factors:
            return self.normalization_factors[index]
        if stage is not None and stage.normalization is not None:
            return (stage.normalization.factor,
                    stage.normalization.frequency)
        return None


def get_reference_frequency(response):
    """
    Frequency all gains are normalized to.

    This is the frequency of the overall sensitivity if that is valid,
    otherwise the frequency of the last valid stage gain with a nonzero
    frequency, otherwise ``0``.
    """
    if response.has_valid_sensitivity():
        return response.instrument_sensitivity.frequency
    frequency = 0.0
    for stage in response.response_stages:
        if stage is not None and stage.has_valid_gain() and \
                not is_zero(stage.gain.frequency):
            frequency = stage.gain.frequency
    return frequency


@raise_as(NormalizationError, "Error normalizing response")
def normalize(response, start_stage=0, stop_stage=0):
    """
    Normalize the stage gains of a response to a common frequency.

    :type response: :class:`~respeval.core.response.Response`
    :param response: The response to normalize.
    :type start_stage: int
    :param start_stage: 1-based number of the first stage to use, ``0`` for
        the first stage.
    :type stop_stage: int
    :param stop_stage: 1-based number of the last stage to use, ``0`` for
        the last stage.
    :rtype: :class:`NormalizationTable`
    :raises: :class:`~respeval.core.util.types.NormalizationError`

    >>> from respeval.core import Response, ResponseStage, Gain
    >>> from respeval.core.units import METER_PER_SECOND, VOLT
    >>> stage = ResponseStage(1, "LAPLACE", gain=Gain(2000.0, 1.0),
    ...                       input_units=METER_PER_SECOND, output_units=VOLT)
    >>> table = normalize(Response([stage]))
    >>> print(table.calculated_sensitivity, table.frequency)
    2000.0 1.0
    """
    stages = response.response_stages
    num_stages = len(stages)
    ref_freq = get_reference_frequency(response)
    stage_range = resolve_stage_range(num_stages, start_stage, stop_stage)
    if stage_range is None:
        msg = "No match for requested range of stage numbers"
        raise NormalizationError(msg)
    start, stop = stage_range
    logger.debug("Normalizing stages %d to %d at %g Hz", start + 1, stop + 1,
                 ref_freq)

    table = NormalizationTable(num_stages, ref_freq, start, stop)
    table.first_unit = stages[start].input_units
    table.last_unit = stages[stop].output_units

    for idx in range(start, stop + 1):
        stage = stages[idx]
        sensitivity = _normalize_stage(response, stage, idx, ref_freq, table)
        logger.debug("Stage #%d normalized gain: %g", idx + 1, sensitivity)
        table.sensitivities[idx + 1] = sensitivity
        table.sensitivities[0] *= sensitivity

    if num_stages == 1 and start < 1:
        table.overall_sensitivity = InstrumentSensitivity(
            table.sensitivities[0], ref_freq,
            input_units=table.first_unit, output_units=table.last_unit)
    return table


def _normalize_stage(response, stage, idx, ref_freq, table):
    number = idx + 1
    num_stages = len(response.response_stages)
    filt = stage.filter
    is_polynomial = isinstance(filt, PolynomialFilter)

    if stage.has_valid_gain():
        gain_value = float(stage.gain.value)
        gain_freq = stage.gain.frequency
    else:
        if not is_polynomial:
            if num_stages > 1:
                msg = ("No gain value for stage #%d of multi-stage "
                       "response") % number
                raise NormalizationError(msg)
            if not response.has_valid_sensitivity():
                msg = ("No 'stage 0' response sensitivity or gain value "
                       "for single stage")
                raise NormalizationError(msg)
        if response.has_valid_sensitivity():
            sensitivity = response.instrument_sensitivity
            gain_value = float(sensitivity.value)
            gain_freq = sensitivity.frequency
        else:
            gain_value = None
            gain_freq = ref_freq

    if filt is None:
        return gain_value
    if is_polynomial:
        return 1.0

    normalization = stage.normalization
    if isinstance(filt, PolesZerosFilter) and normalization is None:
        msg = "No normalization for poles/zeros filter in stage #%d" % number
        raise NormalizationError(msg)

    if gain_freq == ref_freq and (normalization is None or
                                  normalization.frequency == ref_freq):
        return gain_value

    df, of = _evaluate_at(stage, idx, gain_freq, ref_freq, table)
    if df is None or of is None:
        return gain_value
    of = abs(of)
    new_gain = gain_value / abs(df) * of
    table.normalization_factors[idx] = (1.0 / of, ref_freq)
    return new_gain


def _require_decimation(stage, number):
    decimation = stage.decimation
    if decimation is None:
        msg = "Required decimation not found in stage #%d" % number
        raise NormalizationError(msg)
    if not decimation.is_valid():
        msg = "Invalid decimation object in stage #%d" % number
        raise NormalizationError(msg)
    return decimation.sample_interval


def _evaluate_at(stage, idx, gain_freq, ref_freq, table):
    """
    Evaluate the filter of a stage with unit normalization at the gain
    frequency and at the reference frequency.

    Returns ``(None, None)`` for filters that can not be evaluated.
    """
    number = idx + 1
    filt = stage.filter
    tf_type = stage.transfer_function_type
    w_gain = TWO_PI * gain_freq
    w_ref = TWO_PI * ref_freq

    if isinstance(filt, PolesZerosFilter):
        if tf_type in (LAPLACE, ANALOG):
            if tf_type == LAPLACE:
                df = analog_trans(filt.zeros, filt.poles, 1.0, w_gain)
                of = analog_trans(filt.zeros, filt.poles, 1.0, w_ref)
            else:
                df = analog_trans(filt.zeros, filt.poles, 1.0, gain_freq)
                of = analog_trans(filt.zeros, filt.poles, 1.0, ref_freq)
            df = complex(df)
            of = complex(of)
            if is_zero(df) or is_zero(of):
                msg = ("Zero frequency in bandpass analog filter in stage "
                       "#%d") % number
                raise NormalizationError(msg)
            return df, of
        if tf_type == DIGITAL:
            sint = _require_decimation(stage, number)
            df = iir_pz_trans(filt.zeros, filt.poles, 1.0, sint, w_gain)
            of = iir_pz_trans(filt.zeros, filt.poles, 1.0, sint, w_ref)
            return complex(df), complex(of)
        msg = "Invalid transfer type for poles/zeros filter in stage #%d" % \
            number
        raise NormalizationError(msg)

    if isinstance(filt, CoefficientsFilter):
        if tf_type != DIGITAL:
            msg = ("Invalid transfer type for coefficients filter in stage "
                   "#%d") % number
            raise NormalizationError(msg)
        sint = _require_decimation(stage, number)
        if filt.is_fir:
            numerator = filt.numerator
            if not numerator:
                return None, None
            symmetry = fir_symmetry(numerator)
            if symmetry == FIR_ASYM:
                coefficients, total = normalize_fir_coefficients(numerator)
                if coefficients is not numerator:
                    note = ("WARNING:  FIR blockette normalized, "
                            "sum[coef]=%E (stage #%d)") % (total, number)
                    table.notes.append(note)
                    logger.info(note)
                    table.fir_coefficients[idx] = coefficients
                    numerator = coefficients
            df = fir_trans(numerator, 1.0, sint, w_gain, symmetry)
            of = fir_trans(numerator, 1.0, sint, w_ref, symmetry)
            return complex(df), complex(of)
        df = iir_trans(filt.numerator, filt.denominator, 1.0, sint, w_gain)
        of = iir_trans(filt.numerator, filt.denominator, 1.0, sint, w_ref)
        return complex(df), complex(of)

    # response lists are taken as they are
    return None, None


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
