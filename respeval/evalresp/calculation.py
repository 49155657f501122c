# -*- coding: utf-8 -*-
"""
Calculation of the complex frequency response of a response.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging
from math import pi

import numpy as np

from respeval.core.response import (ANALOG, COMPOSITE, DIGITAL, LAPLACE,
                                    CoefficientsFilter, PolesZerosFilter,
                                    PolynomialFilter, ResponseListFilter)
from respeval.core.units import (DEFAULT_UNIT_CONV, NON_MOTION_CATEGORIES,
                                 VELOCITY_UNIT_CONV, get_unit_conversion,
                                 get_unit_conversion_string)
from respeval.core.util.base import TWO_PI, resolve_stage_range
from respeval.core.util.decorator import raise_as
from respeval.core.util.types import CalcError
from respeval.evalresp.normalization import normalize
from respeval.evalresp.options import CalculationOptions
from respeval.signal.interpolation import calc_spline
from respeval.signal.phase import (clip_frequencies, convert_units,
                                   unwrap_phase, wrap_phase)
from respeval.signal.transfer import (FIR_ASYM, analog_trans, delay_rotation,
                                      fir_symmetry, fir_trans, iir_pz_trans,
                                      iir_trans, polynomial_trans,
                                      response_list_trans)


logger = logging.getLogger('respeval.evalresp.calculation')

# added to the real part to keep atan2 away from (0, 0)
PHASE_EPSILON = 1e-200

_PZ_LABELS = {LAPLACE: "LAPLACE", ANALOG: "ANALOG", COMPOSITE: "COMPOSITE",
              DIGITAL: "IIR_PZ"}


def get_stage_type_label(stage):
    """
    Short type description of a stage as used in the stage labels.

    >>> from respeval.core import ResponseStage, CoefficientsFilter
    >>> stage = ResponseStage(
    ...     3, "DIGITAL", filter=CoefficientsFilter(numerator=[0.5, 0.5]))
    >>> get_stage_type_label(stage)
    'FIR_SYM2'
    """
    filt = stage.filter
    tf_type = stage.transfer_function_type
    if isinstance(filt, PolesZerosFilter):
        return _PZ_LABELS.get(tf_type, "")
    if isinstance(filt, CoefficientsFilter):
        if tf_type == DIGITAL:
            if not filt.is_fir:
                return "IIR_COEFFS"
            return fir_symmetry(filt.numerator)
        if tf_type in (LAPLACE, ANALOG):
            return "ANALOG"
        if tf_type == COMPOSITE:
            return "COMPOSITE"
        return ""
    if isinstance(filt, ResponseListFilter):
        return "LIST"
    return ""


def _stage_label(number, stage):
    type_label = get_stage_type_label(stage)
    if type_label:
        return "Stg %d %s" % (number, type_label)
    return "Stg %d" % number


class StageSpectrum(object):
    """
    Complex response of a single stage or of the combined stages.

    Amplitude and phase (in degrees) are derived on first access. If the
    amplitude/phase output is interpolated onto the requested frequencies,
    :attr:`amp_phase_frequencies` holds the matching frequencies while
    :attr:`frequencies` always matches :attr:`spectrum`.
    """
    def __init__(self, label, frequencies, spectrum, stage_number=None,
                 amp_phase_func=None):
        self.label = label
        self.frequencies = frequencies
        self.spectrum = spectrum
        self.stage_number = stage_number
        self._amp_phase_func = amp_phase_func
        self._amp_phase = None

    def __str__(self):
        return "%s: %d frequencies" % (self.label, len(self.frequencies))

    def _get_amp_phase(self):
        if self._amp_phase is None:
            if self._amp_phase_func is None:
                self._amp_phase = _amplitude_and_phase(self.frequencies,
                                                       self.spectrum)
            else:
                self._amp_phase = self._amp_phase_func(self)
        return self._amp_phase

    @property
    def amp_phase_frequencies(self):
        return self._get_amp_phase()[0]

    @property
    def amplitude(self):
        return self._get_amp_phase()[1]

    @property
    def phase(self):
        return self._get_amp_phase()[2]


def _amplitude_and_phase(frequencies, spectrum):
    amplitude = np.sqrt(spectrum.real * spectrum.real +
                        spectrum.imag * spectrum.imag)
    phase = np.arctan2(spectrum.imag, spectrum.real + PHASE_EPSILON) * \
        180.0 / pi
    return frequencies, amplitude, phase


class CalculationResult(object):
    """
    Result of :func:`calculate`.

    The combined response of all calculated stages is available through
    :attr:`spectrum`, :attr:`frequencies`, :attr:`amplitude` and
    :attr:`phase`, the responses of the individual stages through
    :attr:`stages` and :meth:`get_stage`.
    """
    def __init__(self, response, requested_frequencies, output, options,
                 normalization, start, stop):
        self.response = response
        self.requested_frequencies = requested_frequencies
        self.output = output
        self.options = options
        self.normalization = normalization
        self.start = start
        self.stop = stop
        self.num_calculated_stages = stop - start + 1
        self.combined = None
        self.stages = []
        self.list_stage = False
        self.notes = list(normalization.notes)
        self._compute_summary()

    def __str__(self):
        return ("Response of stages %d to %d at %d frequencies, "
                "output units: %s") % (
                    self.start + 1, self.stop + 1, len(self.frequencies),
                    get_unit_conversion_string(self.output, long=True))

    def _repr_pretty_(self, p, cycle):
        p.text(str(self))

    @property
    def spectrum(self):
        return self.combined.spectrum

    @property
    def frequencies(self):
        return self.combined.frequencies

    @property
    def amplitude(self):
        return self.combined.amplitude

    @property
    def phase(self):
        return self.combined.phase

    @property
    def sensitivities(self):
        """
        Normalized sensitivities, the combined one at index 0 and the one of
        stage ``n`` at index ``n``.
        """
        return self.normalization.sensitivities

    @property
    def calculated_sensitivity(self):
        return self.normalization.calculated_sensitivity

    @property
    def sensitivity_frequency(self):
        return self.normalization.frequency

    @property
    def first_unit(self):
        return self.normalization.first_unit

    @property
    def last_unit(self):
        return self.normalization.last_unit

    @property
    def total_sensitivity(self):
        return self.options.total_sensitivity

    @property
    def unwrap_phase(self):
        return self.options.unwrap_phase

    @property
    def list_interp_in(self):
        return self.options.list_interp_in

    @property
    def list_interp_out(self):
        return self.options.list_interp_out

    def get_stage(self, number):
        """
        Response of the stage with the given 1-based stage number.

        :raises: :class:`IndexError` if the stage was not calculated.
        """
        for entry in self.stages:
            if entry.stage_number == number:
                return entry
        msg = "Stage #%d was not calculated (calculated stages: %d to %d)" % (
            number, self.start + 1, self.stop + 1)
        raise IndexError(msg)

    def _compute_summary(self):
        self.sample_interval = 0.0
        self.estimated_delay = 0.0
        self.correction_applied = 0.0
        self.calculated_delay = 0.0
        for stage in self.response.response_stages:
            decimation = stage.decimation
            if decimation is None:
                continue
            stage_sint = decimation.sample_interval or 0.0
            if decimation.is_valid():
                self.sample_interval = stage_sint * decimation.factor
            if decimation.delay is not None:
                self.estimated_delay += decimation.delay
            if decimation.correction is not None:
                self.correction_applied += decimation.correction
            filt = stage.filter
            if isinstance(filt, CoefficientsFilter) and filt.is_fir and \
                    filt.numerator:
                self.calculated_delay += \
                    (len(filt.numerator) - 1) / 2.0 * stage_sint

    @property
    def response_sensitivity_factor(self):
        sensitivity = self._get_overall_sensitivity()
        return sensitivity.value if sensitivity is not None else None

    @property
    def response_sensitivity_frequency(self):
        sensitivity = self._get_overall_sensitivity()
        return sensitivity.frequency if sensitivity is not None else None

    def _get_overall_sensitivity(self):
        if self.normalization.overall_sensitivity is not None:
            return self.normalization.overall_sensitivity
        return self.response.instrument_sensitivity

    def _get_first_stage_normalization(self):
        stages = self.response.response_stages
        stage = stages[0] if stages else None
        return self.normalization.get_normalization(0, stage)

    @property
    def first_stage_normalization_factor(self):
        normalization = self._get_first_stage_normalization()
        return normalization[0] if normalization is not None else None

    @property
    def first_stage_normalization_frequency(self):
        normalization = self._get_first_stage_normalization()
        return normalization[1] if normalization is not None else None

    def any_amplitudes_not_positive(self):
        """
        Check if any amplitude of the combined response is zero or negative.
        """
        return bool(np.any(self.amplitude <= 0.0))

    def all_stages_any_amplitudes_not_positive(self):
        """
        Check if any amplitude of the combined response or of any of the
        stage responses is zero or negative.
        """
        for entry in [self.combined] + self.stages:
            if np.any(entry.amplitude <= 0.0):
                return True
        return False

    def _interpolated_amp_phase(self, entry):
        """
        Amplitude and phase of an entry, interpolated onto the requested
        frequencies if ``list_interp_out`` is set.
        """
        options = self.options
        frequencies, amplitude, phase = _amplitude_and_phase(
            entry.frequencies, entry.spectrum)
        if options.list_interp_out:
            notes = self.notes if entry is self.combined else None
            clipped = clip_frequencies(self.requested_frequencies,
                                       frequencies, notes)
            if len(clipped) == 0:
                msg = ("Error interpolating amp/phase output values:  All "
                       "requested freqencies out of range")
                raise CalcError(msg)
            tension = options.list_interp_tension
            try:
                amplitude = calc_spline(frequencies, amplitude, tension, 1.0,
                                        clipped)
            except ValueError as e:
                msg = "Error interpolating amplitude output values:  %s" % e
                raise CalcError(msg)
            unwrapped = unwrap_phase(phase)
            try:
                new_phase = calc_spline(frequencies, unwrapped, tension, 1.0,
                                        clipped)
            except ValueError as e:
                msg = "Error interpolating phase output values:  %s" % e
                raise CalcError(msg)
            if not options.unwrap_phase and unwrapped is not phase:
                new_phase = wrap_phase(new_phase)
            return clipped, amplitude, new_phase
        if options.unwrap_phase:
            phase = unwrap_phase(phase, True)
        return frequencies, amplitude, phase


def _require_decimation(stage, number):
    decimation = stage.decimation
    if decimation is None:
        msg = "Required decimation not found in stage #%d" % number
        raise CalcError(msg)
    if not decimation.is_valid():
        msg = "Invalid decimation object in stage #%d" % number
        raise CalcError(msg)
    return decimation.sample_interval


def _get_phase_conversion(filt):
    if filt.phase_unit in (None, "DEGREES", "DEGREE"):
        return pi / 180.0
    if filt.phase_unit in ("RADIANS", "RADIAN"):
        return 1.0
    msg = "Invalid phase units type (\"%s\") in Response List stage" % \
        filt.phase_unit
    raise CalcError(msg)


def _interpolate_response_list(requested, frequencies, amplitude, phase,
                               tension, notes):
    clipped = clip_frequencies(requested, frequencies, notes)
    if len(clipped) == 0:
        msg = ("Error interpolating values in Response List stage:  All "
               "requested freqencies out of range")
        raise CalcError(msg)
    try:
        amplitude = calc_spline(frequencies, amplitude, tension, 1.0, clipped)
    except ValueError as e:
        msg = ("Error interpolating amplitude values in Response List "
               "stage:  %s") % e
        raise CalcError(msg)
    unwrapped = unwrap_phase(phase)
    try:
        new_phase = calc_spline(frequencies, unwrapped, tension, 1.0, clipped)
    except ValueError as e:
        msg = "Error interpolating phase values in Response List stage:  %s" \
            % e
        raise CalcError(msg)
    if unwrapped is not phase:
        new_phase = wrap_phase(new_phase)
    return clipped, amplitude, new_phase


def _evaluate_stage(stage, idx, freqs, w, table, options, list_values):
    """
    Complex response of a single stage without its gain.
    """
    number = idx + 1
    filt = stage.filter
    tf_type = stage.transfer_function_type
    values = np.ones(w.shape, dtype=np.complex128)
    if filt is None:
        return values
    normalization = table.get_normalization(idx, stage)
    norm_fact = normalization[0] if normalization is not None else 1.0

    if isinstance(filt, PolesZerosFilter):
        if tf_type == LAPLACE:
            values *= analog_trans(filt.zeros, filt.poles, norm_fact, w)
        elif tf_type == ANALOG:
            values *= analog_trans(filt.zeros, filt.poles, norm_fact, freqs)
        elif tf_type == DIGITAL:
            if filt.zeros or filt.poles:
                sint = _require_decimation(stage, number)
                values *= iir_pz_trans(filt.zeros, filt.poles, norm_fact,
                                       sint, w)
        else:
            msg = ("Invalid transfer type for poles/zeros filter in stage "
                   "#%d") % number
            raise CalcError(msg)
    elif isinstance(filt, CoefficientsFilter):
        if tf_type != DIGITAL:
            msg = ("Invalid transfer type for coefficients filter in stage "
                   "#%d") % number
            raise CalcError(msg)
        sint = _require_decimation(stage, number)
        if filt.is_fir:
            numerator = filt.numerator
            if numerator:
                symmetry = fir_symmetry(numerator)
                coefficients = table.fir_coefficients.get(idx, numerator)
                values *= fir_trans(coefficients, norm_fact, sint, w,
                                    symmetry)
                if symmetry == FIR_ASYM:
                    decimation = stage.decimation
                    if options.use_estimated_delay:
                        if decimation.delay is not None:
                            values *= delay_rotation(w, decimation.delay)
                    elif decimation.correction is not None:
                        delay = decimation.correction - \
                            (len(numerator) - 1) / 2.0 * sint
                        values *= delay_rotation(w, delay)
        elif filt.numerator:
            values *= iir_trans(filt.numerator, filt.denominator, norm_fact,
                                sint, w)
    elif isinstance(filt, ResponseListFilter):
        amplitude, phase, phase_conversion = list_values
        values *= response_list_trans(amplitude, phase, phase_conversion)
    elif isinstance(filt, PolynomialFilter):
        if options.b62_x <= 0:
            msg = "Valid 'b62_x' value must be specified for polynomial " \
                  "response"
            raise CalcError(msg)
        value = polynomial_trans(filt.coefficients, options.b62_x)
        if value is not None:
            values *= value
    return values


@raise_as(CalcError, "Error calculating response")
def calculate(response, frequencies, output="DEF", start_stage=0,
              stop_stage=0, options=None, normalization=None):
    """
    Calculate the complex response at the given frequencies.

    :type response: :class:`~respeval.core.response.Response`
    :param response: The response to calculate.
    :type frequencies: array-like
    :param frequencies: Frequencies in Hz. Replaced by the tabulated
        frequencies if the first stage is a response list (or by the ones of
        them that lie within the table if ``list_interp_in`` is set).
    :type output: str or int
    :param output: Output units, one of ``"DEF"``, ``"DISP"``, ``"VEL"``,
        ``"ACC"`` or a unit conversion index. Any output other than the
        default requires the input units of the first stage to be
        displacement, velocity or acceleration, otherwise the response is
        calculated in default units.
    :type start_stage: int
    :param start_stage: 1-based number of the first stage to use, ``0`` for
        the first stage.
    :type stop_stage: int
    :param stop_stage: 1-based number of the last stage to use, ``0`` for
        the last stage.
    :type options: :class:`~respeval.evalresp.options.CalculationOptions`
    :param options: Calculation options, defaults are used if not given.
    :type normalization:
        :class:`~respeval.evalresp.normalization.NormalizationTable`
    :param normalization: Result of a previous
        :func:`~respeval.evalresp.normalization.normalize` call for the
        same stage range. Computed if not given.
    :rtype: :class:`CalculationResult`
    :raises: :class:`~respeval.core.util.types.CalcError`,
        :class:`~respeval.core.util.types.NormalizationError`

    >>> from respeval.core import Response, ResponseStage, Gain
    >>> from respeval.core.units import METER_PER_SECOND, VOLT
    >>> stage = ResponseStage(1, "LAPLACE", gain=Gain(2000.0, 1.0),
    ...                       input_units=METER_PER_SECOND, output_units=VOLT)
    >>> result = calculate(Response([stage]), [0.1, 1.0, 10.0])
    >>> print(result.amplitude.tolist())
    [2000.0, 2000.0, 2000.0]
    """
    if options is None:
        options = CalculationOptions()
    if options.show_input:
        logger.info(str(response))
    if normalization is None:
        normalization = normalize(response, start_stage=start_stage,
                                  stop_stage=stop_stage)

    stages = response.response_stages
    num_stages = len(stages)
    requested = np.atleast_1d(np.asarray(frequencies, dtype=np.float64))
    freqs = requested
    notes = []

    list_values = None
    first = stages[0] if num_stages else None
    if first is not None and isinstance(first.filter, ResponseListFilter):
        filt = first.filter
        freqs = np.array(filt.frequency, dtype=np.float64)
        if len(filt.amplitude) < len(freqs) or len(filt.phase) < len(freqs):
            msg = "Amp or phase array too small in Response List stage"
            raise CalcError(msg)
        amplitude = filt.amplitude[:len(freqs)]
        phase = filt.phase[:len(freqs)]
        if options.list_interp_in:
            freqs, amplitude, phase = _interpolate_response_list(
                requested, freqs, amplitude, phase,
                options.list_interp_tension, notes)
        list_values = (amplitude, phase, _get_phase_conversion(filt))

    out_conv = get_unit_conversion(output)
    requested_out_conv = out_conv
    in_conv = DEFAULT_UNIT_CONV
    unit_scale = 1.0
    first_input_units = first.input_units if first is not None else None
    if out_conv != DEFAULT_UNIT_CONV and first_input_units is not None and \
            first_input_units.conversion_index >= 0:
        unit_scale = 10.0 ** (-first_input_units.power)
        in_conv = first_input_units.conversion_index
    else:
        out_conv = DEFAULT_UNIT_CONV
    logger.debug("Unit conversion from %s to %s, scale %g",
                 get_unit_conversion_string(in_conv),
                 get_unit_conversion_string(out_conv), unit_scale)

    stage_range = resolve_stage_range(num_stages, start_stage, stop_stage)
    if stage_range is None:
        msg = "No match for requested range of stage numbers"
        raise CalcError(msg)
    start, stop = stage_range

    first_unit = stages[start].input_units
    if first_unit is not None and \
            first_unit.category in NON_MOTION_CATEGORIES and \
            requested_out_conv not in (VELOCITY_UNIT_CONV, DEFAULT_UNIT_CONV):
        msg = ("Input units \"%s\" not allowed with \"%s\" output units "
               "conversion") % (first_unit, get_unit_conversion_string(
                   requested_out_conv, long=True))
        raise CalcError(msg)

    result = CalculationResult(response, requested, requested_out_conv,
                               options, normalization, start, stop)
    result.notes.extend(notes)

    w = TWO_PI * freqs
    if options.total_sensitivity:
        sensitivity = result.response_sensitivity_factor
        if sensitivity is None:
            sensitivity = 1.0
        stage_scales = [float(sensitivity) * unit_scale] * (
            num_stages + 1)
    else:
        stage_scales = [s * unit_scale for s in normalization.sensitivities]

    combined = np.ones(w.shape, dtype=np.complex128)
    for idx in range(start, stop + 1):
        stage = stages[idx]
        values = _evaluate_stage(stage, idx, freqs, w, normalization,
                                 options, list_values)
        if isinstance(stage.filter, ResponseListFilter):
            result.list_stage = True
        combined = combined * values
        values = convert_units(values * stage_scales[idx + 1], w, in_conv,
                               out_conv)
        result.stages.append(StageSpectrum(
            _stage_label(idx + 1, stage), freqs, values,
            stage_number=idx + 1,
            amp_phase_func=result._interpolated_amp_phase))
    combined = convert_units(combined * stage_scales[0], w, in_conv,
                             out_conv)
    result.combined = StageSpectrum(
        "Response", freqs, combined,
        amp_phase_func=result._interpolated_amp_phase)
    logger.debug("Calculated %d stage(s) at %d frequencies",
                 result.num_calculated_stages, len(freqs))
    return result


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
