# -*- coding: utf-8 -*-
"""
Classes describing an instrument response as a cascade of stages.

The objects in this module are plain containers. They are filled by some
metadata reader and are never modified by the evaluation routines in
:mod:`respeval.evalresp`.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import numpy as np

from respeval.core.util.base import (ComparingObject, is_negative_one,
                                     is_zero)
from respeval.core.util.types import (ComplexWithUncertainties,
                                      FilterCoefficient,
                                      FloatWithUncertainties)


LAPLACE = "LAPLACE"
ANALOG = "ANALOG"
DIGITAL = "DIGITAL"
COMPOSITE = "COMPOSITE"

TRANSFER_FUNCTION_TYPES = (LAPLACE, ANALOG, DIGITAL, COMPOSITE)

# SEED blockette 53/54 response type letters
_TRANSFER_TYPE_LETTERS = {"A": LAPLACE, "B": ANALOG, "D": DIGITAL,
                          "C": COMPOSITE}


def _is_valid_gain_pair(value, frequency):
    if value is None or is_zero(value):
        return False
    if frequency is not None and is_negative_one(frequency) and \
            is_negative_one(value):
        return False
    return True


class Gain(ComparingObject):
    """
    Gain of a single response stage.

    :type value: float
    :param value: Gain factor.
    :type frequency: float
    :param frequency: Frequency in Hz at which the gain factor is given.

    >>> Gain(1500.0, 1.0).is_valid()
    True
    >>> Gain(-1.0, -1.0).is_valid()
    False
    """
    def __init__(self, value, frequency):
        self.value = value
        self.frequency = frequency

    def __str__(self):
        return "%g defined at %.3f Hz" % (self.value, self.frequency)

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = FloatWithUncertainties(value) \
            if value is not None else None

    @property
    def frequency(self):
        return self._frequency

    @frequency.setter
    def frequency(self, value):
        self._frequency = float(value) if value is not None else 0.0

    def is_valid(self):
        """
        A gain is usable if its factor is not (numerically) zero and it is
        not the ``-1`` at ``-1`` Hz placeholder some writers emit.
        """
        return _is_valid_gain_pair(self.value, self.frequency)


class InstrumentSensitivity(Gain):
    """
    The overall sensitivity of a channel, equivalent to a SEED stage 0 gain.

    :type value: float
    :param value: Sensitivity factor.
    :type frequency: float
    :param frequency: Frequency in Hz at which the sensitivity is given.
    :type input_units: :class:`~respeval.core.units.Unit`, optional
    :param input_units: Units of the first stage input.
    :type output_units: :class:`~respeval.core.units.Unit`, optional
    :param output_units: Units of the last stage output.
    """
    def __init__(self, value, frequency, input_units=None,
                 output_units=None):
        super(InstrumentSensitivity, self).__init__(value, frequency)
        self.input_units = input_units
        self.output_units = output_units

    def __str__(self):
        ret = ("Instrument Sensitivity:\n"
               "\tValue: {value}\n"
               "\tFrequency: {frequency}\n"
               "\tInput units: {input_units}\n"
               "\tOutput units: {output_units}\n")
        return ret.format(value=self.value, frequency=self.frequency,
                          input_units=self.input_units,
                          output_units=self.output_units)


class Normalization(ComparingObject):
    """
    Normalization (A0 for analog, H0 for digital stages) of a filter.

    :type factor: float
    :param factor: Normalization factor.
    :type frequency: float
    :param frequency: Frequency in Hz at which the filter is normalized.
    """
    def __init__(self, factor=1.0, frequency=0.0):
        self.factor = float(factor)
        self.frequency = float(frequency)

    def __str__(self):
        return "%g at %.3f Hz" % (self.factor, self.frequency)


class Decimation(ComparingObject):
    """
    Decimation information of a response stage.

    :type input_sample_rate: float
    :param input_sample_rate: Sampling rate before decimation in samples
        per second.
    :type factor: int
    :param factor: Decimation factor.
    :type offset: int
    :param offset: The sample chosen for use. 0 denotes the first sample.
    :type delay: float, optional
    :param delay: Estimated pure delay of the stage in seconds.
    :type correction: float, optional
    :param correction: Time shift in seconds applied to correct for the
        delay of the stage.
    """
    def __init__(self, input_sample_rate, factor=1, offset=0, delay=None,
                 correction=None):
        self.input_sample_rate = input_sample_rate
        self.factor = int(factor)
        self.offset = int(offset)
        self.delay = float(delay) if delay is not None else None
        self.correction = float(correction) if correction is not None \
            else None

    def __str__(self):
        return ("Input Sample Rate: %s Hz, Decimation Factor: %i, "
                "Decimation Offset: %i, Decimation Delay: %s, "
                "Decimation Correction: %s") % (
                    self.input_sample_rate, self.factor, self.offset,
                    self.delay, self.correction)

    @property
    def sample_interval(self):
        """
        Input sample interval in seconds or ``None`` if no usable input
        sampling rate is set.
        """
        if self.input_sample_rate is None or self.input_sample_rate <= 0:
            return None
        return 1.0 / self.input_sample_rate

    def is_valid(self):
        return self.sample_interval is not None


class PolesZerosFilter(ComparingObject):
    """
    Filter given by the poles and zeros of its transfer function.

    Whether the roots are interpreted in the s-plane (``LAPLACE`` in rad/s,
    ``ANALOG`` in Hz) or in the z-plane (``DIGITAL``) is decided by the
    transfer function type of the enclosing stage.
    """
    def __init__(self, poles=None, zeros=None):
        self.poles = poles or []
        self.zeros = zeros or []

    def __str__(self):
        return ("Poles: {poles}\n"
                "Zeros: {zeros}").format(
                    poles=", ".join(map(str, self.poles)),
                    zeros=", ".join(map(str, self.zeros)))

    @property
    def zeros(self):
        return self._zeros

    @zeros.setter
    def zeros(self, value):
        value = list(value)
        for i, x in enumerate(value):
            if not isinstance(x, ComplexWithUncertainties):
                value[i] = ComplexWithUncertainties(x)
        self._zeros = value

    @property
    def poles(self):
        return self._poles

    @poles.setter
    def poles(self, value):
        value = list(value)
        for i, x in enumerate(value):
            if not isinstance(x, ComplexWithUncertainties):
                value[i] = ComplexWithUncertainties(x)
        self._poles = value


def _to_coefficients(value):
    value = list(value)
    for i, x in enumerate(value):
        if isinstance(x, (tuple, list)):
            value[i] = FilterCoefficient(x[0], error=x[1])
        elif not isinstance(x, FilterCoefficient):
            value[i] = FilterCoefficient(x)
    return value


class CoefficientsFilter(ComparingObject):
    """
    Filter given by numerator and denominator coefficients.

    A filter without denominators is a FIR filter. Coefficients can be
    given as numbers, as ``(value, error)`` tuples or as
    :class:`~respeval.core.util.types.FilterCoefficient` objects.

    >>> fir = CoefficientsFilter(numerator=[0.25, 0.5, 0.25])
    >>> fir.is_fir
    True
    """
    def __init__(self, numerator=None, denominator=None):
        self.numerator = numerator or []
        self.denominator = denominator or []

    def __str__(self):
        return "%i numerators, %i denominators" % (
            len(self.numerator), len(self.denominator))

    @property
    def numerator(self):
        return self._numerator

    @numerator.setter
    def numerator(self, value):
        self._numerator = _to_coefficients(value)

    @property
    def denominator(self):
        return self._denominator

    @denominator.setter
    def denominator(self, value):
        self._denominator = _to_coefficients(value)

    @property
    def is_fir(self):
        return len(self.denominator) == 0


class ResponseListFilter(ComparingObject):
    """
    Tabulated response given as amplitude and phase at discrete
    frequencies.

    :type frequency: array-like
    :param frequency: Frequencies of the table.
    :type amplitude: array-like
    :param amplitude: Amplitudes at the given frequencies.
    :type phase: array-like
    :param phase: Phase at the given frequencies.
    :type frequency_unit: str, optional
    :param frequency_unit: ``"HZ"`` or ``None`` (meaning Hz).
    :type phase_unit: str, optional
    :param phase_unit: ``"DEGREES"``, ``"RADIANS"`` or ``None`` (meaning
        degrees).
    """
    def __init__(self, frequency, amplitude, phase, frequency_unit=None,
                 phase_unit=None):
        self.frequency = frequency
        self.amplitude = amplitude
        self.phase = phase
        self.frequency_unit = frequency_unit
        self.phase_unit = phase_unit

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return (np.array_equal(self.frequency, other.frequency) and
                np.array_equal(self.amplitude, other.amplitude) and
                np.array_equal(self.phase, other.phase) and
                self.frequency_unit == other.frequency_unit and
                self.phase_unit == other.phase_unit)

    def __str__(self):
        return "%i response list elements" % len(self.frequency)

    @property
    def frequency(self):
        return self._frequency

    @frequency.setter
    def frequency(self, value):
        self._frequency = np.array(value, dtype=np.float64)

    @property
    def amplitude(self):
        return self._amplitude

    @amplitude.setter
    def amplitude(self, value):
        self._amplitude = np.array(value, dtype=np.float64)

    @property
    def phase(self):
        return self._phase

    @phase.setter
    def phase(self, value):
        self._phase = np.array(value, dtype=np.float64)

    @property
    def frequency_unit(self):
        return self._frequency_unit

    @frequency_unit.setter
    def frequency_unit(self, value):
        self._frequency_unit = value.upper() if value is not None else None

    @property
    def phase_unit(self):
        return self._phase_unit

    @phase_unit.setter
    def phase_unit(self, value):
        self._phase_unit = value.upper() if value is not None else None


class PolynomialFilter(ComparingObject):
    """
    Polynomial (MacLaurin series) calibration of a non-linear sensor.

    Only the first derivative of the polynomial at a given sample value is
    used when evaluating the response.
    """
    def __init__(self, coefficients=None):
        self.coefficients = coefficients or []

    def __str__(self):
        return "Polynomial coefficients: %s" % ", ".join(
            "%g" % c for c in self.coefficients)

    @property
    def coefficients(self):
        return self._coefficients

    @coefficients.setter
    def coefficients(self, value):
        self._coefficients = _to_coefficients(value)


FILTER_CLASSES = (PolesZerosFilter, CoefficientsFilter, ResponseListFilter,
                  PolynomialFilter)


class ResponseStage(ComparingObject):
    """
    A single stage of an instrument response.

    :type stage_sequence_number: int
    :param stage_sequence_number: Stage sequence number, greater or equal to
        one.
    :type transfer_function_type: str
    :param transfer_function_type: One of ``"LAPLACE"`` (poles and zeros in
        rad/s), ``"ANALOG"`` (poles and zeros in Hz), ``"DIGITAL"`` and
        ``"COMPOSITE"``. StationXML and SEED spellings like ``"LAPLACE
        (HERTZ)"`` or ``"D"`` are accepted as well.
    :type filter: one of :data:`FILTER_CLASSES`, optional
    :param filter: The filter of the stage, ``None`` for gain-only stages.
    :type gain: :class:`Gain`, optional
    :param gain: Stage gain.
    :type decimation: :class:`Decimation`, optional
    :param decimation: Decimation information.
    :type normalization: :class:`Normalization`, optional
    :param normalization: Normalization of the filter.
    :type input_units: :class:`~respeval.core.units.Unit`
    :param input_units: Units of the data going into the stage.
    :type output_units: :class:`~respeval.core.units.Unit`
    :param output_units: Units of the data coming out of the stage.
    """
    def __init__(self, stage_sequence_number, transfer_function_type,
                 filter=None, gain=None, decimation=None, normalization=None,
                 input_units=None, output_units=None):
        self.stage_sequence_number = stage_sequence_number
        self.transfer_function_type = transfer_function_type
        self.filter = filter
        self.gain = gain
        self.decimation = decimation
        self.normalization = normalization
        self.input_units = input_units
        self.output_units = output_units

    def __str__(self):
        ret = (
            "Stage Sequence Number: {stage}, {filter_type} ({tf_type})\n"
            "\tFrom {input_units} to {output_units}\n"
            "\tStage gain: {gain}\n"
            "{normalization}"
            "{decimation}").format(
            stage=self.stage_sequence_number,
            filter_type=(self.filter.__class__.__name__
                         if self.filter is not None else "Gain only"),
            tf_type=self.transfer_function_type or "UNKNOWN",
            input_units=self.input_units if self.input_units else "UNKNOWN",
            output_units=(self.output_units if self.output_units
                          else "UNKNOWN"),
            gain=self.gain if self.gain is not None else "UNKNOWN",
            normalization=("\tNormalization: %s\n" % self.normalization
                           if self.normalization is not None else ""),
            decimation=("\tDecimation: %s" % self.decimation
                        if self.decimation is not None else ""))
        return ret.strip()

    def _repr_pretty_(self, p, cycle):
        p.text(str(self))

    @property
    def transfer_function_type(self):
        return self._transfer_function_type

    @transfer_function_type.setter
    def transfer_function_type(self, value):
        """
        Setter for the transfer function type.

        Rather permissive but should make it less awkward to use.
        """
        if value is None:
            self._transfer_function_type = None
            return
        msg = ("'%s' is not a valid value for 'transfer_function_type'. "
               "Valid ones are:\n"
               "\tLAPLACE (RADIANS/SECOND)\n"
               "\tLAPLACE (HERTZ)\n"
               "\tANALOG\n"
               "\tDIGITAL (Z-TRANSFORM)\n"
               "\tCOMPOSITE") % value
        upper = value.strip().upper()
        if upper in _TRANSFER_TYPE_LETTERS:
            self._transfer_function_type = _TRANSFER_TYPE_LETTERS[upper]
        elif "LAPLACE" in upper:
            if "HERTZ" in upper or "HZ" in upper:
                self._transfer_function_type = ANALOG
            elif "RADIAN" in upper or upper == LAPLACE:
                self._transfer_function_type = LAPLACE
            else:
                raise ValueError(msg)
        elif upper.startswith(ANALOG):
            self._transfer_function_type = ANALOG
        elif upper.startswith(DIGITAL):
            self._transfer_function_type = DIGITAL
        elif upper.startswith(COMPOSITE):
            self._transfer_function_type = COMPOSITE
        else:
            raise ValueError(msg)

    @property
    def filter(self):
        return self._filter

    @filter.setter
    def filter(self, value):
        if value is not None and not isinstance(value, FILTER_CLASSES):
            msg = "Unsupported filter type '%s'." % type(value).__name__
            raise TypeError(msg)
        self._filter = value

    def has_valid_gain(self):
        return self.gain is not None and self.gain.is_valid()


class Response(ComparingObject):
    """
    The complete response of a channel.

    :type response_stages: list of :class:`ResponseStage`
    :param response_stages: The stages of the response, in order.
    :type instrument_sensitivity: :class:`InstrumentSensitivity`, optional
    :param instrument_sensitivity: The overall sensitivity (stage 0 gain).
    """
    def __init__(self, response_stages=None, instrument_sensitivity=None):
        self.response_stages = list(response_stages or [])
        self.instrument_sensitivity = instrument_sensitivity

    def __str__(self):
        i_s = self.instrument_sensitivity
        if i_s is not None:
            sensitivity = ("%g" % i_s.value) if i_s.value else "UNKNOWN"
            freq = "%.3f" % i_s.frequency
        else:
            sensitivity = "UNKNOWN"
            freq = "UNKNOWN"
        input_units = output_units = "UNKNOWN"
        if self.response_stages:
            first, last = self.response_stages[0], self.response_stages[-1]
            if first is not None and first.input_units:
                input_units = first.input_units
            if last is not None and last.output_units:
                output_units = last.output_units
        ret = (
            "Channel Response\n"
            "\tFrom {input_units} to {output_units}\n"
            "\tOverall Sensitivity: {sensitivity} defined at {freq} Hz\n"
            "\t{stages} stages:\n{stage_desc}").format(
            input_units=input_units,
            output_units=output_units,
            sensitivity=sensitivity,
            freq=freq,
            stages=len(self.response_stages),
            stage_desc="\n".join(
                ["\t\tStage %i: %s from %s to %s,"
                 " gain: %s" % (
                     i.stage_sequence_number,
                     i.filter.__class__.__name__ if i.filter is not None
                     else "Gain only",
                     i.input_units, i.output_units,
                     ("%g" % i.gain.value) if i.has_valid_gain()
                     else "UNKNOWN")
                 for i in self.response_stages if i is not None]))
        return ret

    def _repr_pretty_(self, p, cycle):
        p.text(str(self))

    def has_valid_sensitivity(self):
        return self.instrument_sensitivity is not None and \
            self.instrument_sensitivity.is_valid()

    def get_sampling_rate(self):
        """
        Output sampling rate of the channel, derived from the last stage
        with usable decimation information, or ``None``.
        """
        for stage in self.response_stages[::-1]:
            if stage is None or stage.decimation is None:
                continue
            decimation = stage.decimation
            if decimation.is_valid() and decimation.factor:
                return decimation.input_sample_rate / decimation.factor
        return None

    def validate(self, skip_units=False):
        """
        Check the response for structural consistency.

        See :func:`respeval.evalresp.validation.validate`.
        """
        from respeval.evalresp.validation import validate
        validate(self, skip_units=skip_units)

    def normalize(self, start_stage=0, stop_stage=0):
        """
        Bring all stage gains to a common reference frequency.

        See :func:`respeval.evalresp.normalization.normalize`.
        """
        from respeval.evalresp.normalization import normalize
        return normalize(self, start_stage=start_stage, stop_stage=stop_stage)

    def calculate(self, frequencies, output="DEF", start_stage=0,
                  stop_stage=0, options=None, **kwargs):
        """
        Evaluate the response at the given frequencies.

        Keyword arguments not consumed here are used to build the
        :class:`~respeval.evalresp.options.CalculationOptions`.
        See :func:`respeval.evalresp.calculation.calculate`.
        """
        from respeval.evalresp.calculation import calculate
        from respeval.evalresp.options import CalculationOptions
        if options is None:
            options = CalculationOptions(**kwargs)
        elif kwargs:
            options = options.copy()
            options.update(kwargs)
        return calculate(self, frequencies, output=output,
                         start_stage=start_stage, stop_stage=stop_stage,
                         options=options)

    def get_evalresp_response_for_frequencies(
            self, frequencies, output="VEL", start_stage=0, stop_stage=0):
        """
        Returns frequency response for given frequencies.

        :type frequencies: list of float
        :param frequencies: Discrete frequencies to calculate response for.
        :type output: str
        :param output: Output units. One of:

            ``"DISP"``
                displacement, output unit is meters
            ``"VEL"``
                velocity, output unit is meters/second
            ``"ACC"``
                acceleration, output unit is meters/second**2
            ``"DEF"``
                default units, the response is calculated in
                output units/input units (last stage/first stage).

        :type start_stage: int, optional
        :param start_stage: Stage sequence number of first stage that will be
            used (disregarding all earlier stages).
        :type stop_stage: int, optional
        :param stop_stage: Stage sequence number of last stage that will be
            used (disregarding all later stages).
        :rtype: :class:`numpy.ndarray`
        :returns: Complex frequency response at the given frequencies.
        """
        result = self.calculate(frequencies, output=output,
                                start_stage=start_stage,
                                stop_stage=stop_stage)
        return result.spectrum

    def get_evalresp_response(self, t_samp, nfft, output="VEL",
                              start_stage=0, stop_stage=0):
        """
        Returns frequency response and corresponding frequencies.

        :type t_samp: float
        :param t_samp: time resolution (inverse frequency resolution)
        :type nfft: int
        :param nfft: Number of FFT points to use
        :type output: str
        :param output: Output units, see
            :meth:`get_evalresp_response_for_frequencies`.
        :type start_stage: int, optional
        :param start_stage: Stage sequence number of first stage that will be
            used (disregarding all earlier stages).
        :type stop_stage: int, optional
        :param stop_stage: Stage sequence number of last stage that will be
            used (disregarding all later stages).
        :rtype: tuple(:class:`numpy.ndarray`, :class:`numpy.ndarray`)
        :returns: frequency response and corresponding frequencies
        """
        # start at zero to get zero for offset/ DC of fft
        fy = 1 / (t_samp * 2.0)
        freqs = np.linspace(0, fy, int(nfft // 2) + 1, dtype=np.float64)
        response = self.get_evalresp_response_for_frequencies(
            freqs, output=output, start_stage=start_stage,
            stop_stage=stop_stage)
        return response, freqs


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
