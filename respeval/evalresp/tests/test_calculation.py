#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
The respeval.evalresp.calculation test suite.
"""
import numpy as np
from numpy.testing import assert_allclose

from respeval.core.response import (CoefficientsFilter, Decimation, Gain,
                                    InstrumentSensitivity, Normalization,
                                    PolesZerosFilter, PolynomialFilter,
                                    Response, ResponseListFilter,
                                    ResponseStage)
from respeval.core.units import (CENTIGRADE, COUNTS, DISPLACE_UNIT_CONV,
                                 METER_PER_SECOND, NANOMETER_PER_SECOND,
                                 PASCAL, VELOCITY_UNIT_CONV, VOLT)
from respeval.core.util.types import CalcError, NormalizationError
from respeval.evalresp.calculation import (CalculationResult, StageSpectrum,
                                           calculate, get_stage_type_label)
from respeval.evalresp.normalization import normalize
from respeval.evalresp.options import CalculationOptions
from respeval.signal.transfer import FIR_ASYM, fir_trans
import pytest


FIR_COEFFICIENTS = [0.5, 0.3, 0.1, 0.06, 0.04]


def _gain_response(value, input_units=METER_PER_SECOND):
    stage = ResponseStage(1, "LAPLACE", gain=Gain(value, 1.0),
                          input_units=input_units, output_units=VOLT)
    return Response([stage])


def _lowpass_stage(number=1, num_poles=1, gain=None):
    return ResponseStage(
        number, "LAPLACE (RADIANS/SECOND)",
        filter=PolesZerosFilter(poles=[-1 + 0j] * num_poles),
        gain=gain or Gain(1.0, 0.0), normalization=Normalization(1.0, 0.0),
        input_units=METER_PER_SECOND, output_units=VOLT)


def _digitizer_response(decimation=None):
    """
    Low pass seismometer, digitizer and asymmetric FIR filter, all gains
    are 1 at 0 Hz.
    """
    if decimation is None:
        decimation = Decimation(100.0)
    stages = [
        _lowpass_stage(),
        ResponseStage(2, "DIGITAL", gain=Gain(1.0, 0.0),
                      decimation=Decimation(100.0),
                      input_units=VOLT, output_units=COUNTS),
        ResponseStage(3, "DIGITAL",
                      filter=CoefficientsFilter(numerator=FIR_COEFFICIENTS),
                      gain=Gain(1.0, 0.0), decimation=decimation,
                      input_units=COUNTS, output_units=COUNTS)]
    return Response(stages, InstrumentSensitivity(1.0, 0.0))


def _list_response(phase_unit=None, phase=None):
    filt = ResponseListFilter([1.0, 2.0, 3.0, 4.0, 5.0],
                              [1.0, 2.0, 3.0, 4.0, 5.0],
                              phase or [10.0, 20.0, 30.0, 40.0, 50.0],
                              phase_unit=phase_unit)
    stage = ResponseStage(1, "LAPLACE", filter=filt, gain=Gain(1.0, 1.0),
                          input_units=METER_PER_SECOND, output_units=COUNTS)
    return Response([stage], InstrumentSensitivity(1.0, 1.0))


@pytest.mark.usefixtures('ignore_numpy_errors')
class TestCalculate:
    """
    Test cases for the calculation of complex responses.
    """
    def test_gain_only(self):
        result = calculate(_gain_response(2000.0), [0.1, 1.0, 10.0])
        assert isinstance(result, CalculationResult)
        assert_allclose(result.amplitude, [2000.0] * 3)
        assert_allclose(result.phase, [0.0] * 3)
        assert_allclose(result.spectrum, [2000.0] * 3)
        assert result.frequencies.tolist() == [0.1, 1.0, 10.0]
        assert not result.any_amplitudes_not_positive()
        assert not result.all_stages_any_amplitudes_not_positive()

    def test_scalar_frequency(self):
        result = calculate(_gain_response(2.0), 1.0)
        assert result.spectrum.shape == (1,)

    def test_lowpass(self):
        freqs = np.logspace(-2, 2, 20)
        response = Response([_lowpass_stage()],
                            InstrumentSensitivity(1.0, 0.0))
        result = calculate(response, freqs)
        w = 2 * np.pi * freqs
        assert_allclose(result.spectrum, 1.0 / (1j * w + 1.0), rtol=1e-12)
        assert_allclose(result.amplitude, 1.0 / np.sqrt(1.0 + w ** 2))
        assert_allclose(result.phase, -np.degrees(np.arctan(w)))
        assert len(result.stages) == 1
        stage = result.get_stage(1)
        assert isinstance(stage, StageSpectrum)
        assert stage.label == "Stg 1 LAPLACE"
        assert_allclose(stage.spectrum, result.spectrum)
        assert result.combined.label == "Response"
        with pytest.raises(IndexError, match="Stage #2 was not calculated"):
            result.get_stage(2)

    def test_lowpass_normalized_at_one_hertz(self):
        """
        Normalization and gain at 1 Hz, evaluated at 0.5, 1 and 2 Hz.
        """
        stage = ResponseStage(
            1, "LAPLACE (RADIANS/SECOND)",
            filter=PolesZerosFilter(poles=[-1 + 0j]), gain=Gain(1.0, 1.0),
            normalization=Normalization(1.0, 1.0),
            input_units=METER_PER_SECOND, output_units=VOLT)
        result = calculate(Response([stage]), [0.5, 1.0, 2.0], output="DEF")
        w = 2 * np.pi * np.array([0.5, 1.0, 2.0])
        assert_allclose(result.spectrum, 1.0 / (1j * w + 1.0), rtol=1e-12)
        assert np.all(np.diff(result.amplitude) < 0.0)
        assert np.all(np.diff(np.abs(result.phase)) > 0.0)
        assert np.all(np.abs(result.phase) < 90.0)

    def test_stage_without_roots(self):
        stage = ResponseStage(
            1, "LAPLACE", filter=PolesZerosFilter(), gain=Gain(-4.0, 7.0),
            normalization=Normalization(1.0, 7.0),
            input_units=METER_PER_SECOND, output_units=VOLT)
        result = calculate(Response([stage]), [0.01, 1.0, 7.0, 100.0])
        assert_allclose(result.amplitude, [4.0] * 4)
        # negative gains show up as a phase of 180 degrees
        assert_allclose(np.abs(result.phase), [180.0] * 4)

    def test_single_stage_reference_amplitude(self):
        stage = ResponseStage(
            1, "LAPLACE (HERTZ)",
            filter=PolesZerosFilter(poles=[-2 + 0j, -3 + 1j, -3 - 1j]),
            gain=Gain(50.0, 0.2), normalization=Normalization(1.0, 0.2),
            input_units=METER_PER_SECOND, output_units=VOLT)
        response = Response([stage], InstrumentSensitivity(1.0, 4.0))
        table = normalize(response)
        result = calculate(response, [table.frequency], normalization=table)
        assert_allclose(result.amplitude, [table.calculated_sensitivity],
                        rtol=1e-12)

    def test_reference_amplitude_equals_sensitivity(self):
        """
        After normalization the amplitude at the reference frequency equals
        the product of the normalized stage gains.
        """
        stages = [_lowpass_stage(gain=Gain(10.0, 0.0)),
                  ResponseStage(2, "DIGITAL", gain=Gain(1000.0, 0.0),
                                decimation=Decimation(100.0),
                                input_units=VOLT, output_units=COUNTS)]
        response = Response(stages, InstrumentSensitivity(5000.0, 1.0))
        table = normalize(response)
        result = calculate(response, [1.0], normalization=table)
        assert_allclose(result.amplitude[0], table.calculated_sensitivity,
                        rtol=1e-12)
        assert result.normalization is table
        # normalized on the fly if not given
        result2 = calculate(response, [1.0])
        assert_allclose(result2.spectrum, result.spectrum)
        amp = 1.0 / np.sqrt(1.0 + 4.0 * np.pi ** 2)
        assert_allclose(result.sensitivities,
                        [10000.0 * amp, 10.0 * amp, 1000.0])
        assert result.calculated_sensitivity == table.calculated_sensitivity
        assert result.sensitivity_frequency == 1.0
        assert result.first_unit == METER_PER_SECOND
        assert result.last_unit == COUNTS
        assert_allclose(result.first_stage_normalization_factor, 1.0 / amp)
        assert result.first_stage_normalization_frequency == 1.0
        # given overall sensitivity of a multi-stage response
        assert result.response_sensitivity_factor == 5000.0
        assert result.response_sensitivity_frequency == 1.0

    def test_unit_conversion(self):
        response = _gain_response(2.0, input_units=NANOMETER_PER_SECOND)
        result = calculate(response, [1.0], output="DEF")
        assert_allclose(result.amplitude, [2.0])
        # nanometers are scaled to meters
        result = calculate(response, [1.0], output="VEL")
        assert_allclose(result.amplitude, [2e9])
        assert result.output == VELOCITY_UNIT_CONV
        result = calculate(response, [1.0], output="DISP")
        assert_allclose(result.spectrum, [2e9 * 2j * np.pi])
        assert result.output == DISPLACE_UNIT_CONV
        assert str(result) == ("Response of stages 1 to 1 at 1 frequencies, "
                               "output units: Displacement")
        response = _gain_response(2.0)
        result = calculate(response, [0.5], output="ACC")
        assert_allclose(result.spectrum, [2.0 / (1j * np.pi)])

    def test_non_motion_units(self):
        response = _gain_response(3.0, input_units=PASCAL)
        msg = ('^Input units "PA" not allowed with "Displacement" output '
               'units conversion$')
        with pytest.raises(CalcError, match=msg):
            calculate(response, [1.0], output="DISP")
        # velocity output falls back to the default units
        result = calculate(response, [1.0], output="VEL")
        assert_allclose(result.amplitude, [3.0])

    def test_stage_labels(self):
        result = calculate(_digitizer_response(), [1.0, 10.0])
        labels = [stage.label for stage in result.stages]
        assert labels == ["Stg 1 LAPLACE", "Stg 2", "Stg 3 FIR_ASYM"]
        stage = _digitizer_response().response_stages[2]
        assert get_stage_type_label(stage) == FIR_ASYM
        stage.filter = CoefficientsFilter([1.0], [1.0, -0.5])
        assert get_stage_type_label(stage) == "IIR_COEFFS"
        stage.filter = PolesZerosFilter(poles=[0.5 + 0j])
        assert get_stage_type_label(stage) == "IIR_PZ"
        assert get_stage_type_label(_list_response().response_stages[0]) == \
            "LIST"

    def test_stage_range(self):
        response = _digitizer_response()
        result = calculate(response, [1.0, 10.0], start_stage=3)
        assert result.num_calculated_stages == 1
        assert [stage.stage_number for stage in result.stages] == [3]
        w = 2 * np.pi * np.array([1.0, 10.0])
        expected = fir_trans(FIR_COEFFICIENTS, 1.0, 0.01, w, FIR_ASYM)
        assert_allclose(result.spectrum, expected)
        with pytest.raises(NormalizationError,
                           match="No match for requested range"):
            calculate(response, [1.0], start_stage=4)

    def test_summary_values(self):
        decimation = Decimation(100.0, factor=2, delay=0.05, correction=0.04)
        result = calculate(_digitizer_response(decimation), [1.0])
        assert result.sample_interval == pytest.approx(0.02)
        assert result.estimated_delay == pytest.approx(0.05)
        assert result.correction_applied == pytest.approx(0.04)
        # (5 - 1) / 2 samples at 100 Hz
        assert result.calculated_delay == pytest.approx(0.02)

    def test_fir_delay_correction(self):
        freqs = np.array([0.5, 2.0, 10.0])
        w = 2 * np.pi * freqs
        plain = calculate(_digitizer_response(), freqs).get_stage(3).spectrum
        # correction of exactly the filter delay changes nothing
        result = calculate(_digitizer_response(
            Decimation(100.0, correction=0.02)), freqs)
        assert_allclose(result.get_stage(3).spectrum, plain)
        result = calculate(_digitizer_response(
            Decimation(100.0, correction=0.05)), freqs)
        assert_allclose(result.get_stage(3).spectrum,
                        plain * np.exp(1j * w * 0.03))
        # estimated delay instead of the correction
        decimation = Decimation(100.0, delay=0.03, correction=0.0)
        options = CalculationOptions(use_estimated_delay=True)
        result = calculate(_digitizer_response(decimation), freqs,
                           options=options)
        assert_allclose(result.get_stage(3).spectrum,
                        plain * np.exp(1j * w * 0.03))
        # no estimated delay means no rotation, the correction is ignored
        result = calculate(_digitizer_response(
            Decimation(100.0, correction=0.05)), freqs, options=options)
        assert_allclose(result.get_stage(3).spectrum, plain)

    def test_response_list(self):
        result = calculate(_list_response(), [0.5, 1.5])
        assert result.list_stage
        assert result.frequencies.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0]
        assert_allclose(result.amplitude, [1.0, 2.0, 3.0, 4.0, 5.0])
        assert_allclose(result.phase, [10.0, 20.0, 30.0, 40.0, 50.0])
        # results do not share the table of the stage
        response = _list_response()
        result = calculate(response, [1.0])
        result.frequencies[0] = -1.0
        result.get_stage(1).frequencies[1] = -1.0
        filt = response.response_stages[0].filter
        assert list(filt.frequency) == [1.0, 2.0, 3.0, 4.0, 5.0]
        result = calculate(_list_response(phase_unit="RADIANS",
                                          phase=[0.5] * 5), [1.0])
        assert_allclose(result.phase, [np.degrees(0.5)] * 5)

    def test_response_list_interpolated_input(self):
        options = CalculationOptions(list_interp_in=True)
        result = calculate(_list_response(), [0.5, 1.5, 2.5, 6.0],
                           options=options)
        assert result.frequencies.tolist() == [1.5, 2.5]
        assert_allclose(result.amplitude, [1.5, 2.5], rtol=1e-9)
        assert_allclose(result.phase, [15.0, 25.0], rtol=1e-9)
        assert result.notes == [
            "Note:  1 frequency clipped from beginning of requested range",
            "Note:  1 frequency clipped from end of requested range"]
        with pytest.raises(CalcError, match="All requested freqencies out "
                           "of range"):
            calculate(_list_response(), [10.0, 20.0], options=options)

    def test_response_list_interpolated_output(self):
        options = CalculationOptions(list_interp_out=True)
        result = calculate(_list_response(), [1.5, 2.5, 6.0],
                           options=options)
        assert len(result.frequencies) == 5
        assert_allclose(result.amplitude, [1.5, 2.5], rtol=1e-9)
        assert_allclose(result.phase, [15.0, 25.0], rtol=1e-9)
        assert result.combined.amp_phase_frequencies.tolist() == [1.5, 2.5]
        assert result.notes == [
            "Note:  1 frequency clipped from end of requested range"]
        result = calculate(_list_response(), [10.0, 20.0], options=options)
        with pytest.raises(CalcError, match="All requested freqencies out "
                           "of range"):
            result.amplitude

    def test_response_list_errors(self):
        with pytest.raises(CalcError, match=r'Invalid phase units type '
                           r'\("GRADIANS"\)'):
            calculate(_list_response(phase_unit="gradians"), [1.0])
        response = _list_response()
        response.response_stages[0].filter.amplitude = [1.0, 2.0]
        with pytest.raises(CalcError, match="Amp or phase array too small"):
            calculate(response, [1.0])

    def test_polynomial(self):
        stage = ResponseStage(1, "LAPLACE",
                              filter=PolynomialFilter([1.0, 2.0, 3.0]),
                              input_units=CENTIGRADE, output_units=VOLT)
        response = Response([stage])
        with pytest.raises(CalcError, match="Valid 'b62_x' value must be "
                           "specified for polynomial response"):
            calculate(response, [1.0])
        result = calculate(response, [1.0, 2.0],
                           options=CalculationOptions(b62_x=2.0))
        assert_allclose(result.amplitude, [14.0, 14.0])
        assert result.stages[0].label == "Stg 1"

    def test_total_sensitivity(self):
        stages = [
            ResponseStage(1, "LAPLACE", gain=Gain(2.0, 1.0),
                          input_units=METER_PER_SECOND, output_units=VOLT),
            ResponseStage(2, "DIGITAL", gain=Gain(5.0, 1.0),
                          input_units=VOLT, output_units=COUNTS)]
        response = Response(stages, InstrumentSensitivity(20.0, 1.0))
        result = calculate(response, [1.0])
        assert_allclose(result.amplitude, [10.0])
        assert_allclose(result.get_stage(2).amplitude, [5.0])
        options = CalculationOptions(total_sensitivity=True)
        result = calculate(response, [1.0], options=options)
        assert result.total_sensitivity
        assert_allclose(result.amplitude, [20.0])
        assert_allclose(result.get_stage(2).amplitude, [20.0])

    def test_synthesized_sensitivity(self):
        result = calculate(_gain_response(2.0), [1.0])
        assert result.response_sensitivity_factor == 2.0
        assert result.response_sensitivity_frequency == 1.0
        assert result.first_stage_normalization_factor is None

    def test_unwrap_phase(self):
        """
        Three poles turn the phase by 270 degrees.
        """
        freqs = np.logspace(-2, 2, 60)
        response = Response([_lowpass_stage(num_poles=3)],
                            InstrumentSensitivity(1.0, 0.0))
        result = calculate(response, freqs)
        assert np.any(np.abs(np.diff(result.phase)) > 180.0)
        options = CalculationOptions(unwrap_phase=True)
        result = calculate(response, freqs, options=options)
        assert result.unwrap_phase
        phase = result.phase
        assert np.all(np.diff(phase) < 0.0)
        # first value shifted to be non-negative
        assert phase[0] > 0.0
        expected = 360.0 - 3 * np.degrees(np.arctan(2 * np.pi * freqs))
        assert_allclose(phase, expected, rtol=1e-9)

    def test_amplitudes_not_positive(self):
        stage = ResponseStage(
            1, "LAPLACE", filter=PolesZerosFilter(zeros=[0j],
                                                  poles=[-1 + 0j]),
            gain=Gain(1.0, 1.0), normalization=Normalization(1.0, 1.0),
            input_units=METER_PER_SECOND, output_units=VOLT)
        response = Response([stage], InstrumentSensitivity(1.0, 1.0))
        result = calculate(response, [0.0, 1.0])
        assert result.amplitude[0] == 0.0
        assert result.any_amplitudes_not_positive()
        assert result.all_stages_any_amplitudes_not_positive()

    def test_show_input(self, caplog):
        options = CalculationOptions(show_input=True)
        with caplog.at_level('INFO', logger='respeval.evalresp.calculation'):
            calculate(_gain_response(2.0), [1.0], options=options)
        assert "Channel Response" in caplog.text
