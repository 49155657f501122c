#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
The respeval.evalresp.frequencies test suite.
"""
import numpy as np
from numpy.testing import assert_allclose

from respeval.core.response import (Gain, InstrumentSensitivity,
                                    Normalization, PolesZerosFilter,
                                    Response, ResponseStage)
from respeval.core.units import METER_PER_SECOND, VOLT
from respeval.evalresp.frequencies import (fft_frequencies, frequency_grid,
                                           next_pow_2, transfer_function)
import pytest


class TestFrequencies:
    """
    Test cases for the frequency grids.
    """
    def test_frequency_grid(self):
        assert_allclose(frequency_grid(1.0, 100.0, 3), [1.0, 10.0, 100.0])
        freqs = frequency_grid(0.01, 50.0, 100)
        assert len(freqs) == 100
        assert_allclose([freqs[0], freqs[-1]], [0.01, 50.0])
        assert_allclose(np.diff(np.log10(freqs)),
                        np.log10(5000.0) / 99.0)
        assert frequency_grid(0.0, 10.0, 3, log_spacing=False).tolist() == \
            [0.0, 5.0, 10.0]
        assert frequency_grid(2.0, 10.0, 1).tolist() == [2.0]

    def test_frequency_grid_errors(self):
        with pytest.raises(ValueError, match="has to be positive"):
            frequency_grid(1.0, 10.0, 0)
        with pytest.raises(ValueError, match="positive frequency limits"):
            frequency_grid(0.0, 10.0, 10)

    def test_next_pow_2(self):
        assert next_pow_2(0) == 2
        assert next_pow_2(2) == 4
        assert next_pow_2(1000) == 1024
        assert next_pow_2(1024) == 2048

    def test_fft_frequencies(self):
        freqs, delfrq = fft_frequencies(1000, 100.0)
        assert len(freqs) == 513
        assert_allclose(delfrq, 100.0 / 1024)
        assert freqs[0] == 0.0
        assert_allclose(freqs[-1], 50.0)
        assert_allclose(np.diff(freqs), delfrq)

    def test_transfer_function(self):
        stage = ResponseStage(
            1, "LAPLACE (RADIANS/SECOND)",
            filter=PolesZerosFilter(poles=[-1 + 0j]), gain=Gain(1.0, 0.0),
            normalization=Normalization(1.0, 0.0),
            input_units=METER_PER_SECOND, output_units=VOLT)
        response = Response([stage], InstrumentSensitivity(1.0, 0.0))
        spectrum, freqs = transfer_function(response, 100, 20.0)
        assert len(freqs) == 65
        assert_allclose(freqs, fft_frequencies(100, 20.0)[0])
        w = 2 * np.pi * freqs
        assert_allclose(spectrum, 1.0 / (1j * w + 1.0), rtol=1e-12)
        # velocity to displacement
        spectrum, _ = transfer_function(response, 100, 20.0, output="DISP")
        assert_allclose(spectrum, 1j * w / (1j * w + 1.0), rtol=1e-12,
                        atol=1e-15)
