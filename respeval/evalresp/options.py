# -*- coding: utf-8 -*-
"""
Options of the response calculation.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from respeval.core.util.attribdict import AttribDict


class CalculationOptions(AttribDict):
    """
    Options controlling :func:`~respeval.evalresp.calculation.calculate`.

    ``use_estimated_delay``
        Correct the phase of asymmetric FIR filters with the estimated delay
        of the stage instead of the applied correction.
    ``show_input``
        Log the response description before calculating it.
    ``list_interp_out``
        Interpolate the amplitude/phase output of a response list onto the
        requested frequencies.
    ``list_interp_in``
        Interpolate the response list input onto the requested frequencies
        before calculating the response.
    ``list_interp_tension``
        Tension of the interpolating spline.
    ``unwrap_phase``
        Unwrap the output phase.
    ``total_sensitivity``
        Scale with the overall (stage 0) sensitivity instead of the
        sensitivity computed from the stage gains.
    ``b62_x``
        Sample value at which polynomial stages are evaluated.

    >>> opts = CalculationOptions(unwrap_phase=True)
    >>> opts.unwrap_phase, opts.list_interp_tension
    (True, 1000.0)
    """
    defaults = {
        'use_estimated_delay': False,
        'show_input': False,
        'list_interp_out': False,
        'list_interp_in': False,
        'list_interp_tension': 1000.0,
        'unwrap_phase': False,
        'total_sensitivity': False,
        'b62_x': 0.0,
    }
    _types = {
        'use_estimated_delay': bool,
        'show_input': bool,
        'list_interp_out': bool,
        'list_interp_in': bool,
        'list_interp_tension': (float, int),
        'unwrap_phase': bool,
        'total_sensitivity': bool,
        'b62_x': (float, int),
    }
    warn_on_non_default_key = True


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
