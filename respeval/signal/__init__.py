# -*- coding: utf-8 -*-
"""
respeval.signal - Numerical building blocks of the response evaluation
======================================================================

:mod:`~respeval.signal.transfer`
    Transfer functions of the different filter types.
:mod:`~respeval.signal.interpolation`
    Cubic spline under tension for resampling response lists.
:mod:`~respeval.signal.phase`
    Phase wrapping/unwrapping, frequency clipping and conversion between
    displacement, velocity and acceleration.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
