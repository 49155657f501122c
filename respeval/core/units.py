# -*- coding: utf-8 -*-
"""
Resolved physical unit classification.

Parsing unit strings from metadata files is the job of the file readers.
The evaluation engine only looks at the physical category of a unit and at
its power-of-ten scaling, which is what :class:`Unit` holds.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from respeval.core.util.base import ComparingObject


DISPLACEMENT = "DISPLACEMENT"
VELOCITY = "VELOCITY"
ACCELERATION = "ACCELERATION"
PRESSURE = "PRESSURE"
MAGNETIC_FLUX_DENSITY = "MAGNETIC_FLUX_DENSITY"
TEMPERATURE = "TEMPERATURE"
OTHER = "OTHER"

CATEGORIES = (DISPLACEMENT, VELOCITY, ACCELERATION, PRESSURE,
              MAGNETIC_FLUX_DENSITY, TEMPERATURE, OTHER)

# unit conversion indices
DEFAULT_UNIT_CONV = 0
DISPLACE_UNIT_CONV = 1
VELOCITY_UNIT_CONV = 2
ACCEL_UNIT_CONV = 3
NO_UNIT_CONV = -1

UNIT_CONV_STRS = ("def", "dis", "vel", "acc")
UNIT_CONV_LONGSTRS = ("Default", "Displacement", "Velocity", "Acceleration")

_CATEGORY_TO_CONV = {
    DISPLACEMENT: DISPLACE_UNIT_CONV,
    VELOCITY: VELOCITY_UNIT_CONV,
    ACCELERATION: ACCEL_UNIT_CONV,
}

# categories that may only be evaluated in default or velocity output
NON_MOTION_CATEGORIES = (PRESSURE, MAGNETIC_FLUX_DENSITY, TEMPERATURE)

_OUTPUT_ALIASES = {
    "DEF": DEFAULT_UNIT_CONV,
    "DEFAULT": DEFAULT_UNIT_CONV,
    "DIS": DISPLACE_UNIT_CONV,
    "DISP": DISPLACE_UNIT_CONV,
    "DISPLACEMENT": DISPLACE_UNIT_CONV,
    "VEL": VELOCITY_UNIT_CONV,
    "VELOCITY": VELOCITY_UNIT_CONV,
    "ACC": ACCEL_UNIT_CONV,
    "ACCEL": ACCEL_UNIT_CONV,
    "ACCELERATION": ACCEL_UNIT_CONV,
}


class Unit(ComparingObject):
    """
    A physical unit reduced to what the response calculation needs.

    :type name: str
    :param name: Name of the unit, only used for display, e.g. ``"NM/S"``.
    :type category: str
    :param category: Physical category, one of :data:`CATEGORIES`.
    :type power: int
    :param power: Power-of-ten exponent of the unit relative to its SI base,
        e.g. ``-9`` for nanometers.

    >>> Unit("NM/S", VELOCITY, -9).conversion_index
    2
    >>> Unit("V", OTHER).conversion_index
    -1
    """
    def __init__(self, name, category=OTHER, power=0):
        self.name = name
        self.category = category
        self.power = power

    def __str__(self):
        return self.name

    def __repr__(self):
        return "Unit(%r, %r, %r)" % (self.name, self.category, self.power)

    def __hash__(self):
        return hash((self.name, self.category, self.power))

    @property
    def category(self):
        return self._category

    @category.setter
    def category(self, value):
        value = str(value).upper()
        if value not in CATEGORIES:
            msg = "'%s' is not a valid unit category. Valid ones are: %s" % (
                value, ", ".join(CATEGORIES))
            raise ValueError(msg)
        self._category = value

    @property
    def power(self):
        return self._power

    @power.setter
    def power(self, value):
        self._power = int(value)

    @property
    def conversion_index(self):
        """
        Unit conversion index of this unit, or :const:`NO_UNIT_CONV` if the
        unit can not take part in displacement/velocity/acceleration
        conversion.
        """
        return _CATEGORY_TO_CONV.get(self.category, NO_UNIT_CONV)


def get_unit_conversion(output):
    """
    Map an output unit name to a unit conversion index.

    :type output: int or str
    :param output: One of the unit conversion indices or one of ``"DEF"``,
        ``"DIS"``/``"DISP"``, ``"VEL"`` and ``"ACC"`` (case insensitive).
    :rtype: int

    >>> get_unit_conversion("disp")
    1
    >>> get_unit_conversion(3)
    3
    """
    if isinstance(output, str):
        try:
            return _OUTPUT_ALIASES[output.strip().upper()]
        except KeyError:
            msg = ("'%s' is not a valid output unit. Valid ones are: "
                   "DEF, DISP, VEL, ACC") % output
            raise ValueError(msg)
    output = int(output)
    if output < 0 or output >= len(UNIT_CONV_STRS):
        msg = "Unit conversion index %d out of range" % output
        raise ValueError(msg)
    return output


def get_unit_conversion_string(index, long=False):
    """
    Return the short (``"vel"``) or long (``"Velocity"``) name of a unit
    conversion index, ``""`` respectively ``"???"`` for unknown indices.
    """
    strings = UNIT_CONV_LONGSTRS if long else UNIT_CONV_STRS
    if 0 <= index < len(strings):
        return strings[index]
    return "???" if long else ""


# frequently used units
METER = Unit("M", DISPLACEMENT, 0)
CENTIMETER = Unit("CM", DISPLACEMENT, -2)
MILLIMETER = Unit("MM", DISPLACEMENT, -3)
NANOMETER = Unit("NM", DISPLACEMENT, -9)
METER_PER_SECOND = Unit("M/S", VELOCITY, 0)
NANOMETER_PER_SECOND = Unit("NM/S", VELOCITY, -9)
METER_PER_SECOND_SQUARED = Unit("M/S**2", ACCELERATION, 0)
PASCAL = Unit("PA", PRESSURE, 0)
TESLA = Unit("T", MAGNETIC_FLUX_DENSITY, 0)
CENTIGRADE = Unit("C", TEMPERATURE, 0)
VOLT = Unit("V", OTHER, 0)
COUNTS = Unit("COUNTS", OTHER, 0)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
