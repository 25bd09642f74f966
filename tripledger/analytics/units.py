"""
Unit Conversion

Pure distance and volume conversions. Stored values are always in
canonical units (km, L); these helpers convert for display and for the
fuel efficiency calculation.

No rounding happens here. Rounding is the caller's decision.
"""

from typing import Union

from tripledger.models.records import DistanceUnit, VolumeUnit


KM_TO_MILES = 0.621371
MILES_TO_KM = 1.60934
LITERS_TO_GALLONS = 0.264172
GALLONS_TO_LITERS = 3.78541


def convert_distance(
    value: float,
    from_unit: Union[DistanceUnit, str],
    to_unit: Union[DistanceUnit, str],
) -> float:
    """Convert a distance between kilometers and miles."""
    from_unit = DistanceUnit(from_unit)
    to_unit = DistanceUnit(to_unit)
    if from_unit == to_unit:
        return value
    if from_unit == DistanceUnit.KILOMETERS:
        return value * KM_TO_MILES
    return value * MILES_TO_KM


def convert_volume(
    value: float,
    from_unit: Union[VolumeUnit, str],
    to_unit: Union[VolumeUnit, str],
) -> float:
    """Convert a volume between liters and US gallons."""
    from_unit = VolumeUnit(from_unit)
    to_unit = VolumeUnit(to_unit)
    if from_unit == to_unit:
        return value
    if from_unit == VolumeUnit.LITERS:
        return value * LITERS_TO_GALLONS
    return value * GALLONS_TO_LITERS
