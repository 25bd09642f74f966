"""
Fuel Efficiency Calculator

Combines the distance of all trips with the volume and cost of fuel
expenses.

    km: efficiency is volume per 100 km (e.g. L/100km)
    mi: efficiency is miles per volume unit (e.g. MPG)

Cost per distance uses the raw fuel cost. Cost is a currency amount
and is never unit-converted.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Union

from tripledger.analytics.totals import (
    total_distance,
    total_expense_amount,
    total_fuel_volume,
)
from tripledger.analytics.units import convert_distance, convert_volume
from tripledger.models.records import DistanceUnit, Expense, Trip, VolumeUnit
from tripledger.models.summary import FuelEfficiency


def _round_half_up(value: float) -> float:
    """Two decimal places, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_fuel_efficiency(
    trips: Sequence[Trip],
    fuel_expenses: Sequence[Expense],
    distance_unit: Union[DistanceUnit, str],
    volume_unit: Union[VolumeUnit, str],
) -> FuelEfficiency:
    """
    Fuel efficiency and cost per distance unit, rounded to 2 places.

    `fuel_expenses` is expected to be pre-filtered to the fuel category.
    Returns zeros when there is no distance or no recorded volume.
    """
    distance_unit = DistanceUnit(distance_unit)
    volume_unit = VolumeUnit(volume_unit)

    distance = total_distance(trips)
    volume = total_fuel_volume(fuel_expenses)
    fuel_cost = total_expense_amount(fuel_expenses)

    if distance == 0 or volume == 0:
        return FuelEfficiency(efficiency=0.0, cost_per_distance=0.0)

    distance = convert_distance(distance, DistanceUnit.KILOMETERS, distance_unit)
    volume = convert_volume(volume, VolumeUnit.LITERS, volume_unit)

    if distance_unit == DistanceUnit.KILOMETERS:
        efficiency = volume * 100 / distance
    else:
        efficiency = distance / volume

    cost_per_distance = float(fuel_cost) / distance

    return FuelEfficiency(
        efficiency=_round_half_up(efficiency),
        cost_per_distance=_round_half_up(cost_per_distance),
    )


def efficiency_label(
    distance_unit: Union[DistanceUnit, str],
    volume_unit: Union[VolumeUnit, str],
) -> str:
    """Display label for an efficiency value in the given units."""
    distance_unit = DistanceUnit(distance_unit)
    volume_unit = VolumeUnit(volume_unit)
    if distance_unit == DistanceUnit.KILOMETERS and volume_unit == VolumeUnit.LITERS:
        return "L/100km"
    if distance_unit == DistanceUnit.MILES and volume_unit == VolumeUnit.GALLONS:
        return "MPG"
    return f"{volume_unit.value}/{distance_unit.value}"
