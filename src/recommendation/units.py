"""
Unit conversion and display formatting.

Internally everything is Celsius, m/s and millimetres. Conversions to the
user's display unit happen once, at formatting time.
"""

from enum import Enum
from typing import Union


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


UnitLike = Union[TemperatureUnit, str]

MPS_TO_MPH = 2.23694
MPS_TO_KMH = 3.6


def parse_unit(unit: UnitLike) -> TemperatureUnit:
    """Accept an enum member or a case-insensitive unit name."""
    if isinstance(unit, TemperatureUnit):
        return unit
    return TemperatureUnit(str(unit).strip().lower())


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def delta_c_to_display(delta_c: float, unit: UnitLike) -> float:
    """Convert a temperature *difference* (not an absolute value)."""
    if parse_unit(unit) == TemperatureUnit.FAHRENHEIT:
        return delta_c * 9 / 5
    return delta_c


def temperature_symbol(unit: UnitLike) -> str:
    return "°F" if parse_unit(unit) == TemperatureUnit.FAHRENHEIT else "°C"


def format_temperature(celsius: float, unit: UnitLike) -> str:
    if parse_unit(unit) == TemperatureUnit.FAHRENHEIT:
        return f"{round(celsius_to_fahrenheit(celsius))}°F"
    return f"{round(celsius)}°C"


def format_temperature_delta(delta_c: float, unit: UnitLike) -> str:
    """
    Format the magnitude of a temperature difference.

    Fahrenheit is rendered as whole degrees, Celsius to one decimal.
    The sign is dropped; callers say "colder" / "warmer" themselves.
    """
    magnitude = abs(delta_c_to_display(delta_c, unit))
    if parse_unit(unit) == TemperatureUnit.FAHRENHEIT:
        return f"{magnitude:.0f}°F"
    return f"{magnitude:.1f}°C"


def convert_wind_speed(mps: float, unit: UnitLike) -> float:
    """m/s to mph for Fahrenheit users, km/h for Celsius users."""
    if parse_unit(unit) == TemperatureUnit.FAHRENHEIT:
        return mps * MPS_TO_MPH
    return mps * MPS_TO_KMH


def format_wind_speed(mps: float, unit: UnitLike) -> str:
    speed = round(convert_wind_speed(mps, unit))
    if parse_unit(unit) == TemperatureUnit.FAHRENHEIT:
        return f"{speed} mph"
    return f"{speed} km/h"
