"""Conversions de température à partir des degrés Celsius (aucun arrondi)."""

from typing import NamedTuple

KELVIN_OFFSET = 273.15


class Conversion(NamedTuple):
    celsius: float
    fahrenheit: float
    kelvin: float


def to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET


def convert(celsius: float) -> Conversion:
    """Retourne la température dans les trois unités."""
    return Conversion(celsius, to_fahrenheit(celsius), to_kelvin(celsius))
