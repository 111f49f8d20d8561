"""Tests pour les conversions de température."""

from __future__ import annotations

import pytest

from cep_weather.domain.units import convert, to_fahrenheit, to_kelvin

# Constantes pour éviter les erreurs PLR2004 (Magic values)
FREEZING_F = 32
BOILING_F = 212
FREEZING_K = 273.15


def test_to_fahrenheit_reference_points() -> None:
    """0 °C = 32 °F et 100 °C = 212 °F."""
    assert to_fahrenheit(0) == FREEZING_F
    assert to_fahrenheit(100) == BOILING_F


def test_to_kelvin_reference_point() -> None:
    """0 °C = 273.15 K."""
    assert to_kelvin(0) == FREEZING_K


def test_negative_temperatures() -> None:
    """-40 est le point commun Celsius/Fahrenheit."""
    assert to_fahrenheit(-40) == pytest.approx(-40)
    assert to_kelvin(-273.15) == pytest.approx(0)


def test_convert_returns_all_units_without_rounding() -> None:
    """`convert` retourne les trois unités, sans arrondi."""
    result = convert(21.37)
    assert result.celsius == 21.37
    assert result.fahrenheit == pytest.approx(70.466)
    assert result.kelvin == pytest.approx(294.52)
    assert tuple(result) == (result.celsius, result.fahrenheit, result.kelvin)
