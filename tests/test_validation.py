"""Tests pour la validation structurelle des CEP."""

from __future__ import annotations

import pytest

from cep_weather.domain.errors import ErrorKind, InvalidCodeError, Stage
from cep_weather.domain.validation import validate_postal_code


@pytest.mark.parametrize(
    "raw",
    ["", "0", "1234567", "123456789", "2056125", " 20561250", "20561250 ", "20561-250"],
)
def test_wrong_length_is_invalid(raw: str) -> None:
    """Toute longueur différente de 8 est refusée, sans trim."""
    with pytest.raises(InvalidCodeError) as exc_info:
        validate_postal_code(raw)
    assert exc_info.value.kind is ErrorKind.INVALID_CODE
    assert exc_info.value.stage is Stage.VALIDATING


@pytest.mark.parametrize("raw", ["2056125a", "abcdefgh", "2056-250", "1234 678", "+1234567"])
def test_non_digit_is_invalid(raw: str) -> None:
    """Un caractère non numérique dans 8 caractères est refusé."""
    with pytest.raises(InvalidCodeError):
        validate_postal_code(raw)


def test_unicode_digits_are_rejected() -> None:
    """Les chiffres non ASCII (ex. arabe-indien) ne sont pas acceptés."""
    with pytest.raises(InvalidCodeError):
        validate_postal_code("٠١٢٣٤٥٦٧")


def test_none_is_invalid() -> None:
    """Une absence de valeur est traitée comme un CEP invalide."""
    with pytest.raises(InvalidCodeError):
        validate_postal_code(None)


@pytest.mark.parametrize("raw", ["20561250", "00000000", "99999999", "01001000"])
def test_valid_code_is_returned_unchanged(raw: str) -> None:
    """Un CEP de 8 chiffres est retourné à l'identique."""
    assert validate_postal_code(raw) == raw
