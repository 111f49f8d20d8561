"""Validation structurelle des CEP reçus en entrée."""

import re

from cep_weather.domain.entities import PostalCode
from cep_weather.domain.errors import InvalidCodeError, Stage

POSTAL_CODE_LENGTH = 8
# [0-9] et non \d: les chiffres Unicode non ASCII sont refusés.
_DIGITS = re.compile(r"[0-9]+")


def validate_postal_code(raw: str | None) -> PostalCode:
    """Valide un CEP brut et le retourne tel quel.

    Aucune normalisation (pas de trim, pas de suppression de tiret).

    Raises:
        InvalidCodeError: longueur différente de 8 ou caractère non numérique.
    """
    if not isinstance(raw, str) or len(raw) != POSTAL_CODE_LENGTH:
        raise InvalidCodeError(stage=Stage.VALIDATING)
    if _DIGITS.fullmatch(raw) is None:
        raise InvalidCodeError(stage=Stage.VALIDATING)
    return PostalCode(raw)
