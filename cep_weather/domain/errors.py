"""Taxonomie fermée des erreurs du cas d'usage.

Chaque erreur porte un `kind` (ensemble fermé `ErrorKind`) et l'étape du pipeline (`Stage`) où elle
s'est produite. La frontière HTTP traduit `kind` en code de statut; les appelants branchent sur
`kind` plutôt que sur l'identité d'une instance.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Catégories d'erreurs exposées aux appelants."""

    INVALID_CODE = "invalid_code"
    CODE_NOT_FOUND = "code_not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class Stage(str, Enum):
    """Étapes linéaires du pipeline de résolution."""

    VALIDATING = "validating"
    RESOLVING_ADDRESS = "resolving_address"
    RESOLVING_WEATHER = "resolving_weather"
    CONVERTING = "converting"
    DONE = "done"


class CoreError(Exception):
    """Erreur de base du cas d'usage."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = "temperature lookup failed"

    def __init__(self, message: str | None = None, *, stage: Stage) -> None:
        self.message = message or self.default_message
        self.stage = stage
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, stage={self.stage.value!r})"


class InvalidCodeError(CoreError):
    """Le code fourni n'est pas un CEP bien formé; aucun appel réseau n'a eu lieu."""

    kind = ErrorKind.INVALID_CODE
    default_message = "invalid zipcode"


class CodeNotFoundError(CoreError):
    """Un service amont a signalé explicitement que le CEP ou la ville n'existe pas."""

    kind = ErrorKind.CODE_NOT_FOUND
    default_message = "can not find zipcode"


class UpstreamUnavailableError(CoreError):
    """Un service amont a échoué (réseau, statut inattendu, réponse illisible)."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    default_message = "upstream service unavailable"


class DeadlineExceededError(UpstreamUnavailableError):
    """L'échéance de la requête a expiré pendant l'attente d'un service amont."""

    default_message = "upstream service timed out"
