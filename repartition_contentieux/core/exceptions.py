"""Exceptions personnalisees pour la repartition des affaires contentieuses."""

from typing import Optional


class ContentieuxError(Exception):
    """Exception de base."""


class RepartitionError(ContentieuxError):
    """Erreur lors du calcul d'une repartition."""

    def __init__(self, message: str, numero_affaire: Optional[str] = None):
        self.numero_affaire = numero_affaire
        if numero_affaire:
            message = f"Affaire {numero_affaire} : {message}"
        super().__init__(message)


class InvalidAmount(RepartitionError):
    """Montant negatif, non fini ou encaissement superieur au montant du."""


class InvalidRule(RepartitionError):
    """Regle de repartition invalide (pourcentage hors [0, 100], bareme mal forme)."""


class DuplicateCaseError(RepartitionError):
    """Meme numero d'affaire present deux fois dans une periode."""


class RecordError(RepartitionError):
    """Erreur sur une ligne d'encaissement, avec sa position dans la periode."""

    def __init__(self, index: int, numero_affaire: str, cause: RepartitionError):
        self.index = index
        self.cause = cause
        super().__init__(f"encaissement numero {index} rejete ({cause})", None)
        self.numero_affaire = numero_affaire


class ParseError(ContentieuxError):
    """Erreur lors de la lecture d'un fichier d'encaissements."""


class UnsupportedFormatError(ParseError):
    """Format de fichier non supporte."""


class ReportError(ContentieuxError):
    """Erreur lors de la generation du rapport."""


class ConfigError(ContentieuxError):
    """Erreur de configuration."""
