"""Regles de repartition du produit encaisse entre l'Etat et la Collectivite.

Deux formes de regle :
- RegleRepartition : pourcentage fixe pour l'Etat, la Collectivite recoit le solde
- BaremeRepartition : bareme par tranches de montant encaisse

Les regles sont fournies par l'appelant (configuration) ; leur validite est
controlee au moment du calcul pour que l'erreur soit rattachee a l'affaire.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from repartition_contentieux.config.constants import (
    Devise, DEVISE_DEFAUT, POURCENTAGE_MIN, POURCENTAGE_MAX,
)
from repartition_contentieux.core.exceptions import InvalidRule


def _valider_pourcentage(pourcentage: Decimal, numero_affaire: Optional[str] = None) -> Decimal:
    if not isinstance(pourcentage, Decimal) or not pourcentage.is_finite():
        raise InvalidRule(f"pourcentage Etat invalide : {pourcentage!r}", numero_affaire)
    if not POURCENTAGE_MIN <= pourcentage <= POURCENTAGE_MAX:
        raise InvalidRule(
            f"pourcentage Etat {pourcentage} hors de l'intervalle [0, 100]", numero_affaire,
        )
    return pourcentage


def _en_decimal(valeur):
    if isinstance(valeur, (int, float, str)) and not isinstance(valeur, bool):
        try:
            return Decimal(str(valeur))
        except InvalidOperation:
            return valeur
    return valeur


class RegleBase(ABC):
    """Interface commune des regles de repartition."""

    devise: Devise

    @abstractmethod
    def pourcentage_etat_pour(self, montant: Decimal, numero_affaire: Optional[str] = None) -> Decimal:
        """Pourcentage (0-100) revenant a l'Etat pour ce montant encaisse."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Libelle de la regle, repris dans l'en-tete du rapport."""


@dataclass(frozen=True)
class RegleRepartition(RegleBase):
    """Repartition a pourcentage fixe (ex. 60% Etat / 40% Collectivite)."""
    pourcentage_etat: Decimal
    devise: Devise = DEVISE_DEFAUT

    def __post_init__(self):
        object.__setattr__(self, "pourcentage_etat", _en_decimal(self.pourcentage_etat))

    def pourcentage_etat_pour(self, montant: Decimal, numero_affaire: Optional[str] = None) -> Decimal:
        return _valider_pourcentage(self.pourcentage_etat, numero_affaire)

    @property
    def description(self) -> str:
        try:
            _valider_pourcentage(self.pourcentage_etat)
        except InvalidRule:
            return f"Etat {self.pourcentage_etat}% (regle invalide)"
        collectivite = POURCENTAGE_MAX - self.pourcentage_etat
        return f"Etat {self.pourcentage_etat}% / Collectivite {collectivite}%"


@dataclass(frozen=True)
class TrancheBareme:
    """Tranche d'un bareme : s'applique jusqu'a `plafond` inclus (None = sans plafond)."""
    plafond: Optional[Decimal]
    pourcentage_etat: Decimal

    def __post_init__(self):
        if self.plafond is not None:
            object.__setattr__(self, "plafond", _en_decimal(self.plafond))
        object.__setattr__(self, "pourcentage_etat", _en_decimal(self.pourcentage_etat))


@dataclass(frozen=True)
class BaremeRepartition(RegleBase):
    """Bareme par tranches : le pourcentage Etat depend du montant encaisse.

    Les tranches sont ordonnees par plafond croissant ; la derniere doit
    etre sans plafond pour couvrir tous les montants.
    """
    tranches: tuple[TrancheBareme, ...]
    devise: Devise = DEVISE_DEFAUT

    def __post_init__(self):
        object.__setattr__(self, "tranches", tuple(self.tranches))

    def valider(self, numero_affaire: Optional[str] = None) -> None:
        if not self.tranches:
            raise InvalidRule("bareme vide", numero_affaire)
        precedent = None
        for i, tranche in enumerate(self.tranches):
            _valider_pourcentage(tranche.pourcentage_etat, numero_affaire)
            dernier = i == len(self.tranches) - 1
            if tranche.plafond is None:
                if not dernier:
                    raise InvalidRule(
                        "seule la derniere tranche peut etre sans plafond", numero_affaire,
                    )
                continue
            if dernier:
                raise InvalidRule("la derniere tranche doit etre sans plafond", numero_affaire)
            if not isinstance(tranche.plafond, Decimal) or not tranche.plafond.is_finite():
                raise InvalidRule(f"plafond invalide : {tranche.plafond!r}", numero_affaire)
            if precedent is not None and tranche.plafond <= precedent:
                raise InvalidRule("plafonds du bareme non croissants", numero_affaire)
            precedent = tranche.plafond

    def pourcentage_etat_pour(self, montant: Decimal, numero_affaire: Optional[str] = None) -> Decimal:
        self.valider(numero_affaire)
        for tranche in self.tranches:
            if tranche.plafond is None or montant <= tranche.plafond:
                return tranche.pourcentage_etat
        # Inatteignable : la derniere tranche est sans plafond
        raise InvalidRule("aucune tranche applicable", numero_affaire)

    @property
    def description(self) -> str:
        morceaux = []
        for tranche in self.tranches:
            borne = f"<= {tranche.plafond}" if tranche.plafond is not None else "au-dela"
            morceaux.append(f"{borne} : Etat {tranche.pourcentage_etat}%")
        return "Bareme (" + " ; ".join(morceaux) + ")"
