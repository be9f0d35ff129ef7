"""Modeles de donnees pour les encaissements et les rapports de repartition."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from repartition_contentieux.config.constants import Devise
from repartition_contentieux.core.exceptions import InvalidAmount, RepartitionError
from repartition_contentieux.utils.number_utils import parser_montant


@dataclass(frozen=True)
class DateRange:
    debut: date
    fin: date

    def contient(self, jour: date) -> bool:
        return self.debut <= jour <= self.fin


# --- Encaissements ---

@dataclass(frozen=True)
class EncaissementAffaire:
    """Encaissement d'une affaire sur la periode, tel que fourni par l'amont."""
    numero_affaire: str
    contrevenant: str = ""
    montant_total: Decimal = Decimal("0")      # montant du (amende)
    montant_encaisse: Decimal = Decimal("0")   # encaisse sur la periode
    date_encaissement: Optional[date] = None

    @classmethod
    def depuis_tuple(cls, ligne: tuple) -> EncaissementAffaire:
        """Construit depuis ``(numero_affaire, contrevenant, montant_total, montant_encaisse)``."""
        if not isinstance(ligne, (tuple, list)) or len(ligne) != 4:
            numero = str(ligne[0]) if isinstance(ligne, (tuple, list)) and ligne else None
            raise RepartitionError(
                f"ligne d'encaissement mal formee, 4 champs attendus : {ligne!r}", numero,
            )
        numero, contrevenant, total, encaisse = ligne
        try:
            montant_total = parser_montant(total)
            montant_encaisse = parser_montant(encaisse)
        except ValueError as e:
            raise InvalidAmount(str(e), str(numero)) from e
        return cls(
            numero_affaire=str(numero),
            contrevenant=contrevenant or "",
            montant_total=montant_total,
            montant_encaisse=montant_encaisse,
        )

    @property
    def reste_a_recouvrer(self) -> Decimal:
        return self.montant_total - self.montant_encaisse


@dataclass(frozen=True)
class LigneRepartition:
    """Une ligne du rapport : un encaissement et ses parts Etat / Collectivite."""
    numero_affaire: str
    contrevenant: str
    montant_total: Decimal
    montant_encaisse: Decimal
    part_etat: Decimal
    part_collectivite: Decimal

    @property
    def reste_a_recouvrer(self) -> Decimal:
        return self.montant_total - self.montant_encaisse


@dataclass(frozen=True)
class RapportRepartition:
    """Etat de repartition des affaires contentieuses pour une periode.

    Construit une fois par demande de rapport, jamais modifie ensuite.
    Les statistiques non definies (total nul, aucune affaire) valent None.
    """
    periode: str
    lignes: tuple[LigneRepartition, ...] = ()
    devise: Devise = Devise.EUR
    regle: str = ""
    total_du: Decimal = Decimal("0")
    total_encaisse: Decimal = Decimal("0")
    total_part_etat: Decimal = Decimal("0")
    total_part_collectivite: Decimal = Decimal("0")
    pourcentage_etat: Optional[Decimal] = None
    pourcentage_collectivite: Optional[Decimal] = None
    moyenne_encaissement: Optional[Decimal] = None
    taux_recouvrement: Optional[Decimal] = None

    @property
    def nombre_affaires(self) -> int:
        return len(self.lignes)

    @property
    def est_vide(self) -> bool:
        return not self.lignes

    @property
    def total_reste_a_recouvrer(self) -> Decimal:
        return self.total_du - self.total_encaisse


# --- Repartition detaillee (cahier des charges) ---

@dataclass(frozen=True)
class PartIndividuelle:
    role: str          # "chef" ou "saisissant"
    rang: int          # 1..n dans son role
    montant: Decimal


@dataclass(frozen=True)
class RepartitionDetaillee:
    """Repartition complete d'un encaissement entre tous les beneficiaires."""
    produit_disponible: Decimal
    part_indicateur: Decimal
    produit_net: Decimal
    # Niveau 1
    part_flcf: Decimal
    part_tresor: Decimal
    produit_net_ayants_droits: Decimal
    # Niveau 2
    part_chefs: Decimal
    part_saisissants: Decimal
    part_mutuelle: Decimal
    part_masse_commune: Decimal
    part_interessement: Decimal
    parts_individuelles: tuple[PartIndividuelle, ...] = field(default_factory=tuple)

    @property
    def total_niveau_1(self) -> Decimal:
        return self.part_flcf + self.part_tresor + self.produit_net_ayants_droits

    @property
    def total_niveau_2(self) -> Decimal:
        return (
            self.part_chefs + self.part_saisissants + self.part_mutuelle
            + self.part_masse_commune + self.part_interessement
        )

    @property
    def total_reparti(self) -> Decimal:
        return self.part_indicateur + self.total_niveau_1

    @property
    def est_equilibree(self) -> bool:
        return (
            self.total_reparti == self.produit_disponible
            and self.total_niveau_2 == self.produit_net_ayants_droits
        )

    def parts_par_role(self, role: str) -> list[PartIndividuelle]:
        return [p for p in self.parts_individuelles if p.role == role]
