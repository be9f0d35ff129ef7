"""Classe de base abstraite pour les chargeurs d'encaissements."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from repartition_contentieux.core.exceptions import ParseError
from repartition_contentieux.models.affaires import EncaissementAffaire
from repartition_contentieux.utils.date_utils import parser_date
from repartition_contentieux.utils.number_utils import parser_montant


# Mapping flexible des noms de colonnes vers les champs internes
COLONNES_MAPPING = {
    # Affaire
    "numero_affaire": "numero_affaire", "affaire": "numero_affaire",
    "n_affaire": "numero_affaire", "n°_affaire": "numero_affaire",
    "num_affaire": "numero_affaire", "reference": "numero_affaire",
    # Contrevenant
    "contrevenant": "contrevenant", "nom_contrevenant": "contrevenant",
    "contrevenant_nom": "contrevenant",
    # Montant du
    "montant_total": "montant_total", "montant_amende": "montant_total",
    "montant_du": "montant_total", "amende": "montant_total",
    # Montant encaisse
    "montant_encaisse": "montant_encaisse", "encaissement": "montant_encaisse",
    "encaisse": "montant_encaisse", "montant_encaissement": "montant_encaisse",
    # Date
    "date_encaissement": "date_encaissement", "date": "date_encaissement",
}

COLONNES_OBLIGATOIRES = ("numero_affaire", "montant_total", "montant_encaisse")


def normaliser_colonne(nom: Any) -> str:
    return str(nom or "").strip().lower().replace(" ", "_")


class BaseParser(ABC):
    """Interface commune pour tous les chargeurs d'encaissements."""

    @abstractmethod
    def peut_traiter(self, chemin: Path) -> bool:
        """Verifie si ce chargeur peut traiter le fichier donne."""

    @abstractmethod
    def parser(self, chemin: Path) -> list[EncaissementAffaire]:
        """Lit le fichier et retourne les encaissements dans l'ordre du fichier."""

    @staticmethod
    def _mapper_colonnes(entetes: list, chemin: Path) -> dict[int, str]:
        """Associe la position de chaque colonne reconnue a son champ interne."""
        col_map = {}
        for i, entete in enumerate(entetes):
            champ = COLONNES_MAPPING.get(normaliser_colonne(entete))
            if champ and champ not in col_map.values():
                col_map[i] = champ

        manquantes = [c for c in COLONNES_OBLIGATOIRES if c not in col_map.values()]
        if manquantes:
            raise ParseError(
                f"Colonnes manquantes dans {chemin.name} : {', '.join(manquantes)}"
            )
        return col_map

    @staticmethod
    def _construire_encaissement(
        valeurs: list, col_map: dict[int, str], chemin: Path, ligne: int,
    ) -> Optional[EncaissementAffaire]:
        """Construit un encaissement a partir d'une ligne ; None pour une ligne vide."""
        champs = {
            champ: valeurs[i] if i < len(valeurs) else None
            for i, champ in col_map.items()
        }
        if all(v is None or not str(v).strip() for v in champs.values()):
            return None

        numero = str(champs["numero_affaire"] or "").strip()
        if not numero:
            raise ParseError(f"{chemin.name}, ligne {ligne} : numero d'affaire absent")

        try:
            montant_total = parser_montant(champs["montant_total"])
            montant_encaisse = parser_montant(champs["montant_encaisse"])
        except ValueError as e:
            raise ParseError(f"{chemin.name}, ligne {ligne} : {e}") from e

        date_encaissement = champs.get("date_encaissement")
        if hasattr(date_encaissement, "date"):
            # openpyxl renvoie des datetime
            date_encaissement = date_encaissement.date()
        elif date_encaissement is not None and not hasattr(date_encaissement, "year"):
            texte = str(date_encaissement).strip()
            date_encaissement = parser_date(texte)
            # Une date illisible ferait retenir la ligne dans toutes les periodes
            if texte and date_encaissement is None:
                raise ParseError(f"{chemin.name}, ligne {ligne} : date illisible {texte!r}")

        return EncaissementAffaire(
            numero_affaire=numero,
            contrevenant=str(champs.get("contrevenant") or "").strip(),
            montant_total=montant_total,
            montant_encaisse=montant_encaisse,
            date_encaissement=date_encaissement,
        )
