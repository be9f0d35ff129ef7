"""Chargeur d'encaissements au format CSV (exports du logiciel de gestion des affaires)."""

import csv
import io
import logging
from pathlib import Path

from repartition_contentieux.core.exceptions import ParseError
from repartition_contentieux.models.affaires import EncaissementAffaire
from repartition_contentieux.parsers.base_parser import BaseParser

logger = logging.getLogger("repartition_contentieux.parsers")


class CSVParser(BaseParser):
    """Lit les encaissements d'un fichier CSV (separateur ; , ou tabulation)."""

    def peut_traiter(self, chemin: Path) -> bool:
        return chemin.suffix.lower() == ".csv"

    def parser(self, chemin: Path) -> list[EncaissementAffaire]:
        try:
            with open(chemin, "r", encoding="utf-8-sig") as f:
                contenu = f.read()
        except UnicodeDecodeError:
            with open(chemin, "r", encoding="latin-1") as f:
                contenu = f.read()
        except OSError as e:
            raise ParseError(f"Impossible de lire {chemin}: {e}") from e

        if not contenu.strip():
            raise ParseError(f"Fichier CSV vide : {chemin}")

        reader = csv.reader(io.StringIO(contenu), delimiter=self._detecter_separateur(contenu))
        entetes = next(reader, [])
        col_map = self._mapper_colonnes(entetes, chemin)

        encaissements = []
        for ligne, valeurs in enumerate(reader, start=2):
            encaissement = self._construire_encaissement(valeurs, col_map, chemin, ligne)
            if encaissement:
                encaissements.append(encaissement)

        logger.info("%s : %d encaissements lus", chemin.name, len(encaissements))
        return encaissements

    @staticmethod
    def _detecter_separateur(contenu: str) -> str:
        # L'en-tete ne contient pas de montants : ses separateurs sont fiables
        first_line = contenu.split("\n", 1)[0]
        for separateur in (";", "\t", ","):
            if separateur in first_line:
                return separateur
        return ","
