"""Chargeur d'encaissements au format Excel (.xlsx)."""

import logging
from pathlib import Path

import openpyxl

from repartition_contentieux.core.exceptions import ParseError
from repartition_contentieux.models.affaires import EncaissementAffaire
from repartition_contentieux.parsers.base_parser import BaseParser

logger = logging.getLogger("repartition_contentieux.parsers")


class ExcelParser(BaseParser):
    """Lit les encaissements de la premiere feuille d'un classeur Excel."""

    def peut_traiter(self, chemin: Path) -> bool:
        return chemin.suffix.lower() == ".xlsx"

    def parser(self, chemin: Path) -> list[EncaissementAffaire]:
        try:
            wb = openpyxl.load_workbook(chemin, read_only=True, data_only=True)
        except Exception as e:
            raise ParseError(f"Impossible de lire le fichier Excel {chemin}: {e}") from e

        try:
            ws = wb.worksheets[0]
            rows = ws.iter_rows(values_only=True)
            entetes = list(next(rows, ()))
            if not entetes:
                raise ParseError(f"Feuille vide dans {chemin.name}")
            col_map = self._mapper_colonnes(entetes, chemin)

            encaissements = []
            for ligne, valeurs in enumerate(rows, start=2):
                encaissement = self._construire_encaissement(list(valeurs), col_map, chemin, ligne)
                if encaissement:
                    encaissements.append(encaissement)
        finally:
            wb.close()

        logger.info("%s (%s) : %d encaissements lus", chemin.name, ws.title, len(encaissements))
        return encaissements
