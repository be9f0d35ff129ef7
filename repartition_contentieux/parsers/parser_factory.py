"""Factory pour selectionner automatiquement le bon chargeur."""

from pathlib import Path

from repartition_contentieux.core.exceptions import UnsupportedFormatError
from repartition_contentieux.config.constants import SUPPORTED_EXTENSIONS
from repartition_contentieux.parsers.base_parser import BaseParser
from repartition_contentieux.parsers.csv_parser import CSVParser
from repartition_contentieux.parsers.excel_parser import ExcelParser


class ParserFactory:
    """Selectionne et instancie le chargeur adapte au type de fichier."""

    def __init__(self):
        self._parsers: list[BaseParser] = [
            CSVParser(),
            ExcelParser(),
        ]

    def get_parser(self, chemin: Path) -> BaseParser:
        """Retourne le chargeur adapte au fichier donne."""
        ext = chemin.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Format '{ext}' non supporte. "
                f"Formats acceptes : {', '.join(SUPPORTED_EXTENSIONS.keys())}"
            )

        for parser in self._parsers:
            if parser.peut_traiter(chemin):
                return parser

        raise UnsupportedFormatError(
            f"Aucun chargeur disponible pour le fichier {chemin.name}"
        )

    def formats_supportes(self) -> list[str]:
        """Liste les extensions de fichiers supportees."""
        return list(SUPPORTED_EXTENSIONS.keys())
