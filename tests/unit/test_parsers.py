"""Tests des chargeurs d'encaissements."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from datetime import date, datetime
from decimal import Decimal

import openpyxl
import pytest

from repartition_contentieux.core.exceptions import ParseError, UnsupportedFormatError
from repartition_contentieux.parsers.parser_factory import ParserFactory
from repartition_contentieux.parsers.csv_parser import CSVParser
from repartition_contentieux.parsers.excel_parser import ExcelParser

FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestParserFactory:
    """Tests de la factory de chargeurs."""

    def setup_method(self):
        self.factory = ParserFactory()

    def test_csv_selection(self):
        parser = self.factory.get_parser(Path("test.csv"))
        assert isinstance(parser, CSVParser)

    def test_excel_selection(self):
        parser = self.factory.get_parser(Path("Encaissements.XLSX"))
        assert isinstance(parser, ExcelParser)

    def test_format_non_supporte(self):
        with pytest.raises(UnsupportedFormatError):
            self.factory.get_parser(Path("test.pdf"))

    def test_formats_supportes(self):
        assert self.factory.formats_supportes() == [".csv", ".xlsx"]


class TestCSVParser:
    """Tests du chargeur CSV."""

    def setup_method(self):
        self.parser = CSVParser()

    def test_peut_traiter(self):
        assert self.parser.peut_traiter(Path("test.csv"))
        assert not self.parser.peut_traiter(Path("test.xlsx"))

    def test_parsing_fixture(self):
        encaissements = self.parser.parser(FIXTURES / "encaissements_2024_q1.csv")
        assert len(encaissements) == 4
        premier = encaissements[0]
        assert premier.numero_affaire == "AFF-2024-001"
        assert premier.contrevenant == "Societe Alpha"
        assert premier.montant_total == Decimal("150.00")
        assert premier.montant_encaisse == Decimal("100.00")
        assert premier.date_encaissement == date(2024, 1, 15)
        assert encaissements[2].montant_total == Decimal("1000.00")

    def test_colonnes_alternatives(self):
        encaissements = self.parser.parser(FIXTURES / "encaissements_xaf.csv")
        assert [e.numero_affaire for e in encaissements] == ["CT-01", "CT-02"]
        assert encaissements[0].montant_encaisse == Decimal("100000")
        assert encaissements[1].montant_total == Decimal("30000")
        assert encaissements[1].date_encaissement is None

    def test_separateur_virgule(self):
        encaissements = self.parser.parser(FIXTURES / "encaissements_invalides.csv")
        assert len(encaissements) == 3
        assert encaissements[1].montant_encaisse == Decimal("80.00")

    def test_colonnes_manquantes(self, tmp_path):
        chemin = tmp_path / "incomplet.csv"
        chemin.write_text("numero_affaire;contrevenant\nAFF-1;Alpha\n", encoding="utf-8")
        with pytest.raises(ParseError, match="montant_total"):
            self.parser.parser(chemin)

    def test_montant_illisible(self, tmp_path):
        chemin = tmp_path / "illisible.csv"
        chemin.write_text(
            "numero_affaire;montant_total;montant_encaisse\n"
            "AFF-1;100,00;50,00\n"
            "AFF-2;100,00;cinquante\n",
            encoding="utf-8",
        )
        with pytest.raises(ParseError, match="ligne 3"):
            self.parser.parser(chemin)

    def test_numero_absent(self, tmp_path):
        chemin = tmp_path / "sans_numero.csv"
        chemin.write_text("numero_affaire;montant_total;montant_encaisse\n;100;50\n", encoding="utf-8")
        with pytest.raises(ParseError, match="numero d'affaire absent"):
            self.parser.parser(chemin)

    def test_date_illisible(self, tmp_path):
        chemin = tmp_path / "date_courte.csv"
        chemin.write_text(
            "numero_affaire;montant_total;montant_encaisse;date_encaissement\n"
            "AFF-1;100,00;100,00;15/01/2024\n"
            "AFF-2;100,00;100,00;02/04/24\n",
            encoding="utf-8",
        )
        with pytest.raises(ParseError, match="ligne 3 : date illisible"):
            self.parser.parser(chemin)

    def test_date_vide(self, tmp_path):
        chemin = tmp_path / "sans_date.csv"
        chemin.write_text(
            "numero_affaire;montant_total;montant_encaisse;date_encaissement\n"
            "AFF-1;100,00;100,00;\n",
            encoding="utf-8",
        )
        assert self.parser.parser(chemin)[0].date_encaissement is None

    def test_fichier_vide(self, tmp_path):
        chemin = tmp_path / "vide.csv"
        chemin.write_text("", encoding="utf-8")
        with pytest.raises(ParseError):
            self.parser.parser(chemin)

    def test_encodage_latin1(self, tmp_path):
        chemin = tmp_path / "latin1.csv"
        chemin.write_bytes(
            "numero_affaire;contrevenant;montant_total;montant_encaisse\n"
            "AFF-1;Société Générale;100,00;100,00\n".encode("latin-1")
        )
        encaissements = self.parser.parser(chemin)
        assert encaissements[0].contrevenant == "Société Générale"


class TestExcelParser:
    """Tests du chargeur Excel."""

    def setup_method(self):
        self.parser = ExcelParser()

    def _creer_classeur(self, chemin, lignes):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Encaissements"
        for ligne in lignes:
            ws.append(ligne)
        wb.save(chemin)

    def test_parsing_classeur(self, tmp_path):
        chemin = tmp_path / "encaissements.xlsx"
        self._creer_classeur(chemin, [
            ["N° Affaire", "Contrevenant", "Montant Amende", "Montant Encaisse", "Date"],
            ["AFF-1", "Alpha", 1500, 1000, datetime(2024, 2, 10)],
            [None, None, None, None, None],
            ["AFF-2", "Beta", "2 000,50", "2 000,50", "15/03/2024"],
        ])
        encaissements = self.parser.parser(chemin)
        assert len(encaissements) == 2
        assert encaissements[0].montant_total == Decimal("1500")
        assert encaissements[0].date_encaissement == date(2024, 2, 10)
        assert encaissements[1].montant_encaisse == Decimal("2000.50")
        assert encaissements[1].date_encaissement == date(2024, 3, 15)

    def test_fichier_corrompu(self, tmp_path):
        chemin = tmp_path / "corrompu.xlsx"
        chemin.write_bytes(b"pas un classeur")
        with pytest.raises(ParseError):
            self.parser.parser(chemin)
