"""Tests de la generation des etats et du journal d'audit."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import json
from decimal import Decimal

import pytest

from repartition_contentieux.config.constants import Devise
from repartition_contentieux.core.exceptions import ReportError
from repartition_contentieux.models.affaires import EncaissementAffaire
from repartition_contentieux.repartition.moteur import construire_rapport
from repartition_contentieux.repartition.regles import RegleRepartition
from repartition_contentieux.reporting.report_generator import ReportGenerator
from repartition_contentieux.security.audit_logger import AuditLogger


def _rapport():
    return construire_rapport("2024-Q1", [
        EncaissementAffaire("AFF-1", "<Alpha & Cie>", Decimal("150.00"), Decimal("100.00")),
        EncaissementAffaire("AFF-2", "Beta", Decimal("1200.00"), Decimal("1200.00")),
    ], RegleRepartition(Decimal("60")))


class TestReportGenerator:
    """Tests du generateur d'etats."""

    def setup_method(self):
        self.generator = ReportGenerator()

    def test_json_structure(self):
        data = self.generator.construire_json(_rapport())
        assert data["metadata"]["periode"] == "2024-Q1"
        assert data["metadata"]["nb_affaires"] == 2
        assert data["totaux"]["total_encaisse"] == "1300.00"
        assert data["totaux"]["total_part_etat"] == "780.00"
        assert data["totaux"]["reste_a_recouvrer"] == "50.00"
        assert data["statistiques"]["pourcentage_etat"] == "60.00"
        assert data["statistiques"]["moyenne_encaissement"] == "650.00"
        assert data["affaires"][0]["part_collectivite"] == "40.00"

    def test_json_rapport_vide(self):
        rapport = construire_rapport("2024-Q2", [], RegleRepartition(Decimal("60")))
        data = self.generator.construire_json(rapport)
        assert data["affaires"] == []
        assert data["totaux"]["total_encaisse"] == "0"
        assert data["statistiques"]["pourcentage_etat"] is None
        assert data["statistiques"]["moyenne_encaissement"] is None

    def test_generer_json(self, tmp_path):
        chemin = self.generator.generer(_rapport(), tmp_path / "etat.json", "json")
        with open(chemin, encoding="utf-8") as f:
            data = json.load(f)
        assert data["statistiques"]["pourcentage_collectivite"] == "40.00"

    def test_generer_html(self, tmp_path):
        chemin = self.generator.generer(_rapport(), tmp_path / "sous" / "etat.html", "html")
        contenu = chemin.read_text(encoding="utf-8")
        assert "ETAT DE REPARTITION DES AFFAIRES CONTENTIEUSES" in contenu
        assert "&lt;Alpha &amp; Cie&gt;" in contenu
        assert "1 300,00 EUR" in contenu
        assert "60,00 %" in contenu

    def test_html_rapport_vide(self):
        rapport = construire_rapport("2024-Q2", [], RegleRepartition(Decimal("60"), Devise.XAF))
        contenu = self.generator.construire_html(rapport)
        assert "Aucun encaissement sur la periode" in contenu
        assert "0 FCFA" in contenu

    def test_format_inconnu(self, tmp_path):
        with pytest.raises(ReportError):
            self.generator.generer(_rapport(), tmp_path / "etat.pdf", "pdf")


class TestAuditLogger:
    """Tests du journal d'audit."""

    def test_journal_append_only(self, tmp_path):
        audit = AuditLogger(tmp_path / "logs" / "audit.log")
        audit.log_import("session-1", "encaissements.csv", 12)
        audit.log_rejet("session-1", "AFF-2", 1, "montant negatif")
        audit.log_rapport("session-1", "2024-Q1", "html", "/tmp/etat.html")

        entrees = audit.lire_journal()
        assert [e["operation"] for e in entrees] == [
            "import_encaissements", "rejet_encaissement", "generation_rapport",
        ]
        assert entrees[0]["details"]["nb_encaissements"] == 12
        assert entrees[1]["resultat"] == "rejete"
        assert entrees[1]["details"]["numero_affaire"] == "AFF-2"

    def test_journal_absent(self, tmp_path):
        assert AuditLogger(tmp_path / "audit.log").lire_journal() == []
