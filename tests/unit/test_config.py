"""Tests de la configuration."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from decimal import Decimal

import pytest

from repartition_contentieux.config.constants import Devise, PolitiqueErreurs
from repartition_contentieux.config.settings import AppConfig, RepartitionConfig, ReportConfig
from repartition_contentieux.core.exceptions import ConfigError


class TestRepartitionConfig:

    def test_valeurs_par_defaut(self):
        config = RepartitionConfig()
        assert config.pourcentage_etat == Decimal("60")
        assert config.devise == Devise.EUR
        assert config.politique_erreurs == PolitiqueErreurs.ARRETER

    def test_conversion_des_chaines(self):
        config = RepartitionConfig("33.5", "XAF", "ignorer")
        assert config.pourcentage_etat == Decimal("33.5")
        assert config.devise == Devise.XAF
        assert config.politique_erreurs == PolitiqueErreurs.IGNORER

    def test_regle(self):
        regle = RepartitionConfig(pourcentage_etat=70, devise=Devise.XAF).regle()
        assert regle.pourcentage_etat == Decimal("70")
        assert regle.devise == Devise.XAF

    def test_pourcentage_hors_bornes(self):
        with pytest.raises(ConfigError):
            RepartitionConfig(pourcentage_etat="150")

    def test_pourcentage_illisible(self):
        with pytest.raises(ConfigError):
            RepartitionConfig(pourcentage_etat="soixante")
        with pytest.raises(ConfigError):
            RepartitionConfig(pourcentage_etat="NaN")

    def test_devise_inconnue(self):
        with pytest.raises(ConfigError):
            RepartitionConfig(devise="GBP")

    def test_politique_inconnue(self):
        with pytest.raises(ConfigError):
            RepartitionConfig(politique_erreurs="continuer")


class TestAppConfig:

    def test_report_config_format_inconnu(self):
        with pytest.raises(ConfigError):
            ReportConfig(format_defaut="pdf")

    def test_repertoires_crees(self, tmp_path):
        config = AppConfig(base_dir=tmp_path)
        assert config.data_dir == tmp_path / "data"
        assert config.reports_dir.is_dir()
        assert config.audit_log_path == tmp_path / "data" / "audit.log"
