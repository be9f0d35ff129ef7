"""Tests de la repartition detaillee (indicateur, niveau 1, niveau 2, parts individuelles)."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from decimal import Decimal

import pytest

from repartition_contentieux.config.constants import (
    Devise, TAUX_CHEFS, TAUX_SAISISSANTS, TAUX_MUTUELLE, TAUX_MASSE_COMMUNE, TAUX_INTERESSEMENT,
)
from repartition_contentieux.core.exceptions import InvalidAmount, InvalidRule
from repartition_contentieux.repartition.detaillee import (
    ROLE_CHEF, ROLE_SAISISSANT, diviser_equitablement, repartir_detail,
)


class TestRepartirDetail:
    """Tests des formules du cahier des charges."""

    def test_avec_indicateur_en_fcfa(self):
        r = repartir_detail(
            Decimal("100000"), avec_indicateur=True, nb_chefs=3, nb_saisissants=2, devise=Devise.XAF,
        )
        assert r.part_indicateur == Decimal("10000")
        assert r.produit_net == Decimal("90000")
        assert r.part_flcf == Decimal("9000")
        assert r.part_tresor == Decimal("13500")
        assert r.produit_net_ayants_droits == Decimal("67500")
        assert r.part_chefs == Decimal("10125")
        assert r.part_saisissants == Decimal("23625")
        assert r.part_mutuelle == Decimal("3375")
        assert r.part_masse_commune == Decimal("20250")
        assert r.part_interessement == Decimal("10125")
        assert r.est_equilibree

    def test_sans_indicateur_en_euros(self):
        r = repartir_detail(Decimal("1000.00"))
        assert r.part_indicateur == Decimal("0")
        assert r.produit_net == Decimal("1000.00")
        assert r.part_flcf == Decimal("100.00")
        assert r.part_tresor == Decimal("150.00")
        assert r.produit_net_ayants_droits == Decimal("750.00")
        assert r.part_chefs == Decimal("112.50")
        assert r.part_saisissants == Decimal("262.50")
        assert r.part_mutuelle == Decimal("37.50")
        assert r.part_masse_commune == Decimal("225.00")
        assert r.part_interessement == Decimal("112.50")
        assert r.parts_individuelles == ()

    def test_parts_individuelles(self):
        r = repartir_detail(
            Decimal("100000"), avec_indicateur=True, nb_chefs=3, nb_saisissants=2, devise=Devise.XAF,
        )
        chefs = r.parts_par_role(ROLE_CHEF)
        saisissants = r.parts_par_role(ROLE_SAISISSANT)
        assert [p.montant for p in chefs] == [Decimal("3375")] * 3
        assert [p.montant for p in saisissants] == [Decimal("11813"), Decimal("11812")]
        assert [p.rang for p in saisissants] == [1, 2]
        assert sum(p.montant for p in saisissants) == r.part_saisissants

    def test_equilibre_sur_une_plage_de_montants(self):
        for montant in range(0, 5000, 37):
            r = repartir_detail(
                Decimal(montant), avec_indicateur=True, nb_chefs=2, nb_saisissants=3, devise=Devise.XAF,
            )
            assert r.est_equilibree
            assert r.part_interessement >= 0
            assert sum(p.montant for p in r.parts_par_role(ROLE_CHEF)) == r.part_chefs

    def test_montant_negatif(self):
        with pytest.raises(InvalidAmount):
            repartir_detail(Decimal("-10.00"))

    def test_nombre_de_beneficiaires_negatif(self):
        with pytest.raises(InvalidRule):
            repartir_detail(Decimal("10.00"), nb_chefs=-1)


class TestTaux:

    def test_niveau_2_complet(self):
        total = TAUX_CHEFS + TAUX_SAISISSANTS + TAUX_MUTUELLE + TAUX_MASSE_COMMUNE + TAUX_INTERESSEMENT
        assert total == Decimal("1")


class TestDiviserEquitablement:

    def test_reste_aux_premiers(self):
        assert diviser_equitablement(Decimal("0.10"), 3, Decimal("0.01")) == [
            Decimal("0.04"), Decimal("0.03"), Decimal("0.03"),
        ]

    def test_division_exacte(self):
        assert diviser_equitablement(Decimal("90"), 3, Decimal("1")) == [Decimal("30")] * 3

    def test_aucun_beneficiaire(self):
        assert diviser_equitablement(Decimal("100"), 0, Decimal("1")) == []
