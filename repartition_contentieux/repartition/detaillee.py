"""Repartition detaillee d'un encaissement selon le cahier des charges.

FORMULES :
1. Si un indicateur reel existe :
   - Part indicateur = 10% x Montant encaisse
   - Produit net = Montant encaisse - Part indicateur
   Sinon : Produit net = Montant encaisse

2. Niveau 1 (sur le produit net) :
   - FLCF = 10%, Tresor = 15%
   - Produit net ayants droits = solde

3. Niveau 2 (sur le produit net ayants droits) :
   - Chefs 15%, Saisissants 35%, Mutuelle nationale 5%, Masse commune 30%
   - Interessement = solde (15%)

4. Parts individuelles : la part des chefs (DD et DG inclus) et celle des
   saisissants sont divisees a parts egales ; les unites monetaires restantes
   vont aux premiers beneficiaires, une par beneficiaire.

Chaque niveau est egal, a l'unite pres, au montant qu'il repartit.
"""

import logging
from decimal import Decimal, ROUND_DOWN

from repartition_contentieux.config.constants import (
    Devise, DEVISE_DEFAUT,
    TAUX_INDICATEUR, TAUX_FLCF, TAUX_TRESOR,
    TAUX_CHEFS, TAUX_SAISISSANTS, TAUX_MUTUELLE, TAUX_MASSE_COMMUNE,
)
from repartition_contentieux.core.exceptions import InvalidRule
from repartition_contentieux.models.affaires import PartIndividuelle, RepartitionDetaillee
from repartition_contentieux.repartition.moteur import verifier_montant
from repartition_contentieux.utils.number_utils import arrondir

logger = logging.getLogger("repartition_contentieux.repartition")

ROLE_CHEF = "chef"
ROLE_SAISISSANT = "saisissant"


def diviser_equitablement(montant: Decimal, nombre: int, quantum: Decimal) -> list[Decimal]:
    """Divise un montant en `nombre` parts egales dont la somme vaut exactement le montant."""
    if nombre <= 0:
        return []
    base = (montant / nombre).quantize(quantum, rounding=ROUND_DOWN)
    reste = int((montant - base * nombre) / quantum)
    return [base + quantum if i < reste else base for i in range(nombre)]


def repartir_detail(
    montant_encaisse: Decimal,
    avec_indicateur: bool = False,
    nb_chefs: int = 0,
    nb_saisissants: int = 0,
    devise: Devise = DEVISE_DEFAUT,
    numero_affaire: str = None,
) -> RepartitionDetaillee:
    """Calcule la repartition complete d'un encaissement.

    Args:
        montant_encaisse: Montant encaisse (decimal positif ou nul).
        avec_indicateur: Vrai si l'affaire a un indicateur reel.
        nb_chefs: Nombre de chefs beneficiaires, DD et DG compris.
        nb_saisissants: Nombre d'agents saisissants.
        devise: Devise de l'encaissement (fixe l'unite d'arrondi).
        numero_affaire: Identifiant repris dans les erreurs.
    """
    quantum = devise.quantum
    montant = verifier_montant(montant_encaisse, "montant encaisse", quantum, numero_affaire)
    if nb_chefs < 0 or nb_saisissants < 0:
        raise InvalidRule("nombre de beneficiaires negatif", numero_affaire)

    part_indicateur = arrondir(montant * TAUX_INDICATEUR, quantum) if avec_indicateur else Decimal(0)
    produit_net = montant - part_indicateur

    part_flcf = arrondir(produit_net * TAUX_FLCF, quantum)
    part_tresor = arrondir(produit_net * TAUX_TRESOR, quantum)
    produit_net_droits = produit_net - part_flcf - part_tresor

    part_chefs = arrondir(produit_net_droits * TAUX_CHEFS, quantum)
    part_saisissants = arrondir(produit_net_droits * TAUX_SAISISSANTS, quantum)
    part_mutuelle = arrondir(produit_net_droits * TAUX_MUTUELLE, quantum)
    part_masse_commune = arrondir(produit_net_droits * TAUX_MASSE_COMMUNE, quantum)
    part_interessement = (
        produit_net_droits - part_chefs - part_saisissants - part_mutuelle - part_masse_commune
    )

    parts = [
        PartIndividuelle(ROLE_CHEF, rang, m)
        for rang, m in enumerate(diviser_equitablement(part_chefs, nb_chefs, quantum), start=1)
    ]
    parts += [
        PartIndividuelle(ROLE_SAISISSANT, rang, m)
        for rang, m in enumerate(diviser_equitablement(part_saisissants, nb_saisissants, quantum), start=1)
    ]

    logger.debug(
        "Repartition %s : net %s, FLCF %s, Tresor %s, ayants droits %s",
        numero_affaire or montant, produit_net, part_flcf, part_tresor, produit_net_droits,
    )

    return RepartitionDetaillee(
        produit_disponible=montant,
        part_indicateur=part_indicateur,
        produit_net=produit_net,
        part_flcf=part_flcf,
        part_tresor=part_tresor,
        produit_net_ayants_droits=produit_net_droits,
        part_chefs=part_chefs,
        part_saisissants=part_saisissants,
        part_mutuelle=part_mutuelle,
        part_masse_commune=part_masse_commune,
        part_interessement=part_interessement,
        parts_individuelles=tuple(parts),
    )
