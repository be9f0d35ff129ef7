"""Moteur de repartition des encaissements entre l'Etat et la Collectivite.

Regles d'arrondi :
- la part Etat est arrondie a l'unite monetaire de la devise (demi superieur) ;
- la part Collectivite est le solde (montant - part Etat), jamais arrondie
  separement, de sorte que part Etat + part Collectivite == montant encaisse.

Le moteur est sans etat : chaque appel ne depend que de ses arguments et
construit un nouveau rapport.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from repartition_contentieux.config.constants import PRECISION_STATISTIQUES
from repartition_contentieux.core.exceptions import (
    DuplicateCaseError, InvalidAmount, RecordError, RepartitionError,
)
from repartition_contentieux.models.affaires import (
    EncaissementAffaire, LigneRepartition, RapportRepartition,
)
from repartition_contentieux.repartition.regles import RegleBase
from repartition_contentieux.utils.number_utils import arrondir, pourcentage

logger = logging.getLogger("repartition_contentieux.repartition")

ZERO = Decimal("0")

Entree = Union[EncaissementAffaire, tuple]


def verifier_montant(
    montant, libelle: str, quantum: Decimal, numero_affaire: Optional[str] = None,
) -> Decimal:
    if isinstance(montant, bool) or not isinstance(montant, (Decimal, int)):
        raise InvalidAmount(
            f"{libelle} doit etre un decimal exact, recu {type(montant).__name__}",
            numero_affaire,
        )
    montant = Decimal(montant)
    if not montant.is_finite():
        raise InvalidAmount(f"{libelle} non fini : {montant}", numero_affaire)
    if montant < 0:
        raise InvalidAmount(f"{libelle} negatif : {montant}", numero_affaire)
    try:
        au_centime = montant.quantize(quantum)
    except InvalidOperation as e:
        # Plus de chiffres que la precision decimale courante
        raise InvalidAmount(f"{libelle} hors de la precision geree : {montant}", numero_affaire) from e
    if montant != au_centime:
        raise InvalidAmount(
            f"{libelle} {montant} plus precis que l'unite monetaire ({quantum})",
            numero_affaire,
        )
    return montant


def repartir(
    montant_encaisse: Decimal, regle: RegleBase, numero_affaire: Optional[str] = None,
) -> tuple[Decimal, Decimal]:
    """Repartit un montant encaisse entre l'Etat et la Collectivite.

    Args:
        montant_encaisse: Montant encaisse sur la periode (decimal positif ou nul).
        regle: Regle de repartition fournie par la configuration.
        numero_affaire: Identifiant repris dans les erreurs.

    Returns:
        (part_etat, part_collectivite), dont la somme vaut exactement le montant.

    Raises:
        InvalidAmount: montant negatif, non fini ou plus precis que la devise.
        InvalidRule: pourcentage de la regle hors de [0, 100].
    """
    quantum = regle.devise.quantum
    montant = verifier_montant(montant_encaisse, "montant encaisse", quantum, numero_affaire)
    pourcentage_etat = regle.pourcentage_etat_pour(montant, numero_affaire)

    part_etat = arrondir(montant * pourcentage_etat / 100, quantum)
    part_collectivite = montant - part_etat
    return part_etat, part_collectivite


def _en_encaissement(entree: Entree) -> EncaissementAffaire:
    if isinstance(entree, EncaissementAffaire):
        return entree
    return EncaissementAffaire.depuis_tuple(entree)


def _repartir_encaissement(encaissement: EncaissementAffaire, regle: RegleBase) -> LigneRepartition:
    numero = encaissement.numero_affaire
    quantum = regle.devise.quantum
    total = verifier_montant(encaissement.montant_total, "montant total", quantum, numero)
    encaisse = verifier_montant(encaissement.montant_encaisse, "montant encaisse", quantum, numero)
    if encaisse > total:
        raise InvalidAmount(
            f"montant encaisse {encaisse} superieur au montant du {total}", numero,
        )

    part_etat, part_collectivite = repartir(encaisse, regle, numero)
    return LigneRepartition(
        numero_affaire=numero,
        contrevenant=encaissement.contrevenant,
        montant_total=total,
        montant_encaisse=encaisse,
        part_etat=part_etat,
        part_collectivite=part_collectivite,
    )


def _numero_affaire(entree: Entree) -> Optional[str]:
    if isinstance(entree, EncaissementAffaire):
        return entree.numero_affaire
    if isinstance(entree, (tuple, list)) and entree:
        return str(entree[0])
    return None


def _parcourir(encaissements: Iterable[Entree], regle: RegleBase):
    """Produit, pour chaque encaissement, sa ligne repartie ou son erreur."""
    vus = set()
    for index, entree in enumerate(encaissements):
        numero = _numero_affaire(entree)
        try:
            if numero is not None and numero in vus:
                raise DuplicateCaseError("numero d'affaire en double dans la periode", numero)
            vus.add(numero)
            ligne = _repartir_encaissement(_en_encaissement(entree), regle)
        except RepartitionError as e:
            yield RecordError(index, numero, e)
            continue
        yield ligne


def valider_encaissements(encaissements: Iterable[Entree], regle: RegleBase) -> list[RecordError]:
    """Retourne les erreurs de chaque encaissement invalide, sans lever.

    Permet a l'appelant de choisir entre arreter le rapport ou ecarter les
    lignes rejetees ; le moteur n'ecarte jamais de ligne de lui-meme.
    """
    return [
        resultat for resultat in _parcourir(encaissements, regle)
        if isinstance(resultat, RecordError)
    ]


def construire_rapport(
    periode: str, encaissements: Iterable[Entree], regle: RegleBase,
) -> RapportRepartition:
    """Construit l'etat de repartition d'une periode.

    Args:
        periode: Libelle de la periode (ex. "2024-Q1").
        encaissements: Encaissements de la periode, dans l'ordre de presentation.
            Accepte des EncaissementAffaire ou des tuples
            ``(numero_affaire, contrevenant, montant_total, montant_encaisse)``.
        regle: Regle de repartition Etat / Collectivite.

    Returns:
        Rapport immuable avec les lignes, les totaux et les statistiques.

    Raises:
        RecordError: premier encaissement invalide, avec sa position et son
            numero d'affaire (cause dans ``.cause`` et ``__cause__``).
    """
    lignes = []
    for resultat in _parcourir(encaissements, regle):
        if isinstance(resultat, RecordError):
            raise resultat from resultat.cause
        lignes.append(resultat)

    total_du = sum((l.montant_total for l in lignes), ZERO)
    total_encaisse = sum((l.montant_encaisse for l in lignes), ZERO)
    total_part_etat = sum((l.part_etat for l in lignes), ZERO)
    total_part_collectivite = sum((l.part_collectivite for l in lignes), ZERO)

    # Les deux pourcentages sont calcules independamment : leur somme peut
    # differer de 100 de 0,01 quand les totaux ne tombent pas juste.
    pourcentage_etat = pourcentage(total_part_etat, total_encaisse)
    pourcentage_collectivite = pourcentage(total_part_collectivite, total_encaisse)

    moyenne = None
    if lignes:
        moyenne = arrondir(total_encaisse / len(lignes), PRECISION_STATISTIQUES)

    rapport = RapportRepartition(
        periode=periode,
        lignes=tuple(lignes),
        devise=regle.devise,
        regle=regle.description,
        total_du=total_du,
        total_encaisse=total_encaisse,
        total_part_etat=total_part_etat,
        total_part_collectivite=total_part_collectivite,
        pourcentage_etat=pourcentage_etat,
        pourcentage_collectivite=pourcentage_collectivite,
        moyenne_encaissement=moyenne,
        taux_recouvrement=pourcentage(total_encaisse, total_du),
    )
    logger.debug(
        "Rapport %s : %d affaires, encaisse %s (Etat %s / Collectivite %s)",
        periode, rapport.nombre_affaires, total_encaisse,
        total_part_etat, total_part_collectivite,
    )
    return rapport
