"""Utilitaires pour le traitement des montants et nombres."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from repartition_contentieux.config.constants import Devise, PRECISION_STATISTIQUES


def parser_montant(valeur) -> Decimal:
    """Parse un montant depuis differents formats (1 234,56 ou 1234.56 etc.).

    Une valeur vide vaut zero ; une valeur illisible leve ValueError
    (un montant mal forme n'est jamais ramene a zero).
    """
    if isinstance(valeur, Decimal):
        return valeur
    if isinstance(valeur, int):
        return Decimal(valeur)
    if isinstance(valeur, float):
        return Decimal(str(valeur))
    if valeur is None or not str(valeur).strip():
        return Decimal("0")

    v = str(valeur).strip()

    # Retirer les symboles monetaires
    for symbole in ("FCFA", "XAF", "EUR", "€", "$"):
        v = v.replace(symbole, "")
    v = v.strip()

    # Gerer le format francais : 1 234,56
    if "," in v and "." in v:
        # 1.234,56 -> format europeen
        if v.rindex(",") > v.rindex("."):
            v = v.replace(".", "").replace(",", ".")
        else:
            # 1,234.56 -> format anglo-saxon
            v = v.replace(",", "")
    elif "," in v:
        # Virgule comme separateur decimal
        v = v.replace(",", ".")
    v = v.replace(" ", "").replace("\u00a0", "").replace("\u202f", "")

    try:
        return Decimal(v)
    except InvalidOperation as e:
        raise ValueError(f"Montant illisible : {valeur!r}") from e


def arrondir(montant: Decimal, quantum: Decimal = Decimal("0.01")) -> Decimal:
    """Arrondi commercial (demi superieur) a la precision donnee."""
    return montant.quantize(quantum, rounding=ROUND_HALF_UP)


def pourcentage(partie: Decimal, total: Decimal) -> Optional[Decimal]:
    """Part de `partie` dans `total`, en pourcentage a 2 decimales.

    None si le total est nul : le pourcentage n'est pas defini.
    """
    if total == 0:
        return None
    return arrondir(partie * 100 / total, PRECISION_STATISTIQUES)


def formater_montant(montant: Decimal, devise: Devise = Devise.EUR) -> str:
    """Formate un montant en format francais (1 234,56 EUR, 1 500 FCFA)."""
    montant = arrondir(montant, devise.quantum)
    signe = "-" if montant < 0 else ""
    abs_montant = abs(montant)
    partie_entiere = int(abs_montant)
    decimales = ""
    if devise.decimales:
        fraction = abs_montant - partie_entiere
        decimales = "," + f"{fraction:.{devise.decimales}f}"[2:]

    # Separateur de milliers
    s = str(partie_entiere)
    groupes = []
    while s:
        groupes.insert(0, s[-3:])
        s = s[:-3]
    entier_formate = " ".join(groupes)

    return f"{signe}{entier_formate}{decimales} {devise.symbole}"


def formater_pourcentage(valeur: Optional[Decimal]) -> str:
    if valeur is None:
        return "-"
    return f"{valeur:.2f}".replace(".", ",") + " %"
