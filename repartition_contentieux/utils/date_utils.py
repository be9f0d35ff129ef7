"""Utilitaires de parsing et manipulation de dates et de periodes."""

import calendar
import re
from datetime import date, datetime
from typing import Optional

from repartition_contentieux.config.constants import PeriodeType
from repartition_contentieux.models.affaires import DateRange

FORMATS_DATE = [
    "%d/%m/%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y%m%d",
]

# 2024, 2024-S1, 2024-Q1 / 2024-T1, 2024-03
_RE_ANNEE = re.compile(r"^(\d{4})$")
_RE_SEMESTRE = re.compile(r"^(\d{4})-S([12])$", re.IGNORECASE)
_RE_TRIMESTRE = re.compile(r"^(\d{4})-[QT]([1-4])$", re.IGNORECASE)
_RE_MOIS = re.compile(r"^(\d{4})-(\d{2})$")


def parser_date(valeur: str) -> Optional[date]:
    """Tente de parser une date a partir de differents formats courants."""
    valeur = valeur.strip()
    if not valeur:
        return None

    for fmt in FORMATS_DATE:
        try:
            return datetime.strptime(valeur, fmt).date()
        except ValueError:
            continue
    return None


def _fin_de_mois(annee: int, mois: int) -> date:
    return date(annee, mois, calendar.monthrange(annee, mois)[1])


def parser_periode(libelle: str) -> tuple[PeriodeType, DateRange]:
    """Interprete un libelle de periode de rapport.

    Formats acceptes : ``2024`` (annee), ``2024-S1`` (semestre),
    ``2024-Q1`` ou ``2024-T1`` (trimestre), ``2024-03`` (mois).

    Raises:
        ValueError: libelle non reconnu.
    """
    valeur = libelle.strip()

    m = _RE_ANNEE.match(valeur)
    if m:
        annee = int(m.group(1))
        return PeriodeType.ANNEE, DateRange(date(annee, 1, 1), date(annee, 12, 31))

    m = _RE_SEMESTRE.match(valeur)
    if m:
        annee, semestre = int(m.group(1)), int(m.group(2))
        premier_mois = 1 if semestre == 1 else 7
        return PeriodeType.SEMESTRE, DateRange(
            date(annee, premier_mois, 1), _fin_de_mois(annee, premier_mois + 5),
        )

    m = _RE_TRIMESTRE.match(valeur)
    if m:
        annee, trimestre = int(m.group(1)), int(m.group(2))
        premier_mois = 3 * (trimestre - 1) + 1
        return PeriodeType.TRIMESTRE, DateRange(
            date(annee, premier_mois, 1), _fin_de_mois(annee, premier_mois + 2),
        )

    m = _RE_MOIS.match(valeur)
    if m:
        annee, mois = int(m.group(1)), int(m.group(2))
        if 1 <= mois <= 12:
            return PeriodeType.MOIS, DateRange(date(annee, mois, 1), _fin_de_mois(annee, mois))

    raise ValueError(
        f"Periode '{libelle}' non reconnue (formats : 2024, 2024-S1, 2024-Q1, 2024-03)"
    )

