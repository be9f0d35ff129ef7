"""
Constantes de repartition du produit des affaires contentieuses.

Sources :
- Cahier des charges de la regie (formules de repartition niveau 1 et 2)
- Etat de repartition des affaires contentieuses (part Etat 60% / part Collectivite 40%)
"""

from decimal import Decimal
from enum import Enum


# --- Repartition Etat / Collectivite ---

POURCENTAGE_ETAT_DEFAUT = Decimal("60.00")

POURCENTAGE_MIN = Decimal("0")
POURCENTAGE_MAX = Decimal("100")

# Precision des statistiques (pourcentages, moyennes)
PRECISION_STATISTIQUES = Decimal("0.01")


# --- Repartition detaillee (cahier des charges) ---

# Part de l'indicateur reel, prelevee avant toute repartition
TAUX_INDICATEUR = Decimal("0.10")

# Niveau 1 : sur le produit net
TAUX_FLCF = Decimal("0.10")
TAUX_TRESOR = Decimal("0.15")

# Niveau 2 : sur le produit net des ayants droits
TAUX_CHEFS = Decimal("0.15")
TAUX_SAISISSANTS = Decimal("0.35")
TAUX_MUTUELLE = Decimal("0.05")
TAUX_MASSE_COMMUNE = Decimal("0.30")
TAUX_INTERESSEMENT = Decimal("0.15")  # solde du niveau 2


class Devise(str, Enum):
    """Devises de comptabilisation des encaissements."""
    EUR = "EUR"
    USD = "USD"
    XAF = "XAF"

    @property
    def nom(self) -> str:
        return _DEVISES[self]["nom"]

    @property
    def symbole(self) -> str:
        return _DEVISES[self]["symbole"]

    @property
    def decimales(self) -> int:
        return _DEVISES[self]["decimales"]

    @property
    def quantum(self) -> Decimal:
        """Plus petite unite monetaire (0.01 pour EUR, 1 pour XAF)."""
        return Decimal(1).scaleb(-self.decimales)


_DEVISES = {
    Devise.EUR: {"nom": "Euro", "symbole": "EUR", "decimales": 2},
    Devise.USD: {"nom": "Dollar US", "symbole": "$", "decimales": 2},
    Devise.XAF: {"nom": "Franc CFA", "symbole": "FCFA", "decimales": 0},
}

DEVISE_DEFAUT = Devise.EUR


class PolitiqueErreurs(str, Enum):
    """Traitement d'une ligne d'encaissement invalide lors d'un rapport."""
    ARRETER = "arreter"
    IGNORER = "ignorer"


class PeriodeType(str, Enum):
    ANNEE = "annee"
    SEMESTRE = "semestre"
    TRIMESTRE = "trimestre"
    MOIS = "mois"


# Extensions supportees par les chargeurs d'encaissements
SUPPORTED_EXTENSIONS = {
    ".csv": "CSV",
    ".xlsx": "Excel",
}

FORMATS_RAPPORT = ("html", "json")
