"""Configuration globale de l'application."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from repartition_contentieux.config.constants import (
    Devise, DEVISE_DEFAUT, FORMATS_RAPPORT, POURCENTAGE_ETAT_DEFAUT,
    POURCENTAGE_MIN, POURCENTAGE_MAX, PolitiqueErreurs,
)
from repartition_contentieux.core.exceptions import ConfigError
from repartition_contentieux.repartition.regles import RegleRepartition


@dataclass
class RepartitionConfig:
    """Configuration de la repartition Etat / Collectivite."""
    pourcentage_etat: Decimal = POURCENTAGE_ETAT_DEFAUT
    devise: Devise = DEVISE_DEFAUT
    politique_erreurs: PolitiqueErreurs = PolitiqueErreurs.ARRETER

    def __post_init__(self):
        try:
            self.pourcentage_etat = Decimal(str(self.pourcentage_etat))
            self.devise = Devise(self.devise)
            self.politique_erreurs = PolitiqueErreurs(self.politique_erreurs)
        except (InvalidOperation, ValueError) as e:
            raise ConfigError(f"Configuration de repartition invalide : {e}") from e
        if (not self.pourcentage_etat.is_finite()
                or not POURCENTAGE_MIN <= self.pourcentage_etat <= POURCENTAGE_MAX):
            raise ConfigError(
                f"pourcentage_etat doit etre entre 0 et 100 (recu {self.pourcentage_etat})"
            )

    def regle(self) -> RegleRepartition:
        return RegleRepartition(self.pourcentage_etat, self.devise)


@dataclass
class ReportConfig:
    """Configuration rapports."""
    format_defaut: str = "html"

    def __post_init__(self):
        if self.format_defaut not in FORMATS_RAPPORT:
            raise ConfigError(
                f"Format de rapport '{self.format_defaut}' inconnu "
                f"(acceptes : {', '.join(FORMATS_RAPPORT)})"
            )


@dataclass
class AppConfig:
    """Configuration principale de l'application."""
    base_dir: Path = field(default_factory=Path.cwd)
    data_dir: Path = field(default=None)
    reports_dir: Path = field(default=None)
    audit_log_path: Path = field(default=None)

    repartition: RepartitionConfig = field(default_factory=RepartitionConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def __post_init__(self):
        if self.data_dir is None:
            self.data_dir = self.base_dir / "data"
        if self.reports_dir is None:
            self.reports_dir = self.data_dir / "reports"
        if self.audit_log_path is None:
            self.audit_log_path = self.data_dir / "audit.log"

        # Creer les repertoires si necessaire
        for d in [self.data_dir, self.reports_dir]:
            d.mkdir(parents=True, exist_ok=True)
