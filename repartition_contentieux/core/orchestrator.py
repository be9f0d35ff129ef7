"""Orchestrateur de la generation d'un etat de repartition.

Coordonne le workflow :
1. Chargement des encaissements (CSV / Excel)
2. Selection des encaissements de la periode
3. Validation et application de la politique d'erreurs
4. Calcul de la repartition
5. Generation du rapport et journalisation
"""

import logging
import time
import uuid
from pathlib import Path
from typing import Optional

from repartition_contentieux.config.constants import PolitiqueErreurs
from repartition_contentieux.config.settings import AppConfig
from repartition_contentieux.core.exceptions import (
    ContentieuxError, ParseError, RecordError,
)
from repartition_contentieux.models.affaires import EncaissementAffaire, RapportRepartition
from repartition_contentieux.parsers.parser_factory import ParserFactory
from repartition_contentieux.repartition.moteur import construire_rapport, valider_encaissements
from repartition_contentieux.reporting.report_generator import ReportGenerator
from repartition_contentieux.security.audit_logger import AuditLogger
from repartition_contentieux.utils.date_utils import parser_periode

logger = logging.getLogger("repartition_contentieux")


class Orchestrator:
    """Coordonne la production d'un etat de repartition pour une periode."""

    def __init__(self, config: AppConfig | None = None):
        self.config = config or AppConfig()
        self.parser_factory = ParserFactory()
        self.report_generator = ReportGenerator()
        self.audit = AuditLogger(self.config.audit_log_path)
        self.session_id = str(uuid.uuid4())
        self.rejets: list[RecordError] = []
        self.rapport: Optional[RapportRepartition] = None

    def generer_rapport(
        self, chemins: list[Path], periode: str, format_rapport: Optional[str] = None,
    ) -> Path:
        """Point d'entree principal : produit l'etat de repartition d'une periode.

        Args:
            chemins: Fichiers d'encaissements a charger.
            periode: Libelle de la periode (2024, 2024-S1, 2024-Q1, 2024-03).
            format_rapport: "html" ou "json" (defaut : configuration).

        Returns:
            Chemin vers le rapport genere.
        """
        debut = time.time()
        format_rapport = format_rapport or self.config.report.format_defaut
        try:
            _, intervalle = parser_periode(periode)
        except ValueError as e:
            raise ContentieuxError(str(e)) from e

        logger.info("Etat de repartition %s - Session %s", periode, self.session_id)

        # --- Phase 1 : Chargement ---
        encaissements = self.charger(chemins)

        # --- Phase 2 : Selection de la periode ---
        dans_periode = [
            e for e in encaissements
            if e.date_encaissement is None or intervalle.contient(e.date_encaissement)
        ]
        if len(dans_periode) < len(encaissements):
            logger.info(
                "%d encaissements hors periode %s ecartes",
                len(encaissements) - len(dans_periode), periode,
            )

        # --- Phase 3 : Validation ---
        regle = self.config.repartition.regle()
        retenus = self._appliquer_politique(dans_periode, regle)

        # --- Phase 4 : Calcul ---
        self.rapport = construire_rapport(periode, retenus, regle)
        logger.info(
            "%d affaires, total encaisse %s (Etat %s / Collectivite %s)",
            self.rapport.nombre_affaires, self.rapport.total_encaisse,
            self.rapport.total_part_etat, self.rapport.total_part_collectivite,
        )

        # --- Phase 5 : Rapport ---
        chemin_sortie = self.config.reports_dir / f"etat_repartition_{periode}.{format_rapport}"
        chemin = self.report_generator.generer(self.rapport, chemin_sortie, format_rapport)
        self.audit.log_rapport(self.session_id, periode, format_rapport, str(chemin))
        logger.info("Rapport genere en %.2f s : %s", time.time() - debut, chemin)
        return chemin

    def charger(self, chemins: list[Path]) -> list[EncaissementAffaire]:
        """Charge les encaissements de tous les fichiers lisibles."""
        encaissements = []
        fichiers_lus = 0
        for chemin in chemins:
            try:
                parser = self.parser_factory.get_parser(chemin)
                lus = parser.parser(chemin)
            except ParseError as e:
                logger.warning("Impossible de charger %s : %s", chemin, e)
                self.audit.log_erreur(self.session_id, "import_encaissements", str(e))
                continue
            fichiers_lus += 1
            self.audit.log_import(self.session_id, chemin.name, len(lus))
            encaissements.extend(lus)

        if not fichiers_lus:
            raise ContentieuxError("Aucun fichier d'encaissements n'a pu etre charge.")
        return encaissements

    def _appliquer_politique(self, encaissements: list[EncaissementAffaire], regle) -> list[EncaissementAffaire]:
        erreurs = valider_encaissements(encaissements, regle)
        if not erreurs:
            return encaissements

        for erreur in erreurs:
            self.audit.log_rejet(self.session_id, erreur.numero_affaire, erreur.index, str(erreur.cause))

        if self.config.repartition.politique_erreurs == PolitiqueErreurs.ARRETER:
            logger.error("%d encaissements invalides, rapport interrompu", len(erreurs))
            raise erreurs[0] from erreurs[0].cause

        self.rejets = erreurs
        indices_rejetes = {e.index for e in erreurs}
        for erreur in erreurs:
            logger.warning("Encaissement ecarte : %s", erreur)
        return [e for i, e in enumerate(encaissements) if i not in indices_rejetes]
