"""Journal d'audit immutable pour tracer les generations de rapports."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger("repartition_contentieux.audit")


class AuditLogger:
    """Journalise les operations de maniere immutable (append-only, JSON lines)."""

    def __init__(self, log_path: Path):
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(
        self,
        operation: str,
        session_id: str,
        *,
        details: Optional[dict] = None,
        fichier: Optional[str] = None,
        resultat: str = "succes",
    ) -> None:
        """Ajoute une entree au journal d'audit."""
        entry = {
            "timestamp": datetime.now().isoformat(),
            "session_id": session_id,
            "operation": operation,
            "resultat": resultat,
        }
        if fichier:
            entry["fichier"] = fichier
        if details:
            entry["details"] = details

        line = json.dumps(entry, ensure_ascii=False, default=str)
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.error("Impossible d'ecrire dans le journal d'audit: %s", e)

    def log_import(self, session_id: str, fichier: str, nb_encaissements: int) -> None:
        self.log(
            "import_encaissements", session_id,
            fichier=fichier, details={"nb_encaissements": nb_encaissements},
        )

    def log_rejet(self, session_id: str, numero_affaire: str, index: int, erreur: str) -> None:
        self.log(
            "rejet_encaissement",
            session_id,
            details={"numero_affaire": numero_affaire, "index": index, "erreur": erreur},
            resultat="rejete",
        )

    def log_rapport(self, session_id: str, periode: str, format_rapport: str, chemin: str) -> None:
        self.log(
            "generation_rapport",
            session_id,
            details={"periode": periode, "format": format_rapport, "chemin": chemin},
        )

    def log_erreur(self, session_id: str, operation: str, erreur: str) -> None:
        self.log(operation, session_id, details={"erreur": erreur}, resultat="echec")

    def lire_journal(self) -> list[dict]:
        """Lit toutes les entrees du journal."""
        if not self.log_path.exists():
            return []
        entries = []
        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    entries.append(json.loads(line))
        return entries
