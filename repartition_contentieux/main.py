"""Point d'entree CLI pour la repartition des affaires contentieuses.

Usage :
    python -m repartition_contentieux encaissements.csv --periode 2024-Q1 [--format html|json] [--output DIR]
"""

import argparse
import logging
import sys
from pathlib import Path

from repartition_contentieux.config.settings import AppConfig, RepartitionConfig
from repartition_contentieux.core.orchestrator import Orchestrator
from repartition_contentieux.core.exceptions import ContentieuxError
from repartition_contentieux.config.constants import (
    Devise, FORMATS_RAPPORT, POURCENTAGE_ETAT_DEFAUT, PolitiqueErreurs, SUPPORTED_EXTENSIONS,
)
from repartition_contentieux.utils.number_utils import formater_montant, formater_pourcentage


BANNER = """
  ============================================================
   REPARTITION DES AFFAIRES CONTENTIEUSES  v1.0.0
   Etat de repartition Etat / Collectivite des encaissements
  ============================================================
"""


def configurer_logging(verbose: bool = False) -> None:
    """Configure le logging de l'application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def creer_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repartition-contentieux",
        description="Etat de repartition des encaissements d'affaires contentieuses.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Formats supportes : {', '.join(SUPPORTED_EXTENSIONS.keys())}",
    )
    parser.add_argument(
        "fichiers",
        nargs="+",
        type=Path,
        help="Chemin(s) vers les fichiers d'encaissements",
    )
    parser.add_argument(
        "--periode", "-p",
        required=True,
        help="Periode de l'etat : 2024, 2024-S1, 2024-Q1 (ou 2024-T1), 2024-03",
    )
    parser.add_argument(
        "--pourcentage-etat",
        default=str(POURCENTAGE_ETAT_DEFAUT),
        help=f"Pourcentage revenant a l'Etat (defaut: {POURCENTAGE_ETAT_DEFAUT})",
    )
    parser.add_argument(
        "--devise", "-d",
        choices=[d.value for d in Devise],
        default=Devise.EUR.value,
        help="Devise des montants : " + ", ".join(f"{d.value} ({d.nom})" for d in Devise),
    )
    parser.add_argument(
        "--format", "-f",
        choices=list(FORMATS_RAPPORT),
        default="html",
        help="Format du rapport de sortie (defaut: html)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Repertoire de sortie pour le rapport",
    )
    parser.add_argument(
        "--ignorer-erreurs",
        action="store_true",
        help="Ecarter les encaissements invalides au lieu d'interrompre l'etat",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Mode verbeux (debug)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Point d'entree principal."""
    print(BANNER)

    parser = creer_argument_parser()
    args = parser.parse_args(argv)

    configurer_logging(args.verbose)
    logger = logging.getLogger("repartition_contentieux")

    # Verifier que les fichiers existent
    fichiers_valides = []
    for f in args.fichiers:
        if not f.exists():
            logger.error("Fichier introuvable : %s", f)
            continue
        if f.suffix.lower() not in SUPPORTED_EXTENSIONS:
            logger.error(
                "Format non supporte : %s (acceptes : %s)",
                f.suffix, ", ".join(SUPPORTED_EXTENSIONS.keys()),
            )
            continue
        fichiers_valides.append(f)

    if not fichiers_valides:
        logger.error("Aucun fichier valide a traiter.")
        return 1

    # Configuration
    try:
        politique = PolitiqueErreurs.IGNORER if args.ignorer_erreurs else PolitiqueErreurs.ARRETER
        config = AppConfig(
            repartition=RepartitionConfig(args.pourcentage_etat, args.devise, politique),
        )
    except ContentieuxError as e:
        logger.error("Configuration invalide : %s", e)
        return 1
    if args.output:
        config.reports_dir = args.output
        config.reports_dir.mkdir(parents=True, exist_ok=True)

    orchestrator = Orchestrator(config)

    try:
        chemin_rapport = orchestrator.generer_rapport(
            fichiers_valides, args.periode, format_rapport=args.format,
        )
    except ContentieuxError as e:
        logger.error("Erreur de repartition : %s", e)
        return 1
    except Exception as e:
        logger.exception("Erreur inattendue : %s", e)
        return 2

    rapport = orchestrator.rapport
    print(f"\n{'='*60}")
    print(f"  ETAT DE REPARTITION {rapport.periode}")
    print(f"  Rapport : {chemin_rapport}")
    print(f"  Affaires : {rapport.nombre_affaires}")
    print(f"  Total encaisse : {formater_montant(rapport.total_encaisse, rapport.devise)}")
    print(f"  Part Etat : {formater_montant(rapport.total_part_etat, rapport.devise)}"
          f" ({formater_pourcentage(rapport.pourcentage_etat)})")
    print(f"  Part Collectivite : {formater_montant(rapport.total_part_collectivite, rapport.devise)}"
          f" ({formater_pourcentage(rapport.pourcentage_collectivite)})")
    if orchestrator.rejets:
        print(f"  Encaissements ecartes : {len(orchestrator.rejets)}")
    print(f"{'='*60}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
