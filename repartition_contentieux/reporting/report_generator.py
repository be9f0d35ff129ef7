"""Generateur des etats de repartition des affaires contentieuses.

Produit des rapports en HTML et JSON contenant :
- Le detail par affaire (montant du, encaisse, part Etat, part Collectivite)
- Les totaux de la periode
- Les statistiques (pourcentages, moyenne, taux de recouvrement)
"""

import json
from datetime import datetime
from decimal import Decimal
from html import escape
from pathlib import Path
from typing import Optional

from repartition_contentieux.core.exceptions import ReportError
from repartition_contentieux.models.affaires import LigneRepartition, RapportRepartition
from repartition_contentieux.utils.number_utils import formater_montant, formater_pourcentage


def _decimal_ou_none(valeur: Optional[Decimal]) -> Optional[str]:
    return str(valeur) if valeur is not None else None


class ReportGenerator:
    """Genere les etats de repartition a partir d'un rapport calcule."""

    def generer_html(self, rapport: RapportRepartition, chemin_sortie: Path) -> Path:
        """Genere l'etat de repartition en HTML."""
        return self._ecrire(chemin_sortie, self.construire_html(rapport))

    def generer_json(self, rapport: RapportRepartition, chemin_sortie: Path) -> Path:
        """Genere l'etat de repartition en JSON structure."""
        contenu = json.dumps(self.construire_json(rapport), ensure_ascii=False, indent=2)
        return self._ecrire(chemin_sortie, contenu)

    def generer(self, rapport: RapportRepartition, chemin_sortie: Path, format_rapport: str) -> Path:
        if format_rapport == "html":
            return self.generer_html(rapport, chemin_sortie)
        if format_rapport == "json":
            return self.generer_json(rapport, chemin_sortie)
        raise ReportError(f"Format de rapport '{format_rapport}' non supporte")

    @staticmethod
    def _ecrire(chemin_sortie: Path, contenu: str) -> Path:
        try:
            chemin_sortie.parent.mkdir(parents=True, exist_ok=True)
            with open(chemin_sortie, "w", encoding="utf-8") as f:
                f.write(contenu)
        except OSError as e:
            raise ReportError(f"Impossible d'ecrire le rapport {chemin_sortie}: {e}") from e
        return chemin_sortie

    # --- JSON ---

    def construire_json(self, rapport: RapportRepartition) -> dict:
        """Structure JSON du rapport ; montants en chaines pour rester exacts."""
        return {
            "metadata": {
                "periode": rapport.periode,
                "devise": rapport.devise.value,
                "regle": rapport.regle,
                "nb_affaires": rapport.nombre_affaires,
            },
            "totaux": {
                "total_du": str(rapport.total_du),
                "total_encaisse": str(rapport.total_encaisse),
                "total_part_etat": str(rapport.total_part_etat),
                "total_part_collectivite": str(rapport.total_part_collectivite),
                "reste_a_recouvrer": str(rapport.total_reste_a_recouvrer),
            },
            "statistiques": {
                "pourcentage_etat": _decimal_ou_none(rapport.pourcentage_etat),
                "pourcentage_collectivite": _decimal_ou_none(rapport.pourcentage_collectivite),
                "moyenne_encaissement": _decimal_ou_none(rapport.moyenne_encaissement),
                "taux_recouvrement": _decimal_ou_none(rapport.taux_recouvrement),
            },
            "affaires": [self._ligne_to_dict(l) for l in rapport.lignes],
        }

    @staticmethod
    def _ligne_to_dict(ligne: LigneRepartition) -> dict:
        return {
            "numero_affaire": ligne.numero_affaire,
            "contrevenant": ligne.contrevenant,
            "montant_total": str(ligne.montant_total),
            "montant_encaisse": str(ligne.montant_encaisse),
            "part_etat": str(ligne.part_etat),
            "part_collectivite": str(ligne.part_collectivite),
            "reste_a_recouvrer": str(ligne.reste_a_recouvrer),
        }

    # --- HTML ---

    def construire_html(self, rapport: RapportRepartition) -> str:
        devise = rapport.devise

        def m(montant: Decimal) -> str:
            return formater_montant(montant, devise)

        lignes_html = []
        for l in rapport.lignes:
            lignes_html.append(
                f"<tr><td>{escape(l.numero_affaire)}</td><td>{escape(l.contrevenant)}</td>"
                f'<td class="num">{m(l.montant_total)}</td>'
                f'<td class="num">{m(l.montant_encaisse)}</td>'
                f'<td class="num">{m(l.part_etat)}</td>'
                f'<td class="num">{m(l.part_collectivite)}</td></tr>'
            )
        if not lignes_html:
            lignes_html.append('<tr><td colspan="6" class="vide">Aucun encaissement sur la periode</td></tr>')

        moyenne = m(rapport.moyenne_encaissement) if rapport.moyenne_encaissement is not None else "-"

        return f"""<!DOCTYPE html>
<html lang="fr">
<head>
<meta charset="UTF-8">
<title>Etat de repartition - {escape(rapport.periode)}</title>
<style>
body {{ font-family: 'Segoe UI', Arial, sans-serif; margin: 20px; color: #333; }}
h1 {{ color: #1a237e; border-bottom: 3px solid #1a237e; padding-bottom: 10px; }}
h2 {{ color: #283593; margin-top: 30px; }}
table {{ width: 100%; border-collapse: collapse; margin: 10px 0 25px 0; font-size: 0.9em; }}
th {{ background: #e8eaf6; color: #1a237e; padding: 8px; text-align: left; border-bottom: 2px solid #3f51b5; }}
td {{ padding: 6px 8px; border-bottom: 1px solid #e0e0e0; }}
.num {{ text-align: right; font-family: 'Consolas', monospace; }}
.total {{ font-weight: bold; background: #e8eaf6; }}
.vide {{ text-align: center; color: #757575; }}
.meta {{ color: #555; }}
.date-generation {{ color: #757575; font-size: 0.85em; margin-top: 30px; }}
</style>
</head>
<body>
<h1>ETAT DE REPARTITION DES AFFAIRES CONTENTIEUSES</h1>
<p class="meta">Periode : {escape(rapport.periode)}<br>
Regle : {escape(rapport.regle)}<br>
Nombre d'affaires : {rapport.nombre_affaires}</p>

<table>
<thead><tr><th>N&deg; Affaire</th><th>Contrevenant</th><th class="num">Montant total</th>
<th class="num">Montant encaisse</th><th class="num">Part Etat</th><th class="num">Part Collectivite</th></tr></thead>
<tbody>
{chr(10).join(lignes_html)}
<tr class="total"><td colspan="2">TOTAL</td>
<td class="num">{m(rapport.total_du)}</td>
<td class="num">{m(rapport.total_encaisse)}</td>
<td class="num">{m(rapport.total_part_etat)}</td>
<td class="num">{m(rapport.total_part_collectivite)}</td></tr>
</tbody>
</table>

<h2>Statistiques</h2>
<table>
<tbody>
<tr><td>Part Etat</td><td class="num">{formater_pourcentage(rapport.pourcentage_etat)}</td></tr>
<tr><td>Part Collectivite</td><td class="num">{formater_pourcentage(rapport.pourcentage_collectivite)}</td></tr>
<tr><td>Encaissement moyen par affaire</td><td class="num">{moyenne}</td></tr>
<tr><td>Taux de recouvrement</td><td class="num">{formater_pourcentage(rapport.taux_recouvrement)}</td></tr>
<tr><td>Reste a recouvrer</td><td class="num">{m(rapport.total_reste_a_recouvrer)}</td></tr>
</tbody>
</table>

<p class="date-generation">Document genere le {datetime.now().strftime('%d/%m/%Y a %H:%M')}</p>
</body>
</html>"""
