"""
Route de calcul du thème évolutif.

`POST /astrology/chart` dérive le thème à partir des données de naissance et renvoie la synthèse
rédigée; les transits dépendent de la date du jour.
"""

from fastapi import APIRouter

from arcana.api.schemas import ChartResponse
from arcana.domain.astrology import calculate_evolutionary_astrology, generate_astrology_insight
from arcana.domain.models import BirthData

router = APIRouter(prefix="/astrology", tags=["astrology"])


@router.post("/chart", response_model=ChartResponse)
def create_chart(payload: BirthData):
    """
    Calcule le thème évolutif.

    Paramètres:
    - payload: `BirthData` (date `YYYY-MM-DD`, heure `HH:MM`, lieu libre).

    Retour: `ChartResponse`. Date ou heure invalide -> 422 `INVALID_INPUT`.
    """
    astro = calculate_evolutionary_astrology(payload)
    return ChartResponse(astro=astro, insight=generate_astrology_insight(astro))
