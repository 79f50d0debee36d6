"""
Routes d'analyse sans état: énergie d'un texte, énergie cumulée, profondeur, analyse approfondie.

Chaque appel est indépendant et idempotent; rien n'est stocké.
"""

import time
import warnings

from fastapi import APIRouter

from arcana.api.schemas import (
    DeepAnalysisRequest,
    DeepAnalysisResponse,
    ResponsesRequest,
    TextRequest,
)
from arcana.app.metrics import ANALYSIS_LATENCY
from arcana.domain.astrology import calculate_evolutionary_astrology
from arcana.domain.deep_analysis import generate_energy_update, perform_deep_analysis
from arcana.domain.energy import analyze_cumulative_energy, analyze_text_energy
from arcana.domain.errors import EmptyInputWarning
from arcana.domain.models import EnergySignature, ResponseDepth
from arcana.domain.response_depth import analyze_response_depth

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/energy", response_model=EnergySignature)
def text_energy(payload: TextRequest):
    """Signature énergétique d'un texte isolé."""
    with ANALYSIS_LATENCY.labels("energy").time():
        return analyze_text_energy(payload.text)


@router.post("/cumulative", response_model=EnergySignature)
def cumulative_energy(payload: ResponsesRequest):
    """Signature énergétique cumulée d'un historique de réponses."""
    with ANALYSIS_LATENCY.labels("cumulative").time():
        return analyze_cumulative_energy(payload.responses)


@router.post("/depth", response_model=ResponseDepth)
def response_depth(payload: TextRequest):
    """Profondeur, authenticité et disposition au changement d'une réponse."""
    with ANALYSIS_LATENCY.labels("depth").time():
        return analyze_response_depth(payload.text)


@router.post("/deep", response_model=DeepAnalysisResponse)
def deep_analysis(payload: DeepAnalysisRequest):
    """
    Analyse approfondie complète.

    Paramètres:
    - payload: `DeepAnalysisRequest`; si seul `birthData` est fourni, le thème est dérivé.

    Retour: `DeepAnalysisResponse` (analyse, consigne de rendu, avertissements éventuels).
    Une date ou heure de naissance invalide produit une erreur 422.
    """
    start = time.perf_counter()
    astro = payload.astro_data
    if astro is None and payload.birth_data is not None:
        astro = calculate_evolutionary_astrology(payload.birth_data)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", EmptyInputWarning)
        analysis = perform_deep_analysis(
            payload.responses, payload.birth_data, astro, payload.selected_cards
        )
    notes = ["empty_responses" for w in caught if issubclass(w.category, EmptyInputWarning)]
    ANALYSIS_LATENCY.labels("deep").observe(time.perf_counter() - start)
    return DeepAnalysisResponse(
        analysis=analysis,
        energy_update=generate_energy_update(analysis),
        warnings=notes,
    )
