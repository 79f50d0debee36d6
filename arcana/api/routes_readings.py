"""
Routes de la conversation de lecture.

Ce module regroupe les endpoints `/readings` qui pilotent une session pas à pas:
création, données de naissance, tirage, messages, consultation.
"""

from fastapi import APIRouter

from arcana.api.errors import not_found
from arcana.api.schemas import MessageRequest, SessionResponse, TurnResponse
from arcana.app.metrics import READING_TURNS
from arcana.core.container import container
from arcana.domain.models import BirthData
from arcana.domain.reading import TurnResult

router = APIRouter(prefix="/readings", tags=["readings"])
service = container.reading_service


def _turn(action: str, result: TurnResult) -> TurnResponse:
    READING_TURNS.labels(action, result.step).inc()
    return TurnResponse(
        session_id=result.session_id,
        step=result.step,
        message=result.message,
        energy=result.energy,
        depth=result.depth,
        analysis=result.analysis,
        energy_update=result.energy_update,
        cards=result.cards,
    )


@router.post("", response_model=TurnResponse, status_code=201)
def start_reading():
    """Ouvre une session; la première étape attend les données de naissance."""
    return _turn("start", service.start())


@router.post("/{session_id}/birth", response_model=TurnResponse)
def submit_birth(session_id: str, payload: BirthData):
    """
    Enregistre les données de naissance et calcule le thème évolutif.

    Erreurs: 404 session inconnue, 409 hors étape, 422 date/heure invalide.
    """
    try:
        return _turn("birth", service.submit_birth(session_id, payload))
    except KeyError as err:
        raise not_found("Reading not found") from err


@router.post("/{session_id}/cards", response_model=TurnResponse)
def draw_cards(session_id: str):
    """Tire trois cartes. Erreurs: 404, 409 hors étape, 502 catalogue indisponible."""
    try:
        return _turn("cards", service.draw_cards(session_id))
    except KeyError as err:
        raise not_found("Reading not found") from err


@router.post("/{session_id}/messages", response_model=TurnResponse)
def send_message(session_id: str, payload: MessageRequest):
    """Envoie une réponse utilisateur et retourne la réplique du lecteur."""
    try:
        return _turn("message", service.respond(session_id, payload.text))
    except KeyError as err:
        raise not_found("Reading not found") from err


@router.get("/{session_id}", response_model=SessionResponse)
def get_reading(session_id: str):
    """État courant d'une session."""
    try:
        session = service.get(session_id)
    except KeyError as err:
        raise not_found("Reading not found") from err
    return SessionResponse(
        session_id=session.id,
        step=session.step,
        birth=session.birth,
        astro=session.astro,
        responses=list(session.responses),
        cards=list(session.cards),
        analysis=session.analysis,
        final_reading=session.final_reading,
    )
