"""Routes du catalogue de cartes (deck embarqué ou API distante selon la configuration)."""

from fastapi import APIRouter, Query

from arcana.core.container import container
from arcana.domain.models import TarotCard

router = APIRouter(prefix="/cards", tags=["cards"])

MAX_DRAW = 10


@router.get("", response_model=list[TarotCard])
def list_cards():
    """Toutes les cartes du catalogue actif."""
    return container.catalog.get_all_cards()


@router.get("/random", response_model=list[TarotCard])
def random_cards(n: int = Query(3, ge=1, le=MAX_DRAW)):
    """Tire `n` cartes distinctes. Catalogue distant indisponible -> 502."""
    return container.catalog.get_random_cards(n)
