"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, catalogue de cartes, narrateur, service de lecture)
et expose un singleton `container` utilisé par le reste de l'application.
"""

from __future__ import annotations

import structlog

from arcana.core.settings import Settings, get_settings
from arcana.domain.reading import InMemorySessionRepo, ReadingService
from arcana.infra.cards.base import CardCatalog
from arcana.infra.cards.static_deck import StaticCardCatalog
from arcana.infra.cards.tarot_api import TarotAPICatalog
from arcana.infra.llm.narrator import Narrator
from arcana.infra.llm.openai_client import OpenAILLM

log = structlog.get_logger(__name__)


def build_catalog(settings: Settings) -> CardCatalog:
    """Catalogue distant si `CARD_CATALOG_BACKEND=remote`, sinon le deck embarqué."""
    if settings.CARD_CATALOG_BACKEND == "remote":
        return TarotAPICatalog(
            base_url=settings.TAROT_API_URL,
            image_base_url=settings.CARD_IMAGE_BASE_URL,
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    return StaticCardCatalog(image_base_url=settings.CARD_IMAGE_BASE_URL)


def build_narrator(settings: Settings) -> Narrator | None:
    """Narrateur LLM si `NARRATIVE_ENABLED` et une clé est configurée, sinon None (gabarit).

    Sans `OPENAI_API_KEY`, pas de narrateur: la réponse de développement du client n'est jamais servie.
    """
    if not settings.NARRATIVE_ENABLED:
        return None
    llm = OpenAILLM(api_key=settings.OPENAI_API_KEY, model=settings.NARRATIVE_MODEL)
    if llm.is_fallback:
        log.warning("narrative_without_api_key", model=settings.NARRATIVE_MODEL, using="template")
        return None
    return Narrator(
        llm,
        max_attempts=settings.NARRATIVE_MAX_ATTEMPTS,
        backoff_seconds=settings.NARRATIVE_BACKOFF_SECONDS,
    )


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.catalog = build_catalog(self.settings)
        self.narrator = build_narrator(self.settings)
        self.sessions = InMemorySessionRepo()
        self.reading_service = ReadingService(
            catalog=self.catalog, sessions=self.sessions, narrator=self.narrator
        )
        self.storage_backend = "memory"


container = Container()
