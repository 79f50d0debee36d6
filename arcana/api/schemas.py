# Schémas Pydantic exposés par l'API (requêtes et réponses).
# Les noms JSON sont en camelCase, comme ceux des modèles de domaine.

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from arcana.domain.models import (
    AstrologyData,
    BirthData,
    DeepAnalysis,
    EnergySignature,
    EnergyUpdate,
    ResponseDepth,
    TarotCard,
)
from arcana.domain.reading import ReadingStep


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TextRequest(APIModel):
    """Texte libre à analyser.

    Champs:
    - text: str (peut être vide)
    """

    text: str


class ResponsesRequest(APIModel):
    """Historique des réponses d'une session, dans l'ordre chronologique."""

    responses: list[str] = Field(default_factory=list)


class DeepAnalysisRequest(APIModel):
    """Entrées de l'analyse approfondie.

    Champs:
    - responses: list[str] (historique complet, peut être vide)
    - birth_data: BirthData | None
    - astro_data: AstrologyData | None (sinon dérivé de `birth_data` s'il est fourni)
    - selected_cards: list[TarotCard] (0 à 3 cartes)
    """

    responses: list[str] = Field(default_factory=list)
    birth_data: BirthData | None = None
    astro_data: AstrologyData | None = None
    selected_cards: list[TarotCard] = Field(default_factory=list, max_length=3)


class DeepAnalysisResponse(APIModel):
    analysis: DeepAnalysis
    energy_update: EnergyUpdate
    warnings: list[str] = Field(default_factory=list)


class ChartResponse(APIModel):
    """Thème évolutif et sa synthèse rédigée."""

    astro: AstrologyData
    insight: str


class MessageRequest(APIModel):
    text: str = Field(min_length=1)


class TurnResponse(APIModel):
    """Réplique d'un tour de conversation.

    Champs:
    - session_id: identifiant de la session
    - step: étape atteinte après le tour
    - message: texte du lecteur
    - energy / depth: métriques de la réponse utilisateur (tours `respond` uniquement)
    - analysis / energy_update: analyse approfondie reconstruite et consigne de rendu
    - cards: cartes tirées (vide avant le tirage)
    """

    session_id: str
    step: ReadingStep
    message: str
    energy: EnergySignature | None = None
    depth: ResponseDepth | None = None
    analysis: DeepAnalysis | None = None
    energy_update: EnergyUpdate | None = None
    cards: list[TarotCard] = Field(default_factory=list)


class SessionResponse(APIModel):
    """État courant d'une session de lecture."""

    session_id: str
    step: ReadingStep
    birth: BirthData | None = None
    astro: AstrologyData | None = None
    responses: list[str]
    cards: list[TarotCard]
    analysis: DeepAnalysis | None = None
    final_reading: str = ""
