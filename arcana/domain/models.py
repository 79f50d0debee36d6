"""Modèles de domaine (cœur métier) indépendants de l'API.

Objectif du module
------------------
- Définir les enregistrements produits et consommés par le moteur d'analyse.
- Tous les modèles sont figés (`frozen`) : une analyse est reconstruite, jamais mutée.
- Les noms JSON sont en camelCase (`primarySign`, `chakraActivation`...) tandis que les attributs
  Python restent en snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Sign = Literal[
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
]
Suit = Literal["Major Arcana", "Wands", "Cups", "Swords", "Pentacles"]
Element = Literal["Fire", "Water", "Air", "Earth", "Spirit"]
Archetype = Literal["Victim", "Warrior", "Creator", "Sage", "Seeker"]
EvolutionLevel = Literal["Awakening", "Integration", "Service", "Mastery"]
SoulAge = Literal["New Soul", "Young Soul", "Mature Soul", "Old Soul"]
ChallengeType = Literal["emotional", "mental", "spiritual", "physical", "relational"]
InsightCategory = Literal["immediate", "short-term", "long-term", "spiritual"]
SituationType = Literal["relationship", "work", "family", "decision", "change", "fear"]
Emotion = Literal["neutral", "positive", "anxious", "frustrated", "confused"]

Score = float


class DomainModel(BaseModel):
    """Base commune : immuable, alias camelCase, peuplable par nom Python."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class EnergySignature(DomainModel):
    """Signature énergétique d'un texte (signe dominant, intensité, mots-clés)."""

    primary_sign: Sign
    secondary_sign: Sign | None = None
    intensity: Score = Field(ge=0.0, le=1.0)
    keywords: list[str] = Field(default_factory=list, max_length=5)


class BirthData(DomainModel):
    """Données de naissance saisies par l'utilisateur.

    Champs:
    - date: str (YYYY-MM-DD)
    - time: str (HH:MM, heure locale)
    - location: texte libre
    """

    date: str
    time: str
    location: str = ""


class AstrologyData(DomainModel):
    """Thème « évolutif » dérivé des données de naissance (arithmétique symbolique)."""

    sun_sign: Sign
    moon_sign: Sign
    rising_sign: Sign
    north_node: str
    south_node: str
    galactic_alignment: str
    current_transits: list[str]
    evolutionary_theme: str
    soul_purpose: str
    current_lessons: list[str]
    karmatic_patterns: list[str]


class TarotCard(DomainModel):
    """Carte symbolique (lecture seule) issue du catalogue."""

    name: str
    suit: Suit
    keywords: list[str] = Field(default_factory=list)
    upright: str = ""
    reversed: str = ""
    element: Element | None = None
    image: str | None = None
    description: str | None = None


class PsychologicalProfile(DomainModel):
    dominant_archetype: Archetype
    shadow_aspects: list[str]
    consciousness_level: Score = Field(ge=0.0, le=1.0)
    emotional_maturity: Score = Field(ge=0.0, le=1.0)
    mental_clarity: Score = Field(ge=0.0, le=1.0)
    spiritual_awareness: Score = Field(ge=0.0, le=1.0)
    integration_needed: list[str]


class EnergeticSignature(DomainModel):
    primary_frequency: Sign
    secondary_frequencies: list[Sign]
    blockages: list[str]
    flow_states: list[str]
    chakra_activation: dict[str, Score]
    auric_field: str


class EvolutionaryStage(DomainModel):
    current_level: EvolutionLevel
    next_evolution: str
    karmatic_lessons: list[str]
    soul_age: SoulAge
    incarnation_purpose: str
    readiness_for_change: Score = Field(ge=0.0, le=1.0)


class Challenge(DomainModel):
    type: ChallengeType
    description: str
    root_cause: str
    transformation_path: str
    timeframe: str
    intensity: Score = Field(ge=0.0, le=1.0)


class HiddenPattern(DomainModel):
    name: str
    description: str
    origin: str
    manifestation: list[str]
    breaking_point: str
    new_pattern: str


class SoulPurpose(DomainModel):
    primary_mission: str
    secondary_missions: list[str]
    gifts: list[str]
    service_path: str
    creative_expression: str
    relationship_lessons: list[str]


class ActionableInsight(DomainModel):
    category: InsightCategory
    action: str
    reasoning: str
    expected_outcome: str
    timing: str
    priority: float


class DeepAnalysis(DomainModel):
    """Profil composite reconstruit à chaque nouvelle réponse utilisateur."""

    psychological_profile: PsychologicalProfile
    energetic_signature: EnergeticSignature
    evolutionary_stage: EvolutionaryStage
    current_challenges: list[Challenge] = Field(max_length=3)
    hidden_patterns: list[HiddenPattern] = Field(max_length=3)
    soul_purpose: SoulPurpose
    actionable_insights: list[ActionableInsight] = Field(max_length=5)
    synchronicity_level: Score = Field(ge=0.0, le=1.0)


class ResponseDepth(DomainModel):
    """Métriques heuristiques d'une réponse isolée."""

    depth: Score = Field(ge=0.0, le=1.0)
    authenticity: Score = Field(ge=0.0, le=1.0)
    readiness: Score = Field(ge=0.0, le=1.0)
    themes: list[str]


class EnergyUpdate(DomainModel):
    """Consigne de rendu pour la couche de présentation (signe + intensité)."""

    sign: Sign
    intensity: Score = Field(ge=0.0, le=1.0)
    message: str


class Situation(DomainModel):
    """Situation concrète extraite du texte libre de l'utilisateur."""

    type: SituationType | None = None
    details: str = ""
    key_phrase: str = ""
    emotion: Emotion = "neutral"
