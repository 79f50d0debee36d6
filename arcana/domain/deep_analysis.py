"""Moteur d'analyse approfondie.

Ce module agrège l'historique complet des réponses, le thème évolutif et les cartes tirées pour
produire un profil composite (`DeepAnalysis`): profil psychologique, signature énergétique avec
activation des chakras, stade évolutif, défis, schémas cachés, mission d'âme, actions
recommandées et niveau de synchronicité.

L'analyse est une fonction pure de ses entrées: elle est reconstruite (jamais mise à jour) à chaque
nouvelle réponse et deux appels identiques produisent le même résultat.
"""

from __future__ import annotations

import math
import re
import warnings
from collections.abc import Sequence

import structlog

from arcana.domain.errors import EmptyInputWarning
from arcana.domain.lexicon import (
    AURIC_FIELD_BANDS,
    AURIC_FIELD_FALLBACK,
    BASELINE_SCORE,
    CARD_GIFTS,
    CHAKRA_KEYWORDS,
    CHANGE_WORDS,
    CONSCIOUSNESS_INDICATORS,
    CREATIVE_CARD_KEYWORDS,
    DEFAULT_ARCHETYPE,
    DEFAULT_INCARNATION_PURPOSE,
    DEFAULT_KARMATIC_LESSONS,
    DEFAULT_PRIMARY_MISSION,
    DEFAULT_RELATIONSHIP_LESSONS,
    DEFAULT_SIGN,
    EMOTIONAL_MATURITY_MARKERS,
    FLOW_INDICATORS,
    MAJOR_ARCANA_SIGNS,
    NEXT_EVOLUTION,
    NEXT_EVOLUTION_FALLBACK,
    RELATIONAL_MARKERS,
    SECONDARY_MISSIONS,
    SHADOW_ASPECTS,
    SHADOW_ASPECTS_FALLBACK,
    SOUL_AGE_BANDS,
    SOUL_AGE_FALLBACK,
    SPIRITUAL_AWARENESS_LEVELS,
    THEME_VOCABULARY,
)
from arcana.domain.models import (
    ActionableInsight,
    AstrologyData,
    BirthData,
    Challenge,
    DeepAnalysis,
    EnergeticSignature,
    EnergyUpdate,
    EvolutionaryStage,
    HiddenPattern,
    PsychologicalProfile,
    SoulPurpose,
    TarotCard,
)

log = structlog.get_logger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

MAX_CHALLENGES = 3
MAX_PATTERNS = 3
MAX_INSIGHTS = 5
GIFT_THRESHOLD = 0.7
SERVICE_THRESHOLD = 0.8
DIVERGENCE_THRESHOLD = 0.3
GAP_THRESHOLD = 0.6
LONG_RESPONSE_CHARS = 100


# -------------------- Aides --------------------


def _any_present(text: str, markers: Sequence[str]) -> bool:
    return any(marker in text for marker in markers)


def _count_present(text: str, markers: Sequence[str]) -> int:
    return sum(1 for marker in markers if marker in text)


def _join_lower(responses: Sequence[str]) -> str:
    return " ".join(responses).lower()


def percent(value: float) -> int:
    """Pourcentage entier, arrondi au demi supérieur (0.125 -> 13)."""
    return math.floor(value * 100 + 0.5)


def card_sign_correspondence(card_name: str) -> str | None:
    """Signe associé à un arcane majeur, ou None (arcanes mineurs, noms inconnus)."""
    return MAJOR_ARCANA_SIGNS.get(card_name)


def extract_recurring_themes(responses: Sequence[str]) -> list[str]:
    """Thèmes du vocabulaire présents dans les réponses, dans l'ordre du vocabulaire."""
    text = _join_lower(responses)
    return [theme for theme in THEME_VOCABULARY if theme in text]


def chakra_activation(text: str, keywords: Sequence[str]) -> float:
    """Activation d'un chakra: `min(n * 0.2 + 0.3, 1.0)` pour n mots-clés présents."""
    return min(_count_present(text, keywords) * 0.2 + 0.3, 1.0)


def mental_clarity(text: str) -> float:
    """Longueur moyenne des phrases normalisée dans [0.3, 0.9]."""
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = sum(len(s.split(" ")) for s in sentences)
    average = words / max(len(sentences), 1)
    return min(max((average - 5) / 15, 0.3), 0.9)


def identify_integration_needed(
    consciousness: float, emotional: float, spiritual: float
) -> list[str]:
    """Lacunes et écarts entre axes nécessitant une intégration."""
    needs: list[str] = []
    if consciousness < GAP_THRESHOLD:
        needs.append("Consciousness expansion")
    if emotional < GAP_THRESHOLD:
        needs.append("Emotional healing")
    if spiritual < GAP_THRESHOLD:
        needs.append("Spiritual development")
    if abs(consciousness - emotional) > DIVERGENCE_THRESHOLD:
        needs.append("Mind-heart integration")
    if abs(spiritual - consciousness) > DIVERGENCE_THRESHOLD:
        needs.append("Spiritual-mental alignment")
    return needs


# -------------------- Sous-analyses --------------------


def analyze_psychological_profile(text: str) -> PsychologicalProfile:
    """
    Profil psychologique à partir du texte concaténé (minuscules).

    Le niveau de conscience est un maximum monotone des planchers des paliers trouvés, alors que
    l'archétype est celui du dernier palier trouvé dans l'ordre de balayage.
    """
    consciousness = BASELINE_SCORE
    archetype = DEFAULT_ARCHETYPE
    for _tier, indicators, floor, tier_archetype in CONSCIOUSNESS_INDICATORS:
        if _any_present(text, indicators):
            consciousness = max(consciousness, floor)
            archetype = tier_archetype

    emotional = BASELINE_SCORE
    for _tier, markers, floor in EMOTIONAL_MATURITY_MARKERS:
        if _any_present(text, markers):
            emotional = max(emotional, floor)

    spiritual = BASELINE_SCORE
    for _tier, concepts, floor in SPIRITUAL_AWARENESS_LEVELS:
        if _any_present(text, concepts):
            spiritual = max(spiritual, floor)

    return PsychologicalProfile(
        dominant_archetype=archetype,
        shadow_aspects=list(SHADOW_ASPECTS.get(archetype, SHADOW_ASPECTS_FALLBACK)),
        consciousness_level=consciousness,
        emotional_maturity=emotional,
        mental_clarity=mental_clarity(text),
        spiritual_awareness=spiritual,
        integration_needed=identify_integration_needed(consciousness, emotional, spiritual),
    )


def determine_auric_field(chakras: dict[str, float]) -> str:
    """Qualité du champ aurique selon l'activation moyenne des chakras."""
    average = sum(chakras.values()) / max(len(chakras), 1)
    for threshold, label in AURIC_FIELD_BANDS:
        if average > threshold:
            return label
    return AURIC_FIELD_FALLBACK


def analyze_energetic_signature(
    text: str,
    astro: AstrologyData | None,
    cards: Sequence[TarotCard],
) -> EnergeticSignature:
    """Signature énergétique: chakras, fréquences, blocages, états de flow."""
    chakras = {name: chakra_activation(text, keywords) for name, keywords in CHAKRA_KEYWORDS.items()}
    secondary = [
        sign for sign in (card_sign_correspondence(card.name) for card in cards) if sign
    ]
    return EnergeticSignature(
        primary_frequency=astro.sun_sign if astro is not None else DEFAULT_SIGN,
        secondary_frequencies=secondary,
        blockages=[f"{name} chakra underactive" for name, value in chakras.items() if value < 0.4],  # noqa: PLR2004
        flow_states=[f"{word} state detected" for word in FLOW_INDICATORS if word in text],
        chakra_activation=chakras,
        auric_field=determine_auric_field(chakras),
    )


def determine_soul_age(profile: PsychologicalProfile) -> str:
    """Âge de l'âme selon la somme conscience + éveil spirituel."""
    complexity = profile.spiritual_awareness + profile.consciousness_level
    for threshold, label in SOUL_AGE_BANDS:
        if complexity > threshold:
            return label
    return SOUL_AGE_FALLBACK


def analyze_evolutionary_stage(
    text: str,
    astro: AstrologyData | None,
    profile: PsychologicalProfile,
) -> EvolutionaryStage:
    """Stade évolutif; les conditions plus fortes, évaluées après, l'emportent."""
    level = "Awakening"
    if profile.consciousness_level > 0.8:  # noqa: PLR2004
        level = "Integration"
    if profile.spiritual_awareness > 0.8:  # noqa: PLR2004
        level = "Service"
    if profile.consciousness_level > 0.9 and profile.spiritual_awareness > 0.9:  # noqa: PLR2004
        level = "Mastery"

    readiness = min(
        _count_present(text, CHANGE_WORDS) * 0.2 + profile.consciousness_level * 0.5, 1.0
    )
    return EvolutionaryStage(
        current_level=level,
        next_evolution=NEXT_EVOLUTION.get(level, NEXT_EVOLUTION_FALLBACK),
        karmatic_lessons=(
            list(astro.karmatic_patterns) if astro is not None else list(DEFAULT_KARMATIC_LESSONS)
        ),
        soul_age=determine_soul_age(profile),
        incarnation_purpose=(astro.soul_purpose if astro else "") or DEFAULT_INCARNATION_PURPOSE,
        readiness_for_change=readiness,
    )


def identify_current_challenges(
    responses: Sequence[str], profile: PsychologicalProfile
) -> list[Challenge]:
    """Défis issus de règles à seuil, dans l'ordre fixe des règles (pas de tri)."""
    text = _join_lower(responses)
    challenges: list[Challenge] = []

    if profile.emotional_maturity < 0.6:  # noqa: PLR2004
        challenges.append(
            Challenge(
                type="emotional",
                description="Emotional reactivity and regulation",
                root_cause="Unprocessed emotional patterns from past experiences",
                transformation_path="Mindfulness practice and emotional awareness development",
                timeframe="3-6 months",
                intensity=1 - profile.emotional_maturity,
            )
        )
    if profile.mental_clarity < 0.6:  # noqa: PLR2004
        challenges.append(
            Challenge(
                type="mental",
                description="Mental clarity and decision-making",
                root_cause="Overthinking and mental confusion",
                transformation_path="Meditation and mental discipline practices",
                timeframe="2-4 months",
                intensity=1 - profile.mental_clarity,
            )
        )
    if profile.spiritual_awareness < 0.5:  # noqa: PLR2004
        challenges.append(
            Challenge(
                type="spiritual",
                description="Spiritual disconnection and purpose confusion",
                root_cause="Lack of spiritual practice and inner connection",
                transformation_path="Spiritual exploration and practice development",
                timeframe="6-12 months",
                intensity=1 - profile.spiritual_awareness,
            )
        )
    if _any_present(text, RELATIONAL_MARKERS):
        challenges.append(
            Challenge(
                type="relational",
                description="Relationship dynamics and boundaries",
                root_cause="Unclear boundaries and communication patterns",
                transformation_path="Conscious communication and boundary setting",
                timeframe="4-8 months",
                intensity=0.6,
            )
        )
    return challenges[:MAX_CHALLENGES]


def detect_hidden_patterns(
    responses: Sequence[str], astro: AstrologyData | None
) -> list[HiddenPattern]:
    """Un schéma par thème récurrent, plus le schéma karmique si un thème est connu."""
    patterns = [
        HiddenPattern(
            name=f"{theme} Pattern",
            description=f"Recurring focus on {theme} indicates a core life theme",
            origin="Soul-level programming and past-life experiences",
            manifestation=[
                f"Repeated {theme} situations",
                f"Strong emotional charge around {theme}",
            ],
            breaking_point=f"Conscious awareness and choice around {theme}",
            new_pattern=f"Mastery and wisdom in {theme} area",
        )
        for theme in extract_recurring_themes(responses)
    ]
    if astro is not None:
        patterns.append(
            HiddenPattern(
                name="Karmatic Pattern",
                description=(astro.karmatic_patterns[:1] or ["Core karmatic lesson"])[0],
                origin="Past-life experiences and soul contracts",
                manifestation=[
                    "Repetitive life situations",
                    "Emotional triggers",
                    "Relationship patterns",
                ],
                breaking_point="Conscious choice and new responses",
                new_pattern=(astro.current_lessons[:1] or ["Evolved consciousness"])[0],
            )
        )
    return patterns[:MAX_PATTERNS]


def identify_natural_gifts(
    profile: PsychologicalProfile, cards: Sequence[TarotCard]
) -> list[str]:
    """Dons naturels (axes > 0.7 puis mots-clés des cartes), sans doublons, ordre conservé."""
    gifts: list[str] = []
    if profile.spiritual_awareness > GIFT_THRESHOLD:
        gifts.append("Spiritual insight")
    if profile.emotional_maturity > GIFT_THRESHOLD:
        gifts.append("Emotional wisdom")
    if profile.mental_clarity > GIFT_THRESHOLD:
        gifts.append("Mental clarity")
    if profile.consciousness_level > GIFT_THRESHOLD:
        gifts.append("Conscious awareness")
    for card in cards:
        for keyword, gift in CARD_GIFTS:
            if keyword in card.keywords:
                gifts.append(gift)
    return list(dict.fromkeys(gifts))


def determine_service_path(profile: PsychologicalProfile, astro: AstrologyData | None) -> str:
    """Voie de service: première règle satisfaite dans l'ordre de priorité."""
    if profile.spiritual_awareness > SERVICE_THRESHOLD:
        return "Spiritual teaching and guidance"
    if profile.emotional_maturity > SERVICE_THRESHOLD:
        return "Emotional healing and support"
    if profile.mental_clarity > SERVICE_THRESHOLD:
        return "Mental clarity and wisdom sharing"
    return (astro.soul_purpose if astro else "") or "Service through personal example"


def determine_creative_expression(
    cards: Sequence[TarotCard], profile: PsychologicalProfile
) -> str:
    """Mode d'expression créative: cartes créatives, puis éveil, puis maturité."""
    if any(CREATIVE_CARD_KEYWORDS.intersection(card.keywords) for card in cards):
        return "Artistic and creative expression"
    if profile.spiritual_awareness > GIFT_THRESHOLD:
        return "Spiritual and mystical expression"
    if profile.emotional_maturity > GIFT_THRESHOLD:
        return "Emotional and relational expression"
    return "Authentic self-expression"


def determine_soul_purpose(
    astro: AstrologyData | None,
    cards: Sequence[TarotCard],
    profile: PsychologicalProfile,
) -> SoulPurpose:
    return SoulPurpose(
        primary_mission=(astro.soul_purpose if astro else "") or DEFAULT_PRIMARY_MISSION,
        secondary_missions=list(SECONDARY_MISSIONS),
        gifts=identify_natural_gifts(profile, cards),
        service_path=determine_service_path(profile, astro),
        creative_expression=determine_creative_expression(cards, profile),
        relationship_lessons=(
            list(astro.current_lessons)
            if astro is not None
            else list(DEFAULT_RELATIONSHIP_LESSONS)
        ),
    )


def generate_actionable_insights(
    stage: EvolutionaryStage,
    challenges: Sequence[Challenge],
    astro: AstrologyData | None,
) -> list[ActionableInsight]:
    """
    Actions recommandées, triées par priorité décroissante (tri stable), top 5.

    - immédiate: pratique de pleine conscience (priorité 1)
    - court terme: une par défi (priorité = intensité du défi)
    - long terme: pratique spirituelle (priorité 0.8)
    - spirituelle: énergie du Nœud Nord si un thème est connu (priorité 0.9)
    """
    insights = [
        ActionableInsight(
            category="immediate",
            action="Begin daily 10-minute mindfulness practice",
            reasoning="Increases present-moment awareness and emotional regulation",
            expected_outcome="Greater clarity and emotional stability within 2 weeks",
            timing="Start today",
            priority=1,
        )
    ]
    insights.extend(
        ActionableInsight(
            category="short-term",
            action=challenge.transformation_path,
            reasoning=f"Addresses core {challenge.type} challenge: {challenge.description}",
            expected_outcome=f"Significant improvement in {challenge.type} well-being",
            timing=challenge.timeframe,
            priority=challenge.intensity,
        )
        for challenge in challenges
    )
    insights.append(
        ActionableInsight(
            category="long-term",
            action="Develop consistent spiritual practice aligned with your path",
            reasoning=(
                f"Your evolutionary stage ({stage.current_level}) is ready for deeper "
                "spiritual work"
            ),
            expected_outcome="Accelerated spiritual growth and purpose clarity",
            timing="6-12 months",
            priority=0.8,
        )
    )
    if astro is not None:
        insights.append(
            ActionableInsight(
                category="spiritual",
                action=f"Work with your {astro.north_node.split(' - ')[0]} North Node energy",
                reasoning="Aligns with your soul's evolutionary direction",
                expected_outcome="Accelerated soul growth and life purpose fulfillment",
                timing="Ongoing",
                priority=0.9,
            )
        )
    return sorted(insights, key=lambda insight: insight.priority, reverse=True)[:MAX_INSIGHTS]


def calculate_synchronicity_level(
    astro: AstrologyData | None,
    cards: Sequence[TarotCard],
    responses: Sequence[str],
    profile: PsychologicalProfile,
) -> float:
    """Accord entre sources (thème, cartes, texte), base 0.5, plafonné à 1.0."""
    score = 0.5
    if astro is not None:
        score += 0.2
        if "Direct" in astro.galactic_alignment:
            score += 0.1
        chart_signs = {astro.sun_sign, astro.moon_sign, astro.rising_sign}
        for card in cards:
            if card_sign_correspondence(card.name) in chart_signs:
                score += 0.1

    if profile.spiritual_awareness > GIFT_THRESHOLD:
        score += 0.1
    if profile.consciousness_level > GIFT_THRESHOLD:
        score += 0.1

    average_length = sum(len(r) for r in responses) / max(len(responses), 1)
    if average_length > LONG_RESPONSE_CHARS:
        score += 0.1

    return min(score, 1.0)


# -------------------- Point d'entrée --------------------


def perform_deep_analysis(
    responses: Sequence[str],
    birth_data: BirthData | None,
    astro_data: AstrologyData | None,
    selected_cards: Sequence[TarotCard],
) -> DeepAnalysis:
    """
    Construit l'analyse approfondie complète.

    Paramètres:
    - responses: historique complet des réponses utilisateur (peut être vide).
    - birth_data: données de naissance, si connues (non utilisées par les règles actuelles).
    - astro_data: thème évolutif, si connu.
    - selected_cards: cartes tirées (0 à 3).

    Un historique vide émet `EmptyInputWarning` et utilise les valeurs de repli.
    """
    if not responses:
        warnings.warn(
            "deep analysis requested without responses", EmptyInputWarning, stacklevel=2
        )

    text = _join_lower(responses)
    profile = analyze_psychological_profile(text)
    stage = analyze_evolutionary_stage(text, astro_data, profile)
    challenges = identify_current_challenges(responses, profile)

    analysis = DeepAnalysis(
        psychological_profile=profile,
        energetic_signature=analyze_energetic_signature(text, astro_data, selected_cards),
        evolutionary_stage=stage,
        current_challenges=challenges,
        hidden_patterns=detect_hidden_patterns(responses, astro_data),
        soul_purpose=determine_soul_purpose(astro_data, selected_cards, profile),
        actionable_insights=generate_actionable_insights(stage, challenges, astro_data),
        synchronicity_level=calculate_synchronicity_level(
            astro_data, selected_cards, responses, profile
        ),
    )
    log.debug(
        "deep_analysis_complete",
        responses=len(responses),
        words=len(text.split()),
        has_birth=birth_data is not None,
        has_astro=astro_data is not None,
        cards=len(selected_cards),
        archetype=profile.dominant_archetype,
        synchronicity=analysis.synchronicity_level,
    )
    return analysis


def generate_energy_update(analysis: DeepAnalysis) -> EnergyUpdate:
    """
    Traduit une analyse en consigne de rendu (signe + intensité).

    Intensité: 0.7 + 0.2 * conscience + 0.1 * disposition au changement; un chakra du cœur, du
    troisième œil ou de la gorge au-dessus de 0.8 impose Leo, Pisces ou Gemini (+0.1).
    L'intensité est plafonnée à 1.0, le message affiche la valeur brute (il peut dépasser 100%).
    """
    signature = analysis.energetic_signature
    sign = signature.primary_frequency
    intensity = 0.7
    intensity += analysis.psychological_profile.consciousness_level * 0.2
    intensity += analysis.evolutionary_stage.readiness_for_change * 0.1

    chakras = signature.chakra_activation
    for chakra, override in (("Heart", "Leo"), ("Third Eye", "Pisces"), ("Throat", "Gemini")):
        if chakras.get(chakra, 0.0) > 0.8:  # noqa: PLR2004
            sign = override
            intensity += 0.1
            break

    return EnergyUpdate(
        sign=sign,
        intensity=min(intensity, 1.0),
        message=f"{sign} energy at {percent(intensity)}%",
    )
