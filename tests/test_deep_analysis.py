# ============================================================
# Tests : tests/test_deep_analysis.py
# Objet  : Couvrir le moteur d'analyse approfondie (profil, énergie,
#          stade, défis, schémas, mission, actions, synchronicité).
# ============================================================
"""
Tests du moteur d'analyse approfondie.

Ce module vérifie les règles de chaque sous-analyse, les valeurs de repli sur historique vide,
l'idempotence et, par tirage aléatoire reproductible, les bornes de tous les scores.
"""

from __future__ import annotations

import random
import warnings
from datetime import date

import pytest

from arcana.domain.astrology import calculate_evolutionary_astrology
from arcana.domain.deep_analysis import (
    MAX_CHALLENGES,
    MAX_INSIGHTS,
    MAX_PATTERNS,
    analyze_psychological_profile,
    card_sign_correspondence,
    chakra_activation,
    generate_energy_update,
    mental_clarity,
    percent,
    perform_deep_analysis,
)
from arcana.domain.errors import EmptyInputWarning
from arcana.domain.lexicon import (
    CHAKRA_KEYWORDS,
    CONSCIOUSNESS_INDICATORS,
    EMOTIONAL_MATURITY_MARKERS,
    SPIRITUAL_AWARENESS_LEVELS,
    THEME_VOCABULARY,
)
from arcana.domain.models import BirthData
from arcana.infra.cards.static_deck import StaticCardCatalog


FUZZ_CASES = 1000
REFERENCE_DAY = date(2024, 1, 15)
FUZZ_SEED = 2024
BASELINE = 0.5
MIN_CLARITY = 0.3
CHAKRA_COUNT = 7
EMPTY_READINESS = 0.25
RELATIONAL_INTENSITY = 0.6
NODE_PRIORITY = 0.9


def _analyze_quietly(*args):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", EmptyInputWarning)
        return perform_deep_analysis(*args)


# -------------------- Historique vide --------------------


def test_empty_history_warns_and_uses_fallbacks():
    """Teste l'avertissement EmptyInputWarning et les valeurs de repli."""
    with pytest.warns(EmptyInputWarning):
        analysis = perform_deep_analysis([], None, None, [])

    profile = analysis.psychological_profile
    assert profile.dominant_archetype == "Seeker"
    assert profile.consciousness_level == BASELINE
    assert profile.emotional_maturity == BASELINE
    assert profile.spiritual_awareness == BASELINE
    assert profile.mental_clarity == MIN_CLARITY
    assert profile.integration_needed == [
        "Consciousness expansion",
        "Emotional healing",
        "Spiritual development",
    ]

    energy = analysis.energetic_signature
    assert energy.primary_frequency == "Sagittarius"
    assert energy.secondary_frequencies == []
    assert len(energy.blockages) == CHAKRA_COUNT
    assert energy.auric_field == "Contracted and healing"

    stage = analysis.evolutionary_stage
    assert stage.current_level == "Awakening"
    assert stage.next_evolution == "Integration"
    assert stage.soul_age == "Young Soul"
    assert stage.karmatic_lessons == ["Self-awareness", "Compassion", "Authenticity"]
    assert stage.incarnation_purpose == "Learning and growth through experience"
    assert stage.readiness_for_change == pytest.approx(EMPTY_READINESS)

    assert [c.type for c in analysis.current_challenges] == ["emotional", "mental"]
    assert analysis.hidden_patterns == []
    assert analysis.soul_purpose.gifts == []
    assert analysis.soul_purpose.service_path == "Service through personal example"
    assert analysis.soul_purpose.relationship_lessons == [
        "Authentic communication",
        "Healthy boundaries",
    ]
    assert [i.category for i in analysis.actionable_insights] == [
        "immediate",
        "long-term",
        "short-term",
        "short-term",
    ]
    assert analysis.synchronicity_level == BASELINE


def test_non_empty_history_does_not_warn():
    """Teste qu'aucun avertissement n'est émis avec au moins une réponse."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", EmptyInputWarning)
        perform_deep_analysis(["hello"], None, None, [])


# -------------------- Profil psychologique --------------------


def test_archetype_is_last_tier_while_consciousness_is_max():
    """Teste que l'archétype suit le dernier palier trouvé et la conscience le maximum."""
    text = "i feel stuck in my relationship and i am trying to find love and purpose"
    profile = analyze_psychological_profile(text)
    assert profile.dominant_archetype == "Warrior"
    assert profile.consciousness_level == BASELINE
    assert profile.emotional_maturity == pytest.approx(0.8)
    assert profile.spiritual_awareness == pytest.approx(0.8)
    assert profile.shadow_aspects == ["Aggression", "Impatience", "Conflict"]


def test_transcendent_language_reaches_sage():
    """Teste le palier transcendant (Sage, 0.9)."""
    profile = analyze_psychological_profile("i am trusting and allowing the process")
    assert profile.dominant_archetype == "Sage"
    assert profile.consciousness_level == pytest.approx(0.9)


def test_mental_clarity_bounds():
    """Teste la normalisation de la longueur moyenne des phrases dans [0.3, 0.9]."""
    assert mental_clarity("") == MIN_CLARITY
    assert mental_clarity("Short. Very short.") == MIN_CLARITY
    long_sentence = " ".join(["word"] * 40) + "."
    assert mental_clarity(long_sentence) == pytest.approx(0.9)


def test_chakra_activation_formula():
    """Teste l'activation `n * 0.2 + 0.3`, plafonnée à 1.0."""
    assert chakra_activation("", CHAKRA_KEYWORDS["Heart"]) == pytest.approx(0.3)
    assert chakra_activation("love and healing", CHAKRA_KEYWORDS["Heart"]) == pytest.approx(0.7)
    text = " ".join(CHAKRA_KEYWORDS["Heart"])
    assert chakra_activation(text, CHAKRA_KEYWORDS["Heart"]) == 1.0


# -------------------- Thème, cartes, synchronicité --------------------


def test_card_sign_correspondence():
    """Teste la table des arcanes majeurs et l'absence de signe pour les mineurs."""
    assert card_sign_correspondence("The Fool") == "Aquarius"
    assert card_sign_correspondence("Temperance") == "Sagittarius"
    assert card_sign_correspondence("Three of Cups") is None


def test_analysis_with_chart_and_cards(astro, spread):
    """Teste les apports du thème et des cartes (fréquences, dons, mission, synchronicité)."""
    analysis = perform_deep_analysis(["zzz"], None, astro, spread)

    energy = analysis.energetic_signature
    assert energy.primary_frequency == "Sagittarius"
    assert energy.secondary_frequencies == ["Sagittarius", "Gemini", "Virgo"]

    purpose = analysis.soul_purpose
    assert purpose.primary_mission == astro.soul_purpose
    assert purpose.gifts == ["Healing abilities", "Creative expression", "Teaching wisdom"]
    assert purpose.creative_expression == "Artistic and creative expression"
    assert purpose.relationship_lessons == astro.current_lessons

    stage = analysis.evolutionary_stage
    assert stage.karmatic_lessons == astro.karmatic_patterns
    assert stage.incarnation_purpose == astro.soul_purpose

    # 0.5 + 0.2 (thème) + 0.1 (alignement direct) + 0.1 (Temperance) + 0.1 (Magician)
    assert analysis.synchronicity_level == pytest.approx(1.0)

    node = [i for i in analysis.actionable_insights if i.category == "spiritual"]
    assert node[0].action == "Work with your Gemini North Node energy"
    assert node[0].priority == NODE_PRIORITY


def test_hidden_patterns_are_capped(astro):
    """Teste un schéma par thème récurrent, le schéma karmique ensuite, trois au plus."""
    analysis = perform_deep_analysis(["my love"], None, astro, [])
    assert [p.name for p in analysis.hidden_patterns] == ["love Pattern", "Karmatic Pattern"]
    assert analysis.hidden_patterns[1].description == "Preaching without practicing"

    crowded = perform_deep_analysis(["my family and work and love"], None, astro, [])
    assert [p.name for p in crowded.hidden_patterns] == [
        "love Pattern",
        "work Pattern",
        "family Pattern",
    ]


def test_relational_challenge():
    """Teste le défi relationnel déclenché par le vocabulaire relationnel."""
    analysis = perform_deep_analysis(["people drain me"], None, None, [])
    relational = [c for c in analysis.current_challenges if c.type == "relational"]
    assert relational[0].intensity == RELATIONAL_INTENSITY
    assert relational[0].timeframe == "4-8 months"


def test_insights_sorted_by_priority(astro):
    """Teste le tri décroissant des actions recommandées."""
    analysis = perform_deep_analysis(["people"], None, astro, [])
    priorities = [i.priority for i in analysis.actionable_insights]
    assert priorities == sorted(priorities, reverse=True)
    assert analysis.actionable_insights[0].category == "immediate"


def test_analysis_is_idempotent(astro, spread):
    """Teste que deux appels identiques produisent exactement la même analyse."""
    responses = ["I feel stuck at work", "I am ready to choose something new"]
    first = perform_deep_analysis(responses, None, astro, spread)
    second = perform_deep_analysis(responses, None, astro, spread)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_analysis_serializes_with_camel_case(astro, spread):
    """Teste la sérialisation JSON en camelCase."""
    data = perform_deep_analysis(["hello"], None, astro, spread).model_dump(by_alias=True)
    assert "psychologicalProfile" in data
    assert "chakraActivation" in data["energeticSignature"]
    assert "synchronicityLevel" in data


# -------------------- Consigne de rendu --------------------


def test_energy_update_defaults_to_primary_frequency():
    """Teste le signe par défaut et le format du message."""
    update = generate_energy_update(_analyze_quietly([], None, None, []))
    assert update.sign == "Sagittarius"
    assert update.message.startswith("Sagittarius energy at ")
    assert update.message.endswith("%")
    assert 0.0 <= update.intensity <= 1.0


def _raw_intensity(analysis, update) -> float:
    bonus = 0.1 if update.sign != analysis.energetic_signature.primary_frequency else 0.0
    return (
        0.7
        + analysis.psychological_profile.consciousness_level * 0.2
        + analysis.evolutionary_stage.readiness_for_change * 0.1
        + bonus
    )


def test_energy_update_heart_override():
    """Teste qu'un chakra du cœur très actif impose Leo."""
    analysis = perform_deep_analysis(["love compassion connection healing"], None, None, [])
    update = generate_energy_update(analysis)
    assert update.sign == "Leo"
    assert update.message == f"Leo energy at {percent(_raw_intensity(analysis, update))}%"


def test_energy_update_intensity_is_capped():
    """Teste que l'intensité est plafonnée à 1.0 tandis que le message garde la valeur brute."""
    text = "trusting allowing ready change transform new different evolve love compassion connection"
    analysis = perform_deep_analysis([text], None, None, [])
    update = generate_energy_update(analysis)
    raw = _raw_intensity(analysis, update)
    assert update.intensity == 1.0
    assert raw >= 1.0
    assert update.message == f"{update.sign} energy at {percent(raw)}%"


def test_percent_rounds_half_up():
    """Teste l'arrondi au demi supérieur des pourcentages affichés."""
    assert percent(0.125) == 13  # noqa: PLR2004
    assert percent(0.5) == 50  # noqa: PLR2004
    assert percent(1.2) == 120  # noqa: PLR2004


# -------------------- Bornes (tirage reproductible) --------------------


def _vocabulary() -> list[str]:
    words: list[str] = []
    for _tier, indicators, _floor, _arch in CONSCIOUSNESS_INDICATORS:
        words.extend(indicators)
    for _tier, markers, _floor in EMOTIONAL_MATURITY_MARKERS:
        words.extend(markers)
    for _tier, concepts, _floor in SPIRITUAL_AWARENESS_LEVELS:
        words.extend(concepts)
    for keywords in CHAKRA_KEYWORDS.values():
        words.extend(keywords)
    words.extend(THEME_VOCABULARY)
    words.extend(["I", "my", "the", "and", "because", "zzz", "ready", "people"])
    return words


def _random_response(rng: random.Random, vocabulary: list[str]) -> str:
    sentences = []
    for _ in range(rng.randint(1, 4)):
        words = rng.choices(vocabulary, k=rng.randint(1, 25))
        sentences.append(" ".join(words) + rng.choice([".", "!", "?", ""]))
    return " ".join(sentences)


def test_scores_stay_in_bounds_for_random_inputs():
    """Teste sur 1000 entrées aléatoires que tous les scores restent dans [0, 1]."""
    rng = random.Random(FUZZ_SEED)
    vocabulary = _vocabulary()
    deck = StaticCardCatalog(rng=random.Random(FUZZ_SEED)).get_all_cards()

    for _ in range(FUZZ_CASES):
        responses = [_random_response(rng, vocabulary) for _ in range(rng.randint(0, 4))]
        astro = None
        if rng.random() < 0.5:  # noqa: PLR2004
            birth = BirthData(
                date=f"19{rng.randint(50, 99)}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}",
                time=f"{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}",
                location=rng.choice(["", "Paris", "Buenos Aires", "Oslo"]),
            )
            astro = calculate_evolutionary_astrology(birth, REFERENCE_DAY)
        cards = rng.sample(deck, rng.randint(0, 3))

        analysis = _analyze_quietly(responses, None, astro, cards)

        profile = analysis.psychological_profile
        for score in (
            profile.consciousness_level,
            profile.emotional_maturity,
            profile.mental_clarity,
            profile.spiritual_awareness,
            analysis.evolutionary_stage.readiness_for_change,
            analysis.synchronicity_level,
        ):
            assert 0.0 <= score <= 1.0
        for value in analysis.energetic_signature.chakra_activation.values():
            assert 0.0 <= value <= 1.0
        for challenge in analysis.current_challenges:
            assert 0.0 <= challenge.intensity <= 1.0
        assert len(analysis.current_challenges) <= MAX_CHALLENGES
        assert len(analysis.hidden_patterns) <= MAX_PATTERNS
        assert len(analysis.actionable_insights) <= MAX_INSIGHTS
        assert len(analysis.soul_purpose.gifts) == len(set(analysis.soul_purpose.gifts))

        update = generate_energy_update(analysis)
        assert 0.0 <= update.intensity <= 1.0


def test_matching_cards_raise_synchronicity(astro, spread):
    """Teste que des cartes accordées au thème élèvent la synchronicité, toutes choses égales."""
    matching = [spread[0], spread[1], spread[1].model_copy(update={"name": "The Hanged Man"})]
    unrelated = [
        card.model_copy(update={"name": name})
        for card, name in zip(spread, ("The Emperor", "The Empress", "Strength"), strict=True)
    ]
    high = perform_deep_analysis(["zzz"], None, astro, matching).synchronicity_level
    low = perform_deep_analysis(["zzz"], None, astro, unrelated).synchronicity_level
    assert high > low
