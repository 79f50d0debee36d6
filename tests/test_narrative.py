"""
Tests de l'assemblage des textes de conversation.

Couvre l'extraction de situation, les questions, l'invitation au tirage, l'analyse des cartes, la
lecture finale, les réponses de clarification et le prompt du narrateur.
"""

import random

import pytest

from arcana.domain.deep_analysis import perform_deep_analysis
from arcana.domain.errors import InvalidInputError
from arcana.domain.models import EnergySignature, ResponseDepth
from arcana.domain.narrative import (
    INITIAL_QUESTIONS,
    NARRATIVE_SYSTEM,
    build_narrative_prompt,
    extract_situation,
    generate_card_analysis,
    generate_card_invitation,
    generate_clarifying_response,
    generate_follow_up_question,
    generate_initial_question,
    generate_reading,
    generate_welcome_message,
)

RELATIONSHIP_STORY = "My partner and I keep fighting about small things. I feel worried."
VAGUE_STORY = "Just thinking about things lately."
NEXT_STEP_COUNT = 4


# -------------------- Situation --------------------


def test_extract_relationship_situation():
    """Teste le type, le détail, la phrase clé et l'émotion d'une confidence."""
    situation = extract_situation([RELATIONSHIP_STORY])
    assert situation.type == "relationship"
    assert situation.details == "My partner and I keep fighting about small things"
    assert situation.key_phrase == "My partner and I keep fighting about small things"
    assert situation.emotion == "anxious"


def test_extract_situation_rule_order():
    """Teste que la première règle (relation avant travail) l'emporte."""
    situation = extract_situation(["My boss and my boyfriend both ignore me at the office."])
    assert situation.type == "relationship"


def test_extract_situation_without_type():
    """Teste une confidence sans type: phrase clé seule, émotion neutre."""
    situation = extract_situation([VAGUE_STORY])
    assert situation.type is None
    assert situation.details == ""
    assert situation.key_phrase == "Just thinking about things lately"
    assert situation.emotion == "neutral"


def test_last_emotion_wins():
    """Teste que la dernière émotion détectée dans l'ordre des règles l'emporte."""
    situation = extract_situation(["I am excited but also confused about it all."])
    assert situation.emotion == "confused"


def test_extract_situation_empty():
    """Teste l'extraction sur un historique vide."""
    situation = extract_situation([])
    assert situation.type is None
    assert situation.key_phrase == ""


# -------------------- Questions --------------------


def test_initial_question_is_seeded():
    """Teste que la question d'ouverture vient du catalogue et dépend de la graine."""
    first = generate_initial_question(random.Random(7))
    again = generate_initial_question(random.Random(7))
    assert first in INITIAL_QUESTIONS
    assert first == again


def test_follow_up_uses_present_card_and_situation(spread):
    """Teste la relance ancrée sur la carte du présent et la situation relationnelle."""
    question = generate_follow_up_question(spread, [RELATIONSHIP_STORY])
    assert "The Magician" in question
    assert "relationship" in question


def test_follow_up_falls_back_to_key_phrase(spread):
    """Teste la relance qui cite la phrase clé quand aucun type n'est détecté."""
    question = generate_follow_up_question(spread, [VAGUE_STORY])
    assert question.startswith('You said "Just thinking about things lately"')


def test_follow_up_default(spread):
    """Teste la relance générique sans historique exploitable."""
    question = generate_follow_up_question(spread, [])
    assert "what's your gut telling you" in question


def test_spread_needs_three_cards(spread):
    """Teste qu'un tirage incomplet lève InvalidInputError(cards)."""
    with pytest.raises(InvalidInputError) as exc:
        generate_follow_up_question(spread[:2], [RELATIONSHIP_STORY])
    assert exc.value.field == "cards"


# -------------------- Messages --------------------


def test_welcome_message(astro):
    """Teste l'accueil: signes, premier transit et question d'ouverture."""
    message = generate_welcome_message(astro, random.Random(1))
    assert message.startswith("Welcome, Sagittarius soul!")
    assert "Gemini Moon" in message
    assert astro.current_transits[0].lower() in message
    assert message.split("\n\n")[-1] in INITIAL_QUESTIONS


def test_card_invitation(astro):
    """Teste l'invitation au tirage (énergie dominante, pourcentages arrondis)."""
    energy = EnergySignature(primary_sign="Scorpio", intensity=0.6)
    depth = ResponseDepth(depth=0.456, authenticity=0.8, readiness=0.3, themes=[])
    message = generate_card_invitation(energy, depth, astro)
    assert message.startswith("I can feel the Scorpio energy")
    assert "46% depth and 80% authenticity" in message
    assert "Pisces Rising" in message


def test_card_analysis_names_each_position(astro, spread):
    """Teste l'analyse positionnelle (nœud sud, présent, nœud nord) et les pourcentages."""
    analysis = perform_deep_analysis(["I feel stuck"], None, astro, spread)
    message = generate_card_analysis(spread, astro, analysis)
    assert message.startswith("Perfect... Temperance, The Magician, The Hermit chose you.")
    assert "Temperance + your Gemini past mastery" in message
    assert "The Hermit + your Gemini growth edge" in message
    assert "This balance energy" in message
    assert "**SYNCHRONICITY LEVEL:" in message


# -------------------- Lecture finale --------------------


def test_reading_sections_with_situation(birth, astro, spread):
    """Teste les sections de la lecture quand une situation est détectée."""
    reading = generate_reading(spread, [RELATIONSHIP_STORY], birth, astro)
    assert reading.startswith("**Technical Energies**")
    assert "• Sun: Sagittarius" in reading
    assert "• Past: Temperance (balance)" in reading
    assert "• Guidance: The Hermit (introspection)" in reading
    assert "**About your relationship situation:**" in reading
    assert "**What your cards are saying:**" in reading
    assert "For your relationship situation, this balance energy" in reading
    assert "I can feel the anxiety" in reading
    assert "**Trust your feelings**" in reading
    assert reading.count("**Moving forward:**") == 1
    for n in range(1, NEXT_STEP_COUNT + 1):
        assert f"\n{n}. **" in reading


def test_reading_without_situation(spread):
    """Teste la lecture sans thème ni situation détectée."""
    reading = generate_reading(spread, [VAGUE_STORY], None, None)
    assert "**About your" not in reading
    assert "• Sun:" not in reading
    assert "This balance energy is your secret strength." in reading
    assert "**Take one aligned action**" in reading
    assert "1. **Embody introspection energy**" in reading


def test_reading_is_deterministic(birth, astro, spread):
    """Teste que la lecture gabarit est identique pour des entrées identiques."""
    responses = [RELATIONSHIP_STORY, "I want to talk to them tonight."]
    assert generate_reading(spread, responses, birth, astro) == generate_reading(
        spread, responses, birth, astro
    )


@pytest.mark.parametrize(
    ("question", "opening"),
    [
        ("Tell me about the Hermit card", "About the The Hermit"),
        ("What should I do now?", "Based on your reading"),
        ("Why does this matter?", "The deeper meaning here"),
        ("How do I start?", "Practically speaking"),
        ("Is my partner right for me?", "For relationships"),
        ("Tell me more", "Looking at your reading again"),
    ],
)
def test_clarifying_branches(spread, question, opening):
    """Teste les branches de réponse aux questions de clarification."""
    assert generate_clarifying_response(question, spread).startswith(opening)


def test_clarifying_mentions_named_card_without_word_card(spread):
    """Teste qu'une carte nommée est reconnue sans le mot « card »."""
    answer = generate_clarifying_response("Tell me about Temperance", spread)
    assert answer.startswith("About the Temperance")


# -------------------- Prompt du narrateur --------------------


def test_narrative_prompt(astro, spread):
    """Teste le prompt: message système fixe, contexte structuré puis réponses brutes."""
    responses = [RELATIONSHIP_STORY]
    analysis = perform_deep_analysis(responses, None, astro, spread)
    messages = build_narrative_prompt(analysis, astro, spread, responses)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[0]["content"] == NARRATIVE_SYSTEM
    user = messages[1]["content"]
    assert "Chart: Sun Sagittarius, Moon Gemini, Rising Pisces" in user
    assert "Foundation: Temperance (balance, healing, moderation)" in user
    assert "Situation: relationship, emotion anxious" in user
    assert user.endswith(f"- {RELATIONSHIP_STORY}")
