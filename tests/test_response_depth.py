"""Tests des heuristiques de profondeur d'une réponse isolée."""

import pytest

from arcana.domain.response_depth import analyze_response_depth

BASE_DEPTH = 0.3
BASE_AUTHENTICITY = 0.4
BASE_READINESS = 0.3
ONE_PRONOUN_IN_TEN = 0.8


def test_empty_response_has_base_scores():
    """Teste les valeurs plancher pour une réponse vide."""
    depth = analyze_response_depth("")
    assert depth.depth == pytest.approx(BASE_DEPTH)
    assert depth.authenticity == pytest.approx(BASE_AUTHENTICITY)
    assert depth.readiness == pytest.approx(BASE_READINESS)
    assert depth.themes == []


def test_vulnerable_specific_response_is_capped():
    """Teste qu'une réponse très dense est plafonnée à 1.0."""
    depth = analyze_response_depth("I feel scared because my job")
    assert depth.depth == 1.0
    assert depth.authenticity == 1.0
    assert depth.readiness == pytest.approx(BASE_READINESS)


def test_first_person_density():
    """Teste l'authenticité: pronoms à la première personne (jeton exact) * 4 + 0.4."""
    depth = analyze_response_depth("zzz " * 9 + "I")
    assert depth.authenticity == pytest.approx(ONE_PRONOUN_IN_TEN)


def test_readiness_counts_intent_words():
    """Teste que les mots d'intention augmentent la disposition au changement."""
    calm = analyze_response_depth("zzz zzz zzz zzz")
    ready = analyze_response_depth("I am ready and I will decide")
    assert ready.readiness > calm.readiness


def test_themes_follow_vocabulary_order():
    """Teste que les thèmes sont listés dans l'ordre du vocabulaire, pas du texte."""
    depth = analyze_response_depth("My family, my work and my love")
    assert depth.themes == ["love", "work", "family"]


def test_scared_and_stuck_example():
    """Teste l'exemple d'une confidence relationnelle inquiète à la première personne."""
    text = "I feel scared and stuck in my relationship, I don't know if I should leave"
    depth = analyze_response_depth(text)
    assert "relationship" in depth.themes
    assert depth.depth > BASE_DEPTH
    assert depth.authenticity > BASE_AUTHENTICITY
