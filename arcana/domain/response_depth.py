"""Heuristiques de profondeur d'une réponse utilisateur isolée."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from arcana.domain.energy import tokenize
from arcana.domain.lexicon import (
    ACTION_WORDS,
    PERSONAL_WORDS,
    RESPONSE_THEMES,
    SPECIFICITY_WORDS,
    VULNERABILITY_WORDS,
)
from arcana.domain.models import ResponseDepth


def _count_containing(tokens: Sequence[str], markers: Iterable[str]) -> int:
    markers = tuple(markers)
    return sum(1 for token in tokens if any(marker in token for marker in markers))


def analyze_response_depth(text: str) -> ResponseDepth:
    """
    Mesure profondeur, authenticité et disposition au changement d'une réponse.

    - depth: densité (vulnérabilité + spécificité) * 5 + 0.3, plafonnée à 1.0
    - authenticity: densité de pronoms à la première personne * 4 + 0.4, plafonnée à 1.0
    - readiness: densité de mots d'intention * 4 + 0.3, plafonnée à 1.0
    - themes: thèmes du vocabulaire présents dans le texte, dans l'ordre du vocabulaire
    """
    tokens = tokenize(text)
    total = max(len(tokens), 1)

    vulnerability = _count_containing(tokens, VULNERABILITY_WORDS)
    specificity = _count_containing(tokens, SPECIFICITY_WORDS)
    personal = sum(1 for token in tokens if token in PERSONAL_WORDS)
    action = _count_containing(tokens, ACTION_WORDS)

    lowered = text.lower()
    return ResponseDepth(
        depth=min((vulnerability + specificity) / total * 5 + 0.3, 1.0),
        authenticity=min(personal / total * 4 + 0.4, 1.0),
        readiness=min(action / total * 4 + 0.3, 1.0),
        themes=[theme for theme in RESPONSE_THEMES if theme in lowered],
    )
