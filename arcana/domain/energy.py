"""
Analyse énergétique d'un texte libre par correspondance de mots-clés.

Objectif: attribuer à un texte un signe dominant (et secondaire) ainsi qu'une intensité
synthétique, à partir des tables `SIGN_KEYWORDS` et `PLANETARY_KEYWORDS`.

Règles:
- Jetons = découpage sur les espaces, en minuscules.
- Un jeton correspond à un mot-clé si l'un contient l'autre (dans les deux sens).
- Les correspondances planétaires ajoutent un bonus pondéré aux signes associés.
- Égalité de score: l'ordre de définition de la table des signes l'emporte.
"""

from __future__ import annotations

from collections.abc import Sequence

from arcana.domain.lexicon import (
    DEFAULT_SIGN,
    PLANETARY_KEYWORDS,
    PLANETARY_SIGN_BONUS,
    SIGN_KEYWORDS,
)
from arcana.domain.models import EnergySignature

MIN_INTENSITY = 0.2
MAX_INTENSITY = 1.0
MAX_KEYWORDS = 5
CONSISTENCY_STEP = 0.1
CONSISTENCY_CAP = 0.3

NEUTRAL_SIGNATURE = EnergySignature(primary_sign=DEFAULT_SIGN, intensity=MIN_INTENSITY)


def tokenize(text: str) -> list[str]:
    """Découpe un texte en jetons minuscules (séparateurs: espaces)."""
    return text.lower().split()


def count_related(tokens: Sequence[str], keyword: str) -> int:
    """Compte les jetons liés à `keyword` par inclusion dans un sens ou dans l'autre."""
    return sum(1 for token in tokens if keyword in token or token in keyword)


def score_signs(tokens: Sequence[str]) -> tuple[dict[str, float], list[str]]:
    """
    Calcule le score de chaque signe et la liste des mots-clés trouvés.

    Retour: (scores par signe dans l'ordre de la table, mots-clés dans l'ordre de découverte).
    Les doublons entre catégories sont conservés.
    """
    scores: dict[str, float] = {}
    found: list[str] = []

    for sign, keywords in SIGN_KEYWORDS.items():
        score = 0.0
        for keyword in keywords:
            matches = count_related(tokens, keyword)
            if matches > 0:
                score += matches
                found.append(keyword)
        scores[sign] = score

    for planet, keywords in PLANETARY_KEYWORDS.items():
        for keyword in keywords:
            matches = count_related(tokens, keyword)
            if matches > 0:
                found.append(keyword)
                for sign, weight in PLANETARY_SIGN_BONUS[planet]:
                    scores[sign] += matches * weight

    return scores, found


def analyze_text_energy(text: str) -> EnergySignature:
    """Retourne la signature énergétique d'un texte (fonction pure)."""
    tokens = tokenize(text)
    scores, found = score_signs(tokens)

    # sorted() est stable: à score égal, l'ordre de SIGN_KEYWORDS est conservé.
    ranked = [
        (sign, score)
        for sign, score in sorted(scores.items(), key=lambda item: item[1], reverse=True)
        if score > 0
    ]
    if not ranked:
        return NEUTRAL_SIGNATURE

    density = len(found) / max(len(tokens), 1)
    intensity = min(max(density * 2 + 0.3, MIN_INTENSITY), MAX_INTENSITY)

    return EnergySignature(
        primary_sign=ranked[0][0],
        secondary_sign=ranked[1][0] if len(ranked) > 1 else None,
        intensity=intensity,
        keywords=found[:MAX_KEYWORDS],
    )


def analyze_cumulative_energy(responses: Sequence[str]) -> EnergySignature:
    """
    Signature énergétique cumulée d'une session.

    Concatène les réponses, analyse le tout, puis ajoute un bonus de cohérence
    `min(n * 0.1, 0.3)` à l'intensité (plafonnée à 1.0).
    """
    if not responses:
        return NEUTRAL_SIGNATURE

    base = analyze_text_energy(" ".join(responses))
    boost = min(len(responses) * CONSISTENCY_STEP, CONSISTENCY_CAP)
    return base.model_copy(update={"intensity": min(base.intensity + boost, MAX_INTENSITY)})
