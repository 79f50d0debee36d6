"""
Format des cartes du catalogue distant et conversion vers `TarotCard`.

Objectif du module
------------------
- `CardRecord`: forme brute d'une carte telle que renvoyée par l'API tarot.
- `convert_to_tarot_card`: projection pure vers le modèle de domaine (couleur, élément, image,
  mots-clés extraits du sens à l'endroit).
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from arcana.domain.models import TarotCard

MAX_CARD_KEYWORDS = 5
DEFAULT_IMAGE_BASE_URL = "https://sacred-texts.com/tarot/pkt/img"

SUIT_ELEMENTS = {
    "wands": "Fire",
    "cups": "Water",
    "swords": "Air",
    "pentacles": "Earth",
    "major": "Spirit",
}
MINOR_SUITS = {"wands": "Wands", "cups": "Cups", "swords": "Swords", "pentacles": "Pentacles"}

_PHRASE_SPLIT = re.compile(r"[,;.]")
_WHITESPACE = re.compile(r"\s+")
_ROMAN = re.compile(r"^m{0,3}(cm|cd|d?c{0,3})(xc|xl|l?x{0,3})(ix|iv|v?i{0,3})$")


class CardRecord(BaseModel):
    """Carte brute du catalogue distant (champs en snake_case côté API)."""

    name: str
    name_short: str
    type: str
    suit: str | None = None
    meaning_up: str = ""
    meaning_rev: str = ""
    desc: str = ""


def _is_numeral(token: str) -> bool:
    return token.isdigit() or bool(_ROMAN.match(token))


def extract_keywords(meaning: str, fallback: str) -> list[str]:
    """
    Mots-clés d'une carte à partir de son sens à l'endroit.

    Règles: phrases séparées par `,` `;` `.`, minuscules, jetons numériques ou romains retirés,
    phrases vides ignorées, doublons ignorés, 5 au plus; à défaut `[fallback]`.
    """
    keywords: list[str] = []
    for phrase in _PHRASE_SPLIT.split(meaning.lower()):
        words = [w for w in phrase.split() if not _is_numeral(w)]
        keyword = " ".join(words)
        if keyword and keyword not in keywords:
            keywords.append(keyword)
        if len(keywords) == MAX_CARD_KEYWORDS:
            break
    return keywords or [fallback]


def card_image_url(name_short: str, image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> str:
    """URL d'image prévisible: `{base}/{nom court sans espaces}.jpg`."""
    slug = _WHITESPACE.sub("", name_short.lower())
    return f"{image_base_url.rstrip('/')}/{slug}.jpg"


def convert_to_tarot_card(
    record: CardRecord, image_base_url: str = DEFAULT_IMAGE_BASE_URL
) -> TarotCard:
    """Convertit une carte brute en `TarotCard`.

    Raises:
        pydantic.ValidationError: couleur inconnue pour un arcane mineur.
    """
    suit_key = (record.suit or record.type).lower()
    if record.type.lower() == "major":
        suit = "Major Arcana"
    else:
        suit = MINOR_SUITS.get(suit_key, suit_key.capitalize())
    return TarotCard(
        name=record.name,
        suit=suit,
        keywords=extract_keywords(record.meaning_up, record.name_short),
        upright=record.meaning_up,
        reversed=record.meaning_rev,
        element=SUIT_ELEMENTS.get(suit_key, "Spirit"),
        image=card_image_url(record.name_short, image_base_url),
        description=record.desc or None,
    )
