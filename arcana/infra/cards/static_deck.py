"""Catalogue hors ligne: le jeu complet de 78 cartes (22 majeurs, 56 mineurs) embarqué en JSON."""

from __future__ import annotations

import json
import os
import random

from arcana.domain.errors import InvalidInputError
from arcana.domain.models import TarotCard
from arcana.infra.cards.base import CardCatalog
from arcana.infra.cards.records import DEFAULT_IMAGE_BASE_URL, CardRecord, convert_to_tarot_card

DECK_PATH = os.path.join(os.path.dirname(__file__), "tarot_deck.json")


class StaticCardCatalog(CardCatalog):
    """
    Deck embarqué, même interface que le catalogue distant.

    Le fichier suit la forme de réponse de l'API (`{"nhits", "cards"}`); les cartes passent par la
    même conversion. Le tirage est uniforme et sans remise; `rng` est injectable.
    """

    name = "static"

    def __init__(
        self,
        path: str = DECK_PATH,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        rng: random.Random | None = None,
    ) -> None:
        """Charge le deck depuis `path`."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self._cards = [
            convert_to_tarot_card(CardRecord.model_validate(item), image_base_url)
            for item in data["cards"]
        ]
        self._rng = rng or random.Random()

    def get_all_cards(self) -> list[TarotCard]:
        return list(self._cards)

    def get_random_cards(self, n: int = 3) -> list[TarotCard]:
        """Tire `n` cartes distinctes.

        Raises:
            InvalidInputError: `n` hors de [1, taille du deck].
        """
        if not 1 <= n <= len(self._cards):
            raise InvalidInputError("n", n, f"n must be between 1 and {len(self._cards)}")
        return self._rng.sample(self._cards, n)
