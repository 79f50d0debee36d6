"""Interface commune des catalogues de cartes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from arcana.domain.models import TarotCard


class CardCatalog(ABC):
    """Source de cartes en lecture seule (API distante ou deck embarqué)."""

    name: str = "catalog"

    @abstractmethod
    def get_all_cards(self) -> list[TarotCard]:
        """Retourne toutes les cartes du catalogue."""
        ...

    @abstractmethod
    def get_random_cards(self, n: int = 3) -> list[TarotCard]:
        """Retourne `n` cartes tirées au hasard."""
        ...
