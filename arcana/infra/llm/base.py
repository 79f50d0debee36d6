"""Interface de base pour les modèles de langage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LLM(ABC):
    """Interface abstraite pour les modèles de langage."""

    @abstractmethod
    def generate(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Génère une réponse à partir d'une liste de messages (`role`, `content`).

        Les erreurs du fournisseur sont propagées: la politique de nouvelle tentative appartient
        à l'appelant.
        """
        ...
