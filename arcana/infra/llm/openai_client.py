"""
Client LLM basé sur l'API OpenAI avec fallback déterministe.

Implémente l'interface LLM en supportant:
- chat.completions (SDK OpenAI)
- fallback local déterministe quand aucune clé n'est configurée (tests/dev)
"""

from __future__ import annotations

from typing import Any

import structlog
from openai import OpenAI

from arcana.infra.llm.base import LLM

log = structlog.get_logger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAILLM(LLM):
    """
    LLM basé sur OpenAI avec fallback.

    Utilise l'API OpenAI si une clé API est fournie, sinon renvoie une réponse déterministe.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = 30.0,
        client: Any | None = None,
    ) -> None:
        """Initialise le client.

        Paramètres:
        - api_key: clé OpenAI; sans clé (et sans `client`), mode fallback.
        - model: modèle de chat à utiliser.
        - timeout_seconds: délai maximal d'un appel.
        - client: client compatible SDK injecté (tests).
        """
        self.model = model
        if client is not None:
            self.client = client
        elif api_key:
            # Les nouvelles tentatives sont gérées par le narrateur.
            self.client = OpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        else:
            self.client = None

    @property
    def is_fallback(self) -> bool:
        return self.client is None

    def generate(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """
        Génère du texte via chat.completions.

        Retourne une chaîne vide si le fournisseur ne renvoie aucun contenu; les exceptions du SDK
        sont propagées.
        """
        if self.client is None:
            return self._fallback_response(messages)

        resp = self.client.chat.completions.create(model=self.model, messages=messages, **kwargs)
        choice = resp.choices[0]
        content = getattr(getattr(choice, "message", None), "content", None)
        usage = getattr(resp, "usage", None)
        if usage is not None:
            log.debug(
                "llm_usage",
                model=self.model,
                prompt_tokens=getattr(usage, "prompt_tokens", 0),
                completion_tokens=getattr(usage, "completion_tokens", 0),
            )
        return content if isinstance(content, str) else ""

    def _fallback_response(self, messages: list[dict[str, str]]) -> str:
        """Réponse déterministe (utile pour tests)."""
        last = messages[-1]["content"] if messages else ""
        return f"FAKE_OPENAI: {last[:80]}".strip()
