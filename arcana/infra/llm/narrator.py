"""
Narrateur: génération de la lecture finale par un LLM, avec nouvelles tentatives bornées.

Le résultat est explicite (`Ok` | `Err`); `narrate_or_fallback` substitue un message d'excuse
fixe en cas d'échec, de sorte qu'un tour de conversation n'échoue jamais à cause du fournisseur.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from arcana.app.metrics import NARRATIVE_ATTEMPTS
from arcana.infra.llm.base import LLM

log = structlog.get_logger(__name__)

NARRATIVE_MAX_ATTEMPTS = 3
NARRATIVE_BACKOFF_SECONDS = 1.0
NARRATIVE_FALLBACK = (
    "I'm having trouble connecting to the cosmic frequencies right now. The cards are still "
    "speaking, but their voice needs a moment to come through. Please try again shortly."
)


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    reason: str
    attempts: int


NarrativeResult = Ok | Err


class Narrator:
    """Enveloppe un `LLM` avec une politique de tentatives fixe."""

    def __init__(
        self,
        llm: LLM,
        max_attempts: int = NARRATIVE_MAX_ATTEMPTS,
        backoff_seconds: float = NARRATIVE_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialise le narrateur.

        Paramètres:
        - llm: client de génération.
        - max_attempts: nombre total de tentatives (>= 1).
        - backoff_seconds: attente fixe entre deux tentatives.
        - sleep: fonction d'attente (remplaçable en test).
        """
        self.llm = llm
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    def narrate(self, messages: list[dict[str, str]]) -> NarrativeResult:
        """Tente la génération jusqu'à `max_attempts` fois.

        Une exception du client ou un contenu vide / non textuel compte comme un échec.
        """
        reason = "no attempt"
        for attempt in range(1, self.max_attempts + 1):
            try:
                text = self.llm.generate(messages)
            except Exception as exc:  # noqa: BLE001 - tout échec fournisseur est retenté
                reason = f"{type(exc).__name__}: {exc}"
            else:
                if isinstance(text, str) and text.strip():
                    NARRATIVE_ATTEMPTS.labels("ok").inc()
                    if attempt > 1:
                        log.info("narrative_recovered", attempt=attempt)
                    return Ok(text.strip())
                reason = "empty content"
            NARRATIVE_ATTEMPTS.labels("error").inc()
            log.warning(
                "narrative_attempt_failed",
                attempt=attempt,
                max_attempts=self.max_attempts,
                reason=reason,
            )
            if attempt < self.max_attempts:
                self._sleep(self.backoff_seconds)
        return Err(reason=reason, attempts=self.max_attempts)

    def narrate_or_fallback(self, messages: list[dict[str, str]]) -> str:
        result = self.narrate(messages)
        if isinstance(result, Ok):
            return result.text
        log.error("narrative_unavailable", reason=result.reason, attempts=result.attempts)
        return NARRATIVE_FALLBACK
