"""Catalogue de cartes adossé à l'API tarot publique (HTTP/JSON).

Endpoints utilisés:
  - `GET {base}/cards` -> `{"nhits": int, "cards": [CardRecord, ...]}`
  - `GET {base}/cards/random?n=N` -> même forme, N cartes distinctes

Les erreurs réseau et 5xx sont retentées (backoff exponentiel + gigue); les 4xx, les corps
invalides et l'épuisement des tentatives lèvent `ExternalServiceError`.
"""

from __future__ import annotations

import random as _rand
import time as _t

import httpx
import structlog
from pydantic import ValidationError

from arcana.app.metrics import CARD_CATALOG_REQUESTS
from arcana.core.http_constants import (
    HTTP_INTERNAL_SERVER_ERROR,
    MAX_RETRIES,
    RETRY_RANDOM_FACTOR,
)
from arcana.domain.errors import ExternalServiceError
from arcana.domain.models import TarotCard
from arcana.infra.cards.base import CardCatalog
from arcana.infra.cards.records import DEFAULT_IMAGE_BASE_URL, CardRecord, convert_to_tarot_card

DEFAULT_TAROT_API_URL = "https://tarotapi.dev/api/v1"
SERVICE = "tarot_api"


class TarotAPICatalog(CardCatalog):
    """Client HTTP synchrone du catalogue distant."""

    name = "remote"

    def __init__(
        self,
        base_url: str = DEFAULT_TAROT_API_URL,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        timeout_seconds: float = 5.0,
        retry_base_delay: float = 0.2,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialise le client.

        Paramètres:
        - base_url: racine de l'API (sans `/` final).
        - image_base_url: racine des images de cartes.
        - timeout_seconds: délai appliqué à chaque phase (connexion, lecture, écriture, pool).
        - retry_base_delay: délai de base du backoff exponentiel.
        - client: `httpx.Client` injecté (tests via `httpx.MockTransport`).
        """
        self.base_url = base_url.rstrip("/")
        self.image_base_url = image_base_url
        self.retry_base_delay = retry_base_delay
        self._log = structlog.get_logger(__name__).bind(component="tarot_api")
        if client is None:
            timeout = httpx.Timeout(timeout_seconds)
            limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)
            client = httpx.Client(
                headers={"Accept": "application/json"}, timeout=timeout, limits=limits
            )
        self._client = client

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, params: dict | None = None) -> dict:
        try:
            payload = self._get_with_retry(path, params)
        except ExternalServiceError:
            CARD_CATALOG_REQUESTS.labels(self.name, "error").inc()
            raise
        CARD_CATALOG_REQUESTS.labels(self.name, "ok").inc()
        return payload

    def _get_with_retry(self, path: str, params: dict | None) -> dict:
        url = f"{self.base_url}{path}"
        attempts = 0
        while True:
            attempts += 1
            try:
                resp = self._client.get(url, params=params)
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as exc:
                code = exc.response.status_code
                if code >= HTTP_INTERNAL_SERVER_ERROR and attempts < MAX_RETRIES:
                    self._backoff(attempts, f"http {code}")
                    continue
                raise ExternalServiceError(SERVICE, f"http status {code}") from exc
            except httpx.HTTPError as exc:
                if attempts < MAX_RETRIES:
                    self._backoff(attempts, type(exc).__name__)
                    continue
                raise ExternalServiceError(SERVICE, f"network error: {exc}") from exc
            except ValueError as exc:
                raise ExternalServiceError(SERVICE, "invalid json body") from exc

    def _backoff(self, attempts: int, reason: str) -> None:
        delay = (2 ** (attempts - 1)) * self.retry_base_delay
        delay += _rand.random() * RETRY_RANDOM_FACTOR * self.retry_base_delay
        self._log.warning("tarot_api_retry", attempt=attempts, reason=reason, delay=delay)
        _t.sleep(delay)

    def _cards(self, payload: dict) -> list[TarotCard]:
        raw = payload.get("cards") if isinstance(payload, dict) else None
        if not isinstance(raw, list):
            raise ExternalServiceError(SERVICE, "missing 'cards' list")
        try:
            return [
                convert_to_tarot_card(CardRecord.model_validate(item), self.image_base_url)
                for item in raw
            ]
        except ValidationError as exc:
            raise ExternalServiceError(SERVICE, f"unexpected card shape: {exc}") from exc

    def get_all_cards(self) -> list[TarotCard]:
        cards = self._cards(self._get("/cards"))
        self._log.info("tarot_api_cards_loaded", count=len(cards))
        return cards

    def get_random_cards(self, n: int = 3) -> list[TarotCard]:
        """Tire `n` cartes distinctes côté serveur.

        Raises:
            ExternalServiceError: réponse invalide ou nombre de cartes inattendu.
        """
        cards = self._cards(self._get("/cards/random", params={"n": n}))
        if len(cards) != n:
            raise ExternalServiceError(SERVICE, f"expected {n} cards, got {len(cards)}")
        return cards
