"""
Métriques Prometheus pour l'application.

Ce module définit les métriques Prometheus du service de lecture: trafic HTTP, tours de
conversation, appels au catalogue de cartes et au narrateur.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Conversation metrics
READING_TURNS = Counter(
    "reading_turns_total",
    "Total reading turns by step reached",
    ["action", "step"],
)
ANALYSIS_LATENCY = Histogram(
    "analysis_latency_seconds",
    "Latency of analysis endpoints",
    ["kind"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Collaborators
CARD_CATALOG_REQUESTS = Counter(
    "card_catalog_requests_total",
    "Total card catalog calls",
    ["backend", "outcome"],
)
NARRATIVE_ATTEMPTS = Counter(
    "narrative_attempts_total",
    "Narrative generation attempts",
    ["outcome"],
)


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte le nombre de requêtes et la latence par gabarit de route (`/readings/{session_id}`),
    jamais par chemin brut, pour borner la cardinalité des labels.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = getattr(request.scope.get("route"), "path", None) or "unmatched"
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
