"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares,
routes, métriques et gestion des erreurs du service de lecture.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (contexte de requête, métriques)
- Monter les routers (santé, analyses, thème, cartes, lectures, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from arcana.api.errors import register_error_handlers
from arcana.api.routes_analysis import router as analysis_router
from arcana.api.routes_astrology import router as astrology_router
from arcana.api.routes_cards import router as cards_router
from arcana.api.routes_health import router as health_router
from arcana.api.routes_readings import router as readings_router
from arcana.app.metrics import PrometheusMiddleware, metrics_router
from arcana.core.container import container
from arcana.core.logging import setup_logging
from arcana.middlewares.request_context import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes et les gestionnaires d'erreurs
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(analysis_router)
    app.include_router(astrology_router)
    app.include_router(cards_router)
    app.include_router(readings_router)
    app.include_router(metrics_router)
    return app


app = create_app()


def run() -> None:
    """Point d'entrée console: lance uvicorn avec l'hôte et le port configurés."""
    import uvicorn

    settings = container.settings
    uvicorn.run("arcana.app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
