"""Configuration de logging basée sur structlog.

Objectif du module
------------------
- Logs lisibles en console pendant le développement, une ligne JSON par événement sinon.
- Filtrage par niveau (`LOG_LEVEL`).
- Les textes saisis par l'utilisateur ne sont jamais journalisés: seuls des compteurs, des
  identifiants et des libellés d'étape apparaissent dans les événements.
"""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog (niveau minimal, rendu console ou JSON)."""
    min_level = logging.getLevelName(level.upper())
    if not isinstance(min_level, int):
        min_level = logging.INFO
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO", utc=json_logs),
    ]
    if json_logs:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(),
        ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
