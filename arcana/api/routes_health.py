"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health` pour signaler l'état général de l'application et de ses collaborateurs.
"""


from fastapi import APIRouter

from arcana.core.container import container
from arcana.domain.lexicon import LEXICON_VERSION

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et décrit la configuration active."""
    return {
        "status": "ok",
        "storage": container.storage_backend,
        "catalog": container.catalog.name,
        "narrative": container.narrator is not None,
        "lexicon": LEXICON_VERSION,
    }
