"""
Endpoint de santé pour vérifier la disponibilité de l'API et du moteur de thème.

Expose `/health` pour signaler l'état général de l'application.
"""


from fastapi import APIRouter

from vedic_backend.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et du moteur de calcul."""
    return {
        "status": "ok",
        "engine": container.astrology_service.engine_name,
        "engine_available": container.astro is not None,
    }
