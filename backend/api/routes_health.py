"""
Endpoint de santé pour vérifier la disponibilité de l'API et du backend.

Expose `/health` pour signaler l'état général de l'application et du stockage.
"""

from fastapi import APIRouter

from backend.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API, le backend de stockage et l'heure limite."""
    return {
        "status": "ok",
        "storage": getattr(container, "storage_backend", "unknown"),
        "cutoff_hour": container.settings.COVERAGE_CUTOFF_HOUR,
    }
