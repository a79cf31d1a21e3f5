"""
Routes des demandes de couverture médiatique.

Ce module regroupe les endpoints `/coverage`: vérification de la fenêtre de soumission,
dépôt d'une demande, historique et revue par un administrateur.
"""

from fastapi import APIRouter

from backend.api.schemas import (
    CoverageHistoryItem,
    CoverageRequestResponse,
    CoverageSubmitRequest,
    ReviewRequest,
    ValidateRequest,
    VerdictResponse,
)
from backend.core.container import container
from backend.domain.coverage_window import is_valid_coverage_time

router = APIRouter(prefix="/coverage", tags=["coverage"])


@router.post("/validate", response_model=VerdictResponse)
def validate(payload: ValidateRequest):
    """Vérifie qu'une date/heure grégorienne est encore dans la fenêtre de soumission.

    Un refus est une réponse 200 avec `is_valid: false`, pas une erreur.
    """
    verdict = is_valid_coverage_time(
        payload.coverage_date,
        payload.coverage_time,
        cutoff_hour=container.settings.COVERAGE_CUTOFF_HOUR,
    )
    return verdict


@router.post("/requests", response_model=CoverageRequestResponse, status_code=201)
def submit_request(payload: CoverageSubmitRequest):
    """
    Enregistre une demande à partir de la saisie éthiopienne.

    Retour:
    - `CoverageRequestResponse` avec `coverage_date` ISO et `coverage_time` 24h.
    - 422 si la saisie est invalide ou si la fenêtre de soumission est passée.
    """
    return container.coverage_service.submit(
        payload.office,
        payload.agenda,
        payload.location,
        payload.date_text,
        payload.time_text,
    )


@router.get("/requests", response_model=list[CoverageHistoryItem])
def list_requests(office: str | None = None):
    """Historique des demandes (filtrable par bureau) avec libellés éthiopiens."""
    return container.coverage_service.history(office=office)


@router.post("/requests/{request_id}/review", response_model=CoverageRequestResponse)
def review_request(request_id: str, payload: ReviewRequest):
    """Accepte ou refuse une demande en attente.

    404 si inconnue, 409 si déjà revue, 422 pour un refus sans motif.
    """
    return container.coverage_service.review(request_id, payload.accept, payload.reason)
