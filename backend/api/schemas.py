# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, Field

from backend.domain.entities import Period, RequestStatus


class EthiopianDateRequest(BaseModel):
    """Date éthiopienne à convertir.

    Champs:
    - year: int
    - month: int (1-13)
    - day: int (1-30, 1-6 pour ጳጉሜ)
    """

    year: int
    month: int = Field(ge=1, le=13)
    day: int = Field(ge=1, le=30)


class GregorianDateResponse(BaseModel):
    """Date grégorienne ISO et son libellé éthiopien complet."""

    gregorian_date: str
    display: str


class ParseRequest(BaseModel):
    """Saisie brute du formulaire: `"DD MM YYYY"` et `"HH:MM PERIODE"`."""

    date_text: str
    time_text: str


class ParseResponse(BaseModel):
    """Saisie analysée et normalisée (date ISO, heure 24h)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    period: Period
    coverage_date: str
    coverage_time: str
    display_date: str
    display_time: str


class TodayResponse(BaseModel):
    """Instant courant exprimé dans le calendrier éthiopien."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    date: str
    day_of_week: str
    time: str
    display: str


class MinimumDateResponse(BaseModel):
    """Première date éthiopienne autorisée pour une nouvelle demande."""

    year: int
    month: int
    day: int
    gregorian_date: str
    display: str


class ValidateRequest(BaseModel):
    """Date ISO `YYYY-MM-DD` et heure `HH:MM` à vérifier."""

    coverage_date: str
    coverage_time: str


class VerdictResponse(BaseModel):
    is_valid: bool
    message: str
    reason: str | None = None


class CoverageSubmitRequest(BaseModel):
    """Nouvelle demande de couverture telle que saisie par un bureau."""

    office: str = Field(min_length=1)
    agenda: str = Field(min_length=1)
    location: str = Field(min_length=1)
    date_text: str
    time_text: str


class ReviewRequest(BaseModel):
    """Décision d'un administrateur sur une demande en attente."""

    accept: bool
    reason: str | None = None


class CoverageRequestResponse(BaseModel):
    id: str
    office: str
    agenda: str
    location: str
    coverage_date: str
    coverage_time: str
    time_period: Period | None = None
    status: RequestStatus
    admin_reason: str | None = None
    created_at: str
    reviewed_at: str | None = None


class CoverageHistoryItem(CoverageRequestResponse):
    display_date: str
    display_time: str
    expired: bool
