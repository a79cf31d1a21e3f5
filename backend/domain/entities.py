"""
Entités du domaine métier.

Ce module définit les modèles de données du calendrier éthiopien et des demandes de
couverture médiatique. Les valeurs éthiopiennes sont éphémères: elles sont toujours
converties en date grégorienne avant stockage.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MORNING = "ጥዋት"
AFTERNOON = "ከሰዓት"
EVENING = "ማታ"

Period = Literal["ጥዋት", "ከሰዓት", "ማታ"]
RequestStatus = Literal["pending", "accepted", "rejected"]

# Le 13e mois (ጳጉሜ) a 5 ou 6 jours; 6 est toujours accepté
DAYS_IN_REGULAR_MONTH = 30
DAYS_IN_PAGUME = 6


def days_in_month(month: int) -> int:
    """Nombre de jours autorisés pour un mois éthiopien (1-13)."""
    return DAYS_IN_PAGUME if month == 13 else DAYS_IN_REGULAR_MONTH


class EthiopianDate(BaseModel):
    """Date du calendrier éthiopien (année, mois 1-13, jour)."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=13)
    day: int = Field(ge=1, le=DAYS_IN_REGULAR_MONTH)

    @model_validator(mode="after")
    def _check_day_in_month(self):
        if self.day > days_in_month(self.month):
            raise ValueError(f"day {self.day} out of range for month {self.month}")
        return self


class EthiopianTime(BaseModel):
    """Heure éthiopienne sur 12 heures, désambiguïsée par la période."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=1, le=12)
    minute: int = Field(ge=0, le=59)
    period: Period = MORNING


class EthiopianDateTime(EthiopianDate):
    """Date éthiopienne accompagnée d'une heure (placeholder `12:00 ጥዋት` par défaut)."""

    hour: int = Field(default=12, ge=1, le=12)
    minute: int = Field(default=0, ge=0, le=59)
    period: Period = MORNING


class EthiopianSnapshot(BaseModel):
    """Vue complète d'un instant grégorien exprimé dans le calendrier éthiopien."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    date: str  # "YYYY <nom du mois> D"
    day_of_week: str  # nom anglais, identique dans les deux calendriers
    time: str  # "H:MM"


class SubmissionWindowVerdict(BaseModel):
    """Verdict transitoire de la fenêtre de soumission.

    - is_valid: la demande peut être enregistrée
    - message: texte destiné à l'utilisateur (vide si valide)
    - reason: code stable du refus, None si valide
    """

    is_valid: bool
    message: str = ""
    reason: str | None = None


class CoverageRequest(BaseModel):
    """Ligne persistée d'une demande de couverture médiatique."""

    id: str
    office: str
    agenda: str
    location: str
    coverage_date: str  # YYYY-MM-DD (grégorien)
    coverage_time: str  # HH:MM:SS (24h)
    time_period: Period | None = None
    status: RequestStatus = "pending"
    admin_reason: str | None = None
    created_at: str
    reviewed_at: str | None = None
