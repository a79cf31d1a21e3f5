"""
Routes du calendrier éthiopien: date du jour, conversions et date minimale autorisée.

Ces endpoints exposent le moteur de conversion aux formulaires et tableaux de bord.
"""

import datetime as dt

from fastapi import APIRouter

from backend.api.schemas import (
    EthiopianDateRequest,
    GregorianDateResponse,
    MinimumDateResponse,
    ParseRequest,
    ParseResponse,
    TodayResponse,
)
from backend.apigw.errors import APIError, ErrorCodes
from backend.core.container import container
from backend.domain.coverage_window import minimum_allowed_gregorian_date
from backend.domain.date_input import (
    format_ethiopian_date_for_display,
    format_ethiopian_time_for_display,
    minimum_allowed_ethiopian_date,
    parse_ethiopian_date,
    parse_ethiopian_time,
)
from backend.domain.entities import EthiopianDate
from backend.domain.ethiopian_calendar import (
    ethiopian_to_gregorian,
    gregorian_to_ethiopian_accurate,
)
from backend.domain.formatting import format_complete_ethiopian_date

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/today", response_model=TodayResponse)
def today():
    """Retourne l'instant courant en date et heure éthiopiennes."""
    now = dt.datetime.now()
    snapshot = gregorian_to_ethiopian_accurate(now)
    return {**snapshot.model_dump(), "display": format_complete_ethiopian_date(now)}


@router.post("/to-gregorian", response_model=GregorianDateResponse)
def to_gregorian(payload: EthiopianDateRequest):
    """Convertit une date éthiopienne en date grégorienne ISO."""
    try:
        eth = EthiopianDate(**payload.model_dump())
    except ValueError as err:
        raise APIError(422, ErrorCodes.INVALID_ETHIOPIAN_INPUT, "invalid Ethiopian date") from err
    try:
        gregorian = ethiopian_to_gregorian(eth.year, eth.month, eth.day)
    except (ValueError, OverflowError) as err:
        raise APIError(
            422, ErrorCodes.INVALID_ETHIOPIAN_INPUT, "Ethiopian year out of range"
        ) from err
    return {
        "gregorian_date": gregorian.isoformat(),
        "display": format_complete_ethiopian_date(gregorian),
    }


@router.post("/parse", response_model=ParseResponse)
def parse(payload: ParseRequest):
    """Analyse la saisie du formulaire et renvoie sa forme normalisée.

    Retour: `ParseResponse`; 422 si la date ou l'heure est invalide.
    """
    fields = container.coverage_service.normalize(payload.date_text, payload.time_text)
    eth_time = parse_ethiopian_time(payload.time_text)
    eth = parse_ethiopian_date(payload.date_text).model_copy(update=eth_time.model_dump())
    return {
        **eth.model_dump(),
        **fields,
        "display_date": format_ethiopian_date_for_display(eth),
        "display_time": format_ethiopian_time_for_display(eth),
    }


@router.get("/minimum-date", response_model=MinimumDateResponse)
def minimum_date():
    """Première date éthiopienne proposable selon l'heure limite configurée."""
    now = dt.datetime.now()
    eth = minimum_allowed_ethiopian_date(now, container.settings.COVERAGE_CUTOFF_HOUR)
    gregorian = minimum_allowed_gregorian_date(now, container.settings.COVERAGE_CUTOFF_HOUR)
    return {
        "year": eth.year,
        "month": eth.month,
        "day": eth.day,
        "gregorian_date": gregorian.isoformat(),
        "display": format_ethiopian_date_for_display(eth),
    }
