"""
Analyse des saisies de date et d'heure éthiopiennes.

Formats acceptés:
- date: `"DD MM YYYY"` (mois numérique 1-13)
- heure: `"HH:MM PERIODE"` avec PERIODE parmi ጥዋት, ከሰዓት, ማታ

Une saisie invalide renvoie `None` (jamais d'exception) afin que le formulaire affiche
un message à l'utilisateur.
"""

from __future__ import annotations

import datetime as dt

import structlog

from backend.domain.coverage_window import minimum_allowed_gregorian_date
from backend.domain.entities import (
    EthiopianDateTime,
    EthiopianTime,
    days_in_month,
)
from backend.domain.ethiopian_calendar import (
    ERA_SUFFIX,
    MONTH_NAMES,
    PERIODS,
    gregorian_to_ethiopian,
)

log = structlog.get_logger(__name__)


def _to_int(token: str) -> int | None:
    try:
        return int(token)
    except ValueError:
        return None


def parse_ethiopian_date(text: str) -> EthiopianDateTime | None:
    """Analyse une date `"DD MM YYYY"`.

    Returns:
        EthiopianDateTime | None: la date avec l'heure par défaut `12:00 ጥዋት`, ou None si
        le nombre de champs, leur type ou leurs bornes sont invalides.
    """
    parts = text.split()
    if len(parts) != 3:
        log.debug("ethiopian_date_rejected", text=text, reason="token_count")
        return None

    day, month, year = (_to_int(p) for p in parts)
    if day is None or month is None or year is None:
        log.debug("ethiopian_date_rejected", text=text, reason="not_integer")
        return None
    if not 1 <= month <= 13:
        log.debug("ethiopian_date_rejected", text=text, reason="month_range")
        return None
    if not 1 <= day <= days_in_month(month):
        log.debug("ethiopian_date_rejected", text=text, reason="day_range")
        return None

    return EthiopianDateTime(year=year, month=month, day=day)


def parse_ethiopian_time(text: str) -> EthiopianTime | None:
    """Analyse une heure `"HH:MM PERIODE"` (heure 1-12, minute 0-59)."""
    parts = text.strip().split()
    if len(parts) != 2:
        log.debug("ethiopian_time_rejected", text=text, reason="token_count")
        return None

    clock, period = parts
    if period not in PERIODS:
        log.debug("ethiopian_time_rejected", text=text, reason="unknown_period")
        return None

    fields = clock.split(":")
    if len(fields) != 2:
        log.debug("ethiopian_time_rejected", text=text, reason="clock_format")
        return None
    hour, minute = (_to_int(f) for f in fields)
    if hour is None or minute is None:
        log.debug("ethiopian_time_rejected", text=text, reason="not_integer")
        return None
    if not 1 <= hour <= 12:
        log.debug("ethiopian_time_rejected", text=text, reason="hour_range")
        return None
    if not 0 <= minute <= 59:
        log.debug("ethiopian_time_rejected", text=text, reason="minute_range")
        return None

    return EthiopianTime(hour=hour, minute=minute, period=period)


def minimum_allowed_ethiopian_date(
    now: dt.datetime | None = None, cutoff_hour: int | None = None
) -> EthiopianDateTime:
    """Première date éthiopienne qu'un formulaire peut proposer.

    Demain, ou après-demain lorsque l'heure limite est atteinte.
    """
    earliest = minimum_allowed_gregorian_date(now, cutoff_hour)
    eth = gregorian_to_ethiopian(earliest)
    return EthiopianDateTime(year=eth.year, month=eth.month, day=eth.day)


def format_ethiopian_date_for_display(value: EthiopianDateTime) -> str:
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year} {ERA_SUFFIX}"


def format_ethiopian_time_for_display(value: EthiopianDateTime | EthiopianTime) -> str:
    return f"{value.hour}:{value.minute:02d} {value.period}"
