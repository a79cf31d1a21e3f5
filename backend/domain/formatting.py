"""Rendu des dates et heures stockées (grégoriennes) en libellés éthiopiens.

Utilisé par les chemins de lecture (historique, tableaux de bord). Les valeurs
acceptées sont des `date`, des `datetime` ou des chaînes ISO; une chaîne non
analysable lève `ValueError`.
"""

from __future__ import annotations

import datetime as dt

from backend.domain.ethiopian_calendar import (
    ERA_SUFFIX,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    gregorian_to_ethiopian,
    period_for_hour,
    weekday_index,
)

DateLike = dt.date | dt.datetime | str


def _to_date(value: DateLike) -> dt.date:
    if isinstance(value, str):
        # les horodatages stockés peuvent porter un suffixe "Z"
        return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def get_ethiopian_weekday(value: DateLike) -> str:
    """Nom éthiopien du jour de la semaine."""
    return WEEKDAY_NAMES[weekday_index(_to_date(value))]


def format_ethiopian_date(value: DateLike) -> str:
    """Formate en `"<jour> <mois> <année> ዓ.ም"`."""
    eth = gregorian_to_ethiopian(_to_date(value))
    return f"{eth.day} {MONTH_NAMES[eth.month - 1]} {eth.year} {ERA_SUFFIX}"


def format_complete_ethiopian_date(value: DateLike) -> str:
    """Formate en `"<jour de semaine>፣ <jour> <mois> <année> ዓ.ም"`."""
    return f"{get_ethiopian_weekday(value)}፣ {format_ethiopian_date(value)}"


def format_ethiopian_time(value: str) -> str:
    """Formate une heure 24h `HH:MM[:SS]` en `"<heure éthiopienne>:<MM> <période>"`."""
    hours, minutes = (int(part) for part in value.split(":")[:2])
    eth_hour = (hours - 6) % 12 or 12
    return f"{eth_hour}:{minutes:02d} {period_for_hour(hours)}"
