"""
Moteur de conversion entre calendriers grégorien et éthiopien.

Le calendrier éthiopien compte douze mois de 30 jours suivis de ጳጉሜ (5 ou 6 jours).
Le Nouvel An est fixé au 11 septembre grégorien (approximation: la vraie règle le
décale au 12 septembre certaines années). L'heure éthiopienne est décalée de six
heures: la journée commence à 06:00 heure standard.

Toutes les fonctions sont pures; seule la lecture de l'horloge (`now`) est externe et
peut être injectée.
"""

from __future__ import annotations

import datetime as dt

import structlog

from backend.domain.entities import (
    AFTERNOON,
    DAYS_IN_REGULAR_MONTH,
    EVENING,
    MORNING,
    EthiopianDate,
    EthiopianSnapshot,
    EthiopianTime,
    days_in_month,
)

log = structlog.get_logger(__name__)

MONTH_NAMES = (
    "መስከረም",
    "ጥቅምት",
    "ኅዳር",
    "ታኅሳስ",
    "ጥር",
    "የካቲት",
    "መጋቢት",
    "ሚያዝያ",
    "ግንቦት",
    "ሰኔ",
    "ሐምሌ",
    "ነሐሴ",
    "ጳጉሜ",
)

# Dimanche en premier, comme l'index renvoyé par `isoweekday() % 7`
WEEKDAY_NAMES = ("እሑድ", "ሰኞ", "ማክሰኞ", "ረቡዕ", "ሐሙስ", "ዓርብ", "ቅዳሜ")
ENGLISH_WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

PERIODS = (MORNING, AFTERNOON, EVENING)
ERA_SUFFIX = "ዓ.ም"

NEW_YEAR = (9, 11)


def _as_date(value: dt.date | dt.datetime) -> dt.date:
    return value.date() if isinstance(value, dt.datetime) else value


def _on_or_after_new_year(day: dt.date) -> bool:
    return (day.month, day.day) >= NEW_YEAR


def weekday_index(value: dt.date | dt.datetime) -> int:
    """Index du jour de la semaine avec dimanche = 0 (même cycle dans les deux calendriers)."""
    return value.isoweekday() % 7


def period_for_hour(hour: int) -> str:
    """Période éthiopienne couvrant une heure standard (0-23).

    ጥዋት: 06-12, ከሰዓት: 12-18, ማታ: 18-06.
    """
    if 6 <= hour < 12:
        return MORNING
    if 12 <= hour < 18:
        return AFTERNOON
    return EVENING


def gregorian_to_ethiopian(instant: dt.date | dt.datetime) -> EthiopianDate:
    """Convertit un instant grégorien en date éthiopienne.

    Args:
        instant: date ou datetime grégorien (heure locale).

    Returns:
        EthiopianDate: année, mois (1-13) et jour.
    """
    day = _as_date(instant)
    if _on_or_after_new_year(day):
        year = day.year - 7
        new_year = dt.date(day.year, *NEW_YEAR)
    else:
        year = day.year - 8
        new_year = dt.date(day.year - 1, *NEW_YEAR)

    days_since = (day - new_year).days
    if days_since < 0:
        year -= 1
        new_year = dt.date(new_year.year - 1, *NEW_YEAR)
        days_since = (day - new_year).days

    month = 1
    while month < 13 and days_since >= days_in_month(month):
        days_since -= days_in_month(month)
        month += 1
    return EthiopianDate(year=year, month=month, day=days_since + 1)


def year_offset(now: dt.date | dt.datetime | None = None) -> int:
    """Écart observé entre l'année grégorienne et l'année éthiopienne à l'instant `now`.

    Vaut 7 entre le Nouvel An et le 31 décembre, 8 sinon.
    """
    now = now or dt.datetime.now()
    return _as_date(now).year - gregorian_to_ethiopian(now).year


def ethiopian_to_gregorian(
    year: int, month: int, day: int, now: dt.date | dt.datetime | None = None
) -> dt.date:
    """Convertit une date éthiopienne en date grégorienne.

    Le jour est compté depuis le Nouvel An (11 septembre), mois de 30 jours, comme dans
    `gregorian_to_ethiopian`: l'aller-retour tient pour chaque jour, années avec un
    29 février comprises.

    Le décalage d'années est mesuré sur l'horloge (`now`) puis ramené à l'année
    grégorienne où commence l'année éthiopienne (moins un avant le 11 septembre).
    Mesuré, il vaut 7 ou 8 selon la position de `now` dans l'année; ramené, il vaut
    toujours 7. `now` ne change donc pas le résultat.

    Args:
        year: année éthiopienne.
        month: mois éthiopien (1-13).
        day: jour du mois.
        now: instant de mesure du décalage (par défaut l'horloge locale).

    Returns:
        dt.date: date grégorienne correspondante.

    Raises:
        ValueError, OverflowError: année hors de la plage de `datetime.date`.
    """
    now = now or dt.datetime.now()
    offset = year_offset(now)
    if not _on_or_after_new_year(_as_date(now)):
        offset -= 1

    new_year = dt.date(year + offset, *NEW_YEAR)
    days_since = (month - 1) * DAYS_IN_REGULAR_MONTH + day - 1
    result = new_year + dt.timedelta(days=days_since)
    log.debug(
        "ethiopian_to_gregorian",
        eth=f"{year}-{month}-{day}",
        offset=offset,
        gregorian=result.isoformat(),
    )
    return result


def ethiopian_time_to_24_hour(hour: int, minute: int, period: str) -> str:
    """Convertit une heure éthiopienne (1-12 + période) en heure standard `HH:MM:00`.

    ጥዋት et ከሰዓት couvrent la demi-journée de jour (06:00-18:00), ማታ la nuit
    (18:00-06:00). Exemples: `12:00 ጥዋት` -> `06:00:00`, `6:30 ከሰዓት` -> `12:30:00`,
    `12:00 ማታ` -> `18:00:00`.
    """
    if period not in PERIODS:
        raise ValueError(f"unknown period: {period!r}")
    base = 18 if period == EVENING else 6
    standard_hour = (hour % 12 + base) % 24
    return f"{standard_hour:02d}:{minute:02d}:00"


def gregorian_to_ethiopian_time(value: dt.datetime | dt.time) -> EthiopianTime:
    """Convertit une heure standard en heure éthiopienne (heure 1-12, minute, période)."""
    eth_hour = (value.hour - 6) % 12 or 12
    return EthiopianTime(
        hour=eth_hour, minute=value.minute, period=period_for_hour(value.hour)
    )


def gregorian_to_ethiopian_accurate(
    instant: dt.date | dt.datetime | None = None,
) -> EthiopianSnapshot:
    """Projette un instant grégorien (par défaut maintenant) dans le calendrier éthiopien.

    Returns:
        EthiopianSnapshot: date, heure, libellés de date et d'heure et jour de semaine.
    """
    instant = instant or dt.datetime.now()
    eth = gregorian_to_ethiopian(instant)
    hour = getattr(instant, "hour", 0)
    minute = getattr(instant, "minute", 0)
    eth_hour = (hour - 6) % 12 or 12
    return EthiopianSnapshot(
        year=eth.year,
        month=eth.month,
        day=eth.day,
        hour=eth_hour,
        minute=minute,
        date=f"{eth.year} {MONTH_NAMES[eth.month - 1]} {eth.day}",
        day_of_week=ENGLISH_WEEKDAY_NAMES[weekday_index(instant)],
        time=f"{eth_hour}:{minute:02d}",
    )
