"""Tests pour l'analyse des saisies de date et d'heure éthiopiennes.

Ce module teste les bornes des champs (mois 1-13, jours 1-30 ou 1-6 pour ጳጉሜ, heures 1-12,
minutes 0-59) et la date minimale proposée par le formulaire.
"""

from __future__ import annotations

import datetime as dt

import pytest

from backend.domain.date_input import (
    format_ethiopian_date_for_display,
    format_ethiopian_time_for_display,
    minimum_allowed_ethiopian_date,
    parse_ethiopian_date,
    parse_ethiopian_time,
)
from backend.domain.entities import AFTERNOON, EVENING, MORNING
from backend.domain.ethiopian_calendar import ethiopian_time_to_24_hour


def test_parse_ethiopian_date_basic() -> None:
    """Teste l'analyse d'une date valide et l'heure par défaut injectée."""
    parsed = parse_ethiopian_date("15 1 2017")
    assert parsed is not None
    assert (parsed.day, parsed.month, parsed.year) == (15, 1, 2017)
    assert (parsed.hour, parsed.minute, parsed.period) == (12, 0, MORNING)


def test_parse_ethiopian_date_tolerates_extra_spaces() -> None:
    """Teste que les champs sont séparés par n'importe quel blanc."""
    parsed = parse_ethiopian_date("  3   12 2016 ")
    assert parsed is not None
    assert (parsed.day, parsed.month, parsed.year) == (3, 12, 2016)


@pytest.mark.parametrize(
    "text",
    [
        "15 0 2017",  # mois 0
        "15 14 2017",  # mois 14
        "0 1 2017",  # jour 0
        "31 1 2017",  # jour 31 pour un mois de 30 jours
        "7 13 2017",  # ጳጉሜ n'a pas de 7e jour
        "15 1",  # deux champs
        "15 1 2017 1",  # quatre champs
        "quinze 1 2017",
        "15 1.5 2017",
        "",
    ],
)
def test_parse_ethiopian_date_rejects(text: str) -> None:
    """Teste que les saisies invalides renvoient None sans exception."""
    assert parse_ethiopian_date(text) is None


def test_parse_ethiopian_date_pagume_accepts_sixth_day() -> None:
    """Teste que ጳጉሜ accepte toujours un 6e jour."""
    parsed = parse_ethiopian_date("6 13 2017")
    assert parsed is not None
    assert (parsed.day, parsed.month) == (6, 13)


def test_parse_ethiopian_time_basic() -> None:
    """Teste l'analyse de `12:00 ጥዋት`."""
    parsed = parse_ethiopian_time("12:00 ጥዋት")
    assert parsed is not None
    assert (parsed.hour, parsed.minute, parsed.period) == (12, 0, MORNING)


@pytest.mark.parametrize(
    "text",
    [
        "0:00 ጥዋት",
        "13:00 ጥዋት",
        "3:60 ከሰዓት",
        "3:00 night",
        "3:00",
        "3:00 ማታ extra",
        "3 ማታ",
        "a:15 ማታ",
        "",
    ],
)
def test_parse_ethiopian_time_rejects(text: str) -> None:
    """Teste que les heures invalides renvoient None sans exception."""
    assert parse_ethiopian_time(text) is None


def test_parsed_time_converts_to_24_hour() -> None:
    """Teste les scénarios `6:30 ከሰዓት` -> 12:30 et `12:00 ጥዋት` -> 06:00."""
    afternoon = parse_ethiopian_time("6:30 ከሰዓት")
    assert afternoon.period == AFTERNOON
    assert ethiopian_time_to_24_hour(afternoon.hour, afternoon.minute, afternoon.period) == (
        "12:30:00"
    )

    morning = parse_ethiopian_time("12:00 ጥዋት")
    assert ethiopian_time_to_24_hour(morning.hour, morning.minute, morning.period) == "06:00:00"


def test_minimum_allowed_date_before_cutoff_is_tomorrow() -> None:
    """Teste qu'avant l'heure limite la première date proposée est demain."""
    earliest = minimum_allowed_ethiopian_date(dt.datetime(2024, 9, 25, 9, 0), cutoff_hour=13)
    assert (earliest.year, earliest.month, earliest.day) == (2017, 1, 16)
    assert (earliest.hour, earliest.minute, earliest.period) == (12, 0, MORNING)


def test_minimum_allowed_date_after_cutoff_is_day_after_tomorrow() -> None:
    """Teste qu'après l'heure limite la première date proposée est après-demain."""
    earliest = minimum_allowed_ethiopian_date(dt.datetime(2024, 9, 25, 13, 0), cutoff_hour=13)
    assert (earliest.year, earliest.month, earliest.day) == (2017, 1, 17)


def test_display_helpers() -> None:
    """Teste le rendu d'une saisie analysée."""
    parsed = parse_ethiopian_date("6 13 2016").model_copy(
        update={"hour": 3, "minute": 5, "period": EVENING}
    )
    assert format_ethiopian_date_for_display(parsed) == "6 ጳጉሜ 2016 ዓ.ም"
    assert format_ethiopian_time_for_display(parsed) == "3:05 ማታ"
