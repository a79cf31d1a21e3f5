"""
Règle de la fenêtre de soumission des demandes de couverture.

Une demande doit laisser le temps de planifier la couverture:
- une date antérieure à demain est toujours refusée;
- demain est refusé dès que l'heure courante atteint l'heure limite;
- à partir d'après-demain, la demande est toujours acceptée.

Les entrées sont des chaînes ISO (`YYYY-MM-DD`) et `HH:MM` déjà normalisées en
grégorien; toute erreur de format devient un verdict négatif, jamais une exception.
"""

from __future__ import annotations

import datetime as dt

import structlog

from backend.domain.entities import SubmissionWindowVerdict

log = structlog.get_logger(__name__)

DEFAULT_CUTOFF_HOUR = 13

REASON_WINDOW_PASSED = "submission window has passed"
REASON_CUTOFF_PASSED = "next-day cutoff has passed"
REASON_INVALID_FORMAT = "invalid date or time format"

MESSAGE_WINDOW_PASSED = (
    "የሚድያ ሽፋን ጥያቄ የሚቀርብበት ሰአት ስላለፈ ጥያቄዎ ተቀባይነት አላገኘም። ከይቅርታ ጋር!"
)
MESSAGE_CUTOFF_PASSED = (
    "ለነገ የሚሆን የሚድያ ሽፋን ጥያቄ ከ{cutoff} ሰዓት በፊት መቅረብ አለበት። "
    "አሁን ሰዓቱ ካለፈ እባክዎ ከነገ ወዲያ ላለው ቀን ያስገቡ።"
)
MESSAGE_INVALID_FORMAT = "የተሳሳተ የቀን ወይም ሰዓት ቅርጸት።"

_TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def _parse_time(value: str) -> dt.time:
    for fmt in _TIME_FORMATS:
        try:
            return dt.datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"invalid time: {value!r}")


def minimum_allowed_gregorian_date(
    now: dt.datetime | None = None, cutoff_hour: int | None = None
) -> dt.date:
    """Première date grégorienne acceptable pour une nouvelle demande."""
    now = now or dt.datetime.now()
    cutoff = DEFAULT_CUTOFF_HOUR if cutoff_hour is None else cutoff_hour
    days_ahead = 2 if now.hour >= cutoff else 1
    return now.date() + dt.timedelta(days=days_ahead)


def is_valid_coverage_time(
    coverage_date: str,
    coverage_time: str,
    now: dt.datetime | None = None,
    cutoff_hour: int | None = None,
) -> SubmissionWindowVerdict:
    """Décide si une demande est encore dans la fenêtre de soumission.

    Args:
        coverage_date: date grégorienne ISO `YYYY-MM-DD`.
        coverage_time: heure 24h `HH:MM` (ou `HH:MM:SS`).
        now: instant de référence (par défaut l'horloge locale).
        cutoff_hour: heure limite pour demain (par défaut 13).

    Returns:
        SubmissionWindowVerdict: verdict et message utilisateur.

    `message` porte le texte amharique affiché à l'utilisateur; le motif stable en
    anglais (`REASON_WINDOW_PASSED`, `REASON_CUTOFF_PASSED`, `REASON_INVALID_FORMAT`)
    est dans `reason`. Les appelants comparent `reason`, jamais `message`.
    """
    now = now or dt.datetime.now()
    cutoff = DEFAULT_CUTOFF_HOUR if cutoff_hour is None else cutoff_hour
    try:
        selected = dt.date.fromisoformat(coverage_date)
        _parse_time(coverage_time)
    except (TypeError, ValueError) as exc:
        log.warning(
            "coverage_time_unparseable",
            coverage_date=coverage_date,
            coverage_time=coverage_time,
            error=str(exc),
        )
        return SubmissionWindowVerdict(
            is_valid=False, message=MESSAGE_INVALID_FORMAT, reason=REASON_INVALID_FORMAT
        )

    tomorrow = now.date() + dt.timedelta(days=1)
    if selected < tomorrow:
        return SubmissionWindowVerdict(
            is_valid=False, message=MESSAGE_WINDOW_PASSED, reason=REASON_WINDOW_PASSED
        )
    if selected == tomorrow and now.hour >= cutoff:
        return SubmissionWindowVerdict(
            is_valid=False,
            message=MESSAGE_CUTOFF_PASSED.format(cutoff=f"{cutoff}:00"),
            reason=REASON_CUTOFF_PASSED,
        )
    return SubmissionWindowVerdict(is_valid=True)


def is_request_expired(
    coverage_date: str, status: str, now: dt.datetime | None = None
) -> bool:
    """Une demande en attente expire une fois la fin de sa journée de couverture passée."""
    if status != "pending":
        return False
    now = now or dt.datetime.now()
    try:
        day = dt.date.fromisoformat(coverage_date[:10])
    except (TypeError, ValueError):
        log.warning("coverage_date_unparseable", coverage_date=coverage_date)
        return False
    end_of_day = dt.datetime.combine(day, dt.time.max)
    return end_of_day < now
