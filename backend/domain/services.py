import datetime as dt
import uuid
from typing import Any

import structlog

from backend.domain.coverage_window import is_request_expired, is_valid_coverage_time
from backend.domain.date_input import parse_ethiopian_date, parse_ethiopian_time
from backend.domain.entities import CoverageRequest
from backend.domain.errors import (
    AlreadyReviewed,
    CoverageRequestNotFound,
    InvalidEthiopianInput,
    RejectionReasonRequired,
    SubmissionWindowClosed,
)
from backend.domain.ethiopian_calendar import (
    ethiopian_time_to_24_hour,
    ethiopian_to_gregorian,
)
from backend.domain.formatting import format_complete_ethiopian_date, format_ethiopian_time

log = structlog.get_logger(__name__)


class CoverageRequestService:
    """Service métier des demandes de couverture médiatique.

    Responsabilités:
    - Normaliser la saisie éthiopienne (date + heure) en date ISO et heure 24h.
    - Appliquer la fenêtre de soumission avant toute écriture.
    - Persister/charger les demandes via `coverage_repo` (en mémoire ou Redis).
    - Produire l'historique avec les libellés éthiopiens et l'indicateur d'expiration.
    """

    def __init__(self, coverage_repo, cutoff_hour: int):
        """Initialise le service avec ses dépendances.

        Paramètres:
        - coverage_repo: dépôt de demandes (InMemory ou Redis).
        - cutoff_hour: heure limite des demandes pour le lendemain.
        """
        self.repo = coverage_repo
        self.cutoff_hour = cutoff_hour

    def normalize(
        self, date_text: str, time_text: str, now: dt.datetime | None = None
    ) -> dict[str, str]:
        """Convertit la saisie éthiopienne en `coverage_date`/`coverage_time`/`time_period`.

        Lève `InvalidEthiopianInput` si l'une des deux saisies est invalide, y compris
        une année hors de la plage des dates grégoriennes.
        """
        eth_date = parse_ethiopian_date(date_text)
        if eth_date is None:
            raise InvalidEthiopianInput("date", date_text)
        eth_time = parse_ethiopian_time(time_text)
        if eth_time is None:
            raise InvalidEthiopianInput("time", time_text)

        try:
            gregorian = ethiopian_to_gregorian(
                eth_date.year, eth_date.month, eth_date.day, now=now
            )
        except (ValueError, OverflowError) as exc:
            raise InvalidEthiopianInput("date", date_text) from exc
        return {
            "coverage_date": gregorian.isoformat(),
            "coverage_time": ethiopian_time_to_24_hour(
                eth_time.hour, eth_time.minute, eth_time.period
            ),
            "time_period": eth_time.period,
        }

    def submit(
        self,
        office: str,
        agenda: str,
        location: str,
        date_text: str,
        time_text: str,
        now: dt.datetime | None = None,
    ) -> dict[str, Any]:
        """Valide puis enregistre une nouvelle demande en attente.

        Démarche:
        - Analyse et convertit la date/heure éthiopienne.
        - Vérifie la fenêtre de soumission (`SubmissionWindowClosed` si refusée).
        - Enregistre la ligne avec le statut `pending`.

        Retour: la ligne persistée (dict).
        """
        now = now or dt.datetime.now()
        fields = self.normalize(date_text, time_text, now=now)
        verdict = is_valid_coverage_time(
            fields["coverage_date"],
            fields["coverage_time"][:5],
            now=now,
            cutoff_hour=self.cutoff_hour,
        )
        if not verdict.is_valid:
            log.info(
                "coverage_request_rejected",
                office=office,
                coverage_date=fields["coverage_date"],
                reason=verdict.reason,
            )
            raise SubmissionWindowClosed(verdict.reason, verdict.message)

        record = CoverageRequest(
            id=str(uuid.uuid4()),
            office=office,
            agenda=agenda,
            location=location,
            created_at=now.isoformat(timespec="seconds"),
            **fields,
        )
        self.repo.save(record.model_dump())
        log.info(
            "coverage_request_submitted",
            request_id=record.id,
            office=office,
            coverage_date=record.coverage_date,
        )
        return record.model_dump()

    def history(
        self, office: str | None = None, now: dt.datetime | None = None
    ) -> list[dict[str, Any]]:
        """Liste les demandes (filtrées par bureau si fourni), plus récentes d'abord.

        Chaque ligne est enrichie de `display_date`, `display_time` et `expired`.
        """
        now = now or dt.datetime.now()
        rows = [r for r in self.repo.list_all() if office is None or r["office"] == office]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [
            {
                **row,
                "display_date": format_complete_ethiopian_date(row["coverage_date"]),
                "display_time": format_ethiopian_time(row["coverage_time"]),
                "expired": is_request_expired(row["coverage_date"], row["status"], now=now),
            }
            for row in rows
        ]

    def review(
        self,
        request_id: str,
        accept: bool,
        reason: str | None = None,
        now: dt.datetime | None = None,
    ) -> dict[str, Any]:
        """Accepte ou refuse une demande en attente.

        Lève `CoverageRequestNotFound` si l'id est inconnu, `AlreadyReviewed` si la
        demande n'est plus en attente et `RejectionReasonRequired` pour un refus sans
        motif.
        """
        row = self.repo.get(request_id)
        if not row:
            raise CoverageRequestNotFound(request_id)
        if row["status"] != "pending":
            raise AlreadyReviewed(request_id)
        if not accept and not (reason or "").strip():
            raise RejectionReasonRequired(request_id)

        now = now or dt.datetime.now()
        row = {
            **row,
            "status": "accepted" if accept else "rejected",
            "admin_reason": None if accept else reason.strip(),
            "reviewed_at": now.isoformat(timespec="seconds"),
        }
        self.repo.save(row)
        log.info("coverage_request_reviewed", request_id=request_id, status=row["status"])
        return row
