"""
Repositories pour les demandes de couverture.

Ce module fournit des implémentations de dépôt en mémoire et Redis pour les lignes de
demandes (`coverage_date`, `coverage_time`, `time_period`, statut de revue).
"""

import json
from typing import Any

import redis


class InMemoryCoverageRepo:
    """
    Dépôt de demandes en mémoire (utilisé pour dev/tests).

    Stocke les enregistrements dans un dict local, non persistant.
    """

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[str, dict[str, Any]] = {}

    def save(self, record: dict[str, Any]) -> dict[str, Any]:
        """Enregistre/écrase une demande et la renvoie."""
        self._db[record["id"]] = record
        return record

    def get(self, request_id: str) -> dict[str, Any] | None:
        """Retourne une demande par id, ou None si elle est absente."""
        return self._db.get(request_id)

    def list_all(self) -> list[dict[str, Any]]:
        """Toutes les demandes, sans ordre garanti."""
        return list(self._db.values())


class RedisCoverageRepo:
    """Dépôt de demandes adossé à Redis (clé: `coverage:{id}`, index: `coverage:ids`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)
        self.idx_key = "coverage:ids"

    def save(self, record: dict[str, Any]) -> dict[str, Any]:
        """Sérialise en JSON, stocke sous `coverage:{id}` et indexe l'id."""
        pipe = self.client.pipeline()
        pipe.set(f"coverage:{record['id']}", json.dumps(record, ensure_ascii=False))
        pipe.sadd(self.idx_key, record["id"])
        pipe.execute()
        return record

    def get(self, request_id: str) -> dict[str, Any] | None:
        """Charge et désérialise la demande `coverage:{id}`, si présente."""
        raw = self.client.get(f"coverage:{request_id}")
        return json.loads(raw) if raw else None

    def list_all(self) -> list[dict[str, Any]]:
        """Charge toutes les demandes indexées (les clés orphelines sont ignorées)."""
        ids = sorted(self.client.smembers(self.idx_key) or [])
        if not ids:
            return []
        raws = self.client.mget([f"coverage:{i}" for i in ids])
        return [json.loads(raw) for raw in raws if raw]
