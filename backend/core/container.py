"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôt des demandes, service) et expose un
singleton `container` utilisé par le reste de l'application.
"""

import structlog

from backend.core.settings import Settings, get_settings
from backend.domain.services import CoverageRequestService
from backend.infra.repositories import InMemoryCoverageRepo, RedisCoverageRepo

log = structlog.get_logger(__name__)


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        if self.settings.REDIS_URL:
            try:
                self.coverage_repo = RedisCoverageRepo(self.settings.REDIS_URL)
                self.coverage_repo.client.ping()
                self.storage_backend = "redis"
            except Exception as err:
                if self.settings.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                log.warning("redis_unavailable_memory_fallback", error=type(err).__name__)
                self.coverage_repo = InMemoryCoverageRepo()
                self.storage_backend = "memory-fallback"
        else:
            if self.settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.coverage_repo = InMemoryCoverageRepo()
            self.storage_backend = "memory"

        self.coverage_service = CoverageRequestService(
            self.coverage_repo, cutoff_hour=self.settings.COVERAGE_CUTOFF_HOUR
        )


container = Container()
