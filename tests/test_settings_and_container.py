"""Tests pour la configuration et l'assemblage du conteneur."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from backend.core.container import Container
from backend.core.settings import Settings
from backend.infra.repositories import InMemoryCoverageRepo


def test_cutoff_hour_defaults_to_one_pm(monkeypatch) -> None:
    """Teste l'heure limite par défaut."""
    monkeypatch.delenv("COVERAGE_CUTOFF_HOUR", raising=False)
    assert Settings().COVERAGE_CUTOFF_HOUR == 13


def test_cutoff_hour_from_environment(monkeypatch) -> None:
    """Teste la surcharge de l'heure limite par variable d'environnement."""
    monkeypatch.setenv("COVERAGE_CUTOFF_HOUR", "14")
    assert Settings().COVERAGE_CUTOFF_HOUR == 14


def test_cutoff_hour_out_of_range(monkeypatch) -> None:
    """Teste qu'une heure limite hors 0-23 est refusée."""
    monkeypatch.setenv("COVERAGE_CUTOFF_HOUR", "24")
    with pytest.raises(ValidationError):
        Settings()


def test_container_uses_memory_without_redis() -> None:
    """Teste le stockage en mémoire quand REDIS_URL est absent."""
    c = Container(Settings(REDIS_URL=None, REQUIRE_REDIS=False, COVERAGE_CUTOFF_HOUR=14))
    assert c.storage_backend == "memory"
    assert isinstance(c.coverage_repo, InMemoryCoverageRepo)
    assert c.coverage_service.cutoff_hour == 14


def test_container_requires_redis_url() -> None:
    """Teste l'échec explicite si Redis est exigé sans URL."""
    with pytest.raises(RuntimeError):
        Container(Settings(REDIS_URL=None, REQUIRE_REDIS=True))


@patch("backend.core.container.RedisCoverageRepo", side_effect=ConnectionError("down"))
def test_container_falls_back_to_memory(_mock_repo) -> None:
    """Teste le repli en mémoire si Redis est indisponible et non exigé."""
    c = Container(Settings(REDIS_URL="redis://localhost:6379/0", REQUIRE_REDIS=False))
    assert c.storage_backend == "memory-fallback"


@patch("backend.core.container.RedisCoverageRepo", side_effect=ConnectionError("down"))
def test_container_redis_required_but_unavailable(_mock_repo) -> None:
    """Teste l'échec si Redis est exigé mais indisponible."""
    with pytest.raises(RuntimeError):
        Container(Settings(REDIS_URL="redis://localhost:6379/0", REQUIRE_REDIS=True))


@patch("backend.core.container.RedisCoverageRepo")
def test_container_uses_redis_when_reachable(mock_repo) -> None:
    """Teste la sélection de Redis quand le ping réussit."""
    c = Container(Settings(REDIS_URL="redis://localhost:6379/0"))
    assert c.storage_backend == "redis"
    mock_repo.return_value.client.ping.assert_called_once()
