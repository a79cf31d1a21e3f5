"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports backend en ajoutant la racine du projet au
sys.path, et fournit des instants de référence fixes ainsi qu'un service de demandes isolé.
"""

import datetime as dt
import os
import sys
from unittest.mock import patch

import pytest

# Ensure project root is on sys.path so that
# imports like `from backend...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from backend.domain.services import CoverageRequestService  # noqa: E402
from backend.infra.repositories import InMemoryCoverageRepo  # noqa: E402

# 25 septembre 2024 (mercredi) = 15 መስከረም 2017
REFERENCE_MORNING = dt.datetime(2024, 9, 25, 10, 0)
REFERENCE_AFTERNOON = dt.datetime(2024, 9, 25, 15, 0)


@pytest.fixture
def morning() -> dt.datetime:
    return REFERENCE_MORNING


@pytest.fixture
def afternoon() -> dt.datetime:
    return REFERENCE_AFTERNOON


@pytest.fixture
def coverage_repo() -> InMemoryCoverageRepo:
    return InMemoryCoverageRepo()


@pytest.fixture
def coverage_service(coverage_repo) -> CoverageRequestService:
    return CoverageRequestService(coverage_repo, cutoff_hour=13)


@pytest.fixture
def isolated_container(coverage_repo, coverage_service):
    """Remplace le dépôt et le service du conteneur global par des instances vierges."""
    from backend.core.container import container

    with (
        patch.object(container, "coverage_repo", coverage_repo),
        patch.object(container, "coverage_service", coverage_service),
    ):
        yield container
