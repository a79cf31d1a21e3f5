"""
Application principale FastAPI.

Ce module assemble les composants de l'application : middlewares, gestion des erreurs
et routes du calendrier éthiopien et des demandes de couverture.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter le middleware d'identifiant de requête
- Monter les routers (santé, calendrier, couverture)
"""

from __future__ import annotations

from fastapi import FastAPI

from backend.api.routes_calendar import router as calendar_router
from backend.api.routes_coverage import router as coverage_router
from backend.api.routes_health import router as health_router
from backend.apigw.errors import register_error_handlers
from backend.core.container import container
from backend.core.logging import setup_logging
from backend.middlewares.request_id import RequestIDMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute le middleware de traçabilité et les gestionnaires d'erreurs
    - Publie les routes de santé, de calendrier et de couverture
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(calendar_router)
    app.include_router(coverage_router)
    return app


app = create_app()
