# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del servicio de webhooks.

Autor: WalletSync
Fecha: 19/10/2026
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.core.db import check_database_health
from app.core.settings import get_settings

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Estado básico del servicio, incluyendo verificación simple de "
        "conectividad a la base de datos."
    ),
)
async def health_check(request: Request) -> dict:
    """
    Returns:
        dict: información mínima de estado de la aplicación.
    """
    settings = get_settings()

    db_ok = await check_database_health(
        engine=getattr(request.app.state, "engine", None),
        timeout_s=2.0,
    )
    pipeline = getattr(request.app.state, "webhook_pipeline", None)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "webhooks": {
            "configured": bool(pipeline is not None and pipeline.is_configured),
            "forwarding": bool(pipeline is not None and pipeline.forwarder is not None),
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
