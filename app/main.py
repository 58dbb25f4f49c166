# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del servicio WalletSync (webhooks Razorpay).

Ajustes clave:
- Uso de app.core.settings como fachada de configuración.
- Lifespan dueño de los recursos compartidos: engine, fábrica de sesiones,
  caché de eventos procesados, cliente httpx de reenvío y pipeline de webhooks.
- Shutdown ordenado y blindado contra cancelación.
- CORS desde CORS_ORIGINS (fail-closed en producción).

Autor: WalletSync
Fecha: 19/10/2026
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de construir settings
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = (os.getenv("PYTHON_ENV") or os.getenv("NODE_ENV") or "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV != "production")

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.logging import setup_logging
from app.core.settings import get_settings
from app.modules.payments.facades.webhooks import build_webhook_pipeline
from app.modules.payments.services import ProcessedEventCache, build_forward_http_client
from app.routes import router as api_router
from app.shared.config.settings_payments import get_razorpay_settings
from app.shared.database import (
    create_all_tables,
    dispose_engine,
    get_engine,
    get_session_factory,
)
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware

_settings = get_settings()
setup_logging(level=_settings.log_level, fmt=_settings.log_format)
logger = logging.getLogger(__name__)

logger.info("[dotenv] Loaded %s (PYTHON_ENV=%s)", _ENV_PATH, _PYTHON_ENV)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    razorpay = get_razorpay_settings()

    engine = get_engine()
    session_factory = get_session_factory()
    if settings.db_auto_create:
        await create_all_tables(engine)
        logger.info("🗄️ Tablas creadas/verificadas (DB_AUTO_CREATE)")

    dedup = ProcessedEventCache(razorpay.webhook_dedup_capacity, name="razorpay_events")
    http_client = build_forward_http_client(razorpay.webhook_forward_timeout_seconds)

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.dedup_cache = dedup
    app.state.http_client = http_client
    app.state.webhook_pipeline = build_webhook_pipeline(
        razorpay,
        session_factory=session_factory,
        http_client=http_client,
        dedup=dedup,
    )

    logger.info(
        "🟢 WalletSync iniciado (env=%s, dialect=%s)", settings.python_env, engine.dialect.name
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        with anyio.CancelScope(shield=True):
            await http_client.aclose()
            logger.info("🌐 Cliente HTTP de reenvío cerrado")
            dedup.clear()
            await dispose_engine()
            logger.info("🗄️ Engine de base de datos liberado")
        logger.info("🔴 WalletSync apagado.")


openapi_tags = [
    {"name": "payments:webhooks", "description": "Webhooks de Razorpay"},
    {"name": "payments:checkout", "description": "Verificación de Razorpay Checkout"},
    {"name": "payments-metrics", "description": "Métricas Prometheus"},
]


# ═══════════════════════════════════════════════════════════════════════════════
# CORS
# ═══════════════════════════════════════════════════════════════════════════════
def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware.

    Returns:
        dict con la configuración aplicada para logging.
    """
    settings = get_settings()
    origins_list = settings.get_cors_origins()

    if settings.is_prod and origins_list == ["*"]:
        logger.error("❌ CORS wildcard rechazado en producción; configure CORS_ORIGINS explícito")
        return {"cors_disabled": True, "allow_origins": []}

    # "*" con allow_credentials=True es inválido en navegadores
    allow_credentials = origins_list != ["*"]
    cors_config = {
        "allow_origins": origins_list,
        "allow_credentials": allow_credentials,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    return cors_config


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title=f"{settings.app_name} API",
        description="Liquidación idempotente de webhooks de Razorpay",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    application.add_middleware(RequestLoggingMiddleware)
    cors_config = _configure_cors(application)
    # El último agregado es el más externo: captura todo lo demás
    application.add_middleware(JSONExceptionMiddleware)
    logger.info("🔐 CORS configurado: %s", cors_config)

    application.include_router(api_router)
    return application


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    enable_reload = settings.is_dev and os.getenv("DISABLE_RELOAD", "").lower() not in ("true", "1", "yes")

    logger.info("🔧 Starting server with reload=%s (env=%s)", enable_reload, settings.python_env)

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=enable_reload,
    )

# Fin del archivo backend/app/main.py
