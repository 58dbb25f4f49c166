# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async para WalletSync: asyncpg en PostgreSQL, aiosqlite en local/tests.

Provee:
- build_engine(url) / build_session_factory(engine)
- get_engine() / get_session_factory() (instancias perezosas desde settings)
- check_database_health(), create_all_tables(), dispose_engine()

Notas:
- En PostgreSQL se aplican timeouts de conexión y de comando (asyncpg).
- En SQLite cada transacción abre con BEGIN IMMEDIATE: los escritores se
  serializan en lugar de fallar por "database is locked" al promover locks.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import get_settings
from app.shared.database.base import Base

logger = logging.getLogger(__name__)


# ── Engine
def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    """Control transaccional explícito para pysqlite/aiosqlite."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # pragma: no cover - hook del driver
        # Desactiva el BEGIN implícito del driver; lo emite el hook "begin"
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):  # pragma: no cover - hook del driver
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Crea el AsyncEngine según el dialecto de la URL.

    Args:
        url: URL SQLAlchemy (postgresql+asyncpg://... o sqlite+aiosqlite://...)
        echo: Log de SQL emitido
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo, poolclass=NullPool)
        _install_sqlite_hooks(engine)
        return engine

    settings = get_settings()
    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        connect_args={
            "timeout": settings.db_command_timeout_s,          # timeout de conexión
            "command_timeout": settings.db_command_timeout_s,  # timeout por consulta
        },
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """Engine global, creado en el primer uso a partir de settings."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database_url, echo=settings.db_echo_sql)
        logger.info("[DB] Engine creado (dialect=%s)", _engine.dialect.name)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


# ── Esquema
async def create_all_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Crea las tablas declaradas (solo dev/tests; en prod el esquema es externo)."""
    # Registra los modelos en Base.metadata
    import app.modules.payments.models  # noqa: F401

    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


# ── Health check
async def check_database_health(
    engine: Optional[AsyncEngine] = None,
    timeout_s: float = 3.0,
    sql: str = "SELECT 1",
) -> bool:
    """
    Verifica conectividad a la base de datos.

    Args:
        engine: Engine a verificar (default: engine global)
        timeout_s: Tiempo máximo de espera en segundos
        sql: Query SQL a ejecutar (default: "SELECT 1")

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with (engine or get_engine()).connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


__all__ = [
    "build_engine",
    "build_session_factory",
    "get_engine",
    "get_session_factory",
    "create_all_tables",
    "dispose_engine",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
