# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para WalletSync.

- Fuerza PYTHON_ENV=test ANTES de importar la app (settings cacheados).
- Base de datos SQLite en archivo temporal por test (aiosqlite, NullPool,
  BEGIN IMMEDIATE): permite probar concurrencia real entre transacciones.
- Fixtures del pipeline con dependencias inyectadas (sin lifespan).
"""

import os

import pytest

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "plain")

from httpx import ASGITransport, AsyncClient

from app.modules.payments.models import Customer
from app.modules.payments.services import ProcessedEventCache, SettlementLedger
from app.shared.database import build_engine, build_session_factory, create_all_tables
from tests.factories import CUSTOMER_ID

# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine(tmp_path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'walletsync.db'}")
    await create_all_tables(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def customer(session_factory):
    """Cliente con saldo 0 y SIN wallet (se crea en el primer abono)."""
    async with session_factory() as session:
        async with session.begin():
            session.add(Customer(id=CUSTOMER_ID, full_name="Test Customer", wallet_balance=0))
    return CUSTOMER_ID


@pytest.fixture
def ledger(session_factory):
    return SettlementLedger(session_factory, timeout_seconds=5.0)


@pytest.fixture
def dedup():
    return ProcessedEventCache(100, name="test-events")


# -----------------------------------------------------------------------------
# App + cliente httpx (sin lifespan: el estado se inyecta en app.state)
# -----------------------------------------------------------------------------
@pytest.fixture
def app():
    from app.main import create_app

    return create_app()


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
