# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos (SQLAlchemy async).

El engine y la fábrica de sesiones los crea el lifespan de la app y viven en
app.state; aquí solo se exponen las primitivas para construirlos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from app.shared.database import (
    Base,
    build_engine,
    build_session_factory,
    check_database_health,
    create_all_tables,
    dispose_engine,
)

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "check_database_health",
    "create_all_tables",
    "dispose_engine",
]

# Fin del archivo backend/app/core/db.py
