# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from .base import Base, NAMING_CONVENTION, utcnow
from .database import (
    build_engine,
    build_session_factory,
    get_engine,
    get_session_factory,
    create_all_tables,
    dispose_engine,
    check_database_health,
)
from .repository import BaseRepository

__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "utcnow",
    "BaseRepository",
    "build_engine",
    "build_session_factory",
    "get_engine",
    "get_session_factory",
    "create_all_tables",
    "dispose_engine",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
