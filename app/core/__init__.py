# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales de WalletSync:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Envuelve la implementación en `app.shared.*` para ofrecer puntos de entrada
estables al resto de los módulos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from .settings import get_settings
from .logging import setup_logging
from .db import (
    Base,
    build_engine,
    build_session_factory,
    check_database_health,
    create_all_tables,
    dispose_engine,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Base",
    "build_engine",
    "build_session_factory",
    "check_database_health",
    "create_all_tables",
    "dispose_engine",
]

# Fin del archivo backend/app/core/__init__.py
