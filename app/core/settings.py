# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración de WalletSync.
Reexpone la carga de settings (Pydantic v2) definida en `app.shared.config`.

Autor: WalletSync
Fecha: 19/10/2026
"""

from typing import cast

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV/NODE_ENV).
    """
    return cast(BaseAppSettings, _get_settings())

# Fin del archivo backend/app/core/settings.py
