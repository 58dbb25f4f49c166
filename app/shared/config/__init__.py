# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import get_settings, get_razorpay_settings
"""

from .config_loader import get_settings
from .logging_config import setup_logging
from .settings_base import BaseAppSettings
from .settings_payments import RazorpaySettings, get_razorpay_settings, reset_razorpay_settings

__all__ = [
    "BaseAppSettings",
    "RazorpaySettings",
    "get_settings",
    "get_razorpay_settings",
    "reset_razorpay_settings",
    "setup_logging",
]
