# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /payments/webhooks/razorpay
- /payments/checkout/verify
- /payments/metrics
- /payments/metrics/ping

Autor: WalletSync
Fecha: 19/10/2026
"""

from fastapi import APIRouter

from app.modules.payments.metrics.routes import router as metrics_router

from .checkout_razorpay import router as checkout_router
from .webhooks_razorpay import router as webhooks_razorpay_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(webhooks_razorpay_router, prefix="/payments")
router.include_router(checkout_router, prefix="/payments")
router.include_router(metrics_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
