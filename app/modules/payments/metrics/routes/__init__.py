# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/routes/__init__.py

Routers de métricas del módulo de pagos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from fastapi import APIRouter

from .routes_prometheus import router_prometheus

router = APIRouter()
router.include_router(router_prometheus, prefix="")

__all__ = [
    "router_prometheus",
    "router",
]

# Fin del archivo backend/app/modules/payments/metrics/routes/__init__.py
