# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Métricas Prometheus del módulo de pagos.

Autor: WalletSync
Fecha: 19/10/2026
"""

from .exporters.prometheus_exporter import (
    observe_credit_applied,
    observe_forward,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_rejected,
    observe_webhook_verified,
    render_prometheus_metrics,
)

__all__ = [
    "observe_credit_applied",
    "observe_forward",
    "observe_webhook_outcome",
    "observe_webhook_received",
    "observe_webhook_rejected",
    "observe_webhook_verified",
    "render_prometheus_metrics",
]
