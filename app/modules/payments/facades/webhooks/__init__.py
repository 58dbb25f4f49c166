# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/__init__.py

Exporta las piezas clave del pipeline de webhooks de Razorpay.

Autor: WalletSync
Fecha: 19/10/2026
"""

from .errors import (
    ERROR_POLICY,
    ErrorKind,
    ErrorPolicy,
    WebhookConfigurationError,
    WebhookError,
    WebhookSignatureError,
    WebhookValidationError,
    policy_for,
)
from .normalize import (
    build_normalized_payment,
    normalize_razorpay_event,
    to_ledger_units,
)
from .handler import (
    WebhookPipeline,
    WebhookResult,
    build_webhook_pipeline,
)

__all__ = [
    "ERROR_POLICY",
    "ErrorKind",
    "ErrorPolicy",
    "WebhookError",
    "WebhookSignatureError",
    "WebhookValidationError",
    "WebhookConfigurationError",
    "policy_for",
    "normalize_razorpay_event",
    "build_normalized_payment",
    "to_ledger_units",
    "WebhookPipeline",
    "WebhookResult",
    "build_webhook_pipeline",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/__init__.py
