# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/__init__.py

Punto de entrada para los esquemas Pydantic del módulo Payments.

Incluye:
- Webhook Razorpay (entrada estricta + respuesta)
- Pago normalizado y cuerpo de reenvío
- Verificación de Checkout

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from .razorpay_webhook_schemas import (
    RazorpayPaymentEntity,
    RazorpayWebhookEvent,
    WebhookAck,
)
from .payment_data_schemas import NormalizedPayment, ForwardedPayment
from .checkout_schemas import CheckoutVerifyRequest, CheckoutVerifyResponse

__all__ = [
    "RazorpayPaymentEntity",
    "RazorpayWebhookEvent",
    "WebhookAck",
    "NormalizedPayment",
    "ForwardedPayment",
    "CheckoutVerifyRequest",
    "CheckoutVerifyResponse",
]

# Fin del archivo backend/app/modules/payments/schemas/__init__.py
