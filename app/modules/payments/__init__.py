# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos de WalletSync.

Este módulo gestiona:
- Verificación de webhooks de Razorpay (HMAC-SHA256 sobre el body crudo)
- Deduplicación de eventos ya procesados
- Liquidación idempotente sobre customers / wallets / payment_transactions
- Reenvío firmado del pago liquidado al backend interno

Estructura:
- enums: RazorpayEvent, SettlementOutcome, WebhookState
- models: Modelos ORM (Customer, Wallet, PaymentTransaction)
- schemas: Validación y serialización Pydantic
- repositories: Acceso a datos async
- services: Lógica de bajo nivel (firma, caché, ledger, reenvío)
- facades: Pipeline de webhooks (API de alto nivel)
- routes: Endpoints FastAPI bajo /payments

Autor: WalletSync
Fecha: 19/10/2026
"""

# ===== ENUMS =====
from .enums import (
    RazorpayEvent,
    SettlementOutcome,
    WebhookState,
)

# ===== MODELS (opcional, para uso interno) =====
from .models import (
    Customer,
    Wallet,
    PaymentTransaction,
)

# ===== SCHEMAS =====
from .schemas import (
    RazorpayWebhookEvent,
    WebhookAck,
    NormalizedPayment,
    ForwardedPayment,
    CheckoutVerifyRequest,
    CheckoutVerifyResponse,
)

__all__ = [
    # Enums
    "RazorpayEvent",
    "SettlementOutcome",
    "WebhookState",
    # Models
    "Customer",
    "Wallet",
    "PaymentTransaction",
    # Schemas
    "RazorpayWebhookEvent",
    "WebhookAck",
    "NormalizedPayment",
    "ForwardedPayment",
    "CheckoutVerifyRequest",
    "CheckoutVerifyResponse",
]

# Fin del archivo backend/app/modules/payments/__init__.py
