# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- RazorpayEvent
- SettlementOutcome
- WebhookState

Autor: WalletSync
Fecha: 19/10/2026
"""

from .razorpay_event_enum import RazorpayEvent
from .settlement_outcome_enum import SettlementOutcome
from .webhook_state_enum import WebhookState

__all__ = [
    "RazorpayEvent",
    "SettlementOutcome",
    "WebhookState",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
