# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

Se exportan:
- Customer
- Wallet
- PaymentTransaction

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from .customer_models import Customer
from .wallet_models import Wallet
from .payment_transaction_models import PaymentTransaction, PAYMENT_ID_UNIQUE_CONSTRAINT

__all__ = [
    "Customer",
    "Wallet",
    "PaymentTransaction",
    "PAYMENT_ID_UNIQUE_CONSTRAINT",
]

# Fin del archivo backend/app/modules/payments/models/__init__.py
