# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Repositorios async del módulo Payments.

Autor: WalletSync
Fecha: 19/10/2026
"""

from .customer_repository import CustomerRepository
from .wallet_repository import WalletRepository
from .payment_transaction_repository import PaymentTransactionRepository

__all__ = [
    "CustomerRepository",
    "WalletRepository",
    "PaymentTransactionRepository",
]

# Fin del archivo backend/app/modules/payments/repositories/__init__.py
