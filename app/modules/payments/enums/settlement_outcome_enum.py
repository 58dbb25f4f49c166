# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/settlement_outcome_enum.py

Resultados posibles de aplicar un pago en el ledger.

Autor: WalletSync
Fecha: 19/10/2026
"""

from enum import StrEnum


class SettlementOutcome(StrEnum):
    """Resultado de SettlementLedger.apply_payment."""

    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    CUSTOMER_NOT_FOUND = "customer_not_found"
    FAILED = "failed"


__all__ = ["SettlementOutcome"]

# Fin del archivo backend/app/modules/payments/enums/settlement_outcome_enum.py
