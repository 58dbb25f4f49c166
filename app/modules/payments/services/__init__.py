# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/__init__.py

Superficie de exportación de servicios del módulo Payments.

Incluye:
- ProcessedEventCache (deduplicación en memoria)
- SettlementLedger (abono idempotente)
- DownstreamForwarder (reenvío firmado)

Autor: WalletSync
Fecha: 19/10/2026
"""

from .event_dedup_service import ProcessedEventCache, ProcessedEventRecord
from .settlement_service import SettlementLedger, SettlementResult
from .forwarding_service import DownstreamForwarder, build_forward_http_client

__all__ = [
    "ProcessedEventCache",
    "ProcessedEventRecord",
    "SettlementLedger",
    "SettlementResult",
    "DownstreamForwarder",
    "build_forward_http_client",
]

# Fin del archivo backend/app/modules/payments/services/__init__.py
