# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/razorpay_event_enum.py

Tipos de evento de webhook de Razorpay que el servicio reconoce.
Cualquier otro valor se acepta estructuralmente y se ignora.

Autor: WalletSync
Fecha: 19/10/2026
"""

from enum import StrEnum


class RazorpayEvent(StrEnum):
    """Eventos de pago emitidos por Razorpay."""

    PAYMENT_AUTHORIZED = "payment.authorized"
    PAYMENT_CAPTURED = "payment.captured"
    PAYMENT_FAILED = "payment.failed"

    @classmethod
    def is_known(cls, value: str) -> bool:
        return value in cls._value2member_map_


__all__ = ["RazorpayEvent"]

# Fin del archivo backend/app/modules/payments/enums/razorpay_event_enum.py
