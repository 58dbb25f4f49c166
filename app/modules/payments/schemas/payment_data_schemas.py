# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/payment_data_schemas.py

Formas normalizadas de un pago de Razorpay dentro del servicio:

- NormalizedPayment: lo que consume el pipeline tras la ingesta. El monto ya
  está convertido a unidades del ledger (una sola vez, división entera).
- ForwardedPayment: cuerpo canónico que se reenvía al backend interno
  (claves camelCase).

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NormalizedPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: str
    payment_id: str
    order_id: Optional[str] = None
    customer_id: Optional[str] = None
    amount: int = Field(ge=0, description="Monto en unidades del ledger (rupias).")
    amount_minor_units: int = Field(ge=0, description="Monto original en paise.")
    status: str
    currency: str = "INR"
    method: Optional[str] = None


class ForwardedPayment(BaseModel):
    """Cuerpo del POST firmado hacia el backend interno."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment_id: str
    order_id: Optional[str] = None
    customer_id: str
    amount: int
    status: str = "successful"
    event_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_normalized(cls, payment: NormalizedPayment) -> "ForwardedPayment":
        return cls(
            payment_id=payment.payment_id,
            order_id=payment.order_id,
            customer_id=payment.customer_id or "",
            amount=payment.amount,
            event_type=payment.event_type,
            metadata={
                "currency": payment.currency,
                "method": payment.method,
                "razorpayStatus": payment.status,
                "amountMinorUnits": payment.amount_minor_units,
            },
        )


__all__ = ["NormalizedPayment", "ForwardedPayment"]

# Fin del archivo backend/app/modules/payments/schemas/payment_data_schemas.py
