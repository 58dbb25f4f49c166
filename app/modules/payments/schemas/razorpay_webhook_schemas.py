# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/razorpay_webhook_schemas.py

Esquemas Pydantic (modo estricto) para webhooks de Razorpay.

Estructura mínima aceptada:

    {
      "event": "payment.captured",
      "payload": {
        "payment": {
          "entity": {
            "id": "pay_...", "order_id": "order_...", "amount": 50000,
            "status": "captured", "currency": "INR", "method": "upi",
            "notes": {"customerId": "cust_1"}
          }
        }
      }
    }

- Los campos extra que envía Razorpay se toleran (extra="allow").
- Para eventos payment.* reconocidos, payload.payment.entity es obligatorio.
- amount debe ser entero >= 0 (sin floats ni booleanos).

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator

from app.modules.payments.enums import RazorpayEvent


class RazorpayPaymentEntity(BaseModel):
    """Entidad payment tal como la envía Razorpay."""

    model_config = ConfigDict(extra="allow")

    id: StrictStr = Field(min_length=1, description="ID del pago (pay_...).")
    order_id: Optional[StrictStr] = Field(default=None, description="ID de la orden (order_...).")
    amount: StrictInt = Field(ge=0, description="Monto en unidades menores (paise).")
    status: StrictStr = Field(min_length=1, description="Estado del pago en Razorpay.")
    currency: StrictStr = Field(default="INR")
    method: Optional[StrictStr] = Field(default=None)
    notes: Dict[str, Any] = Field(default_factory=dict, description="Notas libres del comercio.")

    @field_validator("notes", mode="before")
    @classmethod
    def _empty_notes_list(cls, v: Any) -> Any:
        # Razorpay serializa notas vacías como []
        if v is None or v == []:
            return {}
        return v

    @property
    def customer_id(self) -> Optional[str]:
        """customerId de las notas (acepta también customer_id)."""
        for key in ("customerId", "customer_id"):
            value = self.notes.get(key)
            if isinstance(value, (str, int)) and not isinstance(value, bool):
                value = str(value).strip()
                if value:
                    return value
        return None


class RazorpayPaymentWrapper(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity: RazorpayPaymentEntity


class RazorpayWebhookPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    payment: Optional[RazorpayPaymentWrapper] = None


class RazorpayWebhookEvent(BaseModel):
    """Evento de webhook Razorpay validado en la frontera."""

    model_config = ConfigDict(extra="allow")

    event: StrictStr = Field(min_length=1, description="Tipo de evento (payment.captured, ...).")
    payload: RazorpayWebhookPayload
    created_at: Optional[StrictInt] = Field(default=None, description="Epoch del evento.")

    @model_validator(mode="after")
    def _payment_required_for_payment_events(self) -> "RazorpayWebhookEvent":
        if RazorpayEvent.is_known(self.event) and self.payload.payment is None:
            raise ValueError(f"payload.payment.entity es requerido para '{self.event}'")
        return self

    @property
    def payment(self) -> Optional[RazorpayPaymentEntity]:
        if self.payload.payment is None:
            return None
        return self.payload.payment.entity


class WebhookAck(BaseModel):
    """Respuesta pública del endpoint de webhooks."""

    success: bool
    message: str


__all__ = [
    "RazorpayPaymentEntity",
    "RazorpayPaymentWrapper",
    "RazorpayWebhookPayload",
    "RazorpayWebhookEvent",
    "WebhookAck",
]

# Fin del archivo backend/app/modules/payments/schemas/razorpay_webhook_schemas.py
