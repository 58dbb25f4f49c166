# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/normalize.py

Normalización de payloads de webhooks de Razorpay.

- normalize_razorpay_event: bytes crudos -> RazorpayWebhookEvent (esquema
  estricto). Cualquier problema estructural es WebhookValidationError.
- build_normalized_payment: evento validado -> NormalizedPayment, con la
  conversión paise -> rupias aplicada aquí y solo aquí.

Autor: WalletSync
Fecha: 19/10/2026
"""
from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from app.modules.payments.schemas import NormalizedPayment, RazorpayWebhookEvent
from .errors import WebhookValidationError

logger = logging.getLogger(__name__)


def to_ledger_units(amount_minor_units: int, divisor: int = 100) -> int:
    """Convierte unidades menores a unidades del ledger (división entera)."""
    if divisor <= 0:
        raise ValueError("divisor debe ser > 0")
    return amount_minor_units // divisor


def normalize_razorpay_event(raw_body: bytes) -> RazorpayWebhookEvent:
    """
    Parsea y valida el body crudo de un webhook de Razorpay.

    Raises:
        WebhookValidationError: JSON inválido, no-objeto o fuera de esquema
    """
    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise WebhookValidationError(f"Invalid JSON payload: {e}") from e

    if not isinstance(data, dict):
        raise WebhookValidationError("Payload must be a JSON object")

    try:
        return RazorpayWebhookEvent.model_validate(data)
    except ValidationError as e:
        # Solo ubicaciones y tipos: el payload puede traer datos del cliente
        problems = ", ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['type']}"
            for err in e.errors()
        )
        logger.warning("Razorpay webhook fuera de esquema: %s", problems)
        raise WebhookValidationError(f"Invalid webhook payload: {problems}") from e


def build_normalized_payment(event: RazorpayWebhookEvent, divisor: int = 100) -> NormalizedPayment:
    """
    Extrae los datos de pago del evento validado.

    Raises:
        WebhookValidationError: si el evento no trae entidad payment
    """
    entity = event.payment
    if entity is None:
        raise WebhookValidationError(f"Event '{event.event}' has no payment entity")

    return NormalizedPayment(
        event_type=event.event,
        payment_id=entity.id,
        order_id=entity.order_id,
        customer_id=entity.customer_id,
        amount=to_ledger_units(entity.amount, divisor),
        amount_minor_units=entity.amount,
        status=entity.status,
        currency=entity.currency,
        method=entity.method,
    )


__all__ = [
    "to_ledger_units",
    "normalize_razorpay_event",
    "build_normalized_payment",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/normalize.py
