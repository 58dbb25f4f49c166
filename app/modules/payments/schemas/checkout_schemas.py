# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/checkout_schemas.py

Esquemas Pydantic para la verificación de firma de Razorpay Checkout
(el frontend reenvía order_id, payment_id y signature tras el pago).

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CheckoutVerifyRequest(BaseModel):
    razorpay_order_id: str = Field(min_length=1, description="ID de la orden (order_...).")
    razorpay_payment_id: str = Field(min_length=1, description="ID del pago (pay_...).")
    razorpay_signature: str = Field(min_length=1, description="HMAC hex devuelto por Checkout.")


class CheckoutVerifyResponse(BaseModel):
    success: bool
    message: str
    payment_id: str | None = None


__all__ = ["CheckoutVerifyRequest", "CheckoutVerifyResponse"]

# Fin del archivo backend/app/modules/payments/schemas/checkout_schemas.py
