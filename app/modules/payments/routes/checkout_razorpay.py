# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/checkout_razorpay.py

Verificación del resultado de Razorpay Checkout.

Endpoint:
- POST /payments/checkout/verify

El frontend reenvía lo que Checkout le devolvió (order_id, payment_id y
firma). Esta ruta SOLO confirma autenticidad; el abono lo aplica
exclusivamente el webhook payment.captured.

Autor: WalletSync
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.modules.payments.schemas import CheckoutVerifyRequest, CheckoutVerifyResponse
from app.modules.payments.services.webhooks.signature_verification import (
    verify_checkout_signature,
)
from app.shared.config.settings_payments import RazorpaySettings, get_razorpay_settings

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    body = CheckoutVerifyResponse(success=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


router = APIRouter(
    prefix="/checkout",
    tags=["payments:checkout"],
)


@router.post(
    "/verify",
    response_model=CheckoutVerifyResponse,
    status_code=status.HTTP_200_OK,
)
async def verify_checkout(
    body: CheckoutVerifyRequest,
    settings: RazorpaySettings = Depends(get_razorpay_settings),
) -> CheckoutVerifyResponse | JSONResponse:
    key_secret = (
        settings.razorpay_key_secret.get_secret_value()
        if settings.razorpay_key_secret is not None
        else None
    )
    if not key_secret:
        logger.error("Checkout verify: RAZORPAY_KEY_SECRET no configurado")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Payment verification not configured")

    if not verify_checkout_signature(
        body.razorpay_order_id,
        body.razorpay_payment_id,
        body.razorpay_signature,
        key_secret,
    ):
        logger.warning(
            "Checkout verify: firma inválida (order=%s payment=%s)",
            body.razorpay_order_id, body.razorpay_payment_id,
        )
        return _failure(status.HTTP_400_BAD_REQUEST, "Payment verification failed")

    logger.info(
        "Checkout verify OK: order=%s payment=%s",
        body.razorpay_order_id, body.razorpay_payment_id,
    )
    return CheckoutVerifyResponse(
        success=True,
        message="Payment signature verified",
        payment_id=body.razorpay_payment_id,
    )


# Fin del archivo backend/app/modules/payments/routes/checkout_razorpay.py
